"""Unpack a 32-bit identicon code into rendering parameters.

Bit 0 is the least significant.

    bits 0-1    center patch (index into CENTER_PATCHES)
    bit  2      center invert
    bits 3-6    corner patch
    bit  7      corner invert
    bits 8-9    corner turns
    bits 10-13  side patch
    bit  14     side invert
    bits 15-16  side turns
    bits 16-20  blue
    bits 21-25  green (bit 26 is never read)
    bits 27-31  red

The side turns and blue fields share bit 16, and green leaves bit 26 unused. Both
quirks are part of the format. Changing either would change the image for existing
codes.

:created: 2026-10-19
"""

import dataclasses

from identicon_image.patches import CENTER_PATCHES
from identicon_image.type_hints import RGB

CODE_MASK = 0xFFFFFFFF


@dataclasses.dataclass(frozen=True)
class DecodedParameters:
    """Everything a code says about the image.

    :param middle_patch: patch library index for the center, one of CENTER_PATCHES
    :param middle_invert: swap fill and background in the center
    :param corner_patch: patch library index for the four corners
    :param corner_invert: swap fill and background in the corners
    :param corner_turn: quarter turns of the top-left corner. Each corner clockwise
        from there turns one more.
    :param side_patch: patch library index for the four sides
    :param side_invert: swap fill and background in the sides
    :param side_turn: quarter turns of the top side, incremented clockwise
    :param fill_color: the one foreground color
    """

    middle_patch: int
    middle_invert: bool
    corner_patch: int
    corner_invert: bool
    corner_turn: int
    side_patch: int
    side_invert: bool
    side_turn: int
    fill_color: RGB


def _get_color_field(code: int, shift: int) -> int:
    """Read a 5-bit field and spread it over the top of an 8-bit channel."""
    return ((code >> shift) & 0x1F) << 3


def decode_code(code: int) -> DecodedParameters:
    """Decode the low 32 bits of code.

    :param code: any int. Negative and wider values are reduced to their low 32
        bits, so hash-derived codes can be passed in directly.
    :return: a DecodedParameters instance. Every code decodes.
    """
    code &= CODE_MASK
    return DecodedParameters(
        middle_patch=CENTER_PATCHES[code & 0x3],
        middle_invert=bool((code >> 2) & 0x1),
        corner_patch=(code >> 3) & 0x0F,
        corner_invert=bool((code >> 7) & 0x1),
        corner_turn=(code >> 8) & 0x3,
        side_patch=(code >> 10) & 0x0F,
        side_invert=bool((code >> 14) & 0x1),
        side_turn=(code >> 15) & 0x3,
        fill_color=(
            _get_color_field(code, 27),
            _get_color_field(code, 21),
            _get_color_field(code, 16),
        ),
    )
