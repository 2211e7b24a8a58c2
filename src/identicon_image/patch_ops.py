"""Draw one patch into its cell on a canvas.

A patch is drawn in three layers, each clipped to its own square cell:

1. the cell in the background color (the fill color if inverted)
2. an optional outline in the stroke color
3. the shape in the fill color (the background color if inverted)

The shape sits on top of the outline, so only the part of the outline that falls
outside the shape shows. Where the outline runs along the edge of the cell there is
no outside, so the outline is painted again on the one-pixel rim of the cell after
the shape. A full-cell square still gets a visible outline.

Masks are drawn with ImageDraw at twice the patch size, so every pixel center of
the cell falls on a whole coordinate, then sampled back down at those centers.
Turns are lossless transposes of the unturned mask, so a turned patch is an exact
rotation of the unturned one.

:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
import functools as ft
from typing import TYPE_CHECKING

from PIL import Image, ImageChops, ImageDraw

from identicon_image.globs import STROKE_HALF_WIDTH
from identicon_image.patches import PatchShape

if TYPE_CHECKING:
    from PIL.Image import Image as ImageType

    from identicon_image.type_hints import RGB

_OPAQUE = 0xFF

# pixel centers are whole numbers at this scale
_SAMPLE_SCALE = 2

_STROKE_WIDTH = 2 * STROKE_HALF_WIDTH * _SAMPLE_SCALE + 1

# clockwise on screen
_TRANSPOSE_BY_TURN = {
    1: Image.Transpose.ROTATE_270,
    2: Image.Transpose.ROTATE_180,
    3: Image.Transpose.ROTATE_90,
}


def _new_mask(patch_size: int) -> tuple[ImageType, ImageDraw.ImageDraw]:
    """Return an empty "L" mask at sample scale and a Draw for it."""
    side = patch_size * _SAMPLE_SCALE
    mask = Image.new("L", (side, side), 0)
    return mask, ImageDraw.Draw(mask)


def _finish_mask(
    mask: ImageType, shape: PatchShape, patch_size: int, turn: int
) -> ImageType:
    """Sample a mask at the pixel centers, then turn it.

    :param mask: a mask drawn at _SAMPLE_SCALE
    :param shape: the shape drawn on mask
    :param patch_size: width of the finished mask
    :param turn: clockwise quarter turns, 0 to 3
    :return: an "L" mask patch_size pixels square

    Symmetric shapes are merged with their own turns, so they stay symmetric
    wherever the rasterizer breaks a tie on a diagonal edge.
    """
    mask = mask.resize((patch_size, patch_size), Image.Resampling.NEAREST)
    if shape.symmetric:
        turned = (mask.transpose(t) for t in _TRANSPOSE_BY_TURN.values())
        mask = ft.reduce(ImageChops.lighter, turned, mask)
    if turn:
        mask = mask.transpose(_TRANSPOSE_BY_TURN[turn])
    return mask


@ft.lru_cache(maxsize=None)
def _get_fill_mask(shape: PatchShape, patch_size: int, turn: int) -> bytes:
    """Return an "L" mode mask of the pixels inside the turned shape.

    Pillow fills polygons by the even-odd rule, so the self-intersecting shapes
    (3 and 6) get holes where they overlap.
    """
    mask, draw = _new_mask(patch_size)
    draw.polygon(shape.get_points(patch_size // 2, _SAMPLE_SCALE), fill=_OPAQUE)
    return _finish_mask(mask, shape, patch_size, turn).tobytes()


@ft.lru_cache(maxsize=None)
def _get_stroke_masks(
    shape: PatchShape, patch_size: int, turn: int
) -> tuple[bytes, bytes]:
    """Return "L" mode masks of the turned outline and of its part on the cell rim."""
    mask, draw = _new_mask(patch_size)
    points = shape.get_points(patch_size // 2, _SAMPLE_SCALE)
    # repeat the second point so the first vertex gets a joint
    draw.line([*points, points[1]], fill=_OPAQUE, width=_STROKE_WIDTH, joint="curve")
    stroke = _finish_mask(mask, shape, patch_size, turn)

    rim = Image.new("L", stroke.size, 0)
    ImageDraw.Draw(rim).rectangle(
        (0, 0, patch_size - 1, patch_size - 1), outline=_OPAQUE
    )
    return stroke.tobytes(), ImageChops.darker(stroke, rim).tobytes()


@dataclasses.dataclass(frozen=True)
class PatchCompositor:
    """Draw patches from a shape library onto square cells.

    :param shapes: the patch library, scaled to patch_size
    :param patch_size: width of one cell in pixels
    :param background: the background color
    """

    shapes: tuple[PatchShape, ...]
    patch_size: int
    background: RGB

    def draw(
        self,
        canvas: ImageType,
        x: int,
        y: int,
        patch: int,
        turn: int,
        invert: bool,
        fill_color: RGB,
        stroke_color: RGB | None = None,
    ) -> None:
        """Draw one patch with its top-left corner at (x, y).

        :param canvas: an "RGB" image, altered in place
        :param x: left edge of the cell
        :param y: top edge of the cell
        :param patch: index into the shape library, taken modulo its length
        :param turn: clockwise quarter turns, taken modulo 4
        :param invert: swap fill and background. Xor'd with the shape's own
            inverted flag.
        :param fill_color: the foreground color
        :param stroke_color: outline color, or None for no outline
        :effect: paints the cell on canvas
        """
        shape = self.shapes[patch % len(self.shapes)]
        turn %= 4
        invert = invert != shape.inverted

        size = (self.patch_size, self.patch_size)
        box = (x, y, x + self.patch_size, y + self.patch_size)

        canvas.paste(fill_color if invert else self.background, box)
        if stroke_color is not None:
            stroke_mask, rim_mask = _get_stroke_masks(shape, self.patch_size, turn)
            canvas.paste(stroke_color, box, Image.frombytes("L", size, stroke_mask))
        fill_mask = _get_fill_mask(shape, self.patch_size, turn)
        canvas.paste(
            self.background if invert else fill_color,
            box,
            Image.frombytes("L", size, fill_mask),
        )
        if stroke_color is not None:
            canvas.paste(stroke_color, box, Image.frombytes("L", size, rim_mask))
