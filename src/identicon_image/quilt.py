"""Render a 9-block identicon: one center, four sides, four corners.

The nine patches are drawn at `patch_size` pixels each onto a source canvas three
patches wide, then resampled to the requested size. The source size is fixed by the
config, not by the requested size, so the same code is the same pattern at 16 or 64
pixels.

    corner  side    corner
    side    middle  side
    corner  side    corner

Sides and corners are drawn clockwise (sides from the top, corners from the top
left), each turned one quarter further than the last. That gives every identicon
four-fold rotational symmetry.

:created: 2026-10-19
"""

import dataclasses
from typing import Any, Self

from PIL import Image
from PIL.Image import Image as ImageType

from identicon_image.color_ops import get_stroke_color, to_rgb
from identicon_image.decode import decode_code
from identicon_image.globs import DEFAULT_BACKGROUND, DEFAULT_PATCH_SIZE
from identicon_image.patch_ops import PatchCompositor
from identicon_image.patches import get_patch_shapes
from identicon_image.type_hints import RGB, ColorArg

# cell positions in patches, clockwise
_SIDE_CELLS = ((1, 0), (2, 1), (1, 2), (0, 1))
_CORNER_CELLS = ((0, 0), (2, 0), (2, 2), (0, 2))


@dataclasses.dataclass(frozen=True)
class RenderConfig:
    """Construction-time settings for a QuiltRenderer.

    :param patch_size: width of one patch in pixels before resampling
    :param background: the background color as an RGB tuple or hex string
    :param resample: the Pillow filter used to resize the source canvas. Bicubic
        keeps patch edges clean down to 16 pixels where bilinear and nearest get
        blocky.
    """

    patch_size: int = DEFAULT_PATCH_SIZE
    background: ColorArg = DEFAULT_BACKGROUND
    resample: Image.Resampling = Image.Resampling.BICUBIC

    def __post_init__(self) -> None:
        if self.patch_size <= 0:
            msg = f"Patch size must be positive, got {self.patch_size}"
            raise ValueError(msg)
        # fail here on a bad color, not at the first render
        _ = to_rgb(self.background)

    @property
    def background_rgb(self) -> RGB:
        """The background as an RGB tuple, however it was given."""
        return to_rgb(self.background)


class QuiltRenderer:
    """Render identicon codes to Pillow images.

    Shape geometry is built once here and never changed, so one renderer can be
    shared by any number of threads.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()
        self._compositor = PatchCompositor(
            get_patch_shapes(self.config.patch_size),
            self.config.patch_size,
            self.config.background_rgb,
        )

    @property
    def patch_size(self) -> int:
        """Width of one patch on the source canvas."""
        return self.config.patch_size

    @property
    def source_size(self) -> int:
        """Width of the source canvas, three patches."""
        return self.patch_size * 3

    def with_config(self, **changes: Any) -> Self:
        """Return a new renderer with some settings changed.

        :param changes: RenderConfig fields to replace
        :return: a QuiltRenderer with regenerated shape geometry
        """
        return type(self)(dataclasses.replace(self.config, **changes))

    def render_source(self, code: int) -> ImageType:
        """Draw all nine patches at the source size.

        :param code: identicon code. Only the low 32 bits are used.
        :return: an "RGB" image source_size pixels square
        """
        params = decode_code(code)
        fill = params.fill_color
        stroke = get_stroke_color(fill, self.config.background_rgb)
        cell = self.patch_size

        canvas = Image.new("RGB", (self.source_size, self.source_size))

        self._compositor.draw(
            canvas, cell, cell, params.middle_patch, 0, params.middle_invert, fill, stroke
        )
        for k, (i, j) in enumerate(_SIDE_CELLS):
            self._compositor.draw(
                canvas,
                i * cell,
                j * cell,
                params.side_patch,
                params.side_turn + k,
                params.side_invert,
                fill,
                stroke,
            )
        for k, (i, j) in enumerate(_CORNER_CELLS):
            self._compositor.draw(
                canvas,
                i * cell,
                j * cell,
                params.corner_patch,
                params.corner_turn + k,
                params.corner_invert,
                fill,
                stroke,
            )
        return canvas

    def render(self, code: int, size: int) -> ImageType:
        """Render an identicon.

        :param code: identicon code. Only the low 32 bits are used, so wide hash
            values can be passed in as they are.
        :param size: width and height of the returned image in pixels
        :return: an "RGB" image size pixels square
        :raises ValueError: if size is not a positive integer
        """
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            msg = f"Identicon size must be a positive integer, got {size!r}"
            raise ValueError(msg)
        source = self.render_source(code)
        return source.resize((size, size), self.config.resample)


def render_identicon(
    code: int, size: int, config: RenderConfig | None = None
) -> ImageType:
    """Render one identicon with a throwaway renderer."""
    return QuiltRenderer(config).render(code, size)
