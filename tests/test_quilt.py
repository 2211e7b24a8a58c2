"""Test whole identicons. Some tests are perceptual and write pngs to TEST_OUTPUT.

:created: 2026-10-19
"""

import random
from concurrent.futures import ThreadPoolExecutor

import pytest
from conftest import TEST_OUTPUT
from PIL import Image, ImageChops
from PIL.Image import Image as ImageType

from identicon_image.quilt import QuiltRenderer, RenderConfig, render_identicon

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

_SIDE_BOXES = [(20, 0, 40, 20), (40, 20, 60, 40), (20, 40, 40, 60), (0, 20, 20, 40)]
_CORNER_BOXES = [(0, 0, 20, 20), (40, 0, 60, 20), (40, 40, 60, 60), (0, 40, 20, 60)]

# red channel maxed, green zeroed. Never close enough to white for an outline.
_RED_FILL = 0x1F << 27
_GREEN_MASK = 0x1F << 21


def _random_codes(count: int, seed: int = 0) -> list[int]:
    rng = random.Random(seed)
    return [rng.getrandbits(32) for _ in range(count)]


def _count(image: ImageType, color: tuple[int, int, int]) -> int:
    """Count the pixels of one exact color."""
    return sum(n for n, c in image.getcolors(image.width * image.height) if c == color)


class TestRender:
    def test_zero_code(self, renderer: QuiltRenderer):
        """Code 0 is nine black squares, so the whole image is black."""
        image = renderer.render(0, 60)
        assert image.mode == "RGB"
        assert image.getcolors() == [(3600, BLACK)]

    def test_zero_code_small(self, renderer: QuiltRenderer):
        assert renderer.render(0, 16).getcolors() == [(256, BLACK)]

    def test_middle_invert(self, renderer: QuiltRenderer):
        """Flipping bit 2 changes only the center cell."""
        plain = renderer.render(0, 60)
        inverse = renderer.render(1 << 2, 60)
        assert ImageChops.difference(plain, inverse).getbbox() == (20, 20, 40, 40)
        assert inverse.crop((20, 20, 40, 40)).getcolors() == [(400, WHITE)]

    @pytest.mark.parametrize("size", [16, 33, 60, 64, 128])
    def test_size(self, renderer: QuiltRenderer, size: int):
        assert renderer.render(0x12345678, size).size == (size, size)

    @pytest.mark.parametrize("size", [0, -16, 1.5, "16", True, False])
    def test_invalid_size(self, renderer: QuiltRenderer, size: object):
        with pytest.raises(ValueError):
            _ = renderer.render(0, size)  # type: ignore

    def test_deterministic(self, renderer: QuiltRenderer):
        for code in _random_codes(20):
            first = renderer.render(code, 37)
            again = renderer.render(code, 37)
            assert first.tobytes() == again.tobytes()

    def test_wide_code(self, renderer: QuiltRenderer):
        """A wide hash renders as its low 32 bits."""
        wide = renderer.render((0xDEADBEEF << 96) | 0x0BADF00D, 32)
        assert wide.tobytes() == renderer.render(0x0BADF00D, 32).tobytes()

    def test_source_size_is_identity(self, renderer: QuiltRenderer):
        """Rendering at the source size doesn't resample."""
        for code in _random_codes(10, seed=1):
            source = renderer.render_source(code)
            assert renderer.render(code, 60).tobytes() == source.tobytes()

    def test_threads(self, renderer: QuiltRenderer):
        """Renders share the renderer without interfering."""
        codes = _random_codes(16, seed=2) * 4
        with ThreadPoolExecutor(max_workers=8) as pool:
            images = list(pool.map(lambda c: renderer.render(c, 48).tobytes(), codes))
        for code, image in zip(codes, images, strict=True):
            assert image == renderer.render(code, 48).tobytes()


class TestSymmetry:
    def test_four_fold(self, renderer: QuiltRenderer):
        """The center patches are symmetric, so every identicon survives a turn."""
        for code in _random_codes(50, seed=3):
            source = renderer.render_source(code)
            turned = source.transpose(Image.Transpose.ROTATE_270)
            assert turned.tobytes() == source.tobytes()

    @pytest.mark.parametrize("boxes", [_SIDE_BOXES, _CORNER_BOXES])
    def test_pinwheel(self, renderer: QuiltRenderer, boxes: list[tuple[int, ...]]):
        """Each side (corner) is the previous one turned 90 degrees clockwise."""
        for code in _random_codes(30, seed=4):
            code = (code & ~_GREEN_MASK) | _RED_FILL
            source = renderer.render_source(code)
            cells = [source.crop(b) for b in boxes]
            for cell, next_cell in zip(cells, cells[1:] + cells[:1], strict=True):
                turned = cell.transpose(Image.Transpose.ROTATE_270)
                assert turned.tobytes() == next_cell.tobytes()

    def test_base_turn(self, renderer: QuiltRenderer):
        """Adding one side turn moves every side one position clockwise."""
        code = (1 << 10) | _RED_FILL  # side patch 1, turn 0
        source = renderer.render_source(code)
        turned = renderer.render_source(code | 1 << 15)
        next_boxes = _SIDE_BOXES[1:] + _SIDE_BOXES[:1]
        for box, next_box in zip(_SIDE_BOXES, next_boxes, strict=True):
            assert turned.crop(box).tobytes() == source.crop(next_box).tobytes()


class TestOutline:
    def test_light_fill_outlined(self, renderer: QuiltRenderer):
        """A near-white fill outlines each triangle in its complement."""
        code = (1 << 10) | (0x1F << 27) | (0x1F << 21) | (0x1F << 16)
        source = renderer.render_source(code)
        for box in _SIDE_BOXES:
            assert _count(source.crop(box), (7, 7, 7)) > 0

    def test_light_squares_outlined(self, renderer: QuiltRenderer):
        """Nine near-white squares on white each show their outline."""
        source = renderer.render_source(0xFFFF0000)
        for box in [(20, 20, 40, 40), *_SIDE_BOXES, *_CORNER_BOXES]:
            assert _count(source.crop(box), (7, 7, 7)) == 76

    def test_dark_fill_not_outlined(self, renderer: QuiltRenderer):
        code = (1 << 10) | (1 << 3) | _RED_FILL
        source = renderer.render_source(code)
        assert _count(source, (7, 255, 255)) == 0
        assert set(c for _, c in source.getcolors()) == {WHITE, (248, 0, 0)}


class TestConfig:
    def test_patch_size(self, renderer: QuiltRenderer):
        small = renderer.with_config(patch_size=10)
        assert small.source_size == 30
        assert small.render_source(0x0F0F0F0F).size == (30, 30)
        assert renderer.source_size == 60

    def test_background(self, renderer: QuiltRenderer):
        """An inverted center square is all background."""
        red = renderer.with_config(background="#ff0000")
        assert red.config.background_rgb == (255, 0, 0)
        center = red.render_source(1 << 2).crop((20, 20, 40, 40))
        assert center.getcolors() == [(400, (255, 0, 0))]

    def test_resample(self):
        nearest = QuiltRenderer(RenderConfig(resample=Image.Resampling.NEAREST))
        image = nearest.render(0xCAFEBABE, 30)
        colors = {c for _, c in image.getcolors()}
        assert colors <= {c for _, c in nearest.render_source(0xCAFEBABE).getcolors()}

    @pytest.mark.parametrize("patch_size", [0, -1])
    def test_invalid_patch_size(self, patch_size: int):
        with pytest.raises(ValueError):
            _ = RenderConfig(patch_size=patch_size)

    def test_render_identicon(self):
        assert render_identicon(0, 16).getcolors() == [(256, BLACK)]


class TestPerceptual:
    def test_sample_sheet(self, renderer: QuiltRenderer):
        """Write a sheet of 64 identicons at 64 pixels each."""
        sheet = Image.new("RGB", (8 * 72, 8 * 72), (230, 230, 230))
        for i, code in enumerate(_random_codes(64, seed=5)):
            x, y = divmod(i, 8)
            sheet.paste(renderer.render(code, 64), (x * 72 + 4, y * 72 + 4))
        outfile = TEST_OUTPUT / "sample_sheet.png"
        sheet.save(outfile)
        assert outfile.exists()

    def test_sizes(self, renderer: QuiltRenderer):
        """Write one code at 16 through 64 pixels."""
        code = 0x9E3779B9
        for size in (16, 24, 32, 48, 64):
            renderer.render(code, size).save(TEST_OUTPUT / f"sizes_{size}.png")
