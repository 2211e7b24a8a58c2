"""Paths y fixtures compartidos por las pruebas.

:created: 2026-10-19
"""

from pathlib import Path

import pytest

from identicon_image.quilt import QuiltRenderer

TEST_RESOURCES = Path(__file__).parent / "resources"
TEST_OUTPUT = Path(__file__).parent / "output"

TEST_OUTPUT.mkdir(exist_ok=True)


@pytest.fixture(scope="session")
def renderer() -> QuiltRenderer:
    """One default renderer (20 pixel patches, white background)."""
    return QuiltRenderer()
