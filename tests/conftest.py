"""Pytest configuration and fixtures."""

import pytest
from PIL import Image

from zplimage.codec import PixelMatrix


@pytest.fixture
def checkerboard():
    """10x3 checkerboard raster (width not a multiple of 8)."""
    return PixelMatrix([[(x + y) % 2 == 0 for x in range(10)] for y in range(3)])


@pytest.fixture
def white_image():
    """8x1 all-white mode "1" image."""
    return Image.new("1", (8, 1), color=1)
