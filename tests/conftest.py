"""Shared fixtures for core tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path to import RasterScopeViewer module
sys.path.insert(0, str(Path(__file__).parent.parent))

from RasterScopeViewer.core import ImageSession, RasterBuffer, RawFormat  # noqa: E402


def make_raw_bytes(bgra, width, height, header_offset=16, stride=4):
    """Build a raw file image with every pixel set to the (B, G, R, A) tuple."""
    group = bytes(bgra) + bytes(stride - 4)
    return bytes(header_offset) + group * (width * height)


@pytest.fixture
def small_format():
    return RawFormat(header_offset=16, width=8, height=6, pixel_stride=4)


@pytest.fixture
def gradient_image():
    """10x10 image where intensity = 10 * y + x."""
    return RasterBuffer(np.arange(100, dtype=np.uint8).reshape(10, 10))


@pytest.fixture
def session(gradient_image):
    s = ImageSession()
    s.set_viewport((100, 100))
    s.open_image(gradient_image)
    return s
