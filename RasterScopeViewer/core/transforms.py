"""Geometric image operations.

Each function takes a RasterBuffer and returns a new one; none of them
modify their input. The session routes every result through ``set_image``.
"""

from typing import Optional

import cv2
import numpy as np

from .constants import MAX_INTENSITY
from .raster import RasterBuffer, Rect


def _apply(image: RasterBuffer, op) -> RasterBuffer:
    alpha = op(image.alpha) if image.alpha is not None else None
    return RasterBuffer(op(image.pixels), alpha)


def rotate_cw(image: RasterBuffer) -> RasterBuffer:
    return _apply(image, lambda a: np.rot90(a, k=-1))


def rotate_ccw(image: RasterBuffer) -> RasterBuffer:
    return _apply(image, lambda a: np.rot90(a, k=1))


def rotate_180(image: RasterBuffer) -> RasterBuffer:
    return _apply(image, lambda a: np.rot90(a, k=2))


def flip_horizontal(image: RasterBuffer) -> RasterBuffer:
    """Mirror left-right."""
    return _apply(image, np.fliplr)


def flip_vertical(image: RasterBuffer) -> RasterBuffer:
    """Mirror top-bottom."""
    return _apply(image, np.flipud)


def crop(image: RasterBuffer, rect: Optional[Rect]) -> Optional[RasterBuffer]:
    """Crop to ``rect`` clamped to the image; None when nothing is left."""
    if rect is None:
        return None
    r = rect.clamped(image.width, image.height)
    if r.is_empty:
        return None
    return image.region(r)


def resize(image: RasterBuffer, width: int, height: int) -> RasterBuffer:
    """Resample to width x height.

    Uses area interpolation when shrinking and bilinear when enlarging.

    Raises:
        ValueError: If either target dimension is not positive.
    """
    width, height = int(width), int(height)
    if width <= 0 or height <= 0:
        raise ValueError(f"Resize target must be positive, got {width}x{height}")
    if image.is_empty:
        raise ValueError("Cannot resize an empty image")
    shrinking = width * height < image.width * image.height
    interp = cv2.INTER_AREA if shrinking else cv2.INTER_LINEAR

    def op(a):
        return cv2.resize(np.ascontiguousarray(a), (width, height), interpolation=interp)

    return _apply(image, op)


def invert(image: RasterBuffer) -> RasterBuffer:
    return image.with_pixels(MAX_INTENSITY - image.pixels)
