"""Computation helpers for the analysis views.

This module centralizes histogram/statistics computations and pixel
queries without depending on Qt. It is safe to import in non-Qt contexts.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np

from .constants import MAX_INTENSITY
from .raster import RasterBuffer, Rect


def intensity_histogram(image: RasterBuffer, rect: Optional[Rect] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Count pixels per intensity level.

    Returns (levels, counts), both of length 256. When ``rect`` is given
    only the part of it inside the image is counted.
    """
    data = image.pixels
    if rect is not None:
        rows, cols = rect.clamped(image.width, image.height).as_slices()
        data = data[rows, cols]
    counts = np.bincount(data.ravel(), minlength=MAX_INTENSITY + 1)
    return np.arange(MAX_INTENSITY + 1), counts


def image_stats(image: RasterBuffer, rect: Optional[Rect] = None) -> Dict[str, float]:
    """Return mean/std/median/min/max of the image (or a region of it)."""
    data = image.pixels
    if rect is not None:
        rows, cols = rect.clamped(image.width, image.height).as_slices()
        data = data[rows, cols]
    if data.size == 0:
        return {"mean": 0.0, "std": 0.0, "median": 0.0, "min": 0.0, "max": 0.0}
    return {
        "mean": float(np.mean(data)),
        "std": float(np.std(data)),
        "median": float(np.median(data)),
        "min": float(np.min(data)),
        "max": float(np.max(data)),
    }


def pixel_info(image: Optional[RasterBuffer], x: float, y: float) -> Optional[int]:
    """Intensity at image coordinate (x, y); None when outside or no image."""
    if image is None:
        return None
    ix, iy = int(np.floor(x)), int(np.floor(y))
    if not image.contains(ix, iy):
        return None
    return image.intensity(ix, iy)
