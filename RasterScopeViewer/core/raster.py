"""Canonical image model: RasterBuffer and Rect.

A RasterBuffer is a single-channel 8-bit intensity grid. Its pixel array is
frozen (numpy ``writeable=False``) so code that only holds a reference
cannot edit the current image in place; every edit builds a new buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


def _frozen(arr: np.ndarray) -> np.ndarray:
    base = np.array(arr, dtype=np.uint8, copy=True, order="C")
    base.setflags(write=False)
    # A view of a read-only base cannot be made writeable again
    return base.view()


@dataclass(frozen=True)
class Rect:
    """Axis-aligned integer rectangle in image pixel coordinates."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.width}x{self.height}")

    @classmethod
    def from_points(cls, p0: Tuple[int, int], p1: Tuple[int, int]) -> "Rect":
        """Box spanning two corner points (in either order)."""
        x0, x1 = sorted((int(p0[0]), int(p1[0])))
        y0, y1 = sorted((int(p0[1]), int(p1[1])))
        return cls(x0, y0, x1 - x0, y1 - y0)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def clamped(self, width: int, height: int) -> "Rect":
        """Return the rectangle intersected with a width x height image."""
        x0 = min(max(self.x, 0), width)
        y0 = min(max(self.y, 0), height)
        x1 = min(max(self.right, 0), width)
        y1 = min(max(self.bottom, 0), height)
        return Rect(x0, y0, max(0, x1 - x0), max(0, y1 - y0))

    def within(self, width: int, height: int) -> bool:
        return self.x >= 0 and self.y >= 0 and self.right <= width and self.bottom <= height

    def as_slices(self) -> Tuple[slice, slice]:
        """(rows, cols) slices for indexing an (H, W) array."""
        return slice(self.y, self.bottom), slice(self.x, self.right)


class RasterBuffer:
    """Single-channel intensity image.

    Attributes:
        pixels: read-only uint8 array of shape (height, width)
        alpha: optional read-only uint8 array of the same shape, display only
    """

    __slots__ = ("_pixels", "_alpha")

    def __init__(self, pixels: np.ndarray, alpha: Optional[np.ndarray] = None):
        arr = np.asarray(pixels)
        if arr.ndim != 2:
            raise ValueError(f"RasterBuffer needs a 2-D array, got shape {arr.shape}")
        self._pixels = _frozen(arr)
        if alpha is not None:
            alpha = np.asarray(alpha)
            if alpha.shape != arr.shape:
                raise ValueError(f"Alpha shape {alpha.shape} does not match pixels {arr.shape}")
            self._alpha = _frozen(alpha)
        else:
            self._alpha = None

    @classmethod
    def filled(cls, width: int, height: int, value: int = 0) -> "RasterBuffer":
        return cls(np.full((height, width), value, dtype=np.uint8))

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def alpha(self) -> Optional[np.ndarray]:
        return self._alpha

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def intensity(self, x: int, y: int) -> int:
        return int(self._pixels[y, x])

    def region(self, rect: Rect) -> "RasterBuffer":
        """Sub-buffer at ``rect`` (caller ensures the rect is inside)."""
        rows, cols = rect.as_slices()
        alpha = self._alpha[rows, cols] if self._alpha is not None else None
        return RasterBuffer(self._pixels[rows, cols], alpha)

    def with_pixels(self, pixels: np.ndarray) -> "RasterBuffer":
        """New buffer with replaced pixels, keeping alpha when shapes still match."""
        alpha = self._alpha if self._alpha is not None and self._alpha.shape == np.shape(pixels) else None
        return RasterBuffer(pixels, alpha)

    def to_rgb(self) -> np.ndarray:
        """Replicate intensity into an (H, W, 3) array for display."""
        return np.repeat(self._pixels[:, :, None], 3, axis=2)

    def __eq__(self, other):
        if not isinstance(other, RasterBuffer):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    __hash__ = None

    def __repr__(self):
        return f"RasterBuffer({self.width}x{self.height})"
