"""Circular averaging and radial intensity profiles.

A circular average samples a digital circle of radius R around a center,
collapses samples that round to the same pixel, drops pixels outside the
image and averages the rest. A radial sweep repeats this over an inclusive
range of radii, keeping NaN entries so gaps stay visible downstream.

This module does not depend on Qt. It is safe to import in non-Qt contexts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from .constants import MIN_CIRCLE_SAMPLES
from .errors import SweepRangeError
from .raster import RasterBuffer


@dataclass(frozen=True)
class RadialSamplePoint:
    radius: int
    average: float
    samples: int

    @property
    def is_valid(self) -> bool:
        return not math.isnan(self.average)


class RadialProfile(Sequence[RadialSamplePoint]):
    """Ordered circular averages keyed by increasing radius."""

    def __init__(self, points: List[RadialSamplePoint], center: Tuple[float, float] = (0.0, 0.0)):
        self._points = list(points)
        self.center = center

    def __getitem__(self, index):
        return self._points[index]

    def __len__(self):
        return len(self._points)

    def __iter__(self) -> Iterator[RadialSamplePoint]:
        return iter(self._points)

    @property
    def radii(self) -> np.ndarray:
        return np.array([p.radius for p in self._points], dtype=int)

    @property
    def averages(self) -> np.ndarray:
        return np.array([p.average for p in self._points], dtype=float)

    @property
    def counts(self) -> np.ndarray:
        return np.array([p.samples for p in self._points], dtype=int)

    def valid(self) -> List[RadialSamplePoint]:
        return [p for p in self._points if p.is_valid]

    def __repr__(self):
        return f"RadialProfile({len(self)} points, center={self.center})"


def sample_count(radius: float) -> int:
    """Number of angular samples taken at ``radius``."""
    return max(MIN_CIRCLE_SAMPLES, int(math.floor(2.0 * math.pi * radius + 0.5)))


def circle_pixels(center: Tuple[float, float], radius: float) -> np.ndarray:
    """Unique integer (x, y) pixels hit by the sampled circle, as an (N, 2) array.

    Coordinates are rounded half up. Two angles landing on the same pixel
    yield one row.
    """
    n = sample_count(radius)
    theta = 2.0 * np.pi * np.arange(n) / n
    xs = np.floor(center[0] + radius * np.cos(theta) + 0.5).astype(np.int64)
    ys = np.floor(center[1] + radius * np.sin(theta) + 0.5).astype(np.int64)
    return np.unique(np.column_stack([xs, ys]), axis=0)


def circular_average(image: RasterBuffer, center: Tuple[float, float], radius: float) -> Tuple[float, int]:
    """Mean intensity over the unique in-bounds pixels of a sampled circle.

    Args:
        image: Source image (read only).
        center: (x, y) circle center in image coordinates.
        radius: Circle radius in pixels.

    Returns:
        (average, unique_samples). average is NaN and unique_samples 0 when
        the radius is not positive, the circle misses the image entirely, or
        no sample lands inside it.
    """
    nan = (float("nan"), 0)
    if radius <= 0 or image.is_empty:
        return nan

    cx, cy = center
    w, h = image.width, image.height
    if cx + radius < -0.5 or cy + radius < -0.5 or cx - radius > w - 0.5 or cy - radius > h - 0.5:
        return nan

    pts = circle_pixels(center, radius)
    inside = (pts[:, 0] >= 0) & (pts[:, 0] < w) & (pts[:, 1] >= 0) & (pts[:, 1] < h)
    pts = pts[inside]
    if len(pts) == 0:
        return nan

    values = image.pixels[pts[:, 1], pts[:, 0]]
    return float(values.mean(dtype=np.float64)), int(len(pts))


def radial_sweep(
    image: RasterBuffer, center: Tuple[float, float], r_min: int, r_max: int, step: int
) -> RadialProfile:
    """Circular averages for r_min, r_min + step, ... up to and including r_max.

    The result has exactly ``floor((r_max - r_min) / step) + 1`` points; radii
    without valid samples are kept with a NaN average.

    Raises:
        SweepRangeError: If step <= 0 or r_max < r_min.
    """
    if step <= 0:
        raise SweepRangeError(f"Sweep step must be positive, got {step}")
    if r_max < r_min:
        raise SweepRangeError(f"Sweep range is inverted: r_min={r_min} > r_max={r_max}")

    n = int((r_max - r_min) // step) + 1
    points = []
    for i in range(n):
        r = r_min + i * step
        avg, count = circular_average(image, center, r)
        points.append(RadialSamplePoint(r, avg, count))
    return RadialProfile(points, center=(float(center[0]), float(center[1])))
