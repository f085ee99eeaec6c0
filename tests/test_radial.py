"""Tests for circular averages and radial sweeps."""

import math

import numpy as np
import pytest

from RasterScopeViewer.core import RasterBuffer, SweepRangeError, circular_average, radial_sweep
from RasterScopeViewer.core.radial import circle_pixels, sample_count


@pytest.mark.parametrize("radius", [1, 3, 10, 24])
def test_uniform_image_returns_its_intensity(radius):
    img = RasterBuffer.filled(50, 50, 123)
    avg, n = circular_average(img, (25, 25), radius)
    assert avg == 123.0
    assert n > 0


def test_non_positive_radius_is_nan():
    img = RasterBuffer.filled(10, 10, 5)
    for r in (0, -3):
        avg, n = circular_average(img, (5, 5), r)
        assert math.isnan(avg) and n == 0


def test_circle_completely_outside_is_nan():
    img = RasterBuffer.filled(10, 10, 5)
    avg, n = circular_average(img, (-100, -100), 5)
    assert math.isnan(avg) and n == 0


def test_unit_circle_hits_eight_neighbours():
    img = RasterBuffer(np.arange(25, dtype=np.uint8).reshape(5, 5))
    avg, n = circular_average(img, (2, 2), 1)
    assert n == 8
    # all 3x3 neighbours except the center (value 12)
    neighbours = img.pixels[1:4, 1:4].astype(float).sum() - 12
    assert avg == pytest.approx(neighbours / 8)


def test_samples_are_deduplicated_by_pixel():
    for r in (2, 5, 17):
        pts = circle_pixels((30, 30), r)
        assert len(np.unique(pts, axis=0)) == len(pts)
        assert len(pts) <= sample_count(r)


def test_sample_count_has_a_minimum_of_eight():
    assert sample_count(0.5) == 8
    assert sample_count(10) == round(2 * math.pi * 10)


def test_partial_circle_uses_in_bounds_pixels_only():
    img = RasterBuffer(np.arange(400, dtype=np.uint16).reshape(20, 20).astype(np.uint8))
    avg, n = circular_average(img, (0, 0), 5)

    pts = circle_pixels((0, 0), 5)
    inside = pts[(pts[:, 0] >= 0) & (pts[:, 1] >= 0)]
    assert n == len(inside)
    assert n < len(pts)
    assert avg == pytest.approx(img.pixels[inside[:, 1], inside[:, 0]].mean())


def test_sweep_length_and_radii():
    img = RasterBuffer.filled(60, 60, 80)
    profile = radial_sweep(img, (30, 30), 0, 23, 5)

    assert len(profile) == 5
    assert profile.radii.tolist() == [0, 5, 10, 15, 20]


def test_sweep_keeps_nan_gaps():
    img = RasterBuffer.filled(60, 60, 80)
    profile = radial_sweep(img, (30, 30), 0, 100, 20)

    assert len(profile) == 6
    assert math.isnan(profile[0].average) and profile[0].samples == 0
    assert [p.average for p in profile[1:3]] == [80.0, 80.0]
    # radius 100 around the center misses a 60x60 image entirely
    assert math.isnan(profile[-1].average)
    assert len(profile.valid()) < len(profile)


def test_sweep_inclusive_upper_bound():
    img = RasterBuffer.filled(30, 30, 1)
    profile = radial_sweep(img, (15, 15), 2, 10, 4)
    assert profile.radii.tolist() == [2, 6, 10]


@pytest.mark.parametrize("r_min, r_max, step", [(0, 10, 0), (0, 10, -1), (10, 5, 1)])
def test_invalid_sweep_range(r_min, r_max, step):
    img = RasterBuffer.filled(10, 10, 1)
    with pytest.raises(SweepRangeError):
        radial_sweep(img, (5, 5), r_min, r_max, step)
