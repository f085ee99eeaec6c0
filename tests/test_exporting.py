"""Tests for radial profile CSV export and analysis helpers."""

import numpy as np

from RasterScopeViewer.core import RasterBuffer, Rect, image_stats, intensity_histogram, pixel_info, profile_to_csv
from RasterScopeViewer.core.exporting import save_profile_csv
from RasterScopeViewer.core.radial import RadialProfile, RadialSamplePoint


def _profile():
    return RadialProfile(
        [
            RadialSamplePoint(0, float("nan"), 0),
            RadialSamplePoint(5, 12.5, 31),
            RadialSamplePoint(10, 80.0, 63),
        ]
    )


def test_profile_csv_layout():
    text = profile_to_csv(_profile())
    lines = text.split("\n")
    assert lines[0] == "R,avg,samples"
    assert lines[1] == "0,,0"
    assert lines[2] == "5,12.5,31"
    assert lines[3] == "10,80.0,63"


def test_save_profile_csv(tmp_path):
    path = save_profile_csv(_profile(), tmp_path / "profile.csv")
    rows = path.read_text(encoding="utf-8").splitlines()
    assert len(rows) == 4
    assert rows[1].split(",") == ["0", "", "0"]


def test_histogram_counts_every_pixel():
    img = RasterBuffer(np.array([[0, 0, 7], [7, 7, 255]], dtype=np.uint8))
    levels, counts = intensity_histogram(img)
    assert len(levels) == 256 and len(counts) == 256
    assert counts[0] == 2 and counts[7] == 3 and counts[255] == 1
    assert counts.sum() == 6


def test_histogram_and_stats_of_region(gradient_image):
    _, counts = intensity_histogram(gradient_image, Rect(0, 0, 2, 1))
    assert counts.sum() == 2 and counts[0] == 1 and counts[1] == 1

    stats = image_stats(gradient_image, Rect(0, 0, 10, 1))
    assert stats["min"] == 0.0 and stats["max"] == 9.0
    assert stats["mean"] == 4.5


def test_pixel_info(gradient_image):
    assert pixel_info(gradient_image, 3, 2) == 23
    assert pixel_info(gradient_image, 3.7, 2.2) == 23
    assert pixel_info(gradient_image, -1, 0) is None
    assert pixel_info(gradient_image, 10, 0) is None
    assert pixel_info(None, 0, 0) is None
