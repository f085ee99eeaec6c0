"""Tests for decoding the legacy raw (B, G, R, A) layout."""

import io

import numpy as np
import pytest

from RasterScopeViewer.core import DecodeError, DecodeErrorKind, RawFormat, decode_raw, load_raw_file, read_raw
from RasterScopeViewer.core.image_io import is_raw_file

from conftest import make_raw_bytes


def test_pure_red_decodes_to_luma_76():
    """R=255, G=0, B=0 gives round(0.299 * 255) = 76 everywhere."""
    data = make_raw_bytes((0, 0, 255, 255), 8, 6)
    img = decode_raw(data, header_offset=16, width=8, height=6, pixel_stride=4)

    assert img.size == (8, 6)
    assert np.all(img.pixels == 76), f"Expected 76, got {np.unique(img.pixels)}"


def test_equal_channels_keep_their_value():
    data = make_raw_bytes((200, 200, 200, 0), 8, 6)
    img = decode_raw(data, 16, 8, 6, 4)
    assert np.all(img.pixels == 200)


def test_channel_order_is_bgr():
    """Only the third byte of each group is weighted as red."""
    blue = decode_raw(make_raw_bytes((255, 0, 0, 0), 2, 2), 16, 2, 2, 4)
    green = decode_raw(make_raw_bytes((0, 255, 0, 0), 2, 2), 16, 2, 2, 4)

    assert blue.intensity(0, 0) == 29  # round(0.114 * 255) = 29.07
    assert green.intensity(0, 0) == 150  # round(0.587 * 255) = 149.685


def test_alpha_is_kept_as_metadata_only():
    data = make_raw_bytes((10, 10, 10, 42), 3, 2)
    img = decode_raw(data, 16, 3, 2, 4)
    assert np.all(img.alpha == 42)
    assert np.all(img.pixels == 10)


def test_wider_stride_ignores_extra_bytes():
    data = make_raw_bytes((0, 0, 255, 255), 4, 4, stride=6)
    img = decode_raw(data, 16, 4, 4, 6)
    assert np.all(img.pixels == 76)


def test_row_major_layout():
    header = bytes(16)
    groups = b"".join(bytes((v, v, v, 255)) for v in range(6))
    img = decode_raw(header + groups, 16, 3, 2, 4)
    assert img.pixels.tolist() == [[0, 1, 2], [3, 4, 5]]


@pytest.mark.parametrize("missing", [1, 4, 100])
def test_short_buffer_is_too_small(missing):
    data = make_raw_bytes((0, 0, 0, 0), 8, 6)[:-missing]
    with pytest.raises(DecodeError) as exc:
        decode_raw(data, 16, 8, 6, 4)
    assert exc.value.kind is DecodeErrorKind.TOO_SMALL
    assert exc.value.expected == 16 + 8 * 6 * 4


def test_short_stream_is_truncated(small_format):
    data = make_raw_bytes((0, 0, 0, 0), 8, 6)[:-10]
    with pytest.raises(DecodeError) as exc:
        read_raw(io.BytesIO(data), small_format)
    assert exc.value.kind is DecodeErrorKind.TRUNCATED
    assert exc.value.actual == small_format.payload_size - 10


def test_short_header_reports_header_sizes(small_format):
    with pytest.raises(DecodeError) as exc:
        read_raw(io.BytesIO(bytes(5)), small_format)
    assert exc.value.kind is DecodeErrorKind.TRUNCATED
    assert exc.value.expected == small_format.header_offset
    assert exc.value.actual == 5


def test_load_raw_file(tmp_path, small_format):
    path = tmp_path / "frame.edf"
    path.write_bytes(make_raw_bytes((0, 0, 255, 0), 8, 6))
    img = load_raw_file(path, small_format)
    assert img.size == (8, 6)
    assert img.intensity(7, 5) == 76


def test_load_short_file_is_too_small(tmp_path, small_format):
    path = tmp_path / "short.edf"
    path.write_bytes(bytes(20))
    with pytest.raises(DecodeError) as exc:
        load_raw_file(path, small_format)
    assert exc.value.kind is DecodeErrorKind.TOO_SMALL


def test_default_format_matches_legacy_layout():
    fmt = RawFormat()
    assert (fmt.header_offset, fmt.width, fmt.height, fmt.pixel_stride) == (3072, 2082, 2217, 4)
    assert fmt.required_size == 3072 + 2082 * 2217 * 4


def test_decoded_pixels_are_read_only():
    img = decode_raw(make_raw_bytes((1, 2, 3, 4), 2, 2), 16, 2, 2, 4)
    with pytest.raises(ValueError):
        img.pixels[0, 0] = 9


def test_is_raw_file():
    assert is_raw_file("a/b/frame.EDF")
    assert is_raw_file("x.raw")
    assert not is_raw_file("photo.png")
