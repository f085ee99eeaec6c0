"""Raw raster loading.

This module provides functions for:
- Decoding the fixed-layout legacy raw format into a RasterBuffer
- Reading that format from binary streams and files
- Validating raw file extensions

The legacy layout is an opaque header followed by row-major pixel groups
stored as (B, G, R, A). Each group is reduced to one luma intensity.
All functions are UI-independent.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np

from .constants import (
    LUMA_WEIGHTS,
    MAX_INTENSITY,
    RAW_HEADER_OFFSET,
    RAW_HEIGHT,
    RAW_PIXEL_STRIDE,
    RAW_WIDTH,
)
from .errors import DecodeError, DecodeErrorKind
from .raster import RasterBuffer

logger = logging.getLogger(__name__)

RAW_EXTENSIONS = {".edf", ".raw", ".dat", ".bin"}


@dataclass(frozen=True)
class RawFormat:
    """Geometry of a raw raster file."""

    header_offset: int = RAW_HEADER_OFFSET
    width: int = RAW_WIDTH
    height: int = RAW_HEIGHT
    pixel_stride: int = RAW_PIXEL_STRIDE

    def __post_init__(self):
        if self.header_offset < 0:
            raise ValueError("header_offset must be >= 0")
        if self.width < 0 or self.height < 0:
            raise ValueError("width and height must be >= 0")
        if self.pixel_stride < 4:
            raise ValueError("pixel_stride must be at least 4 (B, G, R, A)")

    @property
    def payload_size(self) -> int:
        return self.width * self.height * self.pixel_stride

    @property
    def required_size(self) -> int:
        return self.header_offset + self.payload_size


DEFAULT_RAW_FORMAT = RawFormat()


def _groups_to_raster(payload: bytes, fmt: RawFormat) -> RasterBuffer:
    groups = np.frombuffer(payload, dtype=np.uint8, count=fmt.payload_size)
    groups = groups.reshape(fmt.height, fmt.width, fmt.pixel_stride)
    b = groups[:, :, 0].astype(np.float64)
    g = groups[:, :, 1].astype(np.float64)
    r = groups[:, :, 2].astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    grey = np.floor(wr * r + wg * g + wb * b + 0.5)
    grey = np.clip(grey, 0, MAX_INTENSITY).astype(np.uint8)
    return RasterBuffer(grey, alpha=groups[:, :, 3])


def decode_raw(
    data: Union[bytes, bytearray, memoryview],
    header_offset: int = RAW_HEADER_OFFSET,
    width: int = RAW_WIDTH,
    height: int = RAW_HEIGHT,
    pixel_stride: int = RAW_PIXEL_STRIDE,
) -> RasterBuffer:
    """Decode an in-memory raw raster.

    Args:
        data: Complete file contents (header + pixel groups).
        header_offset: Bytes to skip before the first pixel group.
        width, height: Image dimensions in pixels.
        pixel_stride: Bytes per pixel group; the first four are B, G, R, A.

    Returns:
        RasterBuffer with ``round(0.299 R + 0.587 G + 0.114 B)`` per pixel.

    Raises:
        DecodeError: kind TOO_SMALL if ``data`` is shorter than
            header_offset + width * height * pixel_stride.

    Example:
        >>> img = decode_raw(open("frame.edf", "rb").read())
    """
    fmt = RawFormat(header_offset, width, height, pixel_stride)
    view = memoryview(data)
    if len(view) < fmt.required_size:
        raise DecodeError(DecodeErrorKind.TOO_SMALL, fmt.required_size, len(view))
    payload = view[fmt.header_offset : fmt.required_size]
    return _groups_to_raster(payload, fmt)


def read_raw(stream: BinaryIO, fmt: RawFormat = DEFAULT_RAW_FORMAT, source: str = None) -> RasterBuffer:
    """Read one raw raster from a binary stream positioned at the file start.

    Raises:
        DecodeError: kind TRUNCATED if the stream ends before the header or
            the full payload has been read.
    """
    header = stream.read(fmt.header_offset)
    if len(header) < fmt.header_offset:
        raise DecodeError(DecodeErrorKind.TRUNCATED, fmt.header_offset, len(header), source)

    payload = stream.read(fmt.payload_size)
    if len(payload) < fmt.payload_size:
        raise DecodeError(DecodeErrorKind.TRUNCATED, fmt.payload_size, len(payload), source)
    return _groups_to_raster(payload, fmt)


def load_raw_file(path: Union[str, Path], fmt: RawFormat = DEFAULT_RAW_FORMAT) -> RasterBuffer:
    """Load a raw raster file from disk.

    Args:
        path: Path to the file (str or pathlib.Path).
        fmt: Layout of the file; defaults to the legacy 2082x2217 BGRA layout.

    Raises:
        DecodeError: TOO_SMALL when the file is shorter than the layout
            requires, TRUNCATED when the read comes up short.
        OSError: If the file cannot be opened.
    """
    path_obj = Path(path)
    file_size = path_obj.stat().st_size
    if file_size < fmt.required_size:
        raise DecodeError(DecodeErrorKind.TOO_SMALL, fmt.required_size, file_size, str(path_obj))

    with open(path_obj, "rb") as f:
        img = read_raw(f, fmt, source=str(path_obj))

    logger.info("Loaded %s (%dx%d)", path_obj.name, img.width, img.height)
    return img


def is_raw_file(path: Union[str, Path]) -> bool:
    """Return True if the path has a raw raster suffix.

    This is a lightweight check on the filename suffix only
    (case-insensitive); the file is not opened.
    """
    return Path(path).suffix.lower() in RAW_EXTENSIONS
