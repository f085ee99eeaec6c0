"""Exception types raised by the RasterScopeViewer core.

Soft conditions (empty selection, empty clipboard, empty history) are not
exceptions; the session reports them through return values and logging.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class RasterScopeError(Exception):
    """Base class for all core errors."""


class DecodeErrorKind(Enum):
    TOO_SMALL = "too_small"
    TRUNCATED = "truncated"


class DecodeError(RasterScopeError):
    """Raw raster data could not be decoded.

    Attributes:
        kind: TOO_SMALL when the source is shorter than header + payload,
              TRUNCATED when a read returned fewer bytes than requested
        expected: number of bytes required
        actual: number of bytes available or read
    """

    def __init__(self, kind: DecodeErrorKind, expected: int, actual: int, source: Optional[str] = None):
        self.kind = kind
        self.expected = expected
        self.actual = actual
        self.source = source
        where = f" ({source})" if source else ""
        if kind is DecodeErrorKind.TOO_SMALL:
            msg = f"File too small{where}: need {expected} bytes, have {actual}"
        else:
            msg = f"File truncated{where}: expected {expected} bytes, read {actual}"
        super().__init__(msg)


class SweepRangeError(RasterScopeError, ValueError):
    """Radial sweep called with step <= 0 or r_max < r_min."""


class FilterError(RasterScopeError):
    """A plugin filter is unknown, raised, or returned an invalid image."""

    def __init__(self, filter_name: str, message: str):
        self.filter_name = filter_name
        super().__init__(f"Filter '{filter_name}': {message}")
