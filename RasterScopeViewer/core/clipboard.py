"""Clipboard copy/cut/paste with per-pixel blend operators.

The compositor never touches the image it is given; cut and paste return a
new RasterBuffer which the caller submits through ``set_image``.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .constants import MAX_INTENSITY
from .raster import RasterBuffer, Rect

logger = logging.getLogger(__name__)


class BlendMode(Enum):
    AND = "and"
    OR = "or"
    XOR = "xor"
    BLEND = "blend"


def blend(dst: np.ndarray, src: np.ndarray, mode: BlendMode) -> np.ndarray:
    """Combine two equally shaped uint8 arrays."""
    if mode is BlendMode.AND:
        return np.bitwise_and(dst, src)
    if mode is BlendMode.OR:
        return np.bitwise_or(dst, src)
    if mode is BlendMode.XOR:
        return np.bitwise_xor(dst, src)
    if mode is BlendMode.BLEND:
        return ((dst.astype(np.uint16) + src.astype(np.uint16)) // 2).astype(np.uint8)
    raise ValueError(f"Unknown blend mode: {mode!r}")


class ClipboardCompositor:
    """Holds at most one copied region and composites it back onto images."""

    def __init__(self):
        self._content: Optional[RasterBuffer] = None

    @property
    def content(self) -> Optional[RasterBuffer]:
        return self._content

    @property
    def has_content(self) -> bool:
        return self._content is not None

    def clear(self):
        self._content = None

    def copy_selection(self, image: RasterBuffer, rect: Optional[Rect]) -> bool:
        """Copy ``rect`` of ``image`` into the clipboard.

        Returns:
            False, leaving the clipboard untouched, if the rect is missing,
            empty or not fully inside the image.
        """
        if image is None or rect is None or rect.is_empty or not rect.within(image.width, image.height):
            logger.info("Copy ignored: empty or out-of-bounds selection %s", rect)
            return False
        self._content = image.region(rect)
        return True

    def cut_selection(self, image: RasterBuffer, rect: Optional[Rect]) -> Optional[RasterBuffer]:
        """Copy ``rect`` and return ``image`` with that region set to white."""
        if not self.copy_selection(image, rect):
            return None
        out = image.pixels.copy()
        rows, cols = rect.as_slices()
        out[rows, cols] = MAX_INTENSITY
        return image.with_pixels(out)

    def paste(self, image: RasterBuffer, dest: Tuple[int, int], mode: BlendMode) -> Optional[RasterBuffer]:
        """Composite the clipboard onto ``image`` with its top-left at ``dest``.

        Clipboard pixels falling outside the image are skipped, so pasting
        near an edge writes only the overlapping part.

        Returns:
            The composited image, or None if the clipboard is empty.
        """
        if self._content is None:
            logger.info("Paste ignored: clipboard is empty")
            return None

        src = self._content.pixels
        dx, dy = int(dest[0]), int(dest[1])
        overlap = Rect.from_points((dx, dy), (dx + src.shape[1], dy + src.shape[0])).clamped(
            image.width, image.height
        )
        out = image.pixels.copy()
        if overlap.is_empty:
            return image.with_pixels(out)

        rows, cols = overlap.as_slices()
        src_part = src[overlap.y - dy : overlap.bottom - dy, overlap.x - dx : overlap.right - dx]
        out[rows, cols] = blend(out[rows, cols], src_part, mode)
        return image.with_pixels(out)
