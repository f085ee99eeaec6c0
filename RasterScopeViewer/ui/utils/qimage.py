"""Conversion from core image buffers to Qt images."""

import numpy as np
from PySide6.QtGui import QImage

from ...core.raster import RasterBuffer


def numpy_to_qimage(arr: np.ndarray) -> QImage:
    """Convert a NumPy image array to a Qt QImage suitable for display.

    Supported input shapes:
      - (H, W) -> 8-bit grayscale
      - (H, W, 3) -> RGB (8-bit per channel)
      - (H, W, 4) -> RGBA (8-bit per channel)

    Args:
        arr: Numeric array-like image. Values outside [0,255] are clipped.

    Returns:
        QImage: A copied QImage, detached from the NumPy buffer. If ``arr``
        is ``None`` an empty QImage is returned.

    Raises:
        ValueError: If the array shape is not supported.
    """
    if arr is None:
        return QImage()
    a = np.asarray(arr)
    disp = np.ascontiguousarray(np.clip(a, 0, 255).astype(np.uint8))
    if disp.ndim == 2:
        h, w = disp.shape
        return QImage(disp.data, w, h, w, QImage.Format_Grayscale8).copy()
    if disp.ndim == 3 and disp.shape[2] in (3, 4):
        h, w, c = disp.shape
        fmt = QImage.Format_RGB888 if c == 3 else QImage.Format_RGBA8888
        return QImage(disp.data, w, h, c * w, fmt).copy()
    raise ValueError(f"Unsupported array shape {a.shape}")


def raster_to_qimage(image: RasterBuffer) -> QImage:
    """Grayscale QImage of a RasterBuffer; alpha is ignored for display."""
    if image is None or image.is_empty:
        return QImage()
    return numpy_to_qimage(image.pixels)
