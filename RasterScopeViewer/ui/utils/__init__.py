"""UI utility functions."""

from .qimage import raster_to_qimage, numpy_to_qimage

__all__ = ["raster_to_qimage", "numpy_to_qimage"]
