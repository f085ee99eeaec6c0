"""Widget components for the viewer."""

from .image_label import ImageLabel

__all__ = ["ImageLabel"]
