"""Zoom and viewport mapping.

This module handles all zoom-related state including:
- Stepped zoom in/out with a hard lower limit
- Fit-to-viewport mode where the zoom is derived from the viewport size
- Mapping points between viewport and image coordinates

It holds no pixels and does not depend on Qt.
"""

from typing import Optional, Tuple

from .constants import MIN_ZOOM_SCALE, ZOOM_STEP


class ViewTransform:
    """Zoom state for one displayed image.

    Attributes:
        zoom_factor: Viewport pixels per image pixel (1.0 = original size)
        fit_mode: True while the zoom is derived from the viewport
        image_size: (width, height) of the displayed image
    """

    def __init__(self, image_size: Tuple[int, int] = (0, 0)):
        self.zoom_factor = 1.0
        self.fit_mode = False
        self.image_size = (int(image_size[0]), int(image_size[1]))

    def set_image_size(self, width: int, height: int):
        self.image_size = (int(width), int(height))

    def set_zoom(self, scale: float):
        """Set an explicit zoom factor, leaving fit mode."""
        self.zoom_factor = max(MIN_ZOOM_SCALE, float(scale))
        self.fit_mode = False

    def zoom_in(self):
        self.zoom_factor *= ZOOM_STEP
        self.fit_mode = False

    def zoom_out(self):
        self.zoom_factor = max(MIN_ZOOM_SCALE, self.zoom_factor / ZOOM_STEP)
        self.fit_mode = False

    def fit_scale(self, viewport: Tuple[int, int]) -> float:
        """Zoom that makes the image fill the viewport on at least one axis.

        Raises:
            ValueError: If the image has a zero dimension.
        """
        w, h = self.image_size
        if w <= 0 or h <= 0:
            raise ValueError("Cannot fit a zero-size image")
        vw, vh = viewport
        return min(vw / w, vh / h)

    def zoom_fit(self, viewport: Tuple[int, int]):
        """Enter fit mode and derive the zoom from ``viewport``."""
        self.zoom_factor = self.fit_scale(viewport)
        self.fit_mode = True

    def refit(self, viewport: Tuple[int, int]):
        """Re-derive the zoom after a viewport resize (fit mode only).

        A zero-size image keeps its current zoom.
        """
        w, h = self.image_size
        if self.fit_mode and w > 0 and h > 0:
            self.zoom_factor = self.fit_scale(viewport)

    def scaled_size(self) -> Tuple[int, int]:
        """Displayed image size in viewport pixels."""
        w, h = self.image_size
        return (int(round(w * self.zoom_factor)), int(round(h * self.zoom_factor)))

    def to_image_space(
        self, point: Tuple[float, float], viewport: Optional[Tuple[int, int]] = None
    ) -> Tuple[float, float]:
        """Convert a viewport point to image coordinates.

        In fit mode, passing the current viewport re-derives the zoom first so
        the mapping always matches what is on screen, even if the window was
        resized since the last render.
        """
        if viewport is not None:
            self.refit(viewport)
        s = self.zoom_factor
        return (point[0] / s, point[1] / s)

    def to_viewport_space(self, point: Tuple[float, float]) -> Tuple[float, float]:
        s = self.zoom_factor
        return (point[0] * s, point[1] * s)

    def __repr__(self):
        mode = "fit" if self.fit_mode else "manual"
        return f"ViewTransform(zoom={self.zoom_factor:.4f}, {mode})"
