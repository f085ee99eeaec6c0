"""Image editing session.

ImageSession is the single owner of the current image. Everything else
(viewer widgets, dialogs, plugins) sees the image only as a read-only
RasterBuffer and asks the session to change it. Each change goes through
``set_image`` so the undo history cannot be bypassed.

State changes are announced to subscribers with one of the event names
below; the Qt viewer subscribes and repaints.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from . import transforms
from .clipboard import BlendMode, ClipboardCompositor
from .compute import pixel_info
from .constants import DEFAULT_VIEWPORT
from .errors import FilterError
from .exporting import save_profile_csv
from .filters import FilterRegistry
from .history import SelectionAndHistory
from .image_io import DEFAULT_RAW_FORMAT, RawFormat, decode_raw, load_raw_file
from .radial import RadialProfile, circular_average, radial_sweep
from .raster import RasterBuffer, Rect
from .view_transform import ViewTransform

logger = logging.getLogger(__name__)

EVENT_IMAGE = "image"
EVENT_SELECTION = "selection"
EVENT_VIEW = "view"
EVENT_CLIPBOARD = "clipboard"
EVENT_PROFILE = "profile"

Listener = Callable[[str], None]


class ImageSession:
    """Current image, history, clipboard, view and filters for one window.

    Attributes:
        view: Zoom state of the displayed image
        editor: Selection state machine and undo history
        clipboard: Copied region and paste compositor
        filters: Plugin filters available to this session
        raw_format: Layout used when opening raw files
        path: File the current image was opened from, if any
        last_profile: Result of the most recent radial sweep
    """

    def __init__(self, raw_format: RawFormat = DEFAULT_RAW_FORMAT, filters: Optional[FilterRegistry] = None):
        self.view = ViewTransform()
        self.editor = SelectionAndHistory(self.view)
        self.clipboard = ClipboardCompositor()
        self.filters = filters if filters is not None else FilterRegistry()
        self.raw_format = raw_format
        self.path: Optional[Path] = None
        self.last_profile: Optional[RadialProfile] = None
        self._listeners: List[Listener] = []

    # Notifications

    def subscribe(self, listener: Listener):
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, *events: str):
        for event in events:
            for listener in list(self._listeners):
                listener(event)

    # Accessors

    @property
    def image(self) -> Optional[RasterBuffer]:
        return self.editor.current

    @property
    def has_image(self) -> bool:
        return self.editor.current is not None

    @property
    def selection(self) -> Optional[Rect]:
        return self.editor.selection

    @property
    def history_depth(self) -> int:
        return len(self.editor.history)

    # Opening and closing

    def open_image(self, image: RasterBuffer, path: Optional[Union[str, Path]] = None):
        """Start a fresh editing session on ``image``."""
        self.editor.reset()
        self.clipboard.clear()
        self.last_profile = None
        self.path = Path(path) if path is not None else None
        self.editor.set_image(image)
        self._notify(EVENT_IMAGE, EVENT_SELECTION, EVENT_VIEW, EVENT_CLIPBOARD)

    def open_file(self, path: Union[str, Path]) -> RasterBuffer:
        """Load a raw file and make it the current image.

        Raises:
            DecodeError: The file is too small or truncated; the current
                session is left as it was.
        """
        image = load_raw_file(path, self.raw_format)
        self.open_image(image, path)
        return image

    def open_bytes(self, data: bytes) -> RasterBuffer:
        fmt = self.raw_format
        image = decode_raw(data, fmt.header_offset, fmt.width, fmt.height, fmt.pixel_stride)
        self.open_image(image)
        return image

    def clear_image(self):
        """Drop the image, history and clipboard; loaded filters stay."""
        self.editor.reset()
        self.clipboard.clear()
        self.last_profile = None
        self.path = None
        self._notify(EVENT_IMAGE, EVENT_SELECTION, EVENT_VIEW, EVENT_CLIPBOARD)

    def close(self):
        """End the session and unload all filters."""
        self.clear_image()
        self.filters.clear()

    # Mutation entry point

    def set_image(self, new_image: RasterBuffer):
        self.editor.set_image(new_image)
        self._notify(EVENT_IMAGE, EVENT_SELECTION, EVENT_VIEW)

    def undo(self) -> bool:
        if not self.editor.undo():
            return False
        self._notify(EVENT_IMAGE, EVENT_SELECTION, EVENT_VIEW)
        return True

    def _require_image(self, action: str) -> Optional[RasterBuffer]:
        if self.image is None:
            logger.info("%s ignored: no image loaded", action)
        return self.image

    # Geometric operations

    def rotate(self, direction: str = "cw") -> bool:
        """Rotate by 90 degrees ('cw' or 'ccw') or by 180 degrees ('180')."""
        ops = {"cw": transforms.rotate_cw, "ccw": transforms.rotate_ccw, "180": transforms.rotate_180}
        if direction not in ops:
            raise ValueError(f"Unknown rotation: {direction!r}")
        img = self._require_image("Rotate")
        if img is None:
            return False
        self.set_image(ops[direction](img))
        return True

    def flip(self, axis: str = "horizontal") -> bool:
        ops = {"horizontal": transforms.flip_horizontal, "vertical": transforms.flip_vertical}
        if axis not in ops:
            raise ValueError(f"Unknown flip axis: {axis!r}")
        img = self._require_image("Flip")
        if img is None:
            return False
        self.set_image(ops[axis](img))
        return True

    def crop_selection(self) -> bool:
        img = self._require_image("Crop")
        if img is None:
            return False
        cropped = transforms.crop(img, self.selection)
        if cropped is None:
            logger.info("Crop ignored: empty selection")
            return False
        self.set_image(cropped)
        return True

    def resize(self, width: int, height: int) -> bool:
        img = self._require_image("Resize")
        if img is None:
            return False
        self.set_image(transforms.resize(img, width, height))
        return True

    # Clipboard

    def copy(self) -> bool:
        img = self._require_image("Copy")
        if img is None or not self.clipboard.copy_selection(img, self.selection):
            return False
        self._notify(EVENT_CLIPBOARD)
        return True

    def cut(self) -> bool:
        img = self._require_image("Cut")
        if img is None:
            return False
        result = self.clipboard.cut_selection(img, self.selection)
        if result is None:
            return False
        self.set_image(result)
        self._notify(EVENT_CLIPBOARD)
        return True

    def paste(self, mode: BlendMode = BlendMode.BLEND, dest: Optional[Tuple[int, int]] = None) -> bool:
        """Paste the clipboard; ``dest`` defaults to the selection origin, then (0, 0)."""
        img = self._require_image("Paste")
        if img is None:
            return False
        if dest is None:
            sel = self.selection
            dest = (sel.x, sel.y) if sel is not None else (0, 0)
        result = self.clipboard.paste(img, dest, mode)
        if result is None:
            return False
        self.set_image(result)
        return True

    # Filters

    def apply_filter(self, name: str) -> RasterBuffer:
        """Run a registered filter on the current image and install the result.

        Raises:
            FilterError: If the filter fails; the current image is unchanged.
        """
        img = self.image
        if img is None:
            raise FilterError(name, "no image loaded")
        result = self.filters.apply(name, img)
        self.set_image(result)
        logger.info("Applied filter '%s'", name)
        return result

    # Queries and analysis

    def pixel_info(self, point: Tuple[float, float]) -> Optional[int]:
        return pixel_info(self.image, point[0], point[1])

    def circular_average(self, center: Tuple[float, float], radius: float) -> Tuple[float, int]:
        img = self.image
        if img is None:
            return float("nan"), 0
        return circular_average(img, center, radius)

    def radial_sweep(self, center: Tuple[float, float], r_min: int, r_max: int, step: int) -> Optional[RadialProfile]:
        """Sweep the current image and keep the result as ``last_profile``.

        Raises:
            SweepRangeError: For step <= 0 or r_max < r_min.
        """
        img = self._require_image("Radial sweep")
        if img is None:
            return None
        profile = radial_sweep(img, center, r_min, r_max, step)
        self.last_profile = profile
        self._notify(EVENT_PROFILE)
        return profile

    def export_profile(self, path: Union[str, Path]) -> Optional[Path]:
        if self.last_profile is None:
            logger.info("Export ignored: no radial profile computed")
            return None
        return save_profile_csv(self.last_profile, path)

    # View and pointer input

    @property
    def viewport(self) -> Tuple[int, int]:
        return self.editor.viewport

    def set_viewport(self, size: Tuple[int, int]):
        """Record the viewport size and refit if the view is in fit mode."""
        size = (int(size[0]), int(size[1]))
        if size[0] <= 0 or size[1] <= 0:
            size = DEFAULT_VIEWPORT
        self.editor.viewport = size
        if self.has_image and not self.image.is_empty and self.view.fit_mode:
            self.view.refit(size)
            self._notify(EVENT_VIEW)

    def zoom_in(self):
        self.view.zoom_in()
        self._notify(EVENT_VIEW)

    def zoom_out(self):
        self.view.zoom_out()
        self._notify(EVENT_VIEW)

    def zoom_fit(self):
        if not self.has_image or self.image.is_empty:
            return
        self.view.zoom_fit(self.viewport)
        self._notify(EVENT_VIEW)

    def viewport_to_image(self, point: Tuple[float, float]) -> Tuple[float, float]:
        return self.view.to_image_space(point, self.viewport)

    def pointer_down(self, viewport_point: Tuple[float, float]):
        if not self.has_image:
            return
        self.editor.pointer_down(self.viewport_to_image(viewport_point))
        self._notify(EVENT_SELECTION)

    def pointer_move(self, viewport_point: Tuple[float, float]):
        if not self.has_image:
            return
        self.editor.pointer_move(self.viewport_to_image(viewport_point))
        self._notify(EVENT_SELECTION)

    def pointer_up(self, viewport_point: Tuple[float, float]):
        if not self.has_image:
            return
        self.editor.pointer_up(self.viewport_to_image(viewport_point))
        self._notify(EVENT_SELECTION)

    def select_all(self):
        self.editor.select_all()
        self._notify(EVENT_SELECTION)

    def clear_selection(self):
        self.editor.clear_selection()
        self._notify(EVENT_SELECTION)
