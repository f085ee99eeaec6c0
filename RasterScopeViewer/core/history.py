"""Selection state machine and bounded undo history.

``SelectionAndHistory.set_image`` is the single entry point for replacing
the current image. It snapshots the previous image into a bounded
HistoryStack before installing the new one, so every image-altering
operation is undoable up to HISTORY_CAPACITY steps.
"""

import logging
from collections import deque
from enum import Enum
from typing import Optional, Tuple

from .constants import DEFAULT_VIEWPORT, HISTORY_CAPACITY
from .raster import RasterBuffer, Rect
from .view_transform import ViewTransform

logger = logging.getLogger(__name__)


class SelectionState(Enum):
    IDLE = "idle"
    SELECTING = "selecting"


class HistoryStack:
    """Past images, most recent last; the oldest is evicted when full."""

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._items = deque(maxlen=capacity)

    def push(self, image: RasterBuffer):
        self._items.append(image)

    def pop(self) -> Optional[RasterBuffer]:
        if not self._items:
            return None
        return self._items.pop()

    def clear(self):
        self._items.clear()

    def __len__(self):
        return len(self._items)

    def __bool__(self):
        return bool(self._items)

    def __contains__(self, image):
        return any(item is image for item in self._items)


class SelectionAndHistory:
    """Owns the current image, its selection rectangle and undo history.

    Pointer coordinates passed to the selection methods are in image space;
    callers convert viewport positions with ``ViewTransform.to_image_space``.

    Attributes:
        view: ViewTransform refitted whenever the image is replaced
        viewport: (width, height) used for zoom-fit
        state: IDLE or SELECTING
        selection: current selection in image coordinates, or None
    """

    def __init__(self, view: Optional[ViewTransform] = None, capacity: int = HISTORY_CAPACITY):
        self.view = view if view is not None else ViewTransform()
        self.viewport: Tuple[int, int] = DEFAULT_VIEWPORT
        self.history = HistoryStack(capacity)
        self.state = SelectionState.IDLE
        self.selection: Optional[Rect] = None
        self._current: Optional[RasterBuffer] = None
        self._start: Optional[Tuple[int, int]] = None

    @property
    def current(self) -> Optional[RasterBuffer]:
        return self._current

    # Selection

    def _clamp_point(self, p) -> Tuple[int, int]:
        img = self._current
        x, y = int(p[0]), int(p[1])
        if img is None:
            return x, y
        return min(max(x, 0), img.width), min(max(y, 0), img.height)

    def _span(self, p) -> Rect:
        rect = Rect.from_points(self._start, self._clamp_point(p))
        img = self._current
        return rect.clamped(img.width, img.height) if img is not None else rect

    def pointer_down(self, p):
        """Start a new selection at image point ``p``."""
        if self._current is None:
            return
        self._start = self._clamp_point(p)
        self.state = SelectionState.SELECTING
        self.selection = Rect(self._start[0], self._start[1], 0, 0)

    def pointer_move(self, p):
        if self.state is not SelectionState.SELECTING:
            return
        self.selection = self._span(p)

    def pointer_up(self, p):
        if self.state is not SelectionState.SELECTING:
            return
        self.selection = self._span(p)
        self.state = SelectionState.IDLE
        self._start = None

    def select_all(self):
        if self._current is None:
            return
        self.state = SelectionState.IDLE
        self.selection = Rect(0, 0, self._current.width, self._current.height)

    def set_selection(self, rect: Optional[Rect]):
        self.state = SelectionState.IDLE
        if rect is None or self._current is None:
            self.selection = rect
            return
        self.selection = rect.clamped(self._current.width, self._current.height)

    def clear_selection(self):
        self.state = SelectionState.IDLE
        self._start = None
        self.selection = None

    # History

    def _install(self, image: RasterBuffer):
        self._current = image
        self.view.set_image_size(image.width, image.height)
        if image.is_empty:
            self.view.fit_mode = False
        else:
            self.view.zoom_fit(self.viewport)
        if self.selection is not None:
            self.selection = self.selection.clamped(image.width, image.height)

    def set_image(self, new_image: RasterBuffer):
        """Replace the current image, keeping the old one for undo."""
        if not isinstance(new_image, RasterBuffer):
            raise TypeError(f"Expected RasterBuffer, got {type(new_image).__name__}")
        if new_image is self._current:
            return
        if self._current is not None:
            self.history.push(self._current)
        self._install(new_image)

    def undo(self) -> bool:
        """Restore the most recent snapshot.

        Returns:
            False (and no state change) when there is nothing to undo.
        """
        previous = self.history.pop()
        if previous is None:
            logger.info("Nothing to undo")
            return False
        self._install(previous)
        return True

    def reset(self):
        self.history.clear()
        self.clear_selection()
        self._current = None
        self.view.set_image_size(0, 0)
        self.view.fit_mode = False
