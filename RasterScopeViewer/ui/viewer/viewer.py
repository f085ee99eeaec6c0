"""Main image viewer application window.

This module provides the ImageViewer class, a thin Qt adapter over an
ImageSession. The window renders session state and forwards input; all
pixel logic lives in ``RasterScopeViewer.core``.

Features:
- Raw image loading (file dialog or drag and drop)
- Zoom in/out, fit to window, Ctrl+mouse wheel zoom
- Drag selection, copy/cut/paste with blend modes, crop
- Rotate, flip, resize and plugin filters, all undoable
- Radial profile and histogram analysis dialog
- Status bar showing pixel intensity, zoom and undo depth
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QFileDialog,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QStatusBar,
)

from ...core.errors import DecodeError, FilterError
from ...core.image_io import is_raw_file
from ...core.session import EVENT_IMAGE, EVENT_SELECTION, EVENT_VIEW, ImageSession
from ..dialogs import AnalysisDialog, HelpDialog
from ..utils import raster_to_qimage
from ..widgets import ImageLabel
from .menu_builder import create_menus, update_filter_menu

logger = logging.getLogger(__name__)


class ImageViewer(QMainWindow):
    """Main application window for raw image viewing and editing.

    Attributes:
        session: ImageSession owning the current image
        image_label: Widget painting the scaled image and selection
    """

    def __init__(self, session: Optional[ImageSession] = None):
        super().__init__()
        self.setWindowTitle("RasterScopeViewer")
        self.resize(820, 750)

        self.session = session if session is not None else ImageSession()
        self._base_pixmap: Optional[QPixmap] = None
        self._analysis_dialog = None

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(False)
        self.scroll_area.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.image_label = ImageLabel(self)
        self.scroll_area.setWidget(self.image_label)
        self.setCentralWidget(self.scroll_area)

        self.status = QStatusBar()
        self.setStatusBar(self.status)
        self.status_pixel = QLabel()
        self.status_selection = QLabel()
        self.status_scale = QLabel()
        self.status_history = QLabel()
        self.status.addPermanentWidget(self.status_pixel, 2)
        self.status.addPermanentWidget(self.status_selection, 3)
        self.status.addPermanentWidget(self.status_scale, 1)
        self.status.addPermanentWidget(self.status_history, 1)

        self.help_dialog = HelpDialog(self)
        create_menus(self)
        self.setAcceptDrops(True)

        self.session.subscribe(self.on_session_event)
        self.refresh_all()

    # Session events

    def on_session_event(self, event: str):
        if event == EVENT_IMAGE:
            img = self.session.image
            self._base_pixmap = QPixmap.fromImage(raster_to_qimage(img)) if img is not None else None
            self._update_title()
            if self._analysis_dialog is not None:
                self._analysis_dialog.refresh_histogram()
        elif event == EVENT_VIEW:
            self._render()
        elif event == EVENT_SELECTION:
            self.image_label.update()
            self.update_selection_status()
        self.update_status()

    def refresh_all(self):
        for event in (EVENT_IMAGE, EVENT_VIEW, EVENT_SELECTION):
            self.on_session_event(event)

    def _render(self):
        if self._base_pixmap is None or self._base_pixmap.isNull():
            self.image_label.set_pixmap(None)
            return
        w, h = self.session.view.scaled_size()
        scaled = self._base_pixmap.scaled(max(1, w), max(1, h), Qt.IgnoreAspectRatio, Qt.SmoothTransformation)
        self.image_label.set_pixmap(scaled)

    def _viewport_size(self):
        vp = self.scroll_area.viewport()
        return (vp.width(), vp.height())

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.session.set_viewport(self._viewport_size())

    def showEvent(self, event):
        super().showEvent(event)
        self.session.set_viewport(self._viewport_size())

    # Status bar

    def _update_title(self):
        path = self.session.path
        if self.session.has_image and path is not None:
            self.setWindowTitle(f"RasterScopeViewer - {Path(path).name}")
        else:
            self.setWindowTitle("RasterScopeViewer")

    def update_status(self):
        view = self.session.view
        mode = " (fit)" if view.fit_mode else ""
        self.status_scale.setText(f"Zoom: {view.zoom_factor:.3f}x{mode}")
        self.status_history.setText(f"Undo: {self.session.history_depth}")

    def update_selection_status(self):
        sel = self.session.selection
        if sel is None or sel.is_empty:
            self.status_selection.setText("")
        else:
            self.status_selection.setText(f"Selection: x={sel.x} y={sel.y} w={sel.width} h={sel.height}")

    def update_mouse_status(self, pos):
        """Show the intensity under the cursor (no-op outside the image)."""
        if not self.session.has_image:
            return
        x, y = self.session.viewport_to_image(pos)
        value = self.session.pixel_info((x, y))
        if value is None:
            return
        self.status_pixel.setText(f"({int(x)}, {int(y)})  I={value}")

    # File handling

    def open_path(self, path: str):
        try:
            self.session.set_viewport(self._viewport_size())
            self.session.open_file(path)
        except DecodeError as e:
            logger.error("%s", e)
            QMessageBox.warning(self, "Load error", str(e))
        except OSError as e:
            logger.error("Cannot open %s: %s", path, e)
            QMessageBox.warning(self, "Load error", f"Cannot open {path}:\n{e}")

    def open_file_dialog(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Open raw image", "", "Raw images (*.edf *.raw *.dat *.bin);;All files (*)"
        )
        if path:
            self.open_path(path)

    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        paths = [u.toLocalFile() for u in e.mimeData().urls() if u.isLocalFile()]
        raw = [p for p in paths if is_raw_file(p)]
        if raw:
            self.open_path(raw[0])

    def close_image(self):
        self.session.clear_image()

    def load_filters_dialog(self):
        directory = QFileDialog.getExistingDirectory(self, "Filter plugin directory")
        if not directory:
            return
        loaded = self.session.filters.load_directory(directory)
        update_filter_menu(self)
        self.status.showMessage(f"Loaded {len(loaded)} filter(s)", 5000)

    def export_profile_dialog(self):
        if self.session.last_profile is None:
            QMessageBox.information(self, "Export", "No radial profile has been computed.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export radial profile", "profile.csv", "CSV (*.csv)")
        if path:
            self.session.export_profile(path)

    # Editing

    def undo(self):
        if not self.session.undo():
            self.status.showMessage("Nothing to undo", 3000)

    def crop(self):
        # Map with the zoom currently on screen before cropping
        self.session.set_viewport(self._viewport_size())
        if not self.session.crop_selection():
            self.status.showMessage("Select a region first", 3000)

    def resize_dialog(self):
        img = self.session.image
        if img is None:
            return
        w, ok = QInputDialog.getInt(self, "Resize", "Width:", img.width, 1, 100000)
        if not ok:
            return
        h, ok = QInputDialog.getInt(self, "Resize", "Height:", img.height, 1, 100000)
        if ok:
            self.session.resize(w, h)

    def apply_filter(self, name: str):
        try:
            self.session.apply_filter(name)
        except FilterError as e:
            logger.error("%s", e)
            QMessageBox.warning(self, "Filter error", str(e))

    # Dialogs

    def show_analysis_dialog(self):
        if not self.session.has_image:
            QMessageBox.information(self, "Analysis", "No image loaded.")
            return
        if self._analysis_dialog is None:
            self._analysis_dialog = AnalysisDialog(self, self.session)
        self._analysis_dialog.refresh_histogram()
        self._analysis_dialog.show()
        self._analysis_dialog.raise_()

    def closeEvent(self, event):
        if self._analysis_dialog is not None and self._analysis_dialog.isVisible():
            self._analysis_dialog.close()
        if self.help_dialog.isVisible():
            self.help_dialog.close()
        self.session.unsubscribe(self.on_session_event)
        self.session.close()
        event.accept()
