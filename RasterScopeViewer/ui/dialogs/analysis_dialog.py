"""Analysis dialog: radial profile sweep and intensity histogram.

The dialog collects sweep parameters, asks the session to run the sweep and
plots the returned profile. NaN radii are drawn as gaps. All numbers come
from ``RasterScopeViewer.core``; this module only renders them.
"""

import logging

import numpy as np
from PySide6.QtCore import Qt
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QDialog,
    QDoubleSpinBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QHeaderView,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QTableWidget,
    QTableWidgetItem,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from ...core.compute import image_stats, intensity_histogram
from ...core.errors import SweepRangeError
from ...core.exporting import PROFILE_HEADER, format_average, profile_to_csv

try:
    import pyqtgraph as pg
    from pyqtgraph import PlotWidget
except Exception:  # pragma: no cover - optional dependency
    pg = None
    PlotWidget = None

logger = logging.getLogger(__name__)


def _make_plot(left: str, bottom: str):
    if PlotWidget is None:
        return None
    widget = PlotWidget()
    widget.setLabel("left", left)
    widget.setLabel("bottom", bottom)
    widget.setBackground("white")
    widget.showGrid(x=True, y=True, alpha=0.4)
    return widget


class AnalysisDialog(QDialog):
    """Modeless dialog with a radial profile tab and a histogram tab.

    Args:
        viewer: Parent ImageViewer
        session: ImageSession providing the current image
    """

    def __init__(self, viewer, session):
        super().__init__(viewer)
        self.viewer = viewer
        self.session = session
        self.setWindowTitle("Analysis")
        self.resize(820, 560)

        tabs = QTabWidget(self)
        tabs.addTab(self._build_profile_tab(), "Radial profile")
        tabs.addTab(self._build_histogram_tab(), "Histogram")

        layout = QVBoxLayout(self)
        layout.addWidget(tabs)
        self._reset_center()

    # Radial profile tab

    def _build_profile_tab(self) -> QWidget:
        page = QWidget()
        root = QHBoxLayout(page)

        left = QVBoxLayout()
        self.profile_plot = _make_plot("Average intensity", "Radius [px]")
        if self.profile_plot is not None:
            left.addWidget(self.profile_plot, 3)

        self.profile_table = QTableWidget(0, len(PROFILE_HEADER))
        self.profile_table.setHorizontalHeaderLabels(list(PROFILE_HEADER))
        self.profile_table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.profile_table.verticalHeader().setVisible(False)
        self.profile_table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.profile_table.setMaximumHeight(200)
        left.addWidget(self.profile_table, 1)
        root.addLayout(left, 1)

        form = QFormLayout()
        self.center_x = QDoubleSpinBox()
        self.center_y = QDoubleSpinBox()
        for box in (self.center_x, self.center_y):
            box.setDecimals(1)
            box.setRange(-100000.0, 100000.0)
        self.r_min = QSpinBox()
        self.r_max = QSpinBox()
        self.r_step = QSpinBox()
        for box in (self.r_min, self.r_max):
            box.setRange(0, 100000)
        self.r_step.setRange(1, 100000)
        self.r_min.setValue(0)
        self.r_max.setValue(100)
        self.r_step.setValue(1)
        form.addRow("Center x", self.center_x)
        form.addRow("Center y", self.center_y)
        form.addRow("R min", self.r_min)
        form.addRow("R max", self.r_max)
        form.addRow("Step", self.r_step)

        center_btn = QPushButton("Use selection center")
        center_btn.clicked.connect(self._reset_center)
        run_btn = QPushButton("Run sweep")
        run_btn.clicked.connect(self.run_sweep)
        copy_btn = QPushButton("Copy CSV")
        copy_btn.clicked.connect(self.copy_csv)
        save_btn = QPushButton("Save CSV...")
        save_btn.clicked.connect(self.save_csv)

        right = QVBoxLayout()
        right.addLayout(form)
        for btn in (center_btn, run_btn, copy_btn, save_btn):
            right.addWidget(btn)
        right.addStretch(1)
        root.addLayout(right)
        return page

    def _reset_center(self):
        """Center on the selection if there is one, else on the image."""
        img = self.session.image
        if img is None:
            return
        sel = self.session.selection
        if sel is not None and not sel.is_empty:
            cx, cy = sel.x + sel.width / 2.0, sel.y + sel.height / 2.0
        else:
            cx, cy = img.width / 2.0, img.height / 2.0
        self.center_x.setValue(cx)
        self.center_y.setValue(cy)
        self.r_max.setValue(int(min(img.width, img.height) // 2))

    def run_sweep(self):
        center = (self.center_x.value(), self.center_y.value())
        try:
            profile = self.session.radial_sweep(center, self.r_min.value(), self.r_max.value(), self.r_step.value())
        except SweepRangeError as e:
            QMessageBox.warning(self, "Radial profile", str(e))
            return
        if profile is None:
            return
        self._show_profile(profile)

    def _show_profile(self, profile):
        self.profile_table.setRowCount(len(profile))
        for row, p in enumerate(profile):
            values = (str(p.radius), format_average(p.average), str(p.samples))
            for col, text in enumerate(values):
                item = QTableWidgetItem(text)
                item.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
                self.profile_table.setItem(row, col, item)

        if self.profile_plot is not None:
            self.profile_plot.clear()
            self.profile_plot.plot(
                profile.radii.astype(float),
                profile.averages,
                pen=pg.mkPen(color="#2c3e50", width=1.5),
                symbol="o",
                symbolSize=4,
                connect="finite",
            )

    def copy_csv(self):
        profile = self.session.last_profile
        if profile is None:
            return
        QGuiApplication.clipboard().setText(profile_to_csv(profile))

    def save_csv(self):
        if self.session.last_profile is None:
            QMessageBox.information(self, "Radial profile", "Run a sweep first.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Save radial profile", "profile.csv", "CSV (*.csv)")
        if path:
            self.session.export_profile(path)

    # Histogram tab

    def _build_histogram_tab(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        self.hist_plot = _make_plot("Count", "Intensity")
        if self.hist_plot is not None:
            layout.addWidget(self.hist_plot, 3)

        headers = ["Mean", "Std", "Median", "Min", "Max"]
        self.stats_table = QTableWidget(1, len(headers))
        self.stats_table.setHorizontalHeaderLabels(headers)
        self.stats_table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.stats_table.verticalHeader().setVisible(False)
        self.stats_table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.stats_table.setMaximumHeight(60)
        layout.addWidget(self.stats_table)
        return page

    def refresh_histogram(self):
        """Recompute histogram and stats for the current image and selection."""
        img = self.session.image
        if img is None:
            if self.hist_plot is not None:
                self.hist_plot.clear()
            self.stats_table.clearContents()
            return
        sel = self.session.selection
        rect = sel if sel is not None and not sel.is_empty else None

        levels, counts = intensity_histogram(img, rect)
        if self.hist_plot is not None:
            self.hist_plot.clear()
            edges = np.append(levels, levels[-1] + 1).astype(float)
            self.hist_plot.plot(edges, counts, stepMode="center", fillLevel=0, brush=(44, 62, 80, 120))

        stats = image_stats(img, rect)
        for col, key in enumerate(("mean", "std", "median", "min", "max")):
            self.stats_table.setItem(0, col, QTableWidgetItem(f"{stats[key]:.3f}"))
