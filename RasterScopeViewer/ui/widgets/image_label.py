"""Image display widget with drag selection.

The label only paints and forwards pointer events; the selection itself
lives in the session and is drawn back in viewport coordinates.
"""

from PySide6.QtCore import QPoint, QRect, Qt
from PySide6.QtGui import QColor, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QLabel


class ImageLabel(QLabel):
    """Displays the scaled current image and the selection rectangle.

    Mouse Controls:
        - Left-drag: Select a rectangle (continues until release)
        - Ctrl + Mouse wheel: Zoom in/out

    Attributes:
        viewer: Parent ImageViewer instance
    """

    def __init__(self, viewer, parent=None):
        super().__init__(parent)
        self.viewer = viewer
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setMouseTracking(True)
        self._pixmap = None

    def set_pixmap(self, pixmap: QPixmap):
        self._pixmap = pixmap
        if pixmap is None or pixmap.isNull():
            self.clear()
            self.resize(0, 0)
        else:
            self.setPixmap(pixmap)
            self.resize(pixmap.size())
        self.update()

    def _selection_in_widget(self):
        sel = self.viewer.session.selection
        if sel is None or sel.is_empty:
            return None
        view = self.viewer.session.view
        x0, y0 = view.to_viewport_space((sel.x, sel.y))
        x1, y1 = view.to_viewport_space((sel.right, sel.bottom))
        return QRect(QPoint(int(x0), int(y0)), QPoint(int(x1) - 1, int(y1) - 1))

    def paintEvent(self, event):
        super().paintEvent(event)
        rect = self._selection_in_widget()
        if rect is None:
            return
        painter = QPainter(self)
        pen = QPen(QColor(255, 0, 0))
        pen.setWidth(1)
        pen.setStyle(Qt.DashLine)
        painter.setPen(pen)
        painter.drawRect(rect)
        painter.end()

    def _pos(self, ev):
        p = ev.position()
        return (p.x(), p.y())

    def mousePressEvent(self, ev):
        if ev.button() == Qt.LeftButton and self.viewer.session.has_image:
            self.viewer.session.pointer_down(self._pos(ev))
            return
        super().mousePressEvent(ev)

    def mouseMoveEvent(self, ev):
        # Qt delivers moves to the pressed widget even outside its bounds
        if ev.buttons() & Qt.LeftButton:
            self.viewer.session.pointer_move(self._pos(ev))
        self.viewer.update_mouse_status(self._pos(ev))
        super().mouseMoveEvent(ev)

    def mouseReleaseEvent(self, ev):
        if ev.button() == Qt.LeftButton:
            self.viewer.session.pointer_up(self._pos(ev))
            return
        super().mouseReleaseEvent(ev)

    def wheelEvent(self, ev):
        if ev.modifiers() & Qt.ControlModifier:
            if ev.angleDelta().y() > 0:
                self.viewer.session.zoom_in()
            elif ev.angleDelta().y() < 0:
                self.viewer.session.zoom_out()
            ev.accept()
            return
        super().wheelEvent(ev)
