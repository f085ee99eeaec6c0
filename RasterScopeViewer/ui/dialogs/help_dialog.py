"""Help dialog showing keyboard shortcuts."""

from PySide6.QtWidgets import QDialog, QTextEdit, QVBoxLayout


class HelpDialog(QDialog):
    """Dialog showing keyboard shortcuts and usage help."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Help / Keyboard shortcuts")
        self.resize(560, 480)

        text = QTextEdit(self)
        text.setReadOnly(True)

        content = (
            "RasterScopeViewer help\n"
            "================================\n\n"
            "[Basics]\n"
            "  Ctrl+O : Open raw image\n"
            "  + / - / Ctrl+wheel : Zoom in / out (20% steps)\n"
            "  f      : Fit to window\n"
            "  Left-drag : Select a rectangle\n"
            "  Ctrl+A : Select all / Esc : Clear selection\n\n"
            "[Editing]\n"
            "  Ctrl+C / Ctrl+X : Copy / cut selection (cut fills white)\n"
            "  Ctrl+V : Paste (BLEND) at the selection origin\n"
            "  Edit > Paste : AND / OR / XOR / BLEND\n"
            "  Ctrl+Shift+X : Crop to selection\n"
            "  Ctrl+R : Rotate 90° clockwise\n"
            "  Ctrl+Z : Undo (up to 16 steps, no redo)\n\n"
            "[Analysis]\n"
            "  A : Radial profile / histogram\n"
            "  Ctrl+E : Export last radial profile as CSV\n"
        )
        text.setPlainText(content)

        layout = QVBoxLayout(self)
        layout.addWidget(text)
