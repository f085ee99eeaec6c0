"""UI components package (PySide6 adapter over the core session)."""

from .viewer import ImageViewer
from .widgets import ImageLabel
from .dialogs import HelpDialog, AnalysisDialog

__all__ = [
    "ImageViewer",
    "ImageLabel",
    "HelpDialog",
    "AnalysisDialog",
]
