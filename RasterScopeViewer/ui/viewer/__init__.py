"""Image viewer package.

- viewer.py: Main ImageViewer window rendering an ImageSession
- menu_builder.py: Menu and keyboard shortcut setup
"""

from .viewer import ImageViewer

__all__ = ["ImageViewer"]
