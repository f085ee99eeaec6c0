"""Menu and keyboard shortcut configuration for ImageViewer.

This module handles the creation of all menus and application-level
keyboard shortcuts for the image viewer.
"""

from PySide6.QtGui import QAction, QKeySequence

from ...core.clipboard import BlendMode


def _action(viewer, text, slot, shortcut=None):
    action = QAction(text, viewer)
    if shortcut:
        action.setShortcut(QKeySequence(shortcut))
    action.triggered.connect(lambda checked=False: slot())
    return action


def create_menus(viewer):
    """Create all menus and keyboard shortcuts for the viewer.

    Args:
        viewer: ImageViewer instance
    """
    menubar = viewer.menuBar()

    # File menu
    file_menu = menubar.addMenu("File")
    file_menu.addAction(_action(viewer, "Open raw image...", viewer.open_file_dialog, "Ctrl+O"))
    file_menu.addAction(_action(viewer, "Load filter plugins...", viewer.load_filters_dialog))
    file_menu.addSeparator()
    file_menu.addAction(_action(viewer, "Export radial profile...", viewer.export_profile_dialog, "Ctrl+E"))
    file_menu.addSeparator()
    file_menu.addAction(_action(viewer, "Close", viewer.close_image, "Ctrl+W"))

    # Edit menu
    edit_menu = menubar.addMenu("Edit")
    edit_menu.addAction(_action(viewer, "Undo", viewer.undo, "Ctrl+Z"))
    edit_menu.addSeparator()
    edit_menu.addAction(_action(viewer, "Copy", viewer.session.copy, "Ctrl+C"))
    edit_menu.addAction(_action(viewer, "Cut", viewer.session.cut, "Ctrl+X"))
    paste_menu = edit_menu.addMenu("Paste")
    paste_shortcuts = {BlendMode.BLEND: "Ctrl+V"}
    for mode in BlendMode:
        paste_menu.addAction(
            _action(viewer, mode.name, lambda m=mode: viewer.session.paste(m), paste_shortcuts.get(mode))
        )
    edit_menu.addSeparator()
    edit_menu.addAction(_action(viewer, "Select all", viewer.session.select_all, "Ctrl+A"))
    edit_menu.addAction(_action(viewer, "Clear selection", viewer.session.clear_selection, "Esc"))

    # Image menu
    image_menu = menubar.addMenu("Image")
    image_menu.addAction(_action(viewer, "Rotate 90° clockwise", lambda: viewer.session.rotate("cw"), "Ctrl+R"))
    image_menu.addAction(_action(viewer, "Rotate 90° counter-clockwise", lambda: viewer.session.rotate("ccw")))
    image_menu.addAction(_action(viewer, "Rotate 180°", lambda: viewer.session.rotate("180")))
    image_menu.addAction(_action(viewer, "Flip horizontal", lambda: viewer.session.flip("horizontal")))
    image_menu.addAction(_action(viewer, "Flip vertical", lambda: viewer.session.flip("vertical")))
    image_menu.addSeparator()
    image_menu.addAction(_action(viewer, "Crop to selection", viewer.crop, "Ctrl+Shift+X"))
    image_menu.addAction(_action(viewer, "Resize...", viewer.resize_dialog))

    # Filter menu is rebuilt whenever plugins are loaded
    viewer.filter_menu = menubar.addMenu("Filter")
    update_filter_menu(viewer)

    # View menu
    view_menu = menubar.addMenu("View")
    view_menu.addAction(_action(viewer, "Zoom in", viewer.session.zoom_in, "+"))
    view_menu.addAction(_action(viewer, "Zoom out", viewer.session.zoom_out, "-"))
    view_menu.addAction(_action(viewer, "Fit to window", viewer.session.zoom_fit, "f"))

    # Analysis menu
    analysis_menu = menubar.addMenu("Analysis")
    analysis_menu.addAction(_action(viewer, "Radial profile / histogram", viewer.show_analysis_dialog, "A"))

    # Help menu
    help_menu = menubar.addMenu("Help")
    help_menu.addAction(_action(viewer, "Keyboard shortcuts", viewer.help_dialog.show, "F1"))


def update_filter_menu(viewer):
    """Rebuild the Filter menu from the session's registry."""
    menu = viewer.filter_menu
    menu.clear()
    names = viewer.session.filters.names()
    if not names:
        placeholder = QAction("(no filters loaded)", viewer)
        placeholder.setEnabled(False)
        menu.addAction(placeholder)
        return
    for name in names:
        info = viewer.session.filters.get(name)
        action = _action(viewer, name, lambda n=name: viewer.apply_filter(n))
        if info is not None and info.description:
            action.setStatusTip(info.description)
        menu.addAction(action)
