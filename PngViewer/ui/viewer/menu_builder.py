"""Menu and keyboard shortcut configuration for ImageViewer.

This module handles the creation of all menus and window-level keyboard
shortcuts for the image viewer.
"""

from PySide6.QtGui import QAction
from PySide6.QtCore import Qt


def _window_action(viewer, text, shortcut, slot):
    action = QAction(text, viewer, shortcut=shortcut)
    action.setShortcutContext(Qt.WindowShortcut)
    action.triggered.connect(slot)
    viewer.addAction(action)
    return action


def create_menus(viewer):
    """Create all menus and keyboard shortcuts for the viewer.

    Args:
        viewer: ImageViewer instance
    """
    menubar = viewer.menuBar()

    # File menu
    file_menu = menubar.addMenu("File")
    viewer.open_action = _window_action(viewer, "Load Image...", "Ctrl+O", viewer.open_file)
    file_menu.addAction(viewer.open_action)
    file_menu.addSeparator()
    viewer.close_current_action = _window_action(viewer, "Close", "Ctrl+W", viewer.close_current_image)
    file_menu.addAction(viewer.close_current_action)

    # View menu
    view_menu = menubar.addMenu("View")
    viewer.zoom_in_action = _window_action(viewer, "Zoom In", "+", lambda: viewer.zoom_in())
    viewer.zoom_out_action = _window_action(viewer, "Zoom Out", "-", lambda: viewer.zoom_out())
    viewer.zoom_toggle_action = _window_action(viewer, "Toggle 1x / 4x", "f", lambda: viewer.zoom_toggle())
    view_menu.addAction(viewer.zoom_in_action)
    view_menu.addAction(viewer.zoom_out_action)
    view_menu.addAction(viewer.zoom_toggle_action)
    view_menu.addSeparator()
    viewer.show_info_action = _window_action(viewer, "Chunk Info", "I", lambda: viewer.show_info_dialog())
    view_menu.addAction(viewer.show_info_action)

    # Help menu
    help_menu = menubar.addMenu("Help")
    help_menu.addAction(QAction("Keyboard Shortcuts", viewer, triggered=viewer.help_dialog.show))
