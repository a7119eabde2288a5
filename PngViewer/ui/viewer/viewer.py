"""Main image viewer application window.

This module provides the ImageViewer class, the main window that loads PNG
files through the decoder and shows the result.

Features:
- Load via menu (Ctrl+O), drag-and-drop or command line
- Background decoding so the window stays responsive
- Step zoom 1x..4x with keyboard shortcuts and Ctrl+mouse wheel
- Status bar showing pixel values and coordinates
- Chunk info dialog for the current file
"""

import logging
from pathlib import Path
from typing import Iterable

from PySide6.QtWidgets import (
    QMainWindow,
    QScrollArea,
    QStatusBar,
    QLabel,
    QFileDialog,
    QMessageBox,
)
from PySide6.QtCore import Qt, QEvent, QThreadPool, Signal

from ...core.constants import WINDOW_SIZE, WINDOW_MIN_SIZE
from ...core.image_io import numpy_to_qimage, is_image_file
from ..widgets import ImageLabel
from ..dialogs import HelpDialog, InfoDialog

from .menu_builder import create_menus
from .zoom_manager import ZoomManager
from .status_updater import StatusUpdater
from .loader import DecodeTask
from .state import (
    Empty,
    Loaded,
    Loading,
    begin_loading,
    close_image,
    displayed,
    fail_loading,
    finish_loading,
    initial_state,
)

logger = logging.getLogger(__name__)


class ImageViewer(QMainWindow):
    """Main application window for viewing PNG images.

    Keyboard Shortcuts:
        - Ctrl+O: Load image
        - Ctrl+W: Close image
        - +: Zoom in (0.5 step)
        - -: Zoom out (0.5 step)
        - f: Toggle 1x / 4x
        - I: Chunk info

    Mouse Controls:
        - Ctrl + Mouse wheel: Zoom in/out

    Attributes:
        state: Current ViewerState (Empty, Loading or Loaded)
        scale: Current zoom scale factor
    """

    scale_changed = Signal()

    def __init__(self):
        super().__init__()
        self.setWindowTitle("PNG Viewer")
        self.resize(*WINDOW_SIZE)
        self.setMinimumSize(*WINDOW_MIN_SIZE)

        self.state = initial_state()
        self.scale = 1.0
        self.thread_pool = QThreadPool.globalInstance()
        # keep running tasks referenced until they report back
        self._tasks = {}

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setAlignment(Qt.AlignCenter)
        self.image_label = ImageLabel(self, self)
        self.scroll_area.setWidget(self.image_label)
        self.setCentralWidget(self.scroll_area)
        self.image_label.installEventFilter(self)

        self.status = QStatusBar()
        self.setStatusBar(self.status)
        self.status_pixel = QLabel()
        self.status_info = QLabel()
        self.status_format = QLabel()
        self.status_scale = QLabel()
        self.status.addPermanentWidget(self.status_pixel, 3)
        self.status.addPermanentWidget(self.status_info, 2)
        self.status.addPermanentWidget(self.status_format, 1)
        self.status.addPermanentWidget(self.status_scale, 1)

        self.help_dialog = HelpDialog(self)
        self._info_dialog = None

        self.zoom_manager = ZoomManager(self)
        self.status_updater = StatusUpdater(self)

        create_menus(self)
        self.setAcceptDrops(True)
        self.refresh_display()

    # Delegate zoom methods to zoom_manager
    def zoom_in(self) -> bool:
        return self.zoom_manager.zoom_in()

    def zoom_out(self) -> bool:
        return self.zoom_manager.zoom_out()

    def zoom_toggle(self):
        self.zoom_manager.zoom_toggle()

    def update_status(self):
        self.status_updater.update_status()

    def update_mouse_status(self, pos):
        self.status_updater.update_mouse_status(pos)

    def has_image(self) -> bool:
        return isinstance(displayed(self.state), Loaded)

    # Loading
    def open_file(self):
        """Open file dialog to load a PNG file."""
        path, _ = QFileDialog.getOpenFileName(self, "Load Image", "", "PNG images (*.png)")
        if path:
            self.load_png(path)

    def open_paths(self, paths: Iterable[str]):
        """Load the last PNG in ``paths`` (later loads replace earlier ones)."""
        pngs = [p for p in paths or [] if p and is_image_file(p)]
        if pngs:
            self.load_png(pngs[-1])

    def load_png(self, path: str):
        """Start decoding ``path`` in the background."""
        path = str(Path(path).resolve())
        logger.info("Loading: %s", path)
        self.set_state(begin_loading(self.state, path))

        task = DecodeTask(path)
        task.signals.finished.connect(self._on_decode_finished)
        task.signals.failed.connect(self._on_decode_failed)
        self._tasks[id(task)] = task
        task.signals.finished.connect(lambda *_: self._tasks.pop(id(task), None))
        task.signals.failed.connect(lambda *_: self._tasks.pop(id(task), None))
        self.thread_pool.start(task)

    def _on_decode_finished(self, path, arr, header):
        self.set_state(finish_loading(self.state, path, arr, header))

    def _on_decode_failed(self, path, message):
        superseded = not (isinstance(self.state, Loading) and self.state.path == path)
        self.set_state(fail_loading(self.state, path))
        if not superseded:
            self._show_load_error(path, message)

    def _show_load_error(self, path: str, error_msg: str):
        """Show error message with file details."""
        details = f"File: {Path(path).name}\n\nError: {error_msg}"
        QMessageBox.warning(self, "Error loading image", details)

    def close_current_image(self):
        self.set_state(close_image(self.state))

    # Display
    def set_state(self, state):
        """Replace the viewer state and refresh what is shown if it changed."""
        old_shown = displayed(self.state)
        self.state = state
        if displayed(state) is not old_shown:
            self.refresh_display()
            if self._info_dialog is not None:
                self._info_dialog.set_path(self.current_path())
        else:
            self.update_status()

    def current_path(self):
        shown = displayed(self.state)
        return shown.path if isinstance(shown, Loaded) else None

    def refresh_display(self):
        """Repaint the label for the state currently on screen."""
        shown = displayed(self.state)
        match shown:
            case Loaded(array=arr):
                self.scroll_area.setWidgetResizable(False)
                self.image_label.set_image(numpy_to_qimage(arr), self.scale)
            case Empty(placeholder=glyph):
                self.scroll_area.setWidgetResizable(True)
                self.image_label.set_placeholder(glyph)
            case _:
                raise TypeError(f"unhandled viewer state: {shown!r}")
        self.update_status()

    def show_info_dialog(self):
        """Show the chunk info dialog for the current file."""
        if self._info_dialog is not None:
            if self._info_dialog.isMinimized():
                self._info_dialog.showNormal()
            self._info_dialog.raise_()
            self._info_dialog.activateWindow()
            return
        dlg = InfoDialog(self, self.current_path())
        dlg.show()
        self._info_dialog = dlg
        dlg.finished.connect(lambda: setattr(self, "_info_dialog", None))

    # Event handlers
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        self.open_paths([u.toLocalFile() for u in e.mimeData().urls()])

    def eventFilter(self, obj, event):
        """Update status on mouse move and zoom on Ctrl+wheel over the image."""
        if obj is self.image_label:
            if event.type() == QEvent.MouseMove:
                self.update_mouse_status(event.position().toPoint())
                return False
            if event.type() == QEvent.Wheel and event.modifiers() & Qt.ControlModifier:
                if event.angleDelta().y() > 0:
                    self.zoom_in()
                elif event.angleDelta().y() < 0:
                    self.zoom_out()
                return True
        return super().eventFilter(obj, event)

    def closeEvent(self, event):
        """Close child dialogs so the application exits cleanly."""
        if self._info_dialog and self._info_dialog.isVisible():
            self._info_dialog.close()
        if self.help_dialog and self.help_dialog.isVisible():
            self.help_dialog.close()
        event.accept()
