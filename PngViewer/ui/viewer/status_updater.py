"""Status bar update logic for ImageViewer.

This module handles all status bar update operations including:
- Mouse position and pixel value display
- Window title with file name, size and pixel format
- Zoom scale display
"""

from pathlib import Path

from ...core.image_io import format_file_size
from .state import Loaded, Loading, displayed


class StatusUpdater:
    """Manages status bar updates for the image viewer."""

    def __init__(self, viewer):
        """Initialize status updater.

        Args:
            viewer: ImageViewer instance
        """
        self.viewer = viewer

    def update_mouse_status(self, pos):
        """Update status bar with pixel value at mouse position.

        Args:
            pos: Mouse position (QPoint) in label coordinates
        """
        shown = displayed(self.viewer.state)
        point = self.viewer.image_label.widget_to_image_point(pos)
        if not isinstance(shown, Loaded) or point is None:
            self.viewer.status_pixel.setText("")
            return
        ix, iy = point
        r, g, b, a = (int(v) for v in shown.array[iy, ix])
        self.viewer.status_pixel.setText(f"x={ix} y={iy} rgba=({r},{g},{b},{a})")

    def update_status(self):
        """Update title bar and status widgets from the viewer state."""
        state = self.viewer.state
        self.viewer.status_scale.setText(f"Scale: {self.viewer.scale:.1f}x")

        if isinstance(state, Loading):
            self.viewer.status_info.setText(f"Loading {Path(state.path).name}...")
        else:
            self.viewer.status_info.setText("")

        shown = displayed(state)
        if not isinstance(shown, Loaded):
            self.viewer.setWindowTitle("PNG Viewer")
            self.viewer.status_format.setText("")
            return

        header = shown.header
        filename = Path(shown.path).name
        try:
            size_str = format_file_size(Path(shown.path).stat().st_size)
        except OSError:
            size_str = ""
        if size_str:
            title = f"{filename} ({size_str}) - {header.width}x{header.height}"
        else:
            title = f"{filename} - {header.width}x{header.height}"
        self.viewer.setWindowTitle(title)
        self.viewer.status_format.setText(f"{header.color_type.name} {int(header.bit_depth)}-bit")
