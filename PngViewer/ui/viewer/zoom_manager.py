"""Zoom and viewport management for ImageViewer.

Zoom moves through fixed steps (1x to 4x by 0.5). This module handles:
- Stepping zoom in/out
- Toggling between 1x and 4x
- Keeping the viewport center fixed while zooming
"""

from ...core.constants import ZOOM_STEPS, MIN_ZOOM_SCALE, MAX_ZOOM_SCALE


def step_zoom(scale: float, direction: int) -> float:
    """Return the zoom step next to ``scale`` in ``direction`` (+1 in, -1 out).

    Scales between steps snap to the nearest step in that direction; the
    result is clamped to the first/last step.
    """
    if direction > 0:
        for step in ZOOM_STEPS:
            if step > scale:
                return step
        return MAX_ZOOM_SCALE
    for step in reversed(ZOOM_STEPS):
        if step < scale:
            return step
    return MIN_ZOOM_SCALE


def toggle_zoom(scale: float) -> float:
    """4x from any other step, 1x from 4x."""
    return MIN_ZOOM_SCALE if scale >= MAX_ZOOM_SCALE else MAX_ZOOM_SCALE


class ZoomManager:
    """Manages zoom and viewport operations for the image viewer."""

    def __init__(self, viewer):
        """Initialize zoom manager.

        Args:
            viewer: ImageViewer instance
        """
        self.viewer = viewer

    def zoom_in(self) -> bool:
        """Step zoom in. Returns False if already at the largest step."""
        return self._apply(step_zoom(self.viewer.scale, 1))

    def zoom_out(self) -> bool:
        """Step zoom out. Returns False if already at the smallest step."""
        return self._apply(step_zoom(self.viewer.scale, -1))

    def zoom_toggle(self):
        self._apply(toggle_zoom(self.viewer.scale))

    def _apply(self, scale: float) -> bool:
        if scale == self.viewer.scale:
            return False
        self.set_zoom(scale)
        return True

    def calculate_viewport_center_in_image_coords(self) -> tuple[float, float]:
        """Calculate current viewport center in image coordinates.

        Returns:
            (img_x, img_y) tuple of center point in image coordinates
        """
        scroll_area = self.viewer.scroll_area
        center_x = scroll_area.horizontalScrollBar().value() + scroll_area.viewport().width() / 2.0
        center_y = scroll_area.verticalScrollBar().value() + scroll_area.viewport().height() / 2.0
        scale = self.viewer.scale if self.viewer.scale > 0 else 1.0
        return (center_x / scale, center_y / scale)

    def set_zoom(self, scale: float):
        """Set zoom scale while maintaining the viewport center position.

        Args:
            scale: New zoom scale factor (1.0 = original size)
        """
        if not self.viewer.has_image():
            self.viewer.scale = scale
            self.viewer.scale_changed.emit()
            return

        img_x, img_y = self.calculate_viewport_center_in_image_coords()
        self.viewer.scale = scale
        self.viewer.refresh_display()

        # keep the same image point at the viewport center
        scroll_area = self.viewer.scroll_area
        half_w = scroll_area.viewport().width() / 2.0
        half_h = scroll_area.viewport().height() / 2.0
        scroll_area.horizontalScrollBar().setValue(int(img_x * scale - half_w))
        scroll_area.verticalScrollBar().setValue(int(img_y * scale - half_h))

        self.viewer.scale_changed.emit()
