"""Image display widget with zoom and coordinate conversion.

ImageLabel paints either the decoded image scaled by the current zoom
factor, or a large placeholder glyph while no image is loaded.
"""

from typing import Optional
from PySide6.QtWidgets import QLabel
from PySide6.QtGui import QPixmap, QPainter, QImage, QFont
from PySide6.QtCore import Qt, QPoint


class ImageLabel(QLabel):
    """Widget showing the current image or a placeholder.

    Attributes:
        viewer: Parent ImageViewer instance
        scale: Current zoom scale factor
        showing: Whether an image is currently displayed
        placeholder: Glyph painted when no image is shown
    """

    def __init__(self, viewer, parent=None):
        super().__init__(parent)
        self.viewer = viewer
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)

        self._orig_pixmap = QPixmap()
        self._qimage: Optional[QImage] = None
        self.scale = 1.0
        self.showing = False
        self.placeholder = ""

    def set_image(self, qimg: QImage, scale: float = 1.0):
        """Set the image to display with optional scaling.

        Args:
            qimg: QImage to display
            scale: Zoom scale factor (1.0 = original size)
        """
        self._qimage = qimg
        self.scale = scale
        if qimg.isNull():
            self.clear()
            return
        self._orig_pixmap = QPixmap.fromImage(qimg)
        disp_w = int(self._orig_pixmap.width() * self.scale)
        disp_h = int(self._orig_pixmap.height() * self.scale)
        self.setMinimumSize(0, 0)
        self.setFixedSize(max(1, disp_w), max(1, disp_h))
        self.showing = True
        self.update()

    def set_placeholder(self, glyph: str):
        """Show ``glyph`` centered instead of an image."""
        self.placeholder = glyph
        self.clear()

    def clear(self):
        """Clear the displayed image (the placeholder is painted instead)."""
        self._orig_pixmap = QPixmap()
        self._qimage = None
        self.showing = False
        # let the label fill the scroll area so the placeholder can be centered
        self.setMinimumSize(0, 0)
        self.setMaximumSize(16777215, 16777215)
        self.update()

    def paintEvent(self, event):
        """Paint the image, or the placeholder when there is none."""
        painter = QPainter(self)
        if not self._orig_pixmap.isNull():
            painter.save()
            painter.scale(self.scale, self.scale)
            painter.drawPixmap(0, 0, self._orig_pixmap)
            painter.restore()
        elif self.placeholder:
            font = QFont(painter.font())
            font.setPixelSize(max(12, int(100 + self.height() * 0.4)))
            painter.setFont(font)
            painter.drawText(self.rect(), Qt.AlignHCenter | Qt.AlignTop, self.placeholder)
        painter.end()

    def widget_to_image_point(self, pt: QPoint) -> Optional[tuple[int, int]]:
        """Convert widget coordinates to image pixel coordinates.

        Returns:
            (x, y) in image coordinates, or None if no image is shown or the
            point lies outside it.
        """
        if self._qimage is None or self._qimage.isNull() or self.scale <= 0:
            return None
        ix = int(pt.x() / self.scale)
        iy = int(pt.y() / self.scale)
        if 0 <= ix < self._qimage.width() and 0 <= iy < self._qimage.height():
            return (ix, iy)
        return None
