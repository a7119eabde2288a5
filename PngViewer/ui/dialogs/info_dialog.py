"""Chunk info dialog for the current PNG file."""

from typing import Optional

from PySide6.QtWidgets import (
    QAbstractItemView,
    QDialog,
    QHeaderView,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)
from PySide6.QtGui import QGuiApplication

from ...core.image_io import get_image_metadata


def metadata_rows(metadata: dict) -> list[tuple[str, str]]:
    """Flatten a get_image_metadata() dict into (key, value) display rows."""
    rows = []
    for key, value in metadata.items():
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(v) for v in value)
        rows.append((key, str(value)))
    return rows


class InfoDialog(QDialog):
    """Modeless dialog with a copyable key/value table of PNG metadata.

    The parent viewer calls set_path() whenever the displayed image changes.
    """

    def __init__(self, parent=None, path: Optional[str] = None):
        super().__init__(parent)
        self.setWindowTitle("Chunk Info")
        self.resize(480, 360)
        self.last_metadata: list[tuple[str, str]] = []

        layout = QVBoxLayout(self)
        self.table = QTableWidget()
        self.table.setColumnCount(2)
        self.table.setHorizontalHeaderLabels(["Key", "Value"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionMode(QAbstractItemView.ExtendedSelection)
        layout.addWidget(self.table)

        self.copy_btn = QPushButton("Copy to clipboard")
        self.copy_btn.clicked.connect(self.copy_metadata_to_clipboard)
        layout.addWidget(self.copy_btn)

        self.set_path(path)

    def set_path(self, path: Optional[str]):
        if path is None:
            self.last_metadata = []
            self._fill([("Info", "No image loaded")])
            return
        self.last_metadata = metadata_rows(get_image_metadata(path))
        self._fill(self.last_metadata)

    def _fill(self, rows):
        self.table.setRowCount(len(rows))
        for i, (key, value) in enumerate(rows):
            self.table.setItem(i, 0, QTableWidgetItem(key))
            self.table.setItem(i, 1, QTableWidgetItem(value))

    def copy_metadata_to_clipboard(self):
        """Copy metadata as comma-separated text to clipboard."""
        if not self.last_metadata:
            QMessageBox.information(self, "Copy", "No metadata to copy.")
            return
        lines = ["Key,Value"]
        for key, value in self.last_metadata:
            lines.append(f"{key},{value}")
        QGuiApplication.clipboard().setText("\n".join(lines))
