"""Help dialog showing keyboard shortcuts."""

from PySide6.QtWidgets import QDialog, QTextEdit, QVBoxLayout


class HelpDialog(QDialog):
    """Dialog showing keyboard shortcuts and usage help.

    Displays a read-only text widget with all available keyboard
    shortcuts.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Help / Keyboard Shortcuts")
        self.resize(520, 400)

        text = QTextEdit(self)
        text.setReadOnly(True)

        content = (
            "PNG Viewer Help\n"
            "================================\n\n"
            "[Basics]\n"
            "  Ctrl+O : Load a PNG file\n"
            "  Ctrl+W : Close the current image\n"
            "  + / - / Ctrl+Wheel : Zoom in / zoom out (1x to 4x)\n"
            "  f      : Toggle 1x / 4x\n"
            "  I      : Chunk info for the current file\n\n"
            "[Notes]\n"
            "  - Files can also be dropped onto the window.\n"
            "  - Interlaced (Adam7) images are not supported.\n"
        )
        text.setPlainText(content)

        layout = QVBoxLayout(self)
        layout.addWidget(text)
