"""Background PNG decoding for the viewer.

Decoding runs on a QThreadPool worker so the UI thread stays responsive.
Each DecodeTask owns its own decoder; results are delivered back to the UI
thread through Qt signals.
"""

import logging
from pathlib import Path

from PySide6.QtCore import QObject, QRunnable, Signal

from ...core.errors import PngError
from ...core.image_io import load_png

logger = logging.getLogger(__name__)


class DecodeSignals(QObject):
    """Signals emitted by DecodeTask.

    finished(path, array, header): decode succeeded
    failed(path, message): decode failed; message is ready for display
    """

    finished = Signal(str, object, object)
    failed = Signal(str, str)


class DecodeTask(QRunnable):
    """Decode one PNG file off the UI thread."""

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.signals = DecodeSignals()

    def run(self):
        try:
            arr, header = load_png(self.path)
        except (OSError, PngError) as e:
            logger.info("Failed to load %s: %s", Path(self.path).name, e)
            self.signals.failed.emit(self.path, str(e))
            return
        except MemoryError:
            logger.warning("Out of memory while decoding %s", Path(self.path).name)
            self.signals.failed.emit(self.path, "not enough memory to decode this image")
            return
        self.signals.finished.emit(self.path, arr, header)
