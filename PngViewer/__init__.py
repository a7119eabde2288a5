"""PngViewer - A PNG decoder with a small Qt viewer.

This package decodes non-interlaced PNG files and shows them in a
Qt-based window.

Decoder:
    - Signature check and chunk framing (IHDR, PLTE, IDAT, IEND)
    - Streaming zlib inflate across IDAT chunks
    - Scanline filter reconstruction (None, Sub, Up, Average, Paeth)
    - Every valid bit depth / color type combination, palette included
    - Pixels drawn onto a surface (NumPy-backed by default)

UI Components:
    - Main viewer window (ImageViewer)
    - Chunk info dialog (InfoDialog)
    - Help dialog with keyboard shortcuts (HelpDialog)

Package Structure:
    - core/: UI-independent decoder and image I/O
    - ui/: UI components (viewer, widgets, dialogs)
    - chunk_dump: command line chunk lister

Quick Start:
    from PngViewer import decode_png
    header, surface = decode_png(open("image.png", "rb").read())

Dependencies:
    - PySide6: Qt for Python
    - numpy: Array operations
"""

from .app import main
from .ui import ImageViewer, HelpDialog, InfoDialog
from .core import (
    PngError,
    decode_png,
    read_header,
    load_png,
    numpy_to_qimage,
    is_image_file,
    get_image_metadata,
)

__version__ = "0.1.0"
__all__ = [
    "main",
    "ImageViewer",
    "HelpDialog",
    "InfoDialog",
    "PngError",
    "decode_png",
    "read_header",
    "load_png",
    "numpy_to_qimage",
    "is_image_file",
    "get_image_metadata",
]
