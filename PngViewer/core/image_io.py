"""Image I/O utilities for loading and converting PNG images.

This module provides functions for:
- Decoding PNG files into NumPy arrays
- Converting NumPy arrays to QImage for Qt display
- Validating image file extensions
- Extracting PNG header and chunk metadata

Loading raises the decoder's ``PngError`` subclasses unchanged so callers
can report exactly what went wrong. Apart from ``numpy_to_qimage`` nothing
here depends on Qt.
"""

from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PySide6.QtGui import QImage

from .chunks import End, Header, ImageData, Palette, iter_chunks
from .decoder import decode_png
from .errors import PngError


def format_file_size(size: int) -> str:
    """Return a human readable file size (B, KB, MB, GB)."""
    if size < 1024:
        return f"{size} B"
    elif size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    elif size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    return f"{size / (1024 * 1024 * 1024):.2f} GB"


def numpy_to_qimage(arr: np.ndarray) -> QImage:
    """Convert a NumPy image array to a Qt QImage suitable for display.

    The returned QImage is a copy detached from the NumPy buffer, so the
    caller does not need to keep the array alive.

    Supported input shapes:
      - (H, W) -> 8-bit grayscale
      - (H, W, 3) -> RGB (8-bit per channel)
      - (H, W, 4) -> RGBA (8-bit per channel)

    Args:
        arr: Numeric image array. Float arrays are taken as [0, 1] and
             scaled; values outside [0, 255] are clipped.

    Returns:
        QImage: A freshly allocated QImage. If ``arr`` is None an empty
        QImage is returned.

    Raises:
        ValueError: If ``arr`` has an unsupported shape.
    """
    if arr is None:
        return QImage()
    a = np.asarray(arr)
    if np.issubdtype(a.dtype, np.floating):
        a = a * 255.0
    disp = np.ascontiguousarray(np.clip(a, 0, 255).astype(np.uint8))
    if disp.ndim == 2:
        h, w = disp.shape
        return QImage(disp.data, w, h, w, QImage.Format_Grayscale8).copy()
    if disp.ndim == 3 and disp.shape[2] == 3:
        h, w, _ = disp.shape
        return QImage(disp.data, w, h, 3 * w, QImage.Format_RGB888).copy()
    if disp.ndim == 3 and disp.shape[2] == 4:
        h, w, _ = disp.shape
        return QImage(disp.data, w, h, 4 * w, QImage.Format_RGBA8888).copy()
    raise ValueError(f"Unsupported array shape: {a.shape}")


def load_png(path: Union[str, Path]) -> Tuple[np.ndarray, Header]:
    """Decode a PNG file into an RGBA array.

    Args:
        path: Path to the PNG file.

    Returns:
        (array, header): ``array`` is an (H, W, 4) uint8 RGBA image.

    Raises:
        OSError: If the file cannot be read.
        PngError: If the file is not a decodable PNG.
    """
    data = Path(path).read_bytes()
    header, surface = decode_png(data)
    return surface.to_uint8(), header


def is_image_file(path: Union[str, Path]) -> bool:
    """Return True if the given path has a ``.png`` suffix (case-insensitive).

    This does not open the file.
    """
    return Path(path).suffix.lower() == ".png"


def get_image_metadata(path: Union[str, Path]) -> dict:
    """Return a dictionary of PNG metadata read from the chunk stream.

    Only the chunk framing and the header are interpreted; image data is not
    decompressed.

    Returns:
        dict with ``Filepath``, ``FileSize``, ``Format`` and, when the file
        parses, ``Size``, ``BitDepth``, ``ColorType``, ``Interlace``,
        ``PaletteEntries``, ``ImageDataChunks`` and ``Chunks`` (tag names in
        file order). Parse failures are recorded under ``Error``.

    Example:
        >>> md = get_image_metadata("photo.png")
        >>> print(md["Size"], md["ColorType"])
    """
    path_obj = Path(path)
    metadata = {"Filepath": str(path_obj.resolve()), "Format": "PNG"}
    try:
        data = path_obj.read_bytes()
    except OSError as e:
        metadata["Error"] = str(e)
        return metadata
    metadata["FileSize"] = format_file_size(len(data))

    names = []
    image_chunks = 0
    try:
        for _, chunk_header, chunk in iter_chunks(data):
            names.append(chunk_header.name)
            if isinstance(chunk, Header):
                metadata["Size"] = f"{chunk.width} x {chunk.height}"
                metadata["BitDepth"] = int(chunk.bit_depth)
                metadata["ColorType"] = chunk.color_type.name
                metadata["Interlace"] = chunk.interlace.name
            elif isinstance(chunk, Palette):
                metadata["PaletteEntries"] = len(chunk)
            elif isinstance(chunk, ImageData):
                image_chunks += 1
            elif isinstance(chunk, End):
                break
    except PngError as e:
        metadata["Error"] = str(e)
    metadata["ImageDataChunks"] = image_chunks
    metadata["Chunks"] = names
    return metadata
