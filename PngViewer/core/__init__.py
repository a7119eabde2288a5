"""UI-independent PNG decoding core.

- chunks: signature check, chunk reader and interpreter
- scanline: scanline assembly and filter reconstruction
- pixels: per-pixel unpacking and draw calls
- decoder: decode pipeline and inflate adapter
- surface: drawing surfaces (NumPy-backed)
- image_io: file loading, QImage conversion and metadata
"""

from .chunks import BitDepth, ColorType, Interlace, Header, Palette, iter_chunks
from .decoder import PngDecoder, decode_png, read_header
from .errors import PngError, StructuralError, PngValueError, StreamError
from .pixels import Color
from .surface import NumpySurface
from .image_io import numpy_to_qimage, load_png, is_image_file, get_image_metadata

__all__ = [
    "BitDepth",
    "ColorType",
    "Interlace",
    "Header",
    "Palette",
    "iter_chunks",
    "PngDecoder",
    "decode_png",
    "read_header",
    "PngError",
    "StructuralError",
    "PngValueError",
    "StreamError",
    "Color",
    "NumpySurface",
    "numpy_to_qimage",
    "load_png",
    "is_image_file",
    "get_image_metadata",
]
