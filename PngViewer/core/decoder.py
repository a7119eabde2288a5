"""PNG decoding pipeline.

Control flow for one decode:

    signature -> chunk loop -> IHDR sets geometry and pixel format
              -> IDAT bodies are inflated as one continuous stream
              -> inflated bytes fill scanline records
              -> each record is defiltered and its pixels drawn
              -> IEND ends the loop

The first error anywhere aborts the decode; nothing is retried and no
partial result is returned. All working state (scanline buffers, palette,
inflate stream, row counter) belongs to a single ``decode`` call, so one
``PngDecoder`` per thread can decode images in parallel.
"""

import logging
import zlib
from typing import Callable, Optional, Tuple

from .chunks import (
    End,
    Header,
    ImageData,
    Interlace,
    Palette,
    Unknown,
    ColorType,
    check_signature,
    interpret_chunk,
    iter_chunks,
    read_chunk,
)
from .constants import PNG_SIGNATURE
from .errors import (
    DecompressionError,
    DuplicateHeader,
    DuplicatePalette,
    IncompleteImageData,
    MisplacedPalette,
    MissingCritical,
    PngError,
    UnsupportedInterlace,
    hex_excerpt,
)
from .pixels import PixelDecoder
from .scanline import ScanlineAssembler, bits_per_pixel, bytes_per_pixel, scanline_stride
from .surface import DrawingSurface, NumpySurface

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[Header], DrawingSurface]


class InflateStream:
    """Push/pull wrapper around a zlib decompression object.

    Compressed IDAT bodies are fed in file order with ``feed``; each call
    returns whatever decompressed bytes became available. This is the one
    place where image data is copied out of the source buffer.
    """

    def __init__(self):
        self._zlib = zlib.decompressobj()
        self.fed = 0

    @property
    def eof(self) -> bool:
        """True once the end of the zlib stream has been reached."""
        return self._zlib.eof

    def feed(self, data) -> bytes:
        self.fed += len(data)
        try:
            return self._zlib.decompress(data)
        except zlib.error as e:
            raise DecompressionError(str(e)) from e

    def finish(self) -> bytes:
        try:
            out = self._zlib.flush()
        except zlib.error as e:
            raise DecompressionError(str(e)) from e
        if self._zlib.unused_data:
            logger.warning("%d bytes after end of compressed image data ignored", len(self._zlib.unused_data))
        return out


class _DecodeRun:
    """State of one decode, created when the IHDR chunk has been read.

    The pixel format is validated before the surface is requested, so an
    invalid header never causes a surface to be allocated.
    """

    def __init__(self, surface: Optional[DrawingSurface], header: Header, surface_factory: SurfaceFactory):
        self.header = header
        bpp = bits_per_pixel(header.bit_depth, header.color_type)
        if header.interlace == Interlace.ADAM7:
            raise UnsupportedInterlace("Adam7")

        self.surface = surface if surface is not None else surface_factory(header)
        stride = scanline_stride(header.width, bpp)
        self.pixels = PixelDecoder(self.surface, header.width, header.bit_depth, header.color_type)
        self.assembler = ScanlineAssembler(stride, bytes_per_pixel(bpp), self.pixels.decode_row)
        self.inflate = InflateStream()
        # scanline bytes still expected; anything past this is surplus
        self.remaining = stride * header.height
        self.surplus = 0
        self.seen_image_data = False

        logger.debug("width: %d height: %d bit_depth: %d", header.width, header.height, header.bit_depth)
        logger.debug("color_type: %s interlace: %s", header.color_type.name, header.interlace.name)

    def set_palette(self, palette: Palette):
        if self.seen_image_data:
            raise MisplacedPalette()
        if self.pixels.palette is not None:
            raise DuplicatePalette()
        self.pixels.palette = palette

    def image_data(self, chunk: ImageData):
        if not self.seen_image_data:
            if self.header.color_type == ColorType.PALETTE and self.pixels.palette is None:
                raise MissingCritical("PLTE")
            self.seen_image_data = True
        self._push(self.inflate.feed(chunk.data))

    def end(self):
        if not self.seen_image_data:
            raise MissingCritical("IDAT")
        self._push(self.inflate.finish())
        if not self.inflate.eof:
            raise DecompressionError("compressed image data ended prematurely")
        if self.assembler.row < self.header.height:
            raise IncompleteImageData(self.assembler.row, self.header.height)
        if self.surplus:
            logger.warning("Not all image data has been used: %d surplus bytes discarded.", self.surplus)
        logger.debug("inflated %d compressed bytes into %d scanlines", self.inflate.fed, self.assembler.row)

    def _push(self, data: bytes):
        if len(data) > self.remaining:
            self.surplus += len(data) - self.remaining
            data = data[: self.remaining]
        self.remaining -= len(data)
        if data:
            self.assembler.write(data)


class PngDecoder:
    """Decode PNG streams onto a drawing surface.

    When no surface is given, one is created per decode by
    ``surface_factory`` once the header has been validated.

    Example:
        >>> surface = NumpySurface(293, 165)
        >>> header = PngDecoder(surface).decode(png_bytes)
        >>> rgba = surface.to_uint8()
    """

    def __init__(
        self,
        surface: Optional[DrawingSurface] = None,
        surface_factory: SurfaceFactory = NumpySurface.for_header,
    ):
        self.surface = surface
        self.surface_factory = surface_factory

    def decode(self, data) -> Header:
        """Decode a complete PNG byte stream.

        Args:
            data: Bytes-like object holding the whole file.

        Returns:
            The image header.

        Raises:
            StructuralError: Bad signature, malformed or misordered chunks.
            PngValueError: Invalid field values, filter types or palette indexes.
            StreamError: The compressed image data is broken.
        """
        return self._run(data).header

    def _run(self, data) -> _DecodeRun:
        run: Optional[_DecodeRun] = None
        chunks = iter_chunks(data)
        try:
            for offset, chunk_header, chunk in chunks:
                try:
                    if run is None:
                        if not isinstance(chunk, Header):
                            raise MissingCritical("IHDR")
                        run = _DecodeRun(self.surface, chunk, self.surface_factory)
                        continue

                    match chunk:
                        case Header():
                            raise DuplicateHeader()
                        case Palette():
                            run.set_palette(chunk)
                        case ImageData():
                            run.image_data(chunk)
                        case End():
                            run.end()
                        case Unknown():
                            pass
                except PngError as e:
                    if e.offset is None:
                        e.offset = offset
                        e.excerpt = hex_excerpt(data, offset)
                    raise
        except MissingCritical as e:
            if run is None and e.name == "IEND":
                raise MissingCritical("IHDR") from None
            raise
        return run


def read_header(data) -> Header:
    """Check the signature and decode the IHDR chunk that must follow it."""
    view = memoryview(data).cast("B")
    check_signature(view)
    offset = len(PNG_SIGNATURE)
    if len(view) == offset:
        raise MissingCritical("IHDR")
    chunk_header, body, _ = read_chunk(view, offset)
    try:
        chunk = interpret_chunk(chunk_header, body)
    except PngError as e:
        if e.offset is None:
            e.offset = offset
            e.excerpt = hex_excerpt(view, offset)
        raise
    if not isinstance(chunk, Header):
        raise MissingCritical.at(view, offset, "IHDR")
    return chunk


def decode_png(data, surface: Optional[DrawingSurface] = None) -> Tuple[Header, DrawingSurface]:
    """Decode ``data`` and return ``(header, surface)``.

    When ``surface`` is None a ``NumpySurface`` sized from the header is
    created after the header has been validated.
    """
    run = PngDecoder(surface)._run(data)
    return run.header, run.surface
