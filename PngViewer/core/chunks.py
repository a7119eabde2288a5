"""PNG signature check, chunk reader and chunk interpreter.

A PNG stream is the 8-byte signature followed by chunks laid out as::

    length (u32 BE) | type (4 ASCII letters) | body (length bytes) | crc (4 bytes)

``read_chunk`` splits one chunk off a buffer without copying its body (bodies
are ``memoryview`` slices of the source buffer). ``interpret_chunk`` turns a
body into a typed value, and ``iter_chunks`` walks a whole stream.

The CRC is consumed but never verified.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Tuple, Union

from .constants import (
    CHUNK_CRC_SIZE,
    CHUNK_LENGTH_SIZE,
    CHUNK_TYPE_SIZE,
    HEADER_BODY_SIZE,
    MAX_PALETTE_BYTES,
    PNG_SIGNATURE,
)
from .errors import (
    BadSignature,
    InvalidBitDepth,
    InvalidColorType,
    InvalidCompressionMethod,
    InvalidEnd,
    InvalidFilterMethod,
    InvalidInterlace,
    InvalidPaletteSize,
    MalformedChunk,
    MissingCritical,
    PaletteIndexOutOfRange,
    PngError,
    TrailingData,
    UnknownCriticalChunk,
    hex_excerpt,
)

logger = logging.getLogger(__name__)


class BitDepth(IntEnum):
    ONE = 1
    TWO = 2
    FOUR = 4
    EIGHT = 8
    SIXTEEN = 16


class ColorType(IntEnum):
    GRAYSCALE = 0
    RGB = 2
    PALETTE = 3
    GRAYSCALE_ALPHA = 4
    RGB_ALPHA = 6


class Interlace(IntEnum):
    NONE = 0
    ADAM7 = 1


@dataclass(frozen=True)
class ChunkHeader:
    """Length and type tag of one chunk."""

    length: int
    type_tag: bytes

    @property
    def critical(self) -> bool:
        """True if the first letter of the type tag is uppercase."""
        return 0x41 <= self.type_tag[0] <= 0x5A

    @property
    def name(self) -> str:
        return self.type_tag.decode("ascii")


@dataclass(frozen=True)
class Header:
    """Decoded IHDR chunk."""

    width: int
    height: int
    bit_depth: BitDepth
    color_type: ColorType
    interlace: Interlace


@dataclass(frozen=True)
class Palette:
    """Decoded PLTE chunk: an ordered tuple of (r, g, b) byte triples."""

    entries: Tuple[Tuple[int, int, int], ...]

    def __len__(self):
        return len(self.entries)

    def color(self, index: int) -> Tuple[int, int, int]:
        """Return the RGB triple at ``index``.

        Raises:
            PaletteIndexOutOfRange: If ``index`` is not a valid entry.
        """
        if index >= len(self.entries):
            raise PaletteIndexOutOfRange(index, len(self.entries))
        return self.entries[index]


@dataclass(frozen=True)
class ImageData:
    """IDAT chunk. ``data`` is a borrowed view of the compressed bytes."""

    data: memoryview


@dataclass(frozen=True)
class End:
    """IEND chunk."""


@dataclass(frozen=True)
class Unknown:
    """Ancillary chunk the decoder does not interpret."""

    type_tag: bytes


Chunk = Union[Header, Palette, ImageData, End, Unknown]


def check_signature(data) -> memoryview:
    """Validate the 8-byte PNG signature.

    Args:
        data: Bytes-like object holding the whole PNG stream.

    Returns:
        memoryview of the bytes that follow the signature.

    Raises:
        BadSignature: If the signature is missing, wrong or truncated.
    """
    view = memoryview(data).cast("B")
    if bytes(view[: len(PNG_SIGNATURE)]) != PNG_SIGNATURE:
        raise BadSignature.at(view, 0)
    return view[len(PNG_SIGNATURE) :]


def _is_ascii_letter(b: int) -> bool:
    return 0x41 <= b <= 0x5A or 0x61 <= b <= 0x7A


def read_chunk(view: memoryview, offset: int = 0) -> Tuple[ChunkHeader, memoryview, int]:
    """Read the chunk starting at ``view[offset]``.

    Returns:
        (header, body, next_offset). ``body`` is a slice of ``view``.

    Raises:
        MalformedChunk: On truncated framing or a type tag that is not four
            ASCII letters.
    """
    end = len(view)
    pos = offset
    if end - pos < CHUNK_LENGTH_SIZE + CHUNK_TYPE_SIZE:
        raise MalformedChunk.at(view, offset, "truncated chunk header")
    length = int.from_bytes(view[pos : pos + CHUNK_LENGTH_SIZE], "big")
    pos += CHUNK_LENGTH_SIZE

    type_tag = bytes(view[pos : pos + CHUNK_TYPE_SIZE])
    if not all(_is_ascii_letter(b) for b in type_tag):
        raise MalformedChunk.at(view, pos, f"invalid chunk type {type_tag!r}")
    pos += CHUNK_TYPE_SIZE

    if length > end - pos:
        raise MalformedChunk.at(
            view, offset, f"{type_tag.decode('ascii')} declares {length} bytes but only {end - pos} remain"
        )
    body = view[pos : pos + length]
    pos += length

    # CRC is consumed, not verified
    if end - pos < CHUNK_CRC_SIZE:
        raise MalformedChunk.at(view, pos, f"{type_tag.decode('ascii')} is missing its CRC")
    pos += CHUNK_CRC_SIZE

    return ChunkHeader(length, type_tag), body, pos


def parse_header(body: memoryview) -> Header:
    """Decode a 13-byte IHDR body."""
    if len(body) != HEADER_BODY_SIZE:
        raise MalformedChunk(f"IHDR body must be {HEADER_BODY_SIZE} bytes, got {len(body)}")
    width = int.from_bytes(body[0:4], "big")
    height = int.from_bytes(body[4:8], "big")
    depth, color, compression, filter_method, interlace = body[8:13]

    try:
        bit_depth = BitDepth(depth)
    except ValueError:
        raise InvalidBitDepth(depth) from None
    try:
        color_type = ColorType(color)
    except ValueError:
        raise InvalidColorType(color) from None
    if compression != 0:
        raise InvalidCompressionMethod(compression)
    if filter_method != 0:
        raise InvalidFilterMethod(filter_method)
    try:
        interlace_method = Interlace(interlace)
    except ValueError:
        raise InvalidInterlace(interlace) from None

    return Header(width, height, bit_depth, color_type, interlace_method)


def parse_palette(body: memoryview) -> Palette:
    """Decode a PLTE body into RGB triples."""
    size = len(body)
    if size == 0 or size % 3 or size > MAX_PALETTE_BYTES:
        raise InvalidPaletteSize(size)
    raw = bytes(body)
    return Palette(tuple((raw[i], raw[i + 1], raw[i + 2]) for i in range(0, size, 3)))


def interpret_chunk(header: ChunkHeader, body: memoryview) -> Chunk:
    """Turn a chunk body into its typed value.

    Dispatch is on the case-folded tag; the critical flag comes from the
    original casing.

    Raises:
        UnknownCriticalChunk: For unrecognized tags with an uppercase first letter.
        PngError: Subclasses for invalid IHDR/PLTE/IEND contents.
    """
    tag = header.type_tag.upper()
    if tag == b"IHDR":
        return parse_header(body)
    if tag == b"PLTE":
        return parse_palette(body)
    if tag == b"IDAT":
        return ImageData(body)
    if tag == b"IEND":
        if len(body):
            raise InvalidEnd(len(body))
        return End()
    if header.critical:
        raise UnknownCriticalChunk(tag.decode("ascii"))
    logger.debug("found unknown chunk: %s", header.name)
    return Unknown(header.type_tag)


def iter_chunks(data) -> Iterator[Tuple[int, ChunkHeader, Chunk]]:
    """Iterate over all chunks of a PNG stream.

    The signature is checked first. Yields ``(offset, header, chunk)`` for
    every chunk up to and including IEND; ``offset`` is relative to the start
    of the stream.

    Raises:
        BadSignature: Before anything is yielded, if the signature is wrong.
        TrailingData: If bytes remain after IEND.
        MissingCritical: If the input runs out before IEND.
    """
    view = memoryview(data).cast("B")
    check_signature(view)
    offset = len(PNG_SIGNATURE)
    while offset < len(view):
        header, body, next_offset = read_chunk(view, offset)
        try:
            chunk = interpret_chunk(header, body)
        except PngError as e:
            # attach the chunk position to interpreter errors
            if e.offset is None:
                e.offset = offset
                e.excerpt = hex_excerpt(view, offset)
            raise
        yield offset, header, chunk
        offset = next_offset
        if isinstance(chunk, End):
            if offset < len(view):
                raise TrailingData.at(view, offset, len(view) - offset)
            return
    raise MissingCritical("IEND")
