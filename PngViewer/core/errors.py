"""Error taxonomy for the PNG decoder.

Every failure raised while decoding derives from ``PngError`` and falls into
one of three categories:

- ``StructuralError``: the byte stream is not laid out like a PNG
  (signature, chunk framing, chunk ordering).
- ``PngValueError``: a field holds a value outside its allowed set
  (enumerants, palette size, filter type, palette index).
- ``StreamError``: the compressed image data could not be inflated.

Errors carry the byte offset where the problem was found and a short hex
excerpt of the nearby bytes so a failure can be diagnosed from its message.
"""

from typing import Optional

from .constants import ERROR_EXCERPT_ROW, ERROR_EXCERPT_SIZE


def hex_excerpt(data, offset: int = 0, size: int = ERROR_EXCERPT_SIZE) -> str:
    """Format up to ``size`` bytes of ``data`` starting at ``offset`` as a hex dump.

    Each row shows the absolute offset, the bytes in hex and their printable
    ASCII form, ``ERROR_EXCERPT_ROW`` bytes per row.

    Example:
        >>> print(hex_excerpt(b"\\x89PNG\\r\\n\\x1a\\n"))
        00000000  89 50 4e 47 0d 0a 1a 0a  .PNG....
    """
    chunk = bytes(data[offset : offset + size])
    rows = []
    for start in range(0, len(chunk), ERROR_EXCERPT_ROW):
        row = chunk[start : start + ERROR_EXCERPT_ROW]
        hex_part = " ".join(f"{b:02x}" for b in row)
        text_part = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in row)
        rows.append(f"{offset + start:08x}  {hex_part:<{ERROR_EXCERPT_ROW * 3 - 1}}  {text_part}")
    return "\n".join(rows)


class PngError(Exception):
    """Base class of all decoding failures.

    Attributes:
        offset: Byte offset into the PNG stream where the error was detected,
                or None when the failure is not tied to a position.
        excerpt: Hex dump of the bytes around ``offset`` (may be empty).
    """

    def __init__(self, message: str, offset: Optional[int] = None, excerpt: str = ""):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.excerpt = excerpt

    @classmethod
    def at(cls, data, offset: int, *args):
        """Build the error for ``data[offset:]`` with a hex excerpt attached."""
        err = cls(*args)
        err.offset = offset
        err.excerpt = hex_excerpt(data, offset)
        return err

    def __str__(self):
        text = self.message
        if self.offset is not None:
            text += f" (at byte {self.offset})"
        if self.excerpt:
            text += "\n" + self.excerpt
        return text


class StructuralError(PngError):
    """The stream does not follow PNG framing or chunk ordering rules."""


class PngValueError(PngError, ValueError):
    """A decoded field holds a value outside its allowed set."""


class StreamError(PngError):
    """The compressed image data stream is broken."""


# Structural errors


class BadSignature(StructuralError):
    def __init__(self):
        super().__init__("missing or corrupt PNG signature")


class MalformedChunk(StructuralError):
    def __init__(self, reason: str):
        super().__init__(f"malformed chunk: {reason}")
        self.reason = reason


class UnknownCriticalChunk(StructuralError):
    def __init__(self, name: str):
        super().__init__(f"unknown critical chunk type found: {name}")
        self.name = name


class DuplicateHeader(StructuralError):
    def __init__(self):
        super().__init__("duplicate IHDR chunk found")


class DuplicatePalette(StructuralError):
    def __init__(self):
        super().__init__("duplicate PLTE chunk found")


class MisplacedPalette(StructuralError):
    def __init__(self):
        super().__init__("PLTE chunk found after IDAT")


class InvalidEnd(StructuralError):
    def __init__(self, length: int):
        super().__init__(f"invalid IEND chunk found: body has {length} bytes")
        self.length = length


class TrailingData(StructuralError):
    def __init__(self, remaining: int):
        super().__init__(f"{remaining} bytes found after IEND chunk")
        self.remaining = remaining


class MissingCritical(StructuralError):
    def __init__(self, name: str):
        super().__init__(f"critical chunk not found: {name}")
        self.name = name


class IncompleteImageData(StructuralError):
    def __init__(self, rows: int, height: int):
        super().__init__(f"image data ended after {rows} of {height} scanlines")
        self.rows = rows
        self.height = height


# Value errors


class InvalidBitDepth(PngValueError):
    def __init__(self, value: int):
        super().__init__(f"invalid bit depth: {value}")
        self.value = value


class InvalidColorType(PngValueError):
    def __init__(self, value: int):
        super().__init__(f"invalid color type: {value}")
        self.value = value


class InvalidInterlace(PngValueError):
    def __init__(self, value: int):
        super().__init__(f"invalid interlace method: {value}")
        self.value = value


class InvalidCompressionMethod(PngValueError):
    def __init__(self, value: int):
        super().__init__(f"invalid compression method: {value}")
        self.value = value


class InvalidFilterMethod(PngValueError):
    def __init__(self, value: int):
        super().__init__(f"invalid filter method: {value}")
        self.value = value


class InvalidBitColorCombo(PngValueError):
    def __init__(self, bit_depth: int, color_type: int):
        super().__init__(f"invalid bit depth ({bit_depth}) and color type ({color_type}) combination")
        self.bit_depth = bit_depth
        self.color_type = color_type


class InvalidPaletteSize(PngValueError):
    def __init__(self, size: int):
        super().__init__(f"invalid palette size: {size}")
        self.size = size


class InvalidFilterType(PngValueError):
    def __init__(self, value: int, row: Optional[int] = None):
        message = f"invalid filter type: {value}"
        if row is not None:
            message += f" on scanline {row}"
        super().__init__(message)
        self.value = value
        self.row = row


class PaletteIndexOutOfRange(PngValueError):
    def __init__(self, index: int, size: int):
        super().__init__(f"palette index {index} out of range for {size} entries")
        self.index = index
        self.size = size


class UnsupportedInterlace(PngValueError):
    def __init__(self, name: str):
        super().__init__(f"interlace method {name} is not supported")
        self.name = name


# Stream errors


class DecompressionError(StreamError):
    def __init__(self, reason: str):
        super().__init__(f"image data decompression failed: {reason}")
        self.reason = reason
