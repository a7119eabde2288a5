"""Scanline assembly and filter reconstruction.

Decompressed image data is a sequence of scanline records. Each record is
``stride`` bytes long: a filter-type byte followed by the packed samples of
one row. The filter of a row is reversed using the previously reconstructed
row, so rows must be processed strictly in order.

``ScanlineAssembler`` owns two row buffers, ``current`` and ``previous``.
Once ``current`` holds a complete record it is defiltered in place, handed
to the row callback, and the two buffers are swapped.
"""

from enum import IntEnum
from typing import Callable, Dict, Optional, Tuple

from .chunks import BitDepth, ColorType
from .errors import InvalidBitColorCombo, InvalidFilterType


class FilterType(IntEnum):
    NONE = 0
    SUB = 1
    UP = 2
    AVERAGE = 3
    PAETH = 4


# (bit depth, color type) -> bits per pixel, for every valid combination
BITS_PER_PIXEL: Dict[Tuple[BitDepth, ColorType], int] = {
    (BitDepth.ONE, ColorType.GRAYSCALE): 1,
    (BitDepth.ONE, ColorType.PALETTE): 1,
    (BitDepth.TWO, ColorType.GRAYSCALE): 2,
    (BitDepth.TWO, ColorType.PALETTE): 2,
    (BitDepth.FOUR, ColorType.GRAYSCALE): 4,
    (BitDepth.FOUR, ColorType.PALETTE): 4,
    (BitDepth.EIGHT, ColorType.GRAYSCALE): 8,
    (BitDepth.EIGHT, ColorType.PALETTE): 8,
    (BitDepth.EIGHT, ColorType.GRAYSCALE_ALPHA): 16,
    (BitDepth.SIXTEEN, ColorType.GRAYSCALE): 16,
    (BitDepth.EIGHT, ColorType.RGB): 24,
    (BitDepth.EIGHT, ColorType.RGB_ALPHA): 32,
    (BitDepth.SIXTEEN, ColorType.GRAYSCALE_ALPHA): 32,
    (BitDepth.SIXTEEN, ColorType.RGB): 48,
    (BitDepth.SIXTEEN, ColorType.RGB_ALPHA): 64,
}


def bits_per_pixel(bit_depth: int, color_type: int) -> int:
    """Return the number of bits one pixel occupies.

    Raises:
        InvalidBitColorCombo: If the pair is not one of the valid combinations.
    """
    try:
        return BITS_PER_PIXEL[(bit_depth, color_type)]
    except KeyError:
        raise InvalidBitColorCombo(int(bit_depth), int(color_type)) from None


def bytes_per_pixel(bpp: int) -> int:
    """Filter distance in bytes: ceil(bpp / 8)."""
    return (bpp + 7) // 8


def scanline_stride(width: int, bpp: int) -> int:
    """Length of one scanline record, filter byte included."""
    return (width * bpp + 7) // 8 + 1


def paeth_predictor(left: int, up: int, up_left: int) -> int:
    """Paeth predictor. Arithmetic is done on plain ints (p may be <0 or >255)."""
    p = left + up - up_left
    d_left = abs(p - left)
    d_up = abs(p - up)
    d_up_left = abs(p - up_left)
    if d_left <= d_up and d_left <= d_up_left:
        return left
    if d_up <= d_up_left:
        return up
    return up_left


def unfilter_scanline(line: bytearray, previous: bytearray, bpp: int, row: Optional[int] = None) -> FilterType:
    """Reverse the filter of one scanline record in place.

    Args:
        line: Complete record; ``line[0]`` is the filter type. On return
              ``line[1:]`` holds the reconstructed samples and ``line[0]`` is 0.
        previous: Reconstructed record of the row above, or an empty buffer
                  for the first row.
        bpp: Bytes per pixel (filter distance).
        row: Scanline index, only used in error messages.

    Returns:
        The filter type that was reversed.

    Raises:
        InvalidFilterType: If ``line[0]`` is not 0..4.
    """
    try:
        filter_type = FilterType(line[0])
    except ValueError:
        raise InvalidFilterType(line[0], row) from None
    line[0] = 0
    n = len(line)
    has_up = len(previous) == n

    if filter_type == FilterType.NONE:
        pass

    elif filter_type == FilterType.SUB:
        for i in range(bpp + 1, n):
            line[i] = (line[i] + line[i - bpp]) & 0xFF

    elif filter_type == FilterType.UP:
        if has_up:
            for i in range(1, n):
                line[i] = (line[i] + previous[i]) & 0xFF

    elif filter_type == FilterType.AVERAGE:
        for i in range(1, n):
            left = line[i - bpp] if i > bpp else 0
            up = previous[i] if has_up else 0
            line[i] = (line[i] + ((left + up) >> 1)) & 0xFF

    else:
        for i in range(1, n):
            if i > bpp:
                left = line[i - bpp]
                up_left = previous[i - bpp] if has_up else 0
            else:
                left = up_left = 0
            up = previous[i] if has_up else 0
            line[i] = (line[i] + paeth_predictor(left, up, up_left)) & 0xFF

    return filter_type


class ScanlineAssembler:
    """Accumulate decompressed bytes into scanline records and defilter them.

    Bytes can be written in pieces of any size. Every time a record is
    complete it is defiltered against the previous row and passed to
    ``on_scanline(row, samples)`` where ``samples`` excludes the filter byte.
    The callback must not keep ``samples`` past the call; the buffer is reused.

    Attributes:
        stride: Record length including the filter byte.
        bpp: Filter distance in bytes.
        row: Index of the next scanline to be completed.
        current: Buffer being filled.
        previous: Last reconstructed record (empty before the first row).
    """

    def __init__(self, stride: int, bpp: int, on_scanline: Callable[[int, memoryview], None]):
        self.stride = stride
        self.bpp = bpp
        self.on_scanline = on_scanline
        self.row = 0
        self.current = bytearray()
        self.previous = bytearray()

    @property
    def pending(self) -> int:
        """Number of bytes buffered for an incomplete record."""
        return len(self.current)

    def write(self, data) -> int:
        """Push decompressed bytes; returns how many were consumed (all of them)."""
        view = memoryview(data)
        pos = 0
        total = len(view)
        while pos < total:
            take = min(self.stride - len(self.current), total - pos)
            self.current += view[pos : pos + take]
            pos += take
            if len(self.current) == self.stride:
                self._complete_scanline()
        return total

    def _complete_scanline(self):
        unfilter_scanline(self.current, self.previous, self.bpp, self.row)
        samples = memoryview(self.current)[1:]
        try:
            self.on_scanline(self.row, samples)
        finally:
            samples.release()
        self.swap()
        self.row += 1

    def swap(self):
        """Exchange the row buffers and clear the new current buffer."""
        self.current, self.previous = self.previous, self.current
        self.current.clear()
