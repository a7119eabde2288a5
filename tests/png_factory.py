"""Small PNG encoder used to build test fixtures.

Only what the tests need: raw sample rows in, a complete PNG byte string
out. Rows are filtered with the forward filters and compressed with zlib.
"""

import zlib

SIGNATURE = b"\x89PNG\r\n\x1a\n"

# color type -> samples per pixel
CHANNELS = {0: 1, 2: 3, 3: 1, 4: 2, 6: 4}


def make_chunk(tag, body=b""):
    if isinstance(tag, str):
        tag = tag.encode("ascii")
    crc = zlib.crc32(tag + body) & 0xFFFFFFFF
    return len(body).to_bytes(4, "big") + tag + body + crc.to_bytes(4, "big")


def ihdr_body(width, height, bit_depth, color_type, interlace=0, compression=0, filter_method=0):
    return (
        width.to_bytes(4, "big")
        + height.to_bytes(4, "big")
        + bytes([bit_depth, color_type, compression, filter_method, interlace])
    )


def filter_distance(bit_depth, color_type):
    return max(1, (bit_depth * CHANNELS[color_type] + 7) // 8)


def _paeth(a, b, c):
    p = a + b - c
    pa, pb, pc = abs(p - a), abs(p - b), abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def filter_row(filter_type, raw, prev, bpp):
    """Apply forward filter ``filter_type`` to one raw row (no filter byte)."""
    prev = prev if prev is not None else bytes(len(raw))
    out = bytearray()
    for i, value in enumerate(raw):
        left = raw[i - bpp] if i >= bpp else 0
        up = prev[i]
        up_left = prev[i - bpp] if i >= bpp else 0
        if filter_type == 0:
            pred = 0
        elif filter_type == 1:
            pred = left
        elif filter_type == 2:
            pred = up
        elif filter_type == 3:
            pred = (left + up) >> 1
        elif filter_type == 4:
            pred = _paeth(left, up, up_left)
        else:
            pred = 0
        out.append((value - pred) & 0xFF)
    return bytes([filter_type]) + bytes(out)


def scanlines(rows, bpp, filters=(0,)):
    """Concatenate filtered records; filter types cycle through ``filters``."""
    data = bytearray()
    prev = None
    for y, raw in enumerate(rows):
        data += filter_row(filters[y % len(filters)], raw, prev, bpp)
        prev = raw
    return bytes(data)


def make_png(
    width,
    height,
    bit_depth,
    color_type,
    rows,
    filters=(0,),
    palette=None,
    idat_parts=1,
    interlace=0,
    before_idat=(),
    after_idat=(),
    compressed=None,
    tail=b"",
):
    """Build a PNG file.

    Args:
        rows: Raw sample bytes per scanline, without filter bytes.
        palette: List of (r, g, b) triples written as PLTE.
        idat_parts: Number of IDAT chunks the compressed stream is split into.
        before_idat / after_idat: Extra raw chunks inserted around the IDATs.
        compressed: Use these bytes as the IDAT payload instead of compressing rows.
        tail: Bytes appended after IEND.
    """
    if compressed is None:
        bpp = filter_distance(bit_depth, color_type)
        compressed = zlib.compress(scanlines(rows, bpp, filters))
    out = bytearray(SIGNATURE)
    out += make_chunk("IHDR", ihdr_body(width, height, bit_depth, color_type, interlace))
    if palette is not None:
        out += make_chunk("PLTE", bytes(v for rgb in palette for v in rgb))
    for chunk in before_idat:
        out += chunk
    step = max(1, -(-len(compressed) // idat_parts))
    for start in range(0, len(compressed), step):
        out += make_chunk("IDAT", compressed[start : start + step])
    for chunk in after_idat:
        out += chunk
    out += make_chunk("IEND")
    out += tail
    return bytes(out)


def gradient_rgb_rows(width, height):
    """Deterministic 8-bit RGB rows: pixel (x, y) = (x, y, x ^ y) modulo 256."""
    rows = []
    for y in range(height):
        row = bytearray()
        for x in range(width):
            row += bytes([x & 0xFF, y & 0xFF, (x ^ y) & 0xFF])
        rows.append(bytes(row))
    return rows


class RecordingSurface:
    """Drawing surface that remembers every draw call."""

    def __init__(self):
        self.calls = []

    def draw_pixel(self, x, y, color):
        self.calls.append((x, y, color))

    def pixels(self):
        return {(x, y): color for x, y, color in self.calls}


GRADIENT_WIDTH = 293
GRADIENT_HEIGHT = 165
