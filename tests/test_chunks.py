"""Tests for the signature check, chunk reader and chunk interpreter."""

import pytest

from PngViewer.core.chunks import (
    BitDepth,
    ChunkHeader,
    ColorType,
    End,
    Header,
    ImageData,
    Interlace,
    Palette,
    Unknown,
    check_signature,
    interpret_chunk,
    iter_chunks,
    parse_header,
    parse_palette,
    read_chunk,
)
from PngViewer.core.errors import (
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
    PngValueError,
    StructuralError,
    TrailingData,
    UnknownCriticalChunk,
)
from png_factory import SIGNATURE, ihdr_body, make_chunk


def _header(tag):
    return ChunkHeader(0, tag)


def test_check_signature_returns_remaining_bytes():
    rest = check_signature(SIGNATURE + b"abc")
    assert bytes(rest) == b"abc"


@pytest.mark.parametrize(
    "data",
    [b"", SIGNATURE[:5], b"\x89PNG\r\n\x1a\x0b", b"GIF89a\x00\x00\x00"],
)
def test_check_signature_rejects(data):
    with pytest.raises(BadSignature) as exc:
        check_signature(data)
    assert isinstance(exc.value, StructuralError)
    assert exc.value.offset == 0


def test_read_chunk_borrows_body():
    source = bytearray(make_chunk("tEXt", b"hello") + make_chunk("IEND"))
    view = memoryview(source)
    header, body, next_offset = read_chunk(view, 0)
    assert header == ChunkHeader(5, b"tEXt")
    assert not header.critical
    assert header.name == "tEXt"
    assert bytes(body) == b"hello"
    assert next_offset == 4 + 4 + 5 + 4
    # body is a view into the source, not a copy
    source[8] = ord("j")
    assert bytes(body) == b"jello"

    header, body, next_offset = read_chunk(view, next_offset)
    assert header.critical
    assert len(body) == 0
    assert next_offset == len(source)


def test_read_chunk_truncated_length():
    with pytest.raises(MalformedChunk):
        read_chunk(memoryview(b"\x00\x00\x00"), 0)


def test_read_chunk_truncated_body():
    chunk = make_chunk("IDAT", b"0123456789")
    with pytest.raises(MalformedChunk) as exc:
        read_chunk(memoryview(chunk[:12]), 0)
    assert "IDAT" in str(exc.value)


def test_read_chunk_missing_crc():
    chunk = make_chunk("IEND")
    with pytest.raises(MalformedChunk) as exc:
        read_chunk(memoryview(chunk[:-2]), 0)
    assert "CRC" in str(exc.value)


def test_read_chunk_rejects_non_letter_tag():
    with pytest.raises(MalformedChunk):
        read_chunk(memoryview(make_chunk(b"ID4T", b"")), 0)


def test_crc_is_not_verified():
    chunk = bytearray(make_chunk("tEXt", b"x"))
    chunk[-1] ^= 0xFF
    header, body, _ = read_chunk(memoryview(bytes(chunk)), 0)
    assert bytes(body) == b"x"


def test_parse_header():
    header = parse_header(memoryview(ihdr_body(293, 165, 8, 2)))
    assert header == Header(293, 165, BitDepth.EIGHT, ColorType.RGB, Interlace.NONE)


@pytest.mark.parametrize(
    "body, error",
    [
        (ihdr_body(1, 1, 3, 0), InvalidBitDepth),
        (ihdr_body(1, 1, 8, 1), InvalidColorType),
        (ihdr_body(1, 1, 8, 0, interlace=2), InvalidInterlace),
        (ihdr_body(1, 1, 8, 0, compression=1), InvalidCompressionMethod),
        (ihdr_body(1, 1, 8, 0, filter_method=1), InvalidFilterMethod),
    ],
)
def test_parse_header_invalid_values(body, error):
    with pytest.raises(error) as exc:
        parse_header(memoryview(body))
    assert isinstance(exc.value, PngValueError)
    assert isinstance(exc.value, ValueError)


def test_parse_header_wrong_length():
    with pytest.raises(MalformedChunk):
        parse_header(memoryview(ihdr_body(1, 1, 8, 0)[:12]))


def test_parse_palette():
    palette = parse_palette(memoryview(bytes([1, 2, 3, 4, 5, 6])))
    assert len(palette) == 2
    assert palette.color(1) == (4, 5, 6)
    with pytest.raises(PaletteIndexOutOfRange):
        palette.color(2)


def test_parse_palette_full_size():
    assert len(parse_palette(memoryview(bytes(768)))) == 256


@pytest.mark.parametrize("size", [0, 4, 771])
def test_parse_palette_invalid_size(size):
    with pytest.raises(InvalidPaletteSize):
        parse_palette(memoryview(bytes(size)))


def test_interpret_chunk_values():
    assert isinstance(interpret_chunk(_header(b"IHDR"), memoryview(ihdr_body(1, 1, 8, 0))), Header)
    assert isinstance(interpret_chunk(_header(b"PLTE"), memoryview(bytes(3))), Palette)
    idat = interpret_chunk(_header(b"IDAT"), memoryview(b"zz"))
    assert isinstance(idat, ImageData)
    assert bytes(idat.data) == b"zz"
    assert interpret_chunk(_header(b"IEND"), memoryview(b"")) == End()


def test_interpret_chunk_non_empty_end():
    with pytest.raises(InvalidEnd):
        interpret_chunk(_header(b"IEND"), memoryview(b"x"))


def test_interpret_chunk_unknown():
    assert interpret_chunk(_header(b"tIME"), memoryview(b"")) == Unknown(b"tIME")
    with pytest.raises(UnknownCriticalChunk) as exc:
        interpret_chunk(_header(b"ABCD"), memoryview(b""))
    assert exc.value.name == "ABCD"


def test_iter_chunks_offsets():
    data = (
        SIGNATURE
        + make_chunk("IHDR", ihdr_body(1, 1, 8, 0))
        + make_chunk("tEXt", b"k\x00v")
        + make_chunk("IEND")
    )
    items = list(iter_chunks(data))
    assert [offset for offset, _, _ in items] == [8, 33, 48]
    assert [header.name for _, header, _ in items] == ["IHDR", "tEXt", "IEND"]
    assert isinstance(items[1][2], Unknown)


def test_iter_chunks_attaches_offset_to_interpreter_errors():
    data = SIGNATURE + make_chunk("IHDR", ihdr_body(1, 1, 3, 0)) + make_chunk("IEND")
    with pytest.raises(InvalidBitDepth) as exc:
        list(iter_chunks(data))
    assert exc.value.offset == 8
    assert "(at byte 8)" in str(exc.value)
    assert exc.value.excerpt.startswith("00000008")


def test_iter_chunks_trailing_data():
    data = SIGNATURE + make_chunk("IEND") + b"junk"
    with pytest.raises(TrailingData) as exc:
        list(iter_chunks(data))
    assert exc.value.remaining == 4
    assert exc.value.offset == 20


def test_iter_chunks_missing_end():
    data = SIGNATURE + make_chunk("IHDR", ihdr_body(1, 1, 8, 0))
    with pytest.raises(MissingCritical) as exc:
        list(iter_chunks(data))
    assert exc.value.name == "IEND"
