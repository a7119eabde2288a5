"""Pixel unpacking for defiltered scanlines.

``PixelDecoder`` interprets the sample bytes of one reconstructed scanline
according to bit depth and color type and emits one draw call per pixel to
a drawing surface.

Sample layouts:
  - < 8 bits per pixel (grayscale / palette, depth 1, 2, 4): fields are
    packed most-significant-bit first within each byte.
  - >= 8 bits per pixel: each pixel is a fixed group of bytes; 16-bit
    samples are big-endian.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Iterator, Optional, Tuple

from .chunks import BitDepth, ColorType, Palette
from .errors import MissingCritical
from .scanline import bits_per_pixel

if TYPE_CHECKING:
    from .surface import DrawingSurface


@dataclass(frozen=True)
class Color:
    """RGBA color with float channels in [0, 1]."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def gray(cls, value: float, alpha: float = 1.0) -> "Color":
        return cls(value, value, value, alpha)

    @classmethod
    def from_rgb8(cls, red: int, green: int, blue: int, alpha: int = 255) -> "Color":
        return cls(red / 255.0, green / 255.0, blue / 255.0, alpha / 255.0)

    def to_rgba8(self) -> Tuple[int, int, int, int]:
        return (
            int(round(self.red * 255)),
            int(round(self.green * 255)),
            int(round(self.blue * 255)),
            int(round(self.alpha * 255)),
        )


def _u16(b, i: int) -> float:
    return ((b[i] << 8) | b[i + 1]) / 65535.0


def _gray8(b) -> Color:
    return Color.gray(b[0] / 255.0)


def _gray16(b) -> Color:
    return Color.gray(_u16(b, 0))


def _gray_alpha8(b) -> Color:
    return Color.gray(b[0] / 255.0, b[1] / 255.0)


def _gray_alpha16(b) -> Color:
    return Color.gray(_u16(b, 0), _u16(b, 2))


def _rgb8(b) -> Color:
    return Color.from_rgb8(b[0], b[1], b[2])


def _rgb16(b) -> Color:
    return Color(_u16(b, 0), _u16(b, 2), _u16(b, 4))


def _rgb_alpha8(b) -> Color:
    return Color.from_rgb8(b[0], b[1], b[2], b[3])


def _rgb_alpha16(b) -> Color:
    return Color(_u16(b, 0), _u16(b, 2), _u16(b, 4), _u16(b, 6))


# (color type, bytes per pixel) -> converter for whole-byte layouts.
# Palette is handled separately because it needs the palette table.
_BYTE_CONVERTERS: Dict[Tuple[ColorType, int], Callable[[memoryview], Color]] = {
    (ColorType.GRAYSCALE, 1): _gray8,
    (ColorType.GRAYSCALE, 2): _gray16,
    (ColorType.GRAYSCALE_ALPHA, 2): _gray_alpha8,
    (ColorType.GRAYSCALE_ALPHA, 4): _gray_alpha16,
    (ColorType.RGB, 3): _rgb8,
    (ColorType.RGB, 6): _rgb16,
    (ColorType.RGB_ALPHA, 4): _rgb_alpha8,
    (ColorType.RGB_ALPHA, 8): _rgb_alpha16,
}


class PixelDecoder:
    """Turn defiltered scanlines into draw calls.

    Attributes:
        surface: Object with ``draw_pixel(x, y, color)``.
        width: Pixels per row.
        color_type: ColorType of the image.
        bpp: Bits per pixel.
        palette: Palette table, required before rows of a palette image
                 are decoded.
    """

    def __init__(
        self,
        surface: "DrawingSurface",
        width: int,
        bit_depth: BitDepth,
        color_type: ColorType,
        palette: Optional[Palette] = None,
    ):
        self.surface = surface
        self.width = width
        self.color_type = ColorType(color_type)
        self.bpp = bits_per_pixel(bit_depth, color_type)
        self.palette = palette

        if self.bpp < 8:
            self._colors = self._packed_colors
        elif self.color_type == ColorType.PALETTE:
            self._colors = self._indexed_colors
        else:
            self._colors = self._byte_colors
            self._convert = _BYTE_CONVERTERS[(self.color_type, self.bpp // 8)]

    def decode_row(self, row: int, samples) -> int:
        """Draw every pixel of one scanline.

        Args:
            row: Scanline index (y coordinate).
            samples: Defiltered sample bytes (filter byte excluded).

        Returns:
            Number of pixels drawn.

        Raises:
            MissingCritical: Palette image without a palette.
            PaletteIndexOutOfRange: Sample refers past the end of the palette.
        """
        if self.color_type == ColorType.PALETTE and self.palette is None:
            raise MissingCritical("PLTE")
        count = 0
        draw = self.surface.draw_pixel
        for x, color in enumerate(self._colors(samples)):
            draw(x, row, color)
            count += 1
        return count

    def _packed_values(self, samples) -> Iterator[int]:
        bpp = self.bpp
        mask = (1 << bpp) - 1
        shifts = range(8 - bpp, -1, -bpp)
        remaining = self.width
        for byte in samples:
            for shift in shifts:
                if remaining == 0:
                    return
                yield (byte >> shift) & mask
                remaining -= 1

    def _packed_colors(self, samples) -> Iterator[Color]:
        if self.color_type == ColorType.PALETTE:
            palette = self.palette
            for index in self._packed_values(samples):
                yield Color.from_rgb8(*palette.color(index))
        else:
            max_value = float((1 << self.bpp) - 1)
            for value in self._packed_values(samples):
                yield Color.gray(value / max_value)

    def _indexed_colors(self, samples) -> Iterator[Color]:
        palette = self.palette
        for x in range(self.width):
            yield Color.from_rgb8(*palette.color(samples[x]))

    def _byte_colors(self, samples) -> Iterator[Color]:
        unit = self.bpp // 8
        convert = self._convert
        for x in range(self.width):
            start = x * unit
            yield convert(samples[start : start + unit])
