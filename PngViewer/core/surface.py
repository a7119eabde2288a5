"""Drawing surfaces that receive decoded pixels.

The decoder only needs an object with a ``draw_pixel(x, y, color)`` method.
``NumpySurface`` collects the pixels into a NumPy array so the image can be
converted for display or analysis afterwards.
"""

from typing import Protocol

import numpy as np

from .chunks import Header
from .pixels import Color


class DrawingSurface(Protocol):
    """Anything that can draw one unit of color at integer coordinates."""

    def draw_pixel(self, x: int, y: int, color: Color) -> None: ...


class NumpySurface:
    """Drawing surface backed by an (H, W, 4) float32 RGBA array.

    Pixels that were never drawn stay fully transparent black.

    Example:
        >>> surface = NumpySurface(2, 1)
        >>> surface.draw_pixel(1, 0, Color(1.0, 0.0, 0.0))
        >>> surface.to_uint8()[0, 1].tolist()
        [255, 0, 0, 255]
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.array = np.zeros((height, width, 4), dtype=np.float32)
        self.drawn = 0

    @classmethod
    def for_header(cls, header: Header) -> "NumpySurface":
        return cls(header.width, header.height)

    def draw_pixel(self, x: int, y: int, color: Color) -> None:
        self.array[y, x] = (color.red, color.green, color.blue, color.alpha)
        self.drawn += 1

    def to_uint8(self) -> np.ndarray:
        """Return the image as an (H, W, 4) uint8 RGBA array."""
        return np.clip(np.rint(self.array * 255.0), 0, 255).astype(np.uint8)

