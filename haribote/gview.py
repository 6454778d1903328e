"""Mapping decoded pictures onto the 6x6x6 colour cube with ordered dithering."""

from __future__ import annotations

import struct
from typing import Tuple

_DITHER = (3, 1, 0, 2)
_MAX_WIDTH = 1024
_MAX_HEIGHT = 768
_MIN_WINDOW_WIDTH = 136


def _level(value: int, bias: int) -> int:
    return (value * 21 // 256 + bias) // 4


def rgb2pal(r: int, g: int, b: int, x: int, y: int) -> int:
    """Palette index for a 0-255 RGB colour at pixel (x, y), dithered 2x2."""
    bias = _DITHER[(x & 1) + (y & 1) * 2]
    return 16 + _level(r, bias) + _level(g, bias) * 6 + _level(b, bias) * 36


def dither_image(pixels: bytes, width: int, height: int) -> bytearray:
    """Palette indices for pixels given as blue, green, red, spare byte records."""
    needed = width * height * 4
    if width < 0 or height < 0 or len(pixels) < needed:
        raise ValueError("pixel data shorter than the picture")
    out = bytearray(width * height)
    for n, (b, g, r, _spare) in enumerate(struct.iter_unpack("4B", bytes(pixels[:needed]))):
        y, x = divmod(n, width)
        out[n] = rgb2pal(r, g, b, x, y)
    return out


def window_size(width: int, height: int) -> Tuple[int, int]:
    """Window size that shows a picture; raise ValueError if it is too large."""
    if width > _MAX_WIDTH or height > _MAX_HEIGHT:
        raise ValueError("picture too large.")
    return max(width + 16, _MIN_WINDOW_WIDTH), height + 37