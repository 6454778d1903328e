"""Data produced by the small demonstration programs."""

from __future__ import annotations

from typing import Iterator, List, Tuple

Segment = Tuple[int, int, int, int, int]

_BBALL_POINTS = (
    (204, 129), (195, 90), (172, 58), (137, 38), (98, 34),
    (61, 46), (31, 73), (15, 110), (15, 148), (31, 185),
    (61, 212), (98, 224), (137, 220), (172, 200), (195, 168),
    (204, 129),
)

_SJIS_MESSAGE = bytes([
    0x93, 0xFA, 0x96, 0x7B, 0x8C, 0xEA, 0x83, 0x56, 0x83, 0x74, 0x83, 0x67,
    0x4A, 0x49, 0x53, 0x83, 0x82, 0x81, 0x5B, 0x83, 0x68, 0x0A,
])

_EUC_MESSAGE = bytes([
    0xC6, 0xFC, 0xCB, 0xDC, 0xB8, 0xEC, 0x45, 0x55, 0x43, 0xA5, 0xE2, 0xA1,
    0xBC, 0xA5, 0xC9, 0x0A,
])


def bball_segments() -> List[Segment]:
    """Lines (x0, y0, x1, y1, colour) joining the points of the ball figure.

    Points closer together around the circle get brighter palette colours.
    """
    segments: List[Segment] = []
    for i, (x0, y0) in enumerate(_BBALL_POINTS[:15]):
        for j in range(i + 1, 16):
            dis = j - i
            if dis >= 8:
                dis = 15 - dis
            if dis != 0:
                x1, y1 = _BBALL_POINTS[j]
                segments.append((x0, y0, x1, y1, 8 - dis))
    return segments


def color_gradient() -> bytearray:
    """A 128x128 block of palette indices, red rising to the right and green downwards."""
    out = bytearray(128 * 128)
    for y in range(128):
        for x in range(128):
            r, g, b = x * 2, y * 2, 0
            out[y * 128 + x] = 16 + r // 43 + (g // 43) * 6 + (b // 43) * 36
    return out


def beep_frequencies() -> Iterator[int]:
    """Tones in millihertz from 20 kHz down to 20 Hz, each 1% below the last."""
    i = 20000000
    while i >= 20000:
        yield i
        i -= i // 100


def lang_message(langmode: int) -> bytes:
    """The message naming the language mode, in that mode's encoding; empty if unknown."""
    if langmode == 0:
        return b"English ASCII mode\n"
    if langmode == 1:
        return _SJIS_MESSAGE
    if langmode == 2:
        return _EUC_MESSAGE
    return b""


def line_segments() -> List[Segment]:
    """Two fans of eight lines (x0, y0, x1, y1, colour), one colour per pair."""
    segments: List[Segment] = []
    for i in range(8):
        segments.append((8, 26, 77, i * 9 + 26, i))
        segments.append((88, 26, i * 9 + 88, 89, i))
    return segments