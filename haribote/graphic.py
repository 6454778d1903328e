"""Drawing primitives for an 8-bit palettised frame buffer."""

from __future__ import annotations

import enum
from typing import List, Optional, Sequence, Tuple, Union

_HANKAKU_SIZE = 16 * 256
_ZENKAKU_SIZE = 32 * 94 * 47


class Color(enum.IntEnum):
    """The sixteen fixed palette entries."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    PURPLE = 5
    CYAN = 6
    WHITE = 7
    LIGHT_GRAY = 8
    DARK_RED = 9
    DARK_GREEN = 10
    DARK_YELLOW = 11
    DARK_BLUE = 12
    DARK_PURPLE = 13
    DARK_CYAN = 14
    DARK_GRAY = 15


_BASE_RGB: Tuple[Tuple[int, int, int], ...] = (
    (0x00, 0x00, 0x00),
    (0xFF, 0x00, 0x00),
    (0x00, 0xFF, 0x00),
    (0xFF, 0xFF, 0x00),
    (0x00, 0x00, 0xFF),
    (0xFF, 0x00, 0xFF),
    (0x00, 0xFF, 0xFF),
    (0xFF, 0xFF, 0xFF),
    (0xC6, 0xC6, 0xC6),
    (0x84, 0x00, 0x00),
    (0x00, 0x84, 0x00),
    (0x84, 0x84, 0x00),
    (0x00, 0x00, 0x84),
    (0x84, 0x00, 0x84),
    (0x00, 0x84, 0x84),
    (0x84, 0x84, 0x84),
)

_CURSOR = (
    "**************..",
    "*OOOOOOOOOOO*...",
    "*OOOOOOOOOO*....",
    "*OOOOOOOOO*.....",
    "*OOOOOOOO*......",
    "*OOOOOOO*.......",
    "*OOOOOOO*.......",
    "*OOOOOOOO*......",
    "*OOOO**OOO*.....",
    "*OOO*..*OOO*....",
    "*OO*....*OOO*...",
    "*O*......*OOO*..",
    "**........*OOO*.",
    "*..........*OOO*",
    "............*OO*",
    ".............***",
)


def palette() -> List[Tuple[int, int, int]]:
    """The 232 RGB entries: 16 fixed colours followed by a 6x6x6 colour cube."""
    cube = [
        (r * 51, g * 51, b * 51)
        for b in range(6)
        for g in range(6)
        for r in range(6)
    ]
    return list(_BASE_RGB) + cube


def _write_row(vram: bytearray, start: int, data: bytes) -> None:
    if start < 0 or start + len(data) > len(vram):
        raise IndexError("drawing outside the buffer")
    vram[start:start + len(data)] = data


def boxfill8(vram: bytearray, xsize: int, c: int, x0: int, y0: int, x1: int, y1: int) -> None:
    """Fill the rectangle from (x0, y0) to (x1, y1), both corners included."""
    if x1 < x0:
        return
    row = bytes([c & 0xFF]) * (x1 - x0 + 1)
    for y in range(y0, y1 + 1):
        _write_row(vram, y * xsize + x0, row)


def init_screen8(vram: bytearray, x: int, y: int) -> None:
    """Draw the desktop background and task bar."""
    boxfill8(vram, x, Color.DARK_CYAN, 0, 0, x - 1, y - 29)
    boxfill8(vram, x, Color.LIGHT_GRAY, 0, y - 28, x - 1, y - 28)
    boxfill8(vram, x, Color.WHITE, 0, y - 27, x - 1, y - 27)
    boxfill8(vram, x, Color.LIGHT_GRAY, 0, y - 26, x - 1, y - 1)

    boxfill8(vram, x, Color.WHITE, 3, y - 24, 59, y - 24)
    boxfill8(vram, x, Color.WHITE, 2, y - 24, 2, y - 4)
    boxfill8(vram, x, Color.DARK_GRAY, 3, y - 4, 59, y - 4)
    boxfill8(vram, x, Color.DARK_GRAY, 59, y - 23, 59, y - 5)
    boxfill8(vram, x, Color.BLACK, 2, y - 3, 59, y - 3)
    boxfill8(vram, x, Color.BLACK, 60, y - 24, 60, y - 3)

    boxfill8(vram, x, Color.DARK_GRAY, x - 47, y - 24, x - 4, y - 24)
    boxfill8(vram, x, Color.DARK_GRAY, x - 47, y - 23, x - 47, y - 4)
    boxfill8(vram, x, Color.WHITE, x - 47, y - 3, x - 4, y - 3)
    boxfill8(vram, x, Color.WHITE, x - 3, y - 24, x - 3, y - 3)


def putfont8(vram: bytearray, xsize: int, x: int, y: int, c: int, font: Sequence[int]) -> None:
    """Draw one 8x16 glyph; set bits take colour ``c``, clear bits are left alone."""
    c &= 0xFF
    for i, d in enumerate(font[:16]):
        base = (y + i) * xsize + x
        for bit in range(8):
            if d & (0x80 >> bit):
                vram[base + bit] = c


def _sjis_index(lead: int, trail: int) -> int:
    if 0x81 <= lead <= 0x9F:
        k = (lead - 0x81) * 2
    else:
        k = (lead - 0xE0) * 2 + 62
    if 0x40 <= trail <= 0x7E:
        t = trail - 0x40
    elif 0x80 <= trail <= 0x9E:
        t = trail - 0x80 + 63
    else:
        t = trail - 0x9F
        k += 1
    return k * 94 + t


def _euc_index(lead: int, trail: int) -> int:
    return (lead - 0xA1) * 94 + (trail - 0xA1)


class TextRenderer:
    """Draws text with a half-width font and, in Japanese modes, a full-width font.

    ``langmode`` 0 is ASCII, 1 is Shift-JIS and 2 is EUC-JP. The first byte
    of a two-byte character is kept in ``langbyte1`` between calls.
    """

    def __init__(
        self,
        hankaku: bytes,
        nihongo: Optional[bytes] = None,
        langmode: int = 0,
    ) -> None:
        if len(hankaku) < _HANKAKU_SIZE:
            raise ValueError("half-width font needs 4096 bytes")
        if langmode not in (0, 1, 2):
            raise ValueError("langmode must be 0, 1 or 2")
        self.hankaku = bytes(hankaku[:_HANKAKU_SIZE])
        if nihongo is None:
            nihongo = self.hankaku + b"\xff" * _ZENKAKU_SIZE
        self.nihongo = bytes(nihongo)
        self.langmode = langmode
        self.langbyte1 = 0

    def _half(self, font: bytes, ch: int) -> bytes:
        return font[ch * 16:ch * 16 + 16]

    def _full(self, vram: bytearray, xsize: int, x: int, y: int, c: int, index: int) -> None:
        start = _HANKAKU_SIZE + index * 32
        glyph = self.nihongo[start:start + 32]
        putfont8(vram, xsize, x - 8, y, c, glyph[:16])
        putfont8(vram, xsize, x, y, c, glyph[16:])

    def put_string(
        self,
        vram: bytearray,
        xsize: int,
        x: int,
        y: int,
        c: int,
        s: Union[str, bytes],
    ) -> int:
        """Draw ``s`` up to its first NUL at (x, y); return the x after the text."""
        data = s.encode("latin-1") if isinstance(s, str) else bytes(s)
        data = data.split(b"\0", 1)[0]
        for ch in data:
            if self.langmode == 0:
                putfont8(vram, xsize, x, y, c, self._half(self.hankaku, ch))
            elif self.langbyte1 == 0:
                if self.langmode == 1:
                    is_lead = 0x81 <= ch <= 0x9F or 0xE0 <= ch <= 0xFC
                else:
                    is_lead = 0x81 <= ch <= 0xFE
                if is_lead:
                    self.langbyte1 = ch
                else:
                    putfont8(vram, xsize, x, y, c, self._half(self.nihongo, ch))
            else:
                lead = self.langbyte1
                self.langbyte1 = 0
                if self.langmode == 1:
                    index = _sjis_index(lead, ch)
                else:
                    index = _euc_index(lead, ch)
                self._full(vram, xsize, x, y, c, index)
            x += 8
        return x


def mouse_cursor8(bc: int) -> bytearray:
    """The 16x16 mouse cursor image; ``bc`` fills the background."""
    colours = {"*": Color.BLACK, "O": Color.WHITE, ".": bc & 0xFF}
    return bytearray(colours[ch] for row in _CURSOR for ch in row)


def putblock8_8(
    vram: bytearray,
    vxsize: int,
    pxsize: int,
    pysize: int,
    px0: int,
    py0: int,
    buf: bytes,
    bxsize: int,
) -> None:
    """Copy a ``pxsize`` x ``pysize`` block from ``buf`` to (px0, py0)."""
    for y in range(pysize):
        row = bytes(buf[y * bxsize:y * bxsize + pxsize])
        _write_row(vram, (py0 + y) * vxsize + px0, row)