"""Window frames, title bars and text boxes drawn into sheet buffers."""

from __future__ import annotations

from typing import Union

from .graphic import Color, TextRenderer, boxfill8
from .sheet import Sheet

_CLOSE_BUTTON = (
    "OOOOOOOOOOOOOOO@",
    "OQQQQQQQQQQQQQ$@",
    "OQQQQQQQQQQQQQ$@",
    "OQQQ@@QQQQ@@QQ$@",
    "OQQQQ@@QQ@@QQQ$@",
    "OQQQQQ@@@@QQQQ$@",
    "OQQQQQQ@@QQQQQ$@",
    "OQQQQQ@@@@QQQQ$@",
    "OQQQQ@@QQ@@QQQ$@",
    "OQQQ@@QQQQ@@QQ$@",
    "OQQQQQQQQQQQQQ$@",
    "OQQQQQQQQQQQQQ$@",
    "O$$$$$$$$$$$$$$@",
    "@@@@@@@@@@@@@@@@",
)

_BUTTON_COLORS = {"@": Color.BLACK, "$": Color.DARK_GRAY, "Q": Color.LIGHT_GRAY}

_ACTIVE = (Color.WHITE, Color.DARK_BLUE)
_INACTIVE = (Color.LIGHT_GRAY, Color.DARK_GRAY)

Text = Union[str, bytes]


def make_window8(
    buf: bytearray, xsize: int, ysize: int, title: Text, act: bool, renderer: TextRenderer
) -> None:
    """Draw a window frame with its title bar into ``buf``."""
    boxfill8(buf, xsize, Color.LIGHT_GRAY, 0, 0, xsize - 1, 0)
    boxfill8(buf, xsize, Color.WHITE, 1, 1, xsize - 2, 1)
    boxfill8(buf, xsize, Color.LIGHT_GRAY, 0, 0, 0, ysize - 1)
    boxfill8(buf, xsize, Color.WHITE, 1, 1, 1, ysize - 2)
    boxfill8(buf, xsize, Color.DARK_GRAY, xsize - 2, 1, xsize - 2, ysize - 2)
    boxfill8(buf, xsize, Color.BLACK, xsize - 1, 0, xsize - 1, ysize - 1)
    boxfill8(buf, xsize, Color.LIGHT_GRAY, 2, 2, xsize - 3, ysize - 3)
    boxfill8(buf, xsize, Color.DARK_GRAY, 1, ysize - 2, xsize - 2, ysize - 2)
    boxfill8(buf, xsize, Color.BLACK, 0, ysize - 1, xsize - 1, ysize - 1)
    make_wtitle8(buf, xsize, title, act, renderer)


def make_wtitle8(
    buf: bytearray, xsize: int, title: Text, act: bool, renderer: TextRenderer
) -> None:
    """Draw the title bar, its text and the close button."""
    tc, tbc = _ACTIVE if act else _INACTIVE
    boxfill8(buf, xsize, tbc, 3, 3, xsize - 4, 20)
    renderer.put_string(buf, xsize, 24, 4, tc, title)
    for y, row in enumerate(_CLOSE_BUTTON):
        start = (5 + y) * xsize + (xsize - 21)
        buf[start:start + len(row)] = bytes(_BUTTON_COLORS.get(ch, Color.WHITE) for ch in row)


def putfonts8_asc_sht(
    sheet: Sheet, x: int, y: int, c: int, b: int, s: Text, length: int, renderer: TextRenderer
) -> None:
    """Draw ``length`` characters on background ``b`` in a sheet and refresh them."""
    boxfill8(sheet.buf, sheet.bxsize, b, x, y, x + length * 8 - 1, y + 15)
    pending = renderer.langmode != 0 and renderer.langbyte1 != 0
    renderer.put_string(sheet.buf, sheet.bxsize, x, y, c, s)
    sheet.refresh(x - 8 if pending else x, y, x + length * 8, y + 16)


def make_textbox8(sheet: Sheet, x0: int, y0: int, sx: int, sy: int, c: int) -> None:
    """Draw a sunken text box of size sx x sy filled with ``c``."""
    x1, y1 = x0 + sx, y0 + sy
    buf, xsize = sheet.buf, sheet.bxsize
    boxfill8(buf, xsize, Color.DARK_GRAY, x0 - 2, y0 - 3, x1 + 1, y0 - 3)
    boxfill8(buf, xsize, Color.DARK_GRAY, x0 - 3, y0 - 3, x0 - 3, y1 + 1)
    boxfill8(buf, xsize, Color.WHITE, x0 - 3, y1 + 2, x1 + 1, y1 + 2)
    boxfill8(buf, xsize, Color.WHITE, x1 + 2, y0 - 3, x1 + 2, y1 + 2)
    boxfill8(buf, xsize, Color.BLACK, x0 - 1, y0 - 2, x1 + 0, y0 - 2)
    boxfill8(buf, xsize, Color.BLACK, x0 - 2, y0 - 2, x0 - 2, y1 + 0)
    boxfill8(buf, xsize, Color.LIGHT_GRAY, x0 - 2, y1 + 1, x1 + 0, y1 + 1)
    boxfill8(buf, xsize, Color.LIGHT_GRAY, x1 + 1, y0 - 2, x1 + 1, y1 + 1)
    boxfill8(buf, xsize, c, x0 - 1, y0 - 1, x1 + 0, y1 + 0)


def change_wtitle8(sheet: Sheet, act: bool) -> None:
    """Recolour an existing title bar to the active or inactive scheme."""
    xsize = sheet.bxsize
    buf = sheet.buf
    if act:
        (tc_new, tbc_new), (tc_old, tbc_old) = _ACTIVE, _INACTIVE
    else:
        (tc_new, tbc_new), (tc_old, tbc_old) = _INACTIVE, _ACTIVE
    for y in range(3, 21):
        for x in range(3, xsize - 3):
            i = y * xsize + x
            c = buf[i]
            if c == tc_old and x <= xsize - 22:
                buf[i] = tc_new
            elif c == tbc_old:
                buf[i] = tbc_new
    sheet.refresh(3, 3, xsize, 21)