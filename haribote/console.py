"""Text console drawn into a sheet, its command line and its file handles."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from .fat import FileInfo
from .graphic import Color, TextRenderer, boxfill8
from .sheet import Sheet
from .window import putfonts8_asc_sht

_LEFT = 8
_TOP = 28
_WIDTH = 240
_HEIGHT = 128
_LINE = 16
_CHAR = 8

Text = Union[str, bytes]


def _to_bytes(s: Text) -> bytes:
    return s.encode("latin-1") if isinstance(s, str) else bytes(s)


class Console:
    """A character console of 30 columns by 8 rows inside a window sheet.

    ``sheet`` may be None for a console without a window; the cursor then
    moves as usual but nothing is drawn.
    """

    def __init__(self, sheet: Optional[Sheet], renderer: Optional[TextRenderer]) -> None:
        self.sheet = sheet
        self.renderer = renderer
        self.cur_x = _LEFT
        self.cur_y = _TOP
        self.cur_c = -1

    def _draw(self, text: bytes) -> None:
        if self.sheet is not None and self.renderer is not None:
            putfonts8_asc_sht(
                self.sheet, self.cur_x, self.cur_y, Color.WHITE, Color.BLACK,
                text, 1, self.renderer,
            )

    def _advance(self) -> None:
        self.cur_x += _CHAR
        if self.cur_x == _LEFT + _WIDTH:
            self.newline()

    def putchar(self, chr: Union[int, str], move: bool = True) -> None:
        """Write one character; tab, newline and carriage return are interpreted."""
        code = ord(chr) if isinstance(chr, str) else chr
        code &= 0xFF
        if code == 0x09:
            while True:
                self._draw(b" ")
                self._advance()
                if ((self.cur_x - _LEFT) & 0x1F) == 0:
                    break
        elif code == 0x0A:
            self.newline()
        elif code == 0x0D:
            pass
        else:
            self._draw(bytes([code]))
            if move:
                self._advance()

    def newline(self) -> None:
        """Move to the start of the next line, scrolling at the bottom."""
        if self.cur_y < _TOP + _HEIGHT - _LINE:
            self.cur_y += _LINE
        elif self.sheet is not None:
            sheet = self.sheet
            buf, xsize = sheet.buf, sheet.bxsize
            for y in range(_TOP, _TOP + _HEIGHT - _LINE):
                dst = y * xsize + _LEFT
                src = (y + _LINE) * xsize + _LEFT
                buf[dst:dst + _WIDTH] = buf[src:src + _WIDTH]
            boxfill8(
                buf, xsize, Color.BLACK,
                _LEFT, _TOP + _HEIGHT - _LINE, _LEFT + _WIDTH - 1, _TOP + _HEIGHT - 1,
            )
            sheet.refresh(_LEFT, _TOP, _LEFT + _WIDTH, _TOP + _HEIGHT)
        self.cur_x = _LEFT
        renderer = self.renderer
        if renderer is not None and renderer.langmode == 1 and renderer.langbyte1 != 0:
            self.cur_x += _CHAR

    def putstr0(self, s: Text) -> None:
        """Write ``s`` up to its first NUL."""
        for ch in _to_bytes(s).split(b"\0", 1)[0]:
            self.putchar(ch, True)

    def putstr1(self, s: Text, length: int) -> None:
        """Write the first ``length`` characters of ``s``."""
        for ch in _to_bytes(s)[:length]:
            self.putchar(ch, True)

    def cls(self) -> None:
        """Clear the text area and move the cursor to the top line."""
        if self.sheet is None:
            raise RuntimeError("console has no window to clear")
        sheet = self.sheet
        boxfill8(
            sheet.buf, sheet.bxsize, Color.BLACK,
            _LEFT, _TOP, _LEFT + _WIDTH - 1, _TOP + _HEIGHT - 1,
        )
        sheet.refresh(_LEFT, _TOP, _LEFT + _WIDTH, _TOP + _HEIGHT)
        self.cur_y = _TOP


class CommandKind(enum.Enum):
    """What a console command line asks for."""

    EMPTY = "empty"
    MEM = "mem"
    CLS = "cls"
    DIR = "dir"
    EXIT = "exit"
    START = "start"
    NCST = "ncst"
    LANGMODE = "langmode"
    APP = "app"

    @property
    def needs_window(self) -> bool:
        """Built-in commands that only work in a console with a window.

        Without a window such a line is run as an application name instead.
        """
        return self in (CommandKind.MEM, CommandKind.CLS, CommandKind.DIR)


def classify_command(cmdline: str) -> Tuple[CommandKind, Union[str, int]]:
    """Split a command line into its kind and argument.

    START and NCST carry the command to run, LANGMODE the mode number,
    APP the whole line. An invalid language mode raises ValueError.
    """
    if cmdline == "mem":
        return CommandKind.MEM, ""
    if cmdline == "cls":
        return CommandKind.CLS, ""
    if cmdline in ("dir", "ls"):
        return CommandKind.DIR, ""
    if cmdline == "exit":
        return CommandKind.EXIT, ""
    if cmdline.startswith("start "):
        return CommandKind.START, cmdline[6:]
    if cmdline.startswith("ncst "):
        return CommandKind.NCST, cmdline[5:]
    if cmdline.startswith("langmode "):
        code = ord(cmdline[9]) if len(cmdline) > 9 else 0
        mode = (code - ord("0")) & 0xFF
        if mode > 2:
            raise ValueError("mode number error.")
        return CommandKind.LANGMODE, mode
    if cmdline:
        return CommandKind.APP, cmdline
    return CommandKind.EMPTY, ""


def format_mem(memtotal: int, free: int) -> str:
    """The report printed by ``mem``."""
    return f"total   {memtotal // (1024 * 1024)}MB\nfree {free // 1024}KB\n\n"


def format_dir(entries: Sequence[FileInfo]) -> str:
    """The listing printed by ``dir``: one line per regular file."""
    lines = []
    for entry in entries:
        if not entry.name or entry.name[0] == 0x00:
            break
        if entry.name[0] == 0xE5 or entry.type & 0x18:
            continue
        name = entry.name[:8].ljust(8).decode("latin-1")
        ext = entry.ext[:3].ljust(3).decode("latin-1")
        lines.append(f"{name}.{ext}   {entry.size:7d}\n")
    return "".join(lines)


def _cdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def draw_line(sheet: Sheet, x0: int, y0: int, x1: int, y1: int, col: int) -> None:
    """Draw a line into the sheet buffer with 10-bit fixed-point stepping."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    x = x0 << 10
    y = y0 << 10
    if dx >= dy:
        length = dx + 1
        dx = -1024 if x0 > x1 else 1024
        if y0 <= y1:
            dy = _cdiv((y1 - y0 + 1) << 10, length)
        else:
            dy = _cdiv((y1 - y0 - 1) << 10, length)
    else:
        length = dy + 1
        dy = -1024 if y0 > y1 else 1024
        if x0 <= x1:
            dx = _cdiv((x1 - x0 + 1) << 10, length)
        else:
            dx = _cdiv((x1 - x0 - 1) << 10, length)
    for _ in range(length):
        sheet.buf[(y >> 10) * sheet.bxsize + (x >> 10)] = col & 0xFF
        x += dx
        y += dy


@dataclass
class FileHandle:
    """An open file loaded whole into memory, with a read position."""

    data: bytes
    pos: int = 0

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.pos = 0

    @property
    def size(self) -> int:
        return len(self.data)

    def seek(self, offset: int, whence: int = 0) -> int:
        """Move the position from the start (0), current (1) or end (2); clamp to the file."""
        if whence == 0:
            pos = offset
        elif whence == 1:
            pos = self.pos + offset
        elif whence == 2:
            pos = self.size + offset
        else:
            raise ValueError("whence must be 0, 1 or 2")
        self.pos = max(0, min(pos, self.size))
        return self.pos

    def query(self, mode: int) -> int:
        """Size (0), position (1) or position minus size (2)."""
        if mode == 0:
            return self.size
        if mode == 1:
            return self.pos
        if mode == 2:
            return self.pos - self.size
        raise ValueError("mode must be 0, 1 or 2")

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes from the current position."""
        n = max(n, 0)
        chunk = self.data[self.pos:self.pos + n]
        self.pos += len(chunk)
        return chunk