import pytest

from haribote.console import (
    CommandKind,
    Console,
    FileHandle,
    classify_command,
    draw_line,
    format_dir,
    format_mem,
)
from haribote.fat import FileInfo
from haribote.graphic import Color, TextRenderer
from haribote.sheet import SheetController

W, H = 256, 165


def make_sheet():
    ctl = SheetController(bytearray(W * H), W, H)
    sheet = ctl.alloc()
    sheet.setbuf(bytearray(W * H), W, H, -1)
    return sheet


def solid_renderer(langmode=0):
    return TextRenderer(b"\xff" * 4096, langmode=langmode)


@pytest.fixture
def console():
    return Console(make_sheet(), solid_renderer())


def test_initial_cursor(console):
    assert (console.cur_x, console.cur_y, console.cur_c) == (8, 28, -1)


def test_putchar_moves_and_draws(console):
    console.putchar("A", True)
    assert console.cur_x == 16
    assert console.sheet.buf[28 * W + 8] == Color.WHITE
    assert console.sheet.buf[43 * W + 15] == Color.WHITE


def test_putchar_without_move(console):
    console.putchar("A", False)
    assert console.cur_x == 8


def test_carriage_return_does_nothing(console):
    before = bytes(console.sheet.buf)
    console.putchar("\r", True)
    assert console.cur_x == 8
    assert bytes(console.sheet.buf) == before


def test_line_wraps_after_thirty_chars(console):
    console.putstr0("x" * 30)
    assert console.cur_x == 8
    assert console.cur_y == 28 + 16


def test_tab_aligns_to_32_pixels(console):
    console.putchar("a", True)
    console.putchar("\t", True)
    assert (console.cur_x - 8) % 32 == 0
    assert console.cur_x > 16


def test_newline_character(console):
    console.putstr0("ab\n")
    assert console.cur_x == 8
    assert console.cur_y == 44


def test_putstr0_stops_at_nul(console):
    console.putstr0(b"ab\0cd")
    assert console.cur_x == 8 + 2 * 8


def test_putstr1_uses_length(console):
    console.putstr1("abcdef", 3)
    assert console.cur_x == 8 + 3 * 8


def test_newline_scrolls_at_bottom(console):
    buf = console.sheet.buf
    buf[44 * W + 20] = 9
    buf[150 * W + 20] = 9
    console.cur_y = 140
    console.newline()
    assert console.cur_y == 140
    assert buf[28 * W + 20] == 9
    assert buf[150 * W + 20] == Color.BLACK


def test_newline_in_sjis_with_pending_lead_byte():
    con = Console(make_sheet(), solid_renderer(langmode=1))
    con.renderer.langbyte1 = 0x82
    con.newline()
    assert con.cur_x == 16


def test_cls(console):
    buf = console.sheet.buf
    for y in range(28, 156):
        buf[y * W + 8:y * W + 248] = b"\x05" * 240
    console.cur_y = 92
    console.cls()
    assert console.cur_y == 28
    assert all(buf[y * W + x] == Color.BLACK for y in range(28, 156) for x in range(8, 248))


def test_console_without_window():
    con = Console(None, None)
    con.putstr0("hello\n")
    assert (con.cur_x, con.cur_y) == (8, 44)
    with pytest.raises(RuntimeError):
        con.cls()


@pytest.mark.parametrize(
    "line, kind, arg",
    [
        ("mem", CommandKind.MEM, ""),
        ("cls", CommandKind.CLS, ""),
        ("dir", CommandKind.DIR, ""),
        ("ls", CommandKind.DIR, ""),
        ("exit", CommandKind.EXIT, ""),
        ("start invader", CommandKind.START, "invader"),
        ("ncst color", CommandKind.NCST, "color"),
        ("langmode 2", CommandKind.LANGMODE, 2),
        ("langmode 0", CommandKind.LANGMODE, 0),
        ("hello3", CommandKind.APP, "hello3"),
        ("", CommandKind.EMPTY, ""),
    ],
)
def test_classify_command(line, kind, arg):
    assert classify_command(line) == (kind, arg)


@pytest.mark.parametrize("line", ["langmode 3", "langmode x", "langmode "])
def test_classify_bad_langmode(line):
    with pytest.raises(ValueError, match="mode number error"):
        classify_command(line)


@pytest.mark.parametrize(
    "line, expected",
    [
        ("mem", True),
        ("cls", True),
        ("dir", True),
        ("ls", True),
        ("exit", False),
    ],
)
def test_needs_window(line, expected):
    kind, _ = classify_command(line)
    assert kind.needs_window is expected


def test_format_mem():
    assert format_mem(32 * 1024 * 1024, 1000 * 1024) == "total   32MB\nfree 1000KB\n\n"


def test_format_dir_lists_regular_files_only():
    entries = [
        FileInfo(b"HELLO   ", b"HRB", 0x20, 0, 0, 2, 1234),
        FileInfo(b"\xe5ONE    ", b"TXT", 0x20, 0, 0, 3, 10),
        FileInfo(b"SUBDIR  ", b"   ", 0x10, 0, 0, 4, 0),
        FileInfo(b"VOLUME  ", b"   ", 0x08, 0, 0, 0, 0),
    ]
    listing = format_dir(entries)
    assert listing == "HELLO   .HRB      1234\n"


def test_format_dir_line_width():
    entries = [FileInfo(b"A       ", b"B  ", 0, 0, 0, 2, 5)]
    line = format_dir(entries)
    assert line.startswith("A       .B  ")
    assert line.endswith("5\n")
    assert len(line) == len("filename.ext   %7d\n") - 3 + 7


def test_draw_line_horizontal():
    sheet = make_sheet()
    draw_line(sheet, 10, 5, 20, 5, 3)
    assert all(sheet.buf[5 * W + x] == 3 for x in range(10, 21))
    assert sheet.buf[5 * W + 9] == 0
    assert sheet.buf[5 * W + 21] == 0


def test_draw_line_vertical_reversed():
    sheet = make_sheet()
    draw_line(sheet, 7, 30, 7, 20, 4)
    assert all(sheet.buf[y * W + 7] == 4 for y in range(20, 31))
    assert sum(1 for v in sheet.buf if v) == 11


def test_draw_line_single_point():
    sheet = make_sheet()
    draw_line(sheet, 3, 3, 3, 3, 7)
    assert sheet.buf[3 * W + 3] == 7
    assert sum(1 for v in sheet.buf if v) == 1


def test_draw_line_diagonal_endpoints():
    sheet = make_sheet()
    draw_line(sheet, 8, 26, 77, 89, 2)
    assert sheet.buf[26 * W + 8] == 2
    assert sum(1 for v in sheet.buf if v) == 77 - 8 + 1


def test_file_handle_read_and_query():
    fh = FileHandle(b"hello world")
    assert fh.query(0) == 11
    assert fh.read(5) == b"hello"
    assert fh.query(1) == 5
    assert fh.query(2) == 5 - 11
    assert fh.read(100) == b" world"
    assert fh.read(1) == b""


def test_file_handle_seek_clamps():
    fh = FileHandle(b"abcdef")
    assert fh.seek(-3, 2) == 3
    assert fh.read(2) == b"de"
    assert fh.seek(-100, 1) == 0
    assert fh.seek(100, 0) == 6
    assert fh.seek(2, 0) == 2
    assert fh.seek(1, 1) == 3


def test_file_handle_errors():
    fh = FileHandle(b"abc")
    with pytest.raises(ValueError):
        fh.seek(0, 3)
    with pytest.raises(ValueError):
        fh.query(5)