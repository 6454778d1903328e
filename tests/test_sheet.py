import pytest

from haribote.sheet import SheetController

W, H = 8, 8


def _ctl(max_sheets=16):
    return SheetController(bytearray(W * H), W, H, max_sheets)


def _sheet(ctl, w, h, color, col_inv=-1):
    sht = ctl.alloc()
    sht.setbuf(bytearray([color]) * (w * h), w, h, col_inv)
    return sht


def _pixel(ctl, x, y):
    return ctl.vram[y * ctl.xsize + x]


def _scene():
    ctl = _ctl()
    back = _sheet(ctl, W, H, 1)
    back.updown(0)
    win = _sheet(ctl, 4, 4, 2)
    win.slide(2, 2)
    win.updown(1)
    return ctl, back, win


def test_alloc_exhaustion_raises():
    ctl = _ctl(max_sheets=2)
    first = ctl.alloc()
    second = ctl.alloc()
    assert first.in_use and second.in_use
    assert first.height == -1
    with pytest.raises(RuntimeError):
        ctl.alloc()


def test_showing_sheet_draws_it():
    ctl = _ctl()
    back = _sheet(ctl, W, H, 1)
    back.updown(0)
    assert ctl.top == 0
    assert back.height == 0
    assert set(ctl.vram) == {1}


def test_upper_sheet_covers_lower():
    ctl, back, win = _scene()
    assert _pixel(ctl, 2, 2) == 2
    assert _pixel(ctl, 5, 5) == 2
    assert _pixel(ctl, 6, 6) == 1
    assert _pixel(ctl, 1, 1) == 1
    assert ctl.map[2 * W + 2] == win.index
    assert ctl.map[0] == back.index


def test_transparent_pixels_show_lower_sheet():
    ctl = _ctl()
    back = _sheet(ctl, W, H, 1)
    back.updown(0)
    win = _sheet(ctl, 4, 4, 2, col_inv=99)
    win.buf[0] = 99
    win.slide(2, 2)
    win.updown(1)
    assert _pixel(ctl, 2, 2) == 1
    assert _pixel(ctl, 3, 2) == 2


def test_hiding_sheet_reveals_lower():
    ctl, back, win = _scene()
    win.updown(-1)
    assert win.height == -1
    assert ctl.top == 0
    assert set(ctl.vram) == {1}


def test_slide_moves_visible_sheet():
    ctl, back, win = _scene()
    win.slide(4, 4)
    assert _pixel(ctl, 2, 2) == 1
    assert _pixel(ctl, 4, 4) == 2
    assert _pixel(ctl, 7, 7) == 2


def test_updown_reorders_and_renumbers():
    ctl = _ctl()
    a = _sheet(ctl, 2, 2, 1)
    b = _sheet(ctl, 2, 2, 2)
    c = _sheet(ctl, 2, 2, 3)
    for h, sht in enumerate((a, b, c)):
        sht.updown(h)
    a.updown(2)
    assert ctl.sheets == [b, c, a]
    assert [s.height for s in ctl.sheets] == [0, 1, 2]
    assert _pixel(ctl, 0, 0) == 1
    c.updown(0)
    assert ctl.sheets == [c, b, a]


def test_height_is_clamped():
    ctl = _ctl()
    back = _sheet(ctl, W, H, 1)
    back.updown(10)
    assert back.height == 0
    win = _sheet(ctl, 2, 2, 2)
    win.updown(1)
    back.updown(50)
    assert back.height == ctl.top
    assert ctl.sheets == [win, back]


def test_refresh_copies_changed_buffer():
    ctl, back, win = _scene()
    win.buf[:] = bytes([5]) * 16
    assert _pixel(ctl, 2, 2) == 2
    win.refresh(0, 0, 4, 4)
    assert _pixel(ctl, 2, 2) == 5
    assert _pixel(ctl, 5, 5) == 5


def test_refresh_of_hidden_sheet_does_nothing():
    ctl = _ctl()
    sht = _sheet(ctl, W, H, 3)
    sht.refresh(0, 0, W, H)
    assert ctl.vram == bytearray(W * H)


def test_free_releases_slot():
    ctl, back, win = _scene()
    win.free()
    assert not win.in_use
    assert win.height == -1
    assert _pixel(ctl, 2, 2) == 1
    assert ctl.alloc() is win


def test_setbuf_rejects_small_buffer():
    ctl = _ctl()
    sht = ctl.alloc()
    with pytest.raises(ValueError):
        sht.setbuf(bytearray(3), 2, 2, -1)