import pytest

from haribote.keymap import KEYCMD_LED, KeyboardState, key_to_char


def test_letter_lowercase_without_shift_or_caps():
    assert key_to_char(0x1E, 0, 0) == ord("a")


def test_letter_uppercase_with_shift():
    assert key_to_char(0x1E, 1, 0) == ord("A")


def test_caps_lock_uppercases():
    assert key_to_char(0x10, 0, 4) == ord("Q")


def test_caps_and_shift_cancel():
    assert key_to_char(0x10, 2, 4) == ord("q")


def test_digit_and_shifted_symbol():
    assert key_to_char(0x02, 0, 0) == ord("1")
    assert key_to_char(0x02, 1, 0) == ord("!")


def test_enter_and_backspace():
    assert key_to_char(0x1C, 0, 0) == 0x0A
    assert key_to_char(0x0E, 0, 0) == 0x08


def test_release_codes_make_no_character():
    assert all(key_to_char(code, 0, 0) == 0 for code in range(0x80, 0x100))


def test_invalid_scan_code():
    with pytest.raises(ValueError):
        key_to_char(256, 0, 0)


def test_no_uppercase_letters_in_plain_mode():
    chars = [key_to_char(code, 0, 0) for code in range(0x80)]
    assert not any(ord("A") <= c <= ord("Z") for c in chars)


def test_caps_swaps_case_of_every_letter():
    for code in range(0x80):
        plain = key_to_char(code, 0, 0)
        if ord("a") <= plain <= ord("z"):
            assert key_to_char(code, 0, 4) == plain - 0x20


def test_init_queues_led_command():
    state = KeyboardState(5)
    assert list(state.keycmd) == [KEYCMD_LED, 5]
    assert state.keycmd_wait == -1


def test_shift_press_and_release():
    state = KeyboardState()
    assert state.feed(0x2A) == (0, None)
    assert state.feed(0x1E)[0] == ord("A")
    state.feed(0xAA)
    assert state.shift == 0
    assert state.feed(0x1E)[0] == ord("a")


def test_both_shifts_tracked_separately():
    state = KeyboardState()
    state.feed(0x2A)
    state.feed(0x36)
    state.feed(0xAA)
    assert state.shift == 2
    state.feed(0xB6)
    assert state.shift == 0


def test_caps_lock_toggles_and_queues():
    state = KeyboardState()
    state.keycmd.clear()
    state.feed(0x3A)
    assert state.leds & 4
    assert list(state.keycmd) == [KEYCMD_LED, state.leds]
    assert state.feed(0x1E)[0] == ord("A")
    state.feed(0x3A)
    assert state.leds & 4 == 0


def test_num_and_scroll_lock_bits():
    state = KeyboardState()
    state.feed(0x45)
    state.feed(0x46)
    assert state.leds == 3


def test_shift_function_keys():
    state = KeyboardState()
    assert state.feed(0x3B)[1] is None
    assert state.feed(0x3C)[1] is None
    state.feed(0x2A)
    assert state.feed(0x3B)[1] == "break_app"
    assert state.feed(0x3C)[1] == "new_console"


def test_tab_and_f11():
    state = KeyboardState()
    assert state.feed(0x0F)[1] == "switch_window"
    assert state.feed(0x57)[1] == "raise_window"


def test_ack_clears_wait_and_resend():
    state = KeyboardState()
    state.keycmd_wait = state.keycmd.popleft()
    assert state.feed(0xFE)[1] == "resend"
    assert state.keycmd_wait == KEYCMD_LED
    assert state.feed(0xFA)[1] == "ack"
    assert state.keycmd_wait == -1


def test_feed_rejects_bad_code():
    with pytest.raises(ValueError):
        KeyboardState().feed(-1)