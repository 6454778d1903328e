"""Scan-code to character translation and keyboard modifier state."""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Tuple

KEYCMD_LED = 0xED

_KEYTABLE0 = (
    b"\0\0" b"1234567890-^" b"\x08\0"
    b"QWERTYUIOP@[" b"\n\0AS"
    b"DFGHJKL;:" b"\0\0]ZXCV"
    b"BNM,./\0*\0 " + b"\0" * 6
    + b"\0" * 7 + b"789-456+1"
    + b"230." + b"\0" * 12
    + b"\0" * 16
    + b"\0\0\0\\" + b"\0" * 9 + b"\\\0\0"
)

_KEYTABLE1 = (
    b"\0\0" b"!\"#$%&'()~=~" b"\x08\0"
    b"QWERTYUIOP`{" b"\n\0AS"
    b"DFGHJKL+*" b"\0\0}ZXCV"
    b"BNM<>?\0*\0 " + b"\0" * 6
    + b"\0" * 7 + b"789-456+1"
    + b"230." + b"\0" * 12
    + b"\0" * 16
    + b"\0\0\0_" + b"\0" * 9 + b"|\0\0"
)

if len(_KEYTABLE0) != 0x80 or len(_KEYTABLE1) != 0x80:
    raise RuntimeError("key tables must have 128 entries")

_CAPS = 4
_NUM = 2
_SCROLL = 1

_LED_KEYS = {0x3A: _CAPS, 0x45: _NUM, 0x46: _SCROLL}
_SHIFT_PRESS = {0x2A: 1, 0x36: 2}
_SHIFT_RELEASE = {0xAA: 1, 0xB6: 2}


def key_to_char(code: int, shift: int, leds: int) -> int:
    """Character code for scan code ``code``, or 0 if the key makes none.

    ``shift`` is non-zero while a shift key is held; bit 2 of ``leds`` is
    Caps Lock, which swaps the case of letters.
    """
    if not 0 <= code <= 0xFF:
        raise ValueError("scan code must be between 0 and 255")
    if code >= 0x80:
        return 0
    ch = (_KEYTABLE1 if shift else _KEYTABLE0)[code]
    if ord("A") <= ch <= ord("Z"):
        caps = (leds & _CAPS) != 0
        if caps == (shift != 0):
            ch += 0x20
    return ch


class KeyboardState:
    """Shift and lock-key state, plus the commands queued for the keyboard.

    ``keycmd`` holds bytes still to be sent to the keyboard controller;
    ``keycmd_wait`` is the byte last sent and not yet acknowledged, or -1.
    """

    def __init__(self, leds: int = 0) -> None:
        self.shift = 0
        self.leds = leds & 7
        self.keycmd: Deque[int] = deque()
        self.keycmd_wait = -1
        self._queue_leds()

    def _queue_leds(self) -> None:
        self.keycmd.append(KEYCMD_LED)
        self.keycmd.append(self.leds)

    def feed(self, code: int) -> Tuple[int, Optional[str]]:
        """Process one scan code.

        Returns the character it types (0 for none) and the action it asks
        for: "switch_window" (Tab), "break_app" (Shift+F1), "new_console"
        (Shift+F2), "raise_window" (F11), "ack" (keyboard accepted a
        command) or "resend" (keyboard rejected it), or None.
        """
        ch = key_to_char(code, self.shift, self.leds)
        action: Optional[str] = None

        if code == 0x0F:
            action = "switch_window"
        if code in _SHIFT_PRESS:
            self.shift |= _SHIFT_PRESS[code]
        if code in _SHIFT_RELEASE:
            self.shift &= ~_SHIFT_RELEASE[code]
        if code in _LED_KEYS:
            self.leds ^= _LED_KEYS[code]
            self._queue_leds()
        if code == 0x3B and self.shift:
            action = "break_app"
        if code == 0x3C and self.shift:
            action = "new_console"
        if code == 0x57:
            action = "raise_window"
        if code == 0xFA:
            self.keycmd_wait = -1
            action = "ack"
        if code == 0xFE:
            action = "resend"
        return ch, action