"""Decoder for three-byte PS/2 mouse packets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class MouseDecoder:
    """Collects bytes from the mouse and yields button and motion state.

    Phase 0 waits for the 0xfa acknowledgement; phases 1 to 3 collect
    the three bytes of a packet.
    """

    phase: int = 0
    buf: List[int] = field(default_factory=lambda: [0, 0, 0])
    btn: int = 0
    x: int = 0
    y: int = 0

    def decode(self, dat: int) -> bool:
        """Feed one byte; return True when a whole packet was decoded."""
        dat &= 0xFF
        if self.phase == 0:
            if dat == 0xFA:
                self.phase = 1
            return False
        if self.phase == 1:
            if (dat & 0xC8) == 0x08:
                self.buf[0] = dat
                self.phase = 2
            return False
        if self.phase == 2:
            self.buf[1] = dat
            self.phase = 3
            return False
        self.buf[2] = dat
        self.phase = 1
        self.btn = self.buf[0] & 0x07
        self.x = self.buf[1]
        self.y = self.buf[2]
        if self.buf[0] & 0x10:
            self.x -= 0x100
        if self.buf[0] & 0x20:
            self.y -= 0x100
        self.y = -self.y
        return True