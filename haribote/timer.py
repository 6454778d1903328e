"""Tick-driven one-shot timers that deliver data into FIFOs."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import List, Optional

from .fifo import Fifo32, FifoOverrun

_NO_TIMEOUT = 0xFFFFFFFF


@dataclass(eq=False)
class Timer:
    """A timer slot."""

    index: int
    in_use: bool = False
    running: bool = False
    auto_cancel: bool = False
    timeout: int = 0
    fifo: Optional[Fifo32] = None
    data: int = 0


class TimerController:
    """Owns the timer slots and the list of running timers, ordered by timeout."""

    def __init__(self, max_timers: int = 500) -> None:
        if max_timers <= 0:
            raise ValueError("need at least one timer")
        self.count = 0
        self.timers = [Timer(i) for i in range(max_timers)]
        self._active: List[Timer] = []

    @property
    def next_timeout(self) -> int:
        return self._active[0].timeout if self._active else _NO_TIMEOUT

    def alloc(self) -> Timer:
        """Take a free timer; raise RuntimeError when none is left."""
        for timer in self.timers:
            if not timer.in_use:
                timer.in_use = True
                timer.running = False
                timer.auto_cancel = False
                return timer
        raise RuntimeError("no free timer")

    def free(self, timer: Timer) -> None:
        """Return ``timer`` to the pool."""
        self.cancel(timer)
        timer.in_use = False

    def init(self, timer: Timer, fifo: Optional[Fifo32], data: int) -> None:
        """Set where the timer delivers and what it delivers."""
        timer.fifo = fifo
        timer.data = data

    def settime(self, timer: Timer, timeout: int) -> None:
        """Start ``timer`` to fire ``timeout`` ticks from now."""
        if timer.running:
            self._active.remove(timer)
        timer.timeout = timeout + self.count
        timer.running = True
        pos = bisect.bisect_left(self._active, timer.timeout, key=lambda t: t.timeout)
        self._active.insert(pos, timer)

    def tick(self) -> List[Timer]:
        """Advance one tick; deliver and return the timers that expired."""
        self.count += 1
        expired: List[Timer] = []
        while self._active and self._active[0].timeout <= self.count:
            timer = self._active.pop(0)
            timer.running = False
            expired.append(timer)
            if timer.fifo is not None:
                try:
                    timer.fifo.put(timer.data)
                except FifoOverrun:
                    pass
        return expired

    def cancel(self, timer: Timer) -> bool:
        """Stop a running timer; return whether it was running."""
        if not timer.running:
            return False
        self._active.remove(timer)
        timer.running = False
        return True

    def cancel_all(self, fifo: Fifo32) -> None:
        """Cancel and free every auto-cancel timer that delivers to ``fifo``."""
        for timer in self.timers:
            if timer.in_use and timer.auto_cancel and timer.fifo is fifo:
                self.cancel(timer)
                self.free(timer)