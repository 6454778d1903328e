"""Fixed-capacity FIFO of integers used for event delivery between tasks."""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Optional


class FifoOverrun(Exception):
    """Raised when data is put into a full FIFO."""


class Fifo32:
    """A bounded FIFO of integers.

    ``wake`` is called after every successful ``put``; a scheduler uses it
    to wake the task that owns the FIFO.
    """

    def __init__(self, size: int, wake: Optional[Callable[[], None]] = None) -> None:
        if size <= 0:
            raise ValueError("FIFO size must be positive")
        self.size = size
        self.wake = wake
        self.overrun = False
        self._items: Deque[int] = deque()

    def put(self, data: int) -> None:
        """Append ``data``; raise FifoOverrun and set ``overrun`` when full."""
        if len(self._items) >= self.size:
            self.overrun = True
            raise FifoOverrun("FIFO is full")
        self._items.append(data)
        if self.wake is not None:
            self.wake()

    def get(self) -> int:
        """Remove and return the oldest item; raise IndexError when empty."""
        if not self._items:
            raise IndexError("FIFO is empty")
        return self._items.popleft()

    def status(self) -> int:
        """Number of items currently stored."""
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)