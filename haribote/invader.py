"""A text-cell model of the invader shooting game."""

from __future__ import annotations

from typing import List

_ROW = " abcd abcd abcd abcd abcd "
_COLUMNS = 40
_ROWS = 14
_FIGHTER_ROW = 13


def _cdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def setdec8(i: int) -> str:
    """The last eight decimal digits of ``i``, zero padded."""
    digits = []
    for _ in range(8):
        q = _cdiv(i, 10)
        digits.append(chr(ord("0") + i - q * 10))
        i = q
    return "".join(reversed(digits))


class InvaderGame:
    """Game state advanced one frame at a time.

    Invaders are drawn as the letters a to d, the fighter as "efg" and the
    laser as "h". Key presses that cannot take effect yet are remembered
    until they can.
    """

    def __init__(self) -> None:
        self.high = 0
        self.lx = 0
        self._restart()

    def _restart(self) -> None:
        self.score = 0
        self.point = 1
        self.movewait0 = 20
        self.fx = 18
        self.game_over = False
        self._next_group()

    def _next_group(self) -> None:
        self.ix = 7
        self.iy = 1
        self.invline = 6
        self.invaders: List[List[str]] = [list(_ROW) for _ in range(6)]
        self.keyflag = [False, False, False]
        self.ly = 0
        self.laserwait = 0
        self.movewait = self.movewait0
        self.idir = 1

    def _in_block(self) -> bool:
        return (
            self.ix < self.lx < self.ix + 25
            and self.iy <= self.ly < self.iy + self.invline
        )

    def _laser(self) -> None:
        self.ly -= 1
        if self.ly == 0:
            self.point -= 10
            if self.point <= 0:
                self.point = 1
        if not self._in_block():
            return
        row = self.invaders[self.ly - self.iy]
        col = self.lx - self.ix
        if row[col] == " ":
            return
        self.score += self.point
        self.point += 1
        self.high = max(self.high, self.score)
        p = col - 1
        while row[p] != " ":
            p -= 1
        for k in range(1, 5):
            row[p + k] = " "
        while self.invline > 0 and all(c == " " for c in self.invaders[self.invline - 1]):
            self.invline -= 1
        if self.invline == 0:
            self.movewait0 -= self.movewait0 // 3
            self._next_group()
        else:
            self.ly = 0

    def step(self, left: bool = False, right: bool = False, fire: bool = False) -> bool:
        """Advance one frame with the keys pressed during it.

        Returns False on the frame the game ends. A step on a finished game
        starts a new one, keeping the high score.
        """
        if self.game_over:
            self._restart()
            return True

        if self.laserwait:
            self.laserwait -= 1
            self.keyflag[2] = False
        for i, pressed in enumerate((left, right, fire)):
            if pressed:
                self.keyflag[i] = True

        if self.keyflag[0] and self.fx > 0:
            self.fx -= 1
            self.keyflag[0] = False
        if self.keyflag[1] and self.fx < 37:
            self.fx += 1
            self.keyflag[1] = False
        if self.keyflag[2] and self.laserwait == 0:
            self.laserwait = 15
            self.lx = self.fx + 1
            self.ly = _FIGHTER_ROW

        if self.movewait:
            self.movewait -= 1
        else:
            self.movewait = self.movewait0
            if not 0 <= self.ix + self.idir <= 14:
                if self.iy + self.invline == _FIGHTER_ROW:
                    self.game_over = True
                    return False
                self.idir = -self.idir
                self.iy += 1
            else:
                self.ix += self.idir

        if self.ly > 0:
            self._laser()
        return True

    def render(self) -> List[str]:
        """The screen as 14 lines of 40 characters."""
        screen = [[" "] * _COLUMNS for _ in range(_ROWS)]

        def put(x: int, y: int, text: str) -> None:
            for k, ch in enumerate(text):
                if 0 <= x + k < _COLUMNS:
                    screen[y][x + k] = ch

        put(4, 0, "SCORE:" + setdec8(self.score))
        put(22, 0, "HIGH:" + setdec8(self.high))
        for i, row in enumerate(self.invaders[:self.invline]):
            put(self.ix, self.iy + i, "".join(row))
        put(self.fx, _FIGHTER_ROW, "efg")
        if self.ly > 0:
            put(self.lx, self.ly, "h")
        if self.game_over:
            put(15, 6, "GAME OVER")
        return ["".join(row) for row in screen]