"""Stacked layers (sheets) composed into a frame buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(eq=False)
class Sheet:
    """A layer with its own pixel buffer, position and stacking height."""

    ctl: "SheetController" = field(repr=False)
    index: int
    buf: bytearray = field(default_factory=bytearray, repr=False)
    bxsize: int = 0
    bysize: int = 0
    vx0: int = 0
    vy0: int = 0
    col_inv: int = -1
    height: int = -1
    in_use: bool = False
    app_window: bool = False
    has_cursor: bool = False
    task: Optional[Any] = None

    def _area(self, vx0: int, vy0: int):
        return vx0, vy0, vx0 + self.bxsize, vy0 + self.bysize

    def setbuf(self, buf: bytearray, xsize: int, ysize: int, col_inv: int = -1) -> None:
        """Attach a pixel buffer; ``col_inv`` is the transparent colour or -1."""
        if len(buf) < xsize * ysize:
            raise ValueError("buffer smaller than the sheet")
        self.buf = buf
        self.bxsize = xsize
        self.bysize = ysize
        self.col_inv = col_inv

    def updown(self, height: int) -> None:
        """Move the sheet to ``height``; -1 hides it."""
        ctl = self.ctl
        old = self.height
        limit = ctl.top if old >= 0 else ctl.top + 1
        height = max(-1, min(height, limit))
        if height == old:
            return
        if old >= 0:
            ctl.sheets.pop(old)
        if height >= 0:
            ctl.sheets.insert(height, self)
        ctl._renumber()
        self.height = height

        area = self._area(self.vx0, self.vy0)
        if old > height:
            if height >= 0:
                ctl.refreshmap(*area, height + 1)
                ctl.refreshsub(*area, height + 1, old)
            else:
                ctl.refreshmap(*area, 0)
                ctl.refreshsub(*area, 0, old - 1)
        else:
            ctl.refreshmap(*area, height)
            ctl.refreshsub(*area, height, height)

    def refresh(self, bx0: int, by0: int, bx1: int, by1: int) -> None:
        """Redraw a rectangle given in sheet coordinates, if the sheet is shown."""
        if self.height >= 0:
            self.ctl.refreshsub(
                self.vx0 + bx0, self.vy0 + by0, self.vx0 + bx1, self.vy0 + by1,
                self.height, self.height,
            )

    def slide(self, vx0: int, vy0: int) -> None:
        """Move the sheet to screen position (vx0, vy0)."""
        ctl = self.ctl
        old_area = self._area(self.vx0, self.vy0)
        self.vx0 = vx0
        self.vy0 = vy0
        if self.height >= 0:
            new_area = self._area(vx0, vy0)
            ctl.refreshmap(*old_area, 0)
            ctl.refreshmap(*new_area, self.height)
            ctl.refreshsub(*old_area, 0, self.height - 1)
            ctl.refreshsub(*new_area, self.height, self.height)

    def free(self) -> None:
        """Hide the sheet and return it to the pool."""
        if self.height >= 0:
            self.updown(-1)
        self.in_use = False


class SheetController:
    """Owns the sheet pool, the stacking order and the ownership map of the screen."""

    def __init__(self, vram: bytearray, xsize: int, ysize: int, max_sheets: int = 256) -> None:
        if not 1 <= max_sheets <= 256:
            raise ValueError("max_sheets must be between 1 and 256")
        if len(vram) < xsize * ysize:
            raise ValueError("frame buffer smaller than the screen")
        self.vram = vram
        self.xsize = xsize
        self.ysize = ysize
        self.map = bytearray(xsize * ysize)
        self.sheets0 = [Sheet(self, i) for i in range(max_sheets)]
        self.sheets: List[Sheet] = []

    @property
    def top(self) -> int:
        """Height of the topmost shown sheet, -1 when none is shown."""
        return len(self.sheets) - 1

    def _renumber(self) -> None:
        for h, sheet in enumerate(self.sheets):
            sheet.height = h

    def alloc(self) -> Sheet:
        """Take a free sheet; raise RuntimeError when none is left."""
        for sheet in self.sheets0:
            if not sheet.in_use:
                sheet.in_use = True
                sheet.height = -1
                sheet.task = None
                sheet.app_window = False
                sheet.has_cursor = False
                return sheet
        raise RuntimeError("no free sheet")

    def _clip(self, vx0: int, vy0: int, vx1: int, vy1: int):
        return max(vx0, 0), max(vy0, 0), min(vx1, self.xsize), min(vy1, self.ysize)

    def refreshmap(self, vx0: int, vy0: int, vx1: int, vy1: int, h0: int) -> None:
        """Recompute which sheet owns each pixel of the area, from height ``h0`` up."""
        vx0, vy0, vx1, vy1 = self._clip(vx0, vy0, vx1, vy1)
        for sht in self.sheets[max(h0, 0):]:
            sid = sht.index
            bx0 = max(vx0 - sht.vx0, 0)
            by0 = max(vy0 - sht.vy0, 0)
            bx1 = min(vx1 - sht.vx0, sht.bxsize)
            by1 = min(vy1 - sht.vy0, sht.bysize)
            if bx1 <= bx0:
                continue
            fill = bytes([sid]) * (bx1 - bx0)
            for by in range(by0, by1):
                mrow = (sht.vy0 + by) * self.xsize + sht.vx0
                if sht.col_inv == -1:
                    self.map[mrow + bx0:mrow + bx1] = fill
                else:
                    brow = by * sht.bxsize
                    for bx in range(bx0, bx1):
                        if sht.buf[brow + bx] != sht.col_inv:
                            self.map[mrow + bx] = sid

    def refreshsub(self, vx0: int, vy0: int, vx1: int, vy1: int, h0: int, h1: int) -> None:
        """Copy the pixels that sheets ``h0`` to ``h1`` own in the area to the screen."""
        if h1 < h0:
            return
        vx0, vy0, vx1, vy1 = self._clip(vx0, vy0, vx1, vy1)
        for sht in self.sheets[max(h0, 0):h1 + 1]:
            sid = sht.index
            bx0 = max(vx0 - sht.vx0, 0)
            by0 = max(vy0 - sht.vy0, 0)
            bx1 = min(vx1 - sht.vx0, sht.bxsize)
            by1 = min(vy1 - sht.vy0, sht.bysize)
            for by in range(by0, by1):
                vrow = (sht.vy0 + by) * self.xsize + sht.vx0
                brow = by * sht.bxsize
                for bx in range(bx0, bx1):
                    if self.map[vrow + bx] == sid:
                        self.vram[vrow + bx] = sht.buf[brow + bx]