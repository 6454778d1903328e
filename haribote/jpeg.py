"""Baseline (sequential DCT) JPEG decoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

ZIGZAG: Tuple[int, ...] = (
    0, 1, 8, 16, 9, 2, 3, 10,
    17, 24, 32, 25, 18, 11, 4, 5,
    12, 19, 26, 33, 40, 48, 41, 34,
    27, 20, 13, 6, 7, 14, 21, 28,
    35, 42, 49, 56, 57, 50, 43, 36,
    29, 22, 15, 23, 30, 37, 44, 51,
    58, 59, 52, 45, 38, 31, 39, 46,
    53, 60, 61, 54, 47, 55, 62, 63,
)

_PLANE = 1024
_MAX_SAMPLING = 4
_MAX_COMPONENTS = 3


def idct_base_table() -> List[List[int]]:
    """The 64x64 fixed-point basis images used by the inverse DCT."""
    cost = [
        32768, 32138, 30274, 27246, 23170, 18205, 12540, 6393,
        0, -6393, -12540, -18205, -23170, -27246, -30274, -32138,
    ]
    cost += [-c for c in cost]

    def column(u: int) -> List[int]:
        step = u * 2
        i = 4 if step == 0 else u
        values = []
        for _ in range(8):
            values.append(cost[i])
            i = (i + step) & 31
        return values

    columns = [column(u) for u in range(8)]
    return [
        [(a * b) >> 15 for a in columns[u] for b in columns[v]]
        for u in range(8)
        for v in range(8)
    ]


_BASE = idct_base_table()


@dataclass(frozen=True)
class JpegInfo:
    """Picture size read from the frame header."""

    width: int
    height: int


@dataclass
class _Huff:
    sizes: List[int]
    codes: List[int]
    values: bytes


@dataclass
class _Component:
    ident: int
    h: int
    v: int
    qt: int


@dataclass
class _Scan:
    ident: int
    dc: int
    ac: int
    h: int = 0
    v: int = 0
    qt: int = 0


def _canonical_codes(sizes: List[int]) -> List[int]:
    codes: List[int] = []
    if not sizes:
        return codes
    num = len(sizes)
    code = 0
    length = sizes[0]
    k = 0
    while k < num:
        while k < num and sizes[k] == length:
            codes.append(code)
            code += 1
            k += 1
        if k >= num:
            break
        while True:
            code <<= 1
            length += 1
            if sizes[k] == length:
                break
    return codes


def _clamp(value: int) -> int:
    if value & ~0xFF:
        value = (~value) >> 24
    return value & 0xFF


def _idct(block: List[int]) -> List[int]:
    dest = [0] * 64
    for coeff, basis in zip(block, _BASE):
        if coeff:
            dest = [d + coeff * b for d, b in zip(dest, basis)]
    return [d >> 17 for d in dest]


@dataclass
class _Decoder:
    data: bytes
    fp: int = 0
    width: int = 0
    height: int = 0
    max_h: int = 0
    max_v: int = 0
    interval: int = 0
    components: List[_Component] = field(default_factory=list)
    scans: List[_Scan] = field(default_factory=list)
    dqt: List[List[int]] = field(default_factory=lambda: [[0] * 64 for _ in range(8)])
    huff: Dict[Tuple[int, int], _Huff] = field(default_factory=dict)
    pre_dc: List[int] = field(default_factory=lambda: [0, 0, 0])
    bit_buff: int = 0
    bit_remain: int = 0
    block: List[int] = field(default_factory=lambda: [0] * 64)
    mcu_buf: List[int] = field(default_factory=list)

    @property
    def end(self) -> int:
        return len(self.data)

    def _at(self, i: int) -> int:
        return self.data[i] if i < self.end else 0

    def _word(self, i: int) -> int:
        return self._at(i) << 8 | self._at(i + 1)

    def _fail(self) -> None:
        self.fp = self.end

    # ---- headers -------------------------------------------------------

    def parse(self) -> bool:
        """Read markers up to the start of scan; return whether that succeeded."""
        while True:
            if self.fp + 2 > self.end:
                self._fail()
                return False
            if self.data[self.fp] != 0xFF:
                return False
            marker = self.data[self.fp + 1]
            self.fp += 2
            if marker == 0xD8:
                continue
            if marker == 0xD9:
                self._fail()
                return False
            if marker == 0xC0:
                self._sof()
            elif marker == 0xC4:
                self._dht()
            elif marker == 0xDB:
                self._dqt()
            elif marker == 0xDD:
                if self.fp + 4 > self.end:
                    self._fail()
                    return False
                self.interval = self._word(self.fp + 2)
                self.fp += 4
            elif marker == 0xDA:
                return self._sos()
            else:
                if self.fp + 2 > self.end:
                    self._fail()
                    return False
                self.fp += self._word(self.fp)

    def _sof(self) -> None:
        if self.fp + 8 > self.end:
            self._fail()
            return
        self.height = self._word(self.fp + 3)
        self.width = self._word(self.fp + 5)
        count = self.data[self.fp + 7]
        self.fp += 8
        if count > _MAX_COMPONENTS or self.fp + count * 3 > self.end:
            self._fail()
            return
        self.components = []
        for _ in range(count):
            sample = self.data[self.fp + 1]
            h, v = (sample >> 4) & 0x0F, sample & 0x0F
            self.max_h = max(self.max_h, h)
            self.max_v = max(self.max_v, v)
            self.components.append(
                _Component(self.data[self.fp], h, v, self.data[self.fp + 2])
            )
            self.fp += 3

    def _dqt(self) -> None:
        if self.fp + 2 > self.end:
            self._fail()
            return
        size = self._word(self.fp) - 2
        self.fp += 2
        if self.fp + size > self.end:
            self._fail()
            return
        while size > 0:
            c = self._at(self.fp)
            self.fp += 1
            size -= 1
            table = self.dqt[c & 7]
            step = 2 if c & 0xF8 else 1
            for i in range(64):
                table[i] = self._at(self.fp)
                self.fp += step
            size -= 64 * step

    def _dht(self) -> None:
        if self.fp + 2 > self.end:
            self._fail()
            return
        length = self._word(self.fp) - 2
        self.fp += 2
        while length > 0:
            if self.fp + 17 > self.end:
                self._fail()
                return
            val = self.data[self.fp]
            counts = self.data[self.fp + 1:self.fp + 17]
            sizes = [size for size, n in enumerate(counts, 1) for _ in range(n)]
            num = len(sizes)
            self.fp += 17
            codes = _canonical_codes(sizes)
            if self.fp + num > self.end:
                self._fail()
                return
            values = self.data[self.fp:self.fp + num]
            self.fp += num
            self.huff[((val >> 4) & 0x0F, val & 0x0F)] = _Huff(sizes, codes, values)
            length -= 18 + num

    def _sos(self) -> bool:
        if self.fp + 3 > self.end:
            self._fail()
            return False
        count = self.data[self.fp + 2]
        self.fp += 3
        if count > _MAX_COMPONENTS or self.fp + count * 2 > self.end:
            self._fail()
            return False
        self.scans = []
        for _ in range(count):
            tables = self.data[self.fp + 1]
            self.scans.append(_Scan(self.data[self.fp], tables >> 4, tables & 0x0F))
            self.fp += 2
        self.fp += 3
        return True

    # ---- entropy decoding ----------------------------------------------

    def _bits(self, bit: int) -> int:
        buff = self.bit_buff
        remain = self.bit_remain
        while remain <= 16:
            if self.fp >= self.end:
                return 0
            c = self.data[self.fp]
            self.fp += 1
            if c == 0xFF:
                if self.fp >= self.end:
                    return 0
                self.fp += 1
            buff = ((buff << 8) | c) & 0xFFFFFFFF
            remain += 8
        shift = remain - bit
        raw = buff >> shift if shift >= 0 else buff << -shift
        ret = raw & ((1 << bit) - 1) & 0xFFFF
        self.bit_remain = remain - bit
        self.bit_buff = buff
        return ret

    def _huff_decode(self, tc: int, th: int) -> int:
        table = self.huff.get((tc, th))
        code = 0
        k = 0
        for size in range(1, 17):
            code = (code << 1) | self._bits(1)
            if table is None:
                continue
            while k < len(table.sizes) and table.sizes[k] == size:
                if table.codes[k] == code:
                    return table.values[k]
                k += 1
        return -1

    def _value(self, size: int) -> int:
        if not size:
            return 0
        val = self._bits(size)
        if not val & (1 << (size - 1)):
            val -= (1 << size) - 1
        return val

    def _decode_block(self, index: int, scan: _Scan) -> None:
        qt = self.dqt[scan.qt & 7]
        block = self.block
        size = self._huff_decode(0, scan.dc)
        if size < 0:
            return
        self.pre_dc[index] += self._value(size)
        block[0] = self.pre_dc[index] * qt[0]

        pos = 1
        while pos < 64:
            size = self._huff_decode(1, scan.ac)
            if size <= 0:
                break
            run = (size >> 4) & 0x0F
            val = self._value(size & 0x0F)
            while run > 0 and pos < 64:
                block[ZIGZAG[pos]] = 0
                pos += 1
                run -= 1
            if pos >= 64:
                break
            block[ZIGZAG[pos]] = val * qt[pos]
            pos += 1
        for rest in range(pos, 64):
            block[ZIGZAG[rest]] = 0

    # ---- MCU assembly --------------------------------------------------

    def _decode_init(self) -> None:
        for scan in self.scans:
            for comp in self.components:
                if comp.ident == scan.ident:
                    scan.h, scan.v, scan.qt = comp.h, comp.v, comp.qt
                    break
        self.mcu_buf = [0x80] * (_PLANE * 4)

    def _bitblt(self, src: List[int], offset: int, x0: int, y0: int, x1: int, y1: int) -> None:
        width = self.max_h * 8
        w, h = x1 - x0, y1 - y0
        for y in range(h):
            y2 = (y * 8 // h) * 8
            row = offset + (y0 + y) * width + x0
            for x in range(w):
                self.mcu_buf[row + x] = src[y2 + x * 8 // w]

    def _decode_mcu(self) -> None:
        mw, mh = self.max_h * 8, self.max_v * 8
        for index, scan in enumerate(self.scans):
            hh, vv = scan.h, scan.v
            for v in range(vv):
                for h in range(hh):
                    self._decode_block(index, scan)
                    dest = _idct(self.block)
                    self._bitblt(
                        dest, index * _PLANE,
                        mw * h // hh, mh * v // vv,
                        mw * (h + 1) // hh, mh * (v + 1) // vv,
                    )

    def _decode_yuv(self, h: int, v: int, out: bytearray, b_type: int) -> None:
        bpp = b_type & 0x7F
        mw, mh = self.max_h * 8, self.max_v * 8
        x0, y0 = h * mw, v * mh
        x1 = min(self.width - x0, mw)
        y1 = min(self.height - y0, mh)
        buf = self.mcu_buf
        py = 0
        for y in range(y1):
            pos = ((y0 + y) * self.width + x0) * bpp
            for _ in range(x1):
                y12 = buf[py] << 12
                u = buf[py + _PLANE]
                cr = buf[py + 2 * _PLANE]
                b = _clamp(128 + ((y12 - cr * 4 + u * 0x1C59) >> 12))
                g = _clamp(128 + ((y12 - cr * 0x0B6C) >> 12))
                r = _clamp(128 + ((y12 + cr * 0x166E) >> 12))
                if b_type == 4:
                    out[pos:pos + 3] = bytes((b, g, r))
                    py += 1
                    pos += 4
                else:
                    # The 16-bit path keeps reading the same source sample.
                    pixel = (r >> 3) << 11 | (g >> 2) << 5 | (b >> 3)
                    out[pos:pos + 2] = pixel.to_bytes(2, "little")
                    pos += 2
            py += mw - x1

    def decode(self, b_type: int) -> bytes:
        self._decode_init()
        mw, mh = self.max_h * 8, self.max_v * 8
        h_units = (self.width + mw - 1) // mw
        v_units = (self.height + mh - 1) // mh
        out = bytearray(self.width * self.height * (b_type & 0x7F))
        mcu_count = 0
        for v in range(v_units):
            for h in range(h_units):
                mcu_count += 1
                self._decode_mcu()
                self._decode_yuv(h, v, out, b_type)
                if self.interval > 0 and mcu_count >= self.interval:
                    self.bit_remain -= self.bit_remain & 7
                    self.bit_remain -= 8
                    self.pre_dc = [0, 0, 0]
                    mcu_count = 0
        return bytes(out)


def jpeg_info(data: bytes) -> JpegInfo:
    """Read the picture size; raise ValueError if ``data`` is not a usable JPEG."""
    decoder = _Decoder(bytes(data))
    if not decoder.parse() or decoder.width == 0:
        raise ValueError("not a baseline JPEG")
    return JpegInfo(decoder.width, decoder.height)


def decode_jpeg(data: bytes, b_type: int = 4) -> bytes:
    """Decode ``data`` to pixels, row by row.

    ``b_type`` 4 gives four bytes per pixel (blue, green, red, zero);
    ``b_type`` 2 gives 16-bit little-endian 5-6-5 pixels.
    """
    if b_type not in (2, 4):
        raise ValueError("b_type must be 2 or 4")
    decoder = _Decoder(bytes(data))
    if not decoder.parse() or decoder.width == 0:
        raise ValueError("not a baseline JPEG")
    if not (1 <= decoder.max_h <= _MAX_SAMPLING and 1 <= decoder.max_v <= _MAX_SAMPLING):
        raise ValueError("unsupported sampling factors")
    return decoder.decode(b_type)