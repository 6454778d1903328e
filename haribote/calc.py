"""Integer expression calculator with C-like operators and 32-bit arithmetic."""

from __future__ import annotations

import sys
from typing import Callable, List, Optional, Sequence, Tuple

_INVALID = -0x7FFFFFFF
_INT_MAX = 0x7FFFFFFF
_HEX_DIGITS = "0123456789abcdefABCDEF"
_OCT_DIGITS = "01234567"
_DEC_DIGITS = "0123456789"


class CalcError(ValueError):
    """Raised when an expression cannot be evaluated."""


def _wrap(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _cdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    return a - b * _cdiv(a, b)


# operator text, lowest priority it binds at, priority of its right operand,
# operation, whether a zero right operand is an error
_BINARY: Tuple[Tuple[str, int, int, Callable[[int, int], int], bool], ...] = (
    ("<<", 3, 3, lambda a, b: a << (b & 31), True),
    (">>", 3, 3, lambda a, b: a >> (b & 31), True),
    ("+", 2, 2, lambda a, b: a + b, False),
    ("-", 2, 2, lambda a, b: a - b, False),
    ("*", 1, 1, lambda a, b: a * b, False),
    ("/", 1, 1, _cdiv, True),
    ("%", 1, 1, _cmod, True),
    ("&", 4, 4, lambda a, b: a & b, False),
    ("^", 5, 5, lambda a, b: a ^ b, False),
    ("|", 6, 6, lambda a, b: a | b, False),
)


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else "\0"

    def skipspace(self) -> None:
        while self.peek() == " ":
            self.pos += 1

    def advance(self, n: int) -> None:
        self.pos += n
        self.skipspace()

    def number(self) -> int:
        text, i = self.text, self.pos
        if text.startswith(("0x", "0X"), i) and i + 2 < len(text) and text[i + 2] in _HEX_DIGITS:
            base, allowed = 16, _HEX_DIGITS
            i += 2
        elif text[i] == "0":
            base, allowed = 8, _OCT_DIGITS
        else:
            base, allowed = 10, _DEC_DIGITS
        start = i
        while i < len(text) and text[i] in allowed:
            i += 1
        self.pos = i
        return min(int(text[start:i], base), _INT_MAX)

    def _operator(self, priority: int):
        for op in _BINARY:
            text, bind = op[0], op[1]
            if priority > bind and self.text.startswith(text, self.pos):
                return op
        return None

    def getnum(self, priority: int) -> int:
        self.skipspace()
        c = self.peek()
        if c in "+-~" and c != "\0":
            self.advance(1)
            i = self.getnum(0)
            if i != _INVALID:
                if c == "-":
                    i = _wrap(-i)
                elif c == "~":
                    i = ~i
        elif c == "(":
            self.advance(1)
            i = self.getnum(9)
            if self.peek() == ")":
                self.advance(1)
            else:
                i = _INVALID
        elif "0" <= c <= "9":
            i = self.number()
        else:
            i = _INVALID

        while i != _INVALID:
            self.skipspace()
            op = self._operator(priority)
            if op is None:
                break
            text, _bind, right, func, nonzero = op
            self.advance(len(text))
            j = self.getnum(right)
            if j == _INVALID or (nonzero and j == 0):
                i = _INVALID
            else:
                i = _wrap(func(i, j))
        self.skipspace()
        return i


def evaluate(expr: str) -> int:
    """Evaluate ``expr`` as a 32-bit signed integer; raise CalcError on failure.

    Text after a complete expression is ignored, as in the command.
    """
    result = _Parser(expr).getnum(9)
    if result == _INVALID:
        raise CalcError("error!")
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Evaluate the arguments as one expression and print it in decimal and hex."""
    args: List[str] = list(sys.argv[1:] if argv is None else argv)
    try:
        value = evaluate(" ".join(args))
    except CalcError:
        sys.stdout.write("error!\n")
        return 1
    sys.stdout.write(f"= {value} = 0x{value & 0xFFFFFFFF:x}\n")
    return 0