"""An in-memory character LCD of two rows with sixteen characters each.

Characters are written at the cursor, which wraps from the end of one row
to the start of the other. Three custom glyph codes stand for the exponent
marker, the negative exponent marker and the shift-down arrow.
"""

from __future__ import annotations

import logging
from itertools import takewhile
from typing import Union

MAX_CHARS_PER_LINE = 16
MAX_ROWS = 2

CGRAM_EXP = 0
CGRAM_EXP_NEG = 1
CGRAM_DOWN = 2

_CR = 13
_LF = 10
_TAB = 9

_GLYPHS = {CGRAM_EXP: "E", CGRAM_EXP_NEG: "-", CGRAM_DOWN: "V"}
_VALID_TEXT = frozenset("0123456789. -^Ero")
_BORDER = "|---|---|---|---|"

log = logging.getLogger(__name__)

Char = Union[str, int]


def _code(letter: Char) -> int:
    if isinstance(letter, str):
        if len(letter) != 1:
            raise ValueError(f"expected a single character, got {letter!r}")
        return ord(letter)
    return int(letter) & 0xFF


def _is_valid(code: int) -> bool:
    return code in (CGRAM_EXP, CGRAM_EXP_NEG) or chr(code) in _VALID_TEXT


class Lcd:
    """Character buffer with a cursor at ``row`` and ``col``."""

    def __init__(self) -> None:
        self._buf: list[list[str]] = []
        self.row = 0
        self.col = 0
        self._checks = True
        self.clear()

    def clear(self) -> None:
        """Blank the display and move the cursor home."""
        self._buf = [[" "] * MAX_CHARS_PER_LINE for _ in range(MAX_ROWS)]
        self.row = 0
        self.col = 0

    def go_to(self, row: int, col: int) -> None:
        """Move the cursor; both indices count from 0."""
        if not (0 <= row < MAX_ROWS and 0 <= col < MAX_CHARS_PER_LINE):
            raise ValueError(f"LCD position ({row}, {col}) out of range")
        self.row = row
        self.col = col

    def _to_other_row(self) -> None:
        self.row = 1 if self.row == 0 else 0
        self.col = 0

    def put_char(self, letter: Char) -> None:
        """Write one character (a string or a code) at the cursor and advance."""
        code = _code(letter)
        if code in (_CR, _LF):
            self.clear()
        elif code == _TAB:
            self._to_other_row()
        if self._checks and not _is_valid(code):
            log.warning(
                "invalid character %d at (%d, %d)", code, self.row, self.col
            )
        self._buf[self.row][self.col] = _GLYPHS.get(code, chr(code))
        self.col += 1
        if self.col >= MAX_CHARS_PER_LINE:
            self._to_other_row()

    def out_string(self, string: str, max_chars: int) -> None:
        """Write at most ``max_chars`` characters, stopping at a NUL."""
        for ch in takewhile(lambda c: c != "\0", string[: max(max_chars, 0)]):
            self.put_char(ch)

    def out_string_initial(self, string: str) -> None:
        """Write a start-up message of up to 32 characters without checks."""
        limit = MAX_ROWS * MAX_CHARS_PER_LINE
        if len(string) > limit:
            raise ValueError(f"initial string longer than {limit} characters")
        self._checks = False
        try:
            self.out_string(string, limit)
        finally:
            self._checks = True

    def clear_to_end(self, curr_row: int) -> None:
        """Fill the rest of ``curr_row`` with blanks, leaving the cursor after it."""
        while self.col != 0 and self.row == curr_row:
            self.put_char(" ")

    def out_nibble(self, x: int) -> None:
        """Write the low four bits of ``x`` as a lower-case hex digit."""
        x &= 0xF
        self.put_char(chr(ord("0") + x) if x <= 9 else chr(ord("a") + x - 10))

    def text(self) -> str:
        """All characters of the display, row after row."""
        return "".join("".join(line) for line in self._buf)

    def render(self) -> str:
        """A framed picture of the display with the cursor position."""
        lines = [f"(row,col)=({self.row},{self.col})", _BORDER]
        lines.extend("|" + "".join(line) for line in self._buf)
        lines.append(_BORDER)
        return "\n".join(lines) + "\n"