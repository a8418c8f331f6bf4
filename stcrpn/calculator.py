"""The calculator front end: number entry, key dispatch and the LCD layout.

Keys are numbered ``row * 4 + col`` with columns counted from the right,
as the keyboard matrix reports them. Digits and the decimal point build a
number on the second display line; operation keys push it onto the stack
and run their command. After every key the display shows Y (or X while a
number is being typed) on the first line and X or the entry on the second.
"""

from __future__ import annotations

import argparse
import sys
from enum import IntEnum
from typing import Optional, Sequence

from .dec80 import Dec80, to_str
from .lcd import CGRAM_DOWN, CGRAM_EXP, CGRAM_EXP_NEG, MAX_CHARS_PER_LINE, MAX_ROWS, Lcd
from .stack import RpnStack

KEY_MAP = (
    "c", "<", "r", "m",
    "/", "9", "8", "7",
    "*", "6", "5", "4",
    "-", "3", "2", "1",
    "+", "=", ".", "0",
)
NUM_COLS = 4
NUM_ROWS = len(KEY_MAP) // NUM_COLS
VER_STR = "STC RPN         Calculator v1.14"

_MAX_ENTRY = MAX_CHARS_PER_LINE
_EXP_COL = MAX_CHARS_PER_LINE - 3
_OPERATION_KEYS = frozenset("+*-/<r")


class Entry(IntEnum):
    """Stage of number entry; the order matters for comparisons."""

    DONE_CLEARED = 0
    DONE = 1
    SIGNIF = 2
    FRAC = 3
    EXP = 4
    EXP_NEG = 5


def _int8(value: int) -> int:
    return ((value + 128) & 0xFF) - 128


class Calculator:
    """An RPN calculator driven by key presses, with an emulated LCD."""

    def __init__(self) -> None:
        self.stack = RpnStack()
        self.lcd = Lcd()
        self.entering = Entry.DONE
        self._entry: list[str] = []
        self._exp_ones = 0
        self._exp_tens = 0
        self._exp_i = 0
        self.lcd.out_string_initial(VER_STR)

    # ----------------------------------------------------------- input
    def key_pressed(self, keycode: int) -> None:
        """Handle the key with matrix code ``keycode`` and redraw the display."""
        if not 0 <= keycode < len(KEY_MAP):
            raise ValueError(f"key code {keycode} out of range")
        self._handle(KEY_MAP[keycode])
        self._refresh()

    def press(self, key: str) -> None:
        """Handle the key labelled by the command character ``key``."""
        if len(key) != 1 or key not in KEY_MAP:
            raise ValueError(f"unknown key {key!r}")
        self.key_pressed(KEY_MAP.index(key))

    def button_clicked(self, row: int, col: int) -> None:
        """Handle a click on the on-screen button at ``row`` and ``col``.

        Columns are counted from the left here, as they are laid out.
        """
        if not (0 <= row < NUM_ROWS and 0 <= col < NUM_COLS):
            raise ValueError(f"button ({row}, {col}) out of range")
        self.key_pressed((NUM_COLS - 1 - col) + NUM_COLS * row)

    def lcd_text(self) -> str:
        """The display contents, one framed line per LCD row."""
        text = self.lcd.text()
        rows = (
            text[i * MAX_CHARS_PER_LINE:(i + 1) * MAX_CHARS_PER_LINE]
            for i in range(MAX_ROWS)
        )
        return "lcd text:\n" + "".join(f"|{row}|\n" for row in rows)

    # ----------------------------------------------------------- entry
    def _is_done(self) -> bool:
        return self.entering <= Entry.DONE

    def _reset_entry(self) -> None:
        self._entry = []
        self._exp_i = 0
        self._exp_ones = 0
        self._exp_tens = 0

    def _exp_digit(self, digit: int) -> None:
        if self._exp_i == 0:
            self._exp_ones = digit
            self._exp_i = 1
        else:
            self._exp_tens = self._exp_ones
            self._exp_ones = digit
            self._exp_i = 1 if self._exp_i >= 2 else 2

    def _finish(self, cmd: str) -> None:
        """Push any number being entered, then run ``cmd`` on the stack."""
        stack = self.stack
        if not self._is_done():
            exponent = 10 * self._exp_tens + self._exp_ones
            if self.entering == Entry.EXP_NEG:
                exponent = -exponent
            stack.push("".join(self._entry), exponent)
            self._reset_entry()
            if stack.no_lift:
                stack.no_lift += 1
        stack.process_cmd(cmd)
        self.entering = Entry.DONE
        stack.no_lift = 0

    def _handle(self, key: str) -> None:
        stack = self.stack
        shifted = stack.shifted_up or stack.shifted_down
        if key == "0":
            # With a shift this is the power-off combination: nothing to do.
            if shifted:
                pass
            elif self.entering >= Entry.EXP:
                self._exp_digit(0)
            elif self._is_done():
                self.entering = Entry.SIGNIF
            elif self._entry and len(self._entry) < _MAX_ENTRY:
                self._entry.append(key)
        elif key in "123456789":
            if shifted:
                self._finish(key)
            elif self.entering >= Entry.EXP:
                self._exp_digit(int(key))
            elif self._is_done():
                self.entering = Entry.SIGNIF
                self._entry.append(key)
            elif len(self._entry) < _MAX_ENTRY:
                self._entry.append(key)
        elif key == ".":
            if shifted:
                self._finish(key)
            elif self._is_done():
                self._entry = ["0", "."]
                self.entering = Entry.FRAC
            elif self.entering == Entry.SIGNIF:
                if not self._entry:
                    self._entry.append("0")
                self._entry.append(".")
                self.entering = Entry.FRAC
            elif self.entering == Entry.EXP_NEG:
                self.entering = Entry.EXP
            else:
                self.entering = Entry(self.entering + 1)
        elif key == "=":
            self._finish(key)
            if not shifted:
                stack.no_lift = 1
        elif key == "c":
            if shifted or self._is_done():
                stack.shifted_up = False
                stack.shifted_down = False
                stack.no_lift = 1
                self._reset_entry()
                self.entering = Entry.DONE_CLEARED
                stack.process_cmd(key)
            elif self.entering >= Entry.EXP:
                self.entering = Entry(self.entering - 1)
                self._exp_i = 0
                self._exp_ones = 0
                self._exp_tens = 0
            elif self._entry:
                if self._entry.pop() == ".":
                    self.entering = Entry.SIGNIF
        elif key in _OPERATION_KEYS:
            self._finish(key)
        else:
            stack.process_cmd(key)

    # --------------------------------------------------------- display
    def _show_number(self, value: Dec80) -> None:
        lcd = self.lcd
        text, exponent = to_str(value)
        if exponent == 0:
            lcd.out_string(text, MAX_CHARS_PER_LINE)
            return
        lcd.out_string(text, _EXP_COL)
        exponent = _int8(exponent)
        lcd.put_char(CGRAM_EXP_NEG if exponent < 0 else CGRAM_EXP)
        exponent = abs(exponent)
        lcd.put_char(chr(ord("0") + exponent // 10))
        lcd.put_char(chr(ord("0") + exponent % 10))

    def _refresh(self) -> None:
        lcd = self.lcd
        stack = self.stack
        lcd.go_to(0, 0)
        if self._is_done() or stack.no_lift:
            self._show_number(stack.y())
        else:
            self._show_number(stack.x())
        lcd.clear_to_end(0)

        if self.entering == Entry.DONE:
            self._show_number(stack.x())
        elif not self._entry:
            lcd.put_char("0")
        elif self.entering < Entry.EXP:
            lcd.out_string("".join(self._entry), MAX_CHARS_PER_LINE)
        else:
            significand = self._entry[:_EXP_COL]
            for ch in significand:
                lcd.put_char(ch)
            if len(significand) < _EXP_COL:
                for _ in range(_EXP_COL - len(significand)):
                    lcd.put_char(" ")
            else:
                lcd.go_to(1, _EXP_COL)
            lcd.put_char(CGRAM_EXP_NEG if self.entering == Entry.EXP_NEG else CGRAM_EXP)
            lcd.put_char(chr(ord("0") + self._exp_tens))
            lcd.put_char(chr(ord("0") + self._exp_ones))
        lcd.clear_to_end(1)

        if stack.shifted_up:
            lcd.put_char("^")
        elif stack.shifted_down:
            lcd.put_char(CGRAM_DOWN)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the calculator on keys from the command line or from standard input."""
    parser = argparse.ArgumentParser(
        prog="stcrpn",
        description="RPN calculator. Keys: digits, '.', '=' (enter), "
        "'+', '-', '*', '/', '<' (+/-), 'r' (swap), 'c' (clear), 'm' (shift).",
    )
    parser.add_argument(
        "keys",
        nargs="?",
        help="keys to press; without it keys are read line by line from stdin",
    )
    args = parser.parse_args(argv)
    calc = Calculator()

    if args.keys is not None:
        try:
            for key in args.keys:
                calc.press(key)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        sys.stdout.write(calc.lcd_text())
        return 0

    sys.stdout.write(calc.lcd_text())
    for line in sys.stdin:
        for key in "".join(line.split()):
            try:
                calc.press(key)
            except ValueError as exc:
                print(f"error: {exc}", file=sys.stderr)
        sys.stdout.write(calc.lcd_text())
    return 0