"""The four-level RPN register stack and the commands that act on it."""

from __future__ import annotations

from typing import Callable

from . import trig
from .dec80 import (
    Dec80,
    add,
    build_dec80,
    divide,
    is_nan,
    multiply,
    nan,
    negate,
    reciprocal,
    zero,
)
from .transcendental import exp, exp10, ln, log10, power, sqrt

STACK_SIZE = 4
_X, _Y, _Z, _T = range(STACK_SIZE)

Unary = Callable[[Dec80], Dec80]
Binary = Callable[[Dec80, Dec80], Dec80]

_UNARY_UP: dict[str, Unary] = {
    "-": trig.to_degree,
    "<": sqrt,
    "r": reciprocal,
    "1": trig.sin,
    "2": trig.cos,
    "3": trig.tan,
    "5": exp,
    "6": exp10,
    "8": ln,
    "9": log10,
}
_UNARY_DOWN: dict[str, Unary] = {
    "-": trig.to_radian,
    "1": trig.arcsin,
    "2": trig.arccos,
    "3": trig.arctan,
}
_BINARY: dict[str, Binary] = {
    "+": add,
    "*": multiply,
    "/": divide,
    "7": power,
}


class RpnStack:
    """X, Y, Z and T registers with LastX, a storage register and shift state.

    ``no_lift`` is 0 when a new entry lifts the stack, 1 right after Enter
    or Clear, and 2 for an entry made while lifting was disabled.
    """

    def __init__(self) -> None:
        self._regs: list[Dec80] = [zero()] * STACK_SIZE
        self._ptr = 0
        self.last_x = zero()
        self.stored = zero()
        self.no_lift = 0
        self.shifted_up = False
        self.shifted_down = False

    def _get(self, level: int) -> Dec80:
        return self._regs[(self._ptr + level) % STACK_SIZE]

    def _set(self, level: int, value: Dec80) -> None:
        self._regs[(self._ptr + level) % STACK_SIZE] = value

    def _lift(self) -> None:
        self._ptr = (self._ptr - 1) % STACK_SIZE

    def _drop(self) -> None:
        self._ptr = (self._ptr + 1) % STACK_SIZE

    def _pop(self) -> None:
        self._set(_X, self._get(_T))
        self._drop()

    def x(self) -> Dec80:
        return self._get(_X)

    def y(self) -> Dec80:
        return self._get(_Y)

    def clear_x(self) -> None:
        self._set(_X, zero())

    def push(self, signif_str: str, exponent: int) -> None:
        """Enter a number into X, lifting the stack unless lifting is disabled."""
        if not self.no_lift:
            self._lift()
        self._set(_X, build_dec80(signif_str, exponent))

    def _binary(self, op: Binary) -> None:
        x, y = self._get(_X), self._get(_Y)
        if is_nan(y) or is_nan(x):
            self._set(_Y, nan())
        else:
            self.last_x = x
            self._set(_Y, op(y, x))
        self._pop()

    def _unary(self, op: Unary) -> None:
        x = self._get(_X)
        if not is_nan(x):
            self.last_x = x
            self._set(_X, op(x))

    def _recall(self, value: Dec80) -> None:
        if self.no_lift != 1:
            self._lift()
        self._set(_X, value)

    def _cycle_shift(self) -> None:
        if self.shifted_up:
            self.shifted_up, self.shifted_down = False, True
        elif self.shifted_down:
            self.shifted_up, self.shifted_down = False, False
        else:
            self.shifted_up, self.shifted_down = True, False

    def process_cmd(self, cmd: str) -> None:
        """Carry out the command bound to a key character.

        'm' cycles the shift state; every other command clears it afterwards.
        Characters with no command are ignored.
        """
        if cmd == "m":
            self._cycle_shift()
            return
        self._dispatch(cmd)
        self.shifted_up = False
        self.shifted_down = False

    def _dispatch(self, cmd: str) -> None:
        up, down = self.shifted_up, self.shifted_down
        x = self._get(_X)
        if up and cmd == "+":
            self._recall(self.last_x)
        elif up and cmd == "/":
            self._recall(trig.pi())
        elif up and cmd == "=":
            self._recall(self.stored)
        elif up and cmd in _UNARY_UP:
            self._unary(_UNARY_UP[cmd])
        elif down and cmd in _UNARY_DOWN:
            self._unary(_UNARY_DOWN[cmd])
        elif cmd in _BINARY:
            self._binary(_BINARY[cmd])
        elif cmd == "-":
            self._set(_X, negate(x))
            self._binary(add)
            self.last_x = negate(self.last_x)
        elif cmd == "=":
            if not is_nan(x):
                self._lift()
                self._set(_X, self._get(_Y))
        elif cmd == ".":
            if up:
                self.stored = x
        elif cmd == "c":
            self.clear_x()
        elif cmd == "<":
            if not is_nan(x):
                self._set(_X, negate(x))
        elif cmd == "r":
            if not is_nan(x):
                self._set(_X, self._get(_Y))
                self._set(_Y, x)
        elif cmd == "4":
            if up:
                self._drop()
            elif down:
                self._lift()