"""Keyboard debouncing for a matrix of five rows by four columns.

Each key runs a small state machine driven by a saturating counter, a
hybrid of a quick-draw and an integrating debouncer. A key is reported as
newly pressed when it enters the low-to-high transition state.
"""

from __future__ import annotations

from enum import IntEnum
from itertools import cycle
from typing import Iterator, Optional, Sequence

TOTAL_ROWS = 5
M_COLS = 4

COUNT_LIM_LOW = -30
COUNT_LIM_HIGH = 30
THRESH_STEADY = 2
THRESH_TRANS = 2


class KeyState(IntEnum):
    STEADY_LOW = 0
    TRANS_LOW_HIGH = 1
    STEADY_HIGH = 2
    TRANS_HIGH_LOW = 3


_SIMULATED_ROW1 = (
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 2, 0, 2, 0, 2, 0, 2, 0, 2, 0, 2,
    2, 2, 0, 2, 2, 0, 2, 2, 0, 2, 2, 0,
    2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2,
    0, 2, 0, 2, 0, 2, 0, 2, 0, 2, 0, 2,
    0, 0, 2, 0, 0, 2, 0, 0, 2, 0, 0, 2,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
)


class KeyDebouncer:
    """Debounce state for every key of the matrix."""

    def __init__(self) -> None:
        self._counts = [[COUNT_LIM_LOW] * M_COLS for _ in range(TOTAL_ROWS)]
        self._states = [[KeyState.STEADY_LOW] * M_COLS for _ in range(TOTAL_ROWS)]
        self.unexpected_count = 0

    def state(self, row: int, col: int) -> KeyState:
        return self._states[row][col]

    def _step(self, pressed: bool, count: int, state: KeyState) -> tuple[int, KeyState]:
        if pressed:
            if count < COUNT_LIM_HIGH:
                count += 1
        elif count > COUNT_LIM_LOW:
            count -= 1

        if state is KeyState.STEADY_LOW:
            if count >= COUNT_LIM_LOW + THRESH_TRANS:
                return 0, KeyState.TRANS_LOW_HIGH
        elif state is KeyState.TRANS_LOW_HIGH:
            if count >= THRESH_STEADY:
                return COUNT_LIM_HIGH, KeyState.STEADY_HIGH
            if count <= -THRESH_STEADY:
                self.unexpected_count += 1
                return COUNT_LIM_LOW, KeyState.STEADY_LOW
        elif state is KeyState.STEADY_HIGH:
            if count <= COUNT_LIM_HIGH - THRESH_TRANS:
                return 0, KeyState.TRANS_HIGH_LOW
        elif state is KeyState.TRANS_HIGH_LOW:
            if count <= -THRESH_STEADY:
                return COUNT_LIM_LOW, KeyState.STEADY_LOW
            if count >= THRESH_STEADY:
                self.unexpected_count += 1
                return COUNT_LIM_HIGH, KeyState.STEADY_HIGH
        return count, state

    def debounce(self, keys: Sequence[int]) -> Optional[int]:
        """Feed one raw scan, a bit mask of pressed columns per row.

        Returns the code ``row * 4 + col`` of a newly pressed key, or None.
        When several keys go down in one scan the last one scanned wins.
        """
        if len(keys) != TOTAL_ROWS:
            raise ValueError(f"expected {TOTAL_ROWS} rows, got {len(keys)}")
        new_key: Optional[int] = None
        for i, row_bits in enumerate(keys):
            for j in range(M_COLS):
                curr_state = self._states[i][j]
                count, state = self._step(
                    bool(row_bits & (1 << j)), self._counts[i][j], curr_state
                )
                if (
                    curr_state is not KeyState.TRANS_LOW_HIGH
                    and state is KeyState.TRANS_LOW_HIGH
                ):
                    new_key = i * M_COLS + j
                self._counts[i][j] = count
                self._states[i][j] = state
        return new_key


def simulated_scan() -> Iterator[tuple[int, ...]]:
    """Endless raw scans of a test pattern that bounces one key in row 1."""
    for bits in cycle(_SIMULATED_ROW1):
        yield (0, bits, 0, 0, 0)