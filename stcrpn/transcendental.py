"""Logarithms, exponentials, powers and square roots of Dec80 numbers.

ln and exp use digit-by-digit pseudo-division with the constants
ln(1 + 10^-j); the square root comes from Newton-Raphson iteration on
1/sqrt(x) started from a linear estimate.
"""

from __future__ import annotations

from .dec80 import (
    NUM_LSU,
    Dec80,
    _make_raw,
    _shift_left,
    _shift_right,
    add,
    divide,
    is_nan,
    is_zero,
    multiply,
    nan,
    negate,
    one,
    reciprocal,
    remove_leading_zeros,
    zero,
)

_ZEROS = (0,) * NUM_LSU


def _digits(*pairs: int) -> tuple[int, ...]:
    return tuple(pairs) + (0,) * (NUM_LSU - len(pairs))


def _with_lsu(x: Dec80, lsu: list[int]) -> Dec80:
    return Dec80(x.exponent, tuple(lsu))


def _shifted_right(x: Dec80, times: int = 1) -> Dec80:
    lsu = list(x.lsu)
    for _ in range(times):
        _shift_right(lsu)
    return _with_lsu(x, lsu)


def _shifted_left(x: Dec80) -> Dec80:
    lsu = list(x.lsu)
    _shift_left(lsu)
    return _with_lsu(x, lsu)


LN_10 = Dec80(0, (23, 2, 58, 50, 92, 99, 40, 45, 68))

_LN_A_DIGITS = (
    (69, 31, 47, 18, 5, 59, 94, 53, 9),
    (95, 31, 1, 79, 80, 43, 24, 86, 0),
    (99, 50, 33, 8, 53, 16, 80, 82, 84),
    (99, 95, 0, 33, 30, 83, 53, 31, 67),
    (99, 99, 50, 0, 33, 33, 8, 33, 33),
    (99, 99, 95, 0, 0, 33, 33, 29, 95),
    (99, 99, 99, 50, 0, 0, 33, 5, 35),
    (99, 99, 99, 95, 0, 0, 2, 76, 40),
    (99, 99, 99, 99, 50, 0, 15, 98, 65),
)
# ln(1 + 10^-j) for j = 0 .. 8
_LN_A = tuple(
    Dec80(_make_raw(-(j + 1), False), digits) for j, digits in enumerate(_LN_A_DIGITS)
)
_NUM_A = len(_LN_A)

_TEN = Dec80(1, _digits(10))
_EXP_LIMIT = Dec80(2, _digits(29, 47))  # 294.7
_HALF = Dec80(0, _digits(5))
_THREE_HALVES = Dec80(0, _digits(15))


def ln(x: Dec80) -> Dec80:
    """Natural logarithm; NaN for zero, negative numbers and NaN."""
    if x.is_negative() or is_zero(x):
        return nan()
    x = remove_leading_zeros(x)
    exp_count = x.exponent_value() + 1
    acc = add(negate(Dec80(0, x.lsu)), _TEN)  # 10 - significand
    b_j = acc
    counts: list[int] = []
    for j in range(_NUM_A):
        if j:
            b_j = _shifted_left(b_j)
        acc = b_j
        k = 0
        while not acc.is_negative():
            b_j = acc
            acc = add(acc, _shifted_right(acc, j))
            if acc.lsu[0] >= 10 and acc.exponent_value() > 0:
                acc = Dec80(acc.exponent, (acc.lsu[0] - 10,) + acc.lsu[1:])
            else:
                acc = Dec80(-1, acc.lsu)
            k += 1
        counts.append(k - 1)

    acc = b_j
    for j in reversed(range(_NUM_A)):
        term = Dec80(0, _LN_A[j].lsu)
        for _ in range(counts[j]):
            acc = add(acc, term)
        acc = _shifted_right(acc)
    remainder = negate(acc)

    negative = exp_count < 0
    n = abs(exp_count)
    lsu = [0] * NUM_LSU
    if n >= 10000:
        lsu[0] = n // 10000
        n %= 10000
        lsu[1], lsu[2] = divmod(n, 100)
        raw = 5
    elif n >= 100:
        lsu[0], lsu[1] = divmod(n, 100)
        raw = 3
    else:
        lsu[0] = n
        raw = 1
    scale = Dec80(raw, tuple(lsu))
    if negative:
        scale = negate(scale)
    return add(multiply(scale, LN_10), remainder)


def log10(x: Dec80) -> Dec80:
    """Base-10 logarithm."""
    return divide(ln(x), LN_10)


def _count_subtractions(acc: Dec80, step: Dec80) -> tuple[int, Dec80]:
    """Add ``step`` until the value turns negative; return count and last value."""
    saved = acc
    k = 0
    while not acc.is_negative():
        saved = acc
        acc = add(acc, step)
        k += 1
    return k - 1, saved


def exp(x: Dec80) -> Dec80:
    """e to the power x; NaN for NaN and for |x| of 294.7 or more."""
    if is_nan(x):
        return nan()
    need_recip = x.is_negative()
    acc = negate(x) if need_recip else x
    if not add(acc, negate(_EXP_LIMIT)).is_negative():
        return nan()

    times, acc = _count_subtractions(acc, negate(multiply(_TEN, LN_10)))
    count_ten = times * 10
    times, acc = _count_subtractions(acc, negate(LN_10))
    count_ten += times
    counts: list[int] = []
    for term in _LN_A:
        times, acc = _count_subtractions(acc, negate(term))
        counts.append(times)

    acc = add(acc, one())
    factor = list(_TEN.lsu)
    raw = _TEN.exponent
    for j in range(-1, _NUM_A):
        if j == 0:
            factor[0] = 20
            raw = 0
        elif j == 1:
            factor[0] = 11
        elif j > 1:
            _shift_right(factor)
            factor[0] = 10
        multiplier = Dec80(raw, tuple(factor))
        for _ in range(count_ten if j < 0 else counts[j]):
            acc = multiply(acc, multiplier)

    if need_recip:
        acc = reciprocal(acc)
    return acc


def exp10(x: Dec80) -> Dec80:
    """10 to the power x."""
    return exp(multiply(x, LN_10))


def power(a: Dec80, b: Dec80) -> Dec80:
    """a to the power b, computed as exp(b * ln(a))."""
    if is_zero(b):
        return one()
    if is_zero(a):
        return zero()
    return exp(multiply(ln(a), b))


def sqrt(x: Dec80) -> Dec80:
    """Square root; NaN for negative numbers, NaN is passed through."""
    if is_nan(x):
        return x
    if x.is_negative():
        return nan()
    x = remove_leading_zeros(x)
    half_x = multiply(x, _HALF)
    initial_exp = x.exponent_value()
    acc = Dec80(0, x.lsu)
    if initial_exp & 1:
        initial_exp += 1
        acc = multiply(acc, Dec80(-1, _digits(18)))  # -0.18
        acc = add(acc, Dec80(0, _digits(25)))  # 2.5
    else:
        acc = multiply(acc, Dec80(_make_raw(-2, True), _digits(56)))  # -0.056
        acc = add(acc, Dec80(0, _digits(7, 90)))  # 0.79
    initial_exp = -initial_exp // 2
    if acc.exponent != 0:
        initial_exp -= 1
    est = Dec80(_make_raw(initial_exp, False), acc.lsu)
    acc = est
    for _ in range(6):
        acc = multiply(acc, acc)
        acc = multiply(acc, half_x)
        acc = negate(acc)
        acc = add(acc, _THREE_HALVES)
        acc = multiply(acc, est)
        est = acc
    return multiply(acc, x)