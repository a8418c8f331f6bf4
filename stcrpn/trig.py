"""Trigonometric functions of Dec80 numbers, with angles in degrees.

sin and cos step a rotation through the angle in increments of 0.001
radian; arctan runs the same rotation backwards and counts the steps.
The inverse sine and cosine are built from arctan.
"""

from __future__ import annotations

from .dec80 import (
    NUM_LSU,
    Dec80,
    _make_raw,
    _shift_right,
    add,
    compare_magnitude,
    divide,
    multiply,
    negate,
    one,
    reciprocal,
    remove_leading_zeros,
    zero,
)
from .transcendental import sqrt

PI = Dec80(0, (31, 41, 59, 26, 53, 58, 97, 93, 24))
PI_2 = Dec80(0, (15, 70, 79, 63, 26, 79, 48, 96, 62))
ONE_RAD = Dec80(1, (57, 29, 57, 79, 51, 30, 82, 32, 9))  # 180/pi

_DIGITS_360 = (36,) + (0,) * (NUM_LSU - 1)
_THOUSANDTH = Dec80(0, (0, 1) + (0,) * (NUM_LSU - 2))
_SIN_START = negate(Dec80(0, (0, 0, 50) + (0,) * (NUM_LSU - 3)))


def _div1000(x: Dec80) -> Dec80:
    lsu = list(x.lsu)
    for _ in range(3):
        _shift_right(lsu)
    return Dec80(x.exponent, tuple(lsu))


def _full_turn(exponent: int) -> Dec80:
    return Dec80(_make_raw(exponent, False), _DIGITS_360)


def normalize_0_360(x: Dec80) -> Dec80:
    """Reduce an angle in degrees to the range 0 to 360."""
    negative = x.is_negative()
    acc = remove_leading_zeros(x)
    if negative:
        acc = negate(acc)
    exponent = acc.exponent_value()
    if compare_magnitude(acc, _full_turn(2)) > 0:
        while True:
            while True:
                step = _full_turn(exponent)
                if compare_magnitude(acc, step) >= 0:
                    acc = add(acc, negate(step))
                else:
                    break
            exponent -= 1
            if exponent < 2:
                break
    if negative:
        acc = add(negate(acc), _full_turn(2))
    return acc


def to_degree(x: Dec80) -> Dec80:
    """Convert radians to degrees."""
    return multiply(x, ONE_RAD)


def to_radian(x: Dec80) -> Dec80:
    """Convert degrees to radians."""
    return divide(x, ONE_RAD)


def pi() -> Dec80:
    return PI


def _sincos(x: Dec80, arctan: bool) -> tuple[Dec80, Dec80, Dec80]:
    """Run the rotation; return the final accumulator, sine and cosine."""
    negative = x.is_negative()
    if arctan:
        theta = zero()
        acc = negate(x) if negative else x
        cos_v = acc
        sin_v = one()
        step = _THOUSANDTH
    else:
        acc = to_radian(normalize_0_360(x))
        theta = acc
        cos_v = one()
        sin_v = _SIN_START
        step = negate(_THOUSANDTH)
    while True:
        if arctan:
            if cos_v.is_negative():
                if negative:
                    acc = negate(acc)
                break
        elif theta.is_negative():
            break
        cos_v = add(cos_v, negate(_div1000(sin_v)))
        sin_v = add(sin_v, _div1000(cos_v))
        theta = add(theta, step)
        acc = theta
    return acc, sin_v, cos_v


def sin(x: Dec80) -> Dec80:
    """Sine of an angle in degrees."""
    return _sincos(x, False)[1]


def cos(x: Dec80) -> Dec80:
    """Cosine of an angle in degrees."""
    return _sincos(x, False)[2]


def tan(x: Dec80) -> Dec80:
    """Tangent of an angle in degrees."""
    _, sin_v, cos_v = _sincos(x, False)
    return divide(sin_v, cos_v)


def arctan(x: Dec80) -> Dec80:
    """Inverse tangent, in degrees."""
    return to_degree(_sincos(x, True)[0])


def _arcsin_rad(x: Dec80) -> Dec80:
    acc = multiply(x, x)
    acc = add(negate(acc), one())
    acc = reciprocal(sqrt(acc))
    acc = multiply(acc, x)
    return _sincos(acc, True)[0]


def arcsin(x: Dec80) -> Dec80:
    """Inverse sine, in degrees."""
    return to_degree(_arcsin_rad(x))


def arccos(x: Dec80) -> Dec80:
    """Inverse cosine, in degrees."""
    return to_degree(add(negate(_arcsin_rad(x)), PI_2))