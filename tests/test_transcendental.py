from decimal import Decimal, localcontext

import pytest

from stcrpn.dec80 import build_dec80, is_nan, is_zero, multiply, nan, to_str_complete
from stcrpn.transcendental import exp, exp10, ln, log10, power, sqrt


def _num(s, e):
    with localcontext() as ctx:
        ctx.prec = 50
        return Decimal(s).scaleb(e)


def _rel_err(x, expected):
    assert not is_nan(x)
    with localcontext() as ctx:
        ctx.prec = 50
        want = Decimal(expected)
        got = Decimal(to_str_complete(x))
        return abs((got - want) / want)


def _ref(func, s, e):
    with localcontext() as ctx:
        ctx.prec = 50
        return func(_num(s, e))


@pytest.mark.parametrize(
    "s, e, expected",
    [
        ("0.155", 0, "-1.86433016206289043"),
        ("10", 0, "2.30258509299404568"),
        ("1.1", 10, "23.1211611097447817"),
        ("2.02", -10, "-22.3227534185273434"),
        ("2.02", 0, "0.703097511413113392"),
        ("9", 99, "230.153148783746742"),
        ("3", 0, "1.09861228866810969"),
    ],
)
def test_ln_known_values(s, e, expected):
    assert _rel_err(ln(build_dec80(s, e)), expected) < 1e-15


def test_ln_large_exponent():
    expected = _ref(lambda v: v.ln(), "123", 12345)
    assert _rel_err(ln(build_dec80("123", 12345)), expected) < 1e-15


@pytest.mark.parametrize("s", ["0", "-1", "-0.5"])
def test_ln_non_positive_is_nan(s):
    assert is_nan(ln(build_dec80(s, 0)))


def test_ln_of_nan_is_nan():
    assert is_nan(ln(nan()))


def test_log10_known_value():
    result = log10(build_dec80("1.5", 0))
    assert _rel_err(result, "0.176091259055681242") < 1e-14


def test_log10_of_power_of_ten():
    assert _rel_err(log10(build_dec80("1", 3)), "3") < 1e-14


def test_log10_negative_is_nan():
    assert is_nan(log10(build_dec80("-2", 0)))


def test_exp_known_value():
    assert _rel_err(exp(build_dec80("4.4", 0)), "81.4508686649681174") < 2e-15


@pytest.mark.parametrize(
    "s, e",
    [
        ("0.155", 0),
        ("9.999", 0),
        ("10", 0),
        ("10.001", 0),
        ("2.3", 2),
        ("2.02", -10),
        ("2.02", 0),
        ("1.5", 0),
        ("99.999999", 0),
        ("230.2", 0),
        ("-230", 0),
        ("294.69999999", 0),
    ],
)
def test_exp_against_reference(s, e):
    expected = _ref(lambda v: v.exp(), s, e)
    assert _rel_err(exp(build_dec80(s, e)), expected) < 1e-14


def test_exp_nan_stays_nan():
    assert is_nan(exp(nan()))


@pytest.mark.parametrize("s", ["300", "-300", "294.7"])
def test_exp_out_of_range_is_nan(s):
    assert is_nan(exp(build_dec80(s, 0)))


@pytest.mark.parametrize(
    "s, e",
    [
        ("4.4", 0),
        ("0.155", 0),
        ("9.999", 0),
        ("10", 0),
        ("10.001", 0),
        ("2.02", -10),
        ("2.02", 0),
        ("1.5", 0),
        ("127", 0),
        ("99.999999", 0),
    ],
)
def test_exp10_against_reference(s, e):
    expected = _ref(lambda v: (v * Decimal(10).ln()).exp(), s, e)
    assert _rel_err(exp10(build_dec80(s, e)), expected) < 2e-13


def test_exp_of_ln_round_trip():
    x = build_dec80("2.5", 0)
    assert _rel_err(ln(exp(x)), "2.5") < 1e-14


def test_three_to_201_via_ln_and_exp():
    product = multiply(ln(build_dec80("3", 0)), build_dec80("201", 0))
    assert _rel_err(exp(product), "7.96841966627624308E95") < 1e-12


def test_power_three_to_201():
    result = power(build_dec80("3", 0), build_dec80("201", 0))
    assert _rel_err(result, "7.96841966627624308E95") < 1e-12


def test_power_fractional_exponent():
    with localcontext() as ctx:
        ctx.prec = 50
        expected = _num("3.14", 60) ** _num("-1.5", -2)
    result = power(build_dec80("3.14", 60), build_dec80("-1.5", -2))
    assert _rel_err(result, expected) < 4.5e-14


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (("5", 0), ("0", 0), "1."),
        (("5", 0), ("0", 2), "1."),
        (("0", 0), ("5", 0), "0"),
        (("0", 0), ("0", 0), "1."),
    ],
)
def test_power_special_cases(a, b, expected):
    result = power(build_dec80(*a), build_dec80(*b))
    assert to_str_complete(result) == expected


def test_power_negative_base_is_nan():
    assert is_nan(power(build_dec80("-2", 0), build_dec80("0.5", 0)))


@pytest.mark.parametrize(
    "s, e",
    [
        ("2", 0),
        ("0.155", 0),
        ("10", 0),
        ("1.1", 10),
        ("2.02", -10),
        ("2.02", 0),
        ("1.5", 0),
        ("9", 99),
        ("123", 12345),
    ],
)
def test_sqrt_against_reference(s, e):
    expected = _ref(lambda v: v.sqrt(), s, e)
    assert _rel_err(sqrt(build_dec80(s, e)), expected) < 1e-16


def test_sqrt_of_four_is_two():
    assert to_str_complete(sqrt(build_dec80("4", 0))) == "2."


def test_sqrt_negative_is_nan():
    assert is_nan(sqrt(build_dec80("-1", 0)))


def test_sqrt_zero_is_zero():
    assert is_zero(sqrt(build_dec80("0", 0)))


def test_sqrt_nan_stays_nan():
    assert is_nan(sqrt(nan()))