import pytest

from stcrpn import trig
from stcrpn.dec80 import (
    add,
    build_dec80,
    divide,
    is_nan,
    is_zero,
    multiply,
    negate,
    to_str_complete,
)
from stcrpn.stack import RpnStack
from stcrpn.transcendental import power, sqrt


def _b(text):
    return build_dec80(text, 0)


def _two(a, b):
    s = RpnStack()
    s.push(a, 0)
    s.process_cmd("=")
    s.no_lift = 1
    s.push(b, 0)
    s.no_lift = 0
    return s


def test_enter_then_add():
    s = _two("2", "3")
    s.process_cmd("+")
    assert s.x() == add(_b("2"), _b("3"))
    assert to_str_complete(s.x()) == "5."


@pytest.mark.parametrize(
    "cmd, op",
    [("*", multiply), ("/", divide), ("7", power)],
)
def test_binary_ops_use_y_then_x(cmd, op):
    s = _two("7", "3")
    s.process_cmd(cmd)
    assert s.x() == op(_b("7"), _b("3"))
    assert s.last_x == _b("3")


def test_subtract_and_last_x():
    s = _two("7", "3")
    s.process_cmd("-")
    assert s.x() == add(_b("7"), negate(_b("3")))
    assert s.last_x == _b("3")
    s.process_cmd("m")
    s.process_cmd("+")
    assert s.x() == _b("3")
    assert s.y() == add(_b("7"), negate(_b("3")))


def test_swap():
    s = _two("1", "2")
    s.process_cmd("r")
    assert s.x() == _b("1")
    assert s.y() == _b("2")


def test_change_sign():
    s = RpnStack()
    s.push("4.5", 0)
    s.process_cmd("<")
    assert s.x() == negate(_b("4.5"))


def test_shift_cycle():
    s = RpnStack()
    s.process_cmd("m")
    assert (s.shifted_up, s.shifted_down) == (True, False)
    s.process_cmd("m")
    assert (s.shifted_up, s.shifted_down) == (False, True)
    s.process_cmd("m")
    assert (s.shifted_up, s.shifted_down) == (False, False)


def test_command_clears_shift():
    s = RpnStack()
    s.push("9", 0)
    s.process_cmd("m")
    s.process_cmd("<")
    assert s.x() == sqrt(_b("9"))
    assert not s.shifted_up


def test_division_by_zero_gives_nan_and_stays():
    s = _two("1", "0")
    s.process_cmd("/")
    assert is_nan(s.x())
    s.process_cmd("m")
    s.process_cmd("r")
    assert is_nan(s.x())
    s.process_cmd("<")
    assert is_nan(s.x())


def test_nan_operand_propagates_in_binary_op():
    s = _two("1", "0")
    s.process_cmd("/")
    s.no_lift = 0
    s.push("2", 0)
    s.process_cmd("+")
    assert is_nan(s.x())


def test_store_and_recall():
    s = RpnStack()
    s.push("4", 0)
    s.process_cmd("m")
    s.process_cmd(".")
    s.process_cmd("c")
    assert is_zero(s.x())
    s.process_cmd("m")
    s.process_cmd("=")
    assert s.x() == _b("4")
    assert is_zero(s.y())


def test_roll_down_and_up():
    s = _two("1", "2")
    s.process_cmd("m")
    s.process_cmd("4")
    assert s.x() == _b("1")
    s.process_cmd("m")
    s.process_cmd("m")
    s.process_cmd("4")
    assert s.x() == _b("2")
    assert s.y() == _b("1")


def test_pi_key():
    s = RpnStack()
    s.push("5", 0)
    s.process_cmd("m")
    s.process_cmd("/")
    assert s.x() == trig.pi()
    assert s.y() == _b("5")


def test_sine_key():
    s = RpnStack()
    s.push("30", 0)
    s.process_cmd("m")
    s.process_cmd("1")
    assert s.x() == trig.sin(_b("30"))
    assert s.last_x == _b("30")


def test_clear_x_and_push_without_lift():
    s = RpnStack()
    s.push("8", 0)
    s.clear_x()
    assert is_zero(s.x())
    s.no_lift = 1
    s.push("6", 0)
    assert s.x() == _b("6")
    assert is_zero(s.y())


def test_unknown_command_is_ignored():
    s = _two("1", "2")
    s.process_cmd("0")
    assert s.x() == _b("2")
    assert s.y() == _b("1")