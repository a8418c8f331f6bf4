"""Decimal floating point numbers with 18 significant digits.

A number keeps nine base-100 digit pairs, the most significant pair first,
with an implicit decimal point after the first digit. The exponent field
holds the sign of the number in its top bit and a 15-bit two's complement
decimal exponent in the bits below.
"""

from __future__ import annotations

from dataclasses import dataclass

NUM_LSU = 9
MIN_EXP = -16383
MAX_EXP = 16383
NAN_EXP = -16384
NUM_DIGITS_DISPLAY = NUM_LSU * 2


def _exp_of(raw: int) -> int:
    """Return the signed 15-bit exponent stored in a raw exponent field."""
    e = raw & 0x7FFF
    return e - 0x8000 if e & 0x4000 else e


def _make_raw(exponent: int, negative: bool) -> int:
    """Pack an exponent and a sign into a signed 16-bit exponent field."""
    e = exponent & 0x7FFF
    if negative:
        e |= 0x8000
    return e - 0x10000 if e & 0x8000 else e


def _shift_right(lsu: list[int]) -> None:
    old = 0
    for i, v in enumerate(lsu):
        high, low = divmod(v, 10)
        lsu[i] = (high + old * 10) & 0xFF
        old = low


def _shift_left(lsu: list[int]) -> None:
    old = 0
    for i in reversed(range(len(lsu))):
        high, low = divmod(lsu[i], 10)
        lsu[i] = (old + low * 10) & 0xFF
        old = high


def _normalize(raw: int, lsu: list[int]) -> int:
    """Left-align the digits of ``lsu`` in place and return the new raw exponent."""
    negative = raw < 0
    exponent = _exp_of(raw)
    first = next((i for i, v in enumerate(lsu) if v != 0), NUM_LSU)
    exponent -= first * 2
    if 0 < first < NUM_LSU:
        lsu[:] = lsu[first:] + [0] * first
    if lsu[0] < 10:
        _shift_left(lsu)
        exponent -= 1
    return _make_raw(exponent, negative)


@dataclass(frozen=True)
class Dec80:
    """An immutable decimal number: raw exponent field and base-100 digits."""

    exponent: int = 0
    lsu: tuple[int, ...] = (0,) * NUM_LSU

    def is_negative(self) -> bool:
        return self.exponent < 0

    def exponent_value(self) -> int:
        """The decimal exponent without the sign bit."""
        return _exp_of(self.exponent)


def zero() -> Dec80:
    return Dec80()


def one() -> Dec80:
    return Dec80(0, (10,) + (0,) * (NUM_LSU - 1))


def nan() -> Dec80:
    return Dec80(NAN_EXP, (0xFF,) * NUM_LSU)


def is_zero(x: Dec80) -> bool:
    return all(v == 0 for v in x.lsu)


def is_nan(x: Dec80) -> bool:
    return x.exponent == NAN_EXP and all(v == 0xFF for v in x.lsu)


def negate(x: Dec80) -> Dec80:
    """Flip the sign; NaN is left as it is."""
    if is_nan(x):
        return x
    raw = (x.exponent & 0xFFFF) ^ 0x8000
    return Dec80(raw - 0x10000 if raw & 0x8000 else raw, x.lsu)


def remove_leading_zeros(x: Dec80) -> Dec80:
    lsu = list(x.lsu)
    raw = _normalize(x.exponent, lsu)
    return Dec80(raw, tuple(lsu))


def build_dec80(signif_str: str, exponent: int) -> Dec80:
    """Build a number from a significand string and a decimal exponent.

    Invalid characters, several decimal points and exponents out of range
    give NaN; an empty or all-zero significand gives zero.
    """
    if signif_str == "":
        return zero()
    lsu = [0] * NUM_LSU
    seen_point = False
    is_zero_val = True
    negative = False
    nibble_i = 0
    save_nibble = 0
    num_lr_points = 0
    chars = signif_str
    if chars[0] == "-":
        negative = True
        chars = chars[1:]

    def store(digit: int) -> None:
        nonlocal save_nibble
        if nibble_i < NUM_LSU * 2:
            if nibble_i & 1:
                lsu[nibble_i // 2] = save_nibble * 10 + digit
            else:
                save_nibble = digit

    for ch in chars:
        if ch == ".":
            if seen_point:
                return nan()
            seen_point = True
        elif "1" <= ch <= "9":
            store(int(ch))
            nibble_i += 1
            if num_lr_points == 0 and is_zero_val and seen_point:
                num_lr_points = -1
            is_zero_val = False
            if not seen_point:
                num_lr_points += 1
        elif ch == "0":
            if not is_zero_val:
                store(0)
                nibble_i += 1
            if seen_point:
                if is_zero_val:
                    if num_lr_points == 0:
                        num_lr_points = -2
                    elif num_lr_points < 0:
                        num_lr_points -= 1
            elif not is_zero_val:
                num_lr_points += 1
        else:
            return nan()

    if is_zero_val:
        return zero()
    if nibble_i & 1:
        if nibble_i // 2 < NUM_LSU:
            lsu[nibble_i // 2] = save_nibble * 10
        nibble_i += 1
    for i in range(nibble_i // 2, NUM_LSU):
        lsu[i] = 0
    if num_lr_points > 0:
        exponent = exponent + num_lr_points - 1
    elif num_lr_points < 0:
        exponent = exponent + num_lr_points
    if exponent > MAX_EXP or exponent < MIN_EXP:
        return nan()
    raw = _normalize(_make_raw(exponent, negative), lsu)
    return Dec80(raw, tuple(lsu))


def compare_magnitude(a: Dec80, b: Dec80) -> int:
    """Compare absolute values: -1 if |a| < |b|, 0 if equal, 1 if greater."""
    a_n = remove_leading_zeros(a)
    b_n = remove_leading_zeros(b)
    signif = 0
    for da, db in zip(a_n.lsu, b_n.lsu):
        if da != db:
            signif = -1 if da < db else 1
            break
    ea = a_n.exponent_value()
    eb = b_n.exponent_value()
    if ea > eb:
        return 1
    if ea < eb:
        return -1
    return signif


def _shift_right_times(lsu: list[int], count: int) -> None:
    for _ in range(min(max(count, 0), NUM_LSU * 2 + 1)):
        _shift_right(lsu)


def _sub_mag(big: Dec80, small: Dec80) -> Dec80:
    al = list(big.lsu)
    ar = _normalize(big.exponent, al)
    bl = list(small.lsu)
    br = _normalize(small.exponent, bl)
    _shift_right_times(bl, _exp_of(ar) - _exp_of(br))
    carry = 0
    for i in reversed(range(NUM_LSU)):
        sub = bl[i] + carry
        if al[i] >= sub:
            al[i] -= sub
            carry = 0
        else:
            al[i] = al[i] + 100 - sub
            carry = 1
    return Dec80(ar, tuple(al))


def add(a: Dec80, b: Dec80) -> Dec80:
    if is_zero(b):
        return a
    if is_zero(a):
        return b
    if a.is_negative() != b.is_negative():
        rel = compare_magnitude(a, b)
        if rel == 1:
            return _sub_mag(a, b)
        if rel == -1:
            return _sub_mag(b, a)
        return zero()
    al = list(a.lsu)
    ar = _normalize(a.exponent, al)
    bl = list(b.lsu)
    br = _normalize(b.exponent, bl)
    ea, eb = _exp_of(ar), _exp_of(br)
    if ea > eb:
        _shift_right_times(bl, ea - eb)
    elif ea < eb:
        _shift_right_times(al, eb - ea)
        ar = _make_raw(eb, ar < 0)
    carry = 0
    for i in reversed(range(NUM_LSU)):
        carry, al[i] = divmod(al[i] + bl[i] + carry, 100)
    if carry:
        exp = _exp_of(ar)
        neg = ar < 0
        _shift_right(al)
        al[0] += 10
        ar = _make_raw(exp + 1, neg)
    return Dec80(ar, tuple(al))


def multiply(a: Dec80, b: Dec80) -> Dec80:
    if is_nan(a) or is_nan(b):
        return nan()
    al = list(a.lsu)
    ar = _normalize(a.exponent, al)
    bl = list(b.lsu)
    br = _normalize(b.exponent, bl)
    negative = (ar < 0) != (br < 0)
    new_exponent = _exp_of(ar) + _exp_of(br)
    tmp = [0] * NUM_LSU
    carry = 0
    for i in reversed(range(NUM_LSU)):
        for j in reversed(range(NUM_LSU)):
            carry, tmp[j] = divmod(tmp[j] + bl[i] * al[j] + carry, 100)
        if i != 0:
            _shift_right(tmp)
            _shift_right(tmp)
            tmp[0] = carry
    if carry >= 10:
        _shift_right(tmp)
        _shift_right(tmp)
        new_exponent += 1
        tmp[0] = carry
    elif carry > 0:
        _shift_right(tmp)
        tmp[0] += carry * 10
    if not MIN_EXP < new_exponent < MAX_EXP:
        return nan()
    raw = _normalize(_make_raw(new_exponent, negative), tmp)
    return Dec80(raw, tuple(tmp))


def reciprocal(x: Dec80) -> Dec80:
    """1/x by Newton-Raphson iteration; NaN for zero."""
    if is_zero(x):
        return nan()
    x = remove_leading_zeros(x)
    initial_exp = -x.exponent_value() - 1
    lead = x.lsu[0]
    if lead < 20:
        est = 50
    elif lead < 33:
        est = 30
    elif lead < 50:
        est = 20
    else:
        est = 10
    curr = Dec80(_make_raw(initial_exp, x.is_negative()), (est,) + (0,) * (NUM_LSU - 1))
    acc = curr
    for _ in range(6):
        acc = multiply(acc, x)
        acc = negate(acc)
        acc = add(acc, one())
        acc = multiply(acc, curr)
        acc = add(acc, curr)
        curr = acc
    return acc


def divide(a: Dec80, b: Dec80) -> Dec80:
    return multiply(reciprocal(b), a)


def to_str(x: Dec80) -> tuple[str, int]:
    """Format the significand for display; return it with the exponent to show.

    The exponent is 0 unless scientific notation is used.
    """
    if is_nan(x):
        return "Error", 0
    tmp = remove_leading_zeros(x)
    lsu = tmp.lsu
    if lsu[0] == 0:
        return "0", 0
    buf: list[str] = []
    if tmp.is_negative():
        buf.append("-")
    exponent = tmp.exponent_value()
    use_sci = exponent > NUM_DIGITS_DISPLAY - 1 or exponent < -3
    if not use_sci and exponent < 0:
        buf.append("0.")
        buf.append("0" * (-exponent - 1))
    buf = list("".join(buf))

    def digit(d: int) -> None:
        nonlocal exponent
        buf.append(chr(ord("0") + d))
        if not use_sci:
            if exponent == 0:
                buf.append(".")
            exponent -= 1

    buf.append(chr(ord("0") + lsu[0] // 10))
    if use_sci:
        buf.append(".")
    else:
        if exponent == 0:
            buf.append(".")
        exponent -= 1
    trailing = 1 if lsu[0] % 10 == 0 and (use_sci or exponent < 0) else 0
    digit(lsu[0] % 10)
    for pair in lsu[1:NUM_DIGITS_DISPLAY // 2]:
        digit(pair // 10)
        digit(pair % 10)
        if pair == 0 and (use_sci or exponent < 0):
            if use_sci or exponent < -2:
                trailing += 2
            elif exponent == -2:
                trailing += 1
        elif pair % 10 == 0 and (use_sci or exponent < 0):
            trailing = 1
        else:
            trailing = 0
    if (use_sci or exponent <= 0) and trailing:
        buf = buf[: len(buf) - trailing]
    text = "".join(buf)
    exponent = tmp.exponent_value()
    if use_sci:
        if exponent > MAX_EXP or exponent < MIN_EXP:
            return "Error", 0
        return text, exponent
    return text, 0


def to_str_complete(x: Dec80) -> str:
    """Format the number, appending ``E<exponent>`` when one is shown."""
    text, exponent = to_str(x)
    if exponent != 0:
        text += "E" + str(exponent)
    return text


def u32str(x: int, base: int) -> str:
    """Digits of a non-negative integer in ``base``, as '0' plus digit value."""
    if x == 0:
        return "0"
    digits = []
    while x > 0:
        x, d = divmod(x, base)
        digits.append(chr(ord("0") + d))
    return "".join(reversed(digits))