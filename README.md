# stcrpn

stcrpn is a four-level RPN (Reverse Polish Notation) calculator. All of its
arithmetic runs on its own decimal floating-point type. The package also includes:

- a model of the calculator's 16×2 character LCD
- a debouncer for its 5×4 key matrix

## Numbers: `stcrpn.dec80`

`Dec80` is an immutable value with these parts:

- an 18-digit significand, held as nine base-100 digit pairs
- a signed decimal exponent in the range −16383 to 16383

Invalid input, overflow and division by zero do not raise exceptions. They
give a NaN value, which is formatted as `Error`.

```python
from stcrpn import dec80

a = dec80.build_dec80("9.234567890123456", 3)
print(dec80.to_str_complete(a))            # 9234.567890123456

q = dec80.divide(dec80.build_dec80("500", 0), dec80.build_dec80("2", 0))
print(dec80.to_str_complete(q))            # 250.

bad = dec80.build_dec80("..", 0)
print(dec80.is_nan(bad), dec80.to_str_complete(bad))   # True Error
```

The module provides these functions:

- **Constructors:** `build_dec80(signif_str, exponent)`, `zero()`, `one()` and `nan()`.
- **Tests:** `is_zero`, `is_nan`, and the methods `Dec80.is_negative()` and `Dec80.exponent_value()`.
- **Operations:**
  - `negate`, which leaves NaN unchanged
  - `add`
  - `multiply`
  - `reciprocal`, which uses Newton–Raphson iteration
  - `divide`
  - `compare_magnitude`
  - `remove_leading_zeros`
- **Formatting:**
  - `to_str(x)` returns the significand text together with the exponent to display. The exponent is 0 unless scientific notation is used.
  - `to_str_complete(x)` appends `E<exponent>` to the text when there is an exponent.
  - `u32str(x, base)` formats a non-negative integer.

## Functions

`stcrpn.transcendental` provides the following functions:

- `ln`
- `log10`
- `exp`, which returns NaN when |x| ≥ 294.7
- `exp10`
- `power(a, b)`, computed as exp(b·ln a)
- `sqrt`

`stcrpn.trig` provides `sin`, `cos`, `tan`, `arcsin`, `arccos` and `arctan`. All of these work in degrees. The module also provides `to_degree`, `to_radian`, `normalize_0_360` and `pi`.

The trigonometric functions step a rotation in increments of 0.001 radian. They are accurate to only a few significant digits.

## The stack: `stcrpn.stack.RpnStack`

`RpnStack` holds the registers X, Y, Z and T, together with a LastX register, a storage register and the shift state.

- `push(signif_str, exponent)` enters a number into X.
- `x()` and `y()` read the registers.
- `clear_x()` clears X.
- `process_cmd(cmd)` carries out the command bound to a key character.

| key | plain | shifted up | shifted down |
|-----|-------|------------|--------------|
| `+` | add | LastX | add |
| `-` | subtract | to degrees | to radians |
| `*` | multiply | multiply | multiply |
| `/` | divide | π | divide |
| `7` | yˣ | yˣ | yˣ |
| `=` | enter | recall | enter |
| `.` | – | store | – |
| `<` | change sign | √x | change sign |
| `r` | swap X and Y | 1/x | swap X and Y |
| `c` | clear X | clear X | clear X |
| `1` `2` `3` | – | sin, cos, tan | arcsin, arccos, arctan |
| `4` | – | roll down | roll up |
| `5` `6` | – | eˣ, 10ˣ | – |
| `8` `9` | – | ln, log₁₀ | – |

The `m` key cycles the shift state in the order none → up → down → none. Every other command clears the shift state after it runs.

## The calculator: `stcrpn.calculator.Calculator`

`Calculator` combines number entry, the stack and the LCD model. You can press keys in three ways:

- by label, with `press("5")`
- by on-screen row and column counted from the left, with `button_clicked(row, col)`
- by matrix key code `row * 4 + col` with columns counted from the right, with `key_pressed(code)`

An unknown key raises `ValueError`.

While you type a number:

- Digits build the number. In the significand, a second `.` switches to exponent entry. In exponent entry, `.` toggles the exponent's sign.
- `c` works as backspace. When no number is being entered, `c` clears X.

After each key the display is redrawn:

- The first line shows Y. While a number is being typed, it shows X instead.
- The second line shows X or the entry in progress.

`lcd_text()` returns the display framed as `lcd text:\n|…|\n|…|\n`.

### Command line

```
stcrpn 12=3+
```

This command presses the given keys and prints the display once. An unknown key prints an error and exits with status 2.

```
stcrpn
```

Without an argument, the command prints the start-up display. After that it reads keys line by line from standard input and ignores whitespace. It prints the display after each line.

## LCD and keypad models

- `stcrpn.lcd.Lcd` is a 2×16 character buffer with a cursor that wraps from one row to the other.
  - It has the methods `put_char`, `out_string`, `out_string_initial`, `go_to`, `clear`, `clear_to_end` and `out_nibble`.
  - `text()` returns the 32 characters of the display, and `render()` returns a framed picture of it.
  - Characters the real display cannot show are logged as warnings.
- `stcrpn.keys.KeyDebouncer.debounce(keys)` takes one raw scan: five row bit masks. It returns the code of a newly pressed key, or `None`. `state(row, col)` gives each key's `KeyState`.
- `simulated_scan()` yields an endless test pattern of scans.

## What it does not do

- stcrpn does not drive real hardware: it has no LCD controller, no key-matrix scanning and no power control.
- It has no graphical window. The display is available only as text.
- The power-off key combination (shift then `0`) does nothing.

## Tests

```
pip install -e ".[test]"
pytest
```