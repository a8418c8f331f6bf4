import logging

import pytest

from stcrpn.lcd import (
    CGRAM_DOWN,
    CGRAM_EXP,
    CGRAM_EXP_NEG,
    MAX_CHARS_PER_LINE,
    MAX_ROWS,
    Lcd,
)

BLANK = " " * (MAX_ROWS * MAX_CHARS_PER_LINE)


def test_new_display_is_blank():
    lcd = Lcd()
    assert lcd.text() == BLANK
    assert (lcd.row, lcd.col) == (0, 0)


def test_out_string_writes_at_cursor():
    lcd = Lcd()
    lcd.out_string("12.5", MAX_CHARS_PER_LINE)
    assert lcd.text() == "12.5" + BLANK[4:]
    assert (lcd.row, lcd.col) == (0, 4)


def test_out_string_limits_and_stops_at_nul():
    lcd = Lcd()
    lcd.out_string("123456", 3)
    assert lcd.text().rstrip() == "123"
    lcd.clear()
    lcd.out_string("12\0" + "34", 10)
    assert lcd.text().rstrip() == "12"


def test_full_row_wraps_to_second_row_and_back():
    lcd = Lcd()
    lcd.out_string("1" * MAX_CHARS_PER_LINE, MAX_CHARS_PER_LINE)
    assert (lcd.row, lcd.col) == (1, 0)
    lcd.out_string("2" * MAX_CHARS_PER_LINE, MAX_CHARS_PER_LINE)
    assert (lcd.row, lcd.col) == (0, 0)
    assert lcd.text() == "1" * MAX_CHARS_PER_LINE + "2" * MAX_CHARS_PER_LINE


def test_custom_glyphs():
    lcd = Lcd()
    for code in (CGRAM_EXP, CGRAM_EXP_NEG, CGRAM_DOWN):
        lcd.put_char(code)
    assert lcd.text().startswith("E-V")


def test_newline_clears_display():
    lcd = Lcd()
    lcd.out_string("99", 2)
    lcd.put_char("\n")
    assert lcd.text()[1:] == BLANK[1:]
    assert lcd.row == 0


def test_go_to_moves_cursor():
    lcd = Lcd()
    lcd.go_to(1, 3)
    lcd.put_char("7")
    assert lcd.text()[MAX_CHARS_PER_LINE + 3] == "7"


@pytest.mark.parametrize("row,col", [(MAX_ROWS, 0), (0, MAX_CHARS_PER_LINE), (-1, 0)])
def test_go_to_out_of_range(row, col):
    with pytest.raises(ValueError):
        Lcd().go_to(row, col)


def test_clear_to_end_moves_to_next_row():
    lcd = Lcd()
    lcd.out_string("42", 2)
    lcd.clear_to_end(0)
    assert (lcd.row, lcd.col) == (1, 0)
    assert lcd.text() == "42" + BLANK[2:]


def test_out_nibble_uses_low_bits():
    lcd = Lcd()
    lcd.out_nibble(0x37)
    lcd.out_nibble(0xAB)
    assert lcd.text().startswith("7b")


def test_invalid_character_logs_warning(caplog):
    lcd = Lcd()
    with caplog.at_level(logging.WARNING):
        lcd.put_char("Z")
    assert "invalid character" in caplog.text
    assert lcd.text()[0] == "Z"


def test_initial_string_skips_checks(caplog):
    lcd = Lcd()
    message = "STC RPN         Calculator v1.14"
    with caplog.at_level(logging.WARNING):
        lcd.out_string_initial(message)
    assert caplog.text == ""
    assert lcd.text() == message


def test_initial_string_too_long():
    with pytest.raises(ValueError):
        Lcd().out_string_initial("0" * (MAX_ROWS * MAX_CHARS_PER_LINE + 1))


def test_render_frames_rows():
    lcd = Lcd()
    lcd.out_string("1.5", 3)
    lines = lcd.render().splitlines()
    assert lines[0] == "(row,col)=(0,3)"
    assert lines[1] == "|---|---|---|---|"
    assert lines[2] == "|" + "1.5" + " " * (MAX_CHARS_PER_LINE - 3)
    assert len(lines) == MAX_ROWS + 3