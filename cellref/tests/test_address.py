import sys
import pytest
from ..src.utils.address import (
    is_integer,
    column_number_to_name,
    column_name_to_number,
    row_and_column_to_address,
    address_to_full_address,
    address_to_row_and_column,
)

requires_digit_limit = pytest.mark.skipif(
    not hasattr(sys, "get_int_max_str_digits"), reason="int() has no digit limit on this interpreter"
)

@pytest.mark.parametrize("value", [0, 7, -3, 2.0, "12", " 42 ", "-5", "+3"])
def test_is_integer_accepts_integers(value):
    assert is_integer(value) is True

@pytest.mark.parametrize("value", [1.5, "1.5", "five", "", None, True, False, [1], float('nan'), float('inf')])
def test_is_integer_rejects_non_integers(value):
    assert is_integer(value) is False

@pytest.mark.parametrize("number,name", [
    (1, "A"),
    (2, "B"),
    (26, "Z"),
    (27, "AA"),
    (52, "AZ"),
    (53, "BA"),
    (702, "ZZ"),
    (703, "AAA"),
    (16384, "XFD"),
])
def test_column_number_to_name(number, name):
    assert column_number_to_name(number) == name
    assert column_name_to_number(name) == number

@pytest.mark.parametrize("number", [0, -3, 1.5, "abc", None, "", True])
def test_column_number_to_name_rejects_invalid(number):
    assert column_number_to_name(number) is None

def test_column_number_to_name_accepts_integer_text():
    """Integer-valued strings and floats are accepted like plain ints."""
    assert column_number_to_name("28") == "AB"
    assert column_number_to_name(28.0) == "AB"

def test_column_name_to_number_is_case_insensitive():
    assert column_name_to_number("b") == column_name_to_number("B") == 2
    assert column_name_to_number("aA") == 27

@pytest.mark.parametrize("name", ["", None, 5, "A1", "A B", " A", "A$", "Ä", "ſ"])
def test_column_name_to_number_rejects_invalid(name):
    assert column_name_to_number(name) is None

def test_column_round_trip():
    """Every column number maps to a name that maps back to it."""
    for n in range(1, 10001):
        name = column_number_to_name(n)
        assert name.isupper()
        assert column_name_to_number(name) == n

def test_row_and_column_to_address():
    assert row_and_column_to_address(7, 2) == "B7"
    assert row_and_column_to_address(1, 27) == "AA1"
    assert row_and_column_to_address(5, 2, "Data") == "'Data'!B5"
    assert row_and_column_to_address("10", "3") == "C10"

def test_row_and_column_to_address_ignores_empty_sheet():
    assert row_and_column_to_address(5, 2, "") == "B5"
    assert row_and_column_to_address(5, 2, None) == "B5"

@pytest.mark.parametrize("row,column", [(0, 1), (1, 0), (-1, 1), (1.5, 1), (1, "B"), (None, 1)])
def test_row_and_column_to_address_rejects_invalid(row, column):
    assert row_and_column_to_address(row, column) is None

def test_address_to_full_address():
    assert address_to_full_address("Sheet1", "B7") == "'Sheet1'!B7"
    assert address_to_full_address("My Sheet", "$A$1") == "'My Sheet'!$A$1"

def test_address_to_row_and_column():
    assert address_to_row_and_column("B7") == {'row': 7, 'column': 2}
    assert address_to_row_and_column("aa100") == {'row': 100, 'column': 27}
    assert address_to_row_and_column("  C3  ") == {'row': 3, 'column': 3}

def test_address_to_row_and_column_strips_markers():
    assert address_to_row_and_column("$B$7") == {'row': 7, 'column': 2}
    assert address_to_row_and_column("$B7") == {'row': 7, 'column': 2}
    assert address_to_row_and_column("B$7") == {'row': 7, 'column': 2}

def test_address_to_row_and_column_with_sheet():
    assert address_to_row_and_column("'Data'!B5") == {'row': 5, 'column': 2, 'sheet': 'Data'}
    assert address_to_row_and_column("Data!B5") == {'row': 5, 'column': 2, 'sheet': 'Data'}
    assert address_to_row_and_column("'My Sheet'!$C$10") == {'row': 10, 'column': 3, 'sheet': 'My Sheet'}

def test_address_to_row_and_column_sheet_with_bang_and_digits():
    """Sheet names may contain `!` and digits."""
    assert address_to_row_and_column("'a!b'!C3") == {'row': 3, 'column': 3, 'sheet': 'a!b'}
    assert address_to_row_and_column("Q1 2024!D4") == {'row': 4, 'column': 4, 'sheet': 'Q1 2024'}

def test_address_without_sheet_has_no_sheet_key():
    ref = address_to_row_and_column("B7")
    assert 'sheet' not in ref

@pytest.mark.parametrize("address", [
    "", "B", "7", "7B", "B7C", "B-7", "A0", "$$A1", "!A1", "A1:B2", None, 17,
])
def test_address_to_row_and_column_rejects_malformed(address):
    assert address_to_row_and_column(address) is None

def test_address_round_trip():
    """Every row round-trips against a spread of columns, and vice versa."""
    for row in range(1, 1001):
        for column in (1, 26, 27, 500, 1000):
            ref = address_to_row_and_column(row_and_column_to_address(row, column))
            assert ref == {'row': row, 'column': column}
    for column in range(1, 1001):
        for row in (1, 9, 10, 500, 1000):
            ref = address_to_row_and_column(row_and_column_to_address(row, column))
            assert ref == {'row': row, 'column': column}

@requires_digit_limit
def test_long_row_digits_are_rejected():
    """Rows with more digits than int() converts give None."""
    assert address_to_row_and_column("A" + "1" * 5000) is None

@requires_digit_limit
def test_long_integer_text_is_rejected():
    assert column_number_to_name("1" * 5000) is None

@requires_digit_limit
def test_long_row_text_is_rejected():
    assert row_and_column_to_address("1" * 5000, 1) is None
    assert row_and_column_to_address(1, "1" * 5000) is None

def test_address_round_trip_with_sheet():
    address = row_and_column_to_address(5, 2, "Data")
    assert address == "'Data'!B5"
    assert address_to_row_and_column(address) == {'row': 5, 'column': 2, 'sheet': 'Data'}
