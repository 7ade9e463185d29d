import re
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# [sheet!][$]COLUMN[$]ROW, sheet optionally wrapped in single quotes
ADDRESS_PATTERN = re.compile(r"\s*(?:'?(.+?)'?!)?\$?([A-Z]+)\$?(\d+)\s*", re.IGNORECASE | re.ASCII)
COLUMN_NAME_PATTERN = re.compile(r"[A-Z]+", re.IGNORECASE | re.ASCII)
INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


def is_integer(value: Any) -> bool:
    """Check whether a value denotes an integer (5, 5.0 and "5" do, 5.5 and "five" don't)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value.is_integer()
    if isinstance(value, str):
        return INTEGER_PATTERN.fullmatch(value.strip()) is not None
    return False


def _positive_int(value: Any) -> Optional[int]:
    if not is_integer(value):
        return None
    try:
        number = int(value)
    except ValueError:
        # more digits than int() converts
        logger.debug(f"Integer too long to convert: {str(value)[:20]}...")
        return None
    return number if number > 0 else None


def column_number_to_name(number: Any) -> Optional[str]:
    """Convert column number to name (1 = A, 27 = AA).

    Returns None for anything that is not an integer >= 1.
    """
    dividend = _positive_int(number)
    if dividend is None:
        logger.debug(f"Rejected column number: {number!r}")
        return None

    name = ""
    while dividend > 0:
        dividend, modulo = divmod(dividend - 1, 26)
        name = chr(ord('A') + modulo) + name
    return name


def column_name_to_number(name: Any) -> Optional[int]:
    """Convert column name to number (A = 1, aa = 27).

    Returns None unless the name is a non-empty run of ASCII letters.
    """
    if not name or not isinstance(name, str) or not COLUMN_NAME_PATTERN.fullmatch(name):
        logger.debug(f"Rejected column name: {name!r}")
        return None

    total = 0
    for char in name.upper():
        total = total * 26 + (ord(char) - ord('A') + 1)
    return total


def address_to_full_address(sheet: str, address: str) -> str:
    """Prefix an address with a quoted sheet name, e.g. 'Data'!B5."""
    return f"'{sheet}'!{address}"


def row_and_column_to_address(row: Any, column: Any, sheet: Optional[str] = None) -> Optional[str]:
    """Convert a 1-based row and column (and optional sheet) to an address.

    Args:
        row: Row number, 1-based
        column: Column number, 1-based
        sheet: Sheet name; when given the result is a full address

    Returns:
        The address, or None if row or column is not an integer >= 1
    """
    row_number = _positive_int(row)
    column_name = column_number_to_name(column)
    if row_number is None or column_name is None:
        logger.debug(f"Rejected coordinates: row={row!r}, column={column!r}")
        return None

    address = f"{column_name}{row_number}"
    if sheet:
        address = address_to_full_address(sheet, address)
    return address


def address_to_row_and_column(address: Any) -> Optional[Dict[str, Any]]:
    """Parse an address into its row, column and (if present) sheet.

    `$` markers are accepted and dropped. The 'sheet' key is only set when
    the address has a sheet prefix.

    Returns:
        {'row': int, 'column': int[, 'sheet': str]}, or None if the address
        is malformed
    """
    if not isinstance(address, str):
        return None

    match = ADDRESS_PATTERN.fullmatch(address)
    if not match:
        logger.debug(f"Unparsable address: {address!r}")
        return None

    sheet, column_name, row_digits = match.groups()
    row = _positive_int(row_digits)
    if row is None:
        logger.debug(f"Address has no valid row: {address[:40]!r}")
        return None

    ref = {
        'row': row,
        'column': column_name_to_number(column_name),
    }
    if sheet:
        ref['sheet'] = sheet
    return ref
