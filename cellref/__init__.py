"""Conversions between spreadsheet cell addresses and row/column numbers."""

from .src.utils.address import (
    is_integer,
    column_number_to_name,
    column_name_to_number,
    row_and_column_to_address,
    address_to_full_address,
    address_to_row_and_column,
)
from .src.utils.sheet_index import SheetIndex
from .src.sheets.address_table import AddressTable

__version__ = "0.1.0"

__all__ = [
    'is_integer',
    'column_number_to_name',
    'column_name_to_number',
    'row_and_column_to_address',
    'address_to_full_address',
    'address_to_row_and_column',
    'SheetIndex',
    'AddressTable',
]
