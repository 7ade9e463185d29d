from typing import Optional, Tuple
from .address import (
    column_number_to_name,
    column_name_to_number,
    row_and_column_to_address,
    address_to_row_and_column,
)

class SheetIndex:
    """Helper class to handle sheet indexing consistently."""

    @staticmethod
    def to_column_letter(n: int) -> Optional[str]:
        """Convert column number to letter (1 = A, 27 = AA)."""
        return column_number_to_name(n)

    @staticmethod
    def from_column_letter(col: str) -> Optional[int]:
        """Convert column letter to number (A = 1, AA = 27)."""
        return column_name_to_number(col)

    @staticmethod
    def to_sheet_row(df_index: int, header_rows: int = 1) -> int:
        """Convert DataFrame index to sheet row number."""
        return df_index + header_rows + 1  # +1 for 1-based rows

    @staticmethod
    def to_df_index(sheet_row: int, header_rows: int = 1) -> int:
        """Convert sheet row number to DataFrame index."""
        return sheet_row - header_rows - 1

    @staticmethod
    def get_cell_reference(col_idx: int, row_idx: int, sheet: Optional[str] = None,
                           header_rows: int = 1) -> Optional[str]:
        """Get A1 notation for a 0-based DataFrame position."""
        return row_and_column_to_address(
            SheetIndex.to_sheet_row(row_idx, header_rows), col_idx + 1, sheet
        )

    @staticmethod
    def parse_cell_reference(cell_ref: str) -> Tuple[str, int]:
        """Parse A1 notation into column letter and row number."""
        ref = address_to_row_and_column(cell_ref)
        if ref is None:
            raise ValueError(f"Invalid cell reference: {cell_ref}")
        return column_number_to_name(ref['column']), ref['row']

    @staticmethod
    def to_df_position(cell_ref: str, header_rows: int = 1) -> Tuple[int, int]:
        """Parse A1 notation into a 0-based (row index, column index) DataFrame position."""
        ref = address_to_row_and_column(cell_ref)
        if ref is None:
            raise ValueError(f"Invalid cell reference: {cell_ref}")

        df_index = SheetIndex.to_df_index(ref['row'], header_rows)
        if df_index < 0:
            raise ValueError(f"Cell reference {cell_ref} points into the header rows")
        return df_index, ref['column'] - 1
