from typing import Dict, Any, Optional
import pandas as pd
import logging
from ..utils.address import address_to_row_and_column, row_and_column_to_address

logger = logging.getLogger(__name__)

# Largest row/column the nullable Int64 result columns can hold
MAX_INDEX = 2**63 - 1

class AddressTable:
    """Batch address conversions over the columns of a DataFrame."""

    def __init__(self, df: pd.DataFrame):
        self.df = df
        self.stats: Dict[str, int] = {'total': 0, 'successful': 0, 'failed': 0}

    @classmethod
    def from_csv(cls, path: str) -> 'AddressTable':
        """Load a CSV file, keeping every cell as text."""
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except Exception as e:
            logger.error(f"Failed to read table from {path}: {str(e)}")
            raise
        logger.info(f"Loaded table {path} ({len(df.index)} rows, {len(df.columns)} columns)")
        return cls(df)

    def _require_columns(self, *columns: Optional[str]) -> None:
        missing = [col for col in columns if col is not None and col not in self.df.columns]
        if missing:
            raise KeyError(f"Column(s) not found in table: {', '.join(missing)}")

    def _warn_overwrite(self, *columns: str) -> None:
        existing = [col for col in columns if col in self.df.columns]
        if existing:
            logger.warning(f"Overwriting existing column(s): {', '.join(existing)}")

    def _reset_stats(self) -> None:
        self.stats = {'total': 0, 'successful': 0, 'failed': 0}

    def _record(self, ok: bool, index: Any, value: Any, strict: bool) -> None:
        self.stats['total'] += 1
        if ok:
            self.stats['successful'] += 1
            return

        self.stats['failed'] += 1
        if strict:
            raise ValueError(f"Invalid value in row {index}: {value!r}")
        logger.warning(f"Skipping invalid value in row {index}: {value!r}")

    def parse_addresses(self, column: str, strict: bool = False) -> pd.DataFrame:
        """Decode an address column into `row`, `column` and `sheet` columns.

        Args:
            column: Name of the column holding the addresses
            strict: Raise ValueError on the first invalid address instead of
                leaving the row empty

        Returns:
            A copy of the table with the decoded columns added
        """
        self._require_columns(column)
        self._warn_overwrite('row', 'column', 'sheet')
        self._reset_stats()

        rows, columns, sheets = [], [], []
        for index, value in zip(self.df.index, self.df[column].tolist()):
            ref = address_to_row_and_column(value)
            if ref is not None and (ref['row'] > MAX_INDEX or ref['column'] > MAX_INDEX):
                ref = None
            self._record(ref is not None, index, value, strict)
            if ref is None:
                rows.append(pd.NA)
                columns.append(pd.NA)
                sheets.append(None)
            else:
                rows.append(ref['row'])
                columns.append(ref['column'])
                sheets.append(ref.get('sheet'))

        result = self.df.copy()
        result['row'] = pd.array(rows, dtype='Int64')
        result['column'] = pd.array(columns, dtype='Int64')
        result['sheet'] = pd.Series(sheets, index=self.df.index, dtype=object)

        logger.info(f"Parsed {self.stats['successful']}/{self.stats['total']} addresses from column `{column}`")
        return result

    def format_addresses(self, row_column: str, col_column: str, sheet_column: Optional[str] = None,
                         strict: bool = False, target: str = 'address') -> pd.DataFrame:
        """Encode row/column (and optional sheet) columns into an address column.

        Empty sheet cells produce bare addresses.
        """
        self._require_columns(row_column, col_column, sheet_column)
        self._warn_overwrite(target)
        self._reset_stats()

        row_values = self.df[row_column].tolist()
        col_values = self.df[col_column].tolist()
        sheet_values = self.df[sheet_column].tolist() if sheet_column else [None] * len(self.df.index)

        addresses = []
        for index, row, col, sheet in zip(self.df.index, row_values, col_values, sheet_values):
            address = row_and_column_to_address(row, col, sheet if isinstance(sheet, str) else None)
            self._record(address is not None, index, (row, col), strict)
            addresses.append(address)

        result = self.df.copy()
        result[target] = pd.Series(addresses, index=self.df.index, dtype=object)

        logger.info(f"Formatted {self.stats['successful']}/{self.stats['total']} addresses into column `{target}`")
        return result
