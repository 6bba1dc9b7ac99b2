"""
Spreadsheet Service - Read worksheet rows as header-keyed records.

Only the first worksheet is read. Its first row is the header; every
following non-blank row becomes a dict mapping header text to cell value.
"""

import logging
from typing import Any, Dict, Iterator, List

import openpyxl

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class SpreadsheetReader:
    """Loads .xlsx/.xlsm workbooks with openpyxl."""

    def __init__(self, data_only: bool = True):
        """
        Args:
            data_only: Read cached formula results instead of formula text
        """
        self.data_only = data_only

    def iter_rows(self, file_path: str) -> Iterator[Row]:
        """
        Yield data rows of the first worksheet.

        Columns with an empty header are dropped and rows whose cells are
        all empty are skipped.
        """
        wb = openpyxl.load_workbook(file_path, data_only=self.data_only)
        try:
            ws = wb.worksheets[0]
            rows = ws.iter_rows(values_only=True)

            header_row = next(rows, None)
            if header_row is None:
                return

            headers = [self._header_text(value) for value in header_row]

            for values in rows:
                record = {}
                for header, value in zip(headers, values):
                    if not header:
                        continue
                    record[header] = value

                if all(self._is_blank(v) for v in record.values()):
                    continue

                yield record
        finally:
            wb.close()

    def read_rows(self, file_path: str) -> List[Row]:
        rows = list(self.iter_rows(file_path))
        logger.debug(f"Read {len(rows)} rows from {file_path}")
        return rows

    def count_rows(self, file_path: str) -> int:
        return sum(1 for _ in self.iter_rows(file_path))

    @staticmethod
    def _header_text(value: Any) -> str:
        if value is None:
            return ''
        return str(value).strip()

    @staticmethod
    def _is_blank(value: Any) -> bool:
        return value is None or (isinstance(value, str) and not value.strip())
