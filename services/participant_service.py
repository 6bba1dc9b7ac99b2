"""
Participant Service - Query uploaded participant lists.

Stateless: resolves a category's current file through the storage service,
reads it, and maps every row onto a ParticipantRecord.
"""

import logging
from datetime import date, datetime, time
from typing import Any, List, Optional

from backend.models.participant import (
    COLUMN_MAP, MISSING_VALUE, ParticipantRecord
)
from services.spreadsheet_service import Row, SpreadsheetReader
from services.storage_service import CategoryLike, StorageService

logger = logging.getLogger(__name__)


def format_cell(value: Any) -> str:
    """
    Render a spreadsheet cell as the string sent to clients.

    Empty cells become MISSING_VALUE; whole floats drop their '.0' so a
    roll number typed as 1 does not come back as '1.0'.
    """
    if value is None:
        return MISSING_VALUE
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    text = str(value).strip()
    return text or MISSING_VALUE


def to_record(row: Row) -> ParticipantRecord:
    """Map one header-keyed row onto a ParticipantRecord."""
    fields = {attr: format_cell(row.get(column)) for column, attr in COLUMN_MAP.items()}
    return ParticipantRecord(**fields)


class ParticipantService:
    """Reads the current spreadsheet of a category into records."""

    def __init__(self, storage: StorageService, reader: Optional[SpreadsheetReader] = None):
        self.storage = storage
        self.reader = reader or SpreadsheetReader()

    def list_participants(self, category: CategoryLike) -> List[ParticipantRecord]:
        """
        List participants of a category in file order.

        Never raises for a missing or unreadable file: the failure is
        logged and an empty list returned.
        """
        category = self.storage.resolve_category(category)
        file_path = self.storage.current_location(category)

        if file_path is None:
            logger.debug(f"No upload yet for category '{category.value}'")
            return []

        try:
            rows = self.reader.read_rows(file_path)
        except Exception as e:
            logger.error(f"Error processing Excel file {file_path}: {e}", exc_info=True)
            return []

        return [to_record(row) for row in rows]

    def count_records(self, file_path: str) -> int:
        """
        Count data rows in a spreadsheet.

        Read errors propagate to the caller.
        """
        count = self.reader.count_rows(file_path)
        logger.info(f"Found {count} records in {file_path}")
        return count
