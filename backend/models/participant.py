"""
Participant domain models.

This module defines the upload categories and the normalized participant
record produced from uploaded spreadsheets.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict

# Value used for any field whose source column is missing or blank
MISSING_VALUE = 'N/A'


class UploadCategory(str, Enum):
    """Competition phase a spreadsheet belongs to."""
    REGISTERED = 'registered'
    ROUND1 = 'round1'
    WINNERS = 'winners'

    @property
    def filename(self) -> str:
        """Fixed on-disk filename for this category."""
        return f"{self.value}.xlsx"

    @property
    def field_name(self) -> str:
        """Multipart form field carrying the upload for this category."""
        return f"{self.value}File"


# Spreadsheet header -> record attribute
COLUMN_MAP: Dict[str, str] = {
    'Name': 'name',
    'Roll No': 'roll_no',
    'Year': 'year',
    'Section': 'section',
}


@dataclass(frozen=True)
class ParticipantRecord:
    """
    One participant row, normalized from a spreadsheet.

    Every field is a string; absent columns hold MISSING_VALUE.
    """

    name: str = MISSING_VALUE
    roll_no: str = MISSING_VALUE
    year: str = MISSING_VALUE
    section: str = MISSING_VALUE

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
