"""Domain models for the participants backend."""
from backend.models.participant import (
    COLUMN_MAP, MISSING_VALUE, ParticipantRecord, UploadCategory
)

__all__ = ['COLUMN_MAP', 'MISSING_VALUE', 'ParticipantRecord', 'UploadCategory']
