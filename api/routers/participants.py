"""
Participants router - Public read access to uploaded lists.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends

from api.dependencies import get_participant_service
from api.schemas.participant_schema import ParticipantResponse
from backend.models.participant import UploadCategory
from services.participant_service import ParticipantService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(tags=['participants'])


@router.get('/{category}', response_model=List[ParticipantResponse])
async def list_participants(
    category: UploadCategory,
    participants: ParticipantService = Depends(get_participant_service)
):
    """
    List participants of a category in spreadsheet order.

    `category` is one of `registered`, `round1`, `winners`. Returns an
    empty array when nothing has been uploaded or the file cannot be read.

    **Example:**
    ```bash
    curl http://localhost:3000/api/registered
    ```
    """
    records = participants.list_participants(category)
    return [ParticipantResponse(**record.to_dict()) for record in records]
