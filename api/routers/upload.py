"""
Upload router - Admin spreadsheet uploads, one endpoint per category.

Each category accepts a single multipart file field named after it
(registeredFile, round1File, winnersFile). The stored file replaces the
category's previous upload.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile

from api.dependencies import (
    get_participant_service, get_storage_service, require_admin_session
)
from api.schemas.common import ErrorResponse
from api.schemas.upload_schema import UploadResponse
from backend.models.participant import UploadCategory
from services.exceptions import BadRequest, InternalError
from services.participant_service import ParticipantService
from services.storage_service import StorageService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix='/upload', tags=['upload'])

UPLOAD_ERRORS = {
    400: {'model': ErrorResponse},
    401: {'model': ErrorResponse},
    500: {'model': ErrorResponse},
}


def handle_upload(
    category: UploadCategory,
    file: Optional[UploadFile],
    storage: StorageService,
    participants: ParticipantService
) -> UploadResponse:
    """
    Store an uploaded spreadsheet and report its row count.

    Raises:
        BadRequest: If no file was attached or it was rejected by storage
        InternalError: If the stored file cannot be parsed
    """
    if file is None or not file.filename:
        raise BadRequest("No file was uploaded.")

    logger.info(f"Upload for '{category.value}': {file.filename}")
    stored_path = storage.store(category, file.file, file.filename)

    try:
        count = participants.count_records(stored_path)
    except Exception as e:
        logger.error(f"Upload {category.value} error: {e}", exc_info=True)
        raise InternalError("An error occurred while processing the file.")

    return UploadResponse(count=count)


@router.post('/registered', response_model=UploadResponse, responses=UPLOAD_ERRORS)
async def upload_registered(
    file: Optional[UploadFile] = File(None, alias='registeredFile',
                                      description="Registered candidates (.xlsx)"),
    session_id: str = Depends(require_admin_session),
    storage: StorageService = Depends(get_storage_service),
    participants: ParticipantService = Depends(get_participant_service)
):
    """Upload the registered candidates spreadsheet."""
    return handle_upload(UploadCategory.REGISTERED, file, storage, participants)


@router.post('/round1', response_model=UploadResponse, responses=UPLOAD_ERRORS)
async def upload_round1(
    file: Optional[UploadFile] = File(None, alias='round1File',
                                      description="Round 1 qualifiers (.xlsx)"),
    session_id: str = Depends(require_admin_session),
    storage: StorageService = Depends(get_storage_service),
    participants: ParticipantService = Depends(get_participant_service)
):
    """Upload the round 1 qualifiers spreadsheet."""
    return handle_upload(UploadCategory.ROUND1, file, storage, participants)


@router.post('/winners', response_model=UploadResponse, responses=UPLOAD_ERRORS)
async def upload_winners(
    file: Optional[UploadFile] = File(None, alias='winnersFile',
                                      description="Winners (.xlsx)"),
    session_id: str = Depends(require_admin_session),
    storage: StorageService = Depends(get_storage_service),
    participants: ParticipantService = Depends(get_participant_service)
):
    """Upload the winners spreadsheet."""
    return handle_upload(UploadCategory.WINNERS, file, storage, participants)
