"""
Pydantic schemas for request/response validation.

This package contains all Pydantic models used for API request validation
and response serialization.
"""

from api.schemas.common import ErrorResponse, SuccessResponse, HealthCheckResponse
from api.schemas.auth_schema import LoginRequest, LoginResponse
from api.schemas.upload_schema import UploadResponse
from api.schemas.participant_schema import ParticipantResponse

__all__ = [
    # Common
    'ErrorResponse',
    'SuccessResponse',
    'HealthCheckResponse',

    # Auth
    'LoginRequest',
    'LoginResponse',

    # Upload
    'UploadResponse',

    # Participants
    'ParticipantResponse',
]
