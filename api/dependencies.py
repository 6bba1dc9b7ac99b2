"""
Dependency injection utilities for FastAPI.

This module provides the shared services and the admin session gate.
Tests replace the service factories through ``app.dependency_overrides``.
"""

import logging
from functools import lru_cache
from typing import Optional
from fastapi import Depends, Header

from api.config import settings
from services.exceptions import Unauthorized
from services.participant_service import ParticipantService
from services.session_service import SessionStore, create_session_store
from services.storage_service import StorageService

logger = logging.getLogger(__name__)


@lru_cache()
def get_session_store() -> SessionStore:
    """
    Get the process-wide session store.

    Backend is chosen by SESSION_BACKEND ('memory' or 'redis').
    """
    logger.info(f"Session backend: {settings.SESSION_BACKEND}")
    return create_session_store(
        settings.SESSION_BACKEND,
        settings.ADMIN_PASSWORD,
        redis_url=settings.REDIS_URL,
        ttl_seconds=settings.SESSION_TTL_SECONDS
    )


@lru_cache()
def get_storage_service() -> StorageService:
    """Get the storage service rooted at UPLOAD_DIR."""
    return StorageService(
        settings.UPLOAD_DIR,
        allowed_extensions=settings.ALLOWED_EXTENSIONS,
        max_file_size_mb=settings.MAX_FILE_SIZE_MB
    )


def get_participant_service(
    storage: StorageService = Depends(get_storage_service)
) -> ParticipantService:
    """Get a participant query service over the current storage."""
    return ParticipantService(storage)


def get_session_id(
    x_session_id: Optional[str] = Header(None, alias=settings.SESSION_HEADER)
) -> Optional[str]:
    """Read the session token header, if any."""
    return x_session_id


def require_admin_session(
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_session_store)
) -> str:
    """
    Gate for admin-only endpoints.

    Args:
        session_id: Token from the session header
        sessions: Session store

    Returns:
        Validated session token

    Raises:
        Unauthorized: If the token is missing or unknown

    Usage:
        @router.post("/endpoint")
        def endpoint(session_id: str = Depends(require_admin_session)):
            # Caller holds a valid admin session
            pass
    """
    if not sessions.authorize(session_id):
        raise Unauthorized("Session expired")

    return session_id
