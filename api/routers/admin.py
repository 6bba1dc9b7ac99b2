"""
Admin router - Login and logout for the admin dashboard.

A successful login returns a session token that must be sent in the
X-Session-Id header to every upload endpoint.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends

from api.dependencies import get_session_id, get_session_store
from api.schemas.auth_schema import LoginRequest, LoginResponse
from api.schemas.common import ErrorResponse, SuccessResponse
from services.session_service import SessionStore

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix='/admin', tags=['admin'])


@router.post(
    '/login',
    response_model=LoginResponse,
    responses={401: {'model': ErrorResponse}}
)
async def login(
    body: LoginRequest,
    sessions: SessionStore = Depends(get_session_store)
):
    """
    Exchange the admin password for a session token.

    **Example:**
    ```bash
    curl -X POST http://localhost:3000/admin/login \\
         -H 'Content-Type: application/json' -d '{"password": "..."}'
    ```

    **Returns:**
    - 200 with `sessionId`
    - 401 if the password is wrong
    """
    session_id = sessions.login(body.password)
    return LoginResponse(session_id=session_id)


@router.post('/logout', response_model=SuccessResponse)
async def logout(
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_session_store)
):
    """
    End the admin session named by X-Session-Id.

    Always succeeds, including for unknown or missing tokens.
    """
    sessions.logout(session_id)
    return SuccessResponse()
