"""
Admin authentication schemas.
"""

from typing import Optional
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Admin login body."""

    password: Optional[str] = Field(None, description="Shared admin password")

    class Config:
        json_schema_extra = {
            "example": {"password": "s3cr3t"}
        }


class LoginResponse(BaseModel):
    """Successful login; the token goes in the X-Session-Id header afterwards."""

    success: bool = Field(True, description="Operation success flag")
    session_id: str = Field(..., alias="sessionId", description="Admin session token")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "success": True,
                "sessionId": "1869f0c2a3b4c5d6e7f8a9b0c1d2e3f4"
            }
        }
