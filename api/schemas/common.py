"""
Common Pydantic schemas used across the API.

This module contains the shared error, success and health response shapes.
"""

from typing import Dict, List
from pydantic import BaseModel, Field
from datetime import datetime


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Error message")

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "message": "Session expired"
            }
        }


class SuccessResponse(BaseModel):
    """Bare success acknowledgement."""

    success: bool = Field(True, description="Operation success flag")


class HealthCheckResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")
    version: str = Field(..., description="API version")
    upload_dir: str = Field(..., description="Directory holding uploaded spreadsheets")
    session_backend: str = Field(..., description="Session store in use")
    uploads: Dict[str, bool] = Field(..., description="Whether each category has a current file")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "timestamp": "2025-10-15T12:00:00Z",
                "version": "1.0.0",
                "upload_dir": "uploads/",
                "session_backend": "memory",
                "uploads": {"registered": True, "round1": False, "winners": False}
            }
        }
