"""
Upload-related Pydantic schemas.
"""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Result of a spreadsheet upload."""

    success: bool = Field(True, description="Operation success flag")
    count: int = Field(..., ge=0, description="Number of data rows found in the file")

    class Config:
        json_schema_extra = {
            "example": {"success": True, "count": 42}
        }
