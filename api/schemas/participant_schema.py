"""
Participant-related Pydantic schemas.

Field names are snake_case in Python and camelCase on the wire, matching
what the front-end pages render.
"""

from pydantic import BaseModel, Field


class ParticipantResponse(BaseModel):
    """One normalized participant row."""

    name: str = Field(..., description="Participant name")
    roll_no: str = Field(..., alias="rollNo", description="Roll number")
    year: str = Field(..., description="Year of study")
    section: str = Field(..., description="Section")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "name": "Asha Rao",
                "rollNo": "21CS042",
                "year": "3",
                "section": "CS-A"
            }
        }
