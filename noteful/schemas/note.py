"""
Noteful Backend — Note Request/Response Schemas
================================================

What:  Pydantic models for the /api/notes contract.
How:   Request models only coerce types (`folder` to int, `date_published`
       to datetime); presence rules live in the route so the error messages
       name the missing field in the API's own format.
       `NoteResponse` sanitizes `name` and `content`; `folder` and
       `date_published` pass through untouched.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from noteful.sanitize import strip_unsafe_attributes

# Order matters: POST reports the first missing field in this order.
NOTE_REQUIRED_FIELDS = ("name", "content", "folder")


class NoteCreate(BaseModel):
    """Body of POST /api/notes. Unknown keys are ignored."""
    name: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body")
    folder: Optional[int] = Field(default=None, description="Id of the owning folder")
    date_published: Optional[datetime] = Field(
        default=None,
        description="Publish time (ISO 8601); defaults to the insert time",
    )


class NoteUpdate(BaseModel):
    """
    Body of PATCH /api/notes/{id}.

    Any subset of the four fields is accepted. Unrecognized keys are dropped
    silently; null values count as absent.
    """
    name: Optional[str] = None
    content: Optional[str] = None
    folder: Optional[int] = None
    date_published: Optional[datetime] = None


class NoteResponse(BaseModel):
    id: int = Field(description="Store-generated note identifier")
    name: str = Field(description="Note title with unsafe attributes removed")
    content: str = Field(description="Note body with unsafe attributes removed")
    folder: int = Field(description="Id of the owning folder")
    date_published: datetime = Field(description="Publish time (ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("name", "content")
    @classmethod
    def sanitize_text(cls, v: str) -> str:
        return strip_unsafe_attributes(v)
