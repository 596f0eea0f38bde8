"""
Noteful Backend — Folder Request/Response Schemas
==================================================

What:  Pydantic models for the /api/folders contract.
How:   Request fields are all optional so that a missing `title` reaches the
       route and produces the API's own 400 message instead of FastAPI's 422.
       The response model sanitizes `title` while validating from the ORM row.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from noteful.sanitize import strip_unsafe_attributes


class FolderCreate(BaseModel):
    """Body of POST /api/folders. Unknown keys are ignored."""
    title: Optional[str] = Field(default=None, description="Folder title")


class FolderUpdate(BaseModel):
    """Body of PATCH /api/folders/{id}. Unknown keys are ignored."""
    title: Optional[str] = Field(default=None, description="New folder title")


class FolderResponse(BaseModel):
    id: int = Field(description="Store-generated folder identifier")
    title: str = Field(description="Folder title with unsafe attributes removed")

    model_config = {"from_attributes": True}

    @field_validator("title")
    @classmethod
    def sanitize_title(cls, v: str) -> str:
        return strip_unsafe_attributes(v)
