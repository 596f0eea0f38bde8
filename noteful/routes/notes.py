"""
Noteful Backend — Notes Route Handlers
=======================================

What:  CRUD endpoints for /api/notes and /api/notes/{note_id}.
How:   Same shape as the folder routes, with three required fields on
       create and a partial-update allowlist on PATCH.

Routes:
    GET    /api/notes             200  all notes
    POST   /api/notes             201  created note + Location  | 400
    GET    /api/notes/{note_id}   200  one note                 | 404
    DELETE /api/notes/{note_id}   204                           | 404
    PATCH  /api/notes/{note_id}   204                           | 404, 400

PATCH accepts any non-empty subset of name, content, folder and
date_published. Other keys in the body are ignored rather than rejected,
but they never satisfy the "at least one field" rule.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.dependencies import get_existing_note
from noteful.exceptions import ValidationError
from noteful.models import Note
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import (
    NOTE_REQUIRED_FIELDS,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from noteful.services.repository import note_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])

_NOT_FOUND = {404: {"description": "Note doesn't exist", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid request body", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[NoteResponse],
    summary="List all notes",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    notes = await note_repository.list_all(db)
    return [NoteResponse.model_validate(note) for note in notes]


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
    summary="Create a note",
)
async def create_note(
    request: Request,
    response: Response,
    payload: Optional[NoteCreate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Insert a note and return it with its generated id.

    Required: name, content, folder (checked in that order; the first
    missing one is reported). date_published defaults to now.
    """
    payload = payload or NoteCreate()
    values = payload.model_dump(exclude_none=True)
    for field in NOTE_REQUIRED_FIELDS:
        if values.get(field) in (None, ""):
            raise ValidationError(message=f"Missing '{field}' in request body", field=field)

    note = await note_repository.insert(db, values)
    logger.info("Note %s created in folder %s", note.id, note.folder)

    response.headers["Location"] = str(request.url_for("get_note", note_id=note.id))
    return NoteResponse.model_validate(note)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses=_NOT_FOUND,
    summary="Get a single note by id",
)
async def get_note(
    note: Note = Depends(get_existing_note),
) -> NoteResponse:
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a note",
)
async def delete_note(
    note: Note = Depends(get_existing_note),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_repository.delete_by_id(db, note.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Update some or all fields of a note",
)
async def update_note(
    payload: Optional[NoteUpdate] = None,
    note: Note = Depends(get_existing_note),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    payload = payload or NoteUpdate()
    # Blank text counts as absent, as it does on POST
    changes = {
        key: value
        for key, value in payload.model_dump(exclude_none=True).items()
        if value != ""
    }
    if not changes:
        raise ValidationError(
            message=(
                "Request body must contain either 'name', 'content', "
                "'folder', or 'date_published'"
            ),
        )

    await note_repository.update_by_id(db, note.id, changes)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
