"""
Noteful Backend — Existence-Check Dependencies
===============================================

What:  Load the row named by an `{id}` path segment before the route runs.
How:   FastAPI resolves these before the handler. A missing row raises
       NotFoundError (→ 404 with the resource's message) and the handler
       never runs; a found row is passed to the handler as an argument.
Who:   Every /api/folders/{folder_id} and /api/notes/{note_id} route.

The dependency and the handler receive the same request-scoped session
(FastAPI caches `get_db_session` per request), so a handler that mutates
the row works inside the same transaction that loaded it.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.exceptions import NotFoundError
from noteful.models import Folder, Note
from noteful.services.repository import TableRepository, folder_repository, note_repository


async def _load_or_404(
    repository: TableRepository, db: AsyncSession, row_id: int, resource: str
):
    row = await repository.get_by_id(db, row_id)
    if row is None:
        raise NotFoundError(resource=resource, resource_id=row_id)
    return row


async def get_existing_folder(
    folder_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Folder:
    return await _load_or_404(folder_repository, db, folder_id, "Folder")


async def get_existing_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Note:
    return await _load_or_404(note_repository, db, note_id, "Note")
