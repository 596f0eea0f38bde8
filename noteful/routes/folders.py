"""
Noteful Backend — Folders Route Handlers
=========================================

What:  CRUD endpoints for /api/folders and /api/folders/{folder_id}.
How:   Validates the body, delegates to folder_repository, returns the
       sanitized FolderResponse with the conventional status code.

Routes:
    GET    /api/folders               200  all folders
    POST   /api/folders               201  created folder + Location
    GET    /api/folders/{folder_id}   200  one folder         | 404
    DELETE /api/folders/{folder_id}   204                     | 404
    PATCH  /api/folders/{folder_id}   204                     | 404, 400
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.dependencies import get_existing_folder
from noteful.exceptions import ValidationError
from noteful.models import Folder
from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from noteful.services.repository import folder_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/folders", tags=["Folders"])

_NOT_FOUND = {404: {"description": "Folder doesn't exist", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid request body", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[FolderResponse],
    summary="List all folders",
)
async def list_folders(
    db: AsyncSession = Depends(get_db_session),
) -> List[FolderResponse]:
    folders = await folder_repository.list_all(db)
    return [FolderResponse.model_validate(folder) for folder in folders]


@router.post(
    "",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
    summary="Create a folder",
)
async def create_folder(
    request: Request,
    response: Response,
    payload: Optional[FolderCreate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    """
    Insert a folder and return it with its generated id.

    `title` must be present and non-empty. The Location header points at
    the new folder's GET route.
    """
    payload = payload or FolderCreate()
    if not payload.title:
        raise ValidationError(message="Missing 'title' in request body", field="title")

    folder = await folder_repository.insert(db, {"title": payload.title})
    logger.info("Folder %s created", folder.id)

    response.headers["Location"] = str(request.url_for("get_folder", folder_id=folder.id))
    return FolderResponse.model_validate(folder)


@router.get(
    "/{folder_id}",
    response_model=FolderResponse,
    responses=_NOT_FOUND,
    summary="Get a single folder by id",
)
async def get_folder(
    folder: Folder = Depends(get_existing_folder),
) -> FolderResponse:
    return FolderResponse.model_validate(folder)


@router.delete(
    "/{folder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a folder",
)
async def delete_folder(
    folder: Folder = Depends(get_existing_folder),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await folder_repository.delete_by_id(db, folder.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{folder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Rename a folder",
)
async def update_folder(
    payload: Optional[FolderUpdate] = None,
    folder: Folder = Depends(get_existing_folder),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    payload = payload or FolderUpdate()
    if not payload.title:
        raise ValidationError(message="Request body must contain a 'title'", field="title")

    await folder_repository.update_by_id(db, folder.id, {"title": payload.title})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
