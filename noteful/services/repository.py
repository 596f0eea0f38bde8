"""
Noteful Backend — Table Repository (Data Access Layer)
=======================================================

What:  Generic CRUD access to one table: list, insert, get, delete, update.
Why:   Folders and notes need the same five statements; only the table and
       the set of writable columns differ.
How:   A TableRepository is built from an ORM model and a tuple of writable
       field names. Each method takes the request's AsyncSession explicitly.
Who:   Called by the route handlers and the existence-check dependencies.

Contract:
    list_all      → every row, ordered by id
    insert        → the persisted row (generated id and defaults filled in)
    get_by_id     → the row, or None (never raises for "not found")
    delete_by_id  → number of rows removed (0 or 1)
    update_by_id  → number of rows updated (0 if the id doesn't exist)

Error Handling:
    SQLAlchemy errors are logged and re-raised as StoreError, which the
    global handler turns into a generic 500. Nothing is retried.
"""

import logging
from typing import Any, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import Base
from noteful.exceptions import StoreError
from noteful.models import Folder, Note

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class TableRepository(Generic[ModelT]):
    """
    CRUD statements against the table mapped by `model`.

    Args:
        model:  ORM class; its __tablename__ names the table
        fields: Columns a client may write. Keys outside this list are
                dropped from insert and update payloads, so `id` can never
                be set or renamed through the repository.
    """

    def __init__(self, model: Type[ModelT], fields: Sequence[str]):
        self.model = model
        self.fields = tuple(fields)

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def _writable(self, values: Mapping[str, Any]) -> dict:
        return {key: values[key] for key in self.fields if key in values}

    def _store_error(self, operation: str, exc: SQLAlchemyError) -> StoreError:
        logger.error(
            "Store error during %s on %s: %s",
            operation,
            self.table_name,
            str(exc),
        )
        return StoreError(
            context={
                "table": self.table_name,
                "operation": operation,
                "error_type": type(exc).__name__,
            },
        )

    async def list_all(self, db: AsyncSession) -> List[ModelT]:
        """SELECT * FROM <table> ORDER BY id"""
        try:
            result = await db.execute(select(self.model).order_by(self.model.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._store_error("list_all", e) from e

    async def insert(self, db: AsyncSession, values: Mapping[str, Any]) -> ModelT:
        """
        INSERT one row and return it as persisted.

        flush() sends the INSERT and assigns the generated id without
        committing; the session dependency commits when the request ends.
        refresh() reads back server-side defaults.
        """
        row = self.model(**self._writable(values))
        try:
            db.add(row)
            await db.flush()
            await db.refresh(row)
        except SQLAlchemyError as e:
            raise self._store_error("insert", e) from e
        logger.info("Inserted %s row %s", self.table_name, row.id)
        return row

    async def get_by_id(self, db: AsyncSession, row_id: int) -> Optional[ModelT]:
        """SELECT * FROM <table> WHERE id = :id, or None."""
        try:
            result = await db.execute(
                select(self.model).where(self.model.id == row_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._store_error("get_by_id", e) from e

    async def delete_by_id(self, db: AsyncSession, row_id: int) -> int:
        """DELETE FROM <table> WHERE id = :id; returns the affected row count."""
        try:
            result = await db.execute(
                delete(self.model).where(self.model.id == row_id)
            )
        except SQLAlchemyError as e:
            raise self._store_error("delete_by_id", e) from e
        logger.info("Deleted %s row %s (%d affected)", self.table_name, row_id, result.rowcount)
        return result.rowcount

    async def update_by_id(
        self, db: AsyncSession, row_id: int, values: Mapping[str, Any]
    ) -> int:
        """
        UPDATE <table> SET ... WHERE id = :id with only the writable fields
        present in `values`. Returns the affected row count.

        Raises:
            ValueError: `values` holds no writable field. Routes validate
                        the body first, so this only signals a caller bug.
        """
        patch = self._writable(values)
        if not patch:
            raise ValueError(f"No writable {self.table_name} fields in update: {sorted(values)}")
        try:
            result = await db.execute(
                update(self.model).where(self.model.id == row_id).values(**patch)
            )
        except SQLAlchemyError as e:
            raise self._store_error("update_by_id", e) from e
        logger.info(
            "Updated %s row %s fields=%s (%d affected)",
            self.table_name,
            row_id,
            sorted(patch),
            result.rowcount,
        )
        return result.rowcount


# ── Repository Instances ──────────────────────────────────────────────────
folder_repository: TableRepository[Folder] = TableRepository(Folder, fields=("title",))
note_repository: TableRepository[Note] = TableRepository(
    Note, fields=("name", "content", "folder", "date_published")
)
