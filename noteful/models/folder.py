"""
Noteful Backend — Folder SQLAlchemy Model
==========================================

What:  ORM model representing the `folders` table.
Who:   Used by the folder repository and by Alembic for schema management.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


class Folder(Base):
    """
    A named grouping that notes reference by id.

    `title` is stored exactly as submitted; it is sanitized on the way out
    (see schemas.folder.FolderResponse).
    """

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, title={self.title!r})>"
