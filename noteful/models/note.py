"""
Noteful Backend — Note SQLAlchemy Model
========================================

What:  ORM model representing the `notes` table.
Who:   Used by the note repository and by Alembic for schema management.

Table Design:
    - folder: Foreign key to folders.id. ON DELETE CASCADE lets a folder be
      removed while it still holds notes; the notes go with it.
    - date_published: UTC with timezone; filled with the insert time when
      the client does not send one.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


class Note(Base):
    """
    A text entry that belongs to exactly one folder.

    `name` and `content` are stored as submitted and sanitized on the way
    out (see schemas.note.NoteResponse).
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    folder: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=False,
    )

    date_published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, folder={self.folder}, name={self.name!r})>"
