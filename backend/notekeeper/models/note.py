"""
NoteKeeper Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by the StorageClient for every read and write.

Table Design:
    - id: UUID4 rendered as text. Text (not a native UUID column) because ids
      arrive as arbitrary path strings; a malformed id must read as "no such
      note", not as a type error.
    - title / content: TEXT, NOT NULL. content defaults to ''.
    - created_at / updated_at: UTC with timezone, assigned by the storage
      client from one clock reading so that created_at == updated_at at
      creation time.

    Index on created_at DESC serves the only list query
    (ORDER BY created_at DESC).
"""

import uuid
from datetime import datetime

from sqlalchemy import Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base, UTCDateTime, utcnow


def new_note_id() -> str:
    return str(uuid.uuid4())


class Note(Base):
    """
    A titled text/markup entry.

    Lifecycle:
        1. Created by POST /notes (id and both timestamps assigned)
        2. Partially updated in place by PUT /notes/{id} (updated_at refreshed)
        3. Removed permanently by DELETE /notes/{id}
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_note_id,
        comment="Opaque note identifier (UUID4 text)",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Trimmed, never blank",
    )

    # Arbitrary markup from the editor; never NULL
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        comment="Last successful mutation (UTC)",
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, updated_at='{self.updated_at}')>"


# Serves the only list query: ORDER BY created_at DESC
Index("idx_notes_created_at", Note.created_at.desc())
