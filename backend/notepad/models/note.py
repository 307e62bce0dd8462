"""
Notepad Backend — Note SQLAlchemy Model
========================================

What:  ORM model representing the `notepads` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteStore for CRUD and by Alembic for schema management.

Table Design:
    - UUID primary key: opaque and never reused
    - title / content: TEXT, required (empty strings are allowed)
    - created_at / updated_at: naive UTC timestamps. Naive values compare the
      same way on SQLite and PostgreSQL, so date filters behave identically
      in tests and production.
    - archived: the active/archived state flag
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Text, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column

from notepad.database import Base


def utc_now() -> datetime:
    """Return current UTC time as a timezone-naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Note(Base):
    """
    A single note record.

    Lifecycle:
        1. Created active (archived = False), created_at == updated_at
        2. Updated or toggled any number of times; updated_at moves forward
        3. Deleted — the row is gone, there is no soft-delete state
    """

    __tablename__ = "notepads"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Free text; line breaks are preserved as-is
    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utc_now,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utc_now,
    )

    archived: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    __table_args__ = (
        Index("idx_notepads_created_at", "created_at"),
        Index("idx_notepads_archived", "archived"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, title='{self.title}', "
            f"archived={self.archived})>"
        )
