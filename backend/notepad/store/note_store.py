"""
Notepad Backend — Note Store
=============================

What:  Reads and writes `notepads` rows for one database session.
Why:   One place for every query the service needs, so the service can be
       written in terms of records and predicates instead of SQL.
How:   Thin async methods over SQLAlchemy 2.0 `select` / `delete` statements.
       Absence is signalled with None / False, never with an exception.

Criteria helpers:
    is_archived(flag)                  archived = flag
    title_contains(term)               case-insensitive substring on title
    content_contains(term)             case-insensitive substring on content
    title_or_content_contains(term)    either of the above
    created_after(ts)                  created_at > ts (strict)
    updated_after(ts)                  updated_at > ts (strict)

    Substring criteria escape LIKE wildcards, so "50%" matches the literal
    text "50%". The empty term is a substring of everything and matches
    every row.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from sqlalchemy import ColumnElement, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.models.note import Note, utc_now

logger = logging.getLogger(__name__)


# ── Criteria ──────────────────────────────────────────────────────────────

def is_archived(flag: bool) -> ColumnElement[bool]:
    return Note.archived.is_(flag)


def title_contains(term: str) -> ColumnElement[bool]:
    return Note.title.icontains(term, autoescape=True)


def content_contains(term: str) -> ColumnElement[bool]:
    return Note.content.icontains(term, autoescape=True)


def title_or_content_contains(term: str) -> ColumnElement[bool]:
    return or_(title_contains(term), content_contains(term))


def created_after(timestamp: datetime) -> ColumnElement[bool]:
    return Note.created_at > timestamp


def updated_after(timestamp: datetime) -> ColumnElement[bool]:
    return Note.updated_at > timestamp


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    """
    Current UTC time, nudged past `previous` when the clock has not moved.

    Two mutations inside the same clock tick would otherwise share an
    updated_at value; the nudge keeps updated_at strictly increasing.
    """
    now = utc_now()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class NoteStore:
    """
    Persistence operations for Note records.

    One instance per session. Writes are flushed, not committed: the request
    session (see `get_db_session`) owns the transaction boundary.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, title: str, content: str, archived: bool = False) -> Note:
        """Insert a new note; created_at and updated_at share one reading."""
        now = utc_now()
        note = Note(
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
            archived=archived,
        )
        self.session.add(note)
        await self.session.flush()  # Assigns the id without committing
        logger.debug("Note created: %s", note.id)
        return note

    async def get(self, note_id: UUID, for_update: bool = False) -> Optional[Note]:
        """
        Fetch one note by primary key.

        for_update=True takes a row lock (SELECT ... FOR UPDATE) on backends
        that support it; SQLite ignores it.
        """
        if for_update:
            return await self.session.get(Note, note_id, with_for_update=True)
        return await self.session.get(Note, note_id)

    async def list_all(self) -> List[Note]:
        return await self.list_where()

    async def list_where(self, *criteria: ColumnElement[bool]) -> List[Note]:
        """All notes matching every criterion, oldest first."""
        query = (
            select(Note)
            .where(*criteria)
            .order_by(Note.created_at, Note.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_where(self, *criteria: ColumnElement[bool]) -> int:
        query = select(func.count()).select_from(Note).where(*criteria)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def update(
        self,
        note_id: UUID,
        title: str,
        content: str,
        archived: Optional[bool] = None,
    ) -> Optional[Note]:
        """
        Overwrite title and content, and archived when given.

        updated_at is refreshed on every call, even when the values are
        unchanged. Returns None when the note does not exist.
        """
        note = await self.get(note_id, for_update=True)
        if note is None:
            return None

        note.title = title
        note.content = content
        if archived is not None:
            note.archived = archived
        note.updated_at = _next_timestamp(note.updated_at)

        await self.session.flush()
        logger.debug("Note updated: %s (archived=%s)", note.id, note.archived)
        return note

    async def delete(self, note_id: UUID) -> bool:
        """Remove one note. False when there was nothing to remove."""
        result = await self.session.execute(
            delete(Note).where(Note.id == note_id)
        )
        return result.rowcount > 0

    async def clear(self) -> int:
        """Remove every note; returns how many rows were deleted."""
        result = await self.session.execute(delete(Note))
        return result.rowcount
