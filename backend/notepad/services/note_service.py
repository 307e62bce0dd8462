"""
Notepad Backend — Note Service (Business Rules)
================================================

What:  Applies note semantics on top of NoteStore and returns wire models.
Why:   Keeps update/toggle rules in one place, independent of HTTP concerns.
How:   Each call builds a NoteStore over the request's session, performs the
       operation, and converts ORM rows into NoteResponse objects.
Who:   Called by route handlers; calls the store.

Rules:
    create:   always starts active; any archived value in the request is ignored
    update:   title and content always replaced (no patch semantics);
              archived replaced only when the request carries a value
    toggle:   archived = not archived
    search:   case-insensitive substring; the empty term matches everything
    stats:    three independent counts (total, active, archived)

Errors:
    Missing notes raise NotFoundError (→ 404). SQLAlchemy failures are logged
    and re-raised as DatabaseError (→ 500).
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.exceptions import DatabaseError, NotFoundError
from notepad.models.note import Note
from notepad.schemas.note import NoteRequest, NoteResponse, StatsResponse
from notepad.store import (
    NoteStore,
    content_contains,
    created_after,
    is_archived,
    title_contains,
    title_or_content_contains,
    updated_after,
)

logger = logging.getLogger(__name__)


@contextmanager
def _database_errors(action: str, **context) -> Iterator[None]:
    """Translate SQLAlchemy failures raised inside the block into DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error while trying to %s: %s", action, str(e), exc_info=True)
        raise DatabaseError(
            message=f"Could not {action}. Please try again.",
            context={**context, "original_error": str(e)},
        ) from e


def _to_response(note: Note) -> NoteResponse:
    return NoteResponse.model_validate(note)


def _to_responses(notes: List[Note]) -> List[NoteResponse]:
    return [_to_response(note) for note in notes]


class NoteService:
    """
    Business logic layer for note operations.

    NoteService is stateless: the session arrives with every call, so a
    single module-level instance serves all requests.
    """

    # ── Listing ───────────────────────────────────────────────────────────

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        with _database_errors("list notes"):
            return _to_responses(await NoteStore(db).list_all())

    async def list_active(self, db: AsyncSession) -> List[NoteResponse]:
        with _database_errors("list active notes"):
            return _to_responses(await NoteStore(db).list_where(is_archived(False)))

    async def list_archived(self, db: AsyncSession) -> List[NoteResponse]:
        with _database_errors("list archived notes"):
            return _to_responses(await NoteStore(db).list_where(is_archived(True)))

    # ── Single record ─────────────────────────────────────────────────────

    async def get_note(self, db: AsyncSession, note_id: UUID) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
        """
        with _database_errors("retrieve the note", note_id=str(note_id)):
            note = await NoteStore(db).get(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return _to_response(note)

    async def create_note(self, db: AsyncSession, request: NoteRequest) -> NoteResponse:
        """
        Create a note from the request's title and content.

        The record always starts active; request.archived, request.id and the
        request timestamps are ignored.
        """
        with _database_errors("create the note"):
            note = await NoteStore(db).create(request.title, request.content)
        logger.info("Note created: %s", note.id)
        return _to_response(note)

    async def update_note(
        self, db: AsyncSession, note_id: UUID, request: NoteRequest
    ) -> NoteResponse:
        """
        Replace title and content; replace archived only if the request sets it.

        An empty title or content still overwrites the stored value.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
        """
        with _database_errors("update the note", note_id=str(note_id)):
            note = await NoteStore(db).update(
                note_id,
                title=request.title,
                content=request.content,
                archived=request.archived,
            )
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        logger.info("Note updated: %s", note_id)
        return _to_response(note)

    async def toggle_archive(self, db: AsyncSession, note_id: UUID) -> NoteResponse:
        """
        Flip the archived flag of one note.

        The current row is read under a row lock, so two concurrent toggles
        of the same note serialize instead of both reading the old value.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
        """
        store = NoteStore(db)
        with _database_errors("toggle the archive state", note_id=str(note_id)):
            current = await store.get(note_id, for_update=True)
            if current is None:
                raise NotFoundError(resource="note", resource_id=str(note_id))
            note = await store.update(
                note_id,
                title=current.title,
                content=current.content,
                archived=not current.archived,
            )
        logger.info("Note %s archived=%s", note_id, note.archived)
        return _to_response(note)

    async def delete_note(self, db: AsyncSession, note_id: UUID) -> bool:
        """Delete one note. Returns False (not an error) when it is already gone."""
        with _database_errors("delete the note", note_id=str(note_id)):
            deleted = await NoteStore(db).delete(note_id)
        if deleted:
            logger.info("Note deleted: %s", note_id)
        return deleted

    # ── Search ────────────────────────────────────────────────────────────

    async def search(self, db: AsyncSession, term: str) -> List[NoteResponse]:
        """Notes whose title or content contains `term`, ignoring case."""
        with _database_errors("search notes"):
            return _to_responses(
                await NoteStore(db).list_where(title_or_content_contains(term))
            )

    async def search_by_title(self, db: AsyncSession, term: str) -> List[NoteResponse]:
        with _database_errors("search notes by title"):
            return _to_responses(await NoteStore(db).list_where(title_contains(term)))

    async def search_by_content(self, db: AsyncSession, term: str) -> List[NoteResponse]:
        with _database_errors("search notes by content"):
            return _to_responses(await NoteStore(db).list_where(content_contains(term)))

    # ── Date filters ──────────────────────────────────────────────────────
    # Timestamps arrive already parsed and normalized to naive UTC by the
    # transport layer.

    async def list_created_after(
        self, db: AsyncSession, timestamp: datetime
    ) -> List[NoteResponse]:
        with _database_errors("list notes by creation date"):
            return _to_responses(await NoteStore(db).list_where(created_after(timestamp)))

    async def list_updated_after(
        self, db: AsyncSession, timestamp: datetime
    ) -> List[NoteResponse]:
        with _database_errors("list notes by update date"):
            return _to_responses(await NoteStore(db).list_where(updated_after(timestamp)))

    # ── Statistics ────────────────────────────────────────────────────────

    async def get_stats(self, db: AsyncSession) -> StatsResponse:
        store = NoteStore(db)
        with _database_errors("compute note statistics"):
            total = await store.count_where()
            active = await store.count_where(is_archived(False))
            archived = await store.count_where(is_archived(True))
        return StatsResponse(total=total, active=active, archived=archived)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
