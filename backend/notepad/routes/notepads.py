"""
Notepad Backend — Notepad Route Handlers
=========================================

What:  The /notepads resource: CRUD, archive toggle, search, date filters, stats.
Why:   Maps HTTP onto NoteService calls and nothing more.
How:   Extracts path/query/body values, delegates to NoteService, returns models.

Route order matters: every fixed path (/active, /search, /stats, ...) is
registered before /{note_id}, otherwise "stats" would be parsed as an id.
/notepads/health lives in health.py, whose router is included first.

Error mapping (see main.py):
    NotFoundError            → 404, empty body
    ValidationError          → 400 (malformed date parameter)
    RequestValidationError   → 400 (missing field/param, malformed id)
"""

import logging
from datetime import datetime, timezone
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.database import get_db_session
from notepad.exceptions import NotFoundError, ValidationError
from notepad.schemas.note import (
    ErrorResponse,
    NoteRequest,
    NoteResponse,
    StatsResponse,
)
from notepad.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notepads", tags=["Notepads"])

_NOT_FOUND = {404: {"description": "Note not found (empty body)"}}
_BAD_REQUEST = {400: {"description": "Invalid input", "model": ErrorResponse}}


def parse_date_param(value: str) -> datetime:
    """
    Parse an ISO 8601 `date` query parameter into naive UTC.

    Accepts dates ("2024-01-15") and datetimes with or without an offset.
    Offset-aware values are converted to UTC; naive values are taken as UTC.

    Raises:
        ValidationError: value is not ISO 8601 (→ 400)
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            message=f"Invalid date '{value}'. Use ISO 8601, e.g. 2024-01-15T10:30:00",
            field="date",
        ) from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


# ══════════════════════════════════════════════════════════════════════════
# Collection routes
# ══════════════════════════════════════════════════════════════════════════


@router.get("", response_model=List[NoteResponse], summary="List all notes")
async def list_notepads(db: AsyncSession = Depends(get_db_session)) -> List[NoteResponse]:
    return await note_service.list_notes(db)


@router.get("/active", response_model=List[NoteResponse], summary="List non-archived notes")
async def list_active_notepads(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_active(db)


@router.get("/archived", response_model=List[NoteResponse], summary="List archived notes")
async def list_archived_notepads(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_archived(db)


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses=_BAD_REQUEST,
    summary="Create a note",
    description=(
        "Creates an active note from title and content. Any id, timestamps or "
        "archived value in the body are ignored."
    ),
)
async def create_notepad(
    request: NoteRequest,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.create_note(db, request)


# ══════════════════════════════════════════════════════════════════════════
# Search & filters
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/search",
    response_model=List[NoteResponse],
    responses=_BAD_REQUEST,
    summary="Search title or content",
    description="Case-insensitive substring match on title or content. An empty q matches every note.",
)
async def search_notepads(
    q: str = Query(..., description="Text to look for"),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.search(db, q)


@router.get(
    "/search/title",
    response_model=List[NoteResponse],
    responses=_BAD_REQUEST,
    summary="Search titles",
)
async def search_notepads_by_title(
    title: str = Query(..., description="Text to look for in titles"),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.search_by_title(db, title)


@router.get(
    "/search/content",
    response_model=List[NoteResponse],
    responses=_BAD_REQUEST,
    summary="Search content",
)
async def search_notepads_by_content(
    content: str = Query(..., description="Text to look for in content"),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.search_by_content(db, content)


@router.get(
    "/created-after",
    response_model=List[NoteResponse],
    responses=_BAD_REQUEST,
    summary="Notes created strictly after a date",
)
async def list_notepads_created_after(
    date: str = Query(..., description="ISO 8601 date or datetime (UTC when no offset)"),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    # Parsed here so a malformed date never reaches the service
    return await note_service.list_created_after(db, parse_date_param(date))


@router.get(
    "/updated-after",
    response_model=List[NoteResponse],
    responses=_BAD_REQUEST,
    summary="Notes updated strictly after a date",
)
async def list_notepads_updated_after(
    date: str = Query(..., description="ISO 8601 date or datetime (UTC when no offset)"),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_updated_after(db, parse_date_param(date))


@router.get("/stats", response_model=StatsResponse, summary="Note counts")
async def notepad_stats(db: AsyncSession = Depends(get_db_session)) -> StatsResponse:
    return await note_service.get_stats(db)


# ══════════════════════════════════════════════════════════════════════════
# Single-note routes
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses=_NOT_FOUND,
    summary="Get a note by ID",
)
async def get_notepad(
    note_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Replace a note's title and content",
    description=(
        "Title and content are always replaced. archived is replaced only when "
        "the body carries true or false; omit it to keep the current state."
    ),
)
async def update_notepad(
    note_id: UUID,
    request: NoteRequest,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(db, note_id, request)


@router.patch(
    "/{note_id}/toggle-archive",
    response_model=NoteResponse,
    responses=_NOT_FOUND,
    summary="Archive an active note or restore an archived one",
)
async def toggle_notepad_archive(
    note_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.toggle_archive(db, note_id)


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a note",
)
async def delete_notepad(
    note_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await note_service.delete_note(db, note_id):
        raise NotFoundError(resource="note", resource_id=str(note_id))
    return Response(status_code=204)
