"""
Notepad Backend — Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the wire contract of the notepad API.
Why:   Strict input validation, explicit serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation automatically.

Wire record (both directions):
    {id, title, content, created_at, updated_at, archived}

    Requests may omit id, timestamps and archived. The server assigns id and
    timestamps; archived is only honoured on update.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteRequest(BaseModel):
    """
    What:  Body of POST /notepads and PUT /notepads/{id}.

    Fields other than title/content/archived are accepted so clients can send
    back a record they previously received, but they are ignored.
    """
    id: Optional[uuid.UUID] = Field(default=None, description="Ignored; ids are server-assigned")
    title: str = Field(description="Note title (required, may be empty)")
    content: str = Field(description="Note body; line breaks are preserved")
    created_at: Optional[datetime] = Field(default=None, description="Ignored")
    updated_at: Optional[datetime] = Field(default=None, description="Ignored")
    archived: Optional[bool] = Field(
        default=None,
        description="Update only: new archived state. Omit or null to keep the current one.",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by every route that yields one or more notes.
    """
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note was last changed (UTC ISO 8601)")
    archived: bool = Field(description="Whether the note is archived")

    model_config = {"from_attributes": True}


class StatsResponse(BaseModel):
    """Note counts. total == active + archived."""
    total: int = Field(description="Number of notes")
    active: int = Field(description="Number of non-archived notes")
    archived: int = Field(description="Number of archived notes")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Body of 400/429 responses.

    Example:
        {
            "error": "validation_error",
            "message": "Invalid date 'yesterday'. Use ISO 8601, e.g. 2024-01-15T10:30:00",
            "details": {"field": "date"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Any] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class InternalErrorResponse(BaseModel):
    """
    What:  Body of 500 responses.

    Example:
        {
            "timestamp": "2024-01-15T10:30:00.123456",
            "message": "An unexpected error occurred",
            "details": "division by zero",
            "path": "/notepads/stats",
            "request_id": "a1b2c3d4"
        }
    """
    timestamp: datetime = Field(description="When the error happened (UTC)")
    message: str = Field(description="Generic error description")
    details: Optional[Any] = Field(default=None, description="Raw error detail")
    path: str = Field(description="Request path")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


# ══════════════════════════════════════════════════════════════════════════
# Health Models
# ══════════════════════════════════════════════════════════════════════════


class LivenessResponse(BaseModel):
    """Returned by GET /notepads/health. Never touches the database."""
    status: str = Field(default="UP", description="Always UP while the process serves requests")
    message: str = Field(default="Notepad API is running")


class HealthResponse(BaseModel):
    """
    What:  Readiness report returned by GET /health.

    A backend that cannot reach its database cannot serve notes, so the
    database probe decides the overall status.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def error_body(
    error: str,
    message: str,
    details: Optional[Any] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """ErrorResponse as a JSON-ready dict, for handlers that build responses directly."""
    return ErrorResponse(
        error=error, message=message, details=details, request_id=request_id
    ).model_dump(mode="json")
