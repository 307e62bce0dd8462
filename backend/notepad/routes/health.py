"""
Notepad Backend — Health Check Routes
======================================

What:  Liveness and readiness endpoints.
Why:   Orchestrators need a cheap "is the process up" probe and a deeper
       "can it serve notes" probe.

    GET /notepads/health  liveness: {status: "UP", message}; no I/O at all
    GET /health           readiness: probes the database with SELECT 1

    Status levels (readiness):
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from notepad import __version__
from notepad.schemas.note import HealthResponse, LivenessResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/notepads/health",
    response_model=LivenessResponse,
    summary="Liveness probe",
)
async def liveness() -> LivenessResponse:
    return LivenessResponse()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Readiness probe",
)
async def health_check(response: Response) -> HealthResponse:
    """
    Check that the database answers.

    Returns 200 when it does and 503 otherwise, with the same body shape.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        from notepad.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
