"""
Notepad Backend — Request Logging Middleware
=============================================

What:  One log line per HTTP request with method, path, status and duration.
Why:   Enables monitoring, debugging and performance tracking.
How:   Times the downstream call and logs at a level chosen by status class.

Log line:
    PUT /notepads/3f2a... 200 4.2ms [a1b2c3d4] from 127.0.0.1

    The same values are attached as `extra` fields for structured handlers.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID
    ❌ Don't log: request bodies or query strings (note text may be private)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notepad.middleware.request_id import request_id_var

logger = logging.getLogger("notepad.access")

# Probes run every few seconds and would drown out real traffic
SKIPPED_PATHS = {"/health", "/notepads/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Levels:
        5xx → ERROR   (system problem)
        4xx → WARNING (client error)
        else → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
