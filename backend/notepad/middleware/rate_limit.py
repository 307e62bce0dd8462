"""
Notepad Backend — Rate Limiting Middleware
===========================================

What:  Per-IP sliding window rate limiter.
Why:   The API has no authentication; this keeps one client from monopolizing it.
How:   SlidingWindowLimiter keeps a log of request times per client and raises
       RateLimitExceededError once a client is over budget. The middleware
       turns that exception into the 429 response.

The 429 is built here rather than by an app exception handler: an exception
raised inside BaseHTTPMiddleware.dispatch never reaches ExceptionMiddleware.

State lives in process memory, so limits apply per worker process.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from notepad.config import settings
from notepad.exceptions import RateLimitExceededError
from notepad.schemas.note import error_body

logger = logging.getLogger(__name__)


class SlidingWindowLimiter:
    """
    Sliding window log: at most `limit` hits per `window` seconds per key.

    `limit` and `window` are callables so a settings change applies to the
    next request without rebuilding the app.
    """

    # Prune idle keys after this many recorded hits
    CLEANUP_EVERY = 1000

    def __init__(
        self,
        limit: Callable[[], int],
        window: Callable[[], int],
        clock: Callable[[], float] = time.time,
    ):
        self._limit = limit
        self._window = window
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._since_cleanup = 0

    def hit(self, key: str) -> None:
        """
        Record one request for `key`.

        Raises:
            RateLimitExceededError: key already used its budget; retry_after is
                the number of seconds until its oldest hit leaves the window
        """
        now = self._clock()
        window = self._window()
        hits = self._hits[key]
        while hits and hits[0] <= now - window:
            hits.popleft()

        if len(hits) >= self._limit():
            raise RateLimitExceededError(
                retry_after=int(hits[0] + window - now) + 1,
                context={"client_ip": key, "requests": len(hits), "window": window},
            )

        hits.append(now)
        self._since_cleanup += 1
        if self._since_cleanup >= self.CLEANUP_EVERY:
            self._forget_idle(now - window)

    def _forget_idle(self, window_start: float) -> None:
        idle = [key for key, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for key in idle:
            del self._hits[key]
        self._since_cleanup = 0
        if idle:
            logger.debug("Forgot %d idle clients", len(idle))


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Applies SlidingWindowLimiter per client IP.

    Configuration (from settings):
        rate_limit_enabled:  Master switch
        rate_limit_requests: Max requests per window (default: 1000)
        rate_limit_window:   Window duration in seconds (default: 3600)

    Excluded paths: health probes and API documentation.
    """

    EXCLUDED_PATHS = {"/health", "/notepads/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self.limiter = SlidingWindowLimiter(
            limit=lambda: settings.rate_limit_requests,
            window=lambda: settings.rate_limit_window,
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not settings.rate_limit_enabled or request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        # Behind a proxy this is the proxy's address
        client_ip = request.client.host if request.client else "unknown"

        try:
            self.limiter.hit(client_ip)
        except RateLimitExceededError as exc:
            logger.warning("Rate limit exceeded for IP %s: %s", client_ip, exc.context)
            return JSONResponse(
                status_code=429,
                content=error_body(
                    "rate_limit_exceeded",
                    exc.message,
                    details={"retry_after": exc.retry_after},
                ),
                headers={"Retry-After": str(exc.retry_after)},
            )

        return await call_next(request)
