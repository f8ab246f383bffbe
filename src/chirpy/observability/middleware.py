"""
chirpy.observability.middleware

HTTP middleware for request-scoped logging context and file-server metrics.

Responsibilities:
- Generate/propagate request IDs and bind them into structlog contextvars.
- Count hits on the static file server (`/app`).
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Ensures every request has a request id
    - Binds request-scoped contextvars for structured logs
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        try:
            response: Response = await call_next(request)
        finally:
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response


class HitCounter:
    """
    Number of requests served by the file server since startup or the last reset.

    One instance per app, held on `app.state`; all access happens on the event loop.
    """

    def __init__(self) -> None:
        self._hits = 0

    @property
    def hits(self) -> int:
        return self._hits

    def increment(self) -> None:
        self._hits += 1

    def reset(self) -> None:
        self._hits = 0


class FileServerMetricsMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, counter: HitCounter, prefix: str = "/app") -> None:
        super().__init__(app)
        self._counter = counter
        self._prefix = prefix

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path == self._prefix or path.startswith(self._prefix + "/"):
            self._counter.increment()
        return await call_next(request)


# --- Module Notes -----------------------------------------------------------
# This middleware complements `observability.logging.configure_logging` by ensuring
# request metadata is present on every log line without explicit parameter threading.
