"""
goup.observability.middleware

Request-scoped logging context and the per-request access line.

Responsibilities:
- Take the caller's `x-request-id` (the web client sends one per call) or mint one.
- Bind request id, path and method into structlog contextvars.
- Log one `request_finished` event with status and duration.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from goup.observability.logging import get_logger

REQUEST_ID_HEADER = "x-request-id"
# Longer ids are replaced rather than echoed back.
MAX_REQUEST_ID_LENGTH = 128

# Static files and probes would drown the access log.
_QUIET_PREFIXES = ("/media/", "/healthz")

log = get_logger(__name__)


def _incoming_request_id(request: Request) -> str:
    given = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if given and len(given) <= MAX_REQUEST_ID_LENGTH:
        return given
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _incoming_request_id(request)
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
            if not request.url.path.startswith(_QUIET_PREFIXES):
                log.info(
                    "request_finished",
                    status=response.status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 1),
                )
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)
