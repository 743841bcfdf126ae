"""
NoteKeeper Backend — Request ID Middleware
============================================

What:  Tags each request with a correlation ID and echoes it in the response.
Why:   Every log line and error body from one request shares the same ID.
How:   Reuses the client's X-Request-ID header when it is usable, otherwise
       generates a short UUID; stores it in a ContextVar.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

# Client IDs are echoed into logs and error bodies
MAX_CLIENT_ID_LENGTH = 64

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value: Optional[str]) -> str:
    """Return the client's ID if printable and short, else a fresh 8-char one."""
    candidate = (header_value or "").strip()
    if candidate and len(candidate) <= MAX_CLIENT_ID_LENGTH and candidate.isprintable():
        return candidate
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns X-Request-ID to every request and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(HEADER))
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers[HEADER] = rid
        return response
