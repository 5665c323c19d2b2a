"""
Employee API — Request ID Middleware
=====================================

What:  Gives every request a correlation ID and echoes it as X-Request-ID.
How:   A client-supplied X-Request-ID is reused when it is a short token of
       letters, digits, '.', '_' or '-'; anything else (absent, too long,
       spaces or control characters) is replaced by a fresh 8-char UUID prefix
       so the value is safe to write into log lines and error bodies.
When:  Outermost middleware, so access logs and exception handlers read the
       same ID from request_id_var.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Current request's ID, readable from any coroutine handling that request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: str | None) -> str:
    """Return the client's ID when it is a safe token, otherwise a new one."""
    if header_value and _CLIENT_ID_PATTERN.fullmatch(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds request_id_var for the request and sets the response header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
