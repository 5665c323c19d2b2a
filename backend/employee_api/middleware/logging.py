"""
Employee API — Request Logging Middleware
==========================================

What:  One access-log line per API request.
How:   Times the downstream call; the line carries method, path, status,
       duration, request ID and client IP. Requests that reach the employee
       store also report whether its JSON file is in sync, so a create that
       only landed in memory is visible in the access log:

    2024-01-15T12:00:00 [INFO] employee_api.access: POST /employees 201 3.4ms [a1b2c3d4] from 127.0.0.1
    2024-01-15T12:00:01 [WARNING] employee_api.access: POST /employees 201 2.9ms [e5f6a7b8] from 127.0.0.1 storage=degraded

Skipped: /health (polled by monitors) and the OpenAPI docs pages.
Request bodies are never logged (employee records hold personal data).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from employee_api.middleware.request_id import request_id_var

logger = logging.getLogger("employee_api.access")

QUIET_PATHS = frozenset({"/health", "/docs", "/docs/oauth2-redirect", "/redoc", "/openapi.json"})


def _status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access logging keyed on status class and store state.

    Level: 5xx → ERROR, 4xx → WARNING, otherwise INFO; raised to WARNING
    when the employee store is degraded after the request.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        level = _status_level(status)
        message = "%s %s %d %.1fms [%s] from %s"
        args = [
            request.method,
            path,
            status,
            duration_ms,
            request_id_var.get(""),
            request.client.host if request.client else "unknown",
        ]

        store = getattr(request.app.state, "employee_store", None)
        if store is not None and store.degraded:
            message += " storage=degraded"
            level = max(level, logging.WARNING)

        logger.log(level, message, *args)
        return response
