"""
Employee API — Custom Exception Hierarchy
==========================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the matching HTTP response.
Who:   Raised by the store and route handlers; caught by global handlers
       or, for storage failures, by the store itself.

Exception Hierarchy:
    (malformed requests are rejected by FastAPI as RequestValidationError → 400)

    EmployeeAPIError (base)
    ├── NotFoundError     → 404 Not Found (empty body)
    └── StorageIOError    → recovered inside EmployeeStore (degraded state);
                            500 only if it ever reaches a handler
"""

from typing import Any, Dict, Optional


class EmployeeAPIError(Exception):
    """
    Base exception for all Employee API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(EmployeeAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET /employees/{id} with an id that was never assigned.
    HTTP:    404 Not Found

    The store signals a miss with None; the route converts that into this
    exception so the status code is decided in one place (main.py).
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageIOError(EmployeeAPIError):
    """
    Raised when the JSON storage file cannot be created, read, parsed or written.

    What:    Directory creation failed, permission denied, disk full,
             malformed JSON, or records that do not match the Employee schema.
    Recovery:
        EmployeeStore catches this at the operation boundary, logs it and
        keeps serving from memory (degraded state). It is not surfaced to
        the HTTP caller.

    Attributes:
        path:  The storage file involved in the failed operation
    """

    def __init__(
        self,
        message: str = "Employee storage operation failed",
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message=message, context=ctx)
        self.path = path
