"""
Noteful Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": {"message": ...}}` with the right HTTP status code.
Who:   Raised by routes, the existence-check dependencies and the repository.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError   → 400 Bad Request (missing/empty required field)
    ├── NotFoundError     → 404 Not Found (no row for the requested id)
    └── StoreError        → 500 Internal Server Error (constraint, connectivity)
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

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


class ValidationError(NotefulError):
    """
    Raised when the request body is missing a required field.

    Detected in the route layer before any store call.
    HTTP:    400 Bad Request

    Example response:
        {"error": {"message": "Missing 'title' in request body"}}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotefulError):
    """
    Raised when a requested row does not exist.

    The repository returns None for missing rows; the existence-check
    dependencies turn that None into this exception.
    HTTP:    404 Not Found

    Example response:
        {"error": {"message": "Folder doesn't exist"}}
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} doesn't exist", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StoreError(NotefulError):
    """
    Raised when a statement against the database fails.

    When:    Constraint violation (NOT NULL, foreign key), lost connection.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The driver error
    type, table and operation are kept in `context` and logged server-side.
    Store errors are never retried.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
