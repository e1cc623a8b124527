"""
FlyBook Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the three failure kinds the API reports.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    FlyBookError (base)
    ├── ValidationError   → 400 Bad Request (malformed identifier)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

Every service operation ends in exactly one of: a return value, or one of the
three leaf exceptions above. An empty list is a return value, never an error.
"""

from typing import Any, Dict, Optional


class FlyBookError(Exception):
    """
    Base exception for all FlyBook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for server errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FlyBookError):
    """
    Raised when client input fails validation.

    When:    A path identifier is not a well-formed UUID.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "'abc' is not a valid flight identifier",
            "details": {"field": "id", "value": "abc"}
        }
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


class NotFoundError(FlyBookError):
    """
    Raised when a well-formed identifier matches no record.

    HTTP:    404 Not Found

    SQLAlchemy returns None (or a zero rowcount) for missing records; the
    service layer converts that into this exception.
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


class DatabaseError(FlyBookError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost, query failed, constraint violated, etc.
    HTTP:    500 Internal Server Error

    The client only ever sees a generic message. The original exception type
    and identifiers go into `context`, which is logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
