"""
Aviary Backend: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the error scenarios of the bird API.
Why:   Targeted error handling with appropriate HTTP status codes and messages
       that never leak internal details to the client.
How:   Each exception carries a user-facing message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       structured JSON error responses.
Who:   Raised by repositories and services; caught by global handlers.

Exception Hierarchy:
    AviaryError (base)                → 500 Internal Server Error
    ├── ValidationError               → 422 Unprocessable Entity
    ├── NotFoundError                 → 404 Not Found
    └── PersistenceError              → 500 Internal Server Error
        └── ConstraintViolationError  → 422 Unprocessable Entity
"""

from typing import Any, Dict, Optional


class AviaryError(Exception):
    """
    Base exception for all Aviary application errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        context:     Additional debug info (logged, returned only where the
                     handler chooses to expose it)
        status_code: HTTP status the global handler responds with
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AviaryError):
    """
    Raised when client input fails a business rule.

    When:    A field required by the deployment's creation policy is missing or blank.
    HTTP:    422 Unprocessable Entity

    Example response:
        {
            "error": "Missing required field(s): species",
            "details": {"fields": ["species"]}
        }
    """

    status_code = 422

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


class NotFoundError(AviaryError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts that
    into this exception so the route stays free of status-code logic.
    The message is returned verbatim, e.g. "Bird not found".
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class PersistenceError(AviaryError):
    """
    Raised when a storage-layer operation fails.

    When:    Connection lost mid-query, deadlock, driver error.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Driver messages, SQL text and constraint names are logged
        server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConstraintViolationError(PersistenceError):
    """
    Raised when the database rejects a write because of a constraint.

    HTTP: 422 Unprocessable Entity. The client can change the payload and retry.
    """

    status_code = 422

    def __init__(
        self,
        message: str = "The bird could not be saved because it violates a storage constraint.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
