"""
NoteKeeper Backend — Error Taxonomy
=====================================

What:  Application-specific error types for the notes API.
Why:   Each error knows its HTTP status and machine-readable code, so the
       route layer can render any of them the same way.
How:   Each error carries a user-safe message and an optional context dict.
       Operation handlers return them inside a `Failure` outcome; the
       validator raises ValidationError, which the handler catches locally.
Who:   Produced by the validator, the error mapper and the handlers;
       rendered by notekeeper.routes.notes.

Hierarchy:
    NoteKeeperError (base)       → 500
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    └── InternalError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NoteKeeperError(Exception):
    """
    Base error for all NoteKeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info; returned as "details" only for 4xx errors
    """

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteKeeperError):
    """
    Raised when client input fails validation.

    When:    Missing note id, blank title on create, nothing to update.
    HTTP:    400 Bad Request

    Always detected before the database is touched.
    """

    status_code = 400
    error_code = "validation_error"

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


class NotFoundError(NoteKeeperError):
    """
    Raised when a requested resource does not exist.

    When:    GET, PUT or DELETE /notes/{id} with an id that matches no row.
    HTTP:    404 Not Found
    """

    status_code = 404
    error_code = "not_found"

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


class InternalError(NoteKeeperError):
    """
    The database was unreachable or failed unexpectedly.

    The message returned to the client is always generic. The original
    exception is logged server-side by the error mapper; its type name is
    kept in the context for log correlation only.
    """

    status_code = 500
    error_code = "internal_error"

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
