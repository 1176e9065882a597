"""
Error taxonomy for the to-do API.

Every error raised by the store or the services derives from
:class:`TodoApiError` and carries the HTTP status code the web layer
answers with.  Server-side errors keep their detailed message for the logs
but expose only a generic one to clients.
"""

from __future__ import annotations


class TodoApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        """Message that is safe to return to the client."""
        if self.status_code >= 500:
            return TodoApiError.default_message
        return self.message


class ValidationError(TodoApiError):
    """Request input is missing or malformed."""

    status_code = 400
    default_message = "Bad request"


class AuthError(TodoApiError):
    """Credentials are invalid or the caller identity cannot be resolved."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(TodoApiError):
    """The record does not exist or is not owned by the caller."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(TodoApiError):
    """The record clashes with an existing one (duplicate username)."""

    status_code = 409
    default_message = "Conflict"


class PersistenceError(TodoApiError):
    """A store file could not be read, parsed or written."""


class InternalError(TodoApiError):
    """Any other unexpected fault."""
