"""
Auth Errors - Typed failures surfaced by the auth core.

Every error carries the HTTP status it maps to and a public message that
is safe to return to a client. Internal detail stays in the exception args
and the server log.
"""

from enum import Enum


class ErrorKind(Enum):
    """Failure categories."""
    INPUT = "input"                   # Malformed request data
    AUTHENTICATION = "authentication" # Wrong credentials, duplicate email
    AUTHORIZATION = "authorization"   # Not logged in, insufficient privilege
    STORAGE = "storage"               # Dependency failed


class AuthError(Exception):
    """Base class for all auth core errors."""

    status_code = 500
    kind = ErrorKind.STORAGE
    public_message = "Internal server error"

    def __init__(self, detail: str = None):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class InvalidInputError(AuthError):
    """Request data is missing or out of bounds."""

    status_code = 400
    kind = ErrorKind.INPUT
    public_message = "Invalid input"

    def __init__(self, detail: str = None):
        super().__init__(detail)
        # Detail describes the caller's own input
        if detail:
            self.public_message = detail


class MalformedHashError(AuthError):
    """A stored salted hash could not be parsed."""

    status_code = 500
    kind = ErrorKind.STORAGE
    public_message = "Internal server error"


class InvalidCredentialsError(AuthError):
    """Email or password is wrong. Never says which."""

    status_code = 401
    kind = ErrorKind.AUTHENTICATION
    public_message = "Invalid email or password"


class DuplicateEmailError(AuthError):
    """A principal with this email already exists."""

    status_code = 400
    kind = ErrorKind.AUTHENTICATION
    public_message = "Email is already registered"


class UnauthorizedError(AuthError):
    """No live session."""

    status_code = 401
    kind = ErrorKind.AUTHORIZATION
    public_message = "Unauthorized"


class ForbiddenError(AuthError):
    """Authenticated, but not allowed."""

    status_code = 403
    kind = ErrorKind.AUTHORIZATION
    public_message = "Forbidden"


class StorageError(AuthError):
    """The principal store or session store failed or timed out."""

    status_code = 500
    kind = ErrorKind.STORAGE
    public_message = "Internal server error"
