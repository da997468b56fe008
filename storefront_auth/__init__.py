"""
Storefront Auth - Password credentials and server-side sessions

Hexagonal architecture for the storefront's login, registration and
route guards.

Usage:
    from storefront_auth import SessionPrincipalManager
    from storefront_auth.adapters import MemoryPrincipalStore, RedisSessionAdapter

    manager = SessionPrincipalManager(
        principals=MemoryPrincipalStore(),
        sessions=RedisSessionAdapter(redis_url="redis://localhost"),
    )

    # Log in
    result = manager.login("a@x.com", "secret123")

    # Guard a route
    principal = manager.require_admin(result.session_id)
"""

__version__ = "0.1.0"

from storefront_auth.config import AuthSettings
from storefront_auth.sdk.manager import AuthResult, SessionPrincipalManager
from storefront_auth.domain.principal import Principal, SessionPrincipal
from storefront_auth.domain.session import SessionRecord
from storefront_auth.errors import (
    AuthError,
    DuplicateEmailError,
    ErrorKind,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidInputError,
    MalformedHashError,
    StorageError,
    UnauthorizedError,
)

__all__ = [
    "AuthSettings",
    "AuthResult",
    "SessionPrincipalManager",
    "Principal",
    "SessionPrincipal",
    "SessionRecord",
    "AuthError",
    "ErrorKind",
    "InvalidInputError",
    "MalformedHashError",
    "InvalidCredentialsError",
    "DuplicateEmailError",
    "UnauthorizedError",
    "ForbiddenError",
    "StorageError",
]
