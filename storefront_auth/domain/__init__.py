"""
Domain Models - Pure business entities.

No infrastructure dependencies. Domain logic only.
"""

from storefront_auth.domain.principal import Principal, SessionPrincipal, normalize_email
from storefront_auth.domain.session import SessionRecord, SessionStatus

__all__ = [
    "Principal",
    "SessionPrincipal",
    "normalize_email",
    "SessionRecord",
    "SessionStatus",
]
