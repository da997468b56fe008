"""
SDK - High-level orchestration over the ports.
"""

from storefront_auth.sdk.manager import AuthResult, SessionPrincipalManager

__all__ = [
    "AuthResult",
    "SessionPrincipalManager",
]
