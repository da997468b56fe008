"""
Ports - Interfaces for password hashing, principal storage, and sessions.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from storefront_auth.ports.password_port import PasswordHasherPort
from storefront_auth.ports.principal_store_port import PrincipalStorePort
from storefront_auth.ports.session_port import SessionPort

__all__ = [
    "PasswordHasherPort",
    "PrincipalStorePort",
    "SessionPort",
]
