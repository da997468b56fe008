"""
Principal Domain Model - Persisted identity and its session projection.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from datetime import datetime, timezone


def normalize_email(email: str) -> str:
    """Canonical form used for both storage and lookup."""
    return (email or "").strip().lower()


@dataclass(frozen=True)
class SessionPrincipal:
    """
    Session principal - the hash-free view of a Principal held in a session.

    A point-in-time snapshot taken at login/registration.
    """
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    is_admin: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone_number": self.phone_number,
            "is_admin": self.is_admin,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionPrincipal":
        """Deserialize from dict."""
        return cls(
            id=int(data["id"]),
            email=data["email"],
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            phone_number=data.get("phone_number"),
            is_admin=bool(data.get("is_admin", False)),
        )


@dataclass
class Principal:
    """
    Principal entity - the full persisted identity record.

    Domain rules:
    - id is assigned by the store on insert and never changes
    - email is unique and kept in normalized form
    - password_hash is a salted hash, never the plaintext
    - new principals are neither admins nor verified
    """
    email: str
    password_hash: str
    id: Optional[int] = None

    # Profile
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None

    # Flags
    is_admin: bool = False
    is_verified: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_session_principal(self) -> SessionPrincipal:
        """Project to the hash-free session view."""
        if self.id is None:
            raise ValueError("Principal has not been persisted")
        return SessionPrincipal(
            id=self.id,
            email=self.email,
            first_name=self.first_name or None,
            last_name=self.last_name or None,
            phone_number=self.phone_number or None,
            is_admin=bool(self.is_admin),
        )

    def to_dict(self, include_sensitive: bool = False) -> Dict[str, Any]:
        """
        Serialize to dict.

        Args:
            include_sensitive: If True, includes the password hash (storage only)

        Returns:
            Dict representation
        """
        data = {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone_number": self.phone_number,
            "is_admin": self.is_admin,
            "is_verified": self.is_verified,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_sensitive:
            data["password_hash"] = self.password_hash
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Principal":
        """Deserialize from dict."""
        return cls(
            id=data.get("id"),
            email=data["email"],
            password_hash=data.get("password_hash", ""),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            phone_number=data.get("phone_number"),
            is_admin=data.get("is_admin", False),
            is_verified=data.get("is_verified", False),
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else datetime.now(timezone.utc),
        )
