"""
Session Domain Model - Server-side record of an authenticated session.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from datetime import datetime, timedelta, timezone
from enum import Enum
import secrets

from storefront_auth.domain.principal import SessionPrincipal


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStatus(Enum):
    """Session lifecycle states."""
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"


@dataclass
class SessionRecord:
    """
    Session record - maps an opaque session id to a session principal.

    Domain rules:
    - session_id is cryptographically random and carries no principal data
    - expires_at must be in the future for active sessions
    - refresh slides the expiry forward but never past max_duration
    """
    session_id: str
    principal: SessionPrincipal
    created_at: datetime
    expires_at: datetime
    status: SessionStatus = SessionStatus.ACTIVE

    # Optional fields
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    last_activity: Optional[datetime] = None

    # Metadata
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def user_id(self) -> int:
        return self.principal.id

    @classmethod
    def create(
        cls,
        principal: SessionPrincipal,
        ttl: int = 3600,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "SessionRecord":
        """
        Create a new session with a generated ID.

        Args:
            principal: Session principal to bind
            ttl: Time-to-live in seconds (default 1 hour)
            ip_address: Client IP
            user_agent: Client user agent
            metadata: Optional metadata

        Returns:
            New session record
        """
        now = utcnow()
        return cls(
            session_id=secrets.token_urlsafe(32),
            principal=principal,
            created_at=now,
            expires_at=now + timedelta(seconds=ttl),
            status=SessionStatus.ACTIVE,
            ip_address=ip_address,
            user_agent=user_agent,
            last_activity=now,
            metadata=metadata or {},
        )

    def is_valid(self) -> bool:
        """Check if session is valid (active and not expired)."""
        if self.status != SessionStatus.ACTIVE:
            return False
        return utcnow() < self.expires_at

    def remaining_seconds(self) -> int:
        """Whole seconds until expiry (0 if already expired)."""
        return max(0, int((self.expires_at - utcnow()).total_seconds()))

    def refresh(self, ttl: int, max_duration: Optional[int] = None) -> bool:
        """
        Slide the expiry to ttl seconds from now.

        Args:
            ttl: Seconds from now the session should stay alive
            max_duration: Absolute cap on session lifetime in seconds, or None

        Returns:
            True if refreshed, False if the session is no longer valid
        """
        if not self.is_valid():
            return False

        now = utcnow()
        new_expires = now + timedelta(seconds=ttl)
        if max_duration is not None:
            new_expires = min(new_expires, self.created_at + timedelta(seconds=max_duration))

        # Concurrent refreshes may race; only ever move the expiry forward
        if new_expires > self.expires_at:
            self.expires_at = new_expires
        self.last_activity = now
        return True

    def revoke(self):
        """Revoke the session."""
        self.status = SessionStatus.REVOKED

    def update_activity(self):
        """Update last activity timestamp."""
        self.last_activity = utcnow()

    def fingerprint(self) -> str:
        """Short non-secret handle for log lines."""
        return self.session_id[:8]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "principal": self.principal.to_dict(),
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "status": self.status.value,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "last_activity": self.last_activity.isoformat() if self.last_activity else None,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionRecord":
        """Deserialize from dict."""
        return cls(
            session_id=data["session_id"],
            principal=SessionPrincipal.from_dict(data["principal"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
            status=SessionStatus(data.get("status", "active")),
            ip_address=data.get("ip_address"),
            user_agent=data.get("user_agent"),
            last_activity=datetime.fromisoformat(data["last_activity"]) if data.get("last_activity") else None,
            metadata=data.get("metadata", {}),
        )
