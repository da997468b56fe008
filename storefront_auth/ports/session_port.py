"""
Session Port - Interface for server-side session storage.

Implementations:
- RedisSessionAdapter: Redis-backed sessions
- DynamoDBSessionAdapter: DynamoDB sessions
- MemorySessionAdapter: In-memory sessions (testing only)

Backend failures propagate as exceptions; callers decide how to surface them.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from storefront_auth.domain.principal import SessionPrincipal
from storefront_auth.domain.session import SessionRecord


class SessionPort(ABC):
    """Port: Store session records keyed by an opaque session id."""

    @abstractmethod
    def create(
        self,
        principal: SessionPrincipal,
        ttl: int = 3600,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SessionRecord:
        """
        Create a new session bound to a fresh session id.

        Args:
            principal: Session principal to store
            ttl: Time-to-live in seconds (default 1 hour)
            ip_address: Client IP
            user_agent: Client user agent
            metadata: Optional session metadata

        Returns:
            Created session record
        """
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[SessionRecord]:
        """
        Get a session by ID.

        Args:
            session_id: Session ID

        Returns:
            Session if found and valid, None otherwise
        """
        pass

    @abstractmethod
    def refresh(self, session_id: str, ttl: int, max_duration: Optional[int] = None) -> bool:
        """
        Slide a session's expiry to ttl seconds from now.

        Args:
            session_id: Session ID
            ttl: Seconds from now the session should stay alive
            max_duration: Absolute cap on session lifetime in seconds

        Returns:
            True if refreshed, False if not found or expired
        """
        pass

    @abstractmethod
    def update_principal(self, session_id: str, principal: SessionPrincipal) -> bool:
        """
        Replace the principal snapshot held by a session.

        Args:
            session_id: Session ID
            principal: New snapshot

        Returns:
            True if updated, False if not found
        """
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """
        Delete a session.

        Args:
            session_id: Session ID

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    def list_by_user(self, user_id: int) -> List[SessionRecord]:
        """
        List all active sessions for a principal.

        Args:
            user_id: Principal ID

        Returns:
            List of active sessions
        """
        pass

    @abstractmethod
    def cleanup_expired(self) -> int:
        """
        Clean up expired sessions.

        Returns:
            Number of sessions deleted
        """
        pass
