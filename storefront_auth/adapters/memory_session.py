"""
Memory Session Adapter - In-memory session storage (testing only).
"""

import threading
from typing import Optional, List, Dict, Any
from storefront_auth.ports.session_port import SessionPort
from storefront_auth.domain.principal import SessionPrincipal
from storefront_auth.domain.session import SessionRecord


class MemorySessionAdapter(SessionPort):
    """
    In-memory session storage.

    WARNING: Only for testing. Sessions are lost on restart.
    Not suitable for production or distributed deployments.
    """

    def __init__(self):
        """Initialize in-memory storage."""
        self._lock = threading.RLock()
        self._sessions: Dict[str, SessionRecord] = {}
        self._user_sessions: Dict[int, List[str]] = {}

    def create(
        self,
        principal: SessionPrincipal,
        ttl: int = 3600,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SessionRecord:
        """Create a new session in memory."""
        session = SessionRecord.create(
            principal=principal,
            ttl=ttl,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=metadata,
        )

        with self._lock:
            self._sessions[session.session_id] = session
            self._user_sessions.setdefault(session.user_id, []).append(session.session_id)

        return session

    def get(self, session_id: str) -> Optional[SessionRecord]:
        """Get a session from memory."""
        with self._lock:
            session = self._sessions.get(session_id)

            if not session:
                return None

            if not session.is_valid():
                # Auto-cleanup expired session
                self.delete(session_id)
                return None

            return session

    def refresh(self, session_id: str, ttl: int, max_duration: Optional[int] = None) -> bool:
        """Slide the session expiry forward."""
        with self._lock:
            session = self.get(session_id)
            if not session:
                return False

            return session.refresh(ttl, max_duration=max_duration)

    def update_principal(self, session_id: str, principal: SessionPrincipal) -> bool:
        """Replace the principal snapshot."""
        with self._lock:
            session = self.get(session_id)
            if not session:
                return False

            session.principal = principal
            session.update_activity()
            return True

    def delete(self, session_id: str) -> bool:
        """Delete a session from memory."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
            if not session:
                return False

            session.revoke()

            # Remove from user index
            user_sessions = self._user_sessions.get(session.user_id)
            if user_sessions and session_id in user_sessions:
                user_sessions.remove(session_id)
                if not user_sessions:
                    del self._user_sessions[session.user_id]

            return True

    def list_by_user(self, user_id: int) -> List[SessionRecord]:
        """List all active sessions for a principal."""
        with self._lock:
            sessions = []

            for session_id in list(self._user_sessions.get(user_id, [])):
                session = self.get(session_id)
                if session:
                    sessions.append(session)

            return sessions

    def cleanup_expired(self) -> int:
        """Clean up expired sessions."""
        with self._lock:
            expired_ids = [
                sid for sid, sess in self._sessions.items()
                if not sess.is_valid()
            ]

            for session_id in expired_ids:
                self.delete(session_id)

            return len(expired_ids)
