"""
Redis Session Adapter - Redis-backed session storage.
"""

from typing import Optional, List, Dict, Any
import json
from storefront_auth.ports.session_port import SessionPort
from storefront_auth.domain.principal import SessionPrincipal
from storefront_auth.domain.session import SessionRecord


class RedisSessionAdapter(SessionPort):
    """
    Redis-backed session storage.

    Sessions are stored as JSON with automatic expiration (TTL).
    Supports distributed deployments.
    """

    def __init__(
        self,
        redis_client=None,
        prefix: str = "storefront:session:",
        redis_url: str = "redis://localhost:6379/0",
        socket_timeout: Optional[float] = 5.0,
    ):
        """
        Initialize Redis session adapter.

        Args:
            redis_client: Redis client instance (redis.Redis)
            prefix: Key prefix for sessions
            redis_url: URL used when no client is given
            socket_timeout: Socket timeout in seconds for a lazily built client
        """
        self._redis = redis_client
        self._prefix = prefix
        self._redis_url = redis_url
        self._socket_timeout = socket_timeout

    def _get_redis(self):
        """Lazy load Redis client."""
        if self._redis is None:
            try:
                import redis
            except ImportError:
                raise ImportError("redis package required: pip install redis")
            self._redis = redis.Redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_timeout=self._socket_timeout,
            )
        return self._redis

    def _key(self, session_id: str) -> str:
        """Generate Redis key for session."""
        return f"{self._prefix}{session_id}"

    def _user_key(self, user_id: int) -> str:
        """Generate Redis set key for a principal's sessions."""
        return f"{self._prefix}user:{user_id}"

    def _write(self, session: SessionRecord, must_exist: bool = False) -> bool:
        """
        Store session JSON with a TTL matching its expiry.

        With ``must_exist`` the write only lands if the key is still there,
        so a rewrite racing a delete cannot bring the session back.
        """
        redis = self._get_redis()
        ttl = max(1, session.remaining_seconds())
        stored = redis.set(
            self._key(session.session_id),
            json.dumps(session.to_dict()),
            ex=ttl,
            xx=must_exist,
        )
        if not stored:
            return False

        # Keep the user index alive as long as its longest session
        user_key = self._user_key(session.user_id)
        if redis.ttl(user_key) < ttl:
            redis.expire(user_key, ttl)
        return True

    def create(
        self,
        principal: SessionPrincipal,
        ttl: int = 3600,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SessionRecord:
        """
        Create a new session in Redis.

        Args:
            principal: Session principal
            ttl: Time-to-live in seconds
            ip_address: Client IP
            user_agent: Client user agent
            metadata: Optional metadata

        Returns:
            Created session
        """
        session = SessionRecord.create(
            principal=principal,
            ttl=ttl,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=metadata,
        )

        redis = self._get_redis()
        redis.sadd(self._user_key(session.user_id), session.session_id)
        self._write(session)

        return session

    def get(self, session_id: str) -> Optional[SessionRecord]:
        """
        Get a session from Redis.

        Args:
            session_id: Session ID

        Returns:
            Session if found and valid, None otherwise
        """
        if not session_id:
            return None

        redis = self._get_redis()
        data = redis.get(self._key(session_id))
        if not data:
            return None

        try:
            session = SessionRecord.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, ValueError, TypeError):
            # Unreadable record: treat as absent
            return None

        if session.is_valid():
            return session
        return None

    def refresh(self, session_id: str, ttl: int, max_duration: Optional[int] = None) -> bool:
        """
        Slide session expiry forward.

        Args:
            session_id: Session ID
            ttl: Seconds from now the session should stay alive
            max_duration: Absolute lifetime cap in seconds

        Returns:
            True if refreshed, False if not found
        """
        session = self.get(session_id)
        if not session:
            return False

        if not session.refresh(ttl, max_duration=max_duration):
            return False

        return self._write(session, must_exist=True)

    def update_principal(self, session_id: str, principal: SessionPrincipal) -> bool:
        """
        Replace the principal snapshot.

        Args:
            session_id: Session ID
            principal: New snapshot

        Returns:
            True if updated, False if not found
        """
        session = self.get(session_id)
        if not session:
            return False

        session.principal = principal
        session.update_activity()
        return self._write(session, must_exist=True)

    def delete(self, session_id: str) -> bool:
        """
        Delete a session from Redis.

        Args:
            session_id: Session ID

        Returns:
            True if deleted, False if not found
        """
        session = self.get(session_id)
        redis = self._get_redis()
        removed = redis.delete(self._key(session_id)) if session_id else 0

        if session:
            redis.srem(self._user_key(session.user_id), session_id)
        return bool(removed)

    def list_by_user(self, user_id: int) -> List[SessionRecord]:
        """
        List all active sessions for a principal.

        Args:
            user_id: Principal ID

        Returns:
            List of active sessions
        """
        redis = self._get_redis()
        user_key = self._user_key(user_id)

        sessions = []
        for session_id in redis.smembers(user_key):
            session = self.get(session_id)
            if session:
                sessions.append(session)
            else:
                # Clean up expired session from user set
                redis.srem(user_key, session_id)

        return sessions

    def cleanup_expired(self) -> int:
        """
        Clean up expired sessions.

        Redis handles expiration automatically via TTL.
        This method is a no-op but provided for interface compatibility.

        Returns:
            0 (Redis auto-expires)
        """
        return 0
