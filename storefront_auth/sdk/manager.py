"""
Session Principal Manager - Registration, login, logout and route gates.

Ties the password hasher, the principal store and the session store
together. Route handlers call this instead of touching the ports directly.
"""

import logging
import re
import secrets
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import Optional, Any

from storefront_auth.config import AuthSettings
from storefront_auth.domain.principal import Principal, SessionPrincipal, normalize_email
from storefront_auth.domain.session import SessionRecord
from storefront_auth.errors import (
    AuthError,
    DuplicateEmailError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidInputError,
    MalformedHashError,
    StorageError,
    UnauthorizedError,
)
from storefront_auth.ports.password_port import PasswordHasherPort
from storefront_auth.ports.principal_store_port import PrincipalStorePort
from storefront_auth.ports.session_port import SessionPort

logger = logging.getLogger(__name__)

MAX_EMAIL_LENGTH = 254
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful login or registration."""
    principal: SessionPrincipal
    session: SessionRecord

    @property
    def session_id(self) -> str:
        return self.session.session_id


def _fingerprint(session_id: str) -> str:
    return (session_id or "")[:8]


class SessionPrincipalManager:
    """
    Orchestrates the session lifecycle for storefront principals.

    Example:
        from storefront_auth import SessionPrincipalManager
        from storefront_auth.adapters import MemoryPrincipalStore, MemorySessionAdapter

        manager = SessionPrincipalManager(
            principals=MemoryPrincipalStore(),
            sessions=MemorySessionAdapter(),
        )

        result = manager.register("a@x.com", "secret123", first_name="A")
        principal = manager.require_authenticated(result.session_id)
        manager.logout(result.session_id)
    """

    def __init__(
        self,
        principals: PrincipalStorePort,
        sessions: SessionPort,
        hasher: Optional[PasswordHasherPort] = None,
        settings: Optional[AuthSettings] = None,
    ):
        """
        Initialize manager with adapters.

        Args:
            principals: Credential store adapter (required)
            sessions: Session store adapter (required)
            hasher: Password hasher (defaults to scrypt)
            settings: Session settings (defaults to AuthSettings())
        """
        if hasher is None:
            from storefront_auth.adapters.scrypt_hasher import ScryptPasswordHasher
            hasher = ScryptPasswordHasher()

        self._principals = principals
        self._sessions = sessions
        self._hasher = hasher
        self._settings = settings or AuthSettings()

        self._executor = ThreadPoolExecutor(thread_name_prefix="storefront-auth-store")

        # Verified against when the email is unknown
        self._dummy_hash = self._hasher.hash(secrets.token_urlsafe(16))

    @property
    def settings(self) -> AuthSettings:
        return self._settings

    def close(self):
        """Release the store worker threads."""
        self._executor.shutdown(wait=False)

    # ------------------------------------------------------------------
    # Registration / login / logout
    # ------------------------------------------------------------------

    def register(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuthResult:
        """
        Create a principal and log it in.

        Args:
            email: Email (normalized before storage)
            password: Plaintext password
            first_name: Optional first name
            last_name: Optional last name
            phone_number: Optional phone number
            ip_address: Client IP recorded on the session
            user_agent: Client user agent recorded on the session

        Returns:
            AuthResult with the new session principal and session

        Raises:
            InvalidInputError: Bad email or password
            DuplicateEmailError: Email already registered
            StorageError: A store failed
        """
        email = self._check_email(email)
        if not password:
            raise InvalidInputError("Password is required")

        if self._call_store(self._principals.find_by_email, email) is not None:
            logger.info("Registration rejected: email already registered")
            raise DuplicateEmailError()

        password_hash = self._hasher.hash(password)
        principal = self._call_store(
            self._principals.insert,
            Principal(
                email=email,
                password_hash=password_hash,
                first_name=first_name or None,
                last_name=last_name or None,
                phone_number=phone_number or None,
                is_admin=False,
                is_verified=False,
            ),
        )

        result = self._start_session(principal, ip_address, user_agent)
        logger.info("Registered principal %s", principal.id)
        return result

    def login(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuthResult:
        """
        Verify credentials and open a session.

        Unknown email and wrong password raise the same error, and both
        paths pay for one key derivation.

        Args:
            email: Email
            password: Plaintext password
            ip_address: Client IP recorded on the session
            user_agent: Client user agent recorded on the session

        Returns:
            AuthResult with the session principal and session

        Raises:
            InvalidInputError: Missing email or password
            InvalidCredentialsError: Email unknown or password wrong
            StorageError: A store failed
        """
        if not email or not password:
            raise InvalidInputError("Email and password are required")
        email = normalize_email(email)

        principal = self._call_store(self._principals.find_by_email, email)
        if principal is None:
            self._hasher.verify(password, self._dummy_hash)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        try:
            matched = self._hasher.verify(password, principal.password_hash)
        except MalformedHashError as exc:
            logger.error("Stored password hash for principal %s is malformed: %s", principal.id, exc)
            raise InvalidCredentialsError() from exc

        if not matched:
            logger.info("Login failed: wrong password for principal %s", principal.id)
            raise InvalidCredentialsError()

        result = self._start_session(principal, ip_address, user_agent)
        logger.info("Principal %s logged in", principal.id)
        return result

    def logout(self, session_id: str) -> bool:
        """
        Destroy a session. Idempotent.

        Args:
            session_id: Session ID from the cookie

        Returns:
            True if a live session was destroyed
        """
        if not session_id:
            return False

        deleted = self._call_store(self._sessions.delete, session_id)
        if deleted:
            logger.info("Session %s logged out", _fingerprint(session_id))
        return bool(deleted)

    def logout_everywhere(self, user_id: int) -> int:
        """
        Destroy every live session of a principal.

        Args:
            user_id: Principal ID

        Returns:
            Number of sessions destroyed
        """
        sessions = self._call_store(self._sessions.list_by_user, user_id)
        count = 0
        for session in sessions:
            if self._call_store(self._sessions.delete, session.session_id):
                count += 1

        logger.info("Destroyed %d session(s) for principal %s", count, user_id)
        return count

    # ------------------------------------------------------------------
    # Per-request resolution and gates
    # ------------------------------------------------------------------

    def resolve_principal(self, session_id: Optional[str]) -> Optional[SessionPrincipal]:
        """
        Look up the principal for a session and slide its expiry.

        Args:
            session_id: Session ID from the cookie (may be None)

        Returns:
            Session principal, or None if the session is absent or expired
        """
        if not session_id:
            return None

        session = self._call_store(self._sessions.get, session_id)
        if session is None:
            return None

        principal = session.principal
        if self._settings.refresh_principal:
            principal = self._reload_principal(session)
            if principal is None:
                return None

        refreshed = self._call_store(
            self._sessions.refresh,
            session_id,
            self._settings.session_ttl,
            self._settings.session_max_duration,
        )
        if not refreshed:
            # Expired between the read and the refresh
            return None

        return principal

    def require_authenticated(self, session_id: Optional[str]) -> SessionPrincipal:
        """
        Gate: a logged-in principal is required.

        Raises:
            UnauthorizedError: No live session
        """
        principal = self.resolve_principal(session_id)
        if principal is None:
            raise UnauthorizedError()
        return principal

    def require_admin(self, session_id: Optional[str]) -> SessionPrincipal:
        """
        Gate: a logged-in admin is required.

        Raises:
            UnauthorizedError: No live session
            ForbiddenError: Principal is not an admin
        """
        principal = self.require_authenticated(session_id)
        if not principal.is_admin:
            logger.info("Principal %s denied admin access", principal.id)
            raise ForbiddenError()
        return principal

    # ------------------------------------------------------------------
    # Pass-throughs
    # ------------------------------------------------------------------

    def get_session(self, session_id: str) -> Optional[SessionRecord]:
        """
        Get a session by ID without refreshing it.

        Args:
            session_id: Session ID

        Returns:
            Session if found and valid, None otherwise
        """
        if not session_id:
            return None
        return self._call_store(self._sessions.get, session_id)

    def cleanup_expired(self) -> int:
        """Purge expired sessions from the store."""
        return self._call_store(self._sessions.cleanup_expired)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_session(
        self,
        principal: Principal,
        ip_address: Optional[str],
        user_agent: Optional[str],
    ) -> AuthResult:
        projection = principal.to_session_principal()
        session = self._call_store(
            self._sessions.create,
            projection,
            self._settings.session_ttl,
            ip_address,
            user_agent,
        )
        return AuthResult(principal=projection, session=session)

    def _reload_principal(self, session: SessionRecord) -> Optional[SessionPrincipal]:
        """Re-read the principal behind a session and update the snapshot."""
        current = self._call_store(self._principals.find_by_id, session.user_id)
        if current is None:
            logger.info(
                "Principal %s no longer exists; ending session %s",
                session.user_id,
                session.fingerprint(),
            )
            self._call_store(self._sessions.delete, session.session_id)
            return None

        fresh = current.to_session_principal()
        if fresh != session.principal:
            self._call_store(self._sessions.update_principal, session.session_id, fresh)
        return fresh

    def _check_email(self, email: str) -> str:
        email = normalize_email(email)
        if not email:
            raise InvalidInputError("Email is required")
        if len(email) > MAX_EMAIL_LENGTH or not _EMAIL_RE.match(email):
            raise InvalidInputError("Email is not valid")
        return email

    def _call_store(self, fn, *args: Any):
        """
        Run a store call with the request-level timeout.

        Auth errors raised by the store (e.g. a unique-email violation)
        pass through; everything else becomes StorageError.
        """
        name = getattr(fn, "__qualname__", repr(fn))
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=self._settings.store_timeout)
        except AuthError:
            raise
        except FutureTimeout as exc:
            future.cancel()
            logger.error("Store call %s timed out after %.1fs", name, self._settings.store_timeout)
            raise StorageError(f"{name} timed out") from exc
        except Exception as exc:
            logger.exception("Store call %s failed", name)
            raise StorageError(f"{name} failed: {exc}") from exc
