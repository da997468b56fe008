"""
Basic Authentication Example - Password login with in-memory sessions.
"""

from storefront_auth import SessionPrincipalManager
from storefront_auth.adapters import MemoryPrincipalStore, MemorySessionAdapter
from storefront_auth.errors import ForbiddenError, InvalidCredentialsError


def main():
    # Initialize manager
    manager = SessionPrincipalManager(
        principals=MemoryPrincipalStore(),
        sessions=MemorySessionAdapter(),
    )

    # Register (creates principal + session)
    result = manager.register("alice@example.com", "secret123", first_name="Alice")
    print(f"Registered: {result.principal.email} (admin={result.principal.is_admin})")
    print(f"Session ID: {result.session_id[:8]}...")
    print(f"Expires at: {result.session.expires_at.isoformat()}")

    # Wrong password
    try:
        manager.login("alice@example.com", "wrong")
    except InvalidCredentialsError as e:
        print(f"\nLogin refused: {e.public_message}")

    # Log in again
    login = manager.login("alice@example.com", "secret123")
    print(f"\nLogin successful, session {login.session_id[:8]}...")

    # Resolve on each request
    principal = manager.require_authenticated(login.session_id)
    print(f"Request principal: {principal.email}")

    # Admin gate
    try:
        manager.require_admin(login.session_id)
    except ForbiddenError as e:
        print(f"Admin area: {e.public_message}")

    # Logout
    manager.logout(login.session_id)
    print(f"\nLogged out")
    print(f"Session valid after logout: {manager.resolve_principal(login.session_id) is not None}")

    manager.close()


if __name__ == "__main__":
    main()
