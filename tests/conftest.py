"""
Shared fixtures.

Tests use a cheap scrypt cost so the suite stays fast; the hasher tests
cover the production defaults.
"""

import pytest

from storefront_auth import AuthSettings, SessionPrincipalManager
from storefront_auth.adapters import (
    MemoryPrincipalStore,
    MemorySessionAdapter,
    ScryptPasswordHasher,
)


@pytest.fixture
def hasher():
    return ScryptPasswordHasher(n=1024)


@pytest.fixture
def principals():
    return MemoryPrincipalStore()


@pytest.fixture
def sessions():
    return MemorySessionAdapter()


@pytest.fixture
def settings():
    return AuthSettings(session_ttl=3600, store_timeout=2.0)


@pytest.fixture
def manager(principals, sessions, hasher, settings):
    manager = SessionPrincipalManager(
        principals=principals,
        sessions=sessions,
        hasher=hasher,
        settings=settings,
    )
    yield manager
    manager.close()
