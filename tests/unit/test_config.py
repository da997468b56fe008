"""
Unit tests for AuthSettings.
"""

import pytest
from storefront_auth.config import AuthSettings, ONE_WEEK


def test_defaults():
    settings = AuthSettings()

    assert settings.session_ttl == ONE_WEEK
    assert settings.session_max_duration is None
    assert settings.cookie_name == "storefront.sid"
    assert settings.cookie_secure is False
    assert settings.refresh_principal is False


def test_from_env(monkeypatch):
    monkeypatch.setenv("STOREFRONT_AUTH_SESSION_TTL", "600")
    monkeypatch.setenv("STOREFRONT_AUTH_SESSION_MAX_DURATION", "3600")
    monkeypatch.setenv("STOREFRONT_AUTH_COOKIE_NAME", "sid")
    monkeypatch.setenv("STOREFRONT_AUTH_COOKIE_SECURE", "true")
    monkeypatch.setenv("STOREFRONT_AUTH_STORE_TIMEOUT", "1.5")
    monkeypatch.setenv("STOREFRONT_AUTH_REFRESH_PRINCIPAL", "yes")
    monkeypatch.setenv("STOREFRONT_AUTH_REDIS_URL", "redis://cache:6379/2")

    settings = AuthSettings.from_env()

    assert settings.session_ttl == 600
    assert settings.session_max_duration == 3600
    assert settings.cookie_name == "sid"
    assert settings.cookie_secure is True
    assert settings.store_timeout == 1.5
    assert settings.refresh_principal is True
    assert settings.redis_url == "redis://cache:6379/2"


def test_from_env_without_overrides(monkeypatch):
    monkeypatch.delenv("STOREFRONT_AUTH_SESSION_TTL", raising=False)
    monkeypatch.delenv("STOREFRONT_AUTH_COOKIE_SECURE", raising=False)

    assert AuthSettings.from_env().session_ttl == ONE_WEEK


def test_bad_number_in_env(monkeypatch):
    monkeypatch.setenv("STOREFRONT_AUTH_SESSION_TTL", "a week")
    with pytest.raises(ValueError):
        AuthSettings.from_env()


@pytest.mark.parametrize("kwargs", [
    {"session_ttl": 0},
    {"store_timeout": 0},
    {"session_ttl": 600, "session_max_duration": 60},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        AuthSettings(**kwargs)
