"""
Auth Settings - Runtime configuration for sessions and cookies.
"""

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "STOREFRONT_AUTH_"

ONE_WEEK = 7 * 24 * 60 * 60


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class AuthSettings:
    """
    Settings for the session principal manager and its HTTP boundary.

    Attributes:
        session_ttl: Sliding session lifetime in seconds (default one week)
        session_max_duration: Absolute session lifetime cap in seconds, or None
        cookie_name: Name of the session cookie
        cookie_secure: Send the cookie over HTTPS only
        store_timeout: Seconds to wait on a store call before giving up
        refresh_principal: Re-read the principal from the store on every resolve
        redis_url: Redis connection URL for RedisSessionAdapter
        session_key_prefix: Key prefix for Redis sessions
        dynamodb_table: Table name for DynamoDBSessionAdapter
        aws_region: AWS region for DynamoDBSessionAdapter
    """
    session_ttl: int = ONE_WEEK
    session_max_duration: Optional[int] = None
    cookie_name: str = "storefront.sid"
    cookie_secure: bool = False
    store_timeout: float = 5.0
    refresh_principal: bool = False
    redis_url: str = "redis://localhost:6379/0"
    session_key_prefix: str = "storefront:session:"
    dynamodb_table: str = "storefront-sessions"
    aws_region: str = "us-east-1"

    def __post_init__(self):
        if self.session_ttl <= 0:
            raise ValueError("session_ttl must be positive")
        if self.store_timeout <= 0:
            raise ValueError("store_timeout must be positive")
        if self.session_max_duration is not None and self.session_max_duration < self.session_ttl:
            raise ValueError("session_max_duration must be at least session_ttl")

    @classmethod
    def from_env(cls) -> "AuthSettings":
        """Load settings from STOREFRONT_AUTH_* environment variables."""
        defaults = cls()
        max_duration = _env("SESSION_MAX_DURATION")
        return cls(
            session_ttl=int(_env("SESSION_TTL", str(defaults.session_ttl))),
            session_max_duration=int(max_duration) if max_duration else None,
            cookie_name=_env("COOKIE_NAME", defaults.cookie_name),
            cookie_secure=_env_bool("COOKIE_SECURE", defaults.cookie_secure),
            store_timeout=float(_env("STORE_TIMEOUT", str(defaults.store_timeout))),
            refresh_principal=_env_bool("REFRESH_PRINCIPAL", defaults.refresh_principal),
            redis_url=_env("REDIS_URL", defaults.redis_url),
            session_key_prefix=_env("SESSION_KEY_PREFIX", defaults.session_key_prefix),
            dynamodb_table=_env("DYNAMODB_TABLE", defaults.dynamodb_table),
            aws_region=_env("AWS_REGION", defaults.aws_region),
        )
