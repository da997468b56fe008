"""
Unit tests for Principal and SessionPrincipal domain models.
"""

import pytest
from storefront_auth.domain.principal import Principal, SessionPrincipal, normalize_email


def test_principal_defaults():
    """Test new principals are neither admin nor verified."""
    principal = Principal(email="alice@example.com", password_hash="ab.cd")

    assert principal.id is None
    assert principal.is_admin is False
    assert principal.is_verified is False
    assert principal.created_at is not None


def test_session_projection_excludes_hash():
    """Test the projection carries profile fields but no hash."""
    principal = Principal(
        id=7,
        email="alice@example.com",
        password_hash="ab.cd",
        first_name="Alice",
        last_name="Liddell",
        phone_number="+62 812 000",
        is_admin=True,
        is_verified=True,
    )

    projection = principal.to_session_principal()
    assert projection == SessionPrincipal(
        id=7,
        email="alice@example.com",
        first_name="Alice",
        last_name="Liddell",
        phone_number="+62 812 000",
        is_admin=True,
    )
    assert "password_hash" not in projection.to_dict()
    assert not hasattr(projection, "password_hash")


def test_projection_blank_profile_fields_become_none():
    """Test empty strings are projected as missing."""
    principal = Principal(id=1, email="a@x.com", password_hash="ab.cd", first_name="", phone_number="")

    projection = principal.to_session_principal()
    assert projection.first_name is None
    assert projection.phone_number is None


def test_unsaved_principal_cannot_be_projected():
    """Test a principal needs an ID before it can hold a session."""
    with pytest.raises(ValueError):
        Principal(email="a@x.com", password_hash="ab.cd").to_session_principal()


def test_principal_to_dict_hides_hash_by_default():
    """Test to_dict only includes the hash when asked."""
    principal = Principal(id=1, email="a@x.com", password_hash="ab.cd")

    assert "password_hash" not in principal.to_dict()
    assert principal.to_dict(include_sensitive=True)["password_hash"] == "ab.cd"


def test_principal_serialization():
    """Test Principal to_dict and from_dict."""
    principal = Principal(id=3, email="a@x.com", password_hash="ab.cd", last_name="B", is_verified=True)

    restored = Principal.from_dict(principal.to_dict(include_sensitive=True))
    assert restored == principal


def test_session_principal_is_immutable():
    """Test the snapshot cannot be mutated in place."""
    projection = SessionPrincipal(id=1, email="a@x.com")
    with pytest.raises(Exception):
        projection.is_admin = True


@pytest.mark.parametrize("raw, expected", [
    ("a@x.com", "a@x.com"),
    ("  A@X.Com ", "a@x.com"),
    ("", ""),
    (None, ""),
])
def test_normalize_email(raw, expected):
    """Test email normalization trims and lowercases."""
    assert normalize_email(raw) == expected
