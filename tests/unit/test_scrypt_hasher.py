"""
Unit tests for the scrypt password hasher.
"""

import hashlib

import pytest
from storefront_auth.adapters.scrypt_hasher import ScryptPasswordHasher, MAX_PASSWORD_LENGTH
from storefront_auth.errors import InvalidInputError, MalformedHashError


def test_hash_format():
    """Test stored format is <128 hex chars>.<32 hex chars>."""
    stored = ScryptPasswordHasher().hash("secret123")

    key_hex, salt = stored.split(".")
    assert len(key_hex) == 128  # 64-byte key
    assert len(salt) == 32      # 16-byte salt
    int(key_hex, 16)
    int(salt, 16)


def test_verify_roundtrip_with_defaults():
    """Test a password verifies against its own hash."""
    hasher = ScryptPasswordHasher()
    assert hasher.verify("secret123", hasher.hash("secret123"))


def test_wrong_password_fails(hasher):
    """Test a different password does not verify."""
    stored = hasher.hash("secret123")
    assert hasher.verify("secret124", stored) is False
    assert hasher.verify("", stored) is False


def test_fresh_salt_per_hash(hasher):
    """Test hashing the same password twice gives different outputs."""
    first = hasher.hash("secret123")
    second = hasher.hash("secret123")

    assert first != second
    assert first.split(".")[1] != second.split(".")[1]
    assert hasher.verify("secret123", first)
    assert hasher.verify("secret123", second)


def test_unicode_password(hasher):
    """Test non-ASCII passwords are hashed as UTF-8."""
    stored = hasher.hash("pässwörd-密码")
    assert hasher.verify("pässwörd-密码", stored)
    assert not hasher.verify("passwoerd-密码", stored)


def test_compatible_with_existing_hashes():
    """Test hashes built as scrypt(password, salt-hex-text, 64) verify."""
    salt = "00112233445566778899aabbccddeeff"
    key = hashlib.scrypt(b"secret123", salt=salt.encode(), n=16384, r=8, p=1, dklen=64)
    stored = f"{key.hex()}.{salt}"

    hasher = ScryptPasswordHasher()
    assert hasher.verify("secret123", stored)
    assert not hasher.verify("secret1234", stored)


def test_empty_password_rejected(hasher):
    """Test hashing an empty password fails."""
    with pytest.raises(InvalidInputError):
        hasher.hash("")


def test_non_string_password_rejected(hasher):
    """Test hashing a non-string fails."""
    with pytest.raises(InvalidInputError):
        hasher.hash(None)


def test_oversized_password_rejected(hasher):
    """Test KDF input is bounded."""
    too_long = "x" * (MAX_PASSWORD_LENGTH + 1)
    with pytest.raises(InvalidInputError):
        hasher.hash(too_long)

    stored = hasher.hash("secret123")
    with pytest.raises(InvalidInputError):
        hasher.verify(too_long, stored)


def test_max_length_password_accepted(hasher):
    """Test a password at the bound is fine."""
    password = "x" * MAX_PASSWORD_LENGTH
    assert hasher.verify(password, hasher.hash(password))


@pytest.mark.parametrize("stored", [
    "",
    "nodothere",
    ".00112233445566778899aabbccddeeff",
    "abcdef.",
    "zz.00112233445566778899aabbccddeeff",
    "abcdef.not-hex",
    "abc.00112233445566778899aabbccddeeff",  # odd-length hex
])
def test_malformed_stored_hash(hasher, stored):
    """Test unparseable stored values raise MalformedHashError."""
    with pytest.raises(MalformedHashError):
        hasher.verify("secret123", stored)


def test_malformed_non_string_stored_hash(hasher):
    """Test a missing stored value raises MalformedHashError."""
    with pytest.raises(MalformedHashError):
        hasher.verify("secret123", None)


def test_truncated_key_does_not_verify(hasher):
    """Test a stored key of the wrong length never verifies."""
    key_hex, salt = hasher.hash("secret123").split(".")
    assert hasher.verify("secret123", f"{key_hex[:64]}.{salt}") is False


def test_invalid_cost_rejected():
    """Test n must be a power of two."""
    with pytest.raises(ValueError):
        ScryptPasswordHasher(n=1000)
