"""
Scrypt Password Hasher - Implements PasswordHasherPort with scrypt.

Stored format: ``<hex derived key>.<hex salt>``. The salt is fed to scrypt
as its hex text, so hashes written by the Node storefront verify here.
"""

import hashlib
import hmac
import secrets

from storefront_auth.errors import InvalidInputError, MalformedHashError
from storefront_auth.ports.password_port import PasswordHasherPort

SALT_BYTES = 16
KEY_LENGTH = 64
MAX_PASSWORD_LENGTH = 1024


class ScryptPasswordHasher(PasswordHasherPort):
    """
    scrypt-based password hasher.

    Defaults match the work factors the storefront has always used
    (N=16384, r=8, p=1, 64-byte key).
    """

    def __init__(
        self,
        n: int = 16384,
        r: int = 8,
        p: int = 1,
        key_length: int = KEY_LENGTH,
        max_password_length: int = MAX_PASSWORD_LENGTH,
    ):
        """
        Initialize scrypt hasher.

        Args:
            n: CPU/memory cost (power of two)
            r: Block size
            p: Parallelization
            key_length: Derived key length in bytes
            max_password_length: Longest accepted password in characters
        """
        if n < 2 or n & (n - 1):
            raise ValueError("n must be a power of two greater than 1")
        self._n = n
        self._r = r
        self._p = p
        self._key_length = key_length
        self._max_password_length = max_password_length
        # scrypt needs 128*n*r bytes; leave headroom over OpenSSL's 32 MiB default
        self._maxmem = max(128 * n * r * 2, 32 * 1024 * 1024)

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh random salt.

        Args:
            password: Plaintext password

        Returns:
            ``<hex key>.<hex salt>``
        """
        self._check_password(password)
        if not password:
            raise InvalidInputError("Password is required")

        salt = secrets.token_hex(SALT_BYTES)
        key = self._derive(password, salt)
        return f"{key.hex()}.{salt}"

    def verify(self, password: str, stored: str) -> bool:
        """
        Verify a password against a stored hash in constant time.

        Args:
            password: Plaintext password
            stored: ``<hex key>.<hex salt>``

        Returns:
            True if the password matches
        """
        expected, salt = self._split(stored)
        self._check_password(password)

        supplied = self._derive(password, salt)
        # compare_digest rejects length mismatches without a prefix scan
        return hmac.compare_digest(expected, supplied)

    def _check_password(self, password: str):
        if not isinstance(password, str):
            raise InvalidInputError("Password must be a string")
        if len(password) > self._max_password_length:
            raise InvalidInputError(
                f"Password must be at most {self._max_password_length} characters"
            )

    @staticmethod
    def _split(stored: str):
        """Parse the stored composite into (key bytes, salt text)."""
        if not isinstance(stored, str) or "." not in stored:
            raise MalformedHashError("Stored hash has no salt separator")

        key_hex, salt = stored.split(".", 1)
        if not key_hex or not salt:
            raise MalformedHashError("Stored hash has an empty component")

        try:
            key = bytes.fromhex(key_hex)
            bytes.fromhex(salt)
        except ValueError:
            raise MalformedHashError("Stored hash is not hex encoded")

        return key, salt

    def _derive(self, password: str, salt: str) -> bytes:
        return hashlib.scrypt(
            password.encode("utf-8"),
            salt=salt.encode("ascii"),
            n=self._n,
            r=self._r,
            p=self._p,
            maxmem=self._maxmem,
            dklen=self._key_length,
        )
