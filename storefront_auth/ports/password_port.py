"""
Password Hasher Port - Interface for password hashing and verification.

Implementations:
- ScryptPasswordHasher: scrypt salted hashes
"""

from abc import ABC, abstractmethod


class PasswordHasherPort(ABC):
    """Port: Turn passwords into salted hashes and check them."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh salt.

        Args:
            password: Plaintext password

        Returns:
            Storable salted hash

        Raises:
            InvalidInputError: If the password is empty or too long
        """
        pass

    @abstractmethod
    def verify(self, password: str, stored: str) -> bool:
        """
        Check a password against a stored salted hash.

        Args:
            password: Plaintext password
            stored: Salted hash produced by hash()

        Returns:
            True if the password matches

        Raises:
            MalformedHashError: If stored cannot be parsed
        """
        pass
