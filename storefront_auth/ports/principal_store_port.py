"""
Principal Store Port - Interface to the credential store.

The relational user table lives behind this port. Implementations:
- MemoryPrincipalStore: In-memory store (testing / reference)
"""

from abc import ABC, abstractmethod
from typing import Optional
from storefront_auth.domain.principal import Principal


class PrincipalStorePort(ABC):
    """Port: Look up and persist principals."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Principal]:
        """
        Find a principal by exact email match.

        Args:
            email: Email, already normalized by the caller

        Returns:
            Principal if found, None otherwise
        """
        pass

    @abstractmethod
    def find_by_id(self, principal_id: int) -> Optional[Principal]:
        """
        Find a principal by ID.

        Args:
            principal_id: Principal ID

        Returns:
            Principal if found, None otherwise
        """
        pass

    @abstractmethod
    def insert(self, principal: Principal) -> Principal:
        """
        Persist a new principal.

        Args:
            principal: Principal without an ID

        Returns:
            The stored principal with its assigned ID

        Raises:
            DuplicateEmailError: If the email is already taken
        """
        pass
