"""
Memory Principal Store - In-memory credential store (testing only).
"""

import threading
from dataclasses import replace
from typing import Optional, Dict
from storefront_auth.errors import DuplicateEmailError
from storefront_auth.ports.principal_store_port import PrincipalStorePort
from storefront_auth.domain.principal import Principal


class MemoryPrincipalStore(PrincipalStorePort):
    """
    In-memory principal storage.

    WARNING: Only for testing. Principals are lost on restart.
    Stands in for the relational user table.
    """

    def __init__(self):
        """Initialize in-memory storage."""
        self._lock = threading.Lock()
        self._next_id = 1
        # Format: {id: Principal}
        self._by_id: Dict[int, Principal] = {}
        # Format: {email: id}
        self._by_email: Dict[str, int] = {}

    def find_by_email(self, email: str) -> Optional[Principal]:
        """Find a principal by exact email match."""
        with self._lock:
            principal_id = self._by_email.get(email)
            if principal_id is None:
                return None
            return replace(self._by_id[principal_id])

    def find_by_id(self, principal_id: int) -> Optional[Principal]:
        """Find a principal by ID."""
        with self._lock:
            principal = self._by_id.get(principal_id)
            return replace(principal) if principal else None

    def insert(self, principal: Principal) -> Principal:
        """Persist a new principal and assign its ID."""
        with self._lock:
            # Unique constraint on email
            if principal.email in self._by_email:
                raise DuplicateEmailError()

            stored = replace(principal, id=self._next_id)
            self._next_id += 1

            self._by_id[stored.id] = stored
            self._by_email[stored.email] = stored.id
            return replace(stored)

    def update(self, principal: Principal) -> Principal:
        """
        Replace a stored principal, e.g. toggling is_admin.

        Test and fixture helper; not part of PrincipalStorePort.

        Args:
            principal: Principal with an existing ID

        Returns:
            The stored principal
        """
        with self._lock:
            current = self._by_id.get(principal.id)
            if current is None:
                raise KeyError(principal.id)
            if principal.email != current.email:
                if principal.email in self._by_email:
                    raise DuplicateEmailError()
                del self._by_email[current.email]
                self._by_email[principal.email] = principal.id

            self._by_id[principal.id] = replace(principal)
            return replace(principal)

    def count(self) -> int:
        """Number of stored principals. Test helper; not part of PrincipalStorePort."""
        with self._lock:
            return len(self._by_id)
