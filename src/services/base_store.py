"""
Abstract base class for user stores.

Defines the capability set (fetch-all, insert, delete) that lets one service
and one set of routes work over either backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class UserStore(ABC):
    """
    Abstract interface over a named table or collection.

    All implementations (relational, document) must implement these methods.
    Identities cross this interface as opaque strings.
    """

    def __init__(self, store_name: str):
        self.store_name = store_name

    @abstractmethod
    async def fetch_all(self) -> List[Dict[str, Any]]:
        """
        Fetch every record in the store.

        Returns:
            Records sorted by creation time (newest first)
        """
        pass

    @abstractmethod
    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a record.

        Args:
            record: Field values without identity or timestamps

        Returns:
            The stored record with backend-assigned identity and timestamps
        """
        pass

    @abstractmethod
    async def delete(self, identity: str) -> Optional[int]:
        """
        Delete a record by identity.

        Args:
            identity: Opaque identity string

        Returns:
            Number of deleted records, or None when the backend cannot tell
        """
        pass
