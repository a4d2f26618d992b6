"""
Cart Storage Abstract Base Class

Defines the interface contract for client-local key-value storage holding
the serialized cart. Both MemoryCartStorage and FileCartStorage implement it.

A key holds one JSON document or is absent. Writes must be atomic: after
a failed or interrupted save, load() returns the previous payload.

Author: ToHome Team
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseCartStorage(ABC):
    """
    Abstract base class for cart storage backends.

    Example:
        >>> storage = get_cart_storage()
        >>> storage.save("tohome_cart", '{"restaurant_id": "r1", ...}')
        >>> storage.load("tohome_cart")
        '{"restaurant_id": "r1", ...}'
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the storage backend.

        Returns:
            str: Backend name (e.g., "memory", "file")
        """
        pass

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """
        Read the payload stored under a key.

        Returns:
            Optional[str]: The payload, or None if the key is absent

        Raises:
            CorruptSnapshotError: If the stored bytes are not valid text
            CartStorageError: If the payload could not be read
        """
        pass

    @abstractmethod
    def save(self, key: str, payload: str) -> None:
        """
        Atomically replace the payload stored under a key.

        Raises:
            CartStorageError: If the payload could not be written
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Remove a key. Deleting an absent key is not an error.

        Raises:
            CartStorageError: If the key could not be removed
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Verify the storage is usable.

        Returns:
            bool: True if reads and writes are possible
        """
        pass
