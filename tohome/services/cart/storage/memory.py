"""
In-Memory Cart Storage

Dict-backed storage used in development mode and in tests.
Can simulate write failures to exercise the store's
write-after-mutate guarantees.
"""

import logging
from typing import Optional

from tohome.core.exceptions import CartStorageError
from tohome.services.cart.storage.base import BaseCartStorage

logger = logging.getLogger(__name__)


class MemoryCartStorage(BaseCartStorage):
    """
    Volatile storage keeping payloads in a dict.

    Attributes:
        fail_writes: When True, save() and delete() raise CartStorageError
            without touching stored data
    """

    def __init__(self, initial: Optional[dict[str, str]] = None, fail_writes: bool = False):
        self._data: dict[str, str] = dict(initial or {})
        self.fail_writes = fail_writes
        self.write_count = 0

    @property
    def provider_name(self) -> str:
        return "memory"

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, payload: str) -> None:
        if self.fail_writes:
            raise CartStorageError(f"Simulated write failure for key {key!r}")
        self._data[key] = payload
        self.write_count += 1
        logger.debug(f"Saved {len(payload)} bytes under {key!r}")

    def delete(self, key: str) -> None:
        if self.fail_writes:
            raise CartStorageError(f"Simulated delete failure for key {key!r}")
        self._data.pop(key, None)
        self.write_count += 1
        logger.debug(f"Deleted key {key!r}")

    def health_check(self) -> bool:
        return not self.fail_writes
