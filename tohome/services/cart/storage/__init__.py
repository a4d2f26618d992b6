"""
Cart Storage Factory

Provides a single entry point for obtaining a cart storage backend.
Selects MemoryCartStorage or FileCartStorage from the configuration.

Usage:
    from tohome.services.cart.storage import get_cart_storage

    storage = get_cart_storage()
    payload = storage.load("tohome_cart")

Author: ToHome Team
Version: 1.0.0
"""

import logging
from functools import lru_cache

from tohome.core.config import StorageBackend, get_settings
from tohome.services.cart.storage.base import BaseCartStorage
from tohome.services.cart.storage.file import FileCartStorage
from tohome.services.cart.storage.memory import MemoryCartStorage

logger = logging.getLogger(__name__)


@lru_cache()
def get_cart_storage() -> BaseCartStorage:
    """
    Get the configured cart storage instance.

    Returns:
        BaseCartStorage: MemoryCartStorage or FileCartStorage
    """
    settings = get_settings()
    backend = settings.effective_storage_backend

    if backend == StorageBackend.MEMORY:
        logger.info(
            f"Cart Storage: Using MemoryCartStorage ({settings.env_mode.value} mode)"
        )
        return MemoryCartStorage()

    logger.info(f"Cart Storage: Using FileCartStorage ({settings.env_mode.value} mode)")
    return FileCartStorage()


def reset_cart_storage() -> None:
    """
    Clear the cached storage instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_cart_storage.cache_clear()
    logger.debug("Cart storage cache cleared")


__all__ = [
    "get_cart_storage",
    "reset_cart_storage",
    "BaseCartStorage",
    "MemoryCartStorage",
    "FileCartStorage",
]
