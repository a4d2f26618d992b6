"""
Cart Service

Client-side cart state machine with durable local persistence.

Usage:
    from tohome.services.cart import create_cart_store

    store = await create_cart_store()
    await store.add_item(restaurant, product, options, qty=1)

Author: ToHome Team
Version: 1.0.0
"""

import logging
from typing import Optional

from tohome.services.cart.storage import (
    BaseCartStorage,
    FileCartStorage,
    MemoryCartStorage,
    get_cart_storage,
    reset_cart_storage,
)
from tohome.services.cart.store import (
    AddItemOutcome,
    CartStore,
    CartTotals,
    ConfirmSwitch,
)

logger = logging.getLogger(__name__)


async def create_cart_store(storage: Optional[BaseCartStorage] = None) -> CartStore:
    """
    Build a cart store and hydrate it before handing it out.

    Args:
        storage: Storage backend (default: configured backend)

    Returns:
        CartStore: A hydrated store ready to accept mutations
    """
    store = CartStore(storage or get_cart_storage())
    await store.hydrate()
    logger.debug(f"Cart store ready (storage={store.storage.provider_name})")
    return store


__all__ = [
    "create_cart_store",
    "AddItemOutcome",
    "CartStore",
    "CartTotals",
    "ConfirmSwitch",
    "BaseCartStorage",
    "FileCartStorage",
    "MemoryCartStorage",
    "get_cart_storage",
    "reset_cart_storage",
]
