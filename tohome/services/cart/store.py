"""
Cart Store

Owns the single active cart: line identity, additive merge, quantity
changes, totals and persistence to client-local storage.

Lifecycle:
    1. hydrate() restores the last persisted snapshot, exactly once
    2. Mutations are accepted only after hydration
    3. Every mutation computes the next snapshot, persists it, and only
       then installs it in memory (write-after-mutate)
    4. close() is a teardown no-op; the last write is already durable

Mutations are serialized by an asyncio lock. Adding an item from another
restaurant awaits a caller-supplied confirmation while holding the lock,
so nothing else can touch the cart while the decision is pending.
Storage calls run in a worker thread and never block the event loop.

Usage:
    store = CartStore(get_cart_storage())
    await store.hydrate()
    await store.add_item(restaurant, product, options, qty=2,
                         confirm_switch=ask_user)
    totals = store.get_totals()

Author: ToHome Team
Version: 1.0.0
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Union

from pydantic import ValidationError

from tohome.core.config import get_settings
from tohome.core.exceptions import (
    CartError,
    CartNotHydratedError,
    CartStorageError,
    InvalidQuantityError,
)
from tohome.schemas import (
    CartItem,
    CartOption,
    CartState,
    ProductRef,
    RestaurantRef,
    make_item_key,
)
from tohome.services.cart.storage.base import BaseCartStorage

logger = logging.getLogger(__name__)

ConfirmSwitch = Callable[[CartState, RestaurantRef], Awaitable[bool]]


class AddItemOutcome(str, Enum):
    """Result of an add_item call."""
    ADDED = "added"
    MERGED = "merged"
    SWITCHED = "switched"
    DECLINED = "declined"


@dataclass(frozen=True)
class CartTotals:
    """
    Aggregate cart figures.

    Attributes:
        subtotal_cents: Sum of all line totals
        total_items: Sum of all quantities
    """
    subtotal_cents: int = 0
    total_items: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "subtotal_cents": self.subtotal_cents,
            "total_items": self.total_items,
        }


def _check_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    return value


class CartStore:
    """
    The client-side cart state machine.

    Attributes:
        storage: Backend holding the serialized snapshot
        storage_key: Key under which the snapshot is stored
    """

    def __init__(self, storage: BaseCartStorage, storage_key: Optional[str] = None):
        self.storage = storage
        self.storage_key = storage_key or get_settings().cart_storage_key
        self._cart: Optional[CartState] = None
        self._hydrated = False
        self._closed = False
        self._lock = asyncio.Lock()

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    @property
    def is_hydrated(self) -> bool:
        return self._hydrated

    async def hydrate(self) -> Optional[CartState]:
        """
        Restore the last persisted snapshot.

        Only the first call reads storage. An unreadable snapshot, or one
        that breaks a cart invariant, is discarded and the cart starts absent.

        Returns:
            Optional[CartState]: The restored cart, or None
        """
        async with self._lock:
            if self._hydrated:
                return self.cart

            try:
                raw = await asyncio.to_thread(self.storage.load, self.storage_key)
            except CartStorageError as e:
                logger.warning(
                    f"Discarding unreadable cart snapshot under {self.storage_key!r}: {e}"
                )
                raw = None
                await self._discard_snapshot()

            if raw is not None:
                try:
                    self._cart = CartState.model_validate_json(raw)
                except ValidationError as e:
                    logger.warning(
                        f"Discarding corrupt cart snapshot under {self.storage_key!r}: "
                        f"{e.error_count()} error(s)"
                    )
                    await self._discard_snapshot()

            self._hydrated = True
            if self._cart is not None:
                logger.info(
                    f"Cart hydrated: {len(self._cart.items)} line(s) "
                    f"from restaurant {self._cart.restaurant_id}"
                )
            else:
                logger.info("Cart hydrated: no active cart")
            return self.cart

    async def close(self) -> None:
        """Tear down the store. Nothing is flushed; every write is already durable."""
        async with self._lock:
            self._closed = True
        logger.debug("Cart store closed")

    async def _discard_snapshot(self) -> None:
        self._cart = None
        try:
            await asyncio.to_thread(self.storage.delete, self.storage_key)
        except CartStorageError:
            logger.exception("Could not delete corrupt cart snapshot")

    def _ensure_ready(self) -> None:
        if self._closed:
            raise CartError("Cart store is closed")
        if not self._hydrated:
            raise CartNotHydratedError("Cart store must be hydrated before mutations")

    async def _commit(self, next_cart: Optional[CartState]) -> None:
        """Persist the next snapshot, then install it in memory."""
        if next_cart is None:
            await asyncio.to_thread(self.storage.delete, self.storage_key)
        else:
            payload = next_cart.model_dump_json()
            await asyncio.to_thread(self.storage.save, self.storage_key, payload)
        self._cart = next_cart

    # ==========================================================================
    # QUERIES
    # ==========================================================================

    @property
    def cart(self) -> Optional[CartState]:
        """A copy of the current cart, or None when no cart exists."""
        if self._cart is None:
            return None
        return self._cart.model_copy(deep=True)

    def get_totals(self) -> CartTotals:
        """Subtotal and item count; both zero when there is no cart."""
        if self._cart is None:
            return CartTotals()
        return CartTotals(
            subtotal_cents=sum(item.item_total_cents for item in self._cart.items),
            total_items=sum(item.qty for item in self._cart.items),
        )

    # ==========================================================================
    # MUTATIONS
    # ==========================================================================

    async def add_item(
        self,
        restaurant: Union[RestaurantRef, dict],
        product: Union[ProductRef, dict],
        options: Iterable[Union[CartOption, dict]] = (),
        qty: int = 1,
        *,
        confirm_switch: Optional[ConfirmSwitch] = None,
    ) -> AddItemOutcome:
        """
        Add a product with an option selection to the cart.

        An identical product and option set merges into the existing line by
        adding quantities. Adding from a different restaurant first awaits
        confirm_switch(current_cart, restaurant); a refusal, or no callback,
        leaves the cart untouched.

        Args:
            restaurant: Restaurant the product belongs to
            product: Product identity and base price
            options: Selected option snapshots
            qty: Positive quantity to add
            confirm_switch: Awaited decision for discarding another restaurant's cart

        Returns:
            AddItemOutcome: ADDED, MERGED, SWITCHED or DECLINED

        Raises:
            TypeError: If qty is not an integer
            InvalidQuantityError: If qty < 1
            CartNotHydratedError: If hydrate() has not completed
            CartStorageError: If the snapshot could not be persisted
        """
        _check_int(qty, "qty")
        if qty < 1:
            raise InvalidQuantityError(qty)

        restaurant = RestaurantRef.model_validate(restaurant)
        product = ProductRef.model_validate(product)
        options = [CartOption.model_validate(option) for option in options]

        async with self._lock:
            self._ensure_ready()
            current = self._cart

            if current is not None and current.restaurant_id != restaurant.id:
                if confirm_switch is None:
                    logger.warning(
                        f"Restaurant switch to {restaurant.id} declined: no confirmation handler"
                    )
                    return AddItemOutcome.DECLINED

                confirmed = await confirm_switch(current.model_copy(deep=True), restaurant)
                if not confirmed:
                    logger.info(
                        f"Restaurant switch {current.restaurant_id} -> {restaurant.id} declined"
                    )
                    return AddItemOutcome.DECLINED

                new_item = CartItem.build(product, options, qty)
                await self._commit(CartState.for_restaurant(restaurant, [new_item]))
                logger.info(
                    f"Cart switched {current.restaurant_id} -> {restaurant.id}, "
                    f"started with {new_item.key} x{qty}"
                )
                return AddItemOutcome.SWITCHED

            if current is None:
                new_item = CartItem.build(product, options, qty)
                await self._commit(CartState.for_restaurant(restaurant, [new_item]))
                logger.info(f"Cart created for restaurant {restaurant.id}")
                return AddItemOutcome.ADDED

            key = make_item_key(product.id, options)
            existing = current.find(key)
            if existing is not None:
                merged = existing.with_qty(existing.qty + qty)
                items = [merged if item.key == key else item for item in current.items]
                await self._commit(current.model_copy(update={"items": items}))
                logger.debug(f"Merged {key}: qty {existing.qty} -> {merged.qty}")
                return AddItemOutcome.MERGED

            items = current.items + [CartItem.build(product, options, qty)]
            await self._commit(current.model_copy(update={"items": items}))
            logger.debug(f"Added {key} x{qty}")
            return AddItemOutcome.ADDED

    async def remove_item(self, key: str) -> None:
        """
        Delete a line. Removing the last line destroys the cart.

        Unknown keys are ignored.
        """
        async with self._lock:
            self._ensure_ready()
            await self._remove_locked(key)

    async def _remove_locked(self, key: str) -> None:
        current = self._cart
        if current is None or current.find(key) is None:
            return

        items: List[CartItem] = [item for item in current.items if item.key != key]
        if not items:
            await self._commit(None)
            logger.info("Last line removed, cart destroyed")
            return
        await self._commit(current.model_copy(update={"items": items}))
        logger.debug(f"Removed {key}")

    async def set_qty(self, key: str, qty: int) -> None:
        """
        Replace a line's quantity.

        A quantity below 1 removes the line. Unknown keys are ignored.

        Raises:
            TypeError: If qty is not an integer
        """
        _check_int(qty, "qty")

        async with self._lock:
            self._ensure_ready()
            if qty < 1:
                await self._remove_locked(key)
                return

            current = self._cart
            existing = current.find(key) if current is not None else None
            if existing is None:
                return

            updated = existing.with_qty(qty)
            items = [updated if item.key == key else item for item in current.items]
            await self._commit(current.model_copy(update={"items": items}))
            logger.debug(f"Set {key} qty {existing.qty} -> {qty}")

    async def clear_cart(self) -> None:
        """Unconditionally destroy the cart."""
        async with self._lock:
            self._ensure_ready()
            await self._commit(None)
            logger.info("Cart cleared")
