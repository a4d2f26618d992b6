"""
Checkout Eligibility Gate

Combines cart totals, the restaurant's open/closed state and its minimum
order threshold into a single verdict. Blocking reasons are independent
and cumulative, so every condition can be shown to the customer at once.

The gate has no side effects; it is consulted, never driven.

Author: ToHome Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from enum import Enum
from typing import FrozenSet, List, Optional

from tohome.core.config import get_settings
from tohome.core.primitives import ensure_cents, format_cents
from tohome.schemas import RestaurantSchedule
from tohome.services.availability import is_restaurant_open
from tohome.services.cart.store import CartStore, CartTotals

logger = logging.getLogger(__name__)


class EligibilityReason(str, Enum):
    """Machine-readable reasons blocking checkout."""
    EMPTY_CART = "EMPTY_CART"
    RESTAURANT_CLOSED = "RESTAURANT_CLOSED"
    BELOW_MIN_ORDER = "BELOW_MIN_ORDER"


# Display order for reasons
REASON_ORDER = (
    EligibilityReason.EMPTY_CART,
    EligibilityReason.RESTAURANT_CLOSED,
    EligibilityReason.BELOW_MIN_ORDER,
)


@dataclass(frozen=True)
class EligibilityVerdict:
    """
    Checkout permission decision.

    Attributes:
        allowed: True iff reasons is empty
        reasons: Every condition currently blocking checkout
    """
    reasons: FrozenSet[EligibilityReason] = field(default_factory=frozenset)

    @property
    def allowed(self) -> bool:
        return not self.reasons

    @property
    def ordered_reasons(self) -> List[EligibilityReason]:
        return [reason for reason in REASON_ORDER if reason in self.reasons]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "allowed": self.allowed,
            "reasons": [reason.value for reason in self.ordered_reasons],
        }


def evaluate(
    totals: CartTotals,
    is_restaurant_open: bool,
    min_order_cents: int,
) -> EligibilityVerdict:
    """
    Decide whether checkout may proceed.

    Args:
        totals: Current cart totals
        is_restaurant_open: Restaurant open/closed state
        min_order_cents: Minimum subtotal required

    Returns:
        EligibilityVerdict: allowed plus every blocking reason
    """
    ensure_cents(min_order_cents, "min_order_cents")

    reasons = set()
    if totals.total_items == 0:
        reasons.add(EligibilityReason.EMPTY_CART)
    if not is_restaurant_open:
        reasons.add(EligibilityReason.RESTAURANT_CLOSED)
    if totals.subtotal_cents < min_order_cents:
        reasons.add(EligibilityReason.BELOW_MIN_ORDER)

    return EligibilityVerdict(reasons=frozenset(reasons))


def evaluate_checkout(
    store: CartStore,
    schedule: RestaurantSchedule,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> EligibilityVerdict:
    """
    Evaluate the store's cart against a restaurant's schedule.

    Reads the cart totals and independently queries the availability
    evaluator at the given instant.
    """
    cart = store.cart
    if cart is not None and cart.restaurant_id != schedule.restaurant_id:
        logger.warning(
            f"Evaluating cart of {cart.restaurant_id} against schedule of "
            f"{schedule.restaurant_id}"
        )

    verdict = evaluate(
        store.get_totals(),
        is_restaurant_open(schedule, now, tz),
        schedule.min_order_cents,
    )
    logger.debug(f"Checkout verdict for {schedule.restaurant_id}: {verdict.to_dict()}")
    return verdict


def describe(
    verdict: EligibilityVerdict,
    min_order_cents: int = 0,
    currency_symbol: Optional[str] = None,
) -> List[str]:
    """
    User-facing messages for each blocking reason, in display order.

    Example:
        >>> describe(EligibilityVerdict(frozenset({EligibilityReason.BELOW_MIN_ORDER})), 1000)
        ['Minimum order is €10.00']
    """
    symbol = currency_symbol if currency_symbol is not None else get_settings().currency_symbol
    messages = {
        EligibilityReason.EMPTY_CART: "Your cart is empty",
        EligibilityReason.RESTAURANT_CLOSED: "The restaurant is currently closed",
        EligibilityReason.BELOW_MIN_ORDER: (
            f"Minimum order is {format_cents(min_order_cents, symbol)}"
        ),
    }
    return [messages[reason] for reason in verdict.ordered_reasons]
