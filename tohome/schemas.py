"""
Pydantic Schemas for Inbound and Persisted Data

Covers:
- Cart snapshot (persisted in client-local storage)
- Restaurant weekly hours and daily overrides
- Catalog snapshot (products, option groups, option items)

All amounts are integer cents; all times are normalized "HH:MM:SS".

Author: ToHome Team
Version: 1.0.0
"""

import datetime as dt
from typing import List, Optional, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    field_validator,
    model_validator,
)

from tohome.core.primitives import normalize_time


# =============================================================================
# IDENTITY HELPERS
# =============================================================================

def make_item_key(product_id: str, options: Sequence["CartOption"]) -> str:
    """
    Deterministic identity of a cart line.

    Option item ids are sorted, so the same selection made in a different
    order yields the same key.

    Example:
        >>> make_item_key("p1", [])
        'p1::'
    """
    option_ids = sorted(option.item_id for option in options)
    return f"{product_id}::{'|'.join(option_ids)}"


def calculate_item_total(base_price_cents: int, options: Sequence["CartOption"], qty: int) -> int:
    """(base + sum of option deltas) * qty, in cents."""
    return (base_price_cents + sum(option.price_delta_cents for option in options)) * qty


# =============================================================================
# CART SNAPSHOT
# =============================================================================

class CartOption(BaseModel):
    """An immutable choice within a product's option group."""
    model_config = ConfigDict(frozen=True)

    group_id: str
    group_name: str
    item_id: str
    item_name: str
    price_delta_cents: StrictInt = 0


class RestaurantRef(BaseModel):
    """Restaurant identity attached to a cart."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    slug: str
    name: str


class ProductRef(BaseModel):
    """Product identity and base price used when adding to a cart."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    base_price_cents: StrictInt = Field(..., ge=0)


class CartItem(BaseModel):
    """
    A single cart line.

    Invariant: item_total_cents == (base_price_cents + sum(deltas)) * qty.
    """

    key: str
    product_id: str = Field(..., min_length=1)
    name: str
    base_price_cents: StrictInt = Field(..., ge=0)
    qty: StrictInt = Field(..., ge=1)
    options: List[CartOption] = Field(default_factory=list)
    item_total_cents: StrictInt

    @classmethod
    def build(cls, product: ProductRef, options: Sequence[CartOption], qty: int) -> "CartItem":
        """Create a new line for a product and option selection."""
        return cls(
            key=make_item_key(product.id, options),
            product_id=product.id,
            name=product.name,
            base_price_cents=product.base_price_cents,
            qty=qty,
            options=list(options),
            item_total_cents=calculate_item_total(product.base_price_cents, options, qty),
        )

    @property
    def unit_price_cents(self) -> int:
        """Base price plus option deltas for a single unit."""
        return calculate_item_total(self.base_price_cents, self.options, 1)

    def with_qty(self, qty: int) -> "CartItem":
        """Copy of this line with a new quantity and recomputed total."""
        return self.model_copy(
            update={"qty": qty, "item_total_cents": self.unit_price_cents * qty}
        )

    @model_validator(mode="after")
    def check_invariants(self) -> "CartItem":
        expected_key = make_item_key(self.product_id, self.options)
        if self.key != expected_key:
            raise ValueError(f"Item key {self.key!r} does not match {expected_key!r}")
        expected_total = calculate_item_total(self.base_price_cents, self.options, self.qty)
        if self.item_total_cents != expected_total:
            raise ValueError(
                f"item_total_cents {self.item_total_cents} != expected {expected_total}"
            )
        return self


class CartState(BaseModel):
    """
    The single active cart.

    A cart always holds at least one item; an empty cart is represented
    by its absence (None), never by an empty item list.
    """

    restaurant_id: str = Field(..., min_length=1)
    restaurant_slug: str
    restaurant_name: str
    items: List[CartItem] = Field(..., min_length=1)

    @field_validator("items")
    @classmethod
    def validate_unique_keys(cls, v: List[CartItem]) -> List[CartItem]:
        keys = [item.key for item in v]
        if len(keys) != len(set(keys)):
            raise ValueError("Duplicate item keys in cart")
        return v

    @classmethod
    def for_restaurant(cls, restaurant: RestaurantRef, items: List[CartItem]) -> "CartState":
        return cls(
            restaurant_id=restaurant.id,
            restaurant_slug=restaurant.slug,
            restaurant_name=restaurant.name,
            items=items,
        )

    def find(self, key: str) -> Optional[CartItem]:
        """Return the line with the given key, if any."""
        for item in self.items:
            if item.key == key:
                return item
        return None


# =============================================================================
# RESTAURANT AVAILABILITY
# =============================================================================

def _normalize_optional_time(v):
    if v is None or v == "":
        return None
    return normalize_time(v)


class RestaurantHours(BaseModel):
    """One weekly recurring slot. close_time <= open_time crosses midnight."""
    model_config = ConfigDict(frozen=True)

    day_of_week: int = Field(..., ge=0, le=6, description="0=Sunday..6=Saturday")
    open_time: str = Field(..., examples=["19:00:00"])
    close_time: str = Field(..., examples=["02:00:00"])
    is_closed: bool = False

    @field_validator("open_time", "close_time", mode="before")
    @classmethod
    def validate_time(cls, v):
        return normalize_time(v)

    @property
    def crosses_midnight(self) -> bool:
        return self.close_time <= self.open_time


class RestaurantOverride(BaseModel):
    """A one-off replacement of status or hours for a single date."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    is_closed: bool = False
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    note: Optional[str] = Field(None, max_length=500)

    @field_validator("open_time", "close_time", mode="before")
    @classmethod
    def validate_time(cls, v):
        return _normalize_optional_time(v)

    @property
    def has_times(self) -> bool:
        return self.open_time is not None and self.close_time is not None


class RestaurantSchedule(BaseModel):
    """Everything the availability and eligibility checks need about a restaurant."""

    restaurant_id: str = Field(..., min_length=1)
    hours: List[RestaurantHours] = Field(default_factory=list)
    override: Optional[RestaurantOverride] = None
    min_order_cents: StrictInt = Field(default=0, ge=0)
    force_closed: bool = False
    force_closed_note: Optional[str] = None
    is_active: bool = True


# =============================================================================
# CATALOG SNAPSHOT
# =============================================================================

class OptionItem(BaseModel):
    """A selectable item inside an option group."""
    id: str
    name: str
    price_delta_cents: StrictInt = 0
    is_active: bool = True
    sort_order: int = 0


class OptionGroup(BaseModel):
    """A product's option group with selection bounds."""
    id: str
    name: str
    min_select: int = Field(default=0, ge=0)
    max_select: int = Field(default=1, ge=0)
    sort_order: int = 0
    items: List[OptionItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_bounds(self) -> "OptionGroup":
        if self.max_select < self.min_select:
            raise ValueError(
                f"max_select ({self.max_select}) must be >= min_select ({self.min_select})"
            )
        return self


class CatalogProduct(BaseModel):
    """A product from the restaurant's menu snapshot."""
    id: str = Field(..., min_length=1)
    name: str
    base_price_cents: StrictInt = Field(..., ge=0)
    is_active: bool = True
    option_groups: List[OptionGroup] = Field(default_factory=list)
