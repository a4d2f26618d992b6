"""
                        Services Module

Contains the order composition and eligibility services.

Services:
    - availability: Opening hours and override evaluation
    - cart: Client-side cart store and its storage backends
    - catalog: Option selection validation against the menu snapshot
    - eligibility: Checkout gate
"""

from tohome.services.availability import is_open_now, is_restaurant_open
from tohome.services.cart import CartStore, create_cart_store
from tohome.services.eligibility import evaluate, evaluate_checkout

__all__ = [
    "is_open_now",
    "is_restaurant_open",
    "CartStore",
    "create_cart_store",
    "evaluate",
    "evaluate_checkout",
]
