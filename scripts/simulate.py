"""
Cart Session Simulation Script

Runs a scripted customer session against the cart store: builds a cart
from a sample menu, switches restaurant, and asks the eligibility gate
whether checkout may proceed at a chosen instant.
Run from project root: python scripts/simulate.py

Author: ToHome Team
Version: 1.0.0
"""

import argparse
import asyncio
import os
import random
import sys
from datetime import datetime

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tohome.core.config import get_settings, setup_logging
from tohome.core.exceptions import OptionSelectionError
from tohome.core.primitives import format_cents
from tohome.schemas import CatalogProduct, RestaurantRef, RestaurantSchedule
from tohome.services.cart import CartStore, FileCartStorage, MemoryCartStorage
from tohome.services.catalog import product_ref, resolve_options
from tohome.services.eligibility import describe, evaluate_checkout

# Sample data
PIZZERIA = RestaurantRef(id="r-pizzeria", slug="pizzeria-da-manu", name="Pizzeria da Manu")
SUSHI = RestaurantRef(id="r-sushi", slug="sushi-mare", name="Sushi Mare")

PIZZERIA_SCHEDULE = RestaurantSchedule.model_validate({
    "restaurant_id": PIZZERIA.id,
    "min_order_cents": 1500,
    "hours": [
        {"day_of_week": day, "open_time": "12:00", "close_time": "14:30"}
        for day in range(7)
    ] + [
        {"day_of_week": day, "open_time": "19:00", "close_time": "02:00"}
        for day in range(7)
    ],
})

MENU = [
    CatalogProduct.model_validate({
        "id": "p-margherita",
        "name": "Pizza Margherita",
        "base_price_cents": 700,
        "option_groups": [
            {
                "id": "g-size", "name": "Size", "min_select": 1, "max_select": 1,
                "items": [
                    {"id": "o-normal", "name": "Normal", "price_delta_cents": 0},
                    {"id": "o-maxi", "name": "Maxi", "price_delta_cents": 300},
                ],
            },
            {
                "id": "g-extra", "name": "Extras", "min_select": 0, "max_select": 3,
                "items": [
                    {"id": "o-bufala", "name": "Bufala", "price_delta_cents": 250},
                    {"id": "o-basil", "name": "Extra basil", "price_delta_cents": 50},
                    {"id": "o-nduja", "name": "'Nduja", "price_delta_cents": 150},
                ],
            },
        ],
    }),
    CatalogProduct.model_validate({
        "id": "p-suppli",
        "name": "Supplì",
        "base_price_cents": 250,
    }),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate a cart session")
    parser.add_argument("--at", help="Instant to evaluate (ISO format, civil time)")
    parser.add_argument("--file", action="store_true", help="Persist to the data directory")
    parser.add_argument("--yes", action="store_true", help="Accept the restaurant switch")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser


async def run(args: argparse.Namespace) -> None:
    settings = get_settings()
    rng = random.Random(args.seed)

    storage = FileCartStorage() if args.file else MemoryCartStorage()
    store = CartStore(storage)
    await store.hydrate()

    print("=" * 60)
    print(f"🛒 CART SESSION ({storage.provider_name} storage)")
    print("=" * 60)

    async def confirm_switch(current, restaurant) -> bool:
        print(f"\n❓ Empty cart of {current.restaurant_name} and switch to {restaurant.name}?")
        print(f"   -> {'yes' if args.yes else 'no'}")
        return args.yes

    for _ in range(rng.randint(2, 5)):
        product = rng.choice(MENU)
        picks = []
        for group in product.option_groups:
            count = rng.randint(group.min_select, group.max_select)
            picks += [item.id for item in rng.sample(group.items, min(count, len(group.items)))]
        try:
            options = resolve_options(product, picks)
        except OptionSelectionError as e:
            print(f"⚠️ {e.code}: {e.message}")
            continue
        qty = rng.randint(1, 3)
        outcome = await store.add_item(PIZZERIA, product_ref(product), options, qty)
        print(f"➕ {product.name} x{qty} {[o.item_name for o in options]} -> {outcome.value}")

    outcome = await store.add_item(
        SUSHI,
        {"id": "p-nigiri", "name": "Nigiri mix", "base_price_cents": 1200},
        [],
        1,
        confirm_switch=confirm_switch,
    )
    print(f"➕ Nigiri mix x1 -> {outcome.value}")

    cart = store.cart
    totals = store.get_totals()
    print(f"\n📋 CART ({cart.restaurant_name if cart else 'empty'}):")
    print("-" * 60)
    for item in cart.items if cart else []:
        print(f"   {item.qty} x {item.name:<20} {format_cents(item.item_total_cents, settings.currency_symbol)}")
    print(f"   Items: {totals.total_items}")
    print(f"   Subtotal: {format_cents(totals.subtotal_cents, settings.currency_symbol)}")

    at = datetime.fromisoformat(args.at) if args.at else None
    verdict = evaluate_checkout(store, PIZZERIA_SCHEDULE, now=at)
    print("\n" + "=" * 60)
    if verdict.allowed:
        print("✅ CHECKOUT ALLOWED")
    else:
        print("❌ CHECKOUT BLOCKED")
        for message in describe(verdict, PIZZERIA_SCHEDULE.min_order_cents):
            print(f"   - {message}")
    print("=" * 60)

    await store.close()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(run(build_parser().parse_args()))
