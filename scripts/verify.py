"""
Cart Snapshot Verification Script

Verifies integrity of the persisted cart snapshot.
Run from project root: python scripts/verify.py

Author: ToHome Team
Version: 1.0.0
"""

import os
import sys
from datetime import datetime

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from tohome.core.config import get_settings
from tohome.core.exceptions import CartStorageError
from tohome.core.primitives import format_cents
from tohome.schemas import CartState
from tohome.services.cart import FileCartStorage


def verify_snapshot() -> bool:
    """Verify the persisted cart snapshot."""
    settings = get_settings()
    storage = FileCartStorage()
    key = settings.cart_storage_key

    print("=" * 60)
    print("🔍 CART SNAPSHOT VERIFICATION REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"📄 Key: {key} ({storage.directory})")
    print("=" * 60)

    try:
        raw = storage.load(key)
    except CartStorageError as e:
        print(f"\n❌ Snapshot is unreadable: {e}")
        return False

    if raw is None:
        print("\n✅ No persisted cart (absent cart)")
        return True

    try:
        cart = CartState.model_validate_json(raw)
    except ValidationError as e:
        print(f"\n❌ Snapshot is corrupt ({e.error_count()} error(s)):")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            print(f"   - {location or '<root>'}: {error['msg']}")
        return False

    print(f"\n✅ Snapshot valid")
    print(f"\n🍽️ Restaurant: {cart.restaurant_name} ({cart.restaurant_id})")
    print(f"\n📋 LINES:")
    print("-" * 60)
    for item in cart.items:
        options = ", ".join(option.item_name for option in item.options) or "-"
        print(
            f"   {item.qty} x {item.name:<20} {options:<25} "
            f"{format_cents(item.item_total_cents, settings.currency_symbol)}"
        )

    subtotal = sum(item.item_total_cents for item in cart.items)
    print(f"\n💰 Subtotal: {format_cents(subtotal, settings.currency_symbol)}")
    print(f"   Items: {sum(item.qty for item in cart.items)}")

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE")
    print("=" * 60)
    return True


if __name__ == "__main__":
    sys.exit(0 if verify_snapshot() else 1)
