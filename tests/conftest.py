"""
Shared fixtures for the ToHome test suite.
"""

import pytest
import pytest_asyncio

from tohome.core.config import get_settings
from tohome.schemas import CartOption, ProductRef, RestaurantRef
from tohome.services.cart import CartStore, MemoryCartStorage, reset_cart_storage


# ─── Settings ──────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from the environment and cached singletons."""
    monkeypatch.setenv("TIMEZONE", "Europe/Rome")
    monkeypatch.setenv("ENV_MODE", "development")
    monkeypatch.setenv("DATA_DIRECTORY", str(tmp_path / "data"))
    monkeypatch.delenv("CART_STORAGE_BACKEND", raising=False)
    get_settings.cache_clear()
    reset_cart_storage()
    yield
    get_settings.cache_clear()
    reset_cart_storage()

# ─── Catalog data ──────────────────────────────────────────────────────────────
@pytest.fixture
def pizzeria():
    return RestaurantRef(id="r-1", slug="pizzeria-da-manu", name="Pizzeria da Manu")

@pytest.fixture
def sushi_bar():
    return RestaurantRef(id="r-2", slug="sushi-mare", name="Sushi Mare")

@pytest.fixture
def margherita():
    return ProductRef(id="p-margherita", name="Pizza Margherita", base_price_cents=700)

@pytest.fixture
def nigiri():
    return ProductRef(id="p-nigiri", name="Nigiri mix", base_price_cents=1200)

@pytest.fixture
def maxi():
    return CartOption(
        group_id="g-size", group_name="Size",
        item_id="o-maxi", item_name="Maxi", price_delta_cents=300,
    )

@pytest.fixture
def bufala():
    return CartOption(
        group_id="g-extra", group_name="Extras",
        item_id="o-bufala", item_name="Bufala", price_delta_cents=250,
    )

@pytest.fixture
def no_basil():
    return CartOption(
        group_id="g-extra", group_name="Extras",
        item_id="o-nobasil", item_name="No basil", price_delta_cents=-50,
    )

# ─── Store ─────────────────────────────────────────────────────────────────────
@pytest.fixture
def storage():
    return MemoryCartStorage()

@pytest_asyncio.fixture
async def store(storage):
    """A hydrated store over empty in-memory storage."""
    cart_store = CartStore(storage)
    await cart_store.hydrate()
    yield cart_store
    await cart_store.close()

