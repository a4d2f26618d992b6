"""
Catalog Option Resolution Tests
"""
import pytest

from tohome.core.exceptions import OptionSelectionError
from tohome.schemas import CatalogProduct
from tohome.services.catalog import product_ref, resolve_options


@pytest.fixture
def pizza():
    return CatalogProduct.model_validate({
        "id": "p-margherita",
        "name": "Pizza Margherita",
        "base_price_cents": 700,
        "option_groups": [
            {
                "id": "g-extra", "name": "Extras", "min_select": 0, "max_select": 2,
                "sort_order": 2,
                "items": [
                    {"id": "o-bufala", "name": "Bufala", "price_delta_cents": 250},
                    {"id": "o-nduja", "name": "'Nduja", "price_delta_cents": 150,
                     "sort_order": 1},
                    {"id": "o-truffle", "name": "Truffle", "price_delta_cents": 900,
                     "is_active": False},
                ],
            },
            {
                "id": "g-size", "name": "Size", "min_select": 1, "max_select": 1,
                "sort_order": 1,
                "items": [
                    {"id": "o-normal", "name": "Normal"},
                    {"id": "o-maxi", "name": "Maxi", "price_delta_cents": 300},
                ],
            },
        ],
    })


def test_resolves_selection_in_catalog_order(pizza):
    options = resolve_options(pizza, ["o-nduja", "o-maxi", "o-bufala"])
    assert [option.item_id for option in options] == ["o-maxi", "o-bufala", "o-nduja"]
    assert options[0].group_name == "Size"
    assert options[0].price_delta_cents == 300


def test_duplicate_ids_count_once(pizza):
    options = resolve_options(pizza, ["o-normal", "o-bufala", "o-bufala"])
    assert [option.item_id for option in options] == ["o-normal", "o-bufala"]


@pytest.mark.parametrize(
    "selection, code",
    [
        ([], "OPTION_MIN_NOT_MET"),
        (["o-normal", "o-maxi"], "OPTION_MAX_EXCEEDED"),
        (["o-normal", "o-bufala", "o-nduja", "o-truffle"], "OPTION_NOT_ACTIVE"),
        (["o-normal", "o-ghost"], "OPTION_NOT_FOUND"),
    ],
)
def test_invalid_selection(pizza, selection, code):
    with pytest.raises(OptionSelectionError) as exc_info:
        resolve_options(pizza, selection)
    assert exc_info.value.code == code
    assert exc_info.value.to_dict()["error"] == code


def test_inactive_product(pizza):
    product = pizza.model_copy(update={"is_active": False})
    with pytest.raises(OptionSelectionError) as exc_info:
        resolve_options(product, ["o-normal"])
    assert exc_info.value.code == "PRODUCT_NOT_ACTIVE"


def test_group_bounds_are_validated():
    with pytest.raises(ValueError):
        CatalogProduct.model_validate({
            "id": "p", "name": "P", "base_price_cents": 100,
            "option_groups": [{"id": "g", "name": "G", "min_select": 2, "max_select": 1}],
        })


def test_product_ref(pizza):
    ref = product_ref(pizza)
    assert (ref.id, ref.name, ref.base_price_cents) == ("p-margherita", "Pizza Margherita", 700)


@pytest.mark.asyncio
async def test_resolved_options_feed_the_cart(store, pizzeria, pizza):
    await store.add_item(pizzeria, product_ref(pizza), resolve_options(pizza, ["o-maxi", "o-bufala"]), 1)
    await store.add_item(pizzeria, product_ref(pizza), resolve_options(pizza, ["o-bufala", "o-maxi"]), 1)

    item = store.cart.items[0]
    assert item.qty == 2
    assert item.item_total_cents == (700 + 300 + 250) * 2
