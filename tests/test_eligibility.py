"""
Eligibility Gate Tests
"""
import pytest

from tohome.schemas import RestaurantSchedule
from tohome.services.cart import CartTotals
from tohome.services.eligibility import (
    EligibilityReason,
    EligibilityVerdict,
    describe,
    evaluate,
    evaluate_checkout,
)
from tests.helpers import rome

FRIDAY_LUNCH_AND_DINNER = [
    {"day_of_week": 5, "open_time": "12:00", "close_time": "14:30"},
    {"day_of_week": 5, "open_time": "19:00", "close_time": "02:00"},
]


def test_open_restaurant_with_enough_items_is_allowed():
    verdict = evaluate(CartTotals(subtotal_cents=1500, total_items=2), True, 1000)
    assert verdict.allowed is True
    assert verdict.reasons == frozenset()


def test_subtotal_equal_to_minimum_is_allowed():
    assert evaluate(CartTotals(1000, 1), True, 1000).allowed is True


def test_reasons_are_cumulative():
    verdict = evaluate(CartTotals(subtotal_cents=500, total_items=1), False, 1000)
    assert verdict.allowed is False
    assert verdict.reasons == {
        EligibilityReason.RESTAURANT_CLOSED,
        EligibilityReason.BELOW_MIN_ORDER,
    }


def test_empty_cart_reports_every_reason():
    verdict = evaluate(CartTotals(), False, 1000)
    assert verdict.reasons == set(EligibilityReason)


def test_empty_cart_with_zero_minimum():
    verdict = evaluate(CartTotals(), True, 0)
    assert verdict.reasons == {EligibilityReason.EMPTY_CART}


@pytest.mark.parametrize("is_open, expected", [(True, set()), (False, {"RESTAURANT_CLOSED"})])
def test_closed_restaurant_alone(is_open, expected):
    verdict = evaluate(CartTotals(2000, 3), is_open, 1000)
    assert {reason.value for reason in verdict.reasons} == expected


def test_minimum_must_be_integer_cents():
    with pytest.raises(TypeError):
        evaluate(CartTotals(2000, 3), True, 10.0)


def test_verdict_serialization_is_ordered():
    verdict = EligibilityVerdict(
        frozenset({EligibilityReason.BELOW_MIN_ORDER, EligibilityReason.EMPTY_CART})
    )
    assert verdict.to_dict() == {
        "allowed": False,
        "reasons": ["EMPTY_CART", "BELOW_MIN_ORDER"],
    }


def test_describe_formats_minimum():
    verdict = evaluate(CartTotals(500, 1), False, 1250)
    assert describe(verdict, 1250) == [
        "The restaurant is currently closed",
        "Minimum order is €12.50",
    ]


def test_describe_allowed_verdict_is_empty():
    assert describe(EligibilityVerdict(), 0) == []


# ─── evaluate_checkout ─────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_checkout_closed_and_below_minimum(store, pizzeria, margherita):
    await store.add_item(pizzeria, margherita, [], 1)
    schedule = RestaurantSchedule.model_validate({
        "restaurant_id": "r-1", "min_order_cents": 1000, "hours": FRIDAY_LUNCH_AND_DINNER,
    })

    verdict = evaluate_checkout(store, schedule, now=rome(2026, 10, 16, 16, 0))

    assert verdict.reasons == {
        EligibilityReason.RESTAURANT_CLOSED,
        EligibilityReason.BELOW_MIN_ORDER,
    }


@pytest.mark.asyncio
async def test_checkout_allowed_during_overnight_slot(store, pizzeria, margherita):
    await store.add_item(pizzeria, margherita, [], 2)
    schedule = RestaurantSchedule.model_validate({
        "restaurant_id": "r-1", "min_order_cents": 1000, "hours": FRIDAY_LUNCH_AND_DINNER,
    })

    verdict = evaluate_checkout(store, schedule, now=rome(2026, 10, 17, 1, 30))

    assert verdict.allowed is True


@pytest.mark.asyncio
async def test_checkout_blocked_by_kill_switch(store, pizzeria, margherita):
    await store.add_item(pizzeria, margherita, [], 2)
    schedule = RestaurantSchedule.model_validate({
        "restaurant_id": "r-1", "hours": FRIDAY_LUNCH_AND_DINNER, "force_closed": True,
    })

    verdict = evaluate_checkout(store, schedule, now=rome(2026, 10, 16, 13, 0))

    assert verdict.reasons == {EligibilityReason.RESTAURANT_CLOSED}


@pytest.mark.asyncio
async def test_checkout_on_empty_store(store):
    schedule = RestaurantSchedule.model_validate({
        "restaurant_id": "r-1", "hours": FRIDAY_LUNCH_AND_DINNER,
    })
    verdict = evaluate_checkout(store, schedule, now=rome(2026, 10, 16, 13, 0))
    assert verdict.reasons == {EligibilityReason.EMPTY_CART}
