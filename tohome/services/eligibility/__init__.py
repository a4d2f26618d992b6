"""
Eligibility Service

Checkout gate combining cart totals, opening state and minimum order.

Usage:
    from tohome.services.eligibility import evaluate_checkout

    verdict = evaluate_checkout(store, schedule)
    if not verdict.allowed:
        show(describe(verdict, schedule.min_order_cents))

Author: ToHome Team
Version: 1.0.0
"""

from tohome.services.eligibility.gate import (
    EligibilityReason,
    EligibilityVerdict,
    describe,
    evaluate,
    evaluate_checkout,
)

__all__ = [
    "EligibilityReason",
    "EligibilityVerdict",
    "describe",
    "evaluate",
    "evaluate_checkout",
]
