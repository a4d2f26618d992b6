"""
Availability Service

Pure open/closed evaluation of a restaurant's schedule.

Usage:
    from tohome.services.availability import is_restaurant_open

    open_now = is_restaurant_open(schedule)

Author: ToHome Team
Version: 1.0.0
"""

from tohome.services.availability.evaluator import (
    CivilInstant,
    is_open_now,
    is_restaurant_open,
    is_time_in_slot,
    resolve_civil_now,
)

__all__ = [
    "CivilInstant",
    "is_open_now",
    "is_restaurant_open",
    "is_time_in_slot",
    "resolve_civil_now",
]
