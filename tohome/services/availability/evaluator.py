"""
Restaurant Availability Evaluator

Decides whether a restaurant is open at a given instant from its weekly
recurring hours and an optional override for the current date.

Rules:
    - Evaluation happens in one fixed civil timezone (settings.timezone)
    - An override for today outranks recurring hours; closed always wins
    - A slot with close_time <= open_time crosses midnight, so yesterday's
      overnight slot can still be open early today
    - Slots flagged is_closed are ignored

Usage:
    from tohome.services.availability import is_open_now

    if is_open_now(schedule.hours, schedule.override):
        ...

Author: ToHome Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional, Sequence

from tohome.core.config import get_settings
from tohome.core.primitives import day_of_week
from tohome.schemas import RestaurantHours, RestaurantOverride, RestaurantSchedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CivilInstant:
    """
    An instant resolved to the operator's civil timezone.

    Attributes:
        day_of_week: 0=Sunday..6=Saturday
        time: Time of day as "HH:MM:SS"
        date: Calendar date
    """
    day_of_week: int
    time: str
    date: date


def resolve_civil_now(
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> CivilInstant:
    """
    Resolve an instant to day of week, time of day and date.

    Aware datetimes are converted to the civil timezone. Naive datetimes are
    taken to already be civil time in that timezone.

    Args:
        now: Instant to resolve (default: current time)
        tz: Civil timezone (default: settings.timezone)
    """
    zone = tz or get_settings().tzinfo
    if now is None:
        local = datetime.now(zone)
    elif now.tzinfo is None:
        local = now.replace(tzinfo=zone)
    else:
        local = now.astimezone(zone)

    return CivilInstant(
        day_of_week=day_of_week(local.date()),
        time=local.strftime("%H:%M:%S"),
        date=local.date(),
    )


def is_time_in_slot(current: str, open_time: str, close_time: str) -> bool:
    """
    Check whether a time of day falls inside a slot.

    Same-day slots are half-open: open <= t < close. A slot whose close is
    not after its open wraps around midnight: t >= open or t < close.
    All arguments are normalized "HH:MM:SS" strings.
    """
    if close_time > open_time:
        return open_time <= current < close_time
    return current >= open_time or current < close_time


def is_open_now(
    hours: Sequence[RestaurantHours],
    override: Optional[RestaurantOverride] = None,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> bool:
    """
    Determine whether a restaurant is open at an instant.

    Args:
        hours: Weekly recurring slots
        override: Optional override; only applies when its date is today
        now: Instant to evaluate (default: current time)
        tz: Civil timezone (default: settings.timezone)

    Returns:
        bool: True if open
    """
    if not hours:
        return False

    instant = resolve_civil_now(now, tz)

    if override is not None and override.date == instant.date:
        if override.is_closed:
            return False
        if override.has_times:
            return is_time_in_slot(instant.time, override.open_time, override.close_time)
        # Neither closed nor timed: recurring hours still apply.

    for slot in hours:
        if slot.day_of_week != instant.day_of_week or slot.is_closed:
            continue
        if is_time_in_slot(instant.time, slot.open_time, slot.close_time):
            return True

    yesterday = (instant.day_of_week + 6) % 7
    for slot in hours:
        if slot.day_of_week != yesterday or slot.is_closed:
            continue
        if slot.crosses_midnight and instant.time < slot.close_time:
            return True

    return False


def is_restaurant_open(
    schedule: RestaurantSchedule,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> bool:
    """
    Open/closed state of a restaurant including its admin switches.

    A force-closed or inactive restaurant is closed regardless of hours.
    """
    if not schedule.is_active:
        logger.debug(f"Restaurant {schedule.restaurant_id} is inactive")
        return False
    if schedule.force_closed:
        logger.debug(
            f"Restaurant {schedule.restaurant_id} is force-closed "
            f"({schedule.force_closed_note or 'no note'})"
        )
        return False
    return is_open_now(schedule.hours, schedule.override, now, tz)
