"""
Test helpers shared across modules.
"""
from datetime import datetime
from zoneinfo import ZoneInfo

ROME = ZoneInfo("Europe/Rome")


def rome(year: int, month: int, day: int, hour: int, minute: int = 0, second: int = 0) -> datetime:
    """Aware datetime in the operator timezone."""
    return datetime(year, month, day, hour, minute, second, tzinfo=ROME)


def always(answer: bool):
    """Build a confirm_switch callback that records its calls."""
    calls = []

    async def confirm(current, restaurant):
        calls.append((current, restaurant))
        return answer

    confirm.calls = calls
    return confirm
