"""
Bookable time slots and date rules.

The service runs weekdays only, in fixed half-hour slots between the
configured first and last slot (08:30 to 16:00 by default).
"""

from datetime import date, datetime, timedelta
from typing import Optional

from src.config import settings

SATURDAY = 5
SUNDAY = 6


def enumerate_slots(
    first: Optional[str] = None,
    last: Optional[str] = None,
    step_minutes: Optional[int] = None,
) -> list[str]:
    """Return every slot from ``first`` to ``last`` inclusive as ``HH:MM``."""
    cfg = settings.schedule
    start = datetime.strptime(first or cfg.first_slot, "%H:%M")
    end = datetime.strptime(last or cfg.last_slot, "%H:%M")
    step = timedelta(minutes=step_minutes or cfg.slot_step_minutes)

    slots = []
    current = start
    while current <= end:
        slots.append(current.strftime("%H:%M"))
        current += step
    return slots


def is_bookable_date(value: date) -> bool:
    """False on Saturdays and Sundays."""
    return value.weekday() not in (SATURDAY, SUNDAY)


def earliest_selectable_date(today: Optional[date] = None) -> date:
    """Minimum date the picker offers."""
    return today or date.today()


def is_selectable_date(value: date, today: Optional[date] = None) -> bool:
    """Weekday and not earlier than today."""
    return is_bookable_date(value) and value >= earliest_selectable_date(today)


def next_bookable_date(today: Optional[date] = None) -> date:
    """First weekday on or after ``today``."""
    candidate = earliest_selectable_date(today)
    while not is_bookable_date(candidate):
        candidate += timedelta(days=1)
    return candidate
