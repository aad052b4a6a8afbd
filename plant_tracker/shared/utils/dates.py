# 📄 File: plant_tracker/shared/utils/dates.py

# 🧭 Purpose (Layman Explanation):
# Small calendar helpers that answer questions like "what day is a week after this?"
# and "is watering due today, tomorrow or already late?".

# 🧪 Purpose (Technical Summary):
# Pure day arithmetic on timezone-aware datetimes: calendar-day offsets, ceil-based
# signed day differences, start-of-day truncation and due-date classification/phrasing.

# 🔗 Dependencies:
# - datetime, math, zoneinfo (standard library)
# - pydantic (Timestamp annotated type used by the domain models)

# 🔄 Connected Modules / Calls From:
# ScheduleEngine, CarePlanEngine, GardenStore (weekly stats), API presentation layer

import math
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Tuple
from zoneinfo import ZoneInfo

from pydantic import AfterValidator

SECONDS_PER_DAY = 24 * 60 * 60


class DueStatus(str, Enum):
    """How a due date relates to today."""
    DUE_TODAY = "due_today"
    DUE_TOMORROW = "due_tomorrow"
    DUE_LATER = "due_later"
    OVERDUE = "overdue"


def now_in(tz_name: str = "UTC") -> datetime:
    """Current time as an aware datetime in the given IANA zone."""
    return datetime.now(timezone.utc).astimezone(ZoneInfo(tz_name))


def ensure_aware(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


Timestamp = Annotated[datetime, AfterValidator(ensure_aware)]


def add_days(value: datetime, days: float) -> datetime:
    """
    Return a new datetime `days` calendar days after `value`.

    Negative values move backwards. Fractional values are truncated toward
    zero, so add_days(d, 1.9) == add_days(d, 1). The wall-clock time of day
    is preserved.
    """
    return value + timedelta(days=int(days))


def days_between(start: datetime, end: datetime) -> int:
    """
    Signed number of days from `start` to `end`.

    Any partial day counts as a whole one (ceiling of the raw quotient).
    """
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def start_of_day(value: datetime) -> datetime:
    """Midnight of the calendar day `value` falls on, same tzinfo."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def classify_due_date(due: datetime, today: datetime) -> Tuple[DueStatus, int]:
    """
    Classify `due` relative to `today`, ignoring the time of day on both sides.

    Both sides are read as calendar days in `today`'s zone, so a UTC
    timestamp late in the evening still counts for the local day it falls on.

    Returns:
        (status, offset) where offset is the signed day difference.
    """
    due_day = due.astimezone(today.tzinfo).date()
    offset = (due_day - today.date()).days

    if offset == 0:
        return DueStatus.DUE_TODAY, offset
    if offset < 0:
        return DueStatus.OVERDUE, offset
    if offset == 1:
        return DueStatus.DUE_TOMORROW, offset
    return DueStatus.DUE_LATER, offset


def format_due_date(due: datetime, today: datetime) -> str:
    """Human phrasing for a due date: 'due today', 'due in 3 days', 'overdue by 2 day(s)'."""
    status, offset = classify_due_date(due, today)

    if status is DueStatus.DUE_TODAY:
        return "due today"
    if status is DueStatus.OVERDUE:
        return f"overdue by {-offset} day(s)"
    if status is DueStatus.DUE_TOMORROW:
        return "due tomorrow"
    return f"due in {offset} days"
