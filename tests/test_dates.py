"""Tests for day arithmetic and due-date phrasing.

Covers:
- add_days truncation and time-of-day preservation
- days_between ceiling semantics
- format_due_date boundary classes (today, tomorrow, later, overdue)
- calendar days read in today's zone, across zones and DST
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from plant_tracker.shared.utils.dates import (
    DueStatus,
    add_days,
    classify_due_date,
    days_between,
    ensure_aware,
    format_due_date,
    start_of_day,
)
from tests.conftest import NOW


# ============================================================================
# add_days / days_between
# ============================================================================


def test_add_days_keeps_time_of_day() -> None:
    result = add_days(NOW, 3)
    assert result == datetime(2024, 6, 18, 10, 30, tzinfo=timezone.utc)


def test_add_days_negative_moves_backwards() -> None:
    assert add_days(NOW, -7) == datetime(2024, 6, 8, 10, 30, tzinfo=timezone.utc)


def test_add_days_truncates_fractional_days() -> None:
    assert add_days(NOW, 1.9) == add_days(NOW, 1)
    assert add_days(NOW, -1.9) == add_days(NOW, -1)


def test_days_between_counts_partial_day_as_whole() -> None:
    assert days_between(NOW, NOW + timedelta(hours=1)) == 1
    assert days_between(NOW, NOW + timedelta(days=2)) == 2
    assert days_between(NOW, NOW) == 0


def test_days_between_is_signed() -> None:
    assert days_between(NOW, NOW - timedelta(days=3)) == -3


def test_start_of_day_truncates_to_midnight() -> None:
    assert start_of_day(NOW) == datetime(2024, 6, 15, tzinfo=timezone.utc)


def test_ensure_aware_assumes_utc_for_naive_values() -> None:
    assert ensure_aware(datetime(2024, 1, 1)).tzinfo is timezone.utc
    assert ensure_aware(NOW) is NOW


# ============================================================================
# format_due_date boundary classes
# ============================================================================


@pytest.mark.parametrize(
    ("offset", "status", "text"),
    [
        (0, DueStatus.DUE_TODAY, "due today"),
        (1, DueStatus.DUE_TOMORROW, "due tomorrow"),
        (5, DueStatus.DUE_LATER, "due in 5 days"),
        (-3, DueStatus.OVERDUE, "overdue by 3 day(s)"),
    ],
)
def test_due_date_boundary_classes(offset, status, text) -> None:
    due = add_days(NOW, offset)
    assert classify_due_date(due, NOW) == (status, offset)
    assert format_due_date(due, NOW) == text


def test_due_date_ignores_time_of_day() -> None:
    """Late tonight and early this morning are both 'today'."""
    today_late = NOW.replace(hour=23, minute=59)
    today_early = NOW.replace(hour=0, minute=1)
    assert format_due_date(today_late, NOW) == "due today"
    assert format_due_date(today_early, NOW) == "due today"
    assert format_due_date(add_days(today_early, 1), NOW.replace(hour=23)) == "due tomorrow"


def test_due_date_uses_todays_zone_for_both_sides() -> None:
    """22:00 local on the 19th is still today, even when stored in UTC."""
    today = datetime(2026, 10, 19, 10, 0, tzinfo=ZoneInfo("America/Sao_Paulo"))
    due = datetime(2026, 10, 20, 1, 0, tzinfo=timezone.utc)
    assert classify_due_date(due, today) == (DueStatus.DUE_TODAY, 0)
    assert format_due_date(due, today) == "due today"


def test_due_date_across_daylight_saving_change() -> None:
    """A fixed pre-DST offset must not stretch one calendar day into two."""
    today = datetime(2027, 3, 15, 9, 0, tzinfo=ZoneInfo("America/New_York"))
    due = datetime(2027, 3, 16, 9, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert format_due_date(due, today) == "due tomorrow"
