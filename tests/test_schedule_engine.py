"""Tests for the scheduling engine: next due dates, alerts and calendar projection.

Covers:
- Non-positive frequencies are never due
- Due-today boundary for alerts
- Alert ordering across plants and task kinds
- Calendar projection window and month grid
"""

from datetime import date, timedelta, timezone

from plant_tracker.modules.garden.domain.models.care_task import custom_task_adapter
from plant_tracker.modules.garden.domain.models.garden import CareTaskKind
from plant_tracker.modules.garden.domain.services.schedule_engine import ScheduleEngine
from plant_tracker.shared.utils.dates import add_days, start_of_day
from tests.conftest import NOW, make_plant

TODAY = start_of_day(NOW)


def _custom_task(task_id: str, frequency: int, last_completed, name: str = "Mist the fern", type_: str = "other"):
    return custom_task_adapter.validate_python({
        "id": task_id,
        "type": type_,
        "custom_name": name,
        "frequency_days": frequency,
        "last_completed": last_completed,
    })


# ============================================================================
# next_due / is_overdue
# ============================================================================


def test_next_due_adds_frequency() -> None:
    assert ScheduleEngine.next_due(NOW, 7) == add_days(NOW, 7)


def test_next_due_none_for_non_positive_frequency() -> None:
    assert ScheduleEngine.next_due(NOW, 0) is None
    assert ScheduleEngine.next_due(NOW, -3) is None


def test_is_overdue_compares_against_start_of_today() -> None:
    assert ScheduleEngine.is_overdue(TODAY, NOW)
    assert ScheduleEngine.is_overdue(TODAY - timedelta(seconds=1), NOW)
    assert not ScheduleEngine.is_overdue(TODAY + timedelta(seconds=1), NOW)
    assert not ScheduleEngine.is_overdue(None, NOW)


# ============================================================================
# compute_alerts
# ============================================================================


def test_zero_frequency_never_alerts_or_projects() -> None:
    """A schedule with F <= 0 is 'not applicable' everywhere."""
    ancient = add_days(NOW, -400)
    plant = make_plant(last_watering=ancient, watering=0, fertilizing=-1)
    plant = plant.model_copy(update={"custom_tasks": [_custom_task("t1", 0, ancient)]})

    assert ScheduleEngine.compute_alerts([plant], NOW) == []
    assert ScheduleEngine.project_tasks([plant]) == {}
    assert ScheduleEngine.count_due_before([plant], add_days(NOW, 1000)) == 0


def test_task_due_exactly_today_alerts() -> None:
    plant = make_plant(last_watering=add_days(TODAY, -7), last_fertilizing=NOW, watering=7)

    alerts = ScheduleEngine.compute_alerts([plant], NOW)

    assert [a.task for a in alerts] == [CareTaskKind.WATERING]
    assert alerts[0].due_date == TODAY
    assert alerts[0].plant_name == "Monstera"


def test_task_due_tomorrow_does_not_alert() -> None:
    plant = make_plant(last_watering=add_days(TODAY, -6), last_fertilizing=NOW, watering=7)
    assert ScheduleEngine.compute_alerts([plant], NOW) == []


def test_alerts_sorted_oldest_first_across_plants() -> None:
    fern = make_plant("fern", last_watering=add_days(NOW, -10), last_fertilizing=NOW, watering=2, popular_name="Fern")
    cactus = make_plant("cactus", last_watering=add_days(NOW, -40), last_fertilizing=NOW, watering=14,
                        popular_name="Cactus")
    fern = fern.model_copy(update={"custom_tasks": [_custom_task("mist", 1, add_days(NOW, -3))]})

    alerts = ScheduleEngine.compute_alerts([fern, cactus], NOW)
    due_dates = [a.due_date for a in alerts]

    assert due_dates == sorted(due_dates)
    assert [(a.plant_id, a.task) for a in alerts] == [
        ("cactus", CareTaskKind.WATERING),  # due 26 days ago
        ("fern", CareTaskKind.WATERING),    # due 8 days ago
        ("fern", CareTaskKind.CUSTOM),      # due 2 days ago
    ]
    assert alerts[2].custom_task_id == "mist"
    assert alerts[2].custom_task_name == "Mist the fern"


def test_alert_ties_keep_discovery_order() -> None:
    stamp = add_days(NOW, -10)
    plant = make_plant(last_watering=stamp, last_fertilizing=stamp, watering=5, fertilizing=5)

    alerts = ScheduleEngine.compute_alerts([plant], NOW)

    assert [a.task for a in alerts] == [CareTaskKind.WATERING, CareTaskKind.FERTILIZING]


def test_predefined_task_uses_catalog_label() -> None:
    task = _custom_task("r1", 3, add_days(NOW, -5), name=None, type_="rotate")
    plant = make_plant(last_watering=NOW).model_copy(update={"custom_tasks": [task]})

    alerts = ScheduleEngine.compute_alerts([plant], NOW)

    assert alerts[0].custom_task_name == "Rotate Pot"


# ============================================================================
# project_tasks / month_grid
# ============================================================================


def test_projection_places_each_cycle_on_its_day() -> None:
    plant = make_plant(last_watering=NOW, watering=7, fertilizing=0)

    projection = ScheduleEngine.project_tasks([plant], past_cycles=2, future_cycles=3, tz=timezone.utc)

    assert sorted(projection) == [
        date(2024, 6, 1),
        date(2024, 6, 8),
        date(2024, 6, 15),
        date(2024, 6, 22),
        date(2024, 6, 29),
    ]
    assert projection[date(2024, 6, 22)][0].due_date == add_days(NOW, 7)


def test_projection_window_is_asymmetric() -> None:
    """range(-past, future): the last servicing is included, `future` cycles are not."""
    plant = make_plant(last_watering=NOW, watering=1, fertilizing=0)

    projection = ScheduleEngine.project_tasks([plant], past_cycles=60, future_cycles=60)

    assert len(projection) == 120
    assert min(projection) == (NOW - timedelta(days=60)).date()
    assert max(projection) == (NOW + timedelta(days=59)).date()


def test_projection_skips_cycles_past_the_calendar_end() -> None:
    """Huge frequencies keep the occurrences that fit and drop the rest."""
    task = _custom_task("far", 5_000_000, NOW)
    plant = make_plant(last_watering=NOW, watering=0, fertilizing=0).model_copy(update={"custom_tasks": [task]})

    projection = ScheduleEngine.project_tasks([plant], tz=timezone.utc)

    assert list(projection) == [NOW.date()]
    assert ScheduleEngine.next_due(NOW, 5_000_000) is None
    assert ScheduleEngine.compute_alerts([plant], NOW) == []


def test_tasks_on_returns_empty_list_for_free_day() -> None:
    plant = make_plant(last_watering=NOW, watering=7, fertilizing=0)
    projection = ScheduleEngine.project_tasks([plant], past_cycles=1, future_cycles=1)

    assert ScheduleEngine.tasks_on(projection, date(2024, 6, 16)) == []
    assert len(ScheduleEngine.tasks_on(projection, date(2024, 6, 15))) == 1


def test_month_grid_starts_on_sunday_and_flags_month() -> None:
    grid = ScheduleEngine.month_grid(2024, 6)

    assert len(grid) % 7 == 0
    assert grid[0] == (date(2024, 5, 26), False)
    assert grid[0][0].weekday() == 6  # Sunday
    assert (date(2024, 6, 1), True) in grid
    assert sum(1 for _, in_month in grid if in_month) == 30


def test_count_due_before_counts_schedules_in_window() -> None:
    plant = make_plant(last_watering=NOW, last_fertilizing=add_days(NOW, -25), watering=3, fertilizing=30)

    assert ScheduleEngine.count_due_before([plant], add_days(NOW, 7)) == 2
    assert ScheduleEngine.count_due_before([plant], add_days(NOW, 2)) == 0
