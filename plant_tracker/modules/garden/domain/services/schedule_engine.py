# 📄 File: plant_tracker/modules/garden/domain/services/schedule_engine.py
# 🧭 Purpose (Layman Explanation):
# Works out when each plant next needs water, fertilizer or one of its extra chores,
# which of those are late, and what the care calendar looks like month by month.
# 🧪 Purpose (Technical Summary):
# Stateless scheduling engine: next-due computation, overdue test against the start of
# today, the sorted alert aggregator and the cycle-count calendar projector.
# 🔗 Dependencies:
# dates utilities, garden domain models, calendar (standard library)
# 🔄 Connected Modules / Calls From:
# GardenStore (alerts, calendar, weekly stats), CarePlanEngine, API alerts/calendar endpoints

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

from plant_tracker.shared.utils.dates import add_days, start_of_day
from ..models.garden import CareAlert, CareTaskKind, TaskOccurrence
from ..models.plant import Plant

DEFAULT_PAST_CYCLES = 60
DEFAULT_FUTURE_CYCLES = 60
MAX_FREQUENCY_DAYS = 365

TaskProjection = Dict[date, List[TaskOccurrence]]


@dataclass(frozen=True)
class ScheduledTask:
    """One recurring schedule of a plant, built-in or custom."""
    kind: CareTaskKind
    frequency_days: int
    last_serviced: datetime
    custom_task_id: Optional[str] = None
    custom_task_name: Optional[str] = None


class ScheduleEngine:
    """
    Pure scheduling logic over plant values.

    Every method is static and takes "now" explicitly. Nothing here
    mutates the plants it is given.
    """

    @staticmethod
    def next_due(last_serviced: datetime, frequency_days: int) -> Optional[datetime]:
        """last_serviced + F days, or None when F <= 0 or the date is past the calendar's end."""
        if frequency_days <= 0:
            return None
        try:
            return add_days(last_serviced, frequency_days)
        except OverflowError:
            return None

    @staticmethod
    def is_overdue(next_due: Optional[datetime], now: datetime) -> bool:
        """Due today or earlier counts as overdue."""
        if next_due is None:
            return False
        return next_due <= start_of_day(now)

    @staticmethod
    def scheduled_tasks(plant: Plant) -> List[ScheduledTask]:
        """All schedules of a plant that can ever come due, in discovery order."""
        schedule = plant.analysis.care_schedule
        tasks: List[ScheduledTask] = []

        if schedule.watering_frequency > 0:
            tasks.append(ScheduledTask(
                kind=CareTaskKind.WATERING,
                frequency_days=schedule.watering_frequency,
                last_serviced=plant.last_care.watering,
            ))
        if schedule.fertilizing_frequency > 0:
            tasks.append(ScheduledTask(
                kind=CareTaskKind.FERTILIZING,
                frequency_days=schedule.fertilizing_frequency,
                last_serviced=plant.last_care.fertilizing,
            ))
        for custom_task in plant.custom_tasks:
            if custom_task.frequency_days > 0:
                tasks.append(ScheduledTask(
                    kind=CareTaskKind.CUSTOM,
                    frequency_days=custom_task.frequency_days,
                    last_serviced=custom_task.last_completed,
                    custom_task_id=custom_task.id,
                    custom_task_name=custom_task.display_name,
                ))

        return tasks

    @staticmethod
    def compute_alerts(plants: Iterable[Plant], now: datetime) -> List[CareAlert]:
        """
        Overdue tasks across all plants, oldest first.

        Ties keep discovery order (plant order, then watering, fertilizing,
        custom tasks).
        """
        alerts: List[CareAlert] = []

        for plant in plants:
            for task in ScheduleEngine.scheduled_tasks(plant):
                due = ScheduleEngine.next_due(task.last_serviced, task.frequency_days)
                if ScheduleEngine.is_overdue(due, now):
                    alerts.append(CareAlert(
                        plant_id=plant.id,
                        plant_name=plant.name,
                        plant_image=plant.image,
                        task=task.kind,
                        due_date=due,
                        custom_task_id=task.custom_task_id,
                        custom_task_name=task.custom_task_name,
                    ))

        # sorted() is stable
        return sorted(alerts, key=lambda alert: alert.due_date)

    @staticmethod
    def project_tasks(
        plants: Iterable[Plant],
        past_cycles: int = DEFAULT_PAST_CYCLES,
        future_cycles: int = DEFAULT_FUTURE_CYCLES,
        tz: Optional[tzinfo] = None,
    ) -> TaskProjection:
        """
        Expand recurring tasks into a per-day index.

        Occurrences sit at last_serviced + F * i for i in
        range(-past_cycles, future_cycles); i = 0 is the last servicing
        itself. Keys are calendar dates in `tz` (or the timestamp's own zone).
        """
        projection: TaskProjection = defaultdict(list)

        for plant in plants:
            for task in ScheduleEngine.scheduled_tasks(plant):
                for cycle in range(-past_cycles, future_cycles):
                    try:
                        occurrence = add_days(task.last_serviced, task.frequency_days * cycle)
                        local = occurrence.astimezone(tz) if tz else occurrence
                    except OverflowError:
                        # outside datetime.min..datetime.max
                        continue
                    projection[local.date()].append(TaskOccurrence(
                        plant_id=plant.id,
                        plant_name=plant.name,
                        task=task.kind,
                        due_date=occurrence,
                        custom_task_id=task.custom_task_id,
                        custom_task_name=task.custom_task_name,
                    ))

        return dict(projection)

    @staticmethod
    def tasks_on(projection: TaskProjection, day: date) -> List[TaskOccurrence]:
        return list(projection.get(day, []))

    @staticmethod
    def month_grid(year: int, month: int) -> List[Tuple[date, bool]]:
        """Sunday-first weeks covering the month, flagged with is_current_month."""
        weeks = calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month)
        return [(day, day.month == month) for week in weeks for day in week]

    @staticmethod
    def count_due_before(plants: Iterable[Plant], deadline: datetime) -> int:
        """Number of schedules whose next due date falls strictly before deadline."""
        count = 0
        for plant in plants:
            for task in ScheduleEngine.scheduled_tasks(plant):
                due = ScheduleEngine.next_due(task.last_serviced, task.frequency_days)
                if due is not None and due < deadline:
                    count += 1
        return count
