# 📄 File: plant_tracker/modules/garden/domain/services/care_plan_engine.py
# 🧭 Purpose (Layman Explanation):
# Starts a guided care program on a plant by adding its dated chores, shows how far
# along the program is, and removes exactly those chores when the program is cancelled.
# 🧪 Purpose (Technical Summary):
# Per-plant NoPlan/PlanActive state machine over static CarePlanTemplates. Plan steps are
# materialised as custom tasks with a backdated last_completed so the generic next-due
# formula lands each step on start + day.
# 🔗 Dependencies:
# garden domain models, dates utilities, ScheduleEngine, shared exceptions
# 🔄 Connected Modules / Calls From:
# GardenStore (activate/cancel), care plan API endpoints (available, progress)

from datetime import datetime
from typing import Dict, List, Optional

from plant_tracker.shared.core.exceptions import CarePlanError
from plant_tracker.shared.utils.dates import add_days, days_between
from ..models.care_plan import (
    CARE_PLAN_TEMPLATES,
    ActiveCarePlan,
    CarePlanProgress,
    CarePlanTemplate,
    PlanTaskProgress,
)
from ..models.care_task import CustomCareTask, custom_task_adapter
from ..models.plant import Plant
from .schedule_engine import ScheduleEngine


class CarePlanEngine:
    """Activation, cancellation and progress of care plans. Static and side-effect free."""

    templates: Dict[str, CarePlanTemplate] = CARE_PLAN_TEMPLATES

    @classmethod
    def get_template(cls, template_id: str) -> Optional[CarePlanTemplate]:
        return cls.templates.get(template_id)

    @classmethod
    def available_templates(cls, plant: Plant) -> List[CarePlanTemplate]:
        """Templates that may be offered for this plant right now."""
        return [t for t in cls.templates.values() if t.is_available(plant)]

    @classmethod
    def activate(cls, plant: Plant, template_id: str, now: datetime) -> Plant:
        """
        Start a plan on a plant.

        Raises:
            CarePlanError: unknown template, template not available for
                the plant, or a plan already running
        """
        template = cls.get_template(template_id)
        if template is None:
            raise CarePlanError(f"Unknown care plan: {template_id}", plan_id=template_id, plant_id=plant.id)

        if plant.active_care_plan is not None:
            raise CarePlanError(
                f"Plant already follows {plant.active_care_plan.name}",
                plan_id=template_id,
                plant_id=plant.id,
                details={"active_plan_id": plant.active_care_plan.plan_id},
            )

        if not template.is_available(plant):
            raise CarePlanError(
                f"{template.name} is not available for this plant",
                plan_id=template_id,
                plant_id=plant.id,
            )

        stamp = int(now.timestamp() * 1000)
        new_tasks: List[CustomCareTask] = []

        for step in template.steps:
            new_tasks.append(custom_task_adapter.validate_python({
                "id": f"{template.id}-{step.day}-{stamp}",
                "type": step.task_type.value,
                "custom_name": step.custom_name,
                "frequency_days": template.duration_days,
                # next_due = last_completed + duration = now + day
                "last_completed": add_days(now, step.day - template.duration_days),
            }))

        active_plan = ActiveCarePlan(
            plan_id=template.id,
            name=template.name,
            start_date=now,
            task_ids=[task.id for task in new_tasks],
        )

        return plant.model_copy(update={
            "custom_tasks": [*plant.custom_tasks, *new_tasks],
            "active_care_plan": active_plan,
        })

    @staticmethod
    def cancel(plant: Plant) -> Plant:
        """Remove the plan's own tasks and clear the plan. No plan: unchanged."""
        if plant.active_care_plan is None:
            return plant

        owned = set(plant.active_care_plan.task_ids)
        return plant.model_copy(update={
            "custom_tasks": [t for t in plant.custom_tasks if t.id not in owned],
            "active_care_plan": None,
        })

    @classmethod
    def progress(cls, plant: Plant, now: datetime) -> Optional[CarePlanProgress]:
        active = plant.active_care_plan
        if active is None:
            return None

        template = cls.get_template(active.plan_id)
        if template is None:
            return None

        day_of_plan = days_between(active.start_date, now) + 1
        percent = min(100.0, max(0.0, day_of_plan / template.duration_days * 100))

        owned = set(active.task_ids)
        tasks = []
        for task in plant.custom_tasks:
            if task.id not in owned:
                continue
            due = ScheduleEngine.next_due(task.last_completed, task.frequency_days)
            tasks.append(PlanTaskProgress(
                task_id=task.id,
                name=task.display_name,
                due_date=due,
                done=due is not None and due < now,
            ))

        return CarePlanProgress(
            plan_id=active.plan_id,
            name=active.name,
            description=template.description,
            start_date=active.start_date,
            duration_days=template.duration_days,
            day_of_plan=day_of_plan,
            percent=percent,
            tasks=tasks,
        )
