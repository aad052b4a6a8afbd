# 📄 File: plant_tracker/modules/garden/domain/models/care_plan.py
# 🧭 Purpose (Layman Explanation):
# Ready-made multi-week care programs (settling in a new plant, nursing a sick one)
# and the record of which program a plant is currently following.
# 🧪 Purpose (Technical Summary):
# Static CarePlanTemplate catalog with availability predicates and dated steps, the
# persisted ActiveCarePlan value and the derived progress report.
# 🔗 Dependencies:
# pydantic, dataclasses, typing
# 🔄 Connected Modules / Calls From:
# CarePlanEngine, Plant model, GardenStore, care plan API endpoints

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from plant_tracker.shared.utils.dates import Timestamp
from .care_task import TaskType

if TYPE_CHECKING:
    from .plant import Plant


class ActiveCarePlan(BaseModel):
    """Plan currently running on a plant and the custom tasks it created."""
    plan_id: str
    name: str
    start_date: Timestamp
    task_ids: List[str] = Field(default_factory=list)


@dataclass(frozen=True)
class CarePlanStep:
    """A task blueprint scheduled `day` days after plan start."""
    day: int
    task_type: TaskType
    custom_name: Optional[str] = None


@dataclass(frozen=True)
class CarePlanTemplate:
    id: str
    name: str
    description: str
    duration_days: int
    steps: Tuple[CarePlanStep, ...]
    is_available: Callable[["Plant"], bool] = field(default=lambda plant: True, compare=False)

    def __post_init__(self):
        for step in self.steps:
            if not 1 <= step.day <= self.duration_days:
                raise ValueError(
                    f"Step day {step.day} outside 1..{self.duration_days} in plan {self.id}"
                )


class PlanTaskProgress(BaseModel):
    task_id: str
    name: str
    due_date: Optional[datetime] = None
    done: bool


class CarePlanProgress(BaseModel):
    plan_id: str
    name: str
    description: str = ""
    start_date: datetime
    duration_days: int
    day_of_plan: int
    percent: float
    tasks: List[PlanTaskProgress] = Field(default_factory=list)


NEW_PLANT_ACCLIMATIZATION = CarePlanTemplate(
    id="NEW_PLANT_ACCLIMATIZATION",
    name="Acclimatization Plan",
    description="A 14-day guide to help your new plant settle into its new home without stress.",
    duration_days=14,
    steps=(
        CarePlanStep(1, TaskType.PEST_CHECK, "Inspect for pests from the store"),
        CarePlanStep(3, TaskType.OTHER, "Check soil moisture (don't water)"),
        CarePlanStep(7, TaskType.ROTATE),
        CarePlanStep(10, TaskType.OTHER, "Check for stress signs (yellow leaves)"),
        CarePlanStep(14, TaskType.CLEAN_LEAVES, "Clean leaves to remove dust"),
    ),
)

RECOVERY_PLAN = CarePlanTemplate(
    id="RECOVERY_PLAN",
    name="Recovery Plan",
    description="An intensive 21-day program to help your plant recover from stress or disease.",
    duration_days=21,
    steps=(
        CarePlanStep(1, TaskType.PEST_CHECK, "Apply initial treatment (if needed)"),
        CarePlanStep(4, TaskType.OTHER, "Check moisture and remove dead leaves"),
        CarePlanStep(8, TaskType.PRUNE, "Prune damaged branches"),
        CarePlanStep(14, TaskType.OTHER, "Feed with diluted fertilizer"),
        CarePlanStep(21, TaskType.OTHER, "Assess progress and signs of improvement"),
    ),
    is_available=lambda plant: not plant.analysis.is_healthy,
)

CARE_PLAN_TEMPLATES: Dict[str, CarePlanTemplate] = {
    template.id: template
    for template in (NEW_PLANT_ACCLIMATIZATION, RECOVERY_PLAN)
}
