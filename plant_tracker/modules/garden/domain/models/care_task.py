# 📄 File: plant_tracker/modules/garden/domain/models/care_task.py
# 🧭 Purpose (Layman Explanation):
# Describes the extra chores a plant can have besides watering and feeding, like
# pruning, misting or a free-form task the user names themselves.
# 🧪 Purpose (Technical Summary):
# Tagged union over the task type: predefined task kinds carry an optional label
# override while the "other" kind requires a non-empty custom name.
# 🔗 Dependencies:
# pydantic (discriminated unions, TypeAdapter), datetime, enum
# 🔄 Connected Modules / Calls From:
# Plant model, ScheduleEngine, CarePlanEngine, GardenStore custom task operations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from plant_tracker.shared.utils.dates import Timestamp


class TaskType(str, Enum):
    """Kinds of custom care task a plant can carry"""
    PRUNE = "prune"
    MIST = "mist"
    PEST_CHECK = "pest_check"
    REPOT = "repot"
    ROTATE = "rotate"
    CLEAN_LEAVES = "clean_leaves"
    OTHER = "other"


PREDEFINED_TASK_LABELS = {
    TaskType.PRUNE: "Pruning",
    TaskType.MIST: "Mist Leaves",
    TaskType.PEST_CHECK: "Check for Pests",
    TaskType.REPOT: "Repot",
    TaskType.ROTATE: "Rotate Pot",
    TaskType.CLEAN_LEAVES: "Clean Leaves",
    TaskType.OTHER: "Other Task",
}

CUSTOM_TASK_FALLBACK_NAME = "Custom Task"


class _CareTaskBase(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    frequency_days: int  # <= 0 means never due
    last_completed: Timestamp

    @property
    def task_type(self) -> TaskType:
        return TaskType(self.type)


class PredefinedCareTask(_CareTaskBase):
    """A task of one of the built-in kinds, optionally relabelled."""
    type: Literal["prune", "mist", "pest_check", "repot", "rotate", "clean_leaves"]
    custom_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.custom_name:
            return self.custom_name
        return PREDEFINED_TASK_LABELS[self.task_type]


class OtherCareTask(_CareTaskBase):
    """A free-form task; the user-provided name is mandatory."""
    type: Literal["other"] = "other"
    custom_name: str

    @field_validator("custom_name")
    @classmethod
    def validate_custom_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Custom tasks of type 'other' need a name")
        return v.strip()

    @property
    def display_name(self) -> str:
        return self.custom_name or CUSTOM_TASK_FALLBACK_NAME


CustomCareTask = Annotated[
    Union[PredefinedCareTask, OtherCareTask],
    Field(discriminator="type"),
]

custom_task_adapter: TypeAdapter = TypeAdapter(CustomCareTask)
