# 📄 File: plant_tracker/modules/garden/presentation/api/schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the messages the garden API accepts and sends back, like "add this plant"
# or "here are today's reminders".
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the garden endpoints. Domain models are reused as
# response bodies where they already are the public shape; the schemas here add request
# validation and view-specific fields (due labels, level titles, month grids).
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - garden domain models
#
# 🔄 Connected Modules / Calls From:
# - plant_tracker.modules.garden.presentation.api.v1.garden (garden endpoints)
# - FastAPI automatic request validation and response serialization

"""
Garden API Schemas

Request Schemas:
- AnalyzeImageRequest, PlantCreateRequest, HistoryEntryRequest
- CompleteTaskRequest, ScheduleUpdateRequest
- CustomTaskCreateRequest, CustomTaskUpdateRequest
- ActivateCarePlanRequest, ReidentifyRequest, ChatRequest

Response Schemas:
- AlertResponse, CalendarMonthResponse, CalendarDayResponse
- CarePlanTemplateResponse, AchievementResponse, ProfileResponse
- DashboardResponse, ChatHistoryResponse
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ...domain.models.achievement import ACHIEVEMENTS, AchievementId
from ...domain.models.care_plan import CarePlanTemplate
from ...domain.models.care_task import TaskType
from ...domain.models.garden import (
    CareAlert,
    CareTaskKind,
    ChatMessage,
    GardenStats,
    SeasonalTip,
    TaskOccurrence,
)
from ...domain.models.plant import PlantDiagnosis, PlantLocation
from ...domain.services.schedule_engine import MAX_FREQUENCY_DAYS


# =========================================================================
# REQUEST SCHEMAS
# =========================================================================

class AnalyzeImageRequest(BaseModel):
    image: str = Field(..., min_length=1, description="Base64-encoded JPEG without data URL prefix")


class PlantCreateRequest(BaseModel):
    image: str = Field(..., min_length=1, description="Base64-encoded plant photo")
    analysis: PlantDiagnosis = Field(..., description="Diagnosis returned by /analyze")
    location: PlantLocation = Field(default=PlantLocation.INDOOR)


class HistoryEntryRequest(BaseModel):
    note: str = Field(default="", max_length=5000)
    image: Optional[str] = Field(None, description="Optional base64 photo for the diary entry")


class CompleteTaskRequest(BaseModel):
    kind: CareTaskKind
    custom_task_id: Optional[str] = Field(None, description="Required when kind is 'custom'")


class ScheduleUpdateRequest(BaseModel):
    """Only the fields that are sent are changed. 0 turns a schedule off."""
    watering_frequency: Optional[int] = Field(None, ge=0, le=MAX_FREQUENCY_DAYS)
    fertilizing_frequency: Optional[int] = Field(None, ge=0, le=MAX_FREQUENCY_DAYS)
    pruning_schedule: Optional[str] = None


class CustomTaskCreateRequest(BaseModel):
    type: TaskType
    frequency_days: int = Field(
        ..., le=MAX_FREQUENCY_DAYS, description="Days between occurrences, must be positive"
    )
    custom_name: Optional[str] = Field(None, max_length=100)


class CustomTaskUpdateRequest(BaseModel):
    type: Optional[TaskType] = None
    frequency_days: Optional[int] = Field(None, le=MAX_FREQUENCY_DAYS)
    custom_name: Optional[str] = Field(None, max_length=100)
    last_completed: Optional[datetime] = None


class ActivateCarePlanRequest(BaseModel):
    template_id: str = Field(..., min_length=1)


class ReidentifyRequest(BaseModel):
    suggestion: str = Field(..., min_length=1, max_length=200, description="Species the user believes it is")


class ChatRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=4000)


# =========================================================================
# RESPONSE SCHEMAS
# =========================================================================

class AlertResponse(CareAlert):
    due_label: str = Field(..., description="e.g. 'due today', 'overdue by 2 day(s)'")


class CalendarDayResponse(BaseModel):
    day: date
    is_current_month: bool
    tasks: List[TaskOccurrence] = Field(default_factory=list)


class CalendarMonthResponse(BaseModel):
    year: int
    month: int
    days: List[CalendarDayResponse]


class CarePlanStepResponse(BaseModel):
    day: int
    task_type: TaskType
    custom_name: Optional[str] = None


class CarePlanTemplateResponse(BaseModel):
    id: str
    name: str
    description: str
    duration_days: int
    steps: List[CarePlanStepResponse]

    @classmethod
    def from_template(cls, template: CarePlanTemplate) -> "CarePlanTemplateResponse":
        return cls(
            id=template.id,
            name=template.name,
            description=template.description,
            duration_days=template.duration_days,
            steps=[
                CarePlanStepResponse(day=s.day, task_type=s.task_type, custom_name=s.custom_name)
                for s in template.steps
            ],
        )


class AchievementResponse(BaseModel):
    id: AchievementId
    title: str
    description: str
    unlocked: bool

    @classmethod
    def catalog(cls, unlocked: frozenset) -> List["AchievementResponse"]:
        return [
            cls(id=a.id, title=a.title, description=a.description, unlocked=a.id in unlocked)
            for a in ACHIEVEMENTS.values()
        ]


class ProfileResponse(BaseModel):
    name: str
    growth_points: int
    level: int
    level_title: str
    level_progress: float = Field(..., description="Percent of the way to the next level")


class DashboardResponse(BaseModel):
    profile: ProfileResponse
    stats: GardenStats
    alerts: List[AlertResponse]
    seasonal_tip: SeasonalTip


class ChatHistoryResponse(BaseModel):
    messages: List[ChatMessage]


class DeletedResponse(BaseModel):
    deleted: bool
