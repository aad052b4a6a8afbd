# 📄 File: plant_tracker/modules/garden/domain/models/garden.py
# 🧭 Purpose (Layman Explanation):
# Everything saved for one gardener (plants, badges, chat with the assistant, points)
# plus the reminders and calendar entries worked out from it.
# 🧪 Purpose (Technical Summary):
# UserAppData aggregate (the persisted blob per user key), UserProfile, ChatMessage and
# the derived, never-persisted CareAlert / TaskOccurrence / GardenStats views.
# 🔗 Dependencies:
# pydantic, enum, typing, sibling domain models
# 🔄 Connected Modules / Calls From:
# GardenStore, ScheduleEngine, garden repositories, API schemas

from datetime import datetime
from enum import Enum
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, Field

from .achievement import AchievementId
from .plant import Plant

GREETING_MESSAGE = "Hello! I'm your botany assistant. How can I help your garden today?"


class CareTaskKind(str, Enum):
    """What kind of task a completion, alert or calendar entry refers to"""
    WATERING = "watering"
    FERTILIZING = "fertilizing"
    CUSTOM = "custom"


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


class ChatMessage(BaseModel):
    id: str
    role: ChatRole
    text: str


class UserProfile(BaseModel):
    name: str
    growth_points: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)


class UserAppData(BaseModel):
    """
    Everything persisted for one user key.

    unlocked_achievements only ever grows.
    """

    plants: List[Plant] = Field(default_factory=list)
    unlocked_achievements: FrozenSet[AchievementId] = Field(default_factory=frozenset)
    chat_history: List[ChatMessage] = Field(default_factory=list)
    profile: UserProfile

    @classmethod
    def initial(cls, name: str) -> "UserAppData":
        return cls(
            profile=UserProfile(name=name),
            chat_history=[ChatMessage(id="init", role=ChatRole.MODEL, text=GREETING_MESSAGE)],
        )


class CareAlert(BaseModel):
    """An overdue task. Recomputed on every read."""
    plant_id: str
    plant_name: str
    plant_image: str
    task: CareTaskKind
    due_date: datetime
    custom_task_id: Optional[str] = None
    custom_task_name: Optional[str] = None


class TaskOccurrence(BaseModel):
    """One projected occurrence of a recurring task on the calendar."""
    plant_id: str
    plant_name: str
    task: CareTaskKind
    due_date: datetime
    custom_task_id: Optional[str] = None
    custom_task_name: Optional[str] = None


class GardenStats(BaseModel):
    total_plants: int
    healthy_plants: int
    tasks_this_week: int


class SeasonalTip(BaseModel):
    season: str
    tip: str
