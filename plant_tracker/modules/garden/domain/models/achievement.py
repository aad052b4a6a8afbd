# 📄 File: plant_tracker/modules/garden/domain/models/achievement.py
# 🧭 Purpose (Layman Explanation):
# The list of badges a gardener can earn, like adding a first plant or keeping five
# healthy plants at once.
# 🧪 Purpose (Technical Summary):
# Static achievement catalog keyed by AchievementId plus the one-shot event value
# passed to the achievement evaluator.
# 🔗 Dependencies:
# pydantic, enum
# 🔄 Connected Modules / Calls From:
# AchievementEngine, GardenStore, achievements API endpoint

from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict


class AchievementId(str, Enum):
    FIRST_PLANT = "FIRST_PLANT"
    GARDEN_STARTER = "GARDEN_STARTER"
    FIRST_DIARY_NOTE = "FIRST_DIARY_NOTE"
    PLANT_SAVIOR = "PLANT_SAVIOR"
    GREEN_THUMB = "GREEN_THUMB"


class Achievement(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: AchievementId
    title: str
    description: str


class AchievementEvent(BaseModel):
    """Transient signals about what just happened in the current mutation."""
    model_config = ConfigDict(frozen=True)

    note_added: bool = False


ACHIEVEMENTS: Dict[AchievementId, Achievement] = {
    a.id: a for a in (
        Achievement(
            id=AchievementId.FIRST_PLANT,
            title="First Sprout",
            description="Added your first plant to the garden.",
        ),
        Achievement(
            id=AchievementId.GARDEN_STARTER,
            title="Garden in Progress",
            description="Grow 5 different plants.",
        ),
        Achievement(
            id=AchievementId.FIRST_DIARY_NOTE,
            title="Annotated Botanist",
            description="Wrote your first note in the diary.",
        ),
        Achievement(
            id=AchievementId.PLANT_SAVIOR,
            title="Plant Hero",
            description="Took care of a plant that needed attention.",
        ),
        Achievement(
            id=AchievementId.GREEN_THUMB,
            title="Green Thumb",
            description="Keep 5 healthy plants at the same time.",
        ),
    )
}
