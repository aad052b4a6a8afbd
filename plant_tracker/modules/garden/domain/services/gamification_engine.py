# 📄 File: plant_tracker/modules/garden/domain/services/gamification_engine.py
# 🧭 Purpose (Layman Explanation):
# Hands out growth points for looking after plants and turns the running total into
# a level with a friendly title.
# 🧪 Purpose (Technical Summary):
# Fixed point table, level = points // 100 + 1 derived from the total on every award,
# clamped title lookup and percent progress towards the next level.
# 🔗 Dependencies:
# garden domain models
# 🔄 Connected Modules / Calls From:
# GardenStore (every rewarded action), profile API endpoint

from enum import Enum

from ..models.garden import UserProfile

POINTS_PER_LEVEL = 100

LEVEL_TITLES = (
    "Novice Gardener",
    "Dedicated Grower",
    "Green Thumb",
    "Plant Friend",
    "Leaf Whisperer",
    "Flora Guardian",
    "Master Botanist",
)


class RewardAction(str, Enum):
    COMPLETE_TASK = "complete_task"
    ADD_PLANT = "add_plant"
    ADD_HISTORY = "add_history"
    ACTIVATE_PLAN = "activate_plan"


POINTS_TABLE = {
    RewardAction.COMPLETE_TASK: 10,
    RewardAction.ADD_PLANT: 50,
    RewardAction.ADD_HISTORY: 15,
    RewardAction.ACTIVATE_PLAN: 25,
}


class GamificationEngine:

    @staticmethod
    def level_for(points: int) -> int:
        return points // POINTS_PER_LEVEL + 1

    @staticmethod
    def level_title(level: int) -> str:
        index = min(max(level, 1) - 1, len(LEVEL_TITLES) - 1)
        return LEVEL_TITLES[index]

    @staticmethod
    def add_points(profile: UserProfile, points: int) -> UserProfile:
        """New profile with points added and the level re-derived from the total."""
        if points < 0:
            raise ValueError("Growth points never decrease")
        total = profile.growth_points + points
        return profile.model_copy(update={
            "growth_points": total,
            "level": GamificationEngine.level_for(total),
        })

    @staticmethod
    def award(profile: UserProfile, action: RewardAction) -> UserProfile:
        return GamificationEngine.add_points(profile, POINTS_TABLE[action])

    @staticmethod
    def level_progress(profile: UserProfile) -> float:
        """Percent of the way from the current level to the next."""
        floor = (profile.level - 1) * POINTS_PER_LEVEL
        return max(0.0, (profile.growth_points - floor) / POINTS_PER_LEVEL * 100)
