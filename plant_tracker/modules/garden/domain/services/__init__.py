"""Pure garden engines. None of them mutate their inputs."""

from .achievement_engine import AchievementEngine
from .care_plan_engine import CarePlanEngine
from .gamification_engine import GamificationEngine, RewardAction
from .plant_assistant import PlantAssistant
from .schedule_engine import ScheduleEngine

__all__ = [
    "AchievementEngine",
    "CarePlanEngine",
    "GamificationEngine",
    "PlantAssistant",
    "RewardAction",
    "ScheduleEngine",
]
