# 📄 File: plant_tracker/modules/garden/domain/services/achievement_engine.py
# 🧭 Purpose (Layman Explanation):
# Decides which badges the gardener has earned. Once a badge is earned it is kept
# forever, even if the plant that earned it is later removed.
# 🧪 Purpose (Technical Summary):
# Pure, idempotent evaluator over (unlocked set, plants, event flags). Only adds ids.
# PLANT_SAVIOR needs a transition and is unlocked by the task completion flow.
# 🔗 Dependencies:
# garden domain models
# 🔄 Connected Modules / Calls From:
# GardenStore (add plant, add diary entry, complete task)

from typing import AbstractSet, FrozenSet, Optional, Sequence

from ..models.achievement import AchievementEvent, AchievementId
from ..models.plant import Plant

GARDEN_STARTER_PLANTS = 5
GREEN_THUMB_HEALTHY_PLANTS = 5


class AchievementEngine:

    @staticmethod
    def recompute(
        unlocked: AbstractSet[AchievementId],
        plants: Sequence[Plant],
        event: Optional[AchievementEvent] = None,
    ) -> FrozenSet[AchievementId]:
        """
        Return unlocked plus every achievement whose condition now holds.

        Never removes an id. Calling it again with the same inputs gives
        the same set.
        """
        event = event or AchievementEvent()
        healthy = sum(1 for plant in plants if plant.analysis.is_healthy)

        rules = {
            AchievementId.FIRST_PLANT: len(plants) >= 1,
            AchievementId.GARDEN_STARTER: len(plants) >= GARDEN_STARTER_PLANTS,
            AchievementId.FIRST_DIARY_NOTE: event.note_added,
            AchievementId.GREEN_THUMB: healthy >= GREEN_THUMB_HEALTHY_PLANTS,
        }

        return frozenset(unlocked) | {aid for aid, met in rules.items() if met}

    @staticmethod
    def unlock(unlocked: AbstractSet[AchievementId], achievement_id: AchievementId) -> FrozenSet[AchievementId]:
        """Idempotent single unlock."""
        return frozenset(unlocked) | {achievement_id}
