# 📄 File: plant_tracker/modules/garden/application/garden_store.py
# 🧭 Purpose (Layman Explanation):
# The single keeper of one gardener's data. Every change (adding a plant, watering it,
# starting a care plan) goes through here, which also hands out points and badges.
# 🧪 Purpose (Technical Summary):
# Aggregate-root state container over UserAppData. Mutations run one at a time under a
# re-entrant lock, derive the new state from the latest committed state through the pure
# engines and commit it by replacement. Unknown plant/task ids make mutations no-ops.
# 🔗 Dependencies:
# threading, uuid, pydantic, domain engines and models, structured logging, exceptions
# 🔄 Connected Modules / Calls From:
# GardenService (async wrapper with persistence + AI), API endpoints via the session manager

import threading
import uuid
from datetime import date, datetime
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from plant_tracker.shared.core.exceptions import CareScheduleError, PlantNotFoundError, ValidationError
from plant_tracker.shared.utils.dates import add_days, now_in
from plant_tracker.shared.utils.logging import get_logger
from ..domain.models.achievement import AchievementEvent, AchievementId
from ..domain.models.care_plan import CarePlanProgress, CarePlanTemplate
from ..domain.models.care_task import CustomCareTask, TaskType, custom_task_adapter
from ..domain.models.garden import (
    CareAlert,
    CareTaskKind,
    ChatMessage,
    ChatRole,
    GardenStats,
    SeasonalTip,
    TaskOccurrence,
    UserAppData,
    UserProfile,
)
from ..domain.models.plant import HistoryEntry, LastCare, Plant, PlantDiagnosis, PlantLocation
from ..domain.services.achievement_engine import AchievementEngine
from ..domain.services.care_plan_engine import CarePlanEngine
from ..domain.services.gamification_engine import GamificationEngine, RewardAction
from ..domain.services.schedule_engine import (
    DEFAULT_FUTURE_CYCLES,
    DEFAULT_PAST_CYCLES,
    MAX_FREQUENCY_DAYS,
    ScheduleEngine,
    TaskProjection,
)
from ..domain.services.seasons import seasonal_tip

logger = get_logger(__name__)

Clock = Callable[[], datetime]

WEEK_DAYS = 7
EDITABLE_TASK_FIELDS = {"type", "custom_name", "frequency_days", "last_completed"}


class GardenStore:
    """
    State container for one user's garden.

    Read accessors return committed values; callers must not mutate them.
    Mutations return the affected value, or None when the plant or task
    id does not exist (stale ids are not an error).
    """

    def __init__(
        self,
        data: UserAppData,
        clock: Optional[Clock] = None,
        timezone_name: str = "UTC",
        past_cycles: int = DEFAULT_PAST_CYCLES,
        future_cycles: int = DEFAULT_FUTURE_CYCLES,
    ):
        self._data = data
        self._lock = threading.RLock()
        self._clock = clock or (lambda: now_in(timezone_name))
        self.past_cycles = past_cycles
        self.future_cycles = future_cycles

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    def now(self) -> datetime:
        return self._clock()

    @property
    def data(self) -> UserAppData:
        return self._data

    @property
    def plants(self) -> List[Plant]:
        return list(self._data.plants)

    @property
    def profile(self) -> UserProfile:
        return self._data.profile

    @property
    def unlocked_achievements(self) -> FrozenSet[AchievementId]:
        return frozenset(self._data.unlocked_achievements)

    @property
    def chat_history(self) -> List[ChatMessage]:
        return list(self._data.chat_history)

    def get_plant(self, plant_id: str) -> Optional[Plant]:
        for plant in self._data.plants:
            if plant.id == plant_id:
                return plant
        return None

    def require_plant(self, plant_id: str) -> Plant:
        plant = self.get_plant(plant_id)
        if plant is None:
            raise PlantNotFoundError(plant_id)
        return plant

    def search_plants(self, query: str) -> List[Plant]:
        if not query or not query.strip():
            return self.plants
        return [plant for plant in self._data.plants if plant.matches(query)]

    # =========================================================================
    # DERIVED VIEWS
    # =========================================================================

    def alerts(self) -> List[CareAlert]:
        return ScheduleEngine.compute_alerts(self._data.plants, self.now())

    def calendar(self) -> TaskProjection:
        now = self.now()
        return ScheduleEngine.project_tasks(
            self._data.plants,
            past_cycles=self.past_cycles,
            future_cycles=self.future_cycles,
            tz=now.tzinfo,
        )

    def tasks_on(self, day: date) -> List[TaskOccurrence]:
        return ScheduleEngine.tasks_on(self.calendar(), day)

    def garden_stats(self) -> GardenStats:
        plants = self._data.plants
        deadline = add_days(self.now(), WEEK_DAYS)
        return GardenStats(
            total_plants=len(plants),
            healthy_plants=sum(1 for plant in plants if plant.is_healthy),
            tasks_this_week=ScheduleEngine.count_due_before(plants, deadline),
        )

    def seasonal_tip(self) -> SeasonalTip:
        return seasonal_tip(self.now().date())

    def level_title(self) -> str:
        return GamificationEngine.level_title(self._data.profile.level)

    def level_progress(self) -> float:
        return GamificationEngine.level_progress(self._data.profile)

    def available_care_plans(self, plant_id: str) -> List[CarePlanTemplate]:
        plant = self.get_plant(plant_id)
        if plant is None or plant.active_care_plan is not None:
            return []
        return CarePlanEngine.available_templates(plant)

    def care_plan_progress(self, plant_id: str) -> Optional[CarePlanProgress]:
        plant = self.get_plant(plant_id)
        if plant is None:
            return None
        return CarePlanEngine.progress(plant, self.now())

    # =========================================================================
    # PLANTS
    # =========================================================================

    def add_plant(
        self,
        image: str,
        analysis: PlantDiagnosis,
        location: PlantLocation = PlantLocation.INDOOR,
    ) -> Plant:
        with self._lock:
            now = self.now()
            plant = Plant(
                id=uuid.uuid4().hex,
                image=image,
                location=location,
                analysis=analysis,
                last_care=LastCare(watering=now, fertilizing=now),
            )
            plants = [*self._data.plants, plant]
            self._commit(
                plants=plants,
                unlocked_achievements=AchievementEngine.recompute(
                    self._data.unlocked_achievements, plants
                ),
                profile=GamificationEngine.award(self._data.profile, RewardAction.ADD_PLANT),
            )

        logger.log_business_event(
            "plant_added", f"Plant added: {plant.name}",
            entity_id=plant.id, entity_type="plant",
        )
        return plant

    def delete_plant(self, plant_id: str) -> bool:
        """Remove a plant. Achievements already earned are kept."""
        with self._lock:
            plants = [plant for plant in self._data.plants if plant.id != plant_id]
            if len(plants) == len(self._data.plants):
                return False
            self._commit(plants=plants)

        logger.log_business_event(
            "plant_deleted", f"Plant deleted: {plant_id}",
            entity_id=plant_id, entity_type="plant",
        )
        return True

    def replace_analysis(self, plant_id: str, analysis: PlantDiagnosis) -> Optional[Plant]:
        """Swap in a corrected identification."""
        with self._lock:
            return self._update_plant(
                plant_id, lambda plant: plant.model_copy(update={"analysis": analysis})
            )

    # =========================================================================
    # DIARY
    # =========================================================================

    def add_history_entry(self, plant_id: str, note: str, image: Optional[str] = None) -> Optional[HistoryEntry]:
        note = (note or "").strip()
        if not note and not image:
            raise ValidationError("A diary entry needs a note or a photo", field="note")

        with self._lock:
            if self.get_plant(plant_id) is None:
                return None

            now = self.now()
            entry = HistoryEntry(id=f"{now.isoformat()}-{uuid.uuid4().hex[:8]}", date=now, note=note, image=image)
            plants = self._replace_plant(
                plant_id, lambda plant: plant.model_copy(update={"history": [entry, *plant.history]})
            )[0]
            self._commit(
                plants=plants,
                unlocked_achievements=AchievementEngine.recompute(
                    self._data.unlocked_achievements, plants, AchievementEvent(note_added=True)
                ),
                profile=GamificationEngine.award(self._data.profile, RewardAction.ADD_HISTORY),
            )

        logger.log_business_event(
            "diary_entry_added", "Diary entry added",
            entity_id=plant_id, entity_type="plant",
        )
        return entry

    # =========================================================================
    # CARE TASKS
    # =========================================================================

    def complete_task(
        self,
        plant_id: str,
        kind: CareTaskKind,
        custom_task_id: Optional[str] = None,
    ) -> Optional[Plant]:
        """
        Mark a task as done now and award completion points.

        Completing any task on a plant that is unhealthy at call time
        unlocks PLANT_SAVIOR.
        """
        kind = CareTaskKind(kind)
        if kind is CareTaskKind.CUSTOM and not custom_task_id:
            raise ValidationError("custom_task_id is required for custom tasks", field="custom_task_id")

        with self._lock:
            plant = self.get_plant(plant_id)
            if plant is None:
                return None
            if kind is CareTaskKind.CUSTOM and plant.find_custom_task(custom_task_id) is None:
                return None

            now = self.now()
            was_unhealthy = not plant.is_healthy

            def mark_done(current: Plant) -> Plant:
                if kind is CareTaskKind.CUSTOM:
                    tasks = [
                        task.model_copy(update={"last_completed": now}) if task.id == custom_task_id else task
                        for task in current.custom_tasks
                    ]
                    return current.model_copy(update={"custom_tasks": tasks})
                last_care = current.last_care.model_copy(update={kind.value: now})
                return current.model_copy(update={"last_care": last_care})

            plants, updated = self._replace_plant(plant_id, mark_done)

            unlocked = self._data.unlocked_achievements
            if was_unhealthy:
                unlocked = AchievementEngine.unlock(unlocked, AchievementId.PLANT_SAVIOR)

            self._commit(
                plants=plants,
                unlocked_achievements=unlocked,
                profile=GamificationEngine.award(self._data.profile, RewardAction.COMPLETE_TASK),
            )

        logger.log_business_event(
            "care_task_completed", f"{kind.value} completed for {updated.name}",
            entity_id=plant_id, entity_type="plant",
            extra={"custom_task_id": custom_task_id} if custom_task_id else None,
        )
        return updated

    def update_schedule(
        self,
        plant_id: str,
        watering_frequency: Optional[int] = None,
        fertilizing_frequency: Optional[int] = None,
        pruning_schedule: Optional[str] = None,
    ) -> Optional[Plant]:
        """Merge only the fields that were passed."""
        changes: Dict[str, Any] = {}
        if watering_frequency is not None:
            changes["watering_frequency"] = int(watering_frequency)
        if fertilizing_frequency is not None:
            changes["fertilizing_frequency"] = int(fertilizing_frequency)
        if pruning_schedule is not None:
            changes["pruning_schedule"] = pruning_schedule

        def merge(plant: Plant) -> Plant:
            schedule = plant.analysis.care_schedule.model_copy(update=changes)
            analysis = plant.analysis.model_copy(update={"care_schedule": schedule})
            return plant.model_copy(update={"analysis": analysis})

        with self._lock:
            return self._update_plant(plant_id, merge)

    def add_custom_task(
        self,
        plant_id: str,
        task_type: TaskType,
        frequency_days: int,
        custom_name: Optional[str] = None,
    ) -> Optional[CustomCareTask]:
        """Create a recurring task, considered just done so it does not alert at once."""
        with self._lock:
            now = self.now()
            task = self._build_task({
                "id": f"{now.isoformat()}-{uuid.uuid4().hex[:8]}",
                "type": TaskType(task_type).value,
                "custom_name": custom_name,
                "frequency_days": frequency_days,
                "last_completed": now,
            })

            updated = self._update_plant(
                plant_id, lambda plant: plant.model_copy(update={"custom_tasks": [*plant.custom_tasks, task]})
            )
            return task if updated is not None else None

    def update_custom_task(self, plant_id: str, task_id: str, **changes: Any) -> Optional[CustomCareTask]:
        unknown = set(changes) - EDITABLE_TASK_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {sorted(unknown)}", field="custom_task")

        with self._lock:
            plant = self.get_plant(plant_id)
            task = plant.find_custom_task(task_id) if plant else None
            if task is None:
                return None

            if "type" in changes:
                changes["type"] = TaskType(changes["type"]).value
            merged = self._build_task({**task.model_dump(), **changes})

            self._update_plant(plant_id, lambda current: current.model_copy(update={
                "custom_tasks": [merged if t.id == task_id else t for t in current.custom_tasks]
            }))
            return merged

    def remove_custom_task(self, plant_id: str, task_id: str) -> bool:
        def remove(plant: Plant) -> Plant:
            update: Dict[str, Any] = {"custom_tasks": [t for t in plant.custom_tasks if t.id != task_id]}
            plan = plant.active_care_plan
            if plan is not None and task_id in plan.task_ids:
                update["active_care_plan"] = plan.model_copy(
                    update={"task_ids": [tid for tid in plan.task_ids if tid != task_id]}
                )
            return plant.model_copy(update=update)

        with self._lock:
            plant = self.get_plant(plant_id)
            if plant is None or plant.find_custom_task(task_id) is None:
                return False
            self._update_plant(plant_id, remove)
            return True

    # =========================================================================
    # CARE PLANS
    # =========================================================================

    def activate_care_plan(self, plant_id: str, template_id: str) -> Optional[Plant]:
        """
        Start a care plan and award activation points.

        Raises:
            CarePlanError: see CarePlanEngine.activate
        """
        with self._lock:
            plant = self.get_plant(plant_id)
            if plant is None:
                return None

            activated = CarePlanEngine.activate(plant, template_id, self.now())
            plants, updated = self._replace_plant(plant_id, lambda _: activated)
            self._commit(
                plants=plants,
                profile=GamificationEngine.award(self._data.profile, RewardAction.ACTIVATE_PLAN),
            )

        logger.log_business_event(
            "care_plan_activated", f"Care plan {template_id} started for {updated.name}",
            entity_id=plant_id, entity_type="plant",
            extra={"plan_id": template_id, "task_ids": updated.active_care_plan.task_ids},
        )
        return updated

    def cancel_care_plan(self, plant_id: str) -> Optional[Plant]:
        with self._lock:
            return self._update_plant(plant_id, CarePlanEngine.cancel)

    # =========================================================================
    # CHAT
    # =========================================================================

    def append_chat_message(self, role: ChatRole, text: str) -> ChatMessage:
        role = ChatRole(role)
        with self._lock:
            message = ChatMessage(
                id=f"{self.now().isoformat()}-{role.value}-{uuid.uuid4().hex[:8]}",
                role=role,
                text=text,
            )
            self._commit(chat_history=[*self._data.chat_history, message])
            return message

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _commit(self, **update: Any) -> None:
        self._data = self._data.model_copy(update=update)

    def _replace_plant(
        self, plant_id: str, change: Callable[[Plant], Plant]
    ) -> Tuple[List[Plant], Optional[Plant]]:
        plants: List[Plant] = []
        updated: Optional[Plant] = None
        for plant in self._data.plants:
            if plant.id == plant_id:
                updated = change(plant)
                plants.append(updated)
            else:
                plants.append(plant)
        return plants, updated

    def _update_plant(self, plant_id: str, change: Callable[[Plant], Plant]) -> Optional[Plant]:
        plants, updated = self._replace_plant(plant_id, change)
        if updated is not None:
            self._commit(plants=plants)
        return updated

    @staticmethod
    def _build_task(raw: Dict[str, Any]) -> CustomCareTask:
        frequency = raw.get("frequency_days")
        if not isinstance(frequency, int) or isinstance(frequency, bool) or frequency <= 0:
            raise CareScheduleError(
                "Task frequency must be a positive number of days",
                field="frequency_days",
                value=frequency,
            )
        if frequency > MAX_FREQUENCY_DAYS:
            raise CareScheduleError(
                f"Task frequency cannot exceed {MAX_FREQUENCY_DAYS} days",
                field="frequency_days",
                value=frequency,
            )
        try:
            return custom_task_adapter.validate_python(raw)
        except PydanticValidationError as e:
            raise CareScheduleError(
                "Invalid custom task",
                field="custom_task",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e
