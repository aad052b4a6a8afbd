# 📄 File: plant_tracker/modules/garden/application/garden_service.py
# 🧭 Purpose (Layman Explanation):
# Connects a gardener's data to the outside world: saves every change, and asks the AI
# botanist to identify plants, confirm corrections, suggest new plants and answer questions.
# 🧪 Purpose (Technical Summary):
# Async application service wrapping a GardenStore with the persistence and AI
# collaborators. Commits are persisted after every change; persistence failures are
# logged and recorded, never raised. AI failures become user-facing outcome messages.
# 🔗 Dependencies:
# pydantic, garden store, domain repository/assistant contracts, structured logging
# 🔄 Connected Modules / Calls From:
# GardenSessionManager, garden API endpoints

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field

from plant_tracker.shared.core.exceptions import ExternalServiceError, ValidationError
from plant_tracker.shared.utils.logging import get_logger
from ..domain.models.care_task import CustomCareTask, TaskType
from ..domain.models.garden import CareTaskKind, ChatMessage, ChatRole, UserAppData
from ..domain.models.plant import HistoryEntry, Plant, PlantDiagnosis, PlantLocation
from ..domain.repositories.garden_repository import GardenRepository
from ..domain.services.plant_assistant import PlantAssistant, PlantRecommendation
from .garden_store import GardenStore

logger = get_logger(__name__)

ANALYSIS_ERROR_MESSAGE = "Could not analyze the image. Please try again with a clearer photo."
REANALYSIS_ERROR_MESSAGE = "An error occurred during re-analysis. Please try again."
RECOMMENDATION_ERROR_MESSAGE = "Could not fetch recommendations right now. Please try again later."
CHAT_ERROR_MESSAGE = "Sorry, something went wrong. Please try again."


class AnalysisOutcome(BaseModel):
    diagnosis: Optional[PlantDiagnosis] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.diagnosis is not None


class IdentificationResult(BaseModel):
    success: bool
    message: str
    plant: Optional[Plant] = None


class RecommendationOutcome(BaseModel):
    recommendations: List[PlantRecommendation] = Field(default_factory=list)
    error: Optional[str] = None


class GardenService:
    """
    Application service for one user's garden session.

    Every mutating call commits to the store first and then persists the
    whole garden. A failed save is kept in last_persist_error and logged;
    the in-memory session carries on.
    """

    def __init__(
        self,
        user_key: str,
        store: GardenStore,
        repository: GardenRepository,
        assistant: PlantAssistant,
    ):
        self.user_key = user_key
        self.store = store
        self.repository = repository
        self.assistant = assistant
        self.last_persist_error: Optional[str] = None

    @classmethod
    async def load(
        cls,
        user_key: str,
        repository: GardenRepository,
        assistant: PlantAssistant,
        display_name: Optional[str] = None,
        **store_options: Any,
    ) -> "GardenService":
        """
        Rehydrate a user's garden or start a fresh one.

        Raises:
            RepositoryError: If the backend cannot be read
        """
        data = await repository.load_profile(user_key)
        if data is None:
            logger.info("Starting new garden", extra={"user_key": user_key})
            data = UserAppData.initial(display_name or user_key)
        else:
            logger.info("Garden loaded", extra={"user_key": user_key, "plants": len(data.plants)})

        return cls(user_key, GardenStore(data, **store_options), repository, assistant)

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    async def persist(self) -> bool:
        try:
            await self.repository.save_profile(self.user_key, self.store.data)
        except Exception as e:
            self.last_persist_error = str(e)
            logger.error(
                f"Failed to persist garden: {e}",
                extra={"user_key": self.user_key, "error_type": e.__class__.__name__},
                exc_info=True,
            )
            return False

        self.last_persist_error = None
        return True

    async def _committed(self, result):
        if result is not None and result is not False:
            await self.persist()
        return result

    # =========================================================================
    # STORE WRAPPERS
    # =========================================================================

    async def add_plant(
        self, image: str, analysis: PlantDiagnosis, location: PlantLocation = PlantLocation.INDOOR
    ) -> Plant:
        return await self._committed(self.store.add_plant(image, analysis, location))

    async def delete_plant(self, plant_id: str) -> bool:
        return await self._committed(self.store.delete_plant(plant_id))

    async def add_history_entry(self, plant_id: str, note: str, image: Optional[str] = None) -> Optional[HistoryEntry]:
        return await self._committed(self.store.add_history_entry(plant_id, note, image))

    async def complete_task(
        self, plant_id: str, kind: CareTaskKind, custom_task_id: Optional[str] = None
    ) -> Optional[Plant]:
        return await self._committed(self.store.complete_task(plant_id, kind, custom_task_id))

    async def update_schedule(self, plant_id: str, **changes: Any) -> Optional[Plant]:
        return await self._committed(self.store.update_schedule(plant_id, **changes))

    async def add_custom_task(
        self, plant_id: str, task_type: TaskType, frequency_days: int, custom_name: Optional[str] = None
    ) -> Optional[CustomCareTask]:
        return await self._committed(
            self.store.add_custom_task(plant_id, task_type, frequency_days, custom_name)
        )

    async def update_custom_task(self, plant_id: str, task_id: str, **changes: Any) -> Optional[CustomCareTask]:
        return await self._committed(self.store.update_custom_task(plant_id, task_id, **changes))

    async def remove_custom_task(self, plant_id: str, task_id: str) -> bool:
        return await self._committed(self.store.remove_custom_task(plant_id, task_id))

    async def activate_care_plan(self, plant_id: str, template_id: str) -> Optional[Plant]:
        return await self._committed(self.store.activate_care_plan(plant_id, template_id))

    async def cancel_care_plan(self, plant_id: str) -> Optional[Plant]:
        return await self._committed(self.store.cancel_care_plan(plant_id))

    # =========================================================================
    # AI FLOWS
    # =========================================================================

    async def analyze_image(self, image: str) -> AnalysisOutcome:
        """Ask the assistant for a diagnosis. Nothing is stored."""
        if not image:
            raise ValidationError("An image is required", field="image")

        try:
            diagnosis = await self.assistant.analyze(image)
        except ExternalServiceError as e:
            logger.warning(f"Plant analysis failed: {e.message}", extra={"error_code": e.error_code})
            return AnalysisOutcome(error=ANALYSIS_ERROR_MESSAGE)

        return AnalysisOutcome(diagnosis=diagnosis)

    async def reidentify_plant(self, plant_id: str, suggestion: str) -> IdentificationResult:
        """
        Check a user's suggested identification and apply it when the assistant agrees.

        An accepted suggestion replaces the analysis and writes a diary entry
        (with its usual points and achievement check).
        """
        suggestion = (suggestion or "").strip()
        if not suggestion:
            raise ValidationError("A suggested species name is required", field="suggestion")

        plant = self.store.get_plant(plant_id)
        if plant is None:
            return IdentificationResult(success=False, message="Plant not found.")

        try:
            result = await self.assistant.reanalyze(plant.image, suggestion)
        except ExternalServiceError as e:
            logger.warning(f"Plant re-identification failed: {e.message}", extra={"plant_id": plant_id})
            return IdentificationResult(success=False, message=REANALYSIS_ERROR_MESSAGE)

        if not (result.is_suggestion_accepted and result.new_analysis):
            return IdentificationResult(
                success=False,
                message=f"The AI could not confirm the suggestion. Reason: {result.reasoning}",
            )

        updated = self.store.replace_analysis(plant_id, result.new_analysis)
        if updated is None:
            # deleted while the assistant was thinking
            return IdentificationResult(success=False, message="Plant not found.")

        self.store.add_history_entry(
            plant_id,
            f"Identification updated to {result.new_analysis.popular_name}. {result.reasoning}".strip(),
        )
        await self.persist()

        logger.log_business_event(
            "plant_reidentified",
            f"Plant re-identified as {result.new_analysis.popular_name}",
            entity_id=plant_id,
            entity_type="plant",
        )
        return IdentificationResult(
            success=True,
            message="Identification updated successfully!",
            plant=self.store.get_plant(plant_id),
        )

    async def recommend(self) -> RecommendationOutcome:
        names = [plant.name for plant in self.store.plants]
        try:
            recommendations = await self.assistant.recommend(names)
        except ExternalServiceError as e:
            logger.warning(f"Recommendations failed: {e.message}")
            return RecommendationOutcome(error=RECOMMENDATION_ERROR_MESSAGE)

        return RecommendationOutcome(recommendations=recommendations)

    async def send_chat_message(self, text: str) -> ChatMessage:
        """
        Append the user's message, ask the assistant and append its reply.

        The assistant sees the conversation as it was before this message.
        A failed call appends a fallback reply instead.
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Message cannot be empty", field="text")

        prior: Sequence[ChatMessage] = self.store.chat_history
        self.store.append_chat_message(ChatRole.USER, text)
        await self.persist()

        try:
            reply = await self.assistant.chat(text, prior)
        except ExternalServiceError as e:
            logger.warning(f"Chat reply failed: {e.message}")
            reply = CHAT_ERROR_MESSAGE

        message = self.store.append_chat_message(ChatRole.MODEL, reply)
        await self.persist()
        return message
