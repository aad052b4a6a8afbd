# 📄 File: plant_tracker/modules/garden/domain/services/plant_assistant.py
# 🧭 Purpose (Layman Explanation):
# Describes what the app expects from its AI botanist: identify a plant from a photo,
# double-check a user's correction, suggest new plants and chat about plant care.
# 🧪 Purpose (Technical Summary):
# Abstract AI collaborator contract plus its result value objects. Implementations may
# fail by raising ExternalServiceError subclasses; callers degrade to user-facing messages.
# 🔗 Dependencies:
# pydantic, abc, garden domain models
# 🔄 Connected Modules / Calls From:
# GardenService, OpenRouterAssistant (infrastructure), test fakes

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from pydantic import Field

from ..models.garden import ChatMessage
from ..models.plant import DiagnosisModel, PlantDiagnosis


class PlantRecommendation(DiagnosisModel):
    popular_name: str
    species_name: str
    reason: str = ""


class ReanalysisResult(DiagnosisModel):
    """Verdict on a user's suggested identification."""
    is_suggestion_accepted: bool
    reasoning: str = ""
    new_analysis: Optional[PlantDiagnosis] = None


class RecommendationList(DiagnosisModel):
    recommendations: List[PlantRecommendation] = Field(default_factory=list)


class PlantAssistant(ABC):
    """
    AI collaborator contract.

    Implementation Notes:
    - All operations are async network calls
    - Failures raise ExternalServiceError subclasses
    - No retries are expected from callers
    """

    @abstractmethod
    async def analyze(self, image: str) -> PlantDiagnosis:
        """
        Identify and diagnose the plant in a base64 image.

        Raises:
            ExternalServiceError: provider unreachable or answer unusable
        """
        pass

    @abstractmethod
    async def reanalyze(self, image: str, suggestion: str) -> ReanalysisResult:
        """Judge whether `suggestion` is a plausible identification of the pictured plant."""
        pass

    @abstractmethod
    async def recommend(self, existing_plant_names: Sequence[str]) -> List[PlantRecommendation]:
        """Suggest plants that would thrive under similar care."""
        pass

    @abstractmethod
    async def chat(self, message: str, history: Sequence[ChatMessage]) -> str:
        """Answer `message` given the prior conversation."""
        pass
