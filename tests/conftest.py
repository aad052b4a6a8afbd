"""Shared fixtures for the Plant Tracker test suite.

Provides:
- A controllable clock so date-driven behaviour is deterministic
- Plant / diagnosis builders
- In-memory fakes for the AI assistant and failing persistence
"""

# pylint: disable=redefined-outer-name

from datetime import datetime, timezone
from typing import List, Optional, Sequence

import pytest

from plant_tracker.modules.garden.application.garden_service import GardenService
from plant_tracker.modules.garden.application.garden_store import GardenStore
from plant_tracker.modules.garden.domain.models.garden import ChatMessage, UserAppData
from plant_tracker.modules.garden.domain.models.plant import (
    CareSchedule,
    DiagnosisSummary,
    LastCare,
    Plant,
    PlantDiagnosis,
)
from plant_tracker.modules.garden.domain.repositories.garden_repository import GardenRepository
from plant_tracker.modules.garden.domain.services.plant_assistant import (
    PlantAssistant,
    PlantRecommendation,
    ReanalysisResult,
)
from plant_tracker.modules.garden.infrastructure.memory_garden_repository import InMemoryGardenRepository
from plant_tracker.shared.core.exceptions import PlantIdentificationError, RepositoryError
from plant_tracker.shared.utils.dates import add_days

# 2024-06-15 is a Saturday, winter in the southern hemisphere
NOW = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that tests move forward by hand."""

    def __init__(self, now: datetime = NOW):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, days: int) -> None:
        self.current = add_days(self.current, days)


def make_diagnosis(
    popular_name: str = "Monstera",
    species_name: str = "Monstera deliciosa",
    is_healthy: bool = True,
    watering: int = 7,
    fertilizing: int = 30,
) -> PlantDiagnosis:
    return PlantDiagnosis(
        species_name=species_name,
        popular_name=popular_name,
        is_healthy=is_healthy,
        diagnosis=DiagnosisSummary(title="Healthy" if is_healthy else "Needs attention"),
        care_schedule=CareSchedule(watering_frequency=watering, fertilizing_frequency=fertilizing),
    )


def make_plant(
    plant_id: str = "p1",
    last_watering: datetime = NOW,
    last_fertilizing: Optional[datetime] = None,
    **diagnosis_kwargs,
) -> Plant:
    return Plant(
        id=plant_id,
        image="aW1hZ2U=",
        analysis=make_diagnosis(**diagnosis_kwargs),
        last_care=LastCare(watering=last_watering, fertilizing=last_fertilizing or last_watering),
    )


class FakeAssistant(PlantAssistant):
    """Scripted PlantAssistant. Set `error` to make every call fail."""

    def __init__(self):
        self.diagnosis: PlantDiagnosis = make_diagnosis()
        self.reanalysis: Optional[ReanalysisResult] = None
        self.recommendations: List[PlantRecommendation] = [
            PlantRecommendation(popular_name="Pothos", species_name="Epipremnum aureum", reason="Easy going"),
        ]
        self.reply = "Water it once a week."
        self.error: Optional[Exception] = None
        self.chat_calls: List[tuple] = []
        self.recommend_calls: List[List[str]] = []

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    async def analyze(self, image: str) -> PlantDiagnosis:
        self._maybe_fail()
        return self.diagnosis

    async def reanalyze(self, image: str, suggestion: str) -> ReanalysisResult:
        self._maybe_fail()
        return self.reanalysis

    async def recommend(self, existing_plant_names: Sequence[str]) -> List[PlantRecommendation]:
        self._maybe_fail()
        self.recommend_calls.append(list(existing_plant_names))
        return self.recommendations

    async def chat(self, message: str, history: Sequence[ChatMessage]) -> str:
        self._maybe_fail()
        self.chat_calls.append((message, list(history)))
        return self.reply


class BrokenRepository(GardenRepository):
    """Loads nothing and refuses every save."""

    def __init__(self, fail_load: bool = False):
        self.fail_load = fail_load
        self.save_attempts = 0

    async def load_profile(self, user_key: str):
        if self.fail_load:
            raise RepositoryError("backend down", operation="load_profile")
        return None

    async def save_profile(self, user_key: str, data: UserAppData) -> None:
        self.save_attempts += 1
        raise RepositoryError("backend down", operation="save_profile")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> GardenStore:
    return GardenStore(UserAppData.initial("ana"), clock=clock)


@pytest.fixture
def assistant() -> FakeAssistant:
    return FakeAssistant()


@pytest.fixture
def repository() -> InMemoryGardenRepository:
    return InMemoryGardenRepository()


@pytest.fixture
def service(store, repository, assistant) -> GardenService:
    return GardenService("ana@example.com", store, repository, assistant)
