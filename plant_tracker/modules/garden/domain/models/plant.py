# 📄 File: plant_tracker/modules/garden/domain/models/plant.py
# 🧭 Purpose (Layman Explanation):
# Describes a plant in the user's garden: its photo, what the AI thinks it is, how
# often it needs care, its diary and any extra chores or care plan attached to it.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for Plant and its AI diagnosis. Diagnosis models accept both
# camelCase (language model output) and snake_case (persisted) field names.
# 🔗 Dependencies:
# pydantic, enum, typing, care_task and care_plan models
# 🔄 Connected Modules / Calls From:
# GardenStore, ScheduleEngine, CarePlanEngine, AchievementEngine, OpenRouter assistant,
# garden repositories, API schemas

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from plant_tracker.shared.utils.dates import Timestamp
from .care_plan import ActiveCarePlan
from .care_task import CustomCareTask


class PlantLocation(str, Enum):
    """Where the plant lives"""
    INDOOR = "indoor"
    OUTDOOR = "outdoor"


class IdentificationConfidence(str, Enum):
    """How sure the AI is about the species"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DiagnosisModel(BaseModel):
    """Base for AI-produced structures: camelCase on input, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AlternativeSpecies(DiagnosisModel):
    species_name: str
    popular_name: str
    reason: str = ""


class DiagnosisSummary(DiagnosisModel):
    title: str
    description: str = ""


class CareInstructions(DiagnosisModel):
    watering: str = ""
    sunlight: str = ""
    soil: str = ""
    fertilizer: str = ""


class CareSchedule(DiagnosisModel):
    """Recurring built-in care. A frequency of 0 means not applicable."""
    watering_frequency: int
    fertilizing_frequency: int = 0
    pruning_schedule: str = ""


class PestAndDiseaseAnalysis(DiagnosisModel):
    title: str
    description: str = ""
    suggested_treatment: str = ""


class PlantDiagnosis(DiagnosisModel):
    """
    Result of an AI analysis of a plant photo.

    Holds species identity, health verdict, care instructions and the
    structured care schedule the alert and calendar engines run on.
    """
    species_name: str
    popular_name: str
    identification_confidence: IdentificationConfidence = IdentificationConfidence.MEDIUM
    alternative_species: Optional[List[AlternativeSpecies]] = None
    is_healthy: bool = True
    diagnosis: DiagnosisSummary
    care_instructions: CareInstructions = Field(default_factory=CareInstructions)
    care_schedule: CareSchedule
    general_tips: List[str] = Field(default_factory=list)
    pest_and_disease_analysis: Optional[PestAndDiseaseAnalysis] = None

    @field_validator("identification_confidence", mode="before")
    @classmethod
    def normalize_confidence(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class LastCare(BaseModel):
    """Most recent servicing of the built-in schedules"""
    watering: Timestamp
    fertilizing: Timestamp


class HistoryEntry(BaseModel):
    """A diary note. Never edited once written."""
    model_config = ConfigDict(frozen=True)

    id: str
    date: Timestamp
    note: str = ""
    image: Optional[str] = None


class Plant(BaseModel):
    """
    Plant aggregate owned by the garden store.

    Engines receive plants by value and hand back modified copies
    (model_copy), the store is the only place a plant is replaced.
    """

    id: str
    image: str
    location: PlantLocation = PlantLocation.INDOOR
    analysis: PlantDiagnosis
    history: List[HistoryEntry] = Field(default_factory=list)  # newest first
    last_care: LastCare
    custom_tasks: List[CustomCareTask] = Field(default_factory=list)
    active_care_plan: Optional[ActiveCarePlan] = None

    @property
    def name(self) -> str:
        return self.analysis.popular_name

    @property
    def is_healthy(self) -> bool:
        return self.analysis.is_healthy

    def find_custom_task(self, task_id: str) -> Optional[CustomCareTask]:
        for task in self.custom_tasks:
            if task.id == task_id:
                return task
        return None

    def matches(self, query: str) -> bool:
        """Case-insensitive match on popular or species name."""
        needle = query.strip().lower()
        return (
            needle in self.analysis.popular_name.lower()
            or needle in self.analysis.species_name.lower()
        )
