# 📄 File: plant_tracker/modules/garden/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the garden's data shapes (plants, tasks, plans, badges) in one place.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting the garden domain models and static catalogs.
# 🔗 Dependencies:
# Domain model modules
# 🔄 Connected Modules / Calls From:
# Domain services, application layer, infrastructure adapters, presentation schemas

from .achievement import ACHIEVEMENTS, Achievement, AchievementEvent, AchievementId
from .care_plan import (
    CARE_PLAN_TEMPLATES,
    ActiveCarePlan,
    CarePlanProgress,
    CarePlanStep,
    CarePlanTemplate,
    PlanTaskProgress,
)
from .care_task import (
    CUSTOM_TASK_FALLBACK_NAME,
    PREDEFINED_TASK_LABELS,
    CustomCareTask,
    OtherCareTask,
    PredefinedCareTask,
    TaskType,
    custom_task_adapter,
)
from .garden import (
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
from .plant import (
    AlternativeSpecies,
    CareInstructions,
    CareSchedule,
    DiagnosisSummary,
    HistoryEntry,
    IdentificationConfidence,
    LastCare,
    PestAndDiseaseAnalysis,
    Plant,
    PlantDiagnosis,
    PlantLocation,
)

__all__ = [
    "ACHIEVEMENTS",
    "Achievement",
    "AchievementEvent",
    "AchievementId",
    "CARE_PLAN_TEMPLATES",
    "ActiveCarePlan",
    "CarePlanProgress",
    "CarePlanStep",
    "CarePlanTemplate",
    "PlanTaskProgress",
    "CUSTOM_TASK_FALLBACK_NAME",
    "PREDEFINED_TASK_LABELS",
    "CustomCareTask",
    "OtherCareTask",
    "PredefinedCareTask",
    "TaskType",
    "custom_task_adapter",
    "CareAlert",
    "CareTaskKind",
    "ChatMessage",
    "ChatRole",
    "GardenStats",
    "SeasonalTip",
    "TaskOccurrence",
    "UserAppData",
    "UserProfile",
    "AlternativeSpecies",
    "CareInstructions",
    "CareSchedule",
    "DiagnosisSummary",
    "HistoryEntry",
    "IdentificationConfidence",
    "LastCare",
    "PestAndDiseaseAnalysis",
    "Plant",
    "PlantDiagnosis",
    "PlantLocation",
]
