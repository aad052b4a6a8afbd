# 📄 File: plant_tracker/modules/garden/presentation/api/v1/garden.py
# 🧭 Purpose (Layman Explanation):
# All the web endpoints of the garden: adding and identifying plants, ticking off care
# tasks, care plans, the calendar, reminders, badges, points and the botanist chat.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router over the caller's GardenService. Endpoints translate HTTP input into
# service calls and domain values into response schemas; domain exceptions propagate to
# the application-level PlantCareException handler.
#
# 🔗 Dependencies:
# - FastAPI router, Depends, Path, Query, status codes
# - GardenService (via presentation dependencies)
# - Garden API schemas and domain models
#
# 🔄 Connected Modules / Calls From:
# - plant_tracker.api.v1.router (mounted under /api/v1/garden)

"""
Garden API Endpoints

Plants:
- POST /plants/analyze, POST /plants, GET /plants, GET/DELETE /plants/{plant_id}
- POST /plants/{plant_id}/history
- POST /plants/{plant_id}/tasks/complete, PATCH /plants/{plant_id}/schedule
- POST/PATCH/DELETE /plants/{plant_id}/custom-tasks[/{task_id}]
- GET /plants/{plant_id}/care-plans, POST/DELETE /plants/{plant_id}/care-plan,
  GET /plants/{plant_id}/care-plan/progress
- POST /plants/{plant_id}/identification

Garden-wide views:
- GET /alerts, GET /calendar/{year}/{month}, GET /calendar/days/{day}
- GET /dashboard, GET /achievements, GET /profile
- GET /recommendations, GET/POST /chat
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from plant_tracker.shared.core.exceptions import NotFoundError, PlantNotFoundError
from plant_tracker.shared.utils.dates import format_due_date
from ....application.garden_service import (
    AnalysisOutcome,
    GardenService,
    IdentificationResult,
    RecommendationOutcome,
)
from ....domain.models.care_plan import CarePlanProgress
from ....domain.models.care_task import CustomCareTask
from ....domain.models.garden import CareAlert, ChatMessage, TaskOccurrence
from ....domain.models.plant import HistoryEntry, Plant
from ....domain.services.schedule_engine import ScheduleEngine
from ...dependencies import get_garden
from ..schemas import (
    AchievementResponse,
    ActivateCarePlanRequest,
    AlertResponse,
    AnalyzeImageRequest,
    CalendarDayResponse,
    CalendarMonthResponse,
    CarePlanTemplateResponse,
    ChatHistoryResponse,
    ChatRequest,
    CompleteTaskRequest,
    CustomTaskCreateRequest,
    CustomTaskUpdateRequest,
    DashboardResponse,
    DeletedResponse,
    HistoryEntryRequest,
    PlantCreateRequest,
    ProfileResponse,
    ReidentifyRequest,
    ScheduleUpdateRequest,
)

garden_router = APIRouter()


def _found(value, plant_id: str):
    """Store mutations return None when the plant vanished in between."""
    if value is None:
        raise PlantNotFoundError(plant_id)
    return value


def _alert_responses(garden: GardenService, alerts: List[CareAlert]) -> List[AlertResponse]:
    now = garden.store.now()
    return [
        AlertResponse(**alert.model_dump(), due_label=format_due_date(alert.due_date, now))
        for alert in alerts
    ]


def _profile_response(garden: GardenService) -> ProfileResponse:
    profile = garden.store.profile
    return ProfileResponse(
        name=profile.name,
        growth_points=profile.growth_points,
        level=profile.level,
        level_title=garden.store.level_title(),
        level_progress=garden.store.level_progress(),
    )


# =========================================================================
# PLANTS
# =========================================================================

@garden_router.post(
    "/plants/analyze",
    response_model=AnalysisOutcome,
    summary="Analyze a plant photo",
    description="Ask the AI botanist for an identification and care diagnosis. Nothing is saved.",
)
async def analyze_plant(
    body: AnalyzeImageRequest,
    garden: GardenService = Depends(get_garden),
) -> AnalysisOutcome:
    return await garden.analyze_image(body.image)


@garden_router.post(
    "/plants",
    response_model=Plant,
    status_code=status.HTTP_201_CREATED,
    summary="Add a plant",
)
async def add_plant(
    body: PlantCreateRequest,
    garden: GardenService = Depends(get_garden),
) -> Plant:
    return await garden.add_plant(body.image, body.analysis, body.location)


@garden_router.get("/plants", response_model=List[Plant], summary="List or search plants")
async def list_plants(
    q: Optional[str] = Query(None, description="Case-insensitive match on popular or species name"),
    garden: GardenService = Depends(get_garden),
) -> List[Plant]:
    return garden.store.search_plants(q or "")


@garden_router.get("/plants/{plant_id}", response_model=Plant, summary="Get a plant")
async def get_plant(plant_id: str, garden: GardenService = Depends(get_garden)) -> Plant:
    return garden.store.require_plant(plant_id)


@garden_router.delete("/plants/{plant_id}", response_model=DeletedResponse, summary="Delete a plant")
async def delete_plant(plant_id: str, garden: GardenService = Depends(get_garden)) -> DeletedResponse:
    garden.store.require_plant(plant_id)
    return DeletedResponse(deleted=await garden.delete_plant(plant_id))


@garden_router.post(
    "/plants/{plant_id}/history",
    response_model=HistoryEntry,
    status_code=status.HTTP_201_CREATED,
    summary="Write a diary entry",
)
async def add_history_entry(
    plant_id: str,
    body: HistoryEntryRequest,
    garden: GardenService = Depends(get_garden),
) -> HistoryEntry:
    garden.store.require_plant(plant_id)
    return _found(await garden.add_history_entry(plant_id, body.note, body.image), plant_id)


# =========================================================================
# CARE TASKS & SCHEDULE
# =========================================================================

@garden_router.post(
    "/plants/{plant_id}/tasks/complete",
    response_model=Plant,
    summary="Mark a care task as done",
)
async def complete_task(
    plant_id: str,
    body: CompleteTaskRequest,
    garden: GardenService = Depends(get_garden),
) -> Plant:
    plant = garden.store.require_plant(plant_id)
    if body.custom_task_id and plant.find_custom_task(body.custom_task_id) is None:
        raise NotFoundError("Custom task not found", resource_type="custom_task", resource_id=body.custom_task_id)
    return _found(await garden.complete_task(plant_id, body.kind, body.custom_task_id), plant_id)


@garden_router.patch("/plants/{plant_id}/schedule", response_model=Plant, summary="Change care frequencies")
async def update_schedule(
    plant_id: str,
    body: ScheduleUpdateRequest,
    garden: GardenService = Depends(get_garden),
) -> Plant:
    garden.store.require_plant(plant_id)
    return _found(await garden.update_schedule(plant_id, **body.model_dump(exclude_unset=True)), plant_id)


@garden_router.post(
    "/plants/{plant_id}/custom-tasks",
    response_model=CustomCareTask,
    status_code=status.HTTP_201_CREATED,
    summary="Add a recurring custom task",
)
async def add_custom_task(
    plant_id: str,
    body: CustomTaskCreateRequest,
    garden: GardenService = Depends(get_garden),
) -> CustomCareTask:
    garden.store.require_plant(plant_id)
    task = await garden.add_custom_task(plant_id, body.type, body.frequency_days, body.custom_name)
    return _found(task, plant_id)


@garden_router.patch(
    "/plants/{plant_id}/custom-tasks/{task_id}",
    response_model=CustomCareTask,
    summary="Edit a custom task",
)
async def update_custom_task(
    plant_id: str,
    task_id: str,
    body: CustomTaskUpdateRequest,
    garden: GardenService = Depends(get_garden),
) -> CustomCareTask:
    garden.store.require_plant(plant_id)
    task = await garden.update_custom_task(plant_id, task_id, **body.model_dump(exclude_unset=True))
    if task is None:
        raise NotFoundError("Custom task not found", resource_type="custom_task", resource_id=task_id)
    return task


@garden_router.delete(
    "/plants/{plant_id}/custom-tasks/{task_id}",
    response_model=DeletedResponse,
    summary="Remove a custom task",
)
async def remove_custom_task(
    plant_id: str,
    task_id: str,
    garden: GardenService = Depends(get_garden),
) -> DeletedResponse:
    garden.store.require_plant(plant_id)
    return DeletedResponse(deleted=await garden.remove_custom_task(plant_id, task_id))


# =========================================================================
# CARE PLANS
# =========================================================================

@garden_router.get(
    "/plants/{plant_id}/care-plans",
    response_model=List[CarePlanTemplateResponse],
    summary="Care plans that can be started on this plant",
)
async def available_care_plans(
    plant_id: str,
    garden: GardenService = Depends(get_garden),
) -> List[CarePlanTemplateResponse]:
    garden.store.require_plant(plant_id)
    return [CarePlanTemplateResponse.from_template(t) for t in garden.store.available_care_plans(plant_id)]


@garden_router.post("/plants/{plant_id}/care-plan", response_model=Plant, summary="Start a care plan")
async def activate_care_plan(
    plant_id: str,
    body: ActivateCarePlanRequest,
    garden: GardenService = Depends(get_garden),
) -> Plant:
    garden.store.require_plant(plant_id)
    return _found(await garden.activate_care_plan(plant_id, body.template_id), plant_id)


@garden_router.delete("/plants/{plant_id}/care-plan", response_model=Plant, summary="Cancel the active care plan")
async def cancel_care_plan(plant_id: str, garden: GardenService = Depends(get_garden)) -> Plant:
    garden.store.require_plant(plant_id)
    return _found(await garden.cancel_care_plan(plant_id), plant_id)


@garden_router.get(
    "/plants/{plant_id}/care-plan/progress",
    response_model=Optional[CarePlanProgress],
    summary="Progress of the active care plan",
)
async def care_plan_progress(
    plant_id: str,
    garden: GardenService = Depends(get_garden),
) -> Optional[CarePlanProgress]:
    garden.store.require_plant(plant_id)
    return garden.store.care_plan_progress(plant_id)


# =========================================================================
# IDENTIFICATION
# =========================================================================

@garden_router.post(
    "/plants/{plant_id}/identification",
    response_model=IdentificationResult,
    summary="Suggest a different species",
    description="The AI checks the suggestion against the photo and updates the plant if it agrees.",
)
async def reidentify_plant(
    plant_id: str,
    body: ReidentifyRequest,
    garden: GardenService = Depends(get_garden),
) -> IdentificationResult:
    return await garden.reidentify_plant(plant_id, body.suggestion)


# =========================================================================
# GARDEN-WIDE VIEWS
# =========================================================================

@garden_router.get("/alerts", response_model=List[AlertResponse], summary="Overdue care tasks")
async def list_alerts(garden: GardenService = Depends(get_garden)) -> List[AlertResponse]:
    return _alert_responses(garden, garden.store.alerts())


@garden_router.get(
    "/calendar/{year}/{month}",
    response_model=CalendarMonthResponse,
    summary="Month view of projected care tasks",
)
async def calendar_month(
    # Sunday-first weeks of January 1 and December 9999 spill outside datetime's years
    year: int = Path(..., ge=2, le=9998),
    month: int = Path(..., ge=1, le=12),
    garden: GardenService = Depends(get_garden),
) -> CalendarMonthResponse:
    projection = garden.store.calendar()
    days = [
        CalendarDayResponse(
            day=day,
            is_current_month=in_month,
            tasks=ScheduleEngine.tasks_on(projection, day),
        )
        for day, in_month in ScheduleEngine.month_grid(year, month)
    ]
    return CalendarMonthResponse(year=year, month=month, days=days)


@garden_router.get(
    "/calendar/days/{day}",
    response_model=List[TaskOccurrence],
    summary="Projected care tasks on one day",
)
async def calendar_day(day: date, garden: GardenService = Depends(get_garden)) -> List[TaskOccurrence]:
    return garden.store.tasks_on(day)


@garden_router.get("/dashboard", response_model=DashboardResponse, summary="Garden overview")
async def dashboard(garden: GardenService = Depends(get_garden)) -> DashboardResponse:
    return DashboardResponse(
        profile=_profile_response(garden),
        stats=garden.store.garden_stats(),
        alerts=_alert_responses(garden, garden.store.alerts()),
        seasonal_tip=garden.store.seasonal_tip(),
    )


@garden_router.get("/achievements", response_model=List[AchievementResponse], summary="All badges")
async def list_achievements(garden: GardenService = Depends(get_garden)) -> List[AchievementResponse]:
    return AchievementResponse.catalog(garden.store.unlocked_achievements)


@garden_router.get("/profile", response_model=ProfileResponse, summary="Points and level")
async def get_profile(garden: GardenService = Depends(get_garden)) -> ProfileResponse:
    return _profile_response(garden)


@garden_router.get(
    "/recommendations",
    response_model=RecommendationOutcome,
    summary="Plants that would suit this garden",
)
async def recommendations(garden: GardenService = Depends(get_garden)) -> RecommendationOutcome:
    return await garden.recommend()


# =========================================================================
# CHAT
# =========================================================================

@garden_router.get("/chat", response_model=ChatHistoryResponse, summary="Conversation with the botanist")
async def chat_history(garden: GardenService = Depends(get_garden)) -> ChatHistoryResponse:
    return ChatHistoryResponse(messages=garden.store.chat_history)


@garden_router.post("/chat", response_model=ChatMessage, summary="Ask the botanist")
async def send_chat_message(body: ChatRequest, garden: GardenService = Depends(get_garden)) -> ChatMessage:
    return await garden.send_chat_message(body.text)
