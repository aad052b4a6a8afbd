# 📄 File: plant_tracker/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Checkup endpoints that say whether the app is running and whether it can reach the
# place where gardens are saved.
# 🧪 Purpose (Technical Summary):
# Basic, detailed and liveness health endpoints. The detailed check asks the garden
# repository for its health and reports AI configuration and open session counts.
# 🔗 Dependencies:
# FastAPI, plant_tracker.shared.config.settings
# 🔄 Connected Modules / Calls From:
# plant_tracker.api.v1.router, monitoring systems, load balancers

from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from plant_tracker.shared.config.settings import get_settings
from plant_tracker.shared.utils.logging import SERVICE_NAME, get_logger

logger = get_logger(__name__)

health_router = APIRouter()

_app_start_time = datetime.now(timezone.utc)


@health_router.get("/health",
                   summary="Basic Health Check",
                   description="Basic health check endpoint for load balancers and monitoring")
async def health_check() -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": get_settings().APP_VERSION,
        }
    )


@health_router.get("/health/detailed",
                   summary="Detailed Health Check",
                   description="Health of the garden storage backend and AI configuration")
async def detailed_health_check(request: Request) -> JSONResponse:
    """
    Detailed health check.

    Storage problems make the service unhealthy (503); a missing AI key
    only degrades it, since everything but the AI features still works.
    """
    settings = get_settings()
    overall_status = "healthy"
    components = {}

    sessions = getattr(request.app.state, "garden_sessions", None)
    if sessions is None:
        components["storage"] = {"status": "unhealthy", "error": "Application not started"}
        overall_status = "unhealthy"
    else:
        try:
            storage = await sessions.repository.health_check()
        except Exception as e:
            logger.error(f"Storage health check failed: {e}")
            storage = {"status": "unhealthy", "error": str(e)}
        components["storage"] = storage
        components["sessions"] = {"status": "healthy", "active": sessions.active_sessions}
        if storage.get("status") != "healthy":
            overall_status = "unhealthy"

    if settings.OPENROUTER_API_KEY:
        components["ai"] = {"status": "healthy", "model": settings.OPENROUTER_MODEL}
    else:
        components["ai"] = {"status": "degraded", "error": "OPENROUTER_API_KEY not set"}
        if overall_status == "healthy":
            overall_status = "degraded"

    return JSONResponse(
        status_code=503 if overall_status == "unhealthy" else 200,
        content={
            "status": overall_status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "uptime_seconds": (datetime.now(timezone.utc) - _app_start_time).total_seconds(),
            "components": components,
        }
    )


@health_router.get("/health/live",
                   summary="Liveness Probe",
                   description="Returns 200 while the process is running")
async def liveness_probe() -> Response:
    return Response(status_code=200, content="OK")
