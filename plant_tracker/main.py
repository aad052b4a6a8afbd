# 📄 File: plant_tracker/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the Plant Tracker app, connects the garden storage
# and the AI botanist, and gets everything ready to answer requests from the mobile app.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: lifespan wiring of the garden repository,
# AI assistant and session manager, middleware setup, router registration and the
# PlantCareException error envelope.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - plant_tracker.shared.config.settings
# - Garden repositories, OpenRouter assistant and session manager
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - `plant-tracker` console script
# - tests (create_application with injected collaborators)

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plant_tracker.api.middleware import RequestLoggingMiddleware
from plant_tracker.api.v1.router import api_v1_router, health_router
from plant_tracker.modules.garden.application.garden_store import Clock
from plant_tracker.modules.garden.application.session_manager import GardenSessionManager
from plant_tracker.modules.garden.domain.repositories.garden_repository import GardenRepository
from plant_tracker.modules.garden.domain.services.plant_assistant import PlantAssistant
from plant_tracker.modules.garden.infrastructure import (
    InMemoryGardenRepository,
    OpenRouterAssistant,
    SupabaseGardenRepository,
)
from plant_tracker.shared.config.settings import Settings, get_settings
from plant_tracker.shared.config.supabase import SupabaseManager
from plant_tracker.shared.core.exceptions import PlantCareException
from plant_tracker.shared.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_repository(settings: Settings) -> GardenRepository:
    """Pick the garden storage backend named by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "supabase":
        return SupabaseGardenRepository(SupabaseManager(settings))
    return InMemoryGardenRepository()


def _error_response(request: Request, status_code: int, code: str, message: str,
                    details: Optional[dict] = None, timestamp: Optional[datetime] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "timestamp": (timestamp or datetime.now(timezone.utc)).isoformat(),
                "request_id": getattr(request.state, "request_id", None),
            }
        },
    )


def create_application(
    settings: Optional[Settings] = None,
    repository: Optional[GardenRepository] = None,
    assistant: Optional[PlantAssistant] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """
    Application factory function.

    Collaborators that are not passed in are built from settings at
    startup: the repository from STORAGE_BACKEND, the assistant from the
    OpenRouter configuration.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_FILE)
        logger.info("🌱 Plant Tracker API starting up...")

        garden_repository = repository if repository is not None else build_repository(settings)
        plant_assistant = assistant if assistant is not None else OpenRouterAssistant(settings)
        app.state.garden_sessions = GardenSessionManager(
            garden_repository, plant_assistant, settings=settings, clock=clock
        )
        logger.info(
            "✅ Garden services initialized",
            extra={"storage": type(garden_repository).__name__, "assistant": type(plant_assistant).__name__},
        )

        try:
            yield
        finally:
            logger.info("🔄 Plant Tracker API shutting down...")
            if assistant is None:
                await plant_assistant.close()
            logger.info("✅ Plant Tracker API shutdown complete")

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router, tags=["Health Check"])
    app.include_router(api_v1_router, prefix="/api/v1")

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(PlantCareException)
    async def plant_care_exception_handler(request: Request, exc: PlantCareException) -> JSONResponse:
        """Handle custom Plant Tracker application exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code}: {exc.message}", extra={"details": exc.details})
        return _error_response(request, exc.status_code, exc.error_code, exc.message, exc.details, exc.timestamp)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(
            request, 422, "VALIDATION_ERROR", "Request validation failed",
            {"errors": [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]},
        )

    @app.exception_handler(Exception)
    async def internal_server_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Internal server error: {exc}", exc_info=True)
        return _error_response(
            request, 500, "INTERNAL_SERVER_ERROR", "An internal server error occurred",
            {"error_type": type(exc).__name__} if settings.DEBUG else {},
        )

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": "/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_application()


def main():
    """Run the development server (`plant-tracker` console script)."""
    settings = get_settings()
    uvicorn.run(
        "plant_tracker.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
