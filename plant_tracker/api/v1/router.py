# 📄 File: plant_tracker/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API, sending garden requests to the garden
# endpoints and checkups to the health endpoints.
# 🧪 Purpose (Technical Summary):
# Main API v1 router aggregation combining module routers under their route prefixes.
# 🔗 Dependencies:
# FastAPI, plant_tracker.api.v1.health, garden presentation router
# 🔄 Connected Modules / Calls From:
# plant_tracker.main

from fastapi import APIRouter

from plant_tracker.modules.garden.presentation.api.v1 import garden_router
from . import API_TAGS, ROUTE_PREFIXES, get_api_info
from .health import health_router

api_v1_router = APIRouter()

api_v1_router.include_router(
    garden_router,
    prefix=ROUTE_PREFIXES["garden"],
    tags=[API_TAGS["garden"]],
)


@api_v1_router.get("/",
                   summary="API v1 Information",
                   tags=["API Info"])
async def api_v1_info() -> dict:
    return {
        **get_api_info(),
        "documentation": {
            "openapi_schema": "/openapi.json",
            "swagger_ui": "/docs",
        },
    }


__all__ = ["api_v1_router", "health_router"]
