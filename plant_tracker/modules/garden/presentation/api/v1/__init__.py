"""Garden API v1 routers."""

from .garden import garden_router

__all__ = ["garden_router"]
