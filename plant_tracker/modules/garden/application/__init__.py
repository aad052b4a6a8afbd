"""Garden application layer: state store, async service and session manager."""

from .garden_service import GardenService
from .garden_store import GardenStore
from .session_manager import GardenSessionManager

__all__ = ["GardenService", "GardenStore", "GardenSessionManager"]
