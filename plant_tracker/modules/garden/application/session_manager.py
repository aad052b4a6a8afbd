"""
Garden session manager.

Keeps one GardenService per user key for the lifetime of the process,
loading each garden from the repository the first time it is used.
"""

import asyncio
from typing import Dict, Optional

from plant_tracker.shared.config.settings import Settings, get_settings
from plant_tracker.shared.utils.logging import get_logger
from ..domain.repositories.garden_repository import GardenRepository
from ..domain.services.plant_assistant import PlantAssistant
from .garden_service import GardenService
from .garden_store import Clock

logger = get_logger(__name__)


def display_name_for(user_key: str) -> str:
    """'ana@example.com' -> 'ana'"""
    return user_key.split("@", 1)[0] or user_key


class GardenSessionManager:

    def __init__(
        self,
        repository: GardenRepository,
        assistant: PlantAssistant,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ):
        self.repository = repository
        self.assistant = assistant
        self.settings = settings or get_settings()
        self.clock = clock
        self._sessions: Dict[str, GardenService] = {}
        self._lock = asyncio.Lock()

    async def get(self, user_key: str) -> GardenService:
        session = self._sessions.get(user_key)
        if session is not None:
            return session

        async with self._lock:
            session = self._sessions.get(user_key)
            if session is None:
                session = await GardenService.load(
                    user_key,
                    self.repository,
                    self.assistant,
                    display_name=display_name_for(user_key),
                    clock=self.clock,
                    timezone_name=self.settings.GARDEN_TIMEZONE,
                    past_cycles=self.settings.CALENDAR_PAST_CYCLES,
                    future_cycles=self.settings.CALENDAR_FUTURE_CYCLES,
                )
                self._sessions[user_key] = session
                logger.log_user_action("open_garden", user_key, resource="garden")
        return session

    def drop(self, user_key: str) -> None:
        self._sessions.pop(user_key, None)

    @property
    def active_sessions(self) -> int:
        return len(self._sessions)
