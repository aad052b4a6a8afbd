"""
In-process garden repository.

Used for local development and tests. Data is kept as JSON-mode dumps so
a loaded garden never shares objects with the session that saved it.
"""

from typing import Any, Dict, Optional

from ..domain.models.garden import UserAppData
from ..domain.repositories.garden_repository import GardenRepository


class InMemoryGardenRepository(GardenRepository):

    def __init__(self):
        self._rows: Dict[str, Dict[str, Any]] = {}
        self.save_count = 0

    async def load_profile(self, user_key: str) -> Optional[UserAppData]:
        row = self._rows.get(user_key)
        if row is None:
            return None
        return UserAppData.model_validate(row)

    async def save_profile(self, user_key: str, data: UserAppData) -> None:
        self._rows[user_key] = data.model_dump(mode="json")
        self.save_count += 1

    def __contains__(self, user_key: str) -> bool:
        return user_key in self._rows

    async def health_check(self) -> dict:
        return {"status": "healthy", "backend": "memory", "profiles": len(self._rows)}
