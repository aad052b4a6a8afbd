# 📄 File: plant_tracker/modules/garden/domain/repositories/garden_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for saving and loading everything a gardener has (plants, badges,
# chat, points) so it is still there next time they come back.
# 🧪 Purpose (Technical Summary):
# Repository interface for the per-user UserAppData blob, following the Repository pattern.
# 🔗 Dependencies:
# Domain models (UserAppData), typing, abc
# 🔄 Connected Modules / Calls From:
# GardenService, GardenSessionManager, Supabase and in-memory implementations

from abc import ABC, abstractmethod
from typing import Optional

from ..models.garden import UserAppData


class GardenRepository(ABC):
    """
    Repository interface for per-user garden data.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - One blob per opaque user key, saved whole after every commit
    - Methods return domain entities (UserAppData), not raw rows
    - All operations are async for non-blocking I/O
    """

    @abstractmethod
    async def load_profile(self, user_key: str) -> Optional[UserAppData]:
        """
        Load garden data for a user key.

        Returns:
            UserAppData if stored, None otherwise

        Raises:
            RepositoryError: If the backend fails
        """
        pass

    @abstractmethod
    async def save_profile(self, user_key: str, data: UserAppData) -> None:
        """
        Store garden data for a user key, replacing any previous version.

        Raises:
            RepositoryError: If the backend fails
        """
        pass

    async def health_check(self) -> dict:
        return {"status": "healthy", "backend": self.__class__.__name__}
