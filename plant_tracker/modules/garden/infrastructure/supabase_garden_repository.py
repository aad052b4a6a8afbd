# 📄 File: plant_tracker/modules/garden/infrastructure/supabase_garden_repository.py
# 🧭 Purpose (Layman Explanation):
# Saves each gardener's whole garden into a Supabase table so it survives restarts and
# can be picked up again from any device.
# 🧪 Purpose (Technical Summary):
# GardenRepository backed by one Supabase (PostgREST) row per user key holding the
# UserAppData blob as JSON. Writes are upserts on user_key. The sync supabase client is
# driven from a worker thread so the event loop is never blocked.
# 🔗 Dependencies:
# supabase (via SupabaseManager), pydantic, asyncio
# 🔄 Connected Modules / Calls From:
# plant_tracker.main (STORAGE_BACKEND=supabase), GardenService

import asyncio
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from plant_tracker.shared.config.supabase import SupabaseManager
from plant_tracker.shared.core.exceptions import RepositoryError
from plant_tracker.shared.utils.logging import get_logger
from ..domain.models.garden import UserAppData
from ..domain.repositories.garden_repository import GardenRepository

logger = get_logger(__name__)


class SupabaseGardenRepository(GardenRepository):
    """
    Stores UserAppData in the `<GARDEN_TABLE>` table.

    Table layout: user_key (text, unique), data (jsonb), updated_at (timestamptz).
    """

    def __init__(self, manager: SupabaseManager, table_name: Optional[str] = None):
        self.manager = manager
        self.table_name = table_name or manager.settings.GARDEN_TABLE

    async def load_profile(self, user_key: str) -> Optional[UserAppData]:
        try:
            response = await asyncio.to_thread(self._select, user_key)
        except RepositoryError:
            raise
        except Exception as e:
            logger.error(f"Failed to load garden: {e}", extra={"user_key": user_key}, exc_info=True)
            raise RepositoryError(f"Failed to load garden: {e}", operation="load_profile") from e

        rows = response.data or []
        if not rows:
            return None

        try:
            return UserAppData.model_validate(rows[0]["data"])
        except (PydanticValidationError, KeyError, TypeError) as e:
            raise RepositoryError(
                "Stored garden data is corrupt",
                operation="load_profile",
                details={"user_key": user_key},
            ) from e

    async def save_profile(self, user_key: str, data: UserAppData) -> None:
        row = {
            "user_key": user_key,
            "data": data.model_dump(mode="json"),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            await asyncio.to_thread(self._upsert, row)
        except RepositoryError:
            raise
        except Exception as e:
            raise RepositoryError(f"Failed to save garden: {e}", operation="save_profile") from e

        logger.debug("Garden saved", extra={"user_key": user_key, "plants": len(data.plants)})

    async def health_check(self) -> dict:
        return await self.manager.health_check(self.table_name)

    def _select(self, user_key: str):
        return (
            self.manager.table(self.table_name)
            .select("data")
            .eq("user_key", user_key)
            .limit(1)
            .execute()
        )

    def _upsert(self, row: dict):
        return self.manager.table(self.table_name).upsert(row, on_conflict="user_key").execute()
