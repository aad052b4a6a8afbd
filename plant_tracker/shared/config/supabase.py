"""
Supabase client configuration for the garden persistence backend.
Handles lazy Supabase initialization with error reporting.
"""

import logging
from typing import Optional

from supabase import Client, create_client

from plant_tracker.shared.core.exceptions import RepositoryError
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class SupabaseManager:
    """
    Supabase client manager with lazy connection handling.
    Provides the database client used by the garden repository.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._client: Optional[Client] = None
        self.settings = settings or get_settings()

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.SUPABASE_URL and self.settings.supabase_key)

    @property
    def client(self) -> Client:
        """Get or create Supabase client with lazy initialization."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> Client:
        if not self.is_configured:
            raise RepositoryError(
                "Supabase is not configured",
                operation="connect",
                details={"missing": "SUPABASE_URL / SUPABASE_ANON_KEY"},
            )

        try:
            client = create_client(self.settings.SUPABASE_URL, self.settings.supabase_key)
            logger.info("Supabase client initialized successfully")
            return client

        except Exception as e:
            logger.error(f"Failed to initialize Supabase client: {e}")
            raise RepositoryError(f"Supabase initialization failed: {e}", operation="connect") from e

    def table(self, name: str):
        """Shortcut for a table query builder."""
        return self.client.table(name)

    async def health_check(self, table_name: str) -> dict:
        """
        Perform a lightweight read against the garden table.

        Returns:
            dict: Health status of the Supabase connection
        """
        health_status = {"status": "unhealthy", "backend": "supabase", "error": None}

        try:
            self.client.table(table_name).select("user_key").limit(1).execute()
            health_status["status"] = "healthy"
        except Exception as e:
            error_msg = f"Supabase health check failed: {e}"
            logger.error(error_msg)
            health_status["error"] = error_msg

        return health_status
