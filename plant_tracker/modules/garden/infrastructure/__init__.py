"""Garden infrastructure: persistence backends and the AI assistant adapter."""

from .memory_garden_repository import InMemoryGardenRepository
from .openrouter_assistant import OpenRouterAssistant
from .supabase_garden_repository import SupabaseGardenRepository

__all__ = ["InMemoryGardenRepository", "OpenRouterAssistant", "SupabaseGardenRepository"]
