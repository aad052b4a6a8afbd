# 📄 File: plant_tracker/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The configuration center that reads all settings from environment variables
# and hands them to the rest of the Plant Tracker app in one organized place.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for all application configuration parameters.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - plant_tracker.main (application startup)
# - Supabase manager and garden repositories
# - OpenRouter assistant client
# - Garden session manager (timezone, calendar window)

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from plant_tracker import __description__, __title__, __version__


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default=__title__, description="Application name")
    APP_VERSION: str = Field(default=__version__, description="Application version")
    APP_DESCRIPTION: str = Field(default=__description__, description="Application description")
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log format: json or text")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=True, description="Auto-reload on changes")
    WORKERS: int = Field(default=1, description="Number of worker processes")

    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="CORS allow credentials")

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    STORAGE_BACKEND: str = Field(default="memory", description="Garden storage: memory or supabase")

    SUPABASE_URL: Optional[str] = Field(None, description="Supabase project URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, description="Supabase anonymous key")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, description="Supabase service role key")
    GARDEN_TABLE: str = Field(default="garden_profiles", description="Table holding one garden blob per user")

    # =========================================================================
    # AI / LLM (OpenRouter, OpenAI-compatible chat completions)
    # =========================================================================

    OPENROUTER_API_KEY: Optional[str] = Field(None, description="OpenRouter API key")
    OPENROUTER_API_URL: str = Field(
        default="https://openrouter.ai/api/v1",
        description="OpenRouter base URL"
    )
    OPENROUTER_MODEL: str = Field(
        default="anthropic/claude-3.5-sonnet",
        description="Model used for analysis, recommendations and chat"
    )
    AI_MAX_TOKENS: int = Field(default=2000, description="Max tokens for structured answers")
    AI_CHAT_MAX_TOKENS: int = Field(default=1000, description="Max tokens for chat replies")
    AI_TIMEOUT_SECONDS: int = Field(default=60, description="Timeout for a single AI request")
    AI_MAX_RETRIES: int = Field(default=3, description="Attempts per AI request")

    # =========================================================================
    # GARDEN BEHAVIOUR
    # =========================================================================

    GARDEN_TIMEZONE: str = Field(default="UTC", description="Timezone that defines 'today'")
    CALENDAR_PAST_CYCLES: int = Field(default=60, description="Recurrences projected into the past")
    CALENDAR_FUTURE_CYCLES: int = Field(default=60, description="Recurrences projected into the future")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Validate storage backend name."""
        allowed_backends = ["memory", "supabase"]
        if v.lower() not in allowed_backends:
            raise ValueError(f"Storage backend must be one of {allowed_backends}")
        return v.lower()

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    @field_validator("CALENDAR_PAST_CYCLES", "CALENDAR_FUTURE_CYCLES")
    @classmethod
    def validate_calendar_cycles(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Calendar cycle window cannot be negative")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def supabase_key(self) -> Optional[str]:
        """Prefer the service role key for server-side writes."""
        return self.SUPABASE_SERVICE_ROLE_KEY or self.SUPABASE_ANON_KEY

    def get_ai_api_config(self) -> dict:
        """Get AI/LLM API configuration."""
        return {
            "api_key": self.OPENROUTER_API_KEY,
            "api_url": self.OPENROUTER_API_URL,
            "model": self.OPENROUTER_MODEL,
            "max_tokens": self.AI_MAX_TOKENS,
            "chat_max_tokens": self.AI_CHAT_MAX_TOKENS,
            "timeout": self.AI_TIMEOUT_SECONDS,
            "max_retries": self.AI_MAX_RETRIES,
        }


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
