"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from plant_tracker.shared.config.settings import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.STORAGE_BACKEND == "memory"
    assert settings.GARDEN_TIMEZONE == "UTC"
    assert settings.CALENDAR_PAST_CYCLES == 60
    assert settings.CALENDAR_FUTURE_CYCLES == 60


def test_values_are_normalised() -> None:
    settings = Settings(_env_file=None, ENVIRONMENT="Production", LOG_LEVEL="debug", STORAGE_BACKEND="Supabase")

    assert settings.ENVIRONMENT == "production"
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.STORAGE_BACKEND == "supabase"


@pytest.mark.parametrize(
    "field, value",
    [
        ("ENVIRONMENT", "moon"),
        ("LOG_LEVEL", "LOUD"),
        ("STORAGE_BACKEND", "sqlite"),
        ("CORS_ORIGINS", "localhost:3000"),
        ("CALENDAR_PAST_CYCLES", -1),
    ],
)
def test_invalid_values_rejected(field: str, value) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})


def test_service_role_key_preferred() -> None:
    settings = Settings(_env_file=None, SUPABASE_ANON_KEY="anon", SUPABASE_SERVICE_ROLE_KEY="service")
    assert settings.supabase_key == "service"


def test_ai_config_bundle() -> None:
    config = Settings(_env_file=None, OPENROUTER_API_KEY="sk-1", AI_MAX_RETRIES=5).get_ai_api_config()

    assert config["api_key"] == "sk-1"
    assert config["max_retries"] == 5
