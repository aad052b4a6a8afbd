"""Tests for the exception hierarchy's HTTP mapping."""

import pytest

from plant_tracker.shared.core.exceptions import (
    APIQuotaExceededError,
    AuthenticationError,
    CarePlanError,
    CareScheduleError,
    ExternalServiceError,
    PlantIdentificationError,
    PlantNotFoundError,
    RepositoryError,
)


@pytest.mark.parametrize(
    "exception, status_code, code",
    [
        (AuthenticationError("no key"), 401, "AUTHENTICATION_ERROR"),
        (PlantNotFoundError("p1"), 404, "PLANT_NOT_FOUND"),
        (CareScheduleError("bad", field="frequency_days", value=0), 422, "CARE_SCHEDULE_ERROR"),
        (CarePlanError("busy", plan_id="RECOVERY_PLAN"), 400, "CARE_PLAN_ERROR"),
        (PlantIdentificationError("garbled", provider="openrouter"), 502, "PLANT_IDENTIFICATION_ERROR"),
        (APIQuotaExceededError("openrouter", "30"), 502, "API_QUOTA_EXCEEDED"),
        (RepositoryError("down", operation="save_profile"), 500, "REPOSITORY_ERROR"),
    ],
)
def test_status_and_error_code(exception, status_code: int, code: str) -> None:
    assert exception.status_code == status_code
    assert exception.error_code == code


def test_details_are_collected() -> None:
    error = CareScheduleError("bad", field="frequency_days", value=0)
    assert error.details == {"field": "frequency_days", "value": "0"}

    plan_error = CarePlanError("busy", plan_id="RECOVERY_PLAN", plant_id="p1")
    assert plan_error.details["plan_id"] == "RECOVERY_PLAN"
    assert plan_error.details["plant_id"] == "p1"


def test_ai_failures_are_external_service_errors() -> None:
    assert isinstance(PlantIdentificationError(), ExternalServiceError)
    assert isinstance(APIQuotaExceededError("openrouter"), ExternalServiceError)


def test_to_dict() -> None:
    body = PlantNotFoundError("p1").to_dict()["error"]
    assert body["code"] == "PLANT_NOT_FOUND"
    assert body["status_code"] == 404
    assert body["details"]["resource_id"] == "p1"
