# 📄 File: plant_tracker/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# Defines the special error types Plant Tracker uses to say clearly what went
# wrong, instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and serialization for API responses and error handling.
# 🔗 Dependencies:
# FastAPI HTTPException, typing, HTTP status constants
# 🔄 Connected Modules / Calls From:
# Garden store and engines, garden service, infrastructure adapters, API handlers

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import status


class PlantCareException(Exception):
    """
    Base exception class for the Plant Tracker application.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthenticationError(PlantCareException):
    """
    Exception raised when a request does not identify its user.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(PlantCareException):
    """
    Exception raised for data validation failures.
    Used when input is rejected before any state is touched.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if constraint:
            details["constraint"] = constraint

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(PlantCareException):
    """
    Exception raised when requested resource is not found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class BusinessRuleViolationError(PlantCareException):
    """
    Exception raised when a business rule is violated.
    """

    def __init__(
        self,
        message: str,
        rule: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "BUSINESS_RULE_VIOLATION"
    ):
        if not details:
            details = {}

        if rule:
            details["rule"] = rule

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code=error_code
        )


# =============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class ExternalServiceError(PlantCareException):
    """
    Exception raised when an external service (AI provider, storage) fails.
    """

    def __init__(
        self,
        message: str = "External service error",
        service_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        error_code: str = "EXTERNAL_SERVICE_ERROR"
    ):
        if not details:
            details = {}

        if service_name:
            details["service_name"] = service_name

        super().__init__(
            message=message,
            status_code=status_code,
            details=details,
            error_code=error_code
        )


class ExternalAPIError(ExternalServiceError):
    """Raised when an external HTTP API returns an error or cannot be reached."""

    def __init__(
        self,
        message: str,
        api_name: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if status_code is not None:
            details["upstream_status"] = status_code

        super().__init__(
            message=message,
            service_name=api_name,
            details=details,
            error_code="EXTERNAL_API_ERROR"
        )


class APITimeoutError(ExternalAPIError):
    """Raised when an external API call times out."""

    def __init__(self, api_name: str, timeout_seconds: int = 30):
        super().__init__(
            message=f"{api_name} did not respond within {timeout_seconds} seconds",
            api_name=api_name,
            details={"timeout_seconds": timeout_seconds},
        )
        self.error_code = "API_TIMEOUT"


class APIAuthenticationError(ExternalAPIError):
    """Raised when credentials for an external API are missing or rejected."""

    def __init__(self, api_name: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"Authentication failed for {api_name}",
            api_name=api_name,
        )
        self.error_code = "API_AUTHENTICATION_ERROR"


class APIQuotaExceededError(ExternalAPIError):
    """Raised when an external API reports rate limiting or an exhausted quota."""

    def __init__(self, api_name: str, retry_after: Optional[str] = None):
        details = {"retry_after": retry_after} if retry_after else {}
        super().__init__(
            message=f"Quota exceeded for {api_name}",
            api_name=api_name,
            details=details,
        )
        self.error_code = "API_QUOTA_EXCEEDED"


class RepositoryError(PlantCareException):
    """
    Exception raised when the persistence backend fails.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="REPOSITORY_ERROR"
        )


# =============================================================================
# PLANT CARE SPECIFIC EXCEPTIONS
# =============================================================================

class PlantNotFoundError(NotFoundError):
    """
    Exception raised when a plant is not found in the user's garden.
    """

    def __init__(self, plant_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Plant not found: {plant_id}",
            resource_type="plant",
            resource_id=plant_id,
            details=details
        )
        self.error_code = "PLANT_NOT_FOUND"


class CareScheduleError(ValidationError):
    """
    Exception raised for invalid care schedules or custom care tasks.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, field=field, value=value, details=details)
        self.error_code = "CARE_SCHEDULE_ERROR"


class CarePlanError(BusinessRuleViolationError):
    """
    Exception raised when a care plan cannot be activated.
    """

    def __init__(
        self,
        message: str,
        plan_id: Optional[str] = None,
        plant_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if plan_id:
            details["plan_id"] = plan_id
        if plant_id:
            details["plant_id"] = plant_id

        super().__init__(
            message=message,
            rule="care_plan",
            details=details,
            error_code="CARE_PLAN_ERROR"
        )


class PlantIdentificationError(ExternalServiceError):
    """
    Exception raised when the AI assistant returns an unusable answer.
    """

    def __init__(
        self,
        message: str = "Plant identification failed",
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            service_name=provider,
            details=details,
            error_code="PLANT_IDENTIFICATION_ERROR"
        )
