"""
API request and response models.

Pydantic models for FastAPI endpoint serialization and OpenAPI schema
generation. Responses use camelCase keys on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterResponse(CamelModel):
    """Response model for an accepted registration."""

    success: bool = True
    message: str
    registration_id: str
    email_warning: bool = False


class FieldErrorDetail(BaseModel):
    """One violated submission field."""

    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Response model for a rejected submission."""

    error: str = "Validation failed"
    details: list[FieldErrorDetail]


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    message: str


class RateLimitResponse(CamelModel):
    """Response model for throttled requests."""

    error: str
    message: str
    retry_after: int = Field(description="Seconds until the client may retry")


class StatsResponse(CamelModel):
    """Registration statistics."""

    total_registrations: int
    countries: list[str]
    grades: dict[str, int]
    last_updated: str


class HealthResponse(CamelModel):
    """Service liveness information."""

    status: str
    timestamp: str
    uptime_seconds: float
    environment: str
    email_configured: bool
