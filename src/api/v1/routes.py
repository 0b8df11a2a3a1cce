"""
API v1 routes.

Defines REST endpoints for the competition registration API:
- POST /register - Submit a registration
- GET /stats - Aggregate registration statistics
"""

import logging
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_service, get_store
from src.api.models import (
    ErrorResponse,
    FieldErrorDetail,
    RateLimitResponse,
    RegisterResponse,
    StatsResponse,
    ValidationErrorResponse,
)
from src.api.rate_limit import enforce_register_limit
from src.domain.exceptions import EmailAlreadyRegistered, StorageError, SubmissionInvalid
from src.domain.ports import RegistrationStore
from src.domain.registration import RegistrationService
from src.domain.statistics import summarize

logger = logging.getLogger(__name__)

router = APIRouter(tags=["v1"])

SUCCESS_MESSAGE = "Registration successful! Check your email for confirmation."
WARNING_MESSAGE = (
    "Registration successful! However, there was an issue sending the confirmation "
    "email. Please contact us if you don't receive it."
)


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        429: {"model": RateLimitResponse, "description": "Too many registration attempts"},
        500: {"model": ErrorResponse, "description": "Registration could not be stored"},
    },
    dependencies=[Depends(enforce_register_limit)],
    summary="Register for the competition",
    description="Submit a registration. The record is stored before the confirmation "
    "email is sent; if sending fails the registration still succeeds with emailWarning set.",
)
def register(
    payload: Any = Body(None),
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse | JSONResponse:
    """
    Register a student for the competition.

    - **name**, **school**, **country**: non-empty text
    - **studentEmail**, **parentEmail**: valid email addresses
    - **grade**: 9-12, **age**: 13-19
    - **experience**, **motivation**: optional, up to 1000 characters

    Any body that is not a JSON object is rejected field by field with 400.
    """
    try:
        result = service.register(payload)
    except SubmissionInvalid as e:
        body = ValidationErrorResponse(
            details=[FieldErrorDetail(field=err.field, message=err.message) for err in e.errors]
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())
    except EmailAlreadyRegistered:
        return _error(
            status.HTTP_409_CONFLICT,
            "Email already registered",
            "This email address is already registered for the competition.",
        )
    except StorageError:
        # Details were logged by the service; never expose them to the client
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Registration failed",
            "An internal server error occurred. Please try again later.",
        )

    return RegisterResponse(
        message=WARNING_MESSAGE if result.email_warning else SUCCESS_MESSAGE,
        registration_id=result.record.id,
        email_warning=result.email_warning,
    )


@router.get(
    "/stats",
    response_model=StatsResponse,
    responses={500: {"model": ErrorResponse, "description": "Statistics unavailable"}},
    summary="Registration statistics",
    description="Total registrations, distinct countries and registrations per grade.",
)
def stats(store: RegistrationStore = Depends(get_store)) -> StatsResponse | JSONResponse:
    """Aggregate statistics over every stored registration."""
    try:
        summary = summarize(store.scan_all())
    except StorageError:
        logger.exception("GET /stats failed")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to retrieve statistics",
            "An error occurred while retrieving registration statistics.",
        )

    return StatsResponse(
        total_registrations=summary.total_registrations,
        countries=summary.countries,
        grades={str(grade): count for grade, count in summary.grades.items()},
        last_updated=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    )
