"""
API v1 routes.

Public endpoints for the registration flow:
- GET  /v1/availability/categories - categories with an open event
- GET  /v1/availability/dates      - open event dates for a category
- GET  /v1/availability/events     - open events for a category and date
- POST /v1/registrations           - submit a registration
"""

import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_availability_resolver, get_registration_service
from src.api.models import (
    CategoryOption,
    DateOption,
    ErrorResponse,
    RegistrationRequest,
    RegistrationResponse,
    ValidationErrorResponse,
)
from src.domain.availability import AvailabilityResolver, date_label
from src.domain.exceptions import DuplicateRegistration, EventUnavailable, ValidationFailed
from src.domain.models import RegistrationSubmission
from src.domain.registration import RegistrationService
from src.domain.result import Err

router = APIRouter(tags=["v1"])


@router.get(
    "/availability/categories",
    response_model=list[CategoryOption],
    summary="Categories open for registration",
)
async def available_categories(
    resolver: AvailabilityResolver = Depends(get_availability_resolver),
) -> list[CategoryOption]:
    """Categories with at least one event whose registration window contains today."""
    categories = sorted(resolver.available_categories(), key=lambda c: c.value)
    return [CategoryOption(value=c.value, label=c.label) for c in categories]


@router.get(
    "/availability/dates",
    response_model=list[DateOption],
    summary="Open event dates for a category",
)
async def available_dates(
    category: str = "",
    resolver: AvailabilityResolver = Depends(get_availability_resolver),
) -> list[DateOption]:
    return [DateOption(date=d, label=date_label(d)) for d in resolver.available_dates(category)]


@router.get(
    "/availability/events",
    response_model=dict[int, str],
    summary="Open events for a category and date",
)
async def available_events(
    category: str = "",
    date: datetime.date | None = None,
    resolver: AvailabilityResolver = Depends(get_availability_resolver),
) -> dict[int, str]:
    """Event id -> name, ordered by name."""
    return resolver.available_event_names(category, date)


@router.post(
    "/registrations",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Event not available"},
        409: {"model": ErrorResponse, "description": "Already registered on this date"},
        422: {"model": ValidationErrorResponse, "description": "Validation error"},
        503: {"model": ErrorResponse, "description": "Registration could not be saved"},
    },
    summary="Register for an event",
    description="Submit registrant details for an event whose registration window is open. "
    "A confirmation is sent to the registrant on success.",
)
async def register(
    request_data: RegistrationRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationResponse | JSONResponse:
    submission = RegistrationSubmission(
        full_name=request_data.full_name,
        email=request_data.email,
        college_name=request_data.college_name,
        department=request_data.department,
        event_id=request_data.event_id,
        category=request_data.category,
    )

    result = service.register(submission)

    if isinstance(result, Err):
        error = result.error
        if isinstance(error, ValidationFailed):
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={"detail": "Validation failed", "errors": error.fields},
            )
        if isinstance(error, DuplicateRegistration):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="You have already registered for an event on this date "
                "with this email address.",
            )
        if isinstance(error, EventUnavailable):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="The selected event is no longer available.",
            )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="There was an error processing your registration. Please try again.",
        )

    return RegistrationResponse(
        id=result.value,
        message=f"Thank you for registering! A confirmation email has been sent to "
        f"{request_data.email}.",
    )
