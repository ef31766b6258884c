"""
API v1 admin routes.

Event configuration, registration review and CSV export:
- POST /v1/admin/events            - create an event
- GET  /v1/admin/events            - list all events
- GET  /v1/admin/event-dates       - event dates for the date filter
- GET  /v1/admin/events-for-date   - events on one date
- GET  /v1/admin/registrations     - registrations for one event, with count
- GET  /v1/admin/export            - CSV export (streamed)

Authentication is handled in front of this service.
"""

import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse, StreamingResponse

from src.api.dependencies import (
    get_admin_query_service,
    get_csv_exporter,
    get_event_catalog,
    get_event_config_service,
)
from src.api.models import (
    AdminRegistrationsResponse,
    DateOption,
    ErrorResponse,
    EventCreateRequest,
    EventCreateResponse,
    EventResponse,
    RegistrationRow,
    ValidationErrorResponse,
)
from src.domain.admin import AdminQueryService
from src.domain.availability import date_label
from src.domain.catalog import EventCatalog, EventConfigService
from src.domain.exceptions import ValidationFailed
from src.domain.export import CSV_CONTENT_TYPE, CsvExporter, export_filename
from src.domain.models import NewEvent
from src.domain.result import Err

router = APIRouter(prefix="/admin", tags=["admin"])


def submission_label(value: datetime.datetime) -> str:
    """Display label such as 'June 15, 2024 9:30 AM'."""
    hour = value.hour % 12 or 12
    return f"{date_label(value.date())} {hour}:{value:%M %p}"


@router.post(
    "/events",
    response_model=EventCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"model": ValidationErrorResponse, "description": "Validation error"},
        503: {"model": ErrorResponse, "description": "Event could not be saved"},
    },
    summary="Create an event",
)
async def create_event(
    request_data: EventCreateRequest,
    service: EventConfigService = Depends(get_event_config_service),
) -> EventCreateResponse | JSONResponse:
    result = service.create_event(
        NewEvent(
            name=request_data.name,
            category=request_data.category,
            event_date=request_data.event_date,
            registration_start=request_data.registration_start_date,
            registration_end=request_data.registration_end_date,
        )
    )

    if isinstance(result, Err):
        if isinstance(result.error, ValidationFailed):
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={"detail": "Validation failed", "errors": result.error.fields},
            )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="There was an error saving the event. Please try again.",
        )

    return EventCreateResponse(
        id=result.value,
        message=f'Event "{request_data.name}" has been saved successfully.',
    )


@router.get("/events", response_model=list[EventResponse], summary="List all events")
async def list_events(
    catalog: EventCatalog = Depends(get_event_catalog),
) -> list[EventResponse]:
    return [
        EventResponse(
            id=event.id,
            name=event.name,
            category=event.category.value,
            category_label=event.category.label,
            event_date=event.event_date,
            registration_start_date=event.registration_start,
            registration_end_date=event.registration_end,
        )
        for event in catalog.list_all()
    ]


@router.get("/event-dates", response_model=list[DateOption], summary="Event dates")
async def event_dates(
    with_registrations: bool = False,
    service: AdminQueryService = Depends(get_admin_query_service),
    catalog: EventCatalog = Depends(get_event_catalog),
) -> list[DateOption]:
    """All event dates (or only those with registrations), newest first."""
    if with_registrations:
        dates = catalog.list_event_dates_with_registrations()
    else:
        dates = service.event_dates()
    return [DateOption(date=d, label=date_label(d)) for d in dates]


@router.get("/events-for-date", response_model=dict[int, str], summary="Events on a date")
async def events_for_date(
    date: datetime.date | None = None,
    service: AdminQueryService = Depends(get_admin_query_service),
) -> dict[int, str]:
    return service.events_for_date(date)


@router.get(
    "/registrations",
    response_model=AdminRegistrationsResponse,
    summary="Registrations for an event",
)
async def registrations_for_event(
    event_id: int | None = None,
    service: AdminQueryService = Depends(get_admin_query_service),
) -> AdminRegistrationsResponse:
    """Registrations for one event, newest first. Without event_id the result is empty."""
    if event_id is None:
        return AdminRegistrationsResponse(count=0, rows=[])

    registrations = service.registrations_for_event(event_id)
    rows = [
        RegistrationRow(
            name=r.full_name,
            email=r.email,
            event_date=date_label(r.event_date),
            college_name=r.college_name,
            department=r.department,
            submission_date=submission_label(r.created_at),
        )
        for r in registrations
    ]
    return AdminRegistrationsResponse(count=len(rows), rows=rows)


@router.get(
    "/export",
    response_class=StreamingResponse,
    summary="Export registrations as CSV",
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_registrations(
    event_id: int | None = None,
    service: AdminQueryService = Depends(get_admin_query_service),
    exporter: CsvExporter = Depends(get_csv_exporter),
) -> StreamingResponse:
    """Stream all registrations (optionally one event's) as a CSV attachment."""
    filename = export_filename(datetime.datetime.now())
    return StreamingResponse(
        exporter.export(service.iter_registrations(event_id)),
        media_type=CSV_CONTENT_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "max-age=0",
        },
    )
