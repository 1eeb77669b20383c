"""Event CRUD, search and export endpoints.

Handlers are plain functions: FastAPI runs them in its threadpool, and each
opens its own SQLite connection in that worker thread.
"""

from datetime import datetime
from typing import Annotated, Literal
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import Response

from api.dependencies import get_calendar_tz
from api.logging import record_error
from api.models import ErrorCodes, EventPayload, EventResponse, MessageResponse
from core.database import (
    EventNotFoundError,
    create_event,
    db_session,
    delete_event,
    get_event,
    list_events,
    update_event,
)
from core.validation import ValidationError, parse_id_list, prepare_event_fields
from models.events import ensure_utc
from services.ics import export_filename, export_ics
from services.recurrence import filter_events

router = APIRouter(prefix="/v1")


def _validation_failed(request: Request, e: ValidationError) -> HTTPException:
    record_error(request, ErrorCodes.VALIDATION_ERROR, e.message)
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "error": e.message,
            "code": ErrorCodes.VALIDATION_ERROR,
            "details": e.details,
        },
    )


def _not_found(request: Request, e: EventNotFoundError) -> HTTPException:
    record_error(request, ErrorCodes.NOT_FOUND, str(e))
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": "Event not found",
            "code": ErrorCodes.NOT_FOUND,
            "details": [f"id: {e.event_id}"],
        },
    )


def _fields_from_payload(payload: EventPayload, tz: ZoneInfo) -> dict:
    return prepare_event_fields(
        payload.title,
        payload.start_date,
        payload.end_date,
        tz,
        description=payload.description,
        is_recurring=payload.is_recurring,
        frequency=payload.frequency,
        days_of_week=payload.days_of_week,
        recurring_end_date=payload.recurring_end_date,
        category=payload.category,
    )


@router.get("/events", response_model=list[EventResponse])
def list_events_endpoint(
    request: Request,
    start_date: Annotated[datetime | None, Query(alias="startDate")] = None,
    end_date: Annotated[datetime | None, Query(alias="endDate")] = None,
    tz: ZoneInfo = Depends(get_calendar_tz),
):
    """
    List events, optionally limited to a date window.

    With a window, recurring events are always included since they can
    occur anywhere in it.
    """
    if (start_date is None) != (end_date is None):
        record_error(request, ErrorCodes.INVALID_REQUEST, "Incomplete date range")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Both startDate and endDate are required for a date range",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": [],
            },
        )

    with db_session() as conn:
        if start_date is not None:
            events = list_events(conn, ensure_utc(start_date, tz), ensure_utc(end_date, tz))
        else:
            events = list_events(conn)

    request.state.request_log.events_returned = len(events)
    return [EventResponse.from_event(e) for e in events]


@router.get("/events/search", response_model=list[EventResponse])
def search_events_endpoint(
    request: Request,
    q: str | None = None,
    category: str | None = None,
    when: Literal["all", "upcoming", "past"] = "all",
):
    """Filter the event list by text, category and upcoming/past."""
    with db_session() as conn:
        events = list_events(conn)

    events = filter_events(events, query=q, category=category, when=when)
    request.state.request_log.events_returned = len(events)
    return [EventResponse.from_event(e) for e in events]


@router.get("/events/export")
def export_events_endpoint(
    request: Request,
    ids: str | None = None,
    tz: ZoneInfo = Depends(get_calendar_tz),
):
    """
    Export events as an iCalendar file.

    ``ids`` is an optional comma-separated list; without any valid id all
    events are exported.
    """
    with db_session() as conn:
        events = list_events(conn, ids=parse_id_list(ids) or None)
    request.state.request_log.events_returned = len(events)

    now = datetime.now(tz)
    return Response(
        content=export_ics(events, now=now),
        media_type="text/calendar; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(now.date())}"'
        },
    )


@router.post(
    "/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED
)
def create_event_endpoint(
    request: Request,
    payload: EventPayload,
    tz: ZoneInfo = Depends(get_calendar_tz),
):
    """Create an event."""
    try:
        fields = _fields_from_payload(payload, tz)
    except ValidationError as e:
        raise _validation_failed(request, e)

    with db_session() as conn:
        event = create_event(conn, fields)
    request.state.request_log.event_id = event.id
    return EventResponse.from_event(event)


@router.get("/events/{event_id}", response_model=EventResponse)
def get_event_endpoint(request: Request, event_id: int):
    """Fetch a single event."""
    request.state.request_log.event_id = event_id
    try:
        with db_session() as conn:
            event = get_event(conn, event_id)
    except EventNotFoundError as e:
        raise _not_found(request, e)
    return EventResponse.from_event(event)


@router.put("/events/{event_id}", response_model=EventResponse)
def update_event_endpoint(
    request: Request,
    event_id: int,
    payload: EventPayload,
    tz: ZoneInfo = Depends(get_calendar_tz),
):
    """Replace every field of an event."""
    request.state.request_log.event_id = event_id
    try:
        fields = _fields_from_payload(payload, tz)
        with db_session() as conn:
            event = update_event(conn, event_id, fields)
    except ValidationError as e:
        raise _validation_failed(request, e)
    except EventNotFoundError as e:
        raise _not_found(request, e)
    return EventResponse.from_event(event)


@router.delete("/events/{event_id}", response_model=MessageResponse)
def delete_event_endpoint(request: Request, event_id: int):
    """Delete an event."""
    request.state.request_log.event_id = event_id
    try:
        with db_session() as conn:
            delete_event(conn, event_id)
    except EventNotFoundError as e:
        raise _not_found(request, e)
    return MessageResponse(message="Event deleted successfully")
