"""Month, week and day views plus the category table."""

from datetime import date
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_calendar_tz
from api.logging import record_error
from api.models import (
    CalendarDayResponse,
    CategoryResponse,
    DayResponse,
    ErrorCodes,
    EventResponse,
    MonthResponse,
    WeekResponse,
)
from core.config import EVENT_CATEGORIES
from core.database import db_session, list_events
from models.events import weekday_index
from services.calendar import (
    generate_month_grid,
    get_month_name,
    get_week_dates,
    get_weekday_name,
    grid_window,
)
from services.recurrence import events_on_day

router = APIRouter(prefix="/v1")


def _day_response(day: date, events: list, tz: ZoneInfo) -> DayResponse:
    day_events = sorted(events_on_day(events, day, tz), key=lambda e: e.start_date)
    return DayResponse(
        date=day,
        weekday=get_weekday_name(weekday_index(day)),
        events=[EventResponse.from_event(e) for e in day_events],
    )


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories():
    """The fixed category table with display colors."""
    return [
        CategoryResponse(value=value, label=label, color=color)
        for value, label, color in EVENT_CATEGORIES
    ]


@router.get("/calendar/month/{year}/{month}", response_model=MonthResponse)
def month_view(
    request: Request,
    year: int,
    month: int,
    tz: ZoneInfo = Depends(get_calendar_tz),
):
    """
    Month grid of 42 days, each with its events.

    ``month`` is 1-12 here; the grid functions use 0-based months.
    """
    if not 1 <= month <= 12 or not 2 <= year <= 9998:
        record_error(request, ErrorCodes.INVALID_REQUEST, "Month out of range")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid month",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": ["Expected month 1-12 and year 2-9998"],
            },
        )

    grid = generate_month_grid(year, month - 1)
    start, end = grid_window([cell.date for cell in grid], tz)
    with db_session() as conn:
        events = list_events(conn, start, end)
    request.state.request_log.events_returned = len(events)

    return MonthResponse(
        year=year,
        month=month,
        month_name=get_month_name(month - 1),
        days=[CalendarDayResponse.from_day(cell, events_on_day(events, cell.date, tz)) for cell in grid],
    )


@router.get("/calendar/week/{day}", response_model=WeekResponse)
def week_view(
    request: Request,
    day: date,
    tz: ZoneInfo = Depends(get_calendar_tz),
):
    """The Sunday-started week containing ``day``."""
    week = get_week_dates(day)
    start, end = grid_window(week, tz)
    with db_session() as conn:
        events = list_events(conn, start, end)
    request.state.request_log.events_returned = len(events)

    return WeekResponse(
        start=week[0],
        end=week[-1],
        days=[_day_response(d, events, tz) for d in week],
    )


@router.get("/calendar/day/{day}", response_model=DayResponse)
def day_view(
    request: Request,
    day: date,
    tz: ZoneInfo = Depends(get_calendar_tz),
):
    """Events on one day, earliest first."""
    start, end = grid_window([day], tz)
    with db_session() as conn:
        events = list_events(conn, start, end)
    response = _day_response(day, events, tz)
    request.state.request_log.events_returned = len(response.events)
    return response
