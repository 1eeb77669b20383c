"""Pydantic response models for API endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.validation import resolve_event_color
from models.events import CalendarDay, Event, Unparseable


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    database_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryResponse(CamelModel):
    value: str
    label: str
    color: str


class EventResponse(CamelModel):
    """Stored event as returned to clients."""

    id: int
    title: str
    description: str | None
    start_date: datetime
    end_date: datetime
    is_recurring: bool
    frequency: str | None
    days_of_week: list[int] | None
    recurring_end_date: datetime | None
    category: str | None
    color: str | None
    display_color: str
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_event(cls, event: Event) -> "EventResponse":
        days = event.days_of_week
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            start_date=event.start_date,
            end_date=event.end_date,
            is_recurring=event.is_recurring,
            frequency=event.frequency,
            # An undecodable payload is reported as no selection
            days_of_week=None if days is None or isinstance(days, Unparseable) else sorted(days),
            recurring_end_date=event.recurring_end_date,
            category=event.category,
            color=event.color,
            display_color=resolve_event_color(event),
            created_at=event.created_at,
            updated_at=event.updated_at,
        )


class CalendarDayResponse(CamelModel):
    date: date
    is_current_month: bool
    day_number: int
    events: list[EventResponse]

    @classmethod
    def from_day(cls, day: CalendarDay, events: list[Event]) -> "CalendarDayResponse":
        return cls(
            date=day.date,
            is_current_month=day.is_current_month,
            day_number=day.day_number,
            events=[EventResponse.from_event(e) for e in events],
        )


class MonthResponse(CamelModel):
    year: int
    month: int  # 1-12
    month_name: str
    days: list[CalendarDayResponse]


class DayResponse(CamelModel):
    date: date
    weekday: str
    events: list[EventResponse]


class WeekResponse(CamelModel):
    start: date
    end: date
    days: list[DayResponse]


class MessageResponse(BaseModel):
    message: str
