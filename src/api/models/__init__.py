"""API Pydantic models."""

from .requests import EventPayload
from .responses import (
    CalendarDayResponse,
    CategoryResponse,
    DayResponse,
    ErrorCodes,
    ErrorResponse,
    EventResponse,
    HealthResponse,
    MessageResponse,
    MonthResponse,
    WeekResponse,
)

__all__ = [
    "CalendarDayResponse",
    "CategoryResponse",
    "DayResponse",
    "ErrorCodes",
    "ErrorResponse",
    "EventPayload",
    "EventResponse",
    "HealthResponse",
    "MessageResponse",
    "MonthResponse",
    "WeekResponse",
]
