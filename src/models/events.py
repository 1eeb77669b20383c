"""
Data models for calendar events and month-grid cells.

Events are plain dataclasses built by the store from SQLite rows. The
weekday selection of a weekly event is decoded once at that boundary into
a frozenset, ``None`` or an ``Unparseable`` marker, so evaluation and export
never have to handle JSON themselves.
"""

import json
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo


class Unparseable:
    """Stored weekday payload that could not be decoded."""

    __slots__ = ("raw",)

    def __init__(self, raw: str):
        self.raw = raw

    def __eq__(self, other):
        return isinstance(other, Unparseable) and other.raw == self.raw

    def __hash__(self):
        return hash(("unparseable", self.raw))

    def __repr__(self):
        return f"Unparseable({self.raw!r})"


DaysOfWeek = frozenset[int] | Unparseable | None


def parse_days_of_week(raw: str | None) -> DaysOfWeek:
    """
    Decode a stored weekday list such as ``"[1, 3]"``.

    Returns None when nothing is stored and ``Unparseable`` when the payload
    is not a JSON list of integers 0-6 (0 = Sunday). Never raises.
    """
    if raw is None or raw == "":
        return None
    try:
        values = json.loads(raw)
    except (TypeError, ValueError):
        return Unparseable(raw)

    if not isinstance(values, list):
        return Unparseable(raw)
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 6:
            return Unparseable(raw)
    return frozenset(values)


def serialize_days_of_week(days: DaysOfWeek) -> str | None:
    """Encode a weekday selection for storage (inverse of parse_days_of_week)."""
    if days is None:
        return None
    if isinstance(days, Unparseable):
        return days.raw
    return json.dumps(sorted(days))


def weekday_index(d: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return (d.weekday() + 1) % 7


@dataclass
class Event:
    """A stored calendar event."""

    id: int
    title: str
    start_date: datetime
    end_date: datetime
    description: str | None = None
    is_recurring: bool = False
    frequency: str | None = None
    days_of_week: DaysOfWeek = None
    recurring_end_date: datetime | None = None
    category: str | None = None
    color: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CalendarDay:
    """One cell of a month grid."""

    date: date
    is_current_month: bool
    day_number: int


def ensure_utc(value: datetime, tz: tzinfo) -> datetime:
    """
    Convert a timestamp to UTC, whole seconds.

    Naive values are taken to be wall-clock time in ``tz``.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value.astimezone(timezone.utc).replace(microsecond=0)
