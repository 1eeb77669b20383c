"""
Recurrence evaluation and event filtering.

Decides whether an event is shown on a given date. Calendar-day comparisons
(same day, weekday, day of month) use the wall clock of ``tz`` when one is
given, otherwise the datetimes as passed in. Instant comparisons (before
start, after end) are zone-independent.
"""

from collections.abc import Sequence
from datetime import date, datetime, timezone, tzinfo

from models.events import Event, Unparseable, weekday_index


def _local(value: datetime, tz: tzinfo | None) -> datetime:
    return value.astimezone(tz) if tz is not None else value


def is_active_on(event: Event, candidate: datetime, tz: tzinfo | None = None) -> bool:
    """
    Check whether ``event`` should be displayed at ``candidate``.

    Rules, first match wins:
    1. Before the event start: no
    2. Recurring and past the recurrence end: no
    3. One-off: only on its start day, and not after its end
    4. Daily: yes
    5. Weekly: weekday is selected; without a usable selection, the start
       weekday
    6. Monthly: same day of month as the start (no end-of-month clamping,
       so a start on the 31st skips shorter months)
    7. Anything else: no
    """
    if candidate < event.start_date:
        return False

    if event.is_recurring and event.recurring_end_date and candidate > event.recurring_end_date:
        return False

    local_candidate = _local(candidate, tz)
    local_start = _local(event.start_date, tz)

    if not event.is_recurring:
        if candidate > event.end_date:
            return False
        return local_candidate.date() == local_start.date()

    if event.frequency == "daily":
        return True

    if event.frequency == "weekly":
        day_of_week = weekday_index(local_candidate)
        # Corrupt payloads degrade to the start weekday
        if event.days_of_week and not isinstance(event.days_of_week, Unparseable):
            return day_of_week in event.days_of_week
        return day_of_week == weekday_index(local_start)

    if event.frequency == "monthly":
        return local_candidate.day == local_start.day

    return False


def events_on(events: Sequence[Event], candidate: datetime, tz: tzinfo | None = None) -> list[Event]:
    """Events active at ``candidate``, in input order. Non-sequences yield []."""
    if not isinstance(events, (list, tuple)):
        return []
    return [event for event in events if is_active_on(event, candidate, tz)]


def occurrence_on(event: Event, day: date, tz: tzinfo) -> datetime:
    """
    The instant ``event`` would occur on ``day``.

    The calendar day in ``tz`` combined with the event's local start time,
    so the start-day check and the recurrence end behave like RRULE UNTIL.
    """
    local_start = event.start_date.astimezone(tz)
    return datetime.combine(day, local_start.time(), tzinfo=tz)


def events_on_day(events: Sequence[Event], day: date, tz: tzinfo) -> list[Event]:
    """Events to show in the cell for ``day``, in input order."""
    if not isinstance(events, (list, tuple)):
        return []
    return [event for event in events if is_active_on(event, occurrence_on(event, day, tz), tz)]


def filter_events(
    events: Sequence[Event],
    query: str | None = None,
    category: str | None = None,
    when: str = "all",
    now: datetime | None = None,
) -> list[Event]:
    """
    List-view filtering.

    Args:
        query: Case-insensitive substring of title or description
        category: Exact category match; None or "all" disables
        when: "all", "upcoming" (starts at or after now) or "past" (ended
            before now)
        now: Reference instant for ``when``

    Returns:
        Matching events sorted by start date
    """
    if not isinstance(events, (list, tuple)):
        return []
    filtered = list(events)
    now = now or datetime.now(timezone.utc)

    if query and query.strip():
        needle = query.strip().lower()
        filtered = [
            event
            for event in filtered
            if needle in event.title.lower()
            or (event.description and needle in event.description.lower())
        ]

    if category and category != "all":
        filtered = [event for event in filtered if event.category == category]

    if when == "upcoming":
        filtered = [event for event in filtered if event.start_date >= now]
    elif when == "past":
        filtered = [event for event in filtered if event.end_date < now]

    return sorted(filtered, key=lambda event: event.start_date)
