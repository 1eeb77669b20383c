"""
Event input validation and category color lookup.
"""

from datetime import datetime, tzinfo

from core.config import DEFAULT_EVENT_COLOR, EVENT_CATEGORIES, FREQUENCIES
from models.events import Event, ensure_utc


class ValidationError(ValueError):
    """Rejected event input. Raised before anything is written."""

    def __init__(self, message: str, details: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


def get_category_color(category: str | None) -> str:
    """Color for a category; unknown or missing categories get the default."""
    if not category:
        return DEFAULT_EVENT_COLOR
    for value, _label, color in EVENT_CATEGORIES:
        if value == category:
            return color
    return DEFAULT_EVENT_COLOR


def resolve_event_color(event: Event) -> str:
    """Stored color snapshot, else the category's current color."""
    return event.color or get_category_color(event.category)


def validate_event_input(
    title: str | None,
    start_date: datetime | None,
    end_date: datetime | None,
    is_recurring: bool = False,
    frequency: str | None = None,
    days_of_week: list[int] | None = None,
    recurring_end_date: datetime | None = None,
) -> None:
    """
    Validate a create/update submission.

    Checks, in order:
    1. Title, start and end are present
    2. End is after start
    3. Recurring events have a known frequency
    4. Weekly events select at least one weekday (integers 0-6)
    5. Recurrence end date, if any, is after start

    Raises:
        ValidationError: on the first failing check
    """
    if not title or not title.strip() or start_date is None or end_date is None:
        raise ValidationError("Title, start date, and end date are required")

    if start_date >= end_date:
        raise ValidationError("End date must be after start date")

    if is_recurring and not frequency:
        raise ValidationError("Frequency is required for recurring events")

    if is_recurring and frequency not in FREQUENCIES:
        raise ValidationError(
            "Invalid frequency",
            [f"Expected one of: {', '.join(FREQUENCIES)}", f"Received: {frequency}"],
        )

    if is_recurring and frequency == "weekly":
        if not days_of_week:
            raise ValidationError("At least one weekday must be selected for weekly events")
        invalid = [
            d for d in days_of_week if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6
        ]
        if invalid:
            raise ValidationError(
                "Invalid weekday selection",
                ["Weekdays are integers 0 (Sunday) to 6 (Saturday)", f"Received: {invalid}"],
            )

    if is_recurring and recurring_end_date is not None and recurring_end_date <= start_date:
        raise ValidationError("Recurring end date must be after start date")


def prepare_event_fields(
    title: str | None,
    start_date: datetime | None,
    end_date: datetime | None,
    tz: tzinfo,
    description: str | None = None,
    is_recurring: bool | None = False,
    frequency: str | None = None,
    days_of_week: list[int] | None = None,
    recurring_end_date: datetime | None = None,
    category: str | None = None,
) -> dict:
    """
    Validate a submission and normalize it into store columns.

    Recurrence fields only survive where they apply, and the category color
    is snapshotted here so later table changes do not touch stored events.
    """
    is_recurring = bool(is_recurring)
    if start_date is not None:
        start_date = ensure_utc(start_date, tz)
    if end_date is not None:
        end_date = ensure_utc(end_date, tz)
    if recurring_end_date is not None:
        recurring_end_date = ensure_utc(recurring_end_date, tz)

    validate_event_input(
        title,
        start_date,
        end_date,
        is_recurring=is_recurring,
        frequency=frequency,
        days_of_week=days_of_week,
        recurring_end_date=recurring_end_date,
    )

    weekly = is_recurring and frequency == "weekly"
    return {
        "title": title.strip(),
        "description": description or None,
        "start_date": start_date,
        "end_date": end_date,
        "is_recurring": is_recurring,
        "frequency": frequency if is_recurring else None,
        "days_of_week": frozenset(days_of_week) if weekly else None,
        "recurring_end_date": recurring_end_date if is_recurring else None,
        "category": category or None,
        "color": get_category_color(category) if category else None,
    }


def parse_id_list(value: str | None) -> list[int]:
    """
    Event ids from a comma-separated string, e.g. ``"1, 4,7"``.

    Entries that are not integers are skipped. Used by both the export
    endpoint and the export script so they select the same events.
    """
    if not value:
        return []
    ids = []
    for part in value.split(","):
        try:
            ids.append(int(part.strip()))
        except ValueError:
            continue
    return ids
