"""
iCalendar (RFC 5545) export.

Each event becomes one VEVENT; recurring events carry an RRULE instead of
being expanded, so open-ended series stay a single entry and the importing
client computes occurrences. Serialization (text escaping, 75-octet line
folding, CRLF line endings) is done by ``icalendar``.
"""

from datetime import date, datetime, timezone

from icalendar import Calendar as iCalendar
from icalendar import Event as iEvent
from icalendar.prop import vInline

from core.config import ICS_PRODID, ICS_UID_DOMAIN
from models.events import Event, Unparseable

# Indexed by weekday, 0 = Sunday
ICS_DAY_CODES = ["SU", "MO", "TU", "WE", "TH", "FR", "SA"]


def _utc(value: datetime) -> datetime:
    """Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0)


def format_ics_date(value: datetime) -> str:
    """UTC basic format, e.g. 20240310T090000Z."""
    return _utc(value).strftime("%Y%m%dT%H%M%SZ")


def event_uid(event: Event) -> str:
    return f"event-{event.id}@{ICS_UID_DOMAIN}"


def build_rrule(event: Event) -> str | None:
    """
    RRULE value for a recurring event, or None for one-off events.

    Parts are ordered FREQ, BYDAY, UNTIL. A weekly event without a usable
    weekday selection (none, empty or undecodable) is exported without
    BYDAY rather than failing the export.
    """
    if not event.is_recurring or not event.frequency:
        return None

    rrule = f"FREQ={event.frequency.upper()}"

    days = event.days_of_week
    if event.frequency == "weekly" and days and not isinstance(days, Unparseable):
        byday = ",".join(ICS_DAY_CODES[d] for d in sorted(days))
        rrule += f";BYDAY={byday}"

    if event.recurring_end_date:
        rrule += f";UNTIL={format_ics_date(event.recurring_end_date)}"

    return rrule


def event_to_vevent(event: Event, dtstamp: datetime) -> iEvent:
    """Build the VEVENT component for one event."""
    vevent = iEvent()
    vevent.add("uid", event_uid(event))
    vevent.add("dtstart", _utc(event.start_date))
    vevent.add("dtend", _utc(event.end_date))
    vevent.add("summary", event.title)

    if event.description:
        vevent.add("description", event.description)

    if event.category:
        vevent.add("categories", [event.category])

    rrule = build_rrule(event)
    if rrule:
        # Added verbatim so the part order above is kept
        vevent.add("rrule", vInline(rrule), encode=False)

    vevent.add("dtstamp", dtstamp)
    return vevent


def export_ics(events: list[Event], now: datetime | None = None) -> str:
    """
    Serialize events into a VCALENDAR document, in input order.

    Args:
        events: Events to export
        now: Export time stamped on every VEVENT (defaults to the current time)

    Returns:
        The document text, CRLF-terminated
    """
    dtstamp = _utc(now or datetime.now(timezone.utc))

    cal = iCalendar()
    cal.add("version", "2.0")
    cal.add("prodid", ICS_PRODID)
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")

    for event in events:
        cal.add_component(event_to_vevent(event, dtstamp))

    # Insertion order, not icalendar's canonical property order
    return cal.to_ical(sorted=False).decode("utf-8")


def export_filename(today: date) -> str:
    """Suggested download name, e.g. calendar-export-2024-03-10.ics."""
    return f"calendar-export-{today.isoformat()}.ics"
