"""
Tests for recurrence evaluation and event filtering.
"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from models.events import Unparseable
from services.recurrence import (
    events_on,
    events_on_day,
    filter_events,
    is_active_on,
    occurrence_on,
)

UTC = timezone.utc


def at(year, month, day, hour=9, minute=30):
    return datetime(year, month, day, hour, minute, tzinfo=UTC)


# =============================================================================
# ONE-OFF EVENTS
# =============================================================================


def test_single_event_only_on_its_start_day(make_event):
    event = make_event()

    assert is_active_on(event, at(2024, 3, 10))
    assert not is_active_on(event, at(2024, 3, 9))
    assert not is_active_on(event, at(2024, 3, 11))


def test_single_event_not_active_before_start_or_after_end(make_event):
    event = make_event()

    assert not is_active_on(event, at(2024, 3, 10, 8, 59))
    assert is_active_on(event, at(2024, 3, 10, 10, 0))
    assert not is_active_on(event, at(2024, 3, 10, 10, 1))


def test_multi_day_event_only_shows_on_start_day(make_event):
    event = make_event(end_date=at(2024, 3, 12, 17, 0))

    assert is_active_on(event, at(2024, 3, 10, 12, 0))
    assert not is_active_on(event, at(2024, 3, 11, 12, 0))


def test_same_day_uses_calendar_zone(make_event):
    # 19:30 on the 10th in New York, 23:30 UTC
    event = make_event(
        start_date=datetime(2024, 3, 10, 23, 30, tzinfo=UTC),
        end_date=datetime(2024, 3, 11, 2, 0, tzinfo=UTC),
    )
    candidate = datetime(2024, 3, 11, 1, 0, tzinfo=UTC)

    assert is_active_on(event, candidate, ZoneInfo("America/New_York"))
    assert not is_active_on(event, candidate)


# =============================================================================
# RECURRING EVENTS
# =============================================================================


def test_daily_is_unbounded_without_end(make_event):
    event = make_event(
        start_date=at(2024, 1, 1, 0, 0),
        end_date=at(2024, 1, 1, 1, 0),
        is_recurring=True,
        frequency="daily",
    )

    assert is_active_on(event, at(2024, 1, 1))
    assert is_active_on(event, at(2024, 6, 15))
    assert is_active_on(event, at(2030, 1, 1))
    assert not is_active_on(event, at(2023, 12, 31))


def test_recurring_end_date_bounds_occurrences(make_event):
    event = make_event(
        start_date=at(2024, 1, 1, 9, 0),
        end_date=at(2024, 1, 1, 10, 0),
        is_recurring=True,
        frequency="daily",
        recurring_end_date=at(2024, 1, 31, 23, 59),
    )

    assert is_active_on(event, at(2024, 1, 31))
    assert not is_active_on(event, at(2024, 2, 1))


def test_weekly_selected_days(make_event):
    # 2024-01-01 is a Monday
    event = make_event(
        start_date=at(2024, 1, 1, 9, 0),
        end_date=at(2024, 1, 1, 10, 0),
        is_recurring=True,
        frequency="weekly",
        days_of_week=frozenset({1, 3}),
        recurring_end_date=at(2024, 2, 29, 23, 0),
    )

    for offset in range(56):
        candidate = at(2024, 1, 1) + timedelta(days=offset)
        expected = candidate.strftime("%A") in ("Monday", "Wednesday")
        assert is_active_on(event, candidate) is expected, candidate

    assert not is_active_on(event, at(2024, 3, 4))  # Monday after the end


def test_weekly_without_selection_uses_start_weekday(make_event):
    event = make_event(
        start_date=at(2024, 1, 1, 9, 0),
        end_date=at(2024, 1, 1, 10, 0),
        is_recurring=True,
        frequency="weekly",
        days_of_week=None,
    )

    assert is_active_on(event, at(2024, 1, 8))
    assert not is_active_on(event, at(2024, 1, 10))


def test_weekly_with_unparseable_days_degrades_to_start_weekday(make_event):
    event = make_event(
        start_date=at(2024, 1, 1, 9, 0),
        end_date=at(2024, 1, 1, 10, 0),
        is_recurring=True,
        frequency="weekly",
        days_of_week=Unparseable("mon,wed"),
    )

    assert is_active_on(event, at(2024, 1, 15))
    assert not is_active_on(event, at(2024, 1, 17))


def test_monthly_matches_day_of_month(make_event):
    event = make_event(
        start_date=at(2024, 1, 15, 9, 0),
        end_date=at(2024, 1, 15, 10, 0),
        is_recurring=True,
        frequency="monthly",
    )

    assert is_active_on(event, at(2024, 2, 15))
    assert is_active_on(event, at(2025, 7, 15))
    assert not is_active_on(event, at(2024, 2, 16))


def test_monthly_on_31st_skips_shorter_months(make_event):
    event = make_event(
        start_date=at(2024, 1, 31, 9, 0),
        end_date=at(2024, 1, 31, 10, 0),
        is_recurring=True,
        frequency="monthly",
    )

    for month, length in ((2, 29), (4, 30), (6, 30)):
        for day in range(1, length + 1):
            assert not is_active_on(event, at(2024, month, day)), (month, day)
    assert is_active_on(event, at(2024, 3, 31))


def test_unknown_frequency_is_never_active(make_event):
    event = make_event(is_recurring=True, frequency="yearly")

    assert not is_active_on(event, at(2024, 3, 10))
    assert not is_active_on(event, at(2025, 3, 10))


# =============================================================================
# FILTERS
# =============================================================================


def test_events_on_preserves_order_and_input(make_event):
    daily = make_event(id=1, is_recurring=True, frequency="daily")
    single = make_event(id=2)
    later = make_event(id=3, start_date=at(2024, 4, 1, 9, 0), end_date=at(2024, 4, 1, 10, 0))
    events = [daily, later, single]

    result = events_on(events, at(2024, 3, 10))

    assert [e.id for e in result] == [1, 2]
    assert events == [daily, later, single]


@pytest.mark.parametrize("bad", [None, {"error": "Failed"}, "events", 42])
def test_events_on_treats_non_sequences_as_empty(bad):
    assert events_on(bad, at(2024, 3, 10)) == []


def test_occurrence_on_keeps_local_start_time(make_event):
    tz = ZoneInfo("America/New_York")
    event = make_event(start_date=datetime(2024, 3, 1, 14, 0, tzinfo=UTC))  # 09:00 EST

    occurrence = occurrence_on(event, date(2024, 3, 20), tz)

    assert occurrence.astimezone(tz).hour == 9
    assert occurrence.astimezone(UTC).hour == 13  # EDT after the switch


def test_events_on_day_shows_one_off_on_its_day(make_event):
    event = make_event()
    tz = ZoneInfo("UTC")

    assert events_on_day([event], date(2024, 3, 10), tz) == [event]
    assert events_on_day([event], date(2024, 3, 9), tz) == []
    assert events_on_day([event], date(2024, 3, 11), tz) == []


def test_events_on_day_respects_until_time(make_event):
    event = make_event(
        start_date=at(2024, 1, 1, 9, 0),
        end_date=at(2024, 1, 1, 10, 0),
        is_recurring=True,
        frequency="daily",
        recurring_end_date=at(2024, 1, 5, 8, 0),
    )
    tz = ZoneInfo("UTC")

    assert events_on_day([event], date(2024, 1, 4), tz) == [event]
    assert events_on_day([event], date(2024, 1, 5), tz) == []


def test_filter_events_search_category_and_sort(make_event):
    events = [
        make_event(id=1, title="Dentist", category="personal", start_date=at(2024, 5, 2), end_date=at(2024, 5, 2, 11)),
        make_event(id=2, title="Sprint planning", description="Plan with the dentist team", category="work"),
        make_event(id=3, title="Birthday", category="birthday"),
    ]

    assert [e.id for e in filter_events(events, query="DENTIST")] == [2, 1]
    assert [e.id for e in filter_events(events, category="work")] == [2]
    assert [e.id for e in filter_events(events, category="all")] == [2, 3, 1]


def test_filter_events_upcoming_and_past(make_event):
    now = at(2024, 4, 1, 12, 0)
    past = make_event(id=1)
    upcoming = make_event(id=2, start_date=at(2024, 5, 1, 9), end_date=at(2024, 5, 1, 10))
    ongoing = make_event(id=3, start_date=at(2024, 4, 1, 11), end_date=at(2024, 4, 1, 13))

    assert [e.id for e in filter_events([past, upcoming, ongoing], when="upcoming", now=now)] == [2]
    assert [e.id for e in filter_events([past, upcoming, ongoing], when="past", now=now)] == [1]
