"""
Tests for month and week grid generation.
"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from services.calendar import (
    generate_month_grid,
    get_days_in_month,
    get_month_name,
    get_week_dates,
    get_weekday_name,
    grid_window,
    is_date_in_range,
    is_same_day,
)


@pytest.mark.parametrize("year", [1999, 2000, 2023, 2024, 2100])
@pytest.mark.parametrize("month_index", range(12))
def test_grid_has_42_contiguous_days(year, month_index):
    grid = generate_month_grid(year, month_index)

    assert len(grid) == 42
    for previous, current in zip(grid, grid[1:]):
        assert current.date - previous.date == timedelta(days=1)


@pytest.mark.parametrize("month_index", range(12))
def test_grid_starts_on_sunday_and_flags_current_month(month_index):
    grid = generate_month_grid(2025, month_index)

    assert grid[0].date.weekday() == 6  # Sunday
    current = [cell for cell in grid if cell.is_current_month]
    assert [cell.date for cell in current] == get_days_in_month(2025, month_index)
    assert all(cell.day_number == cell.date.day for cell in grid)


def test_leap_february():
    grid = generate_month_grid(2024, 1)

    # Feb 1, 2024 is a Thursday: four days of January lead in
    assert [cell.date for cell in grid[:4]] == [date(2024, 1, d) for d in (28, 29, 30, 31)]
    assert not any(cell.is_current_month for cell in grid[:4])
    assert sum(cell.is_current_month for cell in grid) == 29
    assert grid[4 + 29].date == date(2024, 3, 1)
    assert grid[-1].date == date(2024, 3, 9)


def test_month_starting_on_sunday_has_no_lead_in():
    # September 1, 2024 is a Sunday
    grid = generate_month_grid(2024, 8)

    assert grid[0].date == date(2024, 9, 1)
    assert grid[0].is_current_month
    assert grid[-1].date == date(2024, 10, 12)


def test_january_rolls_back_into_previous_year():
    grid = generate_month_grid(2025, 0)

    assert [cell.day_number for cell in grid[:3]] == [29, 30, 31]
    assert grid[0].date == date(2024, 12, 29)


def test_december_rolls_into_next_year():
    grid = generate_month_grid(2024, 11)

    trailing = [cell for cell in grid if cell.date.year == 2025]
    assert trailing[0].date == date(2025, 1, 1)
    assert trailing[0].day_number == 1
    assert not any(cell.is_current_month for cell in trailing)


def test_invalid_month_index_raises():
    with pytest.raises(ValueError):
        generate_month_grid(2024, 12)


def test_week_dates_start_on_sunday():
    # Wednesday
    week = get_week_dates(date(2024, 1, 3))

    assert week[0] == date(2023, 12, 31)
    assert week[-1] == date(2024, 1, 6)
    assert len(week) == 7


def test_week_of_a_sunday_starts_that_day():
    assert get_week_dates(date(2024, 3, 10))[0] == date(2024, 3, 10)


def test_grid_window_covers_whole_days_in_zone():
    tz = ZoneInfo("America/New_York")
    start, end = grid_window([date(2024, 3, 10), date(2024, 3, 11)], tz)

    assert start == datetime(2024, 3, 10, 5, 0, tzinfo=timezone.utc)
    assert end.astimezone(tz).date() == date(2024, 3, 11)
    assert end.astimezone(tz).hour == 23


def test_small_helpers():
    assert is_same_day(date(2024, 3, 10), datetime(2024, 3, 10, 23, 59))
    assert not is_same_day(date(2024, 3, 10), date(2023, 3, 10))
    assert is_date_in_range(datetime(2024, 1, 1), datetime(2024, 1, 1), datetime(2024, 1, 2))
    assert not is_date_in_range(datetime(2024, 1, 3), datetime(2024, 1, 1), datetime(2024, 1, 2))
    assert get_weekday_name(0) == "Sunday"
    assert get_month_name(11) == "December"
