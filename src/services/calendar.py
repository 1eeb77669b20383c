"""
Month and week grids for calendar views.
"""

import calendar
from datetime import date, datetime, time, timedelta, tzinfo

from core.config import GRID_CELLS
from models.events import CalendarDay, weekday_index

WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def _adjacent_month(year: int, month_index: int, step: int) -> tuple[int, int]:
    """(year, month_index) one month before (step=-1) or after (step=1)."""
    total = year * 12 + month_index + step
    return total // 12, total % 12


def get_days_in_month(year: int, month_index: int) -> list[date]:
    """Every date of a month. month_index is 0-based."""
    days_in_month = calendar.monthrange(year, month_index + 1)[1]
    return [date(year, month_index + 1, day) for day in range(1, days_in_month + 1)]


def generate_month_grid(year: int, month_index: int) -> list[CalendarDay]:
    """
    Build the 6x7 grid for a month view.

    Leading cells are the tail of the previous month, trailing cells the
    start of the next; only days of the requested month are flagged
    ``is_current_month``. Always returns exactly 42 cells.

    Args:
        year: Four-digit year
        month_index: 0 = January ... 11 = December
    """
    if not 0 <= month_index <= 11:
        raise ValueError(f"month_index must be 0-11, got {month_index}")

    month_days = get_days_in_month(year, month_index)
    lead = weekday_index(month_days[0])
    days: list[CalendarDay] = []

    # Add days from previous month
    prev_year, prev_month = _adjacent_month(year, month_index, -1)
    prev_month_last_day = calendar.monthrange(prev_year, prev_month + 1)[1]
    for day_number in range(prev_month_last_day - lead + 1, prev_month_last_day + 1):
        days.append(
            CalendarDay(
                date=date(prev_year, prev_month + 1, day_number),
                is_current_month=False,
                day_number=day_number,
            )
        )

    # Add days from current month
    for d in month_days:
        days.append(CalendarDay(date=d, is_current_month=True, day_number=d.day))

    # Fill the rest from next month
    next_year, next_month = _adjacent_month(year, month_index, 1)
    for day_number in range(1, GRID_CELLS - len(days) + 1):
        days.append(
            CalendarDay(
                date=date(next_year, next_month + 1, day_number),
                is_current_month=False,
                day_number=day_number,
            )
        )

    return days


def get_week_dates(d: date) -> list[date]:
    """The Sunday-started week containing ``d``."""
    start_of_week = d - timedelta(days=weekday_index(d))
    return [start_of_week + timedelta(days=i) for i in range(7)]


def grid_window(days: list[date], tz: tzinfo) -> tuple[datetime, datetime]:
    """Instant range covering a run of calendar days in ``tz``."""
    start = datetime.combine(days[0], time.min, tzinfo=tz)
    end = datetime.combine(days[-1], time.max, tzinfo=tz)
    return start, end


def is_same_day(a: date, b: date) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def is_date_in_range(value: datetime, start: datetime, end: datetime) -> bool:
    """Inclusive on both ends."""
    return start <= value <= end


def get_weekday_name(day_index: int) -> str:
    """Weekday name, 0 = Sunday."""
    return WEEKDAY_NAMES[day_index]


def get_month_name(month_index: int) -> str:
    """Month name, 0 = January."""
    return MONTH_NAMES[month_index]
