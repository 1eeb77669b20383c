"""FastAPI dependencies for shared resources."""

from zoneinfo import ZoneInfo

from core.config import CALENDAR_TIMEZONE


def get_calendar_tz() -> ZoneInfo:
    """Zone used for calendar-day math and naive input timestamps."""
    return ZoneInfo(CALENDAR_TIMEZONE)
