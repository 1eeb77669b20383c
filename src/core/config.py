"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(
    os.environ.get("CALENDAR_DB_PATH", str(PROJECT_ROOT / "data" / "db" / "calendar.db"))
)
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

# Zone used for calendar-day math (weekday, day of month) and naive input
CALENDAR_TIMEZONE = os.environ.get("CALENDAR_TIMEZONE", "UTC")

GRID_CELLS = 42  # 6 weeks * 7 days

FREQUENCIES = ("daily", "weekly", "monthly")

# =============================================================================
# EVENT CATEGORIES
# =============================================================================

DEFAULT_EVENT_COLOR = "#3B82F6"

# (value, label, color); read-only
EVENT_CATEGORIES = (
    ("work", "Work", "#3B82F6"),  # Blue
    ("personal", "Personal", "#10B981"),  # Green
    ("meeting", "Meeting", "#F59E0B"),  # Amber
    ("birthday", "Birthday", "#EC4899"),  # Pink
    ("holiday", "Holiday", "#8B5CF6"),  # Purple
    ("other", "Other", "#6B7280"),  # Gray
)

# =============================================================================
# ICS EXPORT
# =============================================================================

ICS_PRODID = "-//Calendar App//EN"
ICS_UID_DOMAIN = "calendar-app"

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
