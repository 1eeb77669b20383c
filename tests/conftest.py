"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Point the app at a throwaway database before any config is imported
os.environ["CALENDAR_DB_PATH"] = str(Path(tempfile.mkdtemp()) / "calendar-test.db")
os.environ["CALENDAR_TIMEZONE"] = "UTC"

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.database import get_connection, init_schema  # noqa: E402
from models.events import Event  # noqa: E402

UTC = timezone.utc


@pytest.fixture
def db_conn():
    """Connection to an empty, freshly initialized test database."""
    conn = get_connection(create=True)
    init_schema(conn)
    conn.execute("DELETE FROM events")
    conn.execute("DELETE FROM api_requests")
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def client(db_conn):
    """HTTP client for the API, backed by the test database."""
    from fastapi.testclient import TestClient

    from api.main import app

    return TestClient(app)


@pytest.fixture
def make_event():
    """Factory for in-memory events; keyword arguments override defaults."""

    def _make(**overrides) -> Event:
        values = {
            "id": 1,
            "title": "Team sync",
            "start_date": datetime(2024, 3, 10, 9, 0, tzinfo=UTC),
            "end_date": datetime(2024, 3, 10, 10, 0, tzinfo=UTC),
        }
        values.update(overrides)
        return Event(**values)

    return _make


@pytest.fixture
def sample_payload():
    """Create-event request body as a browser would send it."""
    return {
        "title": "Design review",
        "description": "Walk through the new layout",
        "startDate": "2024-03-10T09:00:00Z",
        "endDate": "2024-03-10T10:00:00Z",
        "isRecurring": False,
        "category": "meeting",
    }
