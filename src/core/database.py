"""
SQLite database operations for calendar events.
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from core.config import DB_PATH
from models.events import Event, parse_days_of_week, serialize_days_of_week


class EventNotFoundError(LookupError):
    """No event with the requested id."""

    def __init__(self, event_id: int):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


def get_connection(create: bool = False) -> sqlite3.Connection:
    """
    Get a database connection.

    Without ``create`` the database must already exist; opening it never
    leaves an empty file behind.

    Raises:
        sqlite3.OperationalError: if the file is missing and not created
    """
    if create:
        conn = sqlite3.connect(DB_PATH)
    else:
        conn = sqlite3.connect(f"{DB_PATH.resolve().as_uri()}?mode=rw", uri=True)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def db_session() -> Iterator[sqlite3.Connection]:
    """Connection that is closed when the block exits."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def database_ready() -> bool:
    """True when the database exists and holds the events table."""
    try:
        conn = get_connection()
    except sqlite3.OperationalError:
        return False
    try:
        row = conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'events'"
        ).fetchone()
    finally:
        conn.close()
    return row is not None


def init_schema(conn: sqlite3.Connection):
    """Create the events and request log tables if they don't exist."""
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            description TEXT,
            start_date TEXT NOT NULL,
            end_date TEXT NOT NULL,
            is_recurring INTEGER NOT NULL DEFAULT 0,
            frequency TEXT,
            days_of_week TEXT,
            recurring_end_date TEXT,
            category TEXT,
            color TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT UNIQUE NOT NULL,
            timestamp TEXT NOT NULL,
            endpoint TEXT NOT NULL,
            method TEXT NOT NULL,
            client_ip TEXT,
            status_code INTEGER NOT NULL,
            error_code TEXT,
            error_message TEXT,
            processing_time_ms INTEGER NOT NULL,
            event_id INTEGER,
            events_returned INTEGER
        )
    """)

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_events_start_date ON events(start_date)")
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_status ON api_requests(status_code)"
    )
    conn.commit()


# =============================================================================
# ROW CONVERSION
# =============================================================================


def format_timestamp(value: datetime | None) -> str | None:
    """UTC ISO 8601 text; sorts chronologically as a string."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="seconds")


def parse_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def row_to_event(row: sqlite3.Row) -> Event:
    """Build an Event from an events row, decoding the weekday payload."""
    return Event(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        start_date=parse_timestamp(row["start_date"]),
        end_date=parse_timestamp(row["end_date"]),
        is_recurring=bool(row["is_recurring"]),
        frequency=row["frequency"],
        days_of_week=parse_days_of_week(row["days_of_week"]),
        recurring_end_date=parse_timestamp(row["recurring_end_date"]),
        category=row["category"],
        color=row["color"],
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )


def _column_values(fields: dict) -> tuple:
    return (
        fields["title"],
        fields.get("description"),
        format_timestamp(fields["start_date"]),
        format_timestamp(fields["end_date"]),
        1 if fields.get("is_recurring") else 0,
        fields.get("frequency"),
        serialize_days_of_week(fields.get("days_of_week")),
        format_timestamp(fields.get("recurring_end_date")),
        fields.get("category"),
        fields.get("color"),
    )


# =============================================================================
# QUERIES
# =============================================================================


def list_events(
    conn: sqlite3.Connection,
    start: datetime | None = None,
    end: datetime | None = None,
    ids: list[int] | None = None,
) -> list[Event]:
    """
    Fetch events ordered by start date.

    With a [start, end] window, returns events that start inside it, span
    it, or are recurring (those can appear anywhere). With ``ids``, only
    those events. With neither, everything.
    """
    clauses = []
    params: list = []

    if ids:
        placeholders = ", ".join("?" for _ in ids)
        clauses.append(f"id IN ({placeholders})")
        params.extend(ids)

    if start is not None and end is not None:
        start_str = format_timestamp(start)
        end_str = format_timestamp(end)
        clauses.append(
            "((start_date >= ? AND start_date <= ?)"
            " OR is_recurring = 1"
            " OR (start_date <= ? AND end_date >= ?))"
        )
        params.extend([start_str, end_str, end_str, start_str])

    sql = "SELECT * FROM events"
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += " ORDER BY start_date ASC, id ASC"

    cursor = conn.cursor()
    cursor.execute(sql, params)
    return [row_to_event(row) for row in cursor.fetchall()]


def get_event(conn: sqlite3.Connection, event_id: int) -> Event:
    """Fetch one event or raise EventNotFoundError."""
    cursor = conn.cursor()
    cursor.execute("SELECT * FROM events WHERE id = ?", (event_id,))
    row = cursor.fetchone()
    if row is None:
        raise EventNotFoundError(event_id)
    return row_to_event(row)


# =============================================================================
# MUTATIONS
# =============================================================================


def create_event(conn: sqlite3.Connection, fields: dict) -> Event:
    """Insert an event from normalized fields and return the stored record."""
    now = format_timestamp(datetime.now(timezone.utc))
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO events (
            title, description, start_date, end_date, is_recurring,
            frequency, days_of_week, recurring_end_date, category, color,
            created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        _column_values(fields) + (now, now),
    )
    conn.commit()
    return get_event(conn, cursor.lastrowid)


def update_event(conn: sqlite3.Connection, event_id: int, fields: dict) -> Event:
    """Rewrite every field of an existing event."""
    now = format_timestamp(datetime.now(timezone.utc))
    cursor = conn.cursor()
    cursor.execute(
        """
        UPDATE events SET
            title = ?, description = ?, start_date = ?, end_date = ?,
            is_recurring = ?, frequency = ?, days_of_week = ?,
            recurring_end_date = ?, category = ?, color = ?, updated_at = ?
        WHERE id = ?
        """,
        _column_values(fields) + (now, event_id),
    )
    if cursor.rowcount == 0:
        conn.rollback()
        raise EventNotFoundError(event_id)
    conn.commit()
    return get_event(conn, event_id)


def delete_event(conn: sqlite3.Connection, event_id: int):
    """Delete an event or raise EventNotFoundError."""
    cursor = conn.cursor()
    cursor.execute("DELETE FROM events WHERE id = ?", (event_id,))
    if cursor.rowcount == 0:
        conn.rollback()
        raise EventNotFoundError(event_id)
    conn.commit()
