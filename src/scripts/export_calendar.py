#!/usr/bin/env python3
"""
Export calendar events to an iCalendar (.ics) file.

Usage:
    uv run python src/scripts/export_calendar.py
    uv run python src/scripts/export_calendar.py --ids 1,4,7 --output team.ics
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import CALENDAR_TIMEZONE, OUTPUT_DIR
from core.database import db_session, list_events
from core.validation import parse_id_list
from services.ics import export_filename, export_ics


def export_to_file(ids: list[int] | None, output: Path | None) -> Path:
    """Write the selected events (all when ids is None) and return the path."""
    now = datetime.now(ZoneInfo(CALENDAR_TIMEZONE))

    with db_session() as conn:
        events = list_events(conn, ids=ids)

    if output is None:
        OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        output = OUTPUT_DIR / export_filename(now.date())

    # newline="" keeps the CRLF line endings intact
    with open(output, "w", encoding="utf-8", newline="") as f:
        f.write(export_ics(events, now=now))

    print(f"Exported {len(events)} events to {output}")
    return output


def main():
    parser = argparse.ArgumentParser(description="Export calendar events to an .ics file")
    parser.add_argument("--ids", help="Comma-separated event ids (default: all events)")
    parser.add_argument("--output", type=Path, help="Output file (default: output/calendar-export-<date>.ics)")
    args = parser.parse_args()

    export_to_file(parse_id_list(args.ids) or None, args.output)


if __name__ == "__main__":
    main()
