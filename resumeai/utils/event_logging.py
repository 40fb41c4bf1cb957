"""
Record event logging utilities.

Appends one JSON object per line to the record event log whenever a stored
record changes. This is the audit trail of store mutations; detailed
within-context logging goes through the context loggers instead.

Usage:
    from resumeai.utils.event_logging import log_record_event, get_recent_events

    log_record_event(
        event_type="insert",
        user_id="3f2c...",
        collection="skills",
        record_id="9a1b...",
    )

    events = get_recent_events(5, collection="skills")
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from resumeai.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RECORD_EVENTS_FILE = Path(os.getenv("RECORD_EVENTS_FILE", str(LOGS_PATH / "record_events.log")))

MUTATIVE_EVENTS = {"insert", "update", "delete", "profile_save"}


def log_record_event(
    event_type: str,
    user_id: str,
    collection: str,
    record_id: Optional[str] = None,
    events_file: Path = None,
    **extra_fields,
) -> None:
    """
    Log an event to the record event log.

    Args:
        event_type: Type of event ("insert", "update", "delete", "profile_save")
        user_id: Owner of the record
        collection: Collection name (e.g., "work_experience", "skills")
        record_id: Identifier of the affected record
        events_file: Override the event log location (defaults to RECORD_EVENTS_FILE)
        **extra_fields: Additional event-specific fields
    """
    events_file = events_file or RECORD_EVENTS_FILE
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "user_id": user_id,
        "collection": collection,
        "record_id": record_id,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def get_recent_events(
    n: int = 10,
    user_id: Optional[str] = None,
    event_type: Optional[str] = None,
    collection: Optional[str] = None,
    events_file: Path = None,
) -> List[Dict]:
    """
    Get the last n events from the record event log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        user_id: Filter to only events for this user (optional)
        event_type: Filter to only events of this type (optional)
        collection: Filter to only events for this collection (optional)
        events_file: Override the event log location (defaults to RECORD_EVENTS_FILE)

    Returns:
        List of event dicts (most recent last)

    Example:
        # Last 20 deletions of skills
        events = get_recent_events(20, event_type="delete", collection="skills")
    """
    events_file = events_file or RECORD_EVENTS_FILE
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if user_id:
        events = [e for e in events if e.get("user_id") == user_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    if collection:
        events = [e for e in events if e.get("collection") == collection]

    return events[-n:] if len(events) > n else events
