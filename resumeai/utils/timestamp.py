"""Timestamp helpers for log directories, stored records, letters and event listings."""

from datetime import date, datetime
from typing import Optional

# (seconds per unit, suffix), largest first
_RELATIVE_UNITS = ((86400, "d"), (3600, "h"), (60, "m"), (1, "s"))


def now() -> str:
    """Current local time to the second, filename-safe (e.g. "20251113_184540")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """Current local time as a full ISO 8601 string (microsecond precision)."""
    return datetime.now().isoformat()


def today() -> str:
    """Current date in the form used on cover letters (e.g. "11/13/2025")."""
    return date.today().strftime("%m/%d/%Y")


def format_timestamp(
    iso_timestamp: Optional[str], relative: bool = False, reference: Optional[datetime] = None
) -> str:
    """
    Render a stored ISO timestamp for the events listing.

    Absolute form is "2025-11-13 18:45:40". Relative form uses the largest whole
    unit, e.g. "2h ago" or "3d from now". Unparseable input is returned unchanged.

    Args:
        iso_timestamp: ISO 8601 string as written by now_exact()
        relative: Show the distance from `reference` instead of the date
        reference: Point in time to measure from (defaults to now)
    """
    try:
        moment = datetime.fromisoformat(iso_timestamp)
    except (ValueError, TypeError):
        return iso_timestamp

    if not relative:
        return moment.strftime("%Y-%m-%d %H:%M:%S")

    seconds = int(((reference or datetime.now()) - moment).total_seconds())
    suffix = "ago" if seconds >= 0 else "from now"
    seconds = abs(seconds)
    for size, unit in _RELATIVE_UNITS:
        if seconds >= size or size == 1:
            return f"{seconds // size}{unit} {suffix}"
