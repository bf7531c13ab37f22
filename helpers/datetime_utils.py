"""Shared utilities for calendar dates and ISO wall-clock strings."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

UTC = timezone.utc

# Indexed by ``date.weekday()``. Kept literal so matching never depends on the locale.
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def weekday_name(d: date) -> str:
    return WEEKDAY_NAMES[d.weekday()]


def start_of_week(d: date, *, first_weekday: int = 6) -> date:
    """Return the most recent ``first_weekday`` on or before ``d`` (Sunday by default)."""

    return d - timedelta(days=(d.weekday() - first_weekday) % 7)


def date_range(start: date, days: int) -> List[date]:
    return [start + timedelta(days=i) for i in range(max(days, 0))]


def combine_local(d: date, time_of_day: Optional[str]) -> Optional[str]:
    """Compose ``YYYY-MM-DDT<time_of_day>`` without touching the time component.

    A missing time gives ``None``.
    """

    if time_of_day is None:
        return None
    return f"{d.isoformat()}T{time_of_day}"


def parse_local_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO date or date-time string; ``None`` when it cannot be parsed.

    Naive values stay naive (local wall-clock). A trailing ``Z`` is accepted.
    """

    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def is_date_only(value: Optional[str]) -> bool:
    if not value or not isinstance(value, str):
        return False
    return "T" not in value.strip() and " " not in value.strip()


def to_absolute_timestamp(value: Optional[str]) -> Optional[str]:
    """Convert an ISO string to ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Naive values are read as local wall-clock time.
    """

    dt = parse_local_datetime(value)
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


__all__ = [
    "UTC",
    "WEEKDAY_NAMES",
    "combine_local",
    "date_range",
    "is_date_only",
    "parse_local_datetime",
    "start_of_week",
    "to_absolute_timestamp",
    "weekday_name",
]
