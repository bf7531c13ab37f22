# services/event_merger.py
from __future__ import annotations

from typing import List, Sequence

from models.event import Event


def merge_events(task_events: Sequence[Event], schedule_events: Sequence[Event]) -> List[Event]:
    """Task events first, then schedule occurrences. No sorting, no dedup."""
    return [*task_events, *schedule_events]


__all__ = ["merge_events"]
