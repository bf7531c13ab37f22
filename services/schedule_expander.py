# services/schedule_expander.py
"""Expansion of weekly schedule templates into dated occurrences.

The lookahead window always starts on the first day of the week containing
the reference date and spans ``CALENDAR.lookahead_days`` consecutive days.
It does not follow the range the calendar is currently showing. The
reference date is always passed in by the caller.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence

from core.settings import CALENDAR, UI
from helpers.datetime_utils import combine_local, date_range, start_of_week, weekday_name
from models.event import Event, schedule_event_id
from models.schedule import Schedule


def lookahead_window(
    reference_date: date,
    *,
    days: int = CALENDAR.lookahead_days,
    first_weekday: int = CALENDAR.first_weekday,
) -> List[date]:
    return date_range(start_of_week(reference_date, first_weekday=first_weekday), days)


def expand_schedule(
    schedule: Schedule,
    window: Sequence[date],
    *,
    color: str = UI.theme.schedule_event,
) -> List[Event]:
    days = set(schedule.days or ())
    if not days:
        return []
    occurrences: List[Event] = []
    for day in window:
        if weekday_name(day) not in days:
            continue
        occurrences.append(
            Event(
                id=schedule_event_id(schedule.id, day.isoformat()),
                title=schedule.title,
                start=combine_local(day, schedule.start_time),
                end=combine_local(day, schedule.end_time),
                background_color=color,
            )
        )
    return occurrences


def expand_schedules(
    schedules: Optional[Iterable[Schedule]],
    window: Sequence[date],
) -> List[Event]:
    """Schedule by schedule, then date by date in window order."""

    if not schedules:
        return []
    events: List[Event] = []
    for schedule in schedules:
        events.extend(expand_schedule(schedule, window))
    return events


__all__ = ["expand_schedule", "expand_schedules", "lookahead_window"]
