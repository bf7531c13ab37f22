from datetime import date
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.settings import MONDAY
from models import Schedule
from services.schedule_expander import expand_schedule, expand_schedules, lookahead_window
from ui.pages.calendar import events_by_day


def _schedule(**overrides):
    data = {
        "id": 7,
        "title": "Gym",
        "days": ["Monday"],
        "startTime": "09:00:00",
        "endTime": "10:00:00",
    }
    data.update(overrides)
    return Schedule.from_payload(data)


def test_window_starts_on_sunday_and_spans_two_weeks():
    # 2024-01-03 is a Wednesday
    window = lookahead_window(date(2024, 1, 3))
    assert len(window) == 14
    assert window[0] == date(2023, 12, 31)
    assert window[-1] == date(2024, 1, 13)
    assert window == sorted(window)


def test_window_on_a_sunday_starts_that_day():
    window = lookahead_window(date(2024, 1, 7))
    assert window[0] == date(2024, 1, 7)


def test_window_respects_first_weekday():
    window = lookahead_window(date(2024, 1, 3), first_weekday=MONDAY, days=7)
    assert window[0] == date(2024, 1, 1)
    assert len(window) == 7


def test_weekly_schedule_yields_two_mondays():
    window = lookahead_window(date(2024, 1, 3))
    events = expand_schedule(_schedule(), window)
    assert [e.id for e in events] == ["schedule-7-2024-01-01", "schedule-7-2024-01-08"]
    assert all(e.start.endswith("T09:00:00") for e in events)
    assert events[0].start == "2024-01-01T09:00:00"
    assert events[0].end == "2024-01-01T10:00:00"
    assert events[0].title == "Gym"
    assert events[0].background_color == "#2196f3"
    assert events[0].extended_props is None


def test_empty_days_yield_nothing():
    window = lookahead_window(date(2024, 1, 3), days=60)
    assert expand_schedule(_schedule(days=[]), window) == []
    assert expand_schedule(_schedule(days=None), window) == []


def test_schedules_expand_schedule_by_schedule_in_date_order():
    window = lookahead_window(date(2024, 1, 3))
    schedules = [
        _schedule(id=1, days=["Friday", "Tuesday"]),
        _schedule(id=2, days=["Sunday"]),
    ]
    ids = [e.id for e in expand_schedules(schedules, window)]
    assert ids == [
        "schedule-1-2024-01-02",
        "schedule-1-2024-01-05",
        "schedule-1-2024-01-09",
        "schedule-1-2024-01-12",
        "schedule-2-2023-12-31",
        "schedule-2-2024-01-07",
    ]


def test_missing_schedules_yield_nothing():
    window = lookahead_window(date(2024, 1, 3))
    assert expand_schedules(None, window) == []
    assert expand_schedules([], window) == []


def test_daily_schedule_covers_whole_window():
    everyday = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    window = lookahead_window(date(2024, 1, 3))
    events = expand_schedule(_schedule(days=everyday), window)
    assert len(events) == 14
    assert len({e.id for e in events}) == 14


def test_missing_times_are_passed_through_not_invented():
    schedule = Schedule.from_payload({"id": 3, "days": ["Monday"]})
    assert schedule.title is None
    assert schedule.start_time is None
    assert schedule.end_time is None

    window = lookahead_window(date(2024, 1, 3))
    events = expand_schedule(schedule, window)
    assert [e.id for e in events] == ["schedule-3-2024-01-01", "schedule-3-2024-01-08"]
    assert all(e.start is None and e.end is None for e in events)
    assert all(e.title is None for e in events)


def test_occurrence_without_start_is_not_placed_on_a_day():
    window = lookahead_window(date(2024, 1, 3))
    events = expand_schedule(_schedule(startTime=None), window)
    grouped = events_by_day(events, window)
    assert all(day_events == [] for day_events in grouped.values())


def test_malformed_time_text_is_kept_verbatim():
    window = lookahead_window(date(2024, 1, 3))
    events = expand_schedule(_schedule(startTime="late"), window)
    assert events[0].start == "2024-01-01Tlate"
    assert all(v == [] for v in events_by_day(events, window).values())
