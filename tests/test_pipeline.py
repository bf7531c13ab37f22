import asyncio
from datetime import date
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models import Schedule, Task
from services import pipeline
from services.calendar_model import CalendarModel
from services.event_merger import merge_events
from services.pipeline import (
    Pending,
    PipelineInput,
    SourcePhase,
    SourceState,
    combine,
    materialize,
    run_pipeline,
)
from services.sources import DataSource

REFERENCE = date(2024, 1, 3)


def _ready(*items):
    return SourceState(data=tuple(items), is_loading=False, is_fetching=False)


def _tasks():
    return [
        Task(id=1, task_name="A", start_date="2024-01-01", end_date="2024-01-02"),
        Task(id=2, task_name="B", start_date="2024-01-04", end_date="2024-01-06", extend_date="2024-01-09"),
    ]


def _schedules():
    return [
        Schedule(id=1, title="Gym", days=["Monday", "Thursday"], start_time="09:00:00", end_time="10:00:00"),
        Schedule(id=2, title="Choir", days=["Monday"], start_time="18:00:00", end_time="19:30:00"),
    ]


def test_empty_sources_materialize_to_nothing():
    assert materialize(PipelineInput(), REFERENCE) == []
    assert run_pipeline(_ready(), _ready(), REFERENCE) == []


def test_task_events_come_before_schedule_events():
    events = run_pipeline(_ready(*_tasks()), _ready(*_schedules()), REFERENCE)
    ids = [e.id for e in events]
    assert ids[:2] == ["task-1", "task-2"]
    assert all(i.startswith("schedule-") for i in ids[2:])
    assert ids[2] == "schedule-1-2024-01-01"


def test_ids_are_unique_within_a_pass():
    events = run_pipeline(_ready(*_tasks()), _ready(*_schedules()), REFERENCE)
    ids = [e.id for e in events]
    assert len(ids) == len(set(ids))
    # Gym: 2 Mondays + 2 Thursdays, Choir: 2 Mondays
    assert len(ids) == 2 + 4 + 2


def test_merge_is_plain_concatenation():
    tasks = materialize(PipelineInput(tasks=tuple(_tasks())), REFERENCE)
    occurrences = materialize(PipelineInput(schedules=tuple(_schedules())), REFERENCE)
    merged = merge_events(tasks, occurrences)
    assert merged == tasks + occurrences


def test_missing_data_reads_as_empty():
    state = SourceState(data=None, is_loading=False, is_fetching=False)
    result = combine(state, _ready(*_schedules()))
    assert isinstance(result, PipelineInput)
    assert result.tasks == ()


@pytest.mark.parametrize(
    "task_state, schedule_state, phase",
    [
        (SourceState(), SourceState(), SourcePhase.LOADING),
        (SourceState(), _ready(), SourcePhase.LOADING),
        (_ready(), SourceState(), SourcePhase.LOADING),
        (SourceState(data=(), is_loading=False, is_fetching=True), _ready(), SourcePhase.REFRESHING),
        (_ready(), SourceState(data=(), is_loading=False, is_fetching=True), SourcePhase.REFRESHING),
        (SourceState(data=(), is_loading=False, is_fetching=True), SourceState(), SourcePhase.LOADING),
    ],
)
def test_combine_withholds_until_both_sources_ready(task_state, schedule_state, phase):
    assert combine(task_state, schedule_state) == Pending(phase)


def test_pipeline_not_invoked_while_loading(monkeypatch):
    def _boom(*args, **kwargs):
        raise AssertionError("materialize must not run")

    monkeypatch.setattr(pipeline, "materialize", _boom)
    result = run_pipeline(SourceState(), _ready(*_schedules()), REFERENCE)
    assert result == Pending(SourcePhase.LOADING)


def _source(name, items, *, gate=None):
    async def _load():
        if gate is not None:
            await gate.wait()
        return list(items)

    return DataSource(name, _load)


def test_calendar_model_rebuilds_from_sources():
    tasks = _source("tasks", _tasks())
    schedules = _source("schedules", _schedules())
    model = CalendarModel(tasks, schedules, clock=lambda: REFERENCE)
    assert model.events is None
    assert model.pending == Pending(SourcePhase.LOADING)

    asyncio.run(model.refresh())

    assert model.pending is None
    assert [e.id for e in model.events][:2] == ["task-1", "task-2"]
    assert len(model.events) == 8


def test_calendar_model_withholds_events_while_refreshing():
    seen = []

    async def scenario():
        gate = asyncio.Event()
        tasks = _source("tasks", _tasks(), gate=gate)
        schedules = _source("schedules", _schedules())
        model = CalendarModel(tasks, schedules, clock=lambda: REFERENCE)
        gate.set()
        await model.refresh()
        assert model.events is not None

        gate.clear()
        model.subscribe(lambda m: seen.append((m.pending, m.events)))
        pending_refresh = asyncio.ensure_future(tasks.fetch())
        await asyncio.sleep(0)
        assert model.events is None
        assert model.pending == Pending(SourcePhase.REFRESHING)
        gate.set()
        await pending_refresh
        return model

    model = asyncio.run(scenario())
    assert seen[0] == (Pending(SourcePhase.REFRESHING), None)
    assert seen[-1][0] is None
    assert len(model.events) == 8
