# services/pipeline.py
"""Materialization pipeline: source states -> mapped tasks + expanded schedules.

``combine`` is the single place that decides whether a pass may run. While
either source is loading or refreshing it returns :class:`Pending` and the
pipeline is not invoked.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Generic, List, Optional, Tuple, TypeVar, Union

from core.log import get_logger
from models.event import Event
from models.schedule import Schedule
from models.task import Task
from services.event_merger import merge_events
from services.schedule_expander import expand_schedules, lookahead_window
from services.task_events import map_task_events

T = TypeVar("T")

logger = get_logger("pipeline")


class SourcePhase(str, Enum):
    LOADING = "loading"
    REFRESHING = "refreshing"
    READY = "ready"


@dataclass(frozen=True)
class SourceState(Generic[T]):
    data: Optional[Tuple[T, ...]] = None
    is_loading: bool = True
    is_fetching: bool = False
    error: Optional[str] = None

    @property
    def phase(self) -> SourcePhase:
        if self.is_loading:
            return SourcePhase.LOADING
        if self.is_fetching:
            return SourcePhase.REFRESHING
        return SourcePhase.READY

    @property
    def items(self) -> List[T]:
        return list(self.data or ())


@dataclass(frozen=True)
class Pending:
    phase: SourcePhase


@dataclass(frozen=True)
class PipelineInput:
    tasks: Tuple[Task, ...] = field(default_factory=tuple)
    schedules: Tuple[Schedule, ...] = field(default_factory=tuple)


def combine(
    task_state: SourceState[Task],
    schedule_state: SourceState[Schedule],
) -> Union[PipelineInput, Pending]:
    phases = (task_state.phase, schedule_state.phase)
    if SourcePhase.LOADING in phases:
        return Pending(SourcePhase.LOADING)
    if SourcePhase.REFRESHING in phases:
        return Pending(SourcePhase.REFRESHING)
    return PipelineInput(
        tasks=tuple(task_state.items),
        schedules=tuple(schedule_state.items),
    )


def materialize(pipeline_input: PipelineInput, reference_date: date) -> List[Event]:
    window = lookahead_window(reference_date)
    task_events = map_task_events(pipeline_input.tasks)
    schedule_events = expand_schedules(pipeline_input.schedules, window)
    events = merge_events(task_events, schedule_events)
    logger.debug(
        "Materialized %d events (%d tasks, %d schedule occurrences) from %s to %s",
        len(events),
        len(task_events),
        len(schedule_events),
        window[0] if window else None,
        window[-1] if window else None,
    )
    return events


def run_pipeline(
    task_state: SourceState[Task],
    schedule_state: SourceState[Schedule],
    reference_date: date,
) -> Union[List[Event], Pending]:
    combined = combine(task_state, schedule_state)
    if isinstance(combined, Pending):
        logger.debug("Materialization withheld: sources %s", combined.phase.value)
        return combined
    return materialize(combined, reference_date)


__all__ = [
    "Pending",
    "PipelineInput",
    "SourcePhase",
    "SourceState",
    "combine",
    "materialize",
    "run_pipeline",
]
