# services/task_events.py
from __future__ import annotations

from typing import Iterable, List, Optional

from core.settings import UI
from models.event import Event, ExtendedProps, task_event_id
from models.task import Task


def task_to_event(task: Task, *, color: str = UI.theme.task_event) -> Event:
    event_id = task_event_id(task.id)
    extend_date = task.extend_date if task.extend_date and task.extend_date.strip() else None
    return Event(
        id=event_id,
        group=event_id,
        title=task.task_name,
        start=task.start_date,
        end=task.effective_end,
        background_color=color,
        description=task.task_description,
        status=task.status,
        priority=task.priority,
        subtasks=tuple(task.subtasks or ()),
        extended_props=ExtendedProps(task_id=task.id, extend_date=extend_date),
    )


def map_task_events(tasks: Optional[Iterable[Task]]) -> List[Event]:
    """One event per task, in input order. Dates are passed through unvalidated."""

    if not tasks:
        return []
    return [task_to_event(task) for task in tasks]


__all__ = ["map_task_events", "task_to_event"]
