# models/event.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

TASK_PREFIX = "task-"
SCHEDULE_PREFIX = "schedule-"


def task_event_id(task_id: Union[int, str]) -> str:
    return f"{TASK_PREFIX}{task_id}"


def schedule_event_id(schedule_id: Union[int, str], iso_date: str) -> str:
    return f"{SCHEDULE_PREFIX}{schedule_id}-{iso_date}"


def is_schedule_event_id(event_id: str) -> bool:
    return event_id.startswith(SCHEDULE_PREFIX)


@dataclass(frozen=True)
class ExtendedProps:
    task_id: Union[int, str]
    extend_date: Optional[str] = None
    # reserved for split-range rendering of extended tasks
    is_extension: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "taskId": self.task_id,
            "extend_date": self.extend_date,
            "isExtension": self.is_extension,
        }


@dataclass(frozen=True)
class Event:
    """One calendar-displayable instance. Rebuilt on every materialization pass."""

    id: str
    title: Optional[str]
    start: Optional[str]
    end: Optional[str]
    background_color: str
    group: Optional[str] = None
    description: Optional[str] = None
    status: Any = None
    priority: Any = None
    subtasks: Optional[Tuple[Any, ...]] = None
    extended_props: Optional[ExtendedProps] = None

    @property
    def is_schedule(self) -> bool:
        return is_schedule_event_id(self.id)

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "start": self.start,
            "end": self.end,
            "backgroundColor": self.background_color,
        }
        if self.extended_props is not None:
            data.update(
                {
                    "group": self.group,
                    "description": self.description,
                    "status": self.status,
                    "priority": self.priority,
                    "subtasks": list(self.subtasks or ()),
                    "extendedProps": self.extended_props.as_dict(),
                }
            )
        return data


__all__ = [
    "Event",
    "ExtendedProps",
    "SCHEDULE_PREFIX",
    "TASK_PREFIX",
    "is_schedule_event_id",
    "schedule_event_id",
    "task_event_id",
]
