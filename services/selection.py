# services/selection.py
"""Which event is open for detail viewing.

The rendering surface never calls into the dialog directly: it sends
:class:`EventClicked` and :class:`DetailsClosed` messages to
:meth:`SelectionController.dispatch`. Schedule occurrences are not
selectable.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable, Optional, Set, Tuple, Union

from core.log import get_logger
from helpers.datetime_utils import to_absolute_timestamp
from models.event import Event

logger = get_logger("selection")


@dataclass(frozen=True)
class TaskDetail:
    """Point-in-time snapshot shown by the detail dialog. Re-open to refresh."""

    title: Optional[str]
    description: Optional[str]
    status: Any
    priority: Any
    subtasks: Tuple[Any, ...]
    start: Optional[str]
    end: Optional[str]
    extend_date: Optional[str]

    @classmethod
    def from_event(cls, event: Event) -> "TaskDetail":
        props = event.extended_props
        return cls(
            title=event.title,
            description=event.description,
            status=copy.deepcopy(event.status),
            priority=copy.deepcopy(event.priority),
            subtasks=tuple(copy.deepcopy(list(event.subtasks or ()))),
            start=to_absolute_timestamp(event.start),
            end=to_absolute_timestamp(event.end),
            extend_date=(props.extend_date if props else None) or None,
        )


@dataclass(frozen=True)
class NoSelection:
    pass


@dataclass(frozen=True)
class Selected:
    event: Event
    detail: TaskDetail


SelectionState = Union[NoSelection, Selected]


@dataclass(frozen=True)
class EventClicked:
    event: Event


@dataclass(frozen=True)
class DetailsClosed:
    pass


Message = Union[EventClicked, DetailsClosed]


class SelectionController:
    def __init__(self) -> None:
        self._state: SelectionState = NoSelection()
        self._listeners: Set[Callable[[SelectionState], None]] = set()

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def detail(self) -> Optional[TaskDetail]:
        return self._state.detail if isinstance(self._state, Selected) else None

    # ---------- events ----------
    def subscribe(self, callback: Callable[[SelectionState], None]) -> None:
        self._listeners.add(callback)

    def unsubscribe(self, callback: Callable[[SelectionState], None]) -> None:
        self._listeners.discard(callback)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Selection listener failed")

    # ---------- messages ----------
    def dispatch(self, message: Message) -> SelectionState:
        if isinstance(message, EventClicked):
            self._on_clicked(message.event)
        elif isinstance(message, DetailsClosed):
            self._on_closed()
        else:
            raise TypeError(f"Unsupported message: {message!r}")
        return self._state

    def _on_clicked(self, event: Event) -> None:
        if event.is_schedule:
            logger.debug("Ignoring click on schedule occurrence %s", event.id)
            return
        logger.debug("Clicked event: %s", event.id)
        self._state = Selected(event=event, detail=TaskDetail.from_event(event))
        self._emit()

    def _on_closed(self) -> None:
        if isinstance(self._state, NoSelection):
            return
        self._state = NoSelection()
        self._emit()


__all__ = [
    "DetailsClosed",
    "EventClicked",
    "NoSelection",
    "Selected",
    "SelectionController",
    "SelectionState",
    "TaskDetail",
]
