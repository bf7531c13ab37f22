# services/calendar_model.py
from __future__ import annotations

import asyncio
from datetime import date
from typing import Callable, List, Optional, Set, Union

from core.log import get_logger
from models.event import Event
from models.schedule import Schedule
from models.task import Task
from services import pipeline
from services.pipeline import Pending, SourcePhase, SourceState
from services.sources import DataSource

logger = get_logger("calendar")


class CalendarModel:
    """Events currently shown by the calendar.

    Every state change of either source triggers a full rebuild. While a
    source is loading or refreshing the events are withheld.
    """

    def __init__(
        self,
        tasks: DataSource[Task],
        schedules: DataSource[Schedule],
        *,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.tasks = tasks
        self.schedules = schedules
        self._clock = clock
        self._events: Optional[List[Event]] = None
        self._pending: Optional[Pending] = Pending(SourcePhase.LOADING)
        self._listeners: Set[Callable[["CalendarModel"], None]] = set()
        tasks.subscribe(self._on_source_changed)
        schedules.subscribe(self._on_source_changed)
        self.rebuild()

    @property
    def events(self) -> Optional[List[Event]]:
        return self._events

    @property
    def pending(self) -> Optional[Pending]:
        return self._pending

    # ---------- events ----------
    def subscribe(self, callback: Callable[["CalendarModel"], None]) -> None:
        self._listeners.add(callback)

    def unsubscribe(self, callback: Callable[["CalendarModel"], None]) -> None:
        self._listeners.discard(callback)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Calendar listener failed")

    def _on_source_changed(self, _state: SourceState) -> None:
        self.rebuild()
        self._emit()

    # ---------- pipeline ----------
    def rebuild(self) -> Union[List[Event], Pending]:
        result = pipeline.run_pipeline(self.tasks.state, self.schedules.state, self._clock())
        if isinstance(result, Pending):
            self._events = None
            self._pending = result
        else:
            self._events = result
            self._pending = None
        return result

    async def refresh(self) -> None:
        await asyncio.gather(self.tasks.fetch(), self.schedules.fetch())

    def errors(self) -> List[str]:
        return [
            f"{source.name}: {source.state.error}"
            for source in (self.tasks, self.schedules)
            if source.state.error
        ]


__all__ = ["CalendarModel"]
