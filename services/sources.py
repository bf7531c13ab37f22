# services/sources.py
from __future__ import annotations

from typing import Awaitable, Callable, Generic, List, Set, TypeVar

from core.log import get_logger
from models.schedule import Schedule
from models.task import Task
from services.api_client import ApiClient, ApiError, fetch_schedules, fetch_tasks
from services.pipeline import SourceState

T = TypeVar("T")

logger = get_logger("sources")


class DataSource(Generic[T]):
    """Observable holder of one remote list.

    No data yet and a fetch in flight -> loading; data present and a fetch in
    flight -> refreshing; otherwise ready. A failed fetch keeps the previous
    data and records the error.
    """

    def __init__(self, name: str, loader: Callable[[], Awaitable[List[T]]]) -> None:
        self.name = name
        self._loader = loader
        self._state: SourceState[T] = SourceState()
        self._in_flight = False
        self._listeners: Set[Callable[[SourceState[T]], None]] = set()

    @property
    def state(self) -> SourceState[T]:
        return self._state

    # ---------- events ----------
    def subscribe(self, callback: Callable[[SourceState[T]], None]) -> None:
        self._listeners.add(callback)

    def unsubscribe(self, callback: Callable[[SourceState[T]], None]) -> None:
        self._listeners.discard(callback)

    def _set_state(self, state: SourceState[T]) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("%s source listener failed", self.name)

    # ---------- fetching ----------
    async def fetch(self) -> SourceState[T]:
        if self._in_flight:
            return self._state
        self._in_flight = True
        previous = self._state.data
        try:
            self._set_state(
                SourceState(
                    data=previous,
                    is_loading=previous is None,
                    is_fetching=True,
                )
            )
            logger.debug("Fetching %s", self.name)
            try:
                items = await self._loader()
            except ApiError as exc:
                logger.warning("Fetching %s failed: %s", self.name, exc)
                self._set_state(
                    SourceState(data=previous, is_loading=False, is_fetching=False, error=str(exc))
                )
            except Exception as exc:
                logger.exception("Fetching %s crashed", self.name)
                self._set_state(
                    SourceState(
                        data=previous,
                        is_loading=False,
                        is_fetching=False,
                        error=f"{type(exc).__name__}: {exc}",
                    )
                )
            else:
                logger.debug("Fetched %d %s", len(items), self.name)
                self._set_state(
                    SourceState(data=tuple(items), is_loading=False, is_fetching=False)
                )
        finally:
            self._in_flight = False
        return self._state


def task_source(client: ApiClient) -> DataSource[Task]:
    return DataSource("tasks", lambda: fetch_tasks(client))


def schedule_source(client: ApiClient) -> DataSource[Schedule]:
    return DataSource("schedules", lambda: fetch_schedules(client))


__all__ = ["DataSource", "schedule_source", "task_source"]
