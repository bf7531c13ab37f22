"""Records exchanged between the data sources, the pipeline and the calendar."""
from .event import Event, ExtendedProps
from .schedule import Schedule
from .task import Task

__all__ = ["Event", "ExtendedProps", "Schedule", "Task"]
