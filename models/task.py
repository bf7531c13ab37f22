# models/task.py
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from sqlmodel import Field, SQLModel


class Task(SQLModel):
    """Task record as served by the task manager API. Read-only to the calendar."""

    id: Union[int, str]
    task_name: Optional[str] = None
    task_description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    extend_date: Optional[str] = None
    status: Optional[Any] = None
    priority: Optional[Any] = None
    subtasks: List[Any] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Task":
        return cls(
            id=payload.get("id"),
            task_name=payload.get("task_name"),
            task_description=payload.get("task_description"),
            start_date=payload.get("start_date"),
            end_date=payload.get("end_date"),
            extend_date=payload.get("extend_date"),
            status=payload.get("status"),
            priority=payload.get("priority"),
            subtasks=list(payload.get("subtasks") or []),
        )

    @property
    def effective_end(self) -> Optional[str]:
        """``extend_date`` overrides ``end_date`` unless it is missing or blank."""
        if self.extend_date and self.extend_date.strip():
            return self.extend_date
        return self.end_date


__all__ = ["Task"]
