# models/schedule.py
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from sqlmodel import Field, SQLModel


class Schedule(SQLModel):
    """Weekly recurring template: a time slot repeated on the listed weekdays.

    Times are ``HH:mm:ss`` strings and are not validated.
    """

    id: Union[int, str]
    title: Optional[str] = None
    days: List[str] = Field(default_factory=list)
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Schedule":
        # the API spells the time fields in camelCase
        return cls(
            id=payload.get("id"),
            title=payload.get("title"),
            days=list(payload.get("days") or []),
            start_time=payload.get("startTime"),
            end_time=payload.get("endTime"),
        )


__all__ = ["Schedule"]
