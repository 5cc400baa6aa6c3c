"""Task models shared by the client and the reference API."""

import datetime as dt
from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_POSITION = 1


def normalize_date(value: dt.date | dt.datetime | str) -> dt.date:
    """Reduce a date, datetime or ISO-8601 string to its calendar day.

    Timestamps keep the day they were written with (no timezone conversion),
    so "2026-10-19T00:00:00.000Z" is 2026-10-19.

    Raises:
        ValueError: If a string is not a valid ISO-8601 date or timestamp
        TypeError: For any other type
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return dt.date.fromisoformat(text)
            return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError as e:
            raise ValueError(f"Invalid date: {value!r}") from e
    raise TypeError(f"Unsupported date value: {value!r}")


@dataclass(frozen=True)
class Task:
    """Task owned by the current user."""

    id: str  # Server-assigned
    text: str
    date: dt.date  # Day granularity
    position: int  # Lower sorts first, not unique


class TaskPayload(BaseModel):
    """Task as returned by GET /api/tasks."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    text: str
    date: dt.date
    position: int = DEFAULT_POSITION

    @field_validator("date", mode="before")
    @classmethod
    def normalize_wire_date(cls, value: Any) -> dt.date:
        try:
            return normalize_date(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    def to_task(self) -> Task:
        """Convert to the passive Task record."""
        return Task(id=self.id, text=self.text, date=self.date, position=self.position)


class CreateTaskRequest(BaseModel):
    """Request body for POST /api/task.

    Fields are optional here so missing values reach the repository, which
    reports them with a readable message.
    """

    text: str | None = None
    date: str | None = None
    position: int = DEFAULT_POSITION


class TaskResponse(BaseModel):
    """API response model for tasks."""

    id: str
    text: str
    date: dt.date
    position: int
