from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Incoming deadline may be a date, datetime, or ISO8601 string
DeadlineInput = Union[date, datetime, str]


def _parse_deadline(value: Optional[DeadlineInput]) -> Optional[datetime]:
    """
    Internal helper to normalize deadline input into a datetime.
    - If value is a string, parse via datetime.fromisoformat; a bare date becomes 00:00 UTC.
    - If value is a date (not datetime), convert to datetime at 00:00 UTC.
    - If value is a datetime, return as-is (naive values are read as UTC by the service).
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, str):
        s = value.strip()
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(s)
        except ValueError:
            try:
                d = date.fromisoformat(s)
                return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
            except ValueError as e:
                raise ValueError(
                    "Invalid deadline format. Use ISO8601 date or datetime string (e.g., '2030-01-31' or '2030-01-31T13:45:00Z')."
                ) from e

    raise ValueError("Invalid type for deadline; expected date, datetime, or ISO8601 string.")


# PUBLIC_INTERFACE
class ListCreate(BaseModel):
    """
    Schema for creating a new list. The name is trimmed and length-checked by the domain.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"name": "Work"}})

    name: str = Field(..., description="List name (1..80 characters after trimming)")


# PUBLIC_INTERFACE
class ListRename(BaseModel):
    """Schema for renaming a list."""

    name: str = Field(..., description="New list name (1..80 characters after trimming)")


# PUBLIC_INTERFACE
class ListOut(BaseModel):
    """
    Schema returned by the API for a list.
    """

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {"id": "3f1c8a6e-2b9d-4c55-9a0e-1d2f3a4b5c6d", "name": "Work"}
        },
    )

    id: UUID = Field(..., description="Unique identifier of the list")
    name: str = Field(..., description="List name")


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Schema for creating a new task inside an existing list.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "list_id": "3f1c8a6e-2b9d-4c55-9a0e-1d2f3a4b5c6d",
                "title": "Submit report",
                "description": "Submit the quarterly report",
            }
        }
    )

    list_id: UUID = Field(..., description="Identifier of the owning list")
    title: str = Field(..., description="Short title (1..200 characters after trimming)")
    description: str = Field(..., description="Detailed description (10..2000 characters after trimming)")


# PUBLIC_INTERFACE
class TaskTitleUpdate(BaseModel):
    """Schema for changing a task's title."""

    title: str = Field(..., description="New title (1..200 characters after trimming)")


# PUBLIC_INTERFACE
class TaskDescriptionUpdate(BaseModel):
    """Schema for changing a task's description."""

    description: str = Field(..., description="New description (10..2000 characters after trimming)")


# PUBLIC_INTERFACE
class TaskDeadlineUpdate(BaseModel):
    """
    Schema for setting or clearing a task's deadline.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"deadline": "2030-02-02T09:30:00Z"}})

    deadline: Optional[datetime] = Field(
        default=None,
        description="Deadline as ISO8601 date or datetime; dates are set to 00:00 UTC. Null clears it",
    )

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline(cls, v: Optional[DeadlineInput]) -> Optional[datetime]:
        """
        Normalize deadline from str/date/datetime to datetime.
        """
        return _parse_deadline(v)


# PUBLIC_INTERFACE
class TaskMove(BaseModel):
    """Schema for moving a task to another list."""

    list_id: UUID = Field(..., description="Identifier of the destination list")


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a task.
    """

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "9b2e4f10-7c3d-4a8b-b1e2-5f6a7b8c9d0e",
                "list_id": "3f1c8a6e-2b9d-4c55-9a0e-1d2f3a4b5c6d",
                "title": "Submit report",
                "description": "Submit the quarterly report",
                "is_completed": False,
                "deadline": None,
            }
        },
    )

    id: UUID = Field(..., description="Unique identifier of the task")
    list_id: UUID = Field(..., description="Identifier of the owning list")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Task description")
    is_completed: bool = Field(..., description="Completion status flag")
    deadline: Optional[datetime] = Field(default=None, description="Deadline as an ISO8601 datetime")
