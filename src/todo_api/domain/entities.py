"""
Domain entities for lists and tasks.

Both entities validate their own fields on construction and on every mutation.
They hold no reference to repositories, the clock or each other; a task points
at its list by id only.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from .exceptions import ValidationError

LIST_NAME_MAX_LENGTH = 80
TASK_TITLE_MAX_LENGTH = 200
TASK_DESCRIPTION_MIN_LENGTH = 10
TASK_DESCRIPTION_MAX_LENGTH = 2000


def _normalize_name(name: Optional[str]) -> str:
    normalized = (name or "").strip()
    if not normalized:
        raise ValidationError("List name cannot be empty.", field="name")
    if len(normalized) > LIST_NAME_MAX_LENGTH:
        raise ValidationError(
            f"List name cannot exceed {LIST_NAME_MAX_LENGTH} characters.", field="name"
        )
    return normalized


def _normalize_title(title: Optional[str]) -> str:
    normalized = (title or "").strip()
    if not normalized:
        raise ValidationError("Task title cannot be empty.", field="title")
    if len(normalized) > TASK_TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Task title cannot exceed {TASK_TITLE_MAX_LENGTH} characters.", field="title"
        )
    return normalized


def _normalize_description(description: Optional[str]) -> str:
    normalized = (description or "").strip()
    if len(normalized) < TASK_DESCRIPTION_MIN_LENGTH:
        raise ValidationError(
            f"Task description must be at least {TASK_DESCRIPTION_MIN_LENGTH} characters.",
            field="description",
        )
    if len(normalized) > TASK_DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Task description cannot exceed {TASK_DESCRIPTION_MAX_LENGTH} characters.",
            field="description",
        )
    return normalized


def _require_list_id(list_id: Optional[UUID]) -> UUID:
    if list_id is None or list_id.int == 0:
        raise ValidationError("ListId is required.", field="list_id")
    return list_id


# PUBLIC_INTERFACE
class TaskList:
    """A named list that groups tasks."""

    def __init__(self, name: str) -> None:
        self._id: UUID = uuid4()
        self._name: str = _normalize_name(name)

    @classmethod
    def restore(cls, list_id: UUID, name: str) -> "TaskList":
        """Rebuild a stored list, keeping its persisted id."""
        task_list = cls(name)
        task_list._id = list_id
        return task_list

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    def rename(self, name: str) -> None:
        self._name = _normalize_name(name)

    def __repr__(self) -> str:
        return f"TaskList(id={self._id!s}, name={self._name!r})"


# PUBLIC_INTERFACE
class TodoTask:
    """
    A task that belongs to exactly one list.

    Completion is a plain flag: mark_in_progress() only clears it. The deadline
    accepts any value here; the "not in the past" rule needs the current time and
    lives in the application service.
    """

    def __init__(self, list_id: UUID, title: str, description: str) -> None:
        self._list_id: UUID = _require_list_id(list_id)
        self._title: str = _normalize_title(title)
        self._description: str = _normalize_description(description)
        self._id: UUID = uuid4()
        self._is_completed: bool = False
        self._deadline: Optional[datetime] = None

    @classmethod
    def restore(
        cls,
        task_id: UUID,
        list_id: UUID,
        title: str,
        description: str,
        is_completed: bool,
        deadline: Optional[datetime],
    ) -> "TodoTask":
        """Rebuild a stored task, keeping its persisted id and state."""
        task = cls(list_id, title, description)
        task._id = task_id
        task._is_completed = bool(is_completed)
        task._deadline = deadline
        return task

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def list_id(self) -> UUID:
        return self._list_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def is_completed(self) -> bool:
        return self._is_completed

    @property
    def deadline(self) -> Optional[datetime]:
        return self._deadline

    def update_title(self, title: str) -> None:
        self._title = _normalize_title(title)

    def update_description(self, description: str) -> None:
        self._description = _normalize_description(description)

    def move_to_list(self, list_id: UUID) -> None:
        """Point the task at another list. The caller checks the list exists."""
        self._list_id = _require_list_id(list_id)

    def mark_completed(self) -> None:
        self._is_completed = True

    def mark_in_progress(self) -> None:
        self._is_completed = False

    def set_deadline(self, deadline: Optional[datetime]) -> None:
        self._deadline = deadline

    def __repr__(self) -> str:
        return (
            f"TodoTask(id={self._id!s}, list_id={self._list_id!s}, title={self._title!r}, "
            f"is_completed={self._is_completed})"
        )
