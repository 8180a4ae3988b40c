"""
Application service for lists and tasks.

Every operation follows the same shape: load the aggregate(s) it needs, fail
with NotFoundError if one is missing, apply checks the entities cannot make on
their own, mutate, then persist once. Errors propagate to the caller unchanged.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import structlog

from .clock import Clock
from .domain.entities import TaskList, TodoTask
from .domain.exceptions import NotFoundError, ValidationError
from .repositories import ListRepository, TaskRepository

logger = structlog.get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with the clock's aware instants."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# PUBLIC_INTERFACE
class TodoService:
    """Use cases over lists and tasks. Cheap to build; intended to live for one request."""

    def __init__(self, lists: ListRepository, tasks: TaskRepository, clock: Clock) -> None:
        self._lists = lists
        self._tasks = tasks
        self._clock = clock

    def _load_list(self, list_id: UUID) -> TaskList:
        task_list = self._lists.get_by_id(list_id)
        if task_list is None:
            logger.info("List not found", list_id=str(list_id))
            raise NotFoundError("list", list_id)
        return task_list

    def _load_task(self, task_id: UUID) -> TodoTask:
        task = self._tasks.get_by_id(task_id)
        if task is None:
            logger.info("Task not found", task_id=str(task_id))
            raise NotFoundError("task", task_id)
        return task

    def create_list(self, name: str) -> TaskList:
        task_list = TaskList(name)
        self._lists.add(task_list)
        self._lists.persist()
        logger.info("List created", list_id=str(task_list.id))
        return task_list

    def get_list(self, list_id: UUID) -> TaskList:
        return self._load_list(list_id)

    def rename_list(self, list_id: UUID, name: str) -> None:
        task_list = self._load_list(list_id)
        task_list.rename(name)
        self._lists.persist()
        logger.info("List renamed", list_id=str(list_id))

    def create_task(self, list_id: UUID, title: str, description: str) -> TodoTask:
        self._load_list(list_id)
        task = TodoTask(list_id, title, description)
        self._tasks.add(task)
        self._tasks.persist()
        logger.info("Task created", task_id=str(task.id), list_id=str(list_id))
        return task

    def get_task(self, task_id: UUID) -> TodoTask:
        return self._load_task(task_id)

    def update_task_title(self, task_id: UUID, title: str) -> None:
        task = self._load_task(task_id)
        task.update_title(title)
        self._tasks.persist()
        logger.info("Task title updated", task_id=str(task_id))

    def update_task_description(self, task_id: UUID, description: str) -> None:
        task = self._load_task(task_id)
        task.update_description(description)
        self._tasks.persist()
        logger.info("Task description updated", task_id=str(task_id))

    def set_task_deadline(self, task_id: UUID, deadline: Optional[datetime]) -> None:
        """
        Set or clear a task's deadline.

        A deadline equal to the clock's current instant is accepted; anything
        earlier raises ValidationError. None clears the deadline.
        """
        task = self._load_task(task_id)
        if deadline is not None:
            deadline = _as_utc(deadline)
            now = self._clock.now()
            if deadline < now:
                logger.warning(
                    "Rejected past deadline",
                    task_id=str(task_id),
                    deadline=deadline.isoformat(),
                    now=now.isoformat(),
                )
                raise ValidationError("Deadline cannot be in the past.", field="deadline")
        task.set_deadline(deadline)
        self._tasks.persist()
        logger.info("Task deadline set", task_id=str(task_id), cleared=deadline is None)

    def mark_task_completed(self, task_id: UUID) -> None:
        task = self._load_task(task_id)
        task.mark_completed()
        self._tasks.persist()
        logger.info("Task marked completed", task_id=str(task_id))

    def mark_task_in_progress(self, task_id: UUID) -> None:
        task = self._load_task(task_id)
        task.mark_in_progress()
        self._tasks.persist()
        logger.info("Task marked in progress", task_id=str(task_id))

    def move_task(self, task_id: UUID, new_list_id: UUID) -> None:
        task = self._load_task(task_id)
        self._load_list(new_list_id)
        task.move_to_list(new_list_id)
        self._tasks.persist()
        logger.info("Task moved", task_id=str(task_id), list_id=str(new_list_id))

    def delete_task(self, task_id: UUID) -> None:
        """Delete a task. Deleting a task that does not exist is a no-op."""
        task = self._tasks.get_by_id(task_id)
        if task is None:
            return
        self._tasks.delete(task)
        self._tasks.persist()
        logger.info("Task deleted", task_id=str(task_id))
