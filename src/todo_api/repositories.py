from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from threading import RLock
from typing import Dict, Optional, Set
from uuid import UUID

from .domain.entities import TaskList, TodoTask


# PUBLIC_INTERFACE
class ListRepository(ABC):
    """
    Storage contract for TaskList aggregates.

    add() and in-place changes to loaded lists are staged; nothing reaches the
    store until persist() is called.
    """

    @abstractmethod
    def get_by_id(self, list_id: UUID) -> Optional[TaskList]:
        """Return the TaskList with this id, or None if not found."""

    @abstractmethod
    def add(self, task_list: TaskList) -> None:
        """Stage a new TaskList for insertion."""

    @abstractmethod
    def persist(self) -> None:
        """Write all staged changes to the store."""


# PUBLIC_INTERFACE
class TaskRepository(ABC):
    """
    Storage contract for TodoTask aggregates.

    add(), delete() and in-place changes to loaded tasks are staged; nothing
    reaches the store until persist() is called.
    """

    @abstractmethod
    def get_by_id(self, task_id: UUID) -> Optional[TodoTask]:
        """Return the TodoTask with this id, or None if not found."""

    @abstractmethod
    def add(self, task: TodoTask) -> None:
        """Stage a new TodoTask for insertion."""

    @abstractmethod
    def delete(self, task: TodoTask) -> None:
        """Stage removal of a TodoTask."""

    @abstractmethod
    def persist(self) -> None:
        """Write all staged changes to the store."""


class MemoryStore:
    """
    Thread-safe in-memory storage shared by the in-memory repositories.

    Holds committed lists and tasks keyed by id. Repositories hand out copies, so
    an entity changed without persist() never leaks into the store.
    """

    def __init__(self) -> None:
        self.lock = RLock()
        self.lists: Dict[UUID, TaskList] = {}
        self.tasks: Dict[UUID, TodoTask] = {}


class InMemoryListRepository(ListRepository):
    """List repository over a MemoryStore, suitable for testing and default runtime."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store
        self._tracked: Dict[UUID, TaskList] = {}

    def get_by_id(self, list_id: UUID) -> Optional[TaskList]:
        if list_id in self._tracked:
            return self._tracked[list_id]
        with self._store.lock:
            stored = self._store.lists.get(list_id)
            if stored is None:
                return None
            loaded = copy.deepcopy(stored)
        self._tracked[list_id] = loaded
        return loaded

    def add(self, task_list: TaskList) -> None:
        self._tracked[task_list.id] = task_list

    def persist(self) -> None:
        with self._store.lock:
            for list_id, task_list in self._tracked.items():
                self._store.lists[list_id] = copy.deepcopy(task_list)


class InMemoryTaskRepository(TaskRepository):
    """Task repository over a MemoryStore, suitable for testing and default runtime."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store
        self._tracked: Dict[UUID, TodoTask] = {}
        self._removed: Set[UUID] = set()

    def get_by_id(self, task_id: UUID) -> Optional[TodoTask]:
        if task_id in self._removed:
            return None
        if task_id in self._tracked:
            return self._tracked[task_id]
        with self._store.lock:
            stored = self._store.tasks.get(task_id)
            if stored is None:
                return None
            loaded = copy.deepcopy(stored)
        self._tracked[task_id] = loaded
        return loaded

    def add(self, task: TodoTask) -> None:
        self._removed.discard(task.id)
        self._tracked[task.id] = task

    def delete(self, task: TodoTask) -> None:
        self._tracked.pop(task.id, None)
        self._removed.add(task.id)

    def persist(self) -> None:
        with self._store.lock:
            for task_id in self._removed:
                self._store.tasks.pop(task_id, None)
            for task_id, task in self._tracked.items():
                self._store.tasks[task_id] = copy.deepcopy(task)
        self._removed.clear()
