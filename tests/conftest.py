"""
Test configuration and fixtures
"""

import os
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

# Ensure we default to memory backend for tests to avoid filesystem dependencies
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from todo_api.clock import Clock  # noqa: E402
from todo_api.dependencies import get_todo_service  # noqa: E402
from todo_api.main import app  # noqa: E402
from todo_api.repositories import (  # noqa: E402
    InMemoryListRepository,
    InMemoryTaskRepository,
    MemoryStore,
)
from todo_api.services import TodoService  # noqa: E402

PINNED_NOW = datetime(2026, 1, 10, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock(Clock):
    """Clock stub whose current time is set by the test."""

    def __init__(self, now: datetime = PINNED_NOW) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current


class SpyListRepository(InMemoryListRepository):
    """In-memory list repository that counts calls."""

    def __init__(self, store: MemoryStore) -> None:
        super().__init__(store)
        self.get_calls = 0
        self.add_calls = 0
        self.persist_calls = 0

    def get_by_id(self, list_id):
        self.get_calls += 1
        return super().get_by_id(list_id)

    def add(self, task_list) -> None:
        self.add_calls += 1
        super().add(task_list)

    def persist(self) -> None:
        self.persist_calls += 1
        super().persist()


class SpyTaskRepository(InMemoryTaskRepository):
    """In-memory task repository that counts calls."""

    def __init__(self, store: MemoryStore) -> None:
        super().__init__(store)
        self.get_calls = 0
        self.add_calls = 0
        self.delete_calls = 0
        self.persist_calls = 0

    def get_by_id(self, task_id):
        self.get_calls += 1
        return super().get_by_id(task_id)

    def add(self, task) -> None:
        self.add_calls += 1
        super().add(task)

    def delete(self, task) -> None:
        self.delete_calls += 1
        super().delete(task)

    def persist(self) -> None:
        self.persist_calls += 1
        super().persist()

    @property
    def touched(self) -> bool:
        return bool(self.add_calls or self.delete_calls or self.persist_calls)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def store():
    """A fresh, empty memory store per test."""
    return MemoryStore()


@pytest.fixture
def lists(store):
    return SpyListRepository(store)


@pytest.fixture
def tasks(store):
    return SpyTaskRepository(store)


@pytest.fixture
def service(lists, tasks, clock):
    return TodoService(lists, tasks, clock)


@pytest.fixture
def fresh_service(store, clock):
    """Build a new service over the same store, as a later request would."""

    def _build() -> TodoService:
        return TodoService(InMemoryListRepository(store), InMemoryTaskRepository(store), clock)

    return _build


@pytest.fixture
def client(store, clock):
    """Test client whose service uses the per-test store and the pinned clock."""

    def override_get_todo_service():
        yield TodoService(InMemoryListRepository(store), InMemoryTaskRepository(store), clock)

    app.dependency_overrides[get_todo_service] = override_get_todo_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
