"""
FastAPI dependency providers.

A TodoService is built per request over repositories for the configured
persistence backend. The memory store and the SQLite database handle are
process-wide; repositories and connections are per request.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Iterator

from fastapi import Depends

from .clock import Clock, SystemClock
from .db import SQLiteDatabase, SQLiteListRepository, SQLiteTaskRepository
from .repositories import InMemoryListRepository, InMemoryTaskRepository, MemoryStore
from .services import TodoService
from .settings import Settings, get_settings


@lru_cache(maxsize=1)
def get_memory_store() -> MemoryStore:
    """Return the process-wide in-memory store."""
    return MemoryStore()


@lru_cache(maxsize=None)
def get_database(db_path: str) -> SQLiteDatabase:
    """Return the SQLite database for a path, creating the schema on first use."""
    return SQLiteDatabase(db_path)


# PUBLIC_INTERFACE
def get_clock() -> Clock:
    """Return the clock used for deadline checks."""
    return SystemClock()


# PUBLIC_INTERFACE
def get_todo_service(
    settings: Settings = Depends(get_settings),
    clock: Clock = Depends(get_clock),
) -> Iterator[TodoService]:
    """
    Yield a TodoService wired to the configured backend.

    - memory: InMemory repositories over the shared MemoryStore
    - sqlite: SQLite repositories over one connection, closed after the request
    """
    if settings.persistence_backend == "sqlite":
        database = get_database(settings.sqlite_db_path)
        with database.session() as conn:
            yield TodoService(SQLiteListRepository(conn), SQLiteTaskRepository(conn), clock)
        return

    store = get_memory_store()
    yield TodoService(InMemoryListRepository(store), InMemoryTaskRepository(store), clock)
