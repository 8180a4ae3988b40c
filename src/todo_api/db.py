from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Generator, Optional, Set
from uuid import UUID

import structlog

from .domain.entities import TaskList, TodoTask
from .repositories import ListRepository, TaskRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _ListCols:
    table: str = "lists"
    id: str = "id"
    name: str = "name"


@dataclass(frozen=True)
class _TaskCols:
    table: str = "tasks"
    id: str = "id"
    list_id: str = "list_id"
    title: str = "title"
    description: str = "description"
    is_completed: str = "is_completed"
    deadline: str = "deadline"


_LISTS = _ListCols()
_TASKS = _TaskCols()


class SQLiteDatabase:
    """
    SQLite database file holding the lists and tasks tables.

    Creates the schema on construction. Each session() yields a fresh connection
    with foreign keys enabled; deleting a list cascades to its tasks.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @property
    def path(self) -> str:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        # FastAPI may open the connection and run the handler on different threadpool threads.
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def session(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection for one unit of work. Uncommitted changes are discarded on close."""
        conn = self._connect()
        try:
            yield conn
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self.session() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_LISTS.table} (
                    {_LISTS.id} TEXT PRIMARY KEY,
                    {_LISTS.name} TEXT NOT NULL
                )
                """
            )
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_TASKS.table} (
                    {_TASKS.id} TEXT PRIMARY KEY,
                    {_TASKS.list_id} TEXT NOT NULL
                        REFERENCES {_LISTS.table}({_LISTS.id}) ON DELETE CASCADE,
                    {_TASKS.title} TEXT NOT NULL,
                    {_TASKS.description} TEXT NOT NULL,
                    {_TASKS.is_completed} INTEGER NOT NULL DEFAULT 0,
                    {_TASKS.deadline} TEXT NULL
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_TASKS.table}_list_id ON {_TASKS.table}({_TASKS.list_id})"
            )
            conn.commit()
        logger.debug("sqlite_schema_ready", path=self._db_path)


class SQLiteListRepository(ListRepository):
    """List repository backed by an open SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._tracked: Dict[UUID, TaskList] = {}

    def get_by_id(self, list_id: UUID) -> Optional[TaskList]:
        if list_id in self._tracked:
            return self._tracked[list_id]
        row = self._conn.execute(
            f"SELECT * FROM {_LISTS.table} WHERE {_LISTS.id} = ?", (str(list_id),)
        ).fetchone()
        if row is None:
            return None
        task_list = TaskList.restore(UUID(row[_LISTS.id]), row[_LISTS.name])
        self._tracked[list_id] = task_list
        return task_list

    def add(self, task_list: TaskList) -> None:
        self._tracked[task_list.id] = task_list

    def persist(self) -> None:
        for task_list in self._tracked.values():
            self._conn.execute(
                f"""
                INSERT INTO {_LISTS.table} ({_LISTS.id}, {_LISTS.name})
                VALUES (?, ?)
                ON CONFLICT({_LISTS.id}) DO UPDATE SET {_LISTS.name} = excluded.{_LISTS.name}
                """,
                (str(task_list.id), task_list.name),
            )
        self._conn.commit()


class SQLiteTaskRepository(TaskRepository):
    """Task repository backed by an open SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._tracked: Dict[UUID, TodoTask] = {}
        self._removed: Set[UUID] = set()

    def _row_to_entity(self, row: sqlite3.Row) -> TodoTask:
        deadline = row[_TASKS.deadline]
        return TodoTask.restore(
            task_id=UUID(row[_TASKS.id]),
            list_id=UUID(row[_TASKS.list_id]),
            title=row[_TASKS.title],
            description=row[_TASKS.description],
            is_completed=bool(row[_TASKS.is_completed]),
            deadline=datetime.fromisoformat(deadline) if deadline is not None else None,
        )

    def get_by_id(self, task_id: UUID) -> Optional[TodoTask]:
        if task_id in self._removed:
            return None
        if task_id in self._tracked:
            return self._tracked[task_id]
        row = self._conn.execute(
            f"SELECT * FROM {_TASKS.table} WHERE {_TASKS.id} = ?", (str(task_id),)
        ).fetchone()
        if row is None:
            return None
        task = self._row_to_entity(row)
        self._tracked[task_id] = task
        return task

    def add(self, task: TodoTask) -> None:
        self._removed.discard(task.id)
        self._tracked[task.id] = task

    def delete(self, task: TodoTask) -> None:
        self._tracked.pop(task.id, None)
        self._removed.add(task.id)

    def persist(self) -> None:
        for task_id in self._removed:
            self._conn.execute(
                f"DELETE FROM {_TASKS.table} WHERE {_TASKS.id} = ?", (str(task_id),)
            )
        for task in self._tracked.values():
            self._conn.execute(
                f"""
                INSERT INTO {_TASKS.table} ({_TASKS.id}, {_TASKS.list_id}, {_TASKS.title},
                    {_TASKS.description}, {_TASKS.is_completed}, {_TASKS.deadline})
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT({_TASKS.id}) DO UPDATE SET
                    {_TASKS.list_id} = excluded.{_TASKS.list_id},
                    {_TASKS.title} = excluded.{_TASKS.title},
                    {_TASKS.description} = excluded.{_TASKS.description},
                    {_TASKS.is_completed} = excluded.{_TASKS.is_completed},
                    {_TASKS.deadline} = excluded.{_TASKS.deadline}
                """,
                (
                    str(task.id),
                    str(task.list_id),
                    task.title,
                    task.description,
                    1 if task.is_completed else 0,
                    task.deadline.isoformat() if task.deadline else None,
                ),
            )
        self._conn.commit()
        self._removed.clear()
