"""Domain layer: self-validating entities and domain errors."""

from .entities import TaskList, TodoTask
from .exceptions import NotFoundError, TodoAppError, ValidationError

__all__ = [
    "NotFoundError",
    "TaskList",
    "TodoAppError",
    "TodoTask",
    "ValidationError",
]
