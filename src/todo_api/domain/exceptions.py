"""
Domain errors for the todo API.

These exceptions are raised by entities and the application service and are
independent of the HTTP layer, which maps them to status codes.
"""
from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import UUID


class TodoAppError(Exception):
    """Base exception for all todo domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(TodoAppError):
    """Raised when input data violates an entity or service rule."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message=message, details={"field": field} if field else None)
        self.field = field


class NotFoundError(TodoAppError):
    """Raised when a referenced list or task does not exist in the store."""

    def __init__(self, resource: str, resource_id: UUID):
        super().__init__(
            message=f"{resource.capitalize()} '{resource_id}' was not found.",
            details={"resource": resource, "id": str(resource_id)},
        )
        self.resource = resource
        self.resource_id = resource_id
