from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from ..dependencies import get_todo_service
from ..schemas import (
    TaskCreate,
    TaskDeadlineUpdate,
    TaskDescriptionUpdate,
    TaskMove,
    TaskOut,
    TaskTitleUpdate,
)
from ..services import TodoService

router = APIRouter(
    prefix="/api/v1/tasks",
    tags=["tasks"],
)

_NOT_FOUND = {404: {"description": "Task not found"}}
_INVALID = {400: {"description": "Validation error"}}


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a new task in an existing list and return the created resource.",
    responses={
        201: {"description": "Task created successfully"},
        **_INVALID,
        404: {"description": "List not found"},
    },
)
def create_task(
    payload: TaskCreate, response: Response, service: TodoService = Depends(get_todo_service)
) -> TaskOut:
    """
    Create a new task. New tasks start not completed and without a deadline.
    """
    created = service.create_task(payload.list_id, payload.title, payload.description)
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    return TaskOut.model_validate(created)


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Get Task",
    description="Get a single task by ID.",
    responses={200: {"description": "Task found"}, **_NOT_FOUND},
)
def get_task(task_id: UUID, service: TodoService = Depends(get_todo_service)) -> TaskOut:
    """
    Retrieve a single task by its ID.
    """
    return TaskOut.model_validate(service.get_task(task_id))


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}/title",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update Task Title",
    responses={204: {"description": "Title updated"}, **_INVALID, **_NOT_FOUND},
)
def update_task_title(
    task_id: UUID, payload: TaskTitleUpdate, service: TodoService = Depends(get_todo_service)
) -> None:
    service.update_task_title(task_id, payload.title)
    return None


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}/description",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update Task Description",
    responses={204: {"description": "Description updated"}, **_INVALID, **_NOT_FOUND},
)
def update_task_description(
    task_id: UUID, payload: TaskDescriptionUpdate, service: TodoService = Depends(get_todo_service)
) -> None:
    service.update_task_description(task_id, payload.description)
    return None


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}/deadline",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Set Task Deadline",
    description="Set a deadline that is not in the past, or send null to clear it.",
    responses={204: {"description": "Deadline updated"}, **_INVALID, **_NOT_FOUND},
)
def set_task_deadline(
    task_id: UUID, payload: TaskDeadlineUpdate, service: TodoService = Depends(get_todo_service)
) -> None:
    service.set_task_deadline(task_id, payload.deadline)
    return None


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}/complete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Complete Task",
    responses={204: {"description": "Task marked completed"}, **_NOT_FOUND},
)
def mark_task_completed(task_id: UUID, service: TodoService = Depends(get_todo_service)) -> None:
    service.mark_task_completed(task_id)
    return None


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}/in-progress",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reopen Task",
    description="Clear the completion flag of a task.",
    responses={204: {"description": "Task marked in progress"}, **_NOT_FOUND},
)
def mark_task_in_progress(task_id: UUID, service: TodoService = Depends(get_todo_service)) -> None:
    service.mark_task_in_progress(task_id)
    return None


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}/move",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Move Task",
    description="Move a task to another existing list.",
    responses={204: {"description": "Task moved"}, 404: {"description": "Task or list not found"}},
)
def move_task(
    task_id: UUID, payload: TaskMove, service: TodoService = Depends(get_todo_service)
) -> None:
    service.move_task(task_id, payload.list_id)
    return None


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Task",
    description="Delete a task by ID. Deleting a missing task also returns 204.",
    responses={204: {"description": "Task deleted or already absent"}},
)
def delete_task(task_id: UUID, service: TodoService = Depends(get_todo_service)) -> None:
    """
    Delete a task. Idempotent: repeated deletes succeed.
    """
    service.delete_task(task_id)
    return None
