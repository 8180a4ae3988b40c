from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from ..dependencies import get_todo_service
from ..schemas import ListCreate, ListOut, ListRename
from ..services import TodoService

router = APIRouter(
    prefix="/api/v1/lists",
    tags=["lists"],
)


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=ListOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create List",
    description="Create a new list and return the created resource.",
    responses={
        201: {"description": "List created successfully"},
        400: {"description": "Validation error"},
    },
)
def create_list(
    payload: ListCreate, response: Response, service: TodoService = Depends(get_todo_service)
) -> ListOut:
    """
    Create a new list. The Location header points at the new resource.
    """
    created = service.create_list(payload.name)
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    return ListOut.model_validate(created)


# PUBLIC_INTERFACE
@router.get(
    "/{list_id}",
    response_model=ListOut,
    summary="Get List",
    description="Get a single list by ID.",
    responses={
        200: {"description": "List found"},
        404: {"description": "List not found"},
    },
)
def get_list(list_id: UUID, service: TodoService = Depends(get_todo_service)) -> ListOut:
    """
    Retrieve a single list by its ID.
    """
    return ListOut.model_validate(service.get_list(list_id))


# PUBLIC_INTERFACE
@router.patch(
    "/{list_id}/name",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Rename List",
    description="Change the name of a list.",
    responses={
        204: {"description": "List renamed"},
        400: {"description": "Validation error"},
        404: {"description": "List not found"},
    },
)
def rename_list(
    list_id: UUID, payload: ListRename, service: TodoService = Depends(get_todo_service)
) -> None:
    service.rename_list(list_id, payload.name)
    return None
