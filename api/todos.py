"""
Todo API routes.  All routes require a Bearer token.

Route prefix: /api/todos
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response, status

from auth.dependencies import get_current_user_id
from api.dependencies import get_todo_service
from core.todo_service import TodoService
from utils.schemas import (
    ErrorResponse,
    TodoCreateRequest,
    TodoOut,
    TodoStatusRequest,
    TodoUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["todos"],
    responses={401: {"model": ErrorResponse}},
)

_GUARDED = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.post("", response_model=TodoOut, status_code=status.HTTP_201_CREATED)
async def create_todo(
    req: TodoCreateRequest,
    user_id: int = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service),
) -> Any:
    """Add a todo to the authenticated user's list."""
    return await service.create_todo(user_id, req.title, req.description, req.image_url)


@router.get("", response_model=List[TodoOut])
async def list_todos(
    user_id: int = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service),
) -> Any:
    """All todos of the authenticated user, newest first."""
    return await service.list_todos(user_id)


@router.get("/{todo_id}", response_model=TodoOut, responses=_GUARDED)
async def get_todo(
    todo_id: int,
    user_id: int = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service),
) -> Any:
    return await service.get_todo(user_id, todo_id)


@router.patch(
    "/{todo_id}",
    response_model=TodoOut,
    responses={400: {"model": ErrorResponse}, **_GUARDED},
)
async def update_todo(
    todo_id: int,
    req: TodoUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service),
) -> Any:
    """Partially update a todo.  Only the fields present in the body change."""
    changes: Dict[str, Any] = {name: getattr(req, name) for name in req.model_fields_set}
    return await service.update_todo(user_id, todo_id, **changes)


@router.put(
    "/{todo_id}/status",
    response_model=TodoOut,
    responses={400: {"model": ErrorResponse}, **_GUARDED},
)
async def update_todo_status(
    todo_id: int,
    req: TodoStatusRequest,
    user_id: int = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service),
) -> Any:
    """Set status to one of Pending, In Progress, Done."""
    return await service.update_status(user_id, todo_id, req.status)


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_GUARDED,
)
async def delete_todo(
    todo_id: int,
    user_id: int = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service),
) -> Response:
    await service.delete_todo(user_id, todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
