"""
Todo CRUD on top of the ownership guard.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from core.errors import NoFieldsProvidedError, NotFoundError, ValidationError
from core.ownership import OwnershipGuard
from database.models import Todo, TodoStatus
from database.repositories import TodoRepository

logger = logging.getLogger(__name__)


class _Unset:
    """Marker for "field not supplied" in partial updates."""

    _instance = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

OptionalField = Union[Optional[str], _Unset]


class TodoService:
    def __init__(self, todos: TodoRepository, guard: Optional[OwnershipGuard] = None) -> None:
        self._todos = todos
        self._guard = guard or OwnershipGuard(todos)

    async def create_todo(
        self,
        owner_id: int,
        title: str,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Todo:
        todo = Todo(
            user_id=owner_id,
            title=title,
            description=description,
            image_url=image_url,
            status=TodoStatus.PENDING,
        )
        await self._todos.create_todo(todo)
        logger.info("User %s created todo %s", owner_id, todo.id)
        return todo

    async def list_todos(self, owner_id: int) -> List[Todo]:
        return await self._todos.find_by_owner(owner_id)

    async def get_todo(self, owner_id: int, todo_id: int) -> Todo:
        return await self._guard.require(owner_id, todo_id)

    async def update_todo(
        self,
        owner_id: int,
        todo_id: int,
        *,
        title: OptionalField = UNSET,
        description: OptionalField = UNSET,
        image_url: OptionalField = UNSET,
    ) -> Todo:
        """
        Apply the supplied fields only.

        ``UNSET`` leaves a field alone, ``None`` clears it.  Supplying no
        field at all raises ``NoFieldsProvidedError`` without touching storage.
        """
        changes = {
            name: value
            for name, value in (
                ("title", title),
                ("description", description),
                ("image_url", image_url),
            )
            if value is not UNSET
        }
        if not changes:
            raise NoFieldsProvidedError()
        if "title" in changes and not changes["title"]:
            raise ValidationError(details="title cannot be empty")

        todo = await self._guard.require(owner_id, todo_id)

        updated = False
        for name, value in changes.items():
            if getattr(todo, name) != value:
                setattr(todo, name, value)
                updated = True

        if not updated:
            return todo
        return await self._todos.update_todo(todo)

    async def update_status(self, owner_id: int, todo_id: int, status: TodoStatus) -> Todo:
        todo = await self._guard.require(owner_id, todo_id)
        todo.status = TodoStatus(status)
        return await self._todos.update_todo(todo)

    async def delete_todo(self, owner_id: int, todo_id: int) -> None:
        await self._guard.require(owner_id, todo_id)
        if await self._todos.delete_todo(todo_id) == 0:
            raise NotFoundError()
        logger.info("User %s deleted todo %s", owner_id, todo_id)
