"""
Ownership guard for todo items.

Every single-item read or mutation goes through ``OwnershipGuard`` before it
touches storage.  The outcome is three-way: a missing todo and a todo owned
by someone else are different answers (404 vs 403).
"""

from __future__ import annotations

import enum
import logging
from typing import NamedTuple, Optional

from core.errors import ForbiddenError, NotFoundError
from database.models import Todo
from database.repositories import TodoRepository

logger = logging.getLogger(__name__)


class AccessDecision(str, enum.Enum):
    ALLOW = "allow"
    DENY = "deny"
    NOT_FOUND = "not_found"


class Authorization(NamedTuple):
    decision: AccessDecision
    todo: Optional[Todo]


class OwnershipGuard:
    def __init__(self, todos: TodoRepository) -> None:
        self._todos = todos

    async def authorize(self, requester_id: int, todo_id: int) -> Authorization:
        todo = await self._todos.find_by_id(todo_id)
        if todo is None:
            return Authorization(AccessDecision.NOT_FOUND, None)
        if todo.user_id != requester_id:
            return Authorization(AccessDecision.DENY, None)
        return Authorization(AccessDecision.ALLOW, todo)

    async def require(self, requester_id: int, todo_id: int) -> Todo:
        """Return the todo if ``requester_id`` owns it, else raise 404/403."""
        decision, todo = await self.authorize(requester_id, todo_id)
        if decision is AccessDecision.NOT_FOUND:
            raise NotFoundError()
        if decision is AccessDecision.DENY:
            logger.info("User %s denied access to todo %s", requester_id, todo_id)
            raise ForbiddenError()
        return todo
