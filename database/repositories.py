"""
Repositories: thin async wrappers over the ORM for users and todos.

Every mutating call commits on its own so a write is a single atomic
storage operation.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Todo, User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_user(self, email: str, password_hash: str) -> User:
        """Insert a user row.  Raises ``IntegrityError`` if the email is taken."""
        user = User(email=email, password_hash=password_hash)
        self._session.add(user)
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self._session.get(User, user_id)


class TodoRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_todo(self, todo: Todo) -> Todo:
        self._session.add(todo)
        await self._session.commit()
        return todo

    async def find_by_owner(self, user_id: int) -> List[Todo]:
        """All todos owned by ``user_id``, newest first."""
        result = await self._session.execute(
            select(Todo)
            .where(Todo.user_id == user_id)
            .order_by(Todo.created_at.desc(), Todo.id.desc())
        )
        return list(result.scalars().all())

    async def find_by_id(self, todo_id: int) -> Optional[Todo]:
        return await self._session.get(Todo, todo_id)

    async def update_todo(self, todo: Todo) -> Todo:
        self._session.add(todo)
        await self._session.commit()
        return todo

    async def delete_todo(self, todo_id: int) -> int:
        """Delete by id and return the number of rows removed."""
        result = await self._session.execute(delete(Todo).where(Todo.id == todo_id))
        await self._session.commit()
        return result.rowcount or 0
