"""
Tests for TodoService: CRUD, partial updates and guarded access.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.errors import ForbiddenError, NoFieldsProvidedError, NotFoundError, ValidationError
from core.todo_service import UNSET, TodoService
from database.models import TodoStatus
from database.repositories import TodoRepository, UserRepository


@pytest.fixture
def service(session) -> TodoService:
    return TodoService(TodoRepository(session))


async def _users(session):
    repo = UserRepository(session)
    return await repo.create_user("a@x.com", "hash"), await repo.create_user("b@x.com", "hash")


def _mock_repo(todo=None) -> MagicMock:
    repo = MagicMock()
    repo.find_by_id = AsyncMock(return_value=todo)
    repo.update_todo = AsyncMock(side_effect=lambda t: t)
    repo.delete_todo = AsyncMock(return_value=1)
    return repo


class TestCreateAndList:
    @pytest.mark.asyncio
    async def test_create_defaults_to_pending(self, service, session):
        alice, _ = await _users(session)
        todo = await service.create_todo(alice.id, "buy milk")
        assert todo.id == 1
        assert todo.user_id == alice.id
        assert todo.status is TodoStatus.PENDING
        assert todo.description is None

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_owner_newest_first(self, service, session):
        alice, bob = await _users(session)
        first = await service.create_todo(alice.id, "first")
        second = await service.create_todo(alice.id, "second")
        await service.create_todo(bob.id, "bob's")

        todos = await service.list_todos(alice.id)
        assert [t.id for t in todos] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_without_todos_is_empty_list(self, service, session):
        alice, _ = await _users(session)
        assert await service.list_todos(alice.id) == []


class TestGuardedAccess:
    @pytest.mark.asyncio
    async def test_other_owner_is_forbidden_not_missing(self, service, session):
        alice, bob = await _users(session)
        todo = await service.create_todo(alice.id, "private")

        with pytest.raises(ForbiddenError):
            await service.get_todo(bob.id, todo.id)
        with pytest.raises(ForbiddenError):
            await service.update_todo(bob.id, todo.id, title="hijacked")
        with pytest.raises(ForbiddenError):
            await service.update_status(bob.id, todo.id, TodoStatus.DONE)
        with pytest.raises(ForbiddenError):
            await service.delete_todo(bob.id, todo.id)

        assert (await service.get_todo(alice.id, todo.id)).title == "private"

    @pytest.mark.asyncio
    async def test_missing_todo_is_not_found(self, service, session):
        alice, _ = await _users(session)
        with pytest.raises(NotFoundError):
            await service.get_todo(alice.id, 404)
        with pytest.raises(NotFoundError):
            await service.update_todo(alice.id, 404, title="x")
        with pytest.raises(NotFoundError):
            await service.delete_todo(alice.id, 404)

    @pytest.mark.asyncio
    async def test_delete_twice(self, service, session):
        alice, _ = await _users(session)
        todo = await service.create_todo(alice.id, "once")
        await service.delete_todo(alice.id, todo.id)
        with pytest.raises(NotFoundError):
            await service.delete_todo(alice.id, todo.id)

    @pytest.mark.asyncio
    async def test_delete_with_zero_rows_is_not_found(self):
        repo = _mock_repo(SimpleNamespace(id=1, user_id=1))
        repo.delete_todo = AsyncMock(return_value=0)
        with pytest.raises(NotFoundError):
            await TodoService(repo).delete_todo(1, 1)


class TestUpdate:
    @pytest.mark.asyncio
    async def test_no_fields_is_rejected_without_storage_access(self):
        repo = _mock_repo()
        with pytest.raises(NoFieldsProvidedError):
            await TodoService(repo).update_todo(1, 1)
        repo.find_by_id.assert_not_awaited()
        repo.update_todo.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_only_supplied_fields_change(self, service, session):
        alice, _ = await _users(session)
        todo = await service.create_todo(alice.id, "title", "desc", "https://img.example/a.png")

        updated = await service.update_todo(alice.id, todo.id, description="")
        assert updated.title == "title"
        assert updated.description == ""
        assert updated.image_url == "https://img.example/a.png"

    @pytest.mark.asyncio
    async def test_none_clears_a_nullable_field(self, service, session):
        alice, _ = await _users(session)
        todo = await service.create_todo(alice.id, "title", "desc", "https://img.example/a.png")
        updated = await service.update_todo(alice.id, todo.id, image_url=None)
        assert updated.image_url is None
        assert updated.description == "desc"

    @pytest.mark.asyncio
    async def test_empty_title_is_rejected(self, service, session):
        alice, _ = await _users(session)
        todo = await service.create_todo(alice.id, "title")
        with pytest.raises(ValidationError):
            await service.update_todo(alice.id, todo.id, title="")

    @pytest.mark.asyncio
    async def test_unchanged_values_skip_the_write(self):
        todo = SimpleNamespace(id=1, user_id=1, title="same", description=None, image_url=None)
        repo = _mock_repo(todo)
        result = await TodoService(repo).update_todo(1, 1, title="same")
        assert result is todo
        repo.update_todo.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_explicit_unset_counts_as_absent(self):
        repo = _mock_repo()
        with pytest.raises(NoFieldsProvidedError):
            await TodoService(repo).update_todo(1, 1, title=UNSET, description=UNSET)

    @pytest.mark.asyncio
    async def test_update_status(self, service, session):
        alice, _ = await _users(session)
        todo = await service.create_todo(alice.id, "title")
        updated = await service.update_status(alice.id, todo.id, TodoStatus.IN_PROGRESS)
        assert updated.status is TodoStatus.IN_PROGRESS
        assert (await service.get_todo(alice.id, todo.id)).status is TodoStatus.IN_PROGRESS
