"""
FastAPI dependencies (shared across routes).

Services are built per request around that request's DB session; the
long-lived collaborators (hasher, signer, object storage) come from
``app.state``.
"""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session
from auth.service import AuthService
from core.todo_service import TodoService
from core.upload_service import UploadService
from database.repositories import TodoRepository, UserRepository


async def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(db_session),
) -> AuthService:
    return AuthService(
        UserRepository(session),
        request.app.state.password_hasher,
        request.app.state.token_signer,
    )


async def get_todo_service(session: AsyncSession = Depends(db_session)) -> TodoService:
    return TodoService(TodoRepository(session))


async def get_upload_service(request: Request) -> UploadService:
    return UploadService(
        request.app.state.object_storage,
        max_bytes=request.app.state.settings.upload_max_bytes,
    )
