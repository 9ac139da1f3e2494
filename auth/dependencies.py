"""
FastAPI dependencies for authentication.

Provides ``db_session`` and ``get_current_user_id`` dependencies that
are used across all protected routes.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenSigner
from core.errors import UnauthenticatedError
from database.session import get_db_session

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def parse_bearer(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise UnauthenticatedError("Missing authorization header")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        raise UnauthenticatedError("Invalid authorization format (Bearer token expected)")
    return parts[1]


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> int:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id``.
    """
    token = parse_bearer(authorization)
    signer: TokenSigner = request.app.state.token_signer
    claim = signer.verify(token)
    request.state.user_id = claim.subject
    return claim.subject
