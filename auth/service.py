"""
Registration and login.

Registration:  validate → uniqueness check → hash → persist → sanitized user
Login:         lookup → verify password → issue token → {token, user}
"""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy.exc import IntegrityError

from auth.jwt import TokenSigner
from auth.models import User
from auth.password import PasswordHasher
from core.errors import ConflictError, InvalidCredentialsError
from database.repositories import UserRepository
from utils.schemas import AuthResponse, UserOut

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        signer: TokenSigner,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._signer = signer

    async def register(self, email: str, password: str) -> UserOut:
        """Create an account.  Raises ``ConflictError`` if the email is taken."""
        if await self._users.find_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise ConflictError()

        password_hash = await asyncio.to_thread(self._hasher.hash, password)

        try:
            user = await self._users.create_user(email, password_hash)
        except IntegrityError:
            # lost the check-then-create race; the unique index caught it
            logger.info("Registration rejected by unique constraint")
            raise ConflictError() from None

        logger.info("Registered user %s", user.id)
        return UserOut.model_validate(user)

    async def login(self, email: str, password: str) -> AuthResponse:
        """
        Check credentials and issue a session token.

        An unknown email and a wrong password raise the same
        ``InvalidCredentialsError`` after the same amount of bcrypt work.
        """
        user: User | None = await self._users.find_by_email(email)
        if user is None:
            await asyncio.to_thread(self._hasher.dummy_verify, password)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(self._hasher.verify, password, user.password_hash):
            logger.info("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError()

        token = self._signer.issue(user.id)
        logger.info("Login: user %s", user.id)
        return AuthResponse(token=token, user=UserOut.model_validate(user))
