"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes; longer input is rejected upstream
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """bcrypt hasher with a fixed work factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds
        self._dummy_hash = self.hash("dummy-password")

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt (auto-salted).  Errors propagate."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except (ValueError, TypeError):
            return False

    def dummy_verify(self, password: str) -> None:
        """
        Spend the same work as ``verify`` against a throwaway hash.

        Used when the account does not exist so a failed login costs the
        same whether or not the email is registered.
        """
        self.verify(password, self._dummy_hash)
