"""This module re-exports the User model and the session claim for use in authentication-related code.
"""

from auth.jwt import SessionClaim  # noqa: F401
from database.models import User  # noqa: F401

__all__ = ["SessionClaim", "User"]
