"""
JWT session token creation and verification.

Tokens carry ``sub`` (the user id), ``iat`` and ``exp`` and are signed with
an HMAC algorithm (HS256 unless configured otherwise).  Verification pins
the expected algorithm, so a token whose header names any other algorithm
(``none`` included) is rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt as pyjwt

from core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"


@dataclass(frozen=True)
class SessionClaim:
    subject: int
    issued_at: datetime
    expires_at: datetime


def create_token(
    subject_id: int,
    secret: str,
    ttl: timedelta,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed token for ``subject_id`` expiring at ``now + ttl``."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(subject_id),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + ttl).timestamp()),
    }
    return pyjwt.encode(payload, secret, algorithm=algorithm)


def verify_token(
    token: str,
    secret: str,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    leeway: int = 0,
) -> SessionClaim:
    """
    Verify ``token`` and return its claim.

    Raises ``UnauthenticatedError`` on any failure.  The caller only ever sees
    "Invalid or expired token"; the specific cause goes to the debug log.
    """
    try:
        payload = pyjwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            leeway=leeway,
            options={"require": ["exp", "iat", "sub"]},
        )
        subject = int(payload["sub"])
    except pyjwt.InvalidTokenError as exc:
        logger.debug("Token rejected: %s (%s)", exc, type(exc).__name__)
        raise UnauthenticatedError() from None
    except (TypeError, ValueError) as exc:
        logger.debug("Token rejected: bad subject (%s)", exc)
        raise UnauthenticatedError() from None

    return SessionClaim(
        subject=subject,
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


@dataclass(frozen=True)
class TokenSigner:
    """Issues and checks tokens with one secret, algorithm and lifetime."""

    secret: str
    ttl: timedelta
    algorithm: str = DEFAULT_ALGORITHM
    leeway: int = 0

    def issue(self, subject_id: int, *, now: Optional[datetime] = None) -> str:
        return create_token(subject_id, self.secret, self.ttl, algorithm=self.algorithm, now=now)

    def verify(self, token: str) -> SessionClaim:
        return verify_token(token, self.secret, algorithm=self.algorithm, leeway=self.leeway)

    def __repr__(self) -> str:
        return f"TokenSigner(algorithm={self.algorithm!r}, ttl={self.ttl!r})"
