"""Signed identity tokens (HS256 JWT via PyJWT).

A token carries the user id and email and expires after a fixed window.
There is no revocation list and no refresh: validity is decided solely by
signature and expiry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

logger = logging.getLogger("blogapi.auth")

ALGORITHM = "HS256"
DEFAULT_EXPIRE_MINUTES = 60


class InvalidToken(Exception):
    """Raised when a token is malformed, expired or carries a bad signature."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str | None = None


def issue_token(
    user_id: str,
    email: str,
    secret: str,
    expire_minutes: int = DEFAULT_EXPIRE_MINUTES,
    now: datetime | None = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(token: str, secret: str) -> TokenClaims:
    """Decode *token* and return its claims.  Raises :class:`InvalidToken`."""
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc
    if not isinstance(payload, dict):
        raise InvalidToken("token payload is not an object")
    user_id = payload.get("userId")
    if not user_id:
        raise InvalidToken("token has no userId claim")
    return TokenClaims(user_id=str(user_id), email=payload.get("email"))
