"""FastAPI dependency: ``get_auth_context``.

Annotates every request with an :class:`AuthContext`.  It never rejects a
request: a missing, malformed, expired or forged token simply yields an
unauthenticated context, and each operation decides for itself whether it
needs an authenticated caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Header

from blogapi.auth.tokens import InvalidToken, verify_token
from blogapi.utils.logger import ctx_user_id

logger = logging.getLogger("blogapi.auth")


@dataclass(frozen=True)
class AuthContext:
    """Authentication state of a single request."""

    is_auth: bool = False
    user_id: str | None = None


ANONYMOUS = AuthContext()


def resolve_auth_context(authorization: str | None, secret: str) -> AuthContext:
    """Return the :class:`AuthContext` for an ``Authorization`` header value."""
    if not authorization:
        return ANONYMOUS

    parts = authorization.split()
    if len(parts) < 2:
        return ANONYMOUS

    try:
        claims = verify_token(parts[1], secret)
    except InvalidToken as exc:
        logger.debug("Token rejected: %s", exc)
        return ANONYMOUS

    return AuthContext(is_auth=True, user_id=claims.user_id)


async def get_auth_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> AuthContext:
    """Resolve the caller's identity from the bearer token, if any."""
    from blogapi.config import settings  # late import to avoid circular deps

    ctx = resolve_auth_context(authorization, settings.AUTH_SECRET_KEY)
    if ctx.is_auth:
        ctx_user_id.set(ctx.user_id)
    return ctx
