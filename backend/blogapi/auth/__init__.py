"""Authentication helpers.

Credential scheme
-----------------
``Authorization: Bearer <jwt>``
    HS256-signed JWT issued by the ``login`` operation.
    Claims: ``userId``, ``email``, ``iat``, ``exp`` (one hour after issue).

Every request is annotated with an :class:`AuthContext`; the annotation
never blocks a request.  Operations that need a caller check
``ctx.is_auth`` themselves.
"""

from blogapi.auth.deps import AuthContext, get_auth_context, resolve_auth_context
from blogapi.auth.tokens import InvalidToken, issue_token, verify_token

__all__ = [
    "AuthContext",
    "InvalidToken",
    "get_auth_context",
    "issue_token",
    "resolve_auth_context",
    "verify_token",
]
