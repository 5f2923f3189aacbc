"""Error taxonomy and the uniform error payload.

Resolvers raise these; the API boundary catches them once and renders
``{"message": ..., "status": ..., "data": [...]}`` (``data`` only when set).
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger("blogapi.errors")

FieldErrors = list[dict[str, str]]


class ApiError(Exception):
    """Base class for errors that carry an HTTP-style status and payload."""

    status: int = 500

    def __init__(self, message: str, *, status: int | None = None, data: FieldErrors | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        self.data = data

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message, "status": self.status}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class InvalidInput(ApiError):
    status = 422

    def __init__(self, errors: FieldErrors, message: str = "invalid input") -> None:
        super().__init__(message, data=list(errors))


class Unauthorized(ApiError):
    status = 401


class Forbidden(ApiError):
    status = 403


class NotFound(ApiError):
    status = 404


class UserExists(ApiError):
    status = 409

    def __init__(self, message: str = "user exists already") -> None:
        super().__init__(message)


class UnknownOperation(ApiError):
    status = 400


class InternalError(ApiError):
    status = 500


def raise_if_invalid(errors: FieldErrors) -> None:
    """Raise :class:`InvalidInput` carrying *errors* when the list is non-empty."""
    if errors:
        raise InvalidInput(errors)


def render_error(exc: BaseException) -> dict[str, Any]:
    """Render any exception as the uniform error payload.

    Unexpected exceptions are logged with their traceback and reported as a
    bare 500 without details.
    """
    if isinstance(exc, ApiError):
        return exc.to_payload()
    logger.error("Unhandled error: %s", exc, exc_info=exc)
    return {"message": "internal server error", "status": 500}
