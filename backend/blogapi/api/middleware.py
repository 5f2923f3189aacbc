"""Global HTTP middleware: request ids, access log, security headers."""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request

from blogapi.utils.logger import ACCESS_LOGGER_NAME, ctx_request_id, ctx_user_id

access_logger = logging.getLogger(ACCESS_LOGGER_NAME)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def register_middleware(app: FastAPI) -> None:
    """Attach app-level middleware."""

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        rid_token = ctx_request_id.set(request_id)
        uid_token = ctx_user_id.set(None)
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            elapsed = time.perf_counter() - start
            access_logger.info(
                "%s %s %s %d %.1fms",
                request.client.host if request.client else "-",
                request.method,
                request.url.path,
                status_code,
                elapsed * 1000,
            )
            ctx_user_id.reset(uid_token)
            ctx_request_id.reset(rid_token)

        response.headers["X-Request-ID"] = request_id
        for name, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
