"""FastAPI application entry point."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogapi.api.images import router as images_router
from blogapi.api.middleware import register_middleware
from blogapi.api.operations import OPERATION_PATH, router as operations_router
from blogapi.config import settings
from blogapi.db.engine import engine
from blogapi.db.models import Base
from blogapi.errors import ApiError, InvalidInput, render_error
from blogapi.services.image_store import IMAGES_URL_PREFIX
from blogapi.utils.logger import setup_logger

setup_logger(
    log_format=settings.LOG_FORMAT,
    log_level="DEBUG" if settings.DEBUG else "INFO",
    access_log_path=settings.ACCESS_LOG_PATH,
)
logger = logging.getLogger("blogapi")

# The images directory must exist before StaticFiles can mount it.
os.makedirs(settings.IMAGES_DIR, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        async with engine.begin() as conn:
            if settings.is_sqlite:
                await conn.run_sync(Base.metadata.create_all)
            # else: for PostgreSQL, run `alembic upgrade head` before starting the server
    except Exception:
        logger.critical("Cannot connect to database %s", settings.BLOG_DB_URL, exc_info=True)
        sys.exit(1)

    logger.info("Application lifespan startup complete, entering serve loop")
    try:
        yield
    finally:
        await engine.dispose()


app = FastAPI(
    title="Blog API",
    description="Blog backend: users, posts and image uploads",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
register_middleware(app)


@app.exception_handler(ApiError)
async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status, content=render_error(exc))


@app.exception_handler(StarletteHTTPException)
async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail), "status": exc.status_code},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"message": f"invalid {'.'.join(str(p) for p in err.get('loc', ()) if p != 'body') or 'request'}"}
        for err in exc.errors()
    ]
    payload = InvalidInput(errors).to_payload()
    # The operation endpoint reports every failure inside an "errors" list.
    if request.url.path == OPERATION_PATH:
        return JSONResponse(status_code=422, content={"errors": [payload]})
    return JSONResponse(status_code=422, content=payload)


@app.exception_handler(Exception)
async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content=render_error(exc))


app.include_router(operations_router)
app.include_router(images_router)
app.mount(f"/{IMAGES_URL_PREFIX}", StaticFiles(directory=settings.IMAGES_DIR), name="images")


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "blogapi.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    run()
