import contextvars
import logging
import sys

from pythonjsonlogger import jsonlogger

# Context variables for correlation
ctx_request_id = contextvars.ContextVar("request_id", default=None)
ctx_user_id = contextvars.ContextVar("user_id", default=None)

ACCESS_LOGGER_NAME = "blogapi.access"


class CorrelationJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        request_id = ctx_request_id.get()
        if request_id:
            log_record["request_id"] = request_id

        user_id = ctx_user_id.get()
        if user_id:
            log_record["user_id"] = user_id


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "json":
        return CorrelationJsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
        )
    return logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def setup_logger(log_format: str = "text", log_level: str = "INFO", access_log_path: str | None = None):
    """Configure the root logger."""
    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(log_format))
    root_logger.addHandler(handler)

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    # Access lines go to stdout through the root logger and, when configured,
    # to a dedicated append-only file as well.
    access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
    for handler in access_logger.handlers[:]:
        access_logger.removeHandler(handler)
    if access_log_path:
        file_handler = logging.FileHandler(access_log_path, mode="a", encoding="utf-8")
        file_handler.setFormatter(_build_formatter(log_format))
        access_logger.addHandler(file_handler)

    # Silence third-party noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger
