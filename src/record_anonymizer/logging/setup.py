"""Logging configuration for record-anonymizer.

Provides structured JSON logging with request_id correlation.
"""

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any, Optional

from pythonjsonlogger.json import JsonFormatter


SERVICE_NAME = "record-anonymizer"

# Context variable for request_id correlation
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestContextFilter(logging.Filter):
    """Filter that adds request_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add request_id from context to log record."""
        record.request_id = request_id_var.get() or "-"
        return True


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter with renamed level/timestamp fields and service tag."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")
        if "asctime" in log_record:
            log_record["timestamp"] = log_record.pop("asctime")

        log_record["service"] = SERVICE_NAME

        if hasattr(record, "request_id"):
            log_record["request_id"] = record.request_id


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var
               ANONYMIZER_LOG_LEVEL or INFO.
        json_format: Whether to use JSON format. Defaults to env var
                     ANONYMIZER_LOG_FORMAT == 'json' or True.
    """
    if level is None:
        level = os.getenv("ANONYMIZER_LOG_LEVEL", "INFO")
    level = level.upper()
    if json_format is None:
        log_format = os.getenv("ANONYMIZER_LOG_FORMAT", "json").lower()
        json_format = log_format == "json"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())

    if json_format:
        formatter = CustomJsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Faker logs locale lookups at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)


def set_request_id(request_id: str) -> None:
    """Set the request ID for the current context."""
    request_id_var.set(request_id)


def get_request_id() -> str:
    """Get the current request ID, or an empty string."""
    return request_id_var.get()
