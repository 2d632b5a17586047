"""Structured JSON logging with correlation ID support."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from .correlation import current_correlation_id

ROOT_LOGGER = "taskapi"


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = current_correlation_id()
        if correlation_id:
            log_obj["correlationId"] = correlation_id

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_obj.update(record.extra_fields)

        return json.dumps(log_obj, default=str)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach the JSON handler to the package root logger and set its level.

    Module loggers obtained through get_logger() propagate here.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(level.upper())
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger that emits JSON through the package root logger."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"

    # Only configure if no handlers (avoid duplicate handlers)
    if not logging.getLogger(ROOT_LOGGER).handlers:
        configure_logging()

    return logging.getLogger(name)
