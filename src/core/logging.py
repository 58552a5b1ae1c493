"""
Logging configuration for the text statistics engine.

This module provides:
- Structured JSON logging support for better log parsing
- A human-readable formatter that appends ``extra`` context as key=value pairs
- The engine logger used by every component

Records go to stderr; stdout is reserved for the statistics report.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .settings import get_settings

settings = get_settings()

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
        "asctime",
    }
)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS}


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON objects for easy parsing and analysis.
    Includes standard fields plus any extra fields from the log record.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        log_dict: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }

        # Add source location info for warnings and errors
        if record.levelno >= logging.WARNING:
            log_dict["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_dict["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        extra_fields = _extra_fields(record)
        if extra_fields:
            log_dict.update(extra_fields)

        return json.dumps(log_dict, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter with context support.

    Extra fields passed through ``logger.info("msg", extra={...})`` are
    appended as ``key=value`` pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a human-readable string."""
        base_format = super().format(record)

        extra_fields = _extra_fields(record)
        if extra_fields:
            extras = " | ".join(f"{k}={v}" for k, v in extra_fields.items())
            return f"{base_format} | {extras}"

        return base_format


def setup_logging(level: str, use_json: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_json: If True, use JSON structured logging; otherwise use human-readable format
    """
    if use_json:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanReadableFormatter(
            fmt="%(asctime)s | %(levelname)-7s | %(threadName)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Executor internals are chatty at DEBUG
    logging.getLogger("concurrent.futures").setLevel(logging.WARNING)


# Use JSON logging in production (ENV=prod)
use_json_logging = settings.ENV.lower() == "prod"

setup_logging(settings.LOG_LEVEL, use_json=use_json_logging)

logger = logging.getLogger(settings.STATS_LOG_NAME)

if use_json_logging:
    logger.debug("JSON structured logging enabled")
else:
    logger.debug("Human-readable logging enabled (set ENV=prod for JSON logging)")
