"""
Logging for the catalog service.

Every record can carry the request ID and whatever the middlewares put in
the per-request log context (endpoint, method). Console output is either a
compact line for development or one JSON object per line for log
shippers; errors are always appended to a JSON file as well.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any

from quotes_api.middlewares.correlation_id import get_correlation_id
from quotes_api.settings import app_settings

# Fields merged into every record emitted while a request is handled
log_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "log_context", default=None
)

# Attributes every LogRecord carries; anything else came in via `extra=`
_RESERVED_RECORD_ATTRS = frozenset(
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
        "correlation_id",
    }
)


def set_log_context(**kwargs: Any) -> None:
    """
    Merge fields into the current request's log context.

    Example:
        >>> set_log_context(endpoint="/authors", method="GET")
        >>> logger.info("listing authors")  # JSON output carries both fields
    """
    current = dict(log_context.get() or {})
    current.update(kwargs)
    log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Fields set for the current request, empty outside one."""
    return log_context.get() or {}


def clear_log_context() -> None:
    """Drop all request fields; called when a request finishes."""
    log_context.set(None)


class StructuredJSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Keys, in order of precedence from lowest: the fixed record fields,
    request_id, the request log context, environment, exception text and
    finally anything passed through `extra=`. Values that are not JSON
    types are rendered with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = get_correlation_id()
        if request_id:
            log_data["request_id"] = request_id

        context = get_log_context()
        if context:
            log_data.update(context)

        log_data["environment"] = app_settings.ENVIRONMENT

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Single-line console output for development.

    INFO lines show only the message; every other level also shows where
    the record was emitted. Records outside a request show "-" as the
    request ID.
    """

    DATE_FMT = "%Y-%m-%d %H:%M:%S"
    BRIEF_FMT = "%(asctime)s - [%(correlation_id)s] %(levelname)s: %(message)s"
    DETAILED_FMT = (
        "%(asctime)s - [%(correlation_id)s] %(levelname)s: "
        "%(module)s.%(funcName)s:%(lineno)d - %(message)s"
    )

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._brief = logging.Formatter(self.BRIEF_FMT, datefmt=self.DATE_FMT)
        self._detailed = logging.Formatter(
            self.DETAILED_FMT, datefmt=self.DATE_FMT
        )

    def format(self, record: logging.LogRecord) -> str:
        record.correlation_id = get_correlation_id() or "-"
        if record.levelno == logging.INFO:
            return self._brief.format(record)
        return self._detailed.format(record)


def setup_logging() -> logging.Logger:
    """
    Replace the root handlers with the catalog's console and error-file
    handlers.

    Safe to call more than once; the application factory calls it on every
    build. A log file that cannot be opened only costs the file handler.

    Returns:
        The application logger.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, app_settings.LOG_LEVEL.upper()))

    root.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    if app_settings.LOG_CONSOLE_FORMAT == "json":
        console_handler.setFormatter(StructuredJSONFormatter())
    else:
        console_handler.setFormatter(HumanReadableFormatter())
    root.addHandler(console_handler)

    try:
        file_handler = logging.FileHandler(app_settings.LOG_FILE_PATH)
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(StructuredJSONFormatter())
        root.addHandler(file_handler)
    except OSError as e:
        root.warning(f"Could not create file handler: {e}")

    return logger


# Application logger; handlers are attached to the root by setup_logging()
logger = logging.getLogger("quotes_api")
