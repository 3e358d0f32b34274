"""Structured logging configuration for torrentmeta.

Provides logging setup with correlation IDs, structured output,
and configurable log levels.
"""

from __future__ import annotations

import json
import logging
import logging.config
import time
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from torrentmeta.utils.exceptions import TorrentMetaError
from torrentmeta.utils.rich_logging import create_rich_handler

if TYPE_CHECKING:  # pragma: no cover
    from torrentmeta.models import ObservabilityConfig

LOGGER_NAME = "torrentmeta"

# Context variable for correlation ID
correlation_id: ContextVar[str | None] = cast(
    "ContextVar[str | None]",
    ContextVar("correlation_id", default=None),
)

_RECORD_KEYS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName", "correlation_id"}


class CorrelationFilter(logging.Filter):
    """Filter to add correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add correlation ID to log record."""
        record.correlation_id = correlation_id.get() or "no-correlation-id"
        return True


class StructuredFormatter(logging.Formatter):
    """Structured JSON formatter for logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "correlation_id"):
            log_entry["correlation_id"] = record.correlation_id

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Fields passed through ``extra=``
        log_entry.update(
            {
                key: value
                for key, value in record.__dict__.items()
                if key not in _RECORD_KEYS
            }
        )

        return json.dumps(log_entry, default=str)


def setup_logging(config: ObservabilityConfig) -> None:
    """Set up logging for the ``torrentmeta`` logger tree.

    Console output goes through Rich, or through the JSON formatter when
    structured logging is enabled. A rotating file handler is added when
    ``log_file`` is set.
    """
    level = config.log_level.value

    if config.structured_logging:
        console_handler: dict[str, Any] = {
            "class": "logging.StreamHandler",
            "formatter": "structured",
            "stream": "ext://sys.stderr",
        }
    else:
        console_handler = {"()": create_rich_handler}
    console_handler.update({"level": level, "filters": ["correlation"]})

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": StructuredFormatter,
            },
            "simple": {
                "format": "%(asctime)s %(levelname)s %(name)s.%(funcName)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "filters": {
            "correlation": {
                "()": CorrelationFilter,
            },
        },
        "handlers": {"console": console_handler},
        "loggers": {
            LOGGER_NAME: {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }

    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        logging_config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "structured" if config.structured_logging else "simple",
            "filters": ["correlation"],
            "filename": config.log_file,
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
            "encoding": "utf-8",
        }
        logging_config["loggers"][LOGGER_NAME]["handlers"].append("file")

    logging.config.dictConfig(logging_config)

    if config.log_correlation_id:
        correlation_id.set(str(uuid.uuid4()))


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name under the package namespace."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def set_correlation_id(corr_id: str | None = None) -> str:
    """Set correlation ID for the current context."""
    if corr_id is None:
        corr_id = str(uuid.uuid4())
    correlation_id.set(corr_id)
    return corr_id


def get_correlation_id() -> str | None:
    """Get the current correlation ID."""
    return correlation_id.get()


class LoggingContext:
    """Context manager that logs the start, end and failure of an operation."""

    def __init__(
        self,
        operation: str,
        logger: logging.Logger | None = None,
        failure_level: int = logging.ERROR,
        **kwargs: Any,
    ):
        """Initialize operation context manager.

        Args:
            operation: Name used in the log messages
            logger: Logger to write to; defaults to this module's logger
            failure_level: Level of the record logged when the operation raises
            **kwargs: Extra fields attached to every record

        """
        self.operation = operation
        self.failure_level = failure_level
        self.kwargs = kwargs
        self.logger = logger or get_logger(__name__)
        self.start_time: float | None = None

    def __enter__(self) -> LoggingContext:
        """Enter the context manager."""
        self.start_time = time.time()
        set_correlation_id()
        self.logger.debug("Starting %s", self.operation, extra=self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Exit the context manager."""
        duration = time.time() - self.start_time if self.start_time else 0

        if exc_type is None:
            self.logger.debug(
                "Completed %s in %.3fs",
                self.operation,
                duration,
                extra=self.kwargs,
            )
        else:
            self.logger.log(
                self.failure_level,
                "Failed %s in %.3fs: %s",
                self.operation,
                duration,
                exc_val,
                extra=self.kwargs,
            )

        return False  # Don't suppress exceptions


def log_exception(
    logger: logging.Logger,
    exc: Exception,
    context: str = "",
    level: int = logging.ERROR,
) -> None:
    """Log an exception with context."""
    if isinstance(exc, TorrentMetaError):
        logger.log(
            level,
            "%s: %s",
            context,
            exc.message,
            extra={"details": exc.details},
            exc_info=logger.isEnabledFor(logging.DEBUG),
        )
    else:
        logger.log(level, "%s: %s", context, exc, exc_info=logger.isEnabledFor(logging.DEBUG))
