import json
import logging
import sys
from typing import Dict, Any, Optional
import uuid

from catalog_service.config import get_settings

settings = get_settings()

# Attributes every LogRecord carries; anything else was passed through ``extra=``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class CustomJsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format

        Returns:
            str: JSON formatted log string
        """
        log_object = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "service": settings.SERVICE_NAME,
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "store_backend": settings.STORE_BACKEND,
        }

        # Add extra attributes (correlation_id, user_id, service_key, ...)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_object[key] = value

        # Add exception info if available
        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object, default=str)


def configure_logging() -> None:
    """Configure global logging settings."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    # Create handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter())

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        handlers=[handler],
        force=True
    )

    # Set levels for third-party loggers to reduce noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Name for the logger

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """
    Adapter for adding correlation ID and other context to logs.
    """

    def __init__(self, logger: logging.Logger, correlation_id: Optional[str] = None, extra: Optional[Dict[str, Any]] = None):
        """
        Initialize the logger adapter.

        Args:
            logger: Base logger to adapt
            correlation_id: Request correlation ID for distributed tracing
            extra: Extra fields to include in all logs
        """
        self.correlation_id = correlation_id or str(uuid.uuid4())
        extra_dict = dict(extra or {})
        extra_dict["correlation_id"] = self.correlation_id
        super().__init__(logger, extra_dict)

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Process the log message to add context data."""
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs

    def with_context(self, **context: Any) -> "LoggerAdapter":
        """Copy of this adapter with more fields, keeping the correlation ID."""
        return LoggerAdapter(self.logger, self.correlation_id, {**self.extra, **context})


def get_request_logger(
    name: str,
    correlation_id: Optional[str] = None,
    user_id: Optional[str] = None,
    **context: Any
) -> LoggerAdapter:
    """
    Get a logger configured with request context.

    Args:
        name: Logger name
        correlation_id: Request correlation ID for tracing
        user_id: Signed-in user for session context
        **context: Further fields such as ``service_key`` or ``record_id``

    Returns:
        LoggerAdapter: Configured logger adapter
    """
    logger = get_logger(name)
    extra = {key: value for key, value in context.items() if value is not None}
    if user_id:
        extra["user_id"] = user_id

    return LoggerAdapter(logger, correlation_id, extra)
