"""Structured logging configuration."""

import json
import logging
import sys
from typing import Any

from promptsmith.utils.config import get_settings


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as a single JSON line.

        Args:
            record: Log record to format

        Returns:
            JSON string with log data
        """
        settings = get_settings()

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "app_name": settings.APP_NAME,
            "environment": settings.ENVIRONMENT,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Metrics attached with logger.debug(..., extra={"extra_fields": {...}})
        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_data.update(extra_fields)

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Plain text formatter: ``[time] LEVEL - logger - message``."""

    def __init__(self) -> None:
        fmt = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
        datefmt = "%Y-%m-%d %H:%M:%S"
        super().__init__(fmt=fmt, datefmt=datefmt)


_logging_configured = False


def _resolve_level(level: str | None) -> int:
    settings = get_settings()
    if level:
        return getattr(logging, level.upper(), logging.INFO)
    if settings.DEBUG:
        return logging.DEBUG
    return getattr(logging, settings.LOG_LEVEL)


def setup_logging(
    use_json: bool = False,
    force_reconfigure: bool = False,
    level: str | None = None,
) -> None:
    """
    Configure application logging.

    Installs a single stdout handler on the root logger. The level comes from
    ``level`` when given, otherwise DEBUG when the DEBUG flag is set, otherwise
    LOG_LEVEL from settings. Handlers installed by other tools (pytest's
    caplog for example) are left alone.

    Args:
        use_json: If True, use JSON format. If False, use standard text format.
        force_reconfigure: If True, reconfigure even if already set up.
        level: Optional level name overriding the settings.
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    root_logger = logging.getLogger()

    for handler in [
        h for h in root_logger.handlers
        if isinstance(h, logging.StreamHandler) and h.stream == sys.stdout
    ]:
        root_logger.removeHandler(handler)

    log_level = _resolve_level(level)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JsonFormatter() if use_json else StandardFormatter())
    root_logger.addHandler(console_handler)

    _logging_configured = True

    logging.getLogger(__name__).debug(
        f"Logging configured: level={logging.getLevelName(log_level)}, "
        f"format={'json' if use_json else 'standard'}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance, configuring logging on first use.

    Args:
        name: Name for the logger (typically __name__ from calling module)

    Returns:
        Logger instance
    """
    if not _logging_configured:
        setup_logging()

    return logging.getLogger(name)


def reset_logging() -> None:
    """
    Reset logging configuration.

    Useful for testing to clear state between tests.
    """
    global _logging_configured

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)

    _logging_configured = False
