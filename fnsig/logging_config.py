"""
Logging configuration for fnsig.

Structured JSON logging for signature descriptions: which backend ran,
which callable was described and why a description failed.
"""

import json
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import Any

LOGGER_NAME = "fnsig"


class SignatureLogFormatter(logging.Formatter):
    """Custom formatter for signature description logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log records with structured data."""
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in ["event", "backend", "callable_name"]:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        # Arity cross-check fields
        for field in ["computed", "declared"]:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if hasattr(record, "error"):
            log_entry["error"] = record.error

        return json.dumps(log_entry)


def configure_logging(
    log_file: str | None = None,
    log_level: str = "INFO",
    enable_console: bool = True,
) -> None:
    """
    Configure logging for the fnsig package.

    Args:
        log_file: Path to a log file (optional)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_console: Whether to also log to console
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))
    logger.propagate = False

    logger.handlers.clear()

    formatter = SignatureLogFormatter()

    if log_file:
        file_handler = TimedRotatingFileHandler(
            log_file,
            when='D',
            interval=1,
            backupCount=7,
            encoding='utf-8',
            utc=False
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)


def get_logger() -> logging.Logger:
    """Get the package-level fnsig logger."""
    return logging.getLogger(LOGGER_NAME)
