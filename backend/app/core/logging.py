"""Logging configuration for the Kakeibo application."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any


def setup_logging(level: int | str | None = None) -> logging.Logger:
    """Configure and return the application logger."""
    logger = logging.getLogger("kakeibo")

    if logger.handlers:
        # Already configured at import; an explicit level still applies
        if level is not None:
            level = level.upper() if isinstance(level, str) else level
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)
        return logger

    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO").upper()

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = "kakeibo") -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


class LogContext:
    """Context manager for structured logging with additional context."""

    def __init__(self, logger: logging.Logger, operation: str, **context: Any) -> None:
        self.logger = logger
        self.operation = operation
        self.context = context

    def __enter__(self) -> "LogContext":
        self.logger.debug(f"Starting {self.operation}", extra=self.context)
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: Any) -> bool:
        if exc_type is not None:
            self.logger.error(
                f"Failed {self.operation}: {exc_val}",
                extra=self.context,
                exc_info=True,
            )
        else:
            self.logger.info(f"Completed {self.operation}", extra=self.context)
        return False


# Initialize default logger
logger = setup_logging()
