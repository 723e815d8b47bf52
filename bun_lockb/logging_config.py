"""Logging configuration for bun-lockb."""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict


def setup_logging(level: str = "WARNING", structured: bool = False) -> logging.Logger:
    """
    Set up the package logger.

    Diagnostics always go to stderr, stdout is reserved for the rendered lockfile.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Whether to use structured JSON logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("bun_lockb")
    log_level = getattr(logging, level.upper())

    logger.setLevel(log_level)

    # Reconfigure the existing handler instead of stacking a new one
    if logger.handlers:
        handler = logger.handlers[0]
    else:
        handler = logging.StreamHandler(sys.stderr)
        logger.addHandler(handler)

    handler.setLevel(log_level)

    if structured:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


# Global logger instance
logger = setup_logging()
