"""Logging configuration for depsync."""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict


def _make_formatter(structured: bool) -> logging.Formatter:
    if structured:
        return StructuredFormatter()
    return logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(level: str = "INFO", structured: bool = False) -> logging.Logger:
    """
    Set up the depsync logger.

    Calling it again (e.g. from the CLI after import-time setup) updates the
    level and formatter of the existing handler instead of adding another.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Whether to emit one JSON object per line

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("depsync")
    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    if not logger.handlers:
        logger.addHandler(logging.StreamHandler(sys.stdout))

    for handler in logger.handlers:
        handler.setLevel(log_level)
        handler.setFormatter(_make_formatter(structured))

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
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
