"""System logger for operational events.

This module provides a singleton system logger for everything that is not
part of the decision audit trail: annotation lookups, validation progress,
claim extraction.

Logging strategy:
- Console (stderr): operator-facing messages at the configured level
- File (system.jsonl): only issues (WARNING, ERROR, CRITICAL)

The engine logs structured dicts with an "event" key, e.g.
    get_system_logger().debug({"event": "annotation_resolved", "name": ...})

The file handler is configured separately via configure_system_logger_file()
once a log path is known.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "get_system_logger",
    "set_system_log_level",
]

import logging
import sys
from pathlib import Path

from authn_restrictions.constants import APP_NAME
from authn_restrictions.utils.logging.iso_formatter import ISO8601Formatter
from authn_restrictions.utils.logging.logger_setup import ensure_log_directory


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts 'message' or 'event' field from dict messages for cleaner stderr output.
    """

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


# Module-level singleton logger - initialized on first use
_system_logger: logging.Logger | None = None
_file_handler: logging.FileHandler | None = None


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Creates the logger on first call with a stderr handler at WARNING.
    Raise verbosity with set_system_log_level().

    Returns:
        logging.Logger: Configured system logger instance.
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(logging.WARNING)
    _system_logger.propagate = False

    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def set_system_log_level(level: int | str) -> None:
    """Set the console verbosity of the system logger.

    Args:
        level: Logging level, numeric or by name ("DEBUG", "INFO", ...).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    get_system_logger().setLevel(level)


def configure_system_logger_file(log_path: Path) -> None:
    """Attach the JSONL file handler (WARNING and above) to the system logger.

    Calling again with a different path replaces the previous file handler.

    Args:
        log_path: Path to the system log file.
    """
    global _file_handler

    logger = get_system_logger()

    if _file_handler is not None:
        if Path(_file_handler.baseFilename) == log_path.resolve():
            return
        logger.removeHandler(_file_handler)
        _file_handler.close()

    ensure_log_directory(log_path)

    _file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    _file_handler.setLevel(logging.WARNING)
    _file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(_file_handler)
