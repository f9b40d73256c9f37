"""Logger setup utilities for creating JSONL loggers.

This module provides a generic setup function for loggers that write
JSONL with ISO 8601 timestamps to a given file path.
"""

from __future__ import annotations

__all__ = [
    "ensure_log_directory",
    "setup_jsonl_logger",
]

import logging
import sys
from pathlib import Path

from authn_restrictions.utils.logging.iso_formatter import ISO8601Formatter


def ensure_log_directory(log_file: Path) -> None:
    """Create log directory with owner-only permissions.

    Args:
        log_file: Path to the log file (parent directory will be created).

    Raises:
        PermissionError: If unable to create log directory due to permissions.
        OSError: If directory creation fails for other reasons.
    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if sys.platform != "win32":
            try:
                log_file.parent.chmod(0o700)
            except OSError:
                pass  # Permission changes might fail on some systems
    except PermissionError as e:
        raise PermissionError(f"Cannot create log directory {log_file.parent}: {e}") from e
    except OSError as e:
        raise OSError(f"Failed to create log directory {log_file.parent}: {e}") from e


def setup_jsonl_logger(
    logger_name: str,
    log_file: Path,
    log_level: int = logging.INFO,
) -> logging.Logger:
    """Set up a logger that writes JSONL with ISO 8601 timestamps.

    Args:
        logger_name: Name for the logger (e.g., "authn-restrictions.audit.decisions")
        log_file: Path to the log file
        log_level: Logging level (default: INFO)

    Returns:
        logging.Logger: Configured logger instance

    Raises:
        PermissionError: If unable to create log directory due to permissions
        OSError: If directory creation fails for other reasons
    """
    ensure_log_directory(log_file)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.propagate = False

    # Close and remove any existing handlers to avoid duplicates and resource leaks
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    return logger
