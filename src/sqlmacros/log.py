"""
Logging setup for sqlmacros.

Library modules only ask for a named logger; the CLI (or the host tool)
decides where records go by calling `setup_logging` once at startup.

Example:
    >>> from sqlmacros.log import get_logger, setup_logging
    >>> setup_logging(log_level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.debug("Resolved format-date for postgres")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def setup_logging(
    log_level: str = "WARNING",
    log_file: Optional[str] = None,
    console_output: bool = True,
) -> None:
    """Configure the root logger with a stderr handler and an optional file handler.

    Args:
        log_level: DEBUG/INFO/WARNING/ERROR/CRITICAL
        log_file: Optional path of a log file; parent directories are created
        console_output: If True, log to stderr (stdout is reserved for rendered SQL)
    """
    level = getattr(logging, log_level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
