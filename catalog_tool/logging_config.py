"""Logging setup for catalog-tool.

setup_logging() turns the CLI verbosity count (-v, -vv) into a root logger
configuration. Registry and store modules only ever call get_logger().

Environment variables:
    LOG_FILE: Write logs to this file (rotated) instead of stderr.
    LOG_FORMAT: Override the log record format.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_LOG_FORMAT = "[%(levelname)s] %(message)s"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3


def level_for_verbosity(verbose_count: int) -> int:
    """Map a -v count to a logging level.

    Args:
        verbose_count: Number of -v flags given on the command line.

    Returns:
        logging.WARNING for 0, logging.INFO for 1, logging.DEBUG for 2 or more.
    """
    if verbose_count <= 0:
        return logging.WARNING
    if verbose_count == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    verbose_count: int = 0,
    log_file: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure the root logger.

    Existing root handlers are removed, so calling this twice does not
    duplicate output.

    Args:
        verbose_count: Number of -v flags (0=WARNING, 1=INFO, 2+=DEBUG).
        log_file: Log file path. Falls back to the LOG_FILE env var.
        log_format: Record format. Falls back to the LOG_FORMAT env var.

    Example:
        >>> setup_logging(1)
        >>> setup_logging(2, log_file="/tmp/catalog-tool.log")
    """
    level = level_for_verbosity(verbose_count)
    file_path = log_file or os.environ.get("LOG_FILE")
    fmt = log_format or os.environ.get("LOG_FORMAT")

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    if file_path:
        _add_file_handler(root_logger, file_path, level, fmt)
    else:
        _add_console_handler(root_logger, level, fmt)

    # pydantic stays quiet unless we are tracing
    logging.getLogger("pydantic").setLevel(logging.DEBUG if verbose_count >= 3 else logging.WARNING)


def _add_console_handler(logger: logging.Logger, level: int, fmt: str | None) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt or CONSOLE_LOG_FORMAT))
    logger.addHandler(handler)


def _add_file_handler(
    logger: logging.Logger,
    file_path: str,
    level: int,
    fmt: str | None,
) -> None:
    """Attach a rotating file handler, creating the parent directory."""
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        file_path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)
