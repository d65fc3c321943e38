"""
Logging configuration for WordFinder.

Sets up console + rotating file logging on the ``wordfinder`` logger.
All modules should use:
    import logging
    logger = logging.getLogger(__name__)
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

LOGGER_NAME = "wordfinder"

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(
    log_dir: Path | None = None,
    level: int | str = logging.INFO,
    log_file: str = "wordfinder.log",
) -> logging.Logger:
    """
    Configure the ``wordfinder`` logger tree.

    Args:
        log_dir: Directory for the rotating log file. If None, console only.
        level: Minimum log level, as an int or a name such as ``"DEBUG"``.
        log_file: Name of the log file inside *log_dir*.

    Returns:
        The configured package logger. Calling again is a no-op apart from
        updating the level.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(_resolve_level(level))

    if package_logger.handlers:
        return package_logger

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    package_logger.addHandler(console)

    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / log_file,
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning("Could not set up file logging: %s", e)

    return package_logger
