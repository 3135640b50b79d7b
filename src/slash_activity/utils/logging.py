"""Logging setup for slash-activity."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from slash_activity.config.settings import LoggingSettings
from slash_activity.constants import (
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    PACKAGE_LOGGER_NAME,
)


def configure_logging(
    log_level: str,
    log_file: Path | None = None,
    rotation: LoggingSettings | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Safe to call repeatedly; existing handlers are replaced.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional log file path. Logs go to stderr when unset.
        rotation: Optional rotation settings for the log file.

    Returns:
        The configured package logger.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    # Handlers below are the only output; keep records off the root logger
    package_logger.propagate = False
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    if level == logging.DEBUG:
        formatter = logging.Formatter(LOG_FORMAT_DEBUG, datefmt=LOG_DATE_FORMAT)
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handler: logging.Handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        rotation = rotation or LoggingSettings()
        if rotation.rotation_enabled:
            handler = RotatingFileHandler(
                log_file,
                mode="a",
                maxBytes=rotation.get_max_bytes(),
                backupCount=rotation.backup_count,
                encoding="utf-8",
            )
        else:
            handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    return package_logger


def configure_logging_from_settings(settings: LoggingSettings) -> logging.Logger:
    """Configure the package logger from LoggingSettings."""
    return configure_logging(settings.level, settings.file, settings)
