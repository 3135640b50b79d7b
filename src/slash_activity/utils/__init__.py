"""Utility helpers for slash-activity."""

from slash_activity.utils.console import (
    console,
    print_error,
    print_info,
    print_success,
)
from slash_activity.utils.logging import configure_logging, configure_logging_from_settings

__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "console",
    "print_error",
    "print_info",
    "print_success",
]
