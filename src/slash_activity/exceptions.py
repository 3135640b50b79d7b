"""Custom exceptions for slash-activity.

This module defines a hierarchy of exceptions for consistent error handling
across the activity log. All exceptions inherit from ActivityLogError, allowing
callers to catch every activity-log error with a single except clause.

Exception hierarchy:
    ActivityLogError (base)
    ├── ConfigurationError
    ├── InvalidActivityValueError (also a ValueError)
    └── StoreError
        ├── ActivityDecodeError
        └── OperationCancelledError
"""

from collections.abc import Iterable
from typing import Any


class ActivityLogError(Exception):
    """Base exception for all activity log errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize activity log error.

        Args:
            message: Error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigurationError(ActivityLogError):
    """Raised when the store cannot be configured.

    Examples:
        - Neither a database path nor a connection was provided
        - Settings hold an unusable value
    """

    def __init__(self, message: str, key: str | None = None):
        details = {"key": key} if key else None
        super().__init__(message, details)
        self.key = key


class InvalidActivityValueError(ActivityLogError, ValueError):
    """Raised when a type or level does not map to a known wire string."""

    def __init__(self, field: str, value: Any, allowed: Iterable[str]):
        """Initialize invalid value error.

        Args:
            field: Name of the offending field ("type" or "level").
            value: The value that failed to decode.
            allowed: Wire strings that would have been accepted.
        """
        self.field = field
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid activity {field}: {value!r}",
            {"allowed": ", ".join(self.allowed)},
        )


class StoreError(ActivityLogError):
    """Raised when a persistence operation fails.

    The underlying driver exception is attached as ``__cause__``. No error
    translation or retry happens in the store; callers decide what to do.
    """

    def __init__(self, message: str, operation: str | None = None):
        """Initialize store error.

        Args:
            message: Error description.
            operation: The store operation that failed.
        """
        details = {"operation": operation} if operation else None
        super().__init__(message, details)
        self.operation = operation


class ActivityDecodeError(StoreError):
    """Raised when a stored row cannot be decoded into an Activity."""

    def __init__(self, message: str, activity_id: int | None = None):
        super().__init__(message, operation="decode")
        self.activity_id = activity_id
        if activity_id is not None:
            self.details["activity_id"] = activity_id


class OperationCancelledError(StoreError):
    """Raised when an operation context is cancelled or its deadline passes.

    The transaction is rolled back before this is raised.
    """

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Operation {operation} aborted: {reason}", operation=operation)
        self.reason = reason
