"""Cancellation and deadline token for store operations."""

import threading
import time

from slash_activity.exceptions import OperationCancelledError

REASON_CANCELLED = "cancelled"
REASON_DEADLINE = "deadline exceeded"


class OperationContext:
    """Carries an optional deadline and a cancellation flag.

    A context may be shared between threads: one thread calls ``cancel()``
    while another is blocked in a store operation. The store interrupts the
    running statement and rolls back.
    """

    def __init__(self, timeout: float | None = None):
        """Initialize the context.

        Args:
            timeout: Seconds from now until the deadline, or None for no deadline.
        """
        self.deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Request cancellation of any operation using this context."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> float | None:
        """Seconds left until the deadline (never negative), or None."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def reason(self) -> str | None:
        """Why the context is done, or None while it is still live."""
        if self.cancelled:
            return REASON_CANCELLED
        if self.expired:
            return REASON_DEADLINE
        return None

    def done(self) -> bool:
        return self.reason() is not None

    def raise_if_done(self, operation: str) -> None:
        """Raise OperationCancelledError if the context is cancelled or expired."""
        reason = self.reason()
        if reason is not None:
            raise OperationCancelledError(operation, reason)
