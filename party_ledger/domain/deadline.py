"""Deadline and cancellation flag shared by the reads of one statement build."""

from __future__ import annotations

import threading
import time
from typing import Callable

from .errors import FetchCancelledError


class FetchDeadline:
    """Monotonic deadline plus cancellation flag visible to worker threads.

    Adapters run in worker threads that asyncio cannot interrupt. The
    statement service cancels this object when its build ends, and readers
    check it before each query and bound each query by the remaining time.
    """

    def __init__(self, timeout_seconds: float | None = None, clock: Callable[[], float] = time.monotonic):
        """Initialize deadline state.

        Args:
            timeout_seconds: Optional time budget; None means no deadline.
            clock: Monotonic clock override.

        Raises:
            ValueError: Raised when timeout_seconds is not positive.
        """

        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self._clock = clock
        self._expires_at = None if timeout_seconds is None else clock() + timeout_seconds
        self._cancelled = threading.Event()

    def deadline_cancel(self) -> None:
        """Signal every reader sharing this deadline to stop."""

        self._cancelled.set()

    def deadline_is_cancelled(self) -> bool:
        """Return True once cancelled or past the deadline."""

        if self._cancelled.is_set():
            return True
        return self._expires_at is not None and self._clock() >= self._expires_at

    def deadline_remaining_seconds(self) -> float | None:
        """Return seconds left, 0.0 when expired, or None without a deadline."""

        if self._cancelled.is_set():
            return 0.0
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    def deadline_check(self, source: str) -> None:
        """Raise when the read for `source` must not start.

        Raises:
            FetchCancelledError: Raised when cancelled or past the deadline.
        """

        if self.deadline_is_cancelled():
            raise FetchCancelledError(f"{source} read cancelled")
