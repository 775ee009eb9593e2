"""Fixed-window rate limiter guarding outbound API calls."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 10
DEFAULT_WINDOW_SECONDS = 1.0


class RateLimiter:
    """Blocks callers once more than ``max_requests`` start within one window.

    The overflowing caller always waits a full window, not the remainder of
    the current one, and then opens a fresh window counting itself. The lock
    is held for the whole of ``acquire`` including the wait, so concurrent
    callers queue behind a sleeping one.
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            max_requests: Calls admitted per window (default: 10)
            window_seconds: Window length in seconds (default: 1.0)
            clock: Monotonic time source, in seconds
        """
        if max_requests < 1:
            raise ValueError(f"max_requests must be >= 1, got {max_requests}")
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be > 0, got {window_seconds}")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._wakeup = threading.Event()
        self._window_start = clock()
        self._count = 0
        self._local = threading.local()

        logger.info(f"RateLimiter initialized: {max_requests} requests / {window_seconds}s window")

    @property
    def interrupted(self) -> bool:
        """True if the calling thread's last wait was cut short by ``interrupt()``.

        The flag is tracked per thread and stays set until that thread calls
        ``clear_interrupt()``.
        """
        return getattr(self._local, "interrupted", False)

    def clear_interrupt(self) -> bool:
        """Clear the calling thread's interrupted flag and return its previous value."""
        was_interrupted = self.interrupted
        self._local.interrupted = False
        return was_interrupted

    def interrupt(self) -> None:
        """Wake a caller currently waiting in ``acquire``.

        The woken caller still returns normally; the interruption is only
        recorded on that thread's ``interrupted`` flag. Has no effect when nobody waits.
        """
        self._wakeup.set()

    def acquire(self) -> None:
        """Block until the caller may start a request. Never raises."""
        with self._lock:
            now = self._clock()
            if now - self._window_start > self.window_seconds:
                self._window_start = now
                self._count = 0

            self._count += 1
            if self._count <= self.max_requests:
                return

            logger.warning(
                f"Rate limit of {self.max_requests} requests per {self.window_seconds}s reached, "
                f"waiting {self.window_seconds}s"
            )
            self._wakeup.clear()
            if self._wakeup.wait(self.window_seconds):
                self._local.interrupted = True
                logger.debug("Rate limiter wait interrupted")
            self._wakeup.clear()

            self._window_start = self._clock()
            self._count = 1
