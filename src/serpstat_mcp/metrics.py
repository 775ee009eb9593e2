"""Call metrics tracking for the Serpstat API client."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class CallMetrics:
    """Metrics for a single API call."""

    method: str
    timestamp: datetime
    success: bool
    from_cache: bool = False
    elapsed_ms: float | None = None
    error: str | None = None


@dataclass
class ClientMetrics:
    """Per-client call metrics, safe to record from many threads."""

    start_time: datetime = field(default_factory=datetime.now)
    total_calls: int = 0
    remote_calls: int = 0
    cache_hits: int = 0
    failed_calls: int = 0
    recent_calls: deque[CallMetrics] = field(default_factory=lambda: deque(maxlen=50))
    recent_errors: deque[CallMetrics] = field(default_factory=lambda: deque(maxlen=20))
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_call(
        self,
        method: str,
        success: bool,
        from_cache: bool = False,
        elapsed_ms: float | None = None,
        error: str | None = None,
    ) -> None:
        """Record one call.

        Args:
            method: The API method that was called
            success: Whether the call returned a result
            from_cache: Whether the result was served from the cache
            elapsed_ms: Time taken in milliseconds
            error: Error message if failed
        """
        metrics = CallMetrics(
            method=method,
            timestamp=datetime.now(),
            success=success,
            from_cache=from_cache,
            elapsed_ms=elapsed_ms,
            error=error,
        )

        with self._lock:
            self.total_calls += 1
            if from_cache:
                self.cache_hits += 1
            else:
                self.remote_calls += 1
            if not success:
                self.failed_calls += 1
                self.recent_errors.append(metrics)
            self.recent_calls.append(metrics)

    def get_success_rate(self) -> float:
        """Get success rate as percentage."""
        if self.total_calls == 0:
            return 0.0
        return ((self.total_calls - self.failed_calls) / self.total_calls) * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary for JSON serialization."""
        with self._lock:
            recent_calls = list(self.recent_calls)[-10:][::-1]  # newest first
            recent_errors = list(self.recent_errors)[-10:][::-1]
            totals = {
                "total": self.total_calls,
                "remote": self.remote_calls,
                "cache_hits": self.cache_hits,
                "failed": self.failed_calls,
                "success_rate": round(self.get_success_rate(), 2),
            }

        return {
            "start_time": self.start_time.isoformat(),
            "uptime_seconds": (datetime.now() - self.start_time).total_seconds(),
            "calls": totals,
            "recent_calls": [
                {
                    "method": c.method,
                    "timestamp": c.timestamp.isoformat(),
                    "success": c.success,
                    "from_cache": c.from_cache,
                    "elapsed_ms": c.elapsed_ms,
                    "error": c.error,
                }
                for c in recent_calls
            ],
            "recent_errors": [
                {
                    "method": c.method,
                    "timestamp": c.timestamp.isoformat(),
                    "error": c.error,
                }
                for c in recent_errors
            ],
        }
