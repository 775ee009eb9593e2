"""In-memory response cache keyed by call signature."""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable

from serpstat_mcp.models import CallSignature

# Configure logging
logger = logging.getLogger(__name__)

# Default cache settings
DEFAULT_TTL = 3600  # 60 minutes
DEFAULT_MAX_ENTRIES = 1000


class ResponseCache:
    """Thread-safe TTL cache with a bounded entry count.

    Features:
    - Expiry fixed at insertion time (expire-after-write)
    - Least-recently-used eviction once ``max_entries`` is exceeded
    - Hit/miss/eviction statistics for monitoring
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl_seconds: Lifetime of an entry from insertion (default: 3600)
            max_entries: Maximum number of live entries (default: 1000)
            clock: Monotonic time source, in seconds
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be > 0, got {ttl_seconds}")
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

        logger.info(f"Cache initialized: ttl={ttl_seconds}s, max_entries={max_entries}")

    @staticmethod
    def _key(signature: CallSignature | str) -> str:
        return signature.key if isinstance(signature, CallSignature) else signature

    def get(self, signature: CallSignature | str, default: Any = None) -> Any:
        """Get a live value from the cache.

        Args:
            signature: Call signature (or its string key)
            default: Value returned on a miss

        Returns:
            Cached value, or default if absent or expired
        """
        key = self._key(signature)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                expires_at, value = entry
                if self._clock() < expires_at:
                    self._entries.move_to_end(key)
                    self._hits += 1
                    logger.debug(f"Cache HIT for key: {key[:64]}")
                    return value
                del self._entries[key]

            self._misses += 1
            logger.debug(f"Cache MISS for key: {key[:64]}")
            return default

    def put(self, signature: CallSignature | str, value: Any) -> None:
        """Store a value, evicting the least recently used entries if full.

        Args:
            signature: Call signature (or its string key)
            value: JSON value to cache
        """
        key = self._key(signature)
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl_seconds, value)
            self._entries.move_to_end(key)

            if len(self._entries) > self.max_entries:
                self._prune_expired()
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug(f"Evicted cache key: {evicted[:64]}")

    def delete(self, signature: CallSignature | str) -> bool:
        """Delete an entry.

        Returns:
            True if the key existed and was deleted, False otherwise
        """
        with self._lock:
            return self._entries.pop(self._key(signature), None) is not None

    def clear(self) -> None:
        """Clear all entries and reset statistics."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0
        logger.info("Cache cleared successfully and statistics reset")

    def expire(self) -> int:
        """Remove expired entries from cache.

        Returns:
            Number of expired entries removed
        """
        with self._lock:
            count = self._prune_expired()
        logger.info(f"Removed {count} expired entries from cache")
        return count

    def _prune_expired(self) -> int:
        # Caller holds the lock
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for expires_at, _ in self._entries.values() if now < expires_at)

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        entry_count = len(self)
        with self._lock:
            hits, misses, evictions = self._hits, self._misses, self._evictions

        lookups = hits + misses
        return {
            "entry_count": entry_count,
            "max_entries": self.max_entries,
            "ttl_seconds": self.ttl_seconds,
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / lookups, 4) if lookups else 0.0,
            "evictions": evictions,
        }
