"""Shared infrastructure for outbound API calls.

- RateLimiter: fixed-window admission control, blocking on overflow
- ResponseCache: bounded, time-expiring in-memory result cache

One instance of each is owned by every API client and shared by all
calls made through that client.
"""

from serpstat_mcp.core.cache import ResponseCache
from serpstat_mcp.core.rate_limiter import RateLimiter

__all__ = [
    "RateLimiter",
    "ResponseCache",
]
