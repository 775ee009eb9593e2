"""Environment-driven configuration for the Serpstat API client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from serpstat_mcp.core.cache import DEFAULT_MAX_ENTRIES, DEFAULT_TTL
from serpstat_mcp.core.rate_limiter import DEFAULT_MAX_REQUESTS, DEFAULT_WINDOW_SECONDS
from serpstat_mcp.errors import ConfigError

TOKEN_ENV = "SERPSTAT_API_TOKEN"

DEFAULT_API_URL = "https://api.serpstat.com/v4"
DEFAULT_REQUEST_TIMEOUT = 30.0


def _str_to_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _positive(environ: Mapping[str, str], name: str, default: float | int, cast: type = float) -> float | int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class ClientSettings:
    """Settings for one SerpstatApiClient instance."""

    api_token: str
    api_url: str = DEFAULT_API_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    rate_limit: int = DEFAULT_MAX_REQUESTS
    rate_window: float = DEFAULT_WINDOW_SECONDS
    cache_ttl: float = DEFAULT_TTL
    cache_max_entries: int = DEFAULT_MAX_ENTRIES
    cache_enabled: bool = True

    def __repr__(self) -> str:
        return (
            f"ClientSettings(api_url={self.api_url!r}, request_timeout={self.request_timeout}, "
            f"rate_limit={self.rate_limit}/{self.rate_window}s, cache_ttl={self.cache_ttl}, "
            f"cache_max_entries={self.cache_max_entries}, cache_enabled={self.cache_enabled})"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientSettings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            ClientSettings populated from the environment

        Raises:
            ConfigError: If the token is missing or a numeric value is invalid
        """
        if environ is None:
            environ = os.environ

        token = (environ.get(TOKEN_ENV) or "").strip()
        if not token:
            raise ConfigError(f"Environment variable {TOKEN_ENV} is not set or empty")

        api_url = (environ.get("SERPSTAT_API_URL") or "").strip() or DEFAULT_API_URL

        return cls(
            api_token=token,
            api_url=api_url.rstrip("/"),
            request_timeout=_positive(environ, "SERPSTAT_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            rate_limit=_positive(environ, "SERPSTAT_RATE_LIMIT", DEFAULT_MAX_REQUESTS, int),
            rate_window=_positive(environ, "SERPSTAT_RATE_WINDOW", DEFAULT_WINDOW_SECONDS),
            cache_ttl=_positive(environ, "SERPSTAT_CACHE_TTL", DEFAULT_TTL),
            cache_max_entries=_positive(environ, "SERPSTAT_CACHE_MAX_ENTRIES", DEFAULT_MAX_ENTRIES, int),
            cache_enabled=_str_to_bool(environ.get("SERPSTAT_CACHE_ENABLED", "true")),
        )
