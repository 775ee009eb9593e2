"""Serpstat API client using the requests library with in-memory caching."""

from __future__ import annotations

import copy
import json
import logging
import time
from typing import Any

import requests
from pydantic import ValidationError as EnvelopeValidationError

from serpstat_mcp.config import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT, ClientSettings
from serpstat_mcp.core.cache import DEFAULT_MAX_ENTRIES, DEFAULT_TTL, ResponseCache
from serpstat_mcp.core.rate_limiter import DEFAULT_MAX_REQUESTS, DEFAULT_WINDOW_SECONDS, RateLimiter
from serpstat_mcp.errors import SerpstatApiError
from serpstat_mcp.metrics import ClientMetrics
from serpstat_mcp.models import ApiRequest, ApiResponse, CallSignature
from serpstat_mcp.providers.base import ApiProvider

# Configure logging
logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"

_MISSING = object()


class SerpstatApiClient(ApiProvider):
    """Client for the Serpstat API v4 with rate limiting and response caching.

    Every call is a single POST of a ``{id, method, params}`` envelope. The
    rate limiter and cache are owned by the client and shared by all calls
    made through it, including concurrent ones.
    """

    def __init__(
        self,
        api_token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        rate_limiter: RateLimiter | None = None,
        cache: ResponseCache | None = None,
        cache_enabled: bool = True,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            api_token: Serpstat API token, sent as the ``token`` query parameter
            api_url: Endpoint URL (default: https://api.serpstat.com/v4)
            timeout: Request timeout in seconds (default: 30)
            rate_limiter: Limiter to use (default: 10 requests per second)
            cache: Cache to use (default: 60 minutes, 1000 entries)
            cache_enabled: Enable response caching (default: True)
            session: requests session to send through
        """
        if not api_token:
            raise ValueError("api_token must not be empty")

        self.api_token = api_token
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()
        if rate_limiter is None:
            rate_limiter = RateLimiter(DEFAULT_MAX_REQUESTS, DEFAULT_WINDOW_SECONDS)
        self.rate_limiter = rate_limiter

        # Get cache if caching is enabled
        self.cache_enabled = cache_enabled
        if not cache_enabled:
            self.cache = None
        elif cache is None:
            self.cache = ResponseCache(DEFAULT_TTL, DEFAULT_MAX_ENTRIES)
        else:
            self.cache = cache
        self.metrics = ClientMetrics()

        logger.info(
            f"SerpstatApiClient initialized for {api_url} "
            f"(timeout={timeout}s, caching {'enabled' if cache_enabled else 'disabled'})"
        )

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> SerpstatApiClient:
        """Create a client from resolved settings."""
        return cls(
            api_token=settings.api_token,
            api_url=settings.api_url,
            timeout=settings.request_timeout,
            rate_limiter=RateLimiter(settings.rate_limit, settings.rate_window),
            cache=ResponseCache(settings.cache_ttl, settings.cache_max_entries),
            cache_enabled=settings.cache_enabled,
        )

    @classmethod
    def from_env(cls) -> SerpstatApiClient:
        """Create a client configured from ``SERPSTAT_*`` environment variables."""
        return cls.from_settings(ClientSettings.from_env())

    def __repr__(self) -> str:
        return f"SerpstatApiClient(api_url={self.api_url!r}, api_token='***')"

    def call(self, method: str, params: dict[str, Any] | None = None) -> ApiResponse:
        """Call a Serpstat API method.

        Args:
            method: API method name, e.g. ``SerpstatDomainProcedure.getDomainsInfo``
            params: Method parameters (None is treated as an empty dict)

        Returns:
            ApiResponse with the method's result; cached results carry the
            current timestamp

        Raises:
            SerpstatApiError: On invalid parameters, HTTP errors, API errors or
                transport failures
        """
        params = dict(params) if params else {}
        try:
            signature = CallSignature.build(method, params)
        except (TypeError, ValueError) as e:
            raise SerpstatApiError(f"Invalid parameters for {method}: {e}") from e

        if self.cache is not None:
            cached = self.cache.get(signature, _MISSING)
            if cached is not _MISSING:
                self.metrics.record_call(method, success=True, from_cache=True)
                return ApiResponse(result=copy.deepcopy(cached), method=method, request_params=params)

        started = time.monotonic()
        try:
            result = self._send(method, params)
        except SerpstatApiError as e:
            self.metrics.record_call(
                method,
                success=False,
                elapsed_ms=(time.monotonic() - started) * 1000,
                error=e.message,
            )
            raise

        response = ApiResponse(result=result, method=method, request_params=params)

        if self.cache is not None:
            self.cache.put(signature, copy.deepcopy(result))

        self.metrics.record_call(method, success=True, elapsed_ms=(time.monotonic() - started) * 1000)
        return response

    def _send(self, method: str, params: dict[str, Any]) -> Any:
        """Rate-limit, POST the envelope and return the ``result`` field."""
        # Serialize first so a malformed call never consumes a limiter slot
        try:
            data = ApiRequest(method=method, params=params).to_wire()
        except (EnvelopeValidationError, TypeError, ValueError) as e:
            raise SerpstatApiError(f"Invalid parameters for {method}: {e}") from e

        self.rate_limiter.acquire()
        logger.debug(f"Calling Serpstat method {method}")

        try:
            response = self.session.post(
                self.api_url,
                params={"token": self.api_token},
                data=data,
                headers={"Content-Type": JSON_CONTENT_TYPE, "Accept": JSON_CONTENT_TYPE},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Request for {method} failed: {type(e).__name__}")
            raise SerpstatApiError(f"Request failed: {e}") from e

        body = response.content.decode("utf-8", errors="replace")

        if not 200 <= response.status_code < 300:
            logger.warning(f"Serpstat HTTP error {response.status_code} for {method}")
            raise SerpstatApiError(
                f"HTTP Error: {response.status_code} - {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise SerpstatApiError(f"Invalid JSON response: {e}", status_code=response.status_code, body=body) from e

        if not isinstance(payload, dict):
            raise SerpstatApiError("Invalid response: expected a JSON object", body=body)

        if "error" in payload:
            raise self._api_error(payload["error"])

        if "result" not in payload:
            raise SerpstatApiError("Invalid response: missing result field", body=body)

        return payload["result"]

    @staticmethod
    def _api_error(error: Any) -> SerpstatApiError:
        """Build an error from the body-level ``error`` object."""
        if isinstance(error, dict):
            message = error.get("message")
            error_code = error.get("code")
            error_type = error.get("type")
        else:
            message, error_code, error_type = error, None, None

        message = str(message) if message is not None else "Unknown API error"
        logger.warning(f"Serpstat API error: {message}")
        return SerpstatApiError(
            message,
            error_code=error_code if isinstance(error_code, int) else None,
            error_type=str(error_type) if error_type is not None else None,
        )

    def get_stats(self) -> dict[str, Any]:
        """Get combined call metrics and cache statistics."""
        return {
            "metrics": self.metrics.to_dict(),
            "cache": self.cache.get_stats() if self.cache is not None else None,
        }

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> SerpstatApiClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
