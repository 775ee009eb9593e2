"""Pytest configuration and fixtures for serpstat-mcp tests."""

from __future__ import annotations

import json
from typing import Any, Callable
from unittest.mock import Mock

import pytest

from serpstat_mcp.core import RateLimiter, ResponseCache
from serpstat_mcp.providers import SerpstatApiClient
from serpstat_mcp.tools import RecordingObserver, ToolExecutionHarness


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_http_response(status_code: int = 200, body: Any = None) -> Mock:
    """Build a mock requests.Response with a UTF-8 body."""
    if body is None:
        body = {"id": 1, "result": {}}
    text = body if isinstance(body, str) else json.dumps(body, ensure_ascii=False)
    response = Mock()
    response.status_code = status_code
    response.content = text.encode("utf-8")
    return response


@pytest.fixture
def clock() -> FakeClock:
    """Fake monotonic clock."""
    return FakeClock()


@pytest.fixture
def client() -> SerpstatApiClient:
    """Client with a generous rate limit so tests never sleep."""
    return SerpstatApiClient(
        api_token="test-token",
        api_url="https://api.example.test/v4",
        rate_limiter=RateLimiter(max_requests=1000, window_seconds=1.0),
        cache=ResponseCache(),
    )


@pytest.fixture
def observer() -> RecordingObserver:
    """Observer recording harness notifications."""
    return RecordingObserver()


@pytest.fixture
def harness(observer: RecordingObserver) -> ToolExecutionHarness:
    """Harness wired to the recording observer."""
    return ToolExecutionHarness(observer=observer, name="DomainTools")


@pytest.fixture
def http_response() -> Callable[..., Mock]:
    """Factory for mock HTTP responses."""
    return make_http_response
