"""Tests for notification observers and client metrics."""

from __future__ import annotations

import logging

import pytest
from mcp.types import LoggingMessageNotificationParams

from serpstat_mcp.metrics import ClientMetrics
from serpstat_mcp.tools import LoggingObserver, RecordingObserver


class TestLoggingObserver:
    """Tests for LoggingObserver."""

    def test_routes_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that info and error notifications map to logging levels."""
        observer = LoggingObserver(logging.getLogger("serpstat_mcp.test"))

        with caplog.at_level(logging.INFO, logger="serpstat_mcp.test"):
            observer.notify(LoggingMessageNotificationParams(level="info", logger="DomainTools", data="Starting"))
            observer.notify(LoggingMessageNotificationParams(level="error", logger="DomainTools", data="API error: x"))

        assert [r.levelno for r in caplog.records] == [logging.INFO, logging.ERROR]
        assert caplog.records[0].getMessage() == "[DomainTools] Starting"


class TestRecordingObserver:
    """Tests for RecordingObserver."""

    def test_records_in_order(self) -> None:
        """Test that notifications are kept in arrival order."""
        observer = RecordingObserver()
        observer.notify(LoggingMessageNotificationParams(level="info", logger="t", data="one"))
        observer.notify(LoggingMessageNotificationParams(level="error", logger="t", data="two"))

        assert observer.messages == [("info", "one"), ("error", "two")]


class TestClientMetrics:
    """Tests for ClientMetrics."""

    def test_record_and_serialize(self) -> None:
        """Test counters and recent-call lists."""
        metrics = ClientMetrics()
        metrics.record_call("m.a", success=True, elapsed_ms=12.5)
        metrics.record_call("m.a", success=True, from_cache=True)
        metrics.record_call("m.b", success=False, error="HTTP Error: 500 - boom")

        data = metrics.to_dict()
        assert data["calls"] == {
            "total": 3,
            "remote": 2,
            "cache_hits": 1,
            "failed": 1,
            "success_rate": 66.67,
        }
        assert data["recent_calls"][0]["method"] == "m.b"
        assert data["recent_errors"][0]["error"] == "HTTP Error: 500 - boom"

    def test_empty_success_rate(self) -> None:
        """Test the success rate before any call."""
        assert ClientMetrics().get_success_rate() == 0.0
