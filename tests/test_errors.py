"""Tests for failure classification."""

from __future__ import annotations

import pytest

from serpstat_mcp.errors import (
    ConfigError,
    Failure,
    FailureKind,
    SerpstatApiError,
    SerpstatError,
    ValidationError,
    classify_exception,
)


class TestClassification:
    """Tests for classify_exception."""

    @pytest.mark.parametrize(
        "exc,kind",
        [
            (ValidationError("bad domain"), FailureKind.VALIDATION),
            (SerpstatApiError("HTTP Error: 500 - boom"), FailureKind.REMOTE),
            (ValueError("oops"), FailureKind.UNEXPECTED),
            (ConfigError("no token"), FailureKind.UNEXPECTED),
        ],
    )
    def test_kinds(self, exc: Exception, kind: FailureKind) -> None:
        """Test that each exception maps to exactly one kind."""
        assert classify_exception(exc).kind is kind

    def test_render_prefixes(self) -> None:
        """Test the caller-facing labels."""
        assert Failure(FailureKind.VALIDATION, "m").render() == "Validation error: m"
        assert Failure(FailureKind.REMOTE, "m").render() == "API error: m"
        assert Failure(FailureKind.UNEXPECTED, "m").render() == "Unexpected error: m"


class TestHierarchy:
    """Tests for the exception hierarchy."""

    def test_all_errors_share_base(self) -> None:
        """Test that package errors derive from SerpstatError."""
        assert issubclass(ValidationError, SerpstatError)
        assert issubclass(SerpstatApiError, SerpstatError)
        assert issubclass(ConfigError, SerpstatError)
        assert issubclass(ConfigError, ValueError)

    def test_api_error_attributes(self) -> None:
        """Test optional API error details."""
        error = SerpstatApiError("limit exceeded", status_code=429, error_code=32004, error_type="limits")
        assert error.message == "limit exceeded"
        assert error.status_code == 429
        assert error.error_code == 32004
        assert error.error_type == "limits"
