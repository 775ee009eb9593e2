"""Error types and failure records for the request-execution pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SerpstatError(Exception):
    """Base class for all errors raised by serpstat_mcp."""


class ConfigError(SerpstatError, ValueError):
    """Raised when client configuration is missing or malformed."""


class ValidationError(SerpstatError):
    """Raised by tool validators when arguments are missing or out of range."""


class SerpstatApiError(SerpstatError):
    """Raised for any failed remote call.

    Covers non-2xx HTTP responses, body-level ``error`` objects and
    transport faults (timeouts, connection failures).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: int | None = None,
        error_type: str | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.error_type = error_type
        self.body = body


class FailureKind(str, Enum):
    """The three ways a tool invocation can fail."""

    VALIDATION = "Validation error"
    REMOTE = "API error"
    UNEXPECTED = "Unexpected error"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A classified failure. Never carries a traceback."""

    kind: FailureKind
    message: str

    def render(self) -> str:
        """Return the caller-facing ``"<kind>: <message>"`` text."""
        return f"{self.kind.label}: {self.message}"


def _message_of(exc: BaseException) -> str:
    if isinstance(exc, SerpstatApiError):
        return exc.message
    return str(exc) or type(exc).__name__


def classify_exception(exc: Exception) -> Failure:
    """Map an exception to exactly one failure kind.

    Args:
        exc: The exception raised by a validate/invoke/format step

    Returns:
        Failure tagged with the kind matching the exception's origin
    """
    if isinstance(exc, ValidationError):
        kind = FailureKind.VALIDATION
    elif isinstance(exc, SerpstatApiError):
        kind = FailureKind.REMOTE
    else:
        kind = FailureKind.UNEXPECTED
    return Failure(kind=kind, message=_message_of(exc))
