"""Request-execution pipeline exposing the Serpstat API as MCP tools."""

from serpstat_mcp.config import ClientSettings
from serpstat_mcp.core import RateLimiter, ResponseCache
from serpstat_mcp.errors import (
    ConfigError,
    Failure,
    FailureKind,
    SerpstatApiError,
    SerpstatError,
    ValidationError,
)
from serpstat_mcp.models import ApiRequest, ApiResponse, CallSignature
from serpstat_mcp.providers import ApiProvider, SerpstatApiClient
from serpstat_mcp.tools import ToolExecutionHarness, ToolResult

__version__ = "0.1.0"

__all__ = [
    "ApiProvider",
    "ApiRequest",
    "ApiResponse",
    "CallSignature",
    "ClientSettings",
    "ConfigError",
    "Failure",
    "FailureKind",
    "RateLimiter",
    "ResponseCache",
    "SerpstatApiClient",
    "SerpstatApiError",
    "SerpstatError",
    "ToolExecutionHarness",
    "ToolResult",
    "ValidationError",
]
