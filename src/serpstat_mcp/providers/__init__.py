"""API client implementations."""

from serpstat_mcp.providers.base import ApiProvider
from serpstat_mcp.providers.requests_provider import SerpstatApiClient

__all__ = ["ApiProvider", "SerpstatApiClient"]
