"""Base interface for Serpstat API clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from serpstat_mcp.models import ApiResponse


class ApiProvider(ABC):
    """Abstract base class for API clients used by tool closures."""

    @abstractmethod
    def call(self, method: str, params: dict[str, Any] | None = None) -> ApiResponse:
        """Call a remote API method.

        Args:
            method: The API method name
            params: Method parameters (None is treated as empty)

        Returns:
            ApiResponse carrying the method's result

        Raises:
            SerpstatApiError: On any remote or transport failure
        """
        pass
