"""Data models for Serpstat API calls.

- CallSignature: deterministic cache key built from method and parameters
- ApiRequest: pydantic wire envelope ``{id, method, params}``
- ApiResponse: immutable result handed back to tool callers
"""

from serpstat_mcp.models.api import (
    REQUEST_ID,
    ApiRequest,
    ApiResponse,
    CallSignature,
    now_millis,
)

__all__ = [
    "REQUEST_ID",
    "ApiRequest",
    "ApiResponse",
    "CallSignature",
    "now_millis",
]
