"""Data models for Serpstat API calls."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

# The protocol requires an id but does not use it for correlation
REQUEST_ID = 1


def now_millis() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CallSignature:
    """Deterministic cache key for a (method, params) pair."""

    method: str
    canonical_params: str

    @classmethod
    def build(cls, method: str, params: dict[str, Any] | None) -> CallSignature:
        """Build a signature; parameter order does not affect the result.

        Args:
            method: API method name
            params: Call parameters (None is treated as an empty dict)

        Returns:
            CallSignature for the call
        """
        canonical = json.dumps(params or {}, sort_keys=True, ensure_ascii=False, default=str)
        return cls(method=method, canonical_params=canonical)

    @property
    def key(self) -> str:
        return f"{self.method}:{self.canonical_params}"

    def __str__(self) -> str:
        return self.key


class ApiRequest(BaseModel):
    """JSON-RPC style request envelope sent to the Serpstat API."""

    id: int = Field(default=REQUEST_ID, description="Request id (constant)")
    method: str = Field(description="API method name, e.g. SerpstatDomainProcedure.getDomainsInfo")
    params: dict[str, Any] = Field(default_factory=dict, description="Method parameters")

    def to_wire(self) -> bytes:
        """Serialize the envelope to a UTF-8 JSON body."""
        return self.model_dump_json().encode("utf-8")


@dataclass(frozen=True)
class ApiResponse:
    """Result of a successful API call."""

    result: Any
    method: str
    request_params: dict[str, Any]
    timestamp: int = field(default_factory=now_millis)
