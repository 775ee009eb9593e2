"""Tool execution layer.

Every tool exposed to an agent passes through ``ToolExecutionHarness``:
- harness.py: validate -> invoke -> format with uniform error results
- observers.py: destinations for start/completion/error notifications

Validators, API calls and formatters are supplied by each tool as plain
callables; the harness never raises.
"""

from serpstat_mcp.tools.harness import ToolExecutionHarness, ToolResult
from serpstat_mcp.tools.observers import (
    LoggingObserver,
    NotificationObserver,
    RecordingObserver,
)

__all__ = [
    "ToolExecutionHarness",
    "ToolResult",
    "LoggingObserver",
    "NotificationObserver",
    "RecordingObserver",
]
