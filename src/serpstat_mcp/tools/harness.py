"""Uniform execution wrapper for tool invocations.

Every tool call runs validate -> invoke -> format through
``ToolExecutionHarness.execute``. The harness is the only place where
exceptions become results: whatever a step raises is classified as a
validation, API or unexpected failure and returned as an error
``ToolResult``; nothing escapes to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, MutableMapping, Union

from mcp.types import CallToolResult, LoggingMessageNotificationParams, TextContent

from serpstat_mcp.errors import Failure, FailureKind, classify_exception
from serpstat_mcp.models import ApiResponse
from serpstat_mcp.tools.observers import LoggingObserver, NotificationObserver

logger = logging.getLogger(__name__)

Arguments = MutableMapping[str, Any]
Validator = Callable[[Arguments], None]
Invoker = Callable[[Arguments], ApiResponse]
Formatter = Callable[[ApiResponse, Arguments], str]

# Outcome of the three steps: formatted text or a classified failure
Outcome = Union[str, Failure]


@dataclass(frozen=True)
class ToolResult:
    """Text payload and error flag returned for one tool invocation."""

    text: str
    is_error: bool
    failure: Failure | None = None

    def to_call_tool_result(self) -> CallToolResult:
        """Convert to the MCP ``tools/call`` result shape."""
        return CallToolResult(content=[TextContent(type="text", text=self.text)], isError=self.is_error)


class ToolExecutionHarness:
    """Run tool steps and translate any failure into an error result."""

    def __init__(self, observer: NotificationObserver | None = None, name: str | None = None) -> None:
        """Initialize the harness.

        Args:
            observer: Receives start/completion/error notifications
                (default: LoggingObserver)
            name: Logger label attached to notifications (default: class name)
        """
        self.observer = observer if observer is not None else LoggingObserver()
        self.name = name or type(self).__name__

    def execute(
        self,
        arguments: Arguments,
        method_label: str,
        validate: Validator | None,
        invoke: Invoker,
        formatter: Formatter,
    ) -> ToolResult:
        """Execute one tool invocation.

        Args:
            arguments: Tool arguments; validate may normalize them in place
            method_label: Name used in progress notifications
            validate: Checks arguments, raising ValidationError on bad input;
                None skips validation
            invoke: Performs the API call, typically via ``SerpstatApiClient.call``
            formatter: Renders the API response as text

        Returns:
            ToolResult with formatted text, or ``"<kind>: <message>"`` and
            ``is_error=True`` on failure
        """
        self._notify("info", f"Starting {method_label} request")

        outcome = self._run(arguments, validate, invoke, formatter)

        if isinstance(outcome, Failure):
            self._notify("error", outcome.render())
            return ToolResult(text=outcome.render(), is_error=True, failure=outcome)

        self._notify("info", f"Successfully processed {method_label} request")
        return ToolResult(text=outcome, is_error=False)

    @staticmethod
    def _run(
        arguments: Arguments,
        validate: Validator | None,
        invoke: Invoker,
        formatter: Formatter,
    ) -> Outcome:
        try:
            if validate is not None:
                validate(arguments)
            response = invoke(arguments)
            text = formatter(response, arguments)
        except Exception as e:
            return classify_exception(e)

        if not isinstance(text, str):
            return Failure(FailureKind.UNEXPECTED, f"formatter returned {type(text).__name__}, expected str")
        return text

    def _notify(self, level: Literal["info", "error"], message: str) -> None:
        params = LoggingMessageNotificationParams(level=level, logger=self.name, data=message)
        try:
            self.observer.notify(params)
        except Exception as e:
            logger.warning(f"Notification observer failed: {type(e).__name__}: {e}")
