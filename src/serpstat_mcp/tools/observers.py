"""Observers receiving tool-execution notifications."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from mcp.types import LoggingMessageNotificationParams

logger = logging.getLogger(__name__)


class NotificationObserver(Protocol):
    """Anything that accepts MCP logging notifications."""

    def notify(self, params: LoggingMessageNotificationParams) -> None: ...


class LoggingObserver:
    """Forward notifications to a standard library logger."""

    _LEVELS = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "notice": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
        "alert": logging.CRITICAL,
        "emergency": logging.CRITICAL,
    }

    def __init__(self, target: logging.Logger | None = None) -> None:
        self.target = target or logger

    def notify(self, params: LoggingMessageNotificationParams) -> None:
        level = self._LEVELS.get(params.level, logging.INFO)
        self.target.log(level, f"[{params.logger}] {params.data}")


class RecordingObserver:
    """Keep every notification in memory, in arrival order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.notifications: list[LoggingMessageNotificationParams] = []

    def notify(self, params: LoggingMessageNotificationParams) -> None:
        with self._lock:
            self.notifications.append(params)

    @property
    def messages(self) -> list[tuple[str, str]]:
        """(level, data) pairs of everything recorded so far."""
        with self._lock:
            return [(n.level, str(n.data)) for n in self.notifications]
