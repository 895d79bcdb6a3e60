"""Port for synchronous backends (console, JSON lines, test sinks)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_redact.domain.records import LogRecord


@runtime_checkable
class BackendPort(Protocol):
    """Persist or render a masked log record."""

    def emit(self, record: LogRecord) -> None:
        """Forward ``record`` to the backend."""


__all__ = ["BackendPort"]
