"""Port for redacting sensitive information."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_redact.domain.records import LogRecord


@runtime_checkable
class ScrubberPort(Protocol):
    """Scrub sensitive values from log records before emission."""

    def scrub(self, record: LogRecord) -> LogRecord:
        """Return a (possibly) redacted copy of ``record``."""


__all__ = ["ScrubberPort"]
