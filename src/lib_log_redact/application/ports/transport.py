"""Port for transports that buffer records and need a final flush.

Purpose
-------
Describe adapters that ship masked records to a remote collector. Emission is
synchronous and cheap (usually an enqueue); ``flush`` is awaited once during
shutdown.

System Role
-----------
Consumed by :func:`lib_log_redact.application.use_cases.process_record.create_process_record`
for fan-out and by :func:`lib_log_redact.application.use_cases.shutdown.create_shutdown`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_redact.domain.records import LogRecord


@runtime_checkable
class TransportPort(Protocol):
    """Ship masked records to an external destination."""

    def emit(self, record: LogRecord) -> None:
        """Accept ``record`` for delivery."""

    async def flush(self) -> None:
        """Deliver everything accepted so far."""


__all__ = ["TransportPort"]
