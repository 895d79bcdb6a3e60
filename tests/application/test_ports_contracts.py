from __future__ import annotations

from datetime import datetime, timezone

from lib_log_redact.adapters import JsonLinesAdapter, RedactionScrubber, RichConsoleAdapter
from lib_log_redact.application.ports import BackendPort, ClockPort, ScrubberPort, TransportPort
from lib_log_redact.domain import LogRecord, MaskingPolicy
from lib_log_redact.runtime._composition import SystemClock


class _Transport:
    def emit(self, record: LogRecord) -> None:
        pass

    async def flush(self) -> None:
        pass


class _NotATransport:
    def emit(self, record: LogRecord) -> None:
        pass


def test_concrete_adapters_satisfy_backend_port(record_console) -> None:
    assert isinstance(RichConsoleAdapter(console=record_console), BackendPort)
    assert isinstance(JsonLinesAdapter(), BackendPort)


def test_scrubber_satisfies_scrubber_port() -> None:
    assert isinstance(RedactionScrubber(policy=MaskingPolicy()), ScrubberPort)


def test_transport_port_requires_flush() -> None:
    assert isinstance(_Transport(), TransportPort)
    assert not isinstance(_NotATransport(), TransportPort)


def test_system_clock_returns_aware_utc() -> None:
    clock = SystemClock()

    assert isinstance(clock, ClockPort)
    now = clock.now()
    assert now.tzinfo is timezone.utc
    assert abs((datetime.now(timezone.utc) - now).total_seconds()) < 5
