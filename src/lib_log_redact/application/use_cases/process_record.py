"""Use case orchestrating the processing pipeline for a single log call.

Purpose
-------
Turn a logger call into a :class:`LogRecord`, redact it through the scrubber,
and fan the masked record out to every backend and transport.

Contents
--------
* :func:`create_process_record` factory returning the runtime callable.
* Helpers for threshold checks and isolated adapter fan-out.

System Role
-----------
Application-layer orchestrator invoked by :func:`lib_log_redact.init`. Only
the masked record ever reaches an adapter; the unmasked record never leaves
this module.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from lib_log_redact.application.ports import BackendPort, ClockPort, ScrubberPort, TransportPort
from lib_log_redact.domain import LogLevel, LogRecord

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None]
ProcessResult = dict[str, Any]
ProcessCallable = Callable[..., ProcessResult]


def create_process_record(
    *,
    scrubber: ScrubberPort,
    backends: Sequence[BackendPort],
    transports: Sequence[TransportPort] = (),
    clock: ClockPort,
    min_level: LogLevel = LogLevel.INFO,
    diagnostic: DiagnosticHook | None = None,
) -> ProcessCallable:
    """Build the orchestrator capturing the current dependency wiring.

    Parameters
    ----------
    scrubber:
        Adapter implementing :class:`ScrubberPort`; owns the masking policy.
    backends:
        Synchronous adapters receiving every accepted record.
    transports:
        Buffered adapters receiving every accepted record; flushed on shutdown.
    clock:
        Provider of timezone-aware timestamps.
    min_level:
        Records below this level are dropped before masking.
    diagnostic:
        Optional callback invoked with pipeline milestones.

    Returns
    -------
    Callable
        Function accepting ``logger_name``, ``level``, ``message`` and optional
        ``context``/``attributes`` mappings, returning a result dictionary.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> class DummyBackend:
    ...     def __init__(self):
    ...         self.records = []
    ...     def emit(self, record):
    ...         self.records.append(record.message)
    >>> class DummyClock:
    ...     def now(self):
    ...         return datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> class UpperScrubber:
    ...     def scrub(self, record):
    ...         return record.replace(message=record.message.upper())
    >>> backend = DummyBackend()
    >>> process = create_process_record(scrubber=UpperScrubber(), backends=[backend], clock=DummyClock())
    >>> process(logger_name="svc", level=LogLevel.INFO, message="hello")["ok"]
    True
    >>> process(logger_name="svc", level=LogLevel.DEBUG, message="quiet")
    {'ok': False, 'reason': 'below_threshold'}
    >>> backend.records
    ['HELLO']
    """

    emit = _build_diagnostic_emitter(diagnostic)
    adapters: tuple[BackendPort | TransportPort, ...] = (*backends, *transports)

    def process(
        *,
        logger_name: str,
        level: LogLevel,
        message: str,
        context: Mapping[str, Any] | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> ProcessResult:
        if level.value < min_level.value:
            return {"ok": False, "reason": "below_threshold"}
        record = LogRecord(
            timestamp=clock.now(),
            level=level,
            message=message,
            logger_name=logger_name,
            context=context or {},
            attributes=attributes or {},
        )
        masked = scrubber.scrub(record)
        failed = _fan_out(adapters, masked, emit)
        if failed:
            return {"ok": False, "reason": "adapter_error", "failed": failed, "record": masked}
        emit("emitted", {"logger": masked.logger_name, "level": masked.level.severity})
        return {"ok": True, "record": masked}

    return process


def _fan_out(
    adapters: Sequence[BackendPort | TransportPort],
    record: LogRecord,
    emit: DiagnosticHook,
) -> list[str]:
    failed: list[str] = []
    for adapter in adapters:
        name = type(adapter).__name__
        try:
            adapter.emit(record)
        except Exception as exc:  # noqa: BLE001
            failed.append(name)
            logger.warning("Adapter %s failed to emit record", name, exc_info=True)
            emit("adapter_error", {"adapter": name, "logger": record.logger_name, "error": str(exc)})
    return failed


def _build_diagnostic_emitter(diagnostic: DiagnosticHook | None) -> DiagnosticHook:
    def emit(event_name: str, payload: dict[str, Any]) -> None:
        if diagnostic is None:
            return
        try:
            diagnostic(event_name, payload)
        except Exception:  # noqa: BLE001
            logger.debug("Diagnostic hook raised for %s", event_name, exc_info=True)

    return emit


__all__ = ["DiagnosticHook", "ProcessCallable", "ProcessResult", "create_process_record"]
