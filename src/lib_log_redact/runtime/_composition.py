"""Runtime composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate :class:`RuntimeSettings` into the live :class:`LoggingRuntime`
singleton. The helpers here keep wiring small, declarative, and testable.

System Role
-----------
Anchors the clean-architecture boundary: outer adapters are selected here,
while ``lib_log_redact.runtime`` exposes only the façade.
"""

from __future__ import annotations

from datetime import datetime, timezone

from lib_log_redact.adapters import JsonLinesAdapter, RedactionScrubber, RichConsoleAdapter
from lib_log_redact.application.ports import BackendPort, ClockPort
from lib_log_redact.application.use_cases import create_process_record, create_shutdown

from ._settings import RuntimeSettings
from ._state import LoggingRuntime


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def build_runtime(settings: RuntimeSettings) -> LoggingRuntime:
    """Assemble the logging runtime from resolved settings."""

    scrubber = RedactionScrubber(policy=settings.policy, diagnostic=settings.diagnostic_hook)
    backends = _select_backends(settings)
    process = create_process_record(
        scrubber=scrubber,
        backends=backends,
        transports=settings.transports,
        clock=SystemClock(),
        min_level=settings.level,
        diagnostic=settings.diagnostic_hook,
    )
    return LoggingRuntime(
        process=process,
        shutdown_async=create_shutdown(settings.transports),
        scrubber=scrubber,
        service=settings.service,
        environment=settings.environment,
        level=settings.level,
        base_context={"service": settings.service, "environment": settings.environment},
        backend_names=tuple(type(backend).__name__ for backend in backends),
        transport_names=tuple(type(transport).__name__ for transport in settings.transports),
    )


def _select_backends(settings: RuntimeSettings) -> tuple[BackendPort, ...]:
    backends: list[BackendPort] = []
    if settings.console_enabled:
        backends.append(_create_console(settings))
    backends.extend(settings.backends)
    return tuple(backends)


def _create_console(settings: RuntimeSettings) -> BackendPort:
    if settings.console_format == "json":
        return JsonLinesAdapter(stream=settings.console_stream)
    return RichConsoleAdapter(
        force_color=settings.force_color,
        no_color=settings.no_color,
        styles=dict(settings.console_styles),
    )


__all__ = ["SystemClock", "build_runtime"]
