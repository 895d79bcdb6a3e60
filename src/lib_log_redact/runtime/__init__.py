"""Runtime façade that wires the redacting logging pipeline.

Purpose
-------
Expose a stable entry point (``init``, ``get``, ``shutdown``) that host
applications use instead of importing the inner layers directly.

Contents
--------
* ``init`` - composition root for assembling the logging pipeline.
* ``get`` - accessor for logger proxies.
* ``shutdown`` / ``shutdown_async`` - deterministic teardown paths.
* ``inspect_runtime`` - read-only snapshot for diagnostics and tests.
* ``summary_info`` - metadata banner shared with the CLI.

System Role
-----------
Outer shell of the clean-architecture stack: the masking policy is resolved
once here and shared by every logger proxy, so redaction is uniform across
the whole process.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from lib_log_redact.domain import LogLevel, MaskingPolicy

from ._composition import build_runtime
from ._proxy import LoggerProxy
from ._settings import RuntimeConfig, build_runtime_settings, coerce_level
from ._state import clear_runtime, current_runtime, is_initialised, set_runtime


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active logging runtime."""

    service: str
    environment: str
    level: LogLevel
    policy: MaskingPolicy
    backends: tuple[str, ...]
    transports: tuple[str, ...]
    anomaly_counts: Mapping[str, int]


def init(config: RuntimeConfig | None = None) -> None:
    """Compose the logging runtime according to ``config``.

    Resolves configuration (``config`` + ``LOG_*`` environment overrides),
    builds the masking policy (preset as base, caller policy on top), wires
    the scrubber, console and caller-supplied adapters, then installs the
    result as the active singleton.

    Raises
    ------
    RuntimeError
        If called while a runtime is already active.
    ValueError
        For invalid configuration values, including
        :class:`~lib_log_redact.domain.errors.ConfigurationError` for masking
        settings.

    Examples
    --------
    >>> import lib_log_redact as log  # doctest: +SKIP
    >>> log.init(log.RuntimeConfig(service="svc", environment="dev"))  # doctest: +SKIP
    >>> _ = log.get("docs").info("ready", {"password": "hunter2"})  # doctest: +SKIP
    >>> log.shutdown()  # doctest: +SKIP
    """

    if is_initialised():
        raise RuntimeError(
            "lib_log_redact.init() cannot be called twice without shutdown(); call lib_log_redact.shutdown() first",
        )
    settings = build_runtime_settings(config if config is not None else RuntimeConfig())
    set_runtime(build_runtime(settings))


def get(name: str) -> LoggerProxy:
    """Return a logger proxy bound to the configured runtime.

    Raises :class:`RuntimeError` when ``init`` has not been called.
    """

    runtime = current_runtime()
    return LoggerProxy(name, runtime.process, runtime.base_context)


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current runtime state."""

    runtime = current_runtime()
    return RuntimeSnapshot(
        service=runtime.service,
        environment=runtime.environment,
        level=runtime.level,
        policy=runtime.scrubber.policy,
        backends=runtime.backend_names,
        transports=runtime.transport_names,
        anomaly_counts=MappingProxyType(runtime.scrubber.anomaly_counts),
    )


def shutdown() -> None:
    """Flush transports and clear runtime state synchronously.

    Raises :class:`RuntimeError` when invoked inside a running event loop to
    steer callers to :func:`shutdown_async`.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None
    else:
        if loop.is_running():
            raise RuntimeError(
                "lib_log_redact.shutdown() cannot run inside an active event loop; await lib_log_redact.shutdown_async() instead",
            )
    asyncio.run(shutdown_async())


async def shutdown_async() -> None:
    """Flush transports and clear runtime state asynchronously.

    The runtime is cleared even when a transport fails to flush; the failure
    propagates to the caller.
    """

    runtime = current_runtime()
    try:
        await runtime.shutdown_async()
    finally:
        clear_runtime()


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point and docs."""

    from .. import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = [
    "LoggerProxy",
    "RuntimeConfig",
    "RuntimeSnapshot",
    "coerce_level",
    "get",
    "init",
    "inspect_runtime",
    "is_initialised",
    "shutdown",
    "shutdown_async",
    "summary_info",
]
