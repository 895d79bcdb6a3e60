"""Runtime configuration and its environment overrides.

Purpose
-------
Capture what hosts pass to :func:`lib_log_redact.init` as a
:class:`RuntimeConfig`, then layer ``LOG_*`` environment variables on top to
produce the fully resolved :class:`RuntimeSettings` consumed by the
composition root.

Contents
--------
* :class:`RuntimeConfig` - caller-facing configuration.
* :class:`RuntimeSettings` - resolved, validated configuration.
* :func:`build_runtime_settings` - argument + environment resolution.
* ``_env_*`` helpers parsing individual environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TextIO

from lib_log_redact.application.ports import BackendPort, TransportPort
from lib_log_redact.domain import LogLevel, MaskingPolicy, preset_policy, resolve_policy
from lib_log_redact.domain.policy import PolicyLayer

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None

CONSOLE_FORMATS = ("rich", "json")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})
_UNLIMITED = frozenset({"none", "unlimited"})


@dataclass(frozen=True)
class RuntimeConfig:
    """Configuration accepted by :func:`lib_log_redact.init`.

    Attributes
    ----------
    service, environment:
        Identifiers placed in every record's context.
    level:
        Minimum severity; lower records are dropped before masking.
    mask_preset:
        Name of the base policy (``default``, ``production`` or ``none``).
    policy:
        Caller policy layered over the preset (mapping or :class:`MaskingPolicy`).
    console_enabled, console_format:
        Toggle the built-in console backend and choose ``rich`` or ``json``.
    force_color, no_color, console_styles:
        Rich console colour control.
    console_stream:
        Stream used by the ``json`` console format (stdout when ``None``).
    backends, transports:
        Additional adapters receiving masked records.
    diagnostic_hook:
        Callback receiving pipeline and strict-mode anomaly events.
    """

    service: str = "app"
    environment: str = "dev"
    level: str | LogLevel = LogLevel.INFO
    mask_preset: str = "default"
    policy: PolicyLayer = None
    console_enabled: bool = True
    console_format: str = "rich"
    force_color: bool = False
    no_color: bool = False
    console_styles: Mapping[str, str] | None = None
    console_stream: TextIO | None = None
    backends: Sequence[BackendPort] = ()
    transports: Sequence[TransportPort] = ()
    diagnostic_hook: DiagnosticHook = None


@dataclass(frozen=True)
class RuntimeSettings:
    """Resolved configuration handed to :func:`build_runtime`."""

    service: str
    environment: str
    level: LogLevel
    policy: MaskingPolicy
    console_enabled: bool
    console_format: str
    force_color: bool
    no_color: bool
    console_styles: Mapping[str, str] = field(default_factory=dict)
    console_stream: TextIO | None = None
    backends: tuple[BackendPort, ...] = ()
    transports: tuple[TransportPort, ...] = ()
    diagnostic_hook: DiagnosticHook = None


def build_runtime_settings(config: RuntimeConfig) -> RuntimeSettings:
    """Resolve ``config`` against ``LOG_*`` environment overrides.

    Environment values win over arguments, matching how operators expect to
    reconfigure an already deployed service.

    Raises
    ------
    ValueError
        For unparsable levels, booleans, integers or console formats.
    ConfigurationError
        For invalid masking configuration (a :class:`ValueError` subclass).
    """

    level = coerce_level(os.getenv("LOG_LEVEL") or config.level)
    console_format = (os.getenv("LOG_CONSOLE_FORMAT") or config.console_format).strip().lower()
    if console_format not in CONSOLE_FORMATS:
        raise ValueError(f"console format must be one of {', '.join(CONSOLE_FORMATS)}; got {console_format!r}")
    return RuntimeSettings(
        service=os.getenv("LOG_SERVICE") or config.service,
        environment=os.getenv("LOG_ENVIRONMENT") or config.environment,
        level=level,
        policy=_build_policy(config),
        console_enabled=_env_bool("LOG_CONSOLE_ENABLED", config.console_enabled),
        console_format=console_format,
        force_color=_env_bool("LOG_FORCE_COLOR", config.force_color),
        no_color=_env_bool("LOG_NO_COLOR", config.no_color),
        console_styles=dict(config.console_styles or {}),
        console_stream=config.console_stream,
        backends=tuple(config.backends),
        transports=tuple(config.transports),
        diagnostic_hook=config.diagnostic_hook,
    )


def _build_policy(config: RuntimeConfig) -> MaskingPolicy:
    preset = preset_policy(os.getenv("LOG_MASK_PRESET") or config.mask_preset)
    return resolve_policy(_env_policy_layer(), bases=[preset, config.policy])


def _env_policy_layer() -> dict[str, Any]:
    """Collect masking overrides from the environment.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_MASK_VALUE', None)
    >>> os.environ['LOG_SENSITIVE_PATHS'] = 'user.email, card'
    >>> _env_policy_layer()['sensitive_paths']
    ['user.email', 'card']
    >>> del os.environ['LOG_SENSITIVE_PATHS']
    """

    layer: dict[str, Any] = {}
    paths = _env_list("LOG_SENSITIVE_PATHS")
    if paths:
        layer["sensitive_paths"] = paths
    patterns = _env_list("LOG_MASK_PATTERNS")
    if patterns:
        layer["patterns"] = patterns
    mask_value = os.getenv("LOG_MASK_VALUE")
    if mask_value:
        layer["mask_value"] = mask_value
    if os.getenv("LOG_MASK_DEEP_SCAN"):
        layer["deep_scan"] = _env_bool("LOG_MASK_DEEP_SCAN", True)
    if os.getenv("LOG_MASK_STRICT"):
        layer["strict"] = _env_bool("LOG_MASK_STRICT", False)
    max_scan = os.getenv("LOG_MASK_MAX_SCAN_CHARS")
    if max_scan:
        unlimited = max_scan.strip().lower() in _UNLIMITED
        layer["max_scan_chars"] = None if unlimited else _parse_int("LOG_MASK_MAX_SCAN_CHARS", max_scan)
    return layer


def coerce_level(level: str | LogLevel) -> LogLevel:
    """Return ``level`` as :class:`LogLevel`.

    Examples
    --------
    >>> coerce_level("warning") is LogLevel.WARN
    True
    >>> coerce_level(LogLevel.ERROR) is LogLevel.ERROR
    True
    """
    if isinstance(level, LogLevel):
        return level
    return LogLevel.from_name(level)


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = 'off'
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    >>> del os.environ['LOG_EXAMPLE_BOOL']
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off); got {value!r}")


def _env_list(name: str) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer; got {raw!r}") from exc


__all__ = [
    "CONSOLE_FORMATS",
    "DiagnosticHook",
    "RuntimeConfig",
    "RuntimeSettings",
    "build_runtime_settings",
    "coerce_level",
]
