"""Redaction engine and redacting logger for structured log records.

Hosts either call the pure engine directly (:func:`mask_record` with a
:class:`MaskingPolicy`) or initialise the runtime façade and log through
:func:`get`; in both cases sensitive paths and pattern matches are masked
before a record reaches any backend.
"""

from __future__ import annotations

from .adapters import JsonLinesAdapter, RedactionScrubber, RichConsoleAdapter
from .domain import (
    DEFAULT_CATALOG,
    DEFAULT_MASK_VALUE,
    ConfigurationError,
    LogLevel,
    LogRecord,
    MaskingPolicy,
    PatternCatalog,
    PatternRule,
    default_policy,
    mask_record,
    preset_policy,
    production_policy,
    resolve_policy,
)
from .runtime import (
    LoggerProxy,
    RuntimeConfig,
    RuntimeSnapshot,
    get,
    init,
    inspect_runtime,
    is_initialised,
    shutdown,
    shutdown_async,
    summary_info,
)

__all__ = [
    "ConfigurationError",
    "DEFAULT_CATALOG",
    "DEFAULT_MASK_VALUE",
    "JsonLinesAdapter",
    "LogLevel",
    "LogRecord",
    "LoggerProxy",
    "MaskingPolicy",
    "PatternCatalog",
    "PatternRule",
    "RedactionScrubber",
    "RichConsoleAdapter",
    "RuntimeConfig",
    "RuntimeSnapshot",
    "default_policy",
    "get",
    "init",
    "inspect_runtime",
    "is_initialised",
    "mask_record",
    "preset_policy",
    "production_policy",
    "resolve_policy",
    "shutdown",
    "shutdown_async",
    "summary_info",
]
