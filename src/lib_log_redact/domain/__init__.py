"""Domain entities and the pure redaction engine."""

from __future__ import annotations

from .anomalies import ANOMALY_KINDS, AnomalyHook
from .catalog import DEFAULT_CATALOG, PatternCatalog, build_default_catalog
from .errors import ConfigurationError
from .levels import LogLevel
from .path_masking import mask_paths
from .pattern_masking import TRUNCATION_MARKER, apply_rules, mask_patterns, mask_value
from .policy import DEFAULT_MASK_VALUE, MaskingPolicy, resolve_policy
from .presets import default_policy, preset_policy, production_policy
from .records import LogRecord
from .redaction import mask_record
from .rules import PatternRule
from .values import MAX_DEPTH, Value, transform

__all__ = [
    "ANOMALY_KINDS",
    "AnomalyHook",
    "ConfigurationError",
    "DEFAULT_CATALOG",
    "DEFAULT_MASK_VALUE",
    "LogLevel",
    "LogRecord",
    "MAX_DEPTH",
    "MaskingPolicy",
    "PatternCatalog",
    "PatternRule",
    "TRUNCATION_MARKER",
    "Value",
    "apply_rules",
    "build_default_catalog",
    "default_policy",
    "mask_paths",
    "mask_patterns",
    "mask_record",
    "mask_value",
    "preset_policy",
    "production_policy",
    "resolve_policy",
    "transform",
]
