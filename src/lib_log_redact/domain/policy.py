"""Masking policy and the resolver that builds it.

Purpose
-------
Turn caller-supplied, possibly partial configuration into one canonical,
immutable :class:`MaskingPolicy`. Every validation happens here so a logger
can never be constructed with a policy that would fail while masking.

Contents
--------
* :class:`MaskingPolicy` - frozen, validated policy.
* :func:`resolve_policy` - layer base policies and an override.
* :func:`split_path` - validate and split one dotted path.

System Role
-----------
Built once per logger and shared read-only by every log call (and every
child logger), which is what makes concurrent masking lock-free.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from .catalog import DEFAULT_CATALOG, PatternCatalog
from .errors import ConfigurationError
from .rules import PatternRule

logger = logging.getLogger(__name__)

DEFAULT_MASK_VALUE = "[REDACTED]"
DEFAULT_MAX_SCAN_CHARS = 65_536

PolicyLayer = Union["MaskingPolicy", Mapping[str, Any], None]

_SCALAR_KEYS = ("mask_value", "deep_scan", "partial_masking", "max_scan_chars", "strict")
_NULLABLE_KEYS = ("max_scan_chars",)
_LIST_KEYS = ("sensitive_paths", "patterns", "custom_patterns")
_ALLOWED_KEYS = frozenset(_SCALAR_KEYS + _LIST_KEYS)
_RULE_KEYS = frozenset({"pattern", "replacement", "description", "flags", "name"})


def split_path(path: str) -> tuple[str, ...]:
    """Split a dotted sensitive path into its segments.

    Examples
    --------
    >>> split_path("user.address.zip")
    ('user', 'address', 'zip')
    >>> split_path("user..zip")
    Traceback (most recent call last):
    ...
    lib_log_redact.domain.errors.ConfigurationError: malformed sensitive path 'user..zip': empty segment
    """

    if not isinstance(path, str):
        raise ConfigurationError(f"sensitive path must be a string, got {type(path).__name__}")
    if not path:
        raise ConfigurationError("sensitive path must not be empty")
    segments = tuple(path.split("."))
    if any(not segment for segment in segments):
        raise ConfigurationError(f"malformed sensitive path {path!r}: empty segment")
    return segments


@dataclass(slots=True, frozen=True)
class MaskingPolicy:
    """Resolved, immutable redaction configuration of one logger.

    Attributes
    ----------
    sensitive_paths:
        Dotted key paths whose whole value is replaced by ``mask_value``.
    mask_value:
        Literal replacement used by path masking.
    deep_scan:
        When ``True`` pattern rules reach every nested string in context and
        attributes; when ``False`` only top-level string values.
    patterns:
        Rules applied in order; rule *i* sees the output of rule *i-1*.
    partial_masking:
        Accepted for compatibility. Partial-looking output such as
        ``****-1234`` comes from a rule's replacement template only.
    max_scan_chars:
        Strings longer than this are truncated before any rule runs;
        ``None`` disables the bound.
    strict:
        Count and report skipped rules instead of dropping them silently.
    """

    sensitive_paths: tuple[str, ...] = ()
    mask_value: str = DEFAULT_MASK_VALUE
    deep_scan: bool = True
    patterns: tuple[PatternRule, ...] = ()
    partial_masking: bool = False
    max_scan_chars: int | None = DEFAULT_MAX_SCAN_CHARS
    strict: bool = False
    path_segments: tuple[tuple[str, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        paths = tuple(self.sensitive_paths)
        object.__setattr__(self, "sensitive_paths", paths)
        object.__setattr__(self, "path_segments", tuple(split_path(path) for path in paths))
        rules = tuple(self.patterns)
        for rule in rules:
            if not isinstance(rule, PatternRule):
                raise ConfigurationError(f"patterns must contain PatternRule objects, got {type(rule).__name__}")
        object.__setattr__(self, "patterns", rules)
        if not isinstance(self.mask_value, str):
            raise ConfigurationError("mask_value must be a string")
        if self.max_scan_chars is not None and (
            isinstance(self.max_scan_chars, bool) or not isinstance(self.max_scan_chars, int) or self.max_scan_chars <= 0
        ):
            raise ConfigurationError("max_scan_chars must be a positive integer or None")

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the policy can never change a record."""

        return not self.sensitive_paths and not self.patterns


def resolve_policy(
    policy: PolicyLayer = None,
    *,
    bases: Sequence[PolicyLayer] = (),
    catalog: PatternCatalog | None = None,
) -> MaskingPolicy:
    """Merge ``bases`` and ``policy`` (in that order) into a :class:`MaskingPolicy`.

    * ``patterns`` are concatenated, base rules first, each list keeping its
      internal order. ``custom_patterns`` is appended after ``patterns``
      within the same layer.
    * ``sensitive_paths`` are concatenated and de-duplicated; the first
      occurrence keeps its position.
    * Scalars come from the last layer that sets them, else the defaults.
      A mapping value of ``None`` means "not set", except for
      ``max_scan_chars`` where it disables the scan bound.

    Pattern entries may be :class:`PatternRule` objects, catalog names, or
    mappings with ``pattern``/``replacement`` (and optional ``description``,
    ``flags``, ``name``) keys.

    Raises
    ------
    ConfigurationError
        For invalid regexes, malformed paths, unknown catalog names, unknown
        policy keys, or invalid scalar values.

    Examples
    --------
    >>> base = {"sensitive_paths": ["password"], "patterns": ["email"]}
    >>> resolved = resolve_policy({"sensitive_paths": ["token", "password"], "deep_scan": False}, bases=[base])
    >>> resolved.sensitive_paths, resolved.deep_scan, [rule.name for rule in resolved.patterns]
    (('password', 'token'), False, ['email'])
    """

    source = catalog if catalog is not None else DEFAULT_CATALOG
    paths: list[str] = []
    rules: list[PatternRule] = []
    scalars: dict[str, Any] = {}

    for layer in (*bases, policy):
        if layer is None:
            continue
        layer_values = _layer_values(layer)
        complete = isinstance(layer, MaskingPolicy)
        for path in _as_list(layer_values.get("sensitive_paths"), "sensitive_paths"):
            split_path(path)
            if path not in paths:
                paths.append(path)
        for key in ("patterns", "custom_patterns"):
            rules.extend(_coerce_rule(entry, source) for entry in _as_list(layer_values.get(key), key))
        for key in _SCALAR_KEYS:
            if complete or layer_values.get(key) is not None or (key in _NULLABLE_KEYS and key in layer_values):
                scalars[key] = layer_values[key]

    deep_scan = scalars.get("deep_scan", True)
    if not isinstance(deep_scan, bool):
        raise ConfigurationError("deep_scan must be a boolean")
    resolved = MaskingPolicy(
        sensitive_paths=tuple(paths),
        mask_value=scalars.get("mask_value", DEFAULT_MASK_VALUE),
        deep_scan=deep_scan,
        patterns=tuple(rules),
        partial_masking=bool(scalars.get("partial_masking", False)),
        max_scan_chars=scalars.get("max_scan_chars", DEFAULT_MAX_SCAN_CHARS),
        strict=bool(scalars.get("strict", False)),
    )
    logger.debug(
        "Resolved masking policy",
        extra={"sensitive_paths": len(resolved.sensitive_paths), "patterns": len(resolved.patterns)},
    )
    return resolved


def _layer_values(layer: MaskingPolicy | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(layer, MaskingPolicy):
        return {
            "sensitive_paths": layer.sensitive_paths,
            "patterns": layer.patterns,
            "mask_value": layer.mask_value,
            "deep_scan": layer.deep_scan,
            "partial_masking": layer.partial_masking,
            "max_scan_chars": layer.max_scan_chars,
            "strict": layer.strict,
        }
    if not isinstance(layer, Mapping):
        raise ConfigurationError(f"policy layer must be a MaskingPolicy or mapping, got {type(layer).__name__}")
    unknown = sorted(str(key) for key in layer if key not in _ALLOWED_KEYS)
    if unknown:
        raise ConfigurationError("unknown policy key(s): " + ", ".join(unknown))
    return layer


def _as_list(value: Any, key: str) -> Iterable[Any]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes, Mapping, PatternRule)) or not isinstance(value, Iterable):
        raise ConfigurationError(f"{key} must be a list")
    return value


def _coerce_rule(entry: Any, catalog: PatternCatalog) -> PatternRule:
    if isinstance(entry, PatternRule):
        return entry
    if isinstance(entry, str):
        return catalog.select(entry)[0]
    if isinstance(entry, Mapping):
        unknown = sorted(str(key) for key in entry if key not in _RULE_KEYS)
        if unknown:
            raise ConfigurationError("unknown pattern key(s): " + ", ".join(unknown))
        if "pattern" not in entry or "replacement" not in entry:
            raise ConfigurationError("pattern entries need both 'pattern' and 'replacement'")
        pattern = entry["pattern"]
        description = entry.get("description") or ""
        name = entry.get("name")
        if isinstance(pattern, re.Pattern):
            if entry.get("flags"):
                raise ConfigurationError("flags cannot be combined with a precompiled pattern")
            return PatternRule(pattern=pattern, replacement=entry["replacement"], description=description, name=name)
        if not isinstance(pattern, str):
            raise ConfigurationError(f"pattern must be a string or compiled regex, got {type(pattern).__name__}")
        return PatternRule.compile(
            pattern,
            entry["replacement"],
            flags=int(entry.get("flags") or 0),
            description=description,
            name=name,
        )
    raise ConfigurationError(f"unsupported pattern entry {entry!r}")


__all__ = [
    "DEFAULT_MASK_VALUE",
    "DEFAULT_MAX_SCAN_CHARS",
    "MaskingPolicy",
    "PolicyLayer",
    "resolve_policy",
    "split_path",
]
