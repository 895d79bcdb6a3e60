"""Sequential regex masking of string content.

Purpose
-------
Apply an ordered list of :class:`PatternRule` objects to a record's message
and to the strings inside its context and attribute maps.

Contents
--------
* :func:`apply_rules` - run every rule over one string, left to right.
* :func:`mask_value` - apply the rules to a nested value (deep or shallow).
* :func:`mask_patterns` - apply the rules to a whole :class:`LogRecord`.
* :data:`TRUNCATION_MARKER` - suffix appended to oversized strings.

System Role
-----------
First stage of the redaction pipeline. Pattern masking only rewrites string
leaves: it never adds or removes map keys or list elements.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from functools import partial
from typing import Any

from .anomalies import DEPTH_LIMIT, INPUT_TRUNCATED, RULE_FAILED, AnomalyHook, report
from .records import LogRecord
from .rules import PatternRule
from .values import MAX_DEPTH, transform

TRUNCATION_MARKER = "…[truncated]"

SCAN_OVERLAP = 256

_TRAILING_TOKEN = re.compile(r"\S+\Z")


def apply_rules(
    text: str,
    rules: Sequence[PatternRule],
    *,
    max_scan_chars: int | None = None,
    on_anomaly: AnomalyHook | None = None,
    field: str = "",
) -> str:
    """Apply ``rules`` to ``text`` sequentially and return the result.

    Rule *i* receives the output of rule *i-1*. Each rule replaces all
    non-overlapping matches, scanning left to right. A rule that raises is
    skipped for this string (reported as ``mask_rule_failed``) and the
    remaining rules still run.

    When ``max_scan_chars`` is set and ``text`` is longer, the rules only see
    the first ``max_scan_chars + SCAN_OVERLAP`` characters, which bounds the
    regex work per string. The masked result is then cut to
    ``max_scan_chars`` characters plus :data:`TRUNCATION_MARKER`. Both cuts
    drop a token they would split, so a value crossing the limit is either
    masked or removed.

    Examples
    --------
    >>> first = PatternRule.compile("secret", "token")
    >>> second = PatternRule.compile("token", "***")
    >>> apply_rules("secret", [first, second]), apply_rules("secret", [second, first])
    ('***', 'token')
    """

    if not rules:
        return text
    limit = max_scan_chars if max_scan_chars is not None and len(text) > max_scan_chars else None
    result = text
    if limit is not None:
        report(on_anomaly, INPUT_TRUNCATED, field=field, length=len(text), limit=limit)
        result = _cut(text, limit + SCAN_OVERLAP)
    for index, rule in enumerate(rules):
        try:
            result = rule.apply(result)
        except Exception as exc:
            report(
                on_anomaly,
                RULE_FAILED,
                field=field,
                rule=rule.name or rule.pattern.pattern,
                index=index,
                error=f"{type(exc).__name__}: {exc}",
            )
    if limit is not None:
        result = _cut(result, limit) + TRUNCATION_MARKER
    return text if result == text else result


def _cut(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters without keeping half a token.

    When the cut falls inside a run of non-whitespace characters, that run is
    dropped entirely.

    Examples
    --------
    >>> _cut("keep this secret", 11)
    'keep this '
    >>> _cut("keep this secret", 9)
    'keep this'
    >>> _cut("short", 10)
    'short'
    """

    if len(text) <= limit:
        return text
    head = text[:limit]
    if not text[limit].isspace():
        head = _TRAILING_TOKEN.sub("", head)
    return head


def mask_value(
    value: Any,
    rules: Sequence[PatternRule],
    *,
    deep_scan: bool,
    max_scan_chars: int | None = None,
    on_anomaly: AnomalyHook | None = None,
    field: str = "",
    max_depth: int = MAX_DEPTH,
) -> Any:
    """Apply ``rules`` to the strings inside ``value``.

    With ``deep_scan`` every string leaf of the nested value is rewritten.
    Without it only the top level is considered: a string is rewritten, the
    string values directly inside a map are rewritten, and nested maps and
    lists are left untouched.
    """

    if not rules:
        return value
    visit = partial(apply_rules, rules=rules, max_scan_chars=max_scan_chars, on_anomaly=on_anomaly, field=field)
    if deep_scan:

        def _on_limit(depth: int) -> None:
            report(on_anomaly, DEPTH_LIMIT, field=field, depth=depth)

        return transform(value, visit, max_depth=max_depth, on_limit=_on_limit)
    if isinstance(value, str):
        return visit(value)
    if isinstance(value, Mapping):
        rebuilt = {key: visit(item) if isinstance(item, str) else item for key, item in value.items()}
        if all(rebuilt[key] is item for key, item in value.items()):
            return value
        return rebuilt
    return value


def mask_patterns(
    record: LogRecord,
    rules: Sequence[PatternRule],
    deep_scan: bool,
    *,
    max_scan_chars: int | None = None,
    on_anomaly: AnomalyHook | None = None,
) -> LogRecord:
    """Return ``record`` with ``rules`` applied to message, context and attributes.

    The message is always scanned. Context and attributes are scanned deeply
    or shallowly according to ``deep_scan``. The same record object is
    returned when nothing changed.
    """

    if not rules:
        return record
    options = {"max_scan_chars": max_scan_chars, "on_anomaly": on_anomaly}
    message = apply_rules(record.message, rules, field="message", **options)
    context = mask_value(record.context, rules, deep_scan=deep_scan, field="context", **options)
    attributes = mask_value(record.attributes, rules, deep_scan=deep_scan, field="attributes", **options)
    if message is record.message and context is record.context and attributes is record.attributes:
        return record
    return record.replace(message=message, context=context, attributes=attributes)


__all__ = ["SCAN_OVERLAP", "TRUNCATION_MARKER", "apply_rules", "mask_patterns", "mask_value"]
