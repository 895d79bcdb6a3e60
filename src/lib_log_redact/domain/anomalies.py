"""Names and callback type for per-field masking anomalies.

A masking anomaly is a rule that had to be skipped for one field (unexpected
value shape, failing rule, depth guard, oversized input). Anomalies never
abort masking; in strict mode they are counted and reported.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

AnomalyHook = Callable[[str, dict[str, Any]], None]

PATH_BLOCKED = "mask_path_blocked"
RULE_FAILED = "mask_rule_failed"
DEPTH_LIMIT = "mask_depth_limit"
INPUT_TRUNCATED = "mask_input_truncated"

ANOMALY_KINDS: tuple[str, ...] = (PATH_BLOCKED, RULE_FAILED, DEPTH_LIMIT, INPUT_TRUNCATED)


def report(hook: AnomalyHook | None, kind: str, **payload: Any) -> None:
    """Forward an anomaly to ``hook`` when one is installed."""
    if hook is not None:
        hook(kind, payload)


__all__ = [
    "ANOMALY_KINDS",
    "AnomalyHook",
    "DEPTH_LIMIT",
    "INPUT_TRUNCATED",
    "PATH_BLOCKED",
    "RULE_FAILED",
    "report",
]
