"""Redaction pipeline turning one log record into its masked counterpart.

Pattern masking runs first (message, context, attributes), then path masking
(context and attributes only). Running paths last guarantees that a field
named by a sensitive path ends up equal to the mask value verbatim, even when
a pattern rule already rewrote part of it.
"""

from __future__ import annotations

from .anomalies import AnomalyHook
from .path_masking import mask_paths
from .pattern_masking import mask_patterns
from .policy import MaskingPolicy
from .records import LogRecord


def mask_record(record: LogRecord, policy: MaskingPolicy, *, on_anomaly: AnomalyHook | None = None) -> LogRecord:
    """Return ``record`` redacted according to ``policy``.

    Pure and synchronous: ``record`` is not mutated, nothing is retained, and
    the call never raises for unexpected payload shapes. The same object is
    returned when the policy changes nothing.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_redact.domain.catalog import DEFAULT_CATALOG
    >>> from lib_log_redact.domain.levels import LogLevel
    >>> record = LogRecord(
    ...     datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.INFO, "card 4111-1111-1111-1111", "svc",
    ...     attributes={"user": {"aadhaar": "1234 5678 9012", "name": "X"}},
    ... )
    >>> policy = MaskingPolicy(
    ...     sensitive_paths=("user.aadhaar",),
    ...     patterns=DEFAULT_CATALOG.select("creditCard", "aadhaar"),
    ... )
    >>> masked = mask_record(record, policy)
    >>> masked.message
    'card ****-****-****-****'
    >>> masked.attributes
    {'user': {'aadhaar': '[REDACTED]', 'name': 'X'}}
    """

    if policy.is_empty:
        return record
    masked = mask_patterns(
        record,
        policy.patterns,
        policy.deep_scan,
        max_scan_chars=policy.max_scan_chars,
        on_anomaly=on_anomaly,
    )
    if not policy.path_segments:
        return masked
    context = mask_paths(masked.context, policy.path_segments, policy.mask_value, on_anomaly=on_anomaly)
    attributes = mask_paths(masked.attributes, policy.path_segments, policy.mask_value, on_anomaly=on_anomaly)
    if context is masked.context and attributes is masked.attributes:
        return masked
    return masked.replace(context=context, attributes=attributes)


__all__ = ["mask_record"]
