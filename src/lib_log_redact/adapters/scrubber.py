"""Policy-driven redaction scrubber.

Purpose
-------
Adapt the pure :func:`mask_record` pipeline to the :class:`ScrubberPort` used
by the processing use case, adding anomaly accounting for strict mode.

Contents
--------
* :class:`RedactionScrubber` - concrete :class:`ScrubberPort` implementation.

System Role
-----------
Ensures sensitive fields never leave the application layer unredacted. One
scrubber (and therefore one immutable policy) is shared by every logger proxy
of a runtime.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Callable
from typing import Any

from lib_log_redact.application.ports.scrubber import ScrubberPort
from lib_log_redact.domain.policy import MaskingPolicy
from lib_log_redact.domain.records import LogRecord
from lib_log_redact.domain.redaction import mask_record

logger = logging.getLogger(__name__)


class RedactionScrubber(ScrubberPort):
    """Redact records with a resolved :class:`MaskingPolicy`.

    Parameters
    ----------
    policy:
        Resolved policy applied to every record.
    diagnostic:
        Optional callback receiving ``(anomaly_kind, payload)`` when the
        policy is strict.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_redact.domain.levels import LogLevel
    >>> record = LogRecord(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'msg', 'svc',
    ...                    attributes={'token': 'secret123'})
    >>> scrubber = RedactionScrubber(policy=MaskingPolicy(sensitive_paths=('token',)))
    >>> scrubber.scrub(record).attributes['token']
    '[REDACTED]'
    """

    def __init__(
        self,
        *,
        policy: MaskingPolicy,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> None:
        self._policy = policy
        self._diagnostic = diagnostic
        self._lock = threading.Lock()
        self._anomalies: Counter[str] = Counter()
        self._hook = self._record_anomaly if policy.strict else None

    @property
    def policy(self) -> MaskingPolicy:
        """Return the policy shared by every record this scrubber handles."""
        return self._policy

    @property
    def anomaly_counts(self) -> dict[str, int]:
        """Return a snapshot of anomalies counted so far (strict mode only)."""
        with self._lock:
            return dict(self._anomalies)

    def scrub(self, record: LogRecord) -> LogRecord:
        """Return ``record`` masked according to the policy."""
        return mask_record(record, self._policy, on_anomaly=self._hook)

    def _record_anomaly(self, kind: str, payload: dict[str, Any]) -> None:
        with self._lock:
            self._anomalies[kind] += 1
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(kind, payload)
        except Exception:  # noqa: BLE001
            logger.debug("Diagnostic hook raised for %s", kind, exc_info=True)


__all__ = ["RedactionScrubber"]
