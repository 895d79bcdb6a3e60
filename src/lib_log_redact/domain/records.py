"""Domain record describing one structured log call.

Purpose
-------
Provide an immutable, serialisable representation of the record that travels
from the logger façade through the redaction pipeline to backends and
transports.

Contents
--------
* :class:`LogRecord` dataclass with helper methods.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer. The redaction pipeline consumes one record and
returns another; adapters only ever see the returned (masked) record.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Immutable log record handed to the redaction pipeline.

    Attributes
    ----------
    timestamp:
        Time of the call in timezone-aware UTC.
    level:
        :class:`LogLevel` severity associated with the call.
    message:
        Rendered message passed by the caller.
    logger_name:
        Logical logger emitting the record.
    context:
        Key/value pairs inherited from the logger (service, request ids, ...).
        Key order is preserved.
    attributes:
        Key/value pairs supplied with this single call. Key order is
        preserved.
    """

    timestamp: datetime
    level: LogLevel
    message: str
    logger_name: str
    context: Mapping[str, Any] = field(default_factory=dict)
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        if not isinstance(self.message, str):
            raise TypeError("message must be a string")
        object.__setattr__(self, "context", dict(self.context))
        object.__setattr__(self, "attributes", dict(self.attributes))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the record to a dictionary with an ISO8601 timestamp."""

        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.severity,
            "message": self.message,
            "logger_name": self.logger_name,
            "context": dict(self.context),
            "attributes": dict(self.attributes),
        }

    def to_json(self) -> str:
        """Serialize the record to JSON, keeping key order.

        Values that JSON cannot represent natively are rendered with ``str``.
        """

        return json.dumps(self.to_dict(), default=str, ensure_ascii=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LogRecord":
        """Reconstruct a record from :meth:`to_dict` output.

        The short keys of the JSON record shape (``ts``, ``msg``, ``name``,
        ``ctx``, ``attrs``) and ``loggerName`` are accepted as well. Missing
        timestamps default to now; missing levels default to ``info``.

        Examples
        --------
        >>> record = LogRecord.from_dict({"msg": "hi", "name": "svc", "attrs": {"a": 1}})
        >>> record.message, record.logger_name, record.attributes
        ('hi', 'svc', {'a': 1})
        """

        raw_ts = _first(payload, "timestamp", "ts")
        if raw_ts is None:
            timestamp = datetime.now(timezone.utc)
        elif isinstance(raw_ts, datetime):
            timestamp = raw_ts
        else:
            timestamp = datetime.fromisoformat(str(raw_ts).replace("Z", "+00:00"))
        raw_level = _first(payload, "level")
        level = raw_level if isinstance(raw_level, LogLevel) else LogLevel.from_name(str(raw_level or "info"))
        return cls(
            timestamp=timestamp,
            level=level,
            message=str(_first(payload, "message", "msg") or ""),
            logger_name=str(_first(payload, "logger_name", "loggerName", "name") or ""),
            context=_first(payload, "context", "ctx") or {},
            attributes=_first(payload, "attributes", "attrs") or {},
        )

    def replace(self, **changes: Any) -> "LogRecord":
        """Return a copied record with ``changes`` applied."""

        return replace(self, **changes)


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


__all__ = ["LogRecord"]
