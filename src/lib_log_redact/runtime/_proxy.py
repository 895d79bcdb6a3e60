"""Logger proxy handed out by :func:`lib_log_redact.get`."""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from typing import Any, Callable, Optional

from lib_log_redact.domain import LogLevel


class LoggerProxy:
    """Lightweight facade for structured logging calls.

    The proxy keeps host code decoupled from the underlying use case function,
    while providing level-specific helpers that return the result dictionary
    of the processing pipeline.

    Examples
    --------
    >>> calls = []
    >>> proxy = LoggerProxy("svc", lambda **kw: calls.append(kw) or {"ok": True}, {"service": "svc"})
    >>> proxy.child(request_id="r-1").info("ready", {"port": 80})
    {'ok': True}
    >>> calls[0]["context"], calls[0]["attributes"]
    ({'service': 'svc', 'request_id': 'r-1'}, {'port': 80})
    """

    def __init__(
        self,
        name: str,
        process: Callable[..., dict[str, Any]],
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Bind a logger name and inherited context to the runtime's process function."""
        self._name = name
        self._process = process
        self._context: dict[str, Any] = dict(context or {})

    @property
    def name(self) -> str:
        return self._name

    @property
    def context(self) -> dict[str, Any]:
        """Return a copy of the context attached to every record."""
        return dict(self._context)

    def trace(self, message: str, attributes: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        return self._log(LogLevel.TRACE, message, attributes)

    def debug(self, message: str, attributes: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        return self._log(LogLevel.DEBUG, message, attributes)

    def info(self, message: str, attributes: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        return self._log(LogLevel.INFO, message, attributes)

    def warn(self, message: str, attributes: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        return self._log(LogLevel.WARN, message, attributes)

    warning = warn

    def error(self, message: str, attributes: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        return self._log(LogLevel.ERROR, message, attributes)

    def fatal(self, message: str, attributes: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        return self._log(LogLevel.FATAL, message, attributes)

    critical = fatal

    def child(self, **context: Any) -> "LoggerProxy":
        """Return a proxy whose context is this context merged with ``context``.

        Keys in ``context`` win over inherited keys. The masking policy is not
        copied; every proxy of a runtime shares the same one.
        """
        return LoggerProxy(self._name, self._process, {**self._context, **context})

    def capture(self, exc: BaseException, attributes: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """Log ``exc`` at ``error`` level with an ``error`` attribute.

        Examples
        --------
        >>> seen = []
        >>> proxy = LoggerProxy("svc", lambda **kw: seen.append(kw) or {"ok": True})
        >>> _ = proxy.capture(ValueError("bad input"), {"job": 7})
        >>> seen[0]["message"], seen[0]["attributes"]["job"], seen[0]["attributes"]["error"]["name"]
        ('Captured error', 7, 'ValueError')
        """
        error: dict[str, Any] = {
            "name": type(exc).__name__,
            "message": str(exc),
            "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        }
        if exc.__cause__ is not None:
            error["cause"] = f"{type(exc.__cause__).__name__}: {exc.__cause__}"
        payload = {**(attributes or {}), "error": error}
        return self._log(LogLevel.ERROR, "Captured error", payload)

    def _log(self, level: LogLevel, message: str, attributes: Optional[Mapping[str, Any]]) -> dict[str, Any]:
        """Delegate to the process use case."""
        return self._process(
            logger_name=self._name,
            level=level,
            message=message,
            context=self._context,
            attributes=dict(attributes or {}),
        )


__all__ = ["LoggerProxy"]
