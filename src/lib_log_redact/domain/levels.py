"""Log level abstraction shared by records, adapters and the runtime.

Purpose
-------
Offer the six severities carried by :class:`LogRecord` (``trace`` through
``fatal``) together with presentation metadata and conversions to the stdlib
:mod:`logging` constants.

Contents
--------
* :class:`LogLevel` enum with conversion helpers and console icons.
* ``_ICON_TABLE`` constant mapping levels to console glyphs.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels used throughout the system."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name used in serialised records."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        """Return the unicode icon visualizing the level on colored consoles."""

        return _ICON_TABLE[self]

    def to_python_level(self) -> int:
        """Return the closest :mod:`logging` constant for this level.

        Examples
        --------
        >>> LogLevel.WARN.to_python_level() == logging.WARNING
        True
        >>> LogLevel.TRACE.to_python_level()
        5
        """

        return _PYTHON_LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve a case-insensitive level name, accepting stdlib aliases.

        Examples
        --------
        >>> LogLevel.from_name(" warning ") is LogLevel.WARN
        True
        >>> LogLevel.from_name("critical") is LogLevel.FATAL
        True
        """

        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc


_ALIASES = {"WARNING": "WARN", "CRITICAL": "FATAL"}

_PYTHON_LEVELS = {
    LogLevel.TRACE: 5,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
}

_ICON_TABLE = {
    LogLevel.TRACE: "·",
    LogLevel.DEBUG: "🐞",
    LogLevel.INFO: "ℹ",
    LogLevel.WARN: "⚠",
    LogLevel.ERROR: "✖",
    LogLevel.FATAL: "☠",
}
# Console glyphs displayed by the Rich adapter per log level.


__all__ = ["LogLevel"]
