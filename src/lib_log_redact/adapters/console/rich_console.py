"""Rich-powered console backend implementing :class:`BackendPort`.

Purpose
-------
Render masked records for humans with per-level Rich styles.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleAdapter` - adapter constructed by :func:`lib_log_redact.init`.

System Role
-----------
Primary human-facing sink; honours runtime overrides and environment variables
for colour control.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping

from rich.console import Console

from lib_log_redact.application.ports.structures import BackendPort
from lib_log_redact.domain.levels import LogLevel
from lib_log_redact.domain.records import LogRecord


#: Default Rich styles keyed by :class:`LogLevel` severity.
_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.TRACE: "dim italic",
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.FATAL: "bold red",
}


class RichConsoleAdapter(BackendPort):
    """Render log records using Rich formatting with style overrides."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[LogLevel | str, str] | None = None,
    ) -> None:
        """Configure the console adapter with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(stderr=True, force_terminal=force_color or None, no_color=no_color)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    def emit(self, record: LogRecord) -> None:
        """Print ``record`` using Rich.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> record = LogRecord(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'msg', 'svc')
        >>> console = Console(file=StringIO(), record=True)
        >>> adapter = RichConsoleAdapter(console=console)
        >>> adapter.emit(record)
        >>> 'msg' in console.export_text()
        True
        """
        style = "" if self._no_color else self._style_map.get(record.level, "")
        self._console.print(self._format_line(record), style=style, highlight=False, markup=False)

    @staticmethod
    def _format_line(record: LogRecord) -> str:
        """Return a human-friendly console line for ``record``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> record = LogRecord(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.WARN, 'disk low', 'svc',
        ...                    context={'service': 'api'}, attributes={'free': 3})
        >>> RichConsoleAdapter._format_line(record)
        '2025-09-30T12:00:00+00:00 ⚠     WARN svc: disk low service=api free=3'
        """
        fields: dict[str, Any] = {**record.context, **record.attributes}
        suffix = "" if not fields else " " + " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{record.timestamp.isoformat()} {record.level.icon} {record.level.severity.upper():>8} {record.logger_name}: {record.message}{suffix}"


__all__ = ["RichConsoleAdapter"]
