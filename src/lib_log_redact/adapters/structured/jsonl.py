"""JSON-lines backend writing one masked record per line.

Purpose
-------
Give machines (log shippers, tests, the CLI) a stable serialisation of masked
records: ``LogRecord.to_json`` output followed by a newline.
"""

from __future__ import annotations

import sys
import threading
from typing import TextIO

from lib_log_redact.application.ports.structures import BackendPort
from lib_log_redact.domain.records import LogRecord


class JsonLinesAdapter(BackendPort):
    """Write records as JSON lines to ``stream`` (``sys.stdout`` by default).

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from io import StringIO
    >>> from lib_log_redact.domain.levels import LogLevel
    >>> buffer = StringIO()
    >>> adapter = JsonLinesAdapter(stream=buffer)
    >>> adapter.emit(LogRecord(datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.INFO, 'hi', 'svc'))
    >>> buffer.getvalue().endswith('"attributes": {}}\\n')
    True
    """

    def __init__(self, *, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def emit(self, record: LogRecord) -> None:
        """Serialise ``record`` and write it as one line."""
        line = record.to_json() + "\n"
        stream = self._stream if self._stream is not None else sys.stdout
        with self._lock:
            stream.write(line)
            stream.flush()


__all__ = ["JsonLinesAdapter"]
