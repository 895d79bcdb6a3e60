from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from datetime import datetime, timezone
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from lib_log_redact.domain.levels import LogLevel
from lib_log_redact.domain.records import LogRecord

FIXED_TS = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)

_LOG_ENV_VARS = (
    "LOG_LEVEL",
    "LOG_SERVICE",
    "LOG_ENVIRONMENT",
    "LOG_MASK_PRESET",
    "LOG_MASK_VALUE",
    "LOG_MASK_DEEP_SCAN",
    "LOG_MASK_STRICT",
    "LOG_SENSITIVE_PATHS",
    "LOG_MASK_PATTERNS",
    "LOG_MASK_MAX_SCAN_CHARS",
    "LOG_CONSOLE_ENABLED",
    "LOG_CONSOLE_FORMAT",
    "LOG_FORCE_COLOR",
    "LOG_NO_COLOR",
    "LOG_USE_DOTENV",
)


@pytest.fixture(autouse=True)
def _clean_log_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _LOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=200)


@pytest.fixture
def make_record() -> Callable[..., LogRecord]:
    def factory(
        message: str = "hello",
        *,
        context: Mapping[str, Any] | None = None,
        attributes: Mapping[str, Any] | None = None,
        level: LogLevel = LogLevel.INFO,
        logger_name: str = "tests",
    ) -> LogRecord:
        return LogRecord(
            timestamp=FIXED_TS,
            level=level,
            message=message,
            logger_name=logger_name,
            context=context or {},
            attributes=attributes or {},
        )

    return factory


@pytest.fixture
def runtime_reset() -> Iterator[None]:
    from lib_log_redact import runtime

    try:
        yield
    finally:
        if runtime.is_initialised():
            runtime.shutdown()
