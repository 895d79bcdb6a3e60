from __future__ import annotations

import pytest

from lib_log_redact import runtime
from lib_log_redact.domain import LogLevel
from lib_log_redact.runtime import RuntimeConfig


@pytest.fixture(autouse=True)
def _reset(runtime_reset) -> None:
    return None


def test_environment_overrides_identity_and_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_SERVICE", "env-svc")
    monkeypatch.setenv("LOG_ENVIRONMENT", "staging")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    runtime.init(RuntimeConfig(service="arg-svc", environment="dev", console_enabled=False))
    snapshot = runtime.inspect_runtime()

    assert snapshot.service == "env-svc"
    assert snapshot.environment == "staging"
    assert snapshot.level is LogLevel.WARN


def test_environment_extends_masking_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_MASK_PRESET", "none")
    monkeypatch.setenv("LOG_SENSITIVE_PATHS", "user.email, session")
    monkeypatch.setenv("LOG_MASK_PATTERNS", "ssn")
    monkeypatch.setenv("LOG_MASK_VALUE", "<gone>")
    monkeypatch.setenv("LOG_MASK_DEEP_SCAN", "false")
    monkeypatch.setenv("LOG_MASK_STRICT", "yes")
    monkeypatch.setenv("LOG_MASK_MAX_SCAN_CHARS", "1024")

    runtime.init(RuntimeConfig(console_enabled=False, policy={"sensitive_paths": ["token"]}))
    policy = runtime.inspect_runtime().policy

    assert policy.sensitive_paths == ("token", "user.email", "session")
    assert [rule.name for rule in policy.patterns] == ["ssn"]
    assert policy.mask_value == "<gone>"
    assert policy.deep_scan is False
    assert policy.strict is True
    assert policy.max_scan_chars == 1024


@pytest.mark.parametrize("value", ["none", "Unlimited"])
def test_environment_can_disable_scan_bound(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("LOG_MASK_MAX_SCAN_CHARS", value)

    runtime.init(RuntimeConfig(console_enabled=False, policy={"max_scan_chars": 10}))

    assert runtime.inspect_runtime().policy.max_scan_chars is None


def test_console_can_be_disabled_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_CONSOLE_ENABLED", "0")

    runtime.init(RuntimeConfig())

    assert runtime.inspect_runtime().backends == ()


def test_json_console_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_CONSOLE_FORMAT", "json")

    runtime.init(RuntimeConfig())

    assert runtime.inspect_runtime().backends == ("JsonLinesAdapter",)
