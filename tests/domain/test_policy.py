from __future__ import annotations

import dataclasses
import re

import pytest

from lib_log_redact.domain.catalog import PatternCatalog
from lib_log_redact.domain.errors import ConfigurationError
from lib_log_redact.domain.policy import (
    DEFAULT_MASK_VALUE,
    DEFAULT_MAX_SCAN_CHARS,
    MaskingPolicy,
    resolve_policy,
    split_path,
)
from lib_log_redact.domain.rules import PatternRule


def test_resolve_without_input_yields_defaults() -> None:
    policy = resolve_policy()

    assert policy.sensitive_paths == ()
    assert policy.patterns == ()
    assert policy.mask_value == DEFAULT_MASK_VALUE == "[REDACTED]"
    assert policy.deep_scan is True
    assert policy.partial_masking is False
    assert policy.max_scan_chars == DEFAULT_MAX_SCAN_CHARS
    assert policy.strict is False
    assert policy.is_empty


def test_patterns_concatenate_base_first_then_custom_patterns() -> None:
    base = {"patterns": ["email"]}
    override = {
        "patterns": ["ssn"],
        "custom_patterns": [{"pattern": r"ORD-\d+", "replacement": "ORD-***", "name": "order"}],
    }

    policy = resolve_policy(override, bases=[base])

    assert [rule.name for rule in policy.patterns] == ["email", "ssn", "order"]


def test_paths_concatenate_and_deduplicate_keeping_first_position() -> None:
    policy = resolve_policy({"sensitive_paths": ["token", "password"]}, bases=[{"sensitive_paths": ["password", "user.email"]}])

    assert policy.sensitive_paths == ("password", "user.email", "token")
    assert policy.path_segments == (("password",), ("user", "email"), ("token",))


def test_scalars_come_from_last_layer_that_sets_them() -> None:
    policy = resolve_policy(
        {"mask_value": "###", "deep_scan": None},
        bases=[{"deep_scan": False, "mask_value": "XXX"}],
    )

    assert policy.mask_value == "###"
    assert policy.deep_scan is False


def test_mapping_layer_can_disable_scan_bound() -> None:
    policy = resolve_policy({"max_scan_chars": None}, bases=[{"max_scan_chars": 10}])

    assert policy.max_scan_chars is None


def test_missing_scan_bound_keeps_earlier_value() -> None:
    policy = resolve_policy({"mask_value": "###"}, bases=[{"max_scan_chars": 10}])

    assert policy.max_scan_chars == 10


def test_policy_layer_sets_every_scalar() -> None:
    policy = resolve_policy(MaskingPolicy(max_scan_chars=None), bases=[{"mask_value": "XXX", "max_scan_chars": 10}])

    assert policy.mask_value == DEFAULT_MASK_VALUE
    assert policy.max_scan_chars is None


def test_rule_entries_accept_objects_and_compiled_patterns() -> None:
    prebuilt = PatternRule.compile("a", "b", name="prebuilt")
    compiled = {"pattern": re.compile("c", re.I), "replacement": "d", "name": "compiled"}

    policy = resolve_policy({"patterns": [prebuilt, compiled]})

    assert policy.patterns[0] is prebuilt
    assert policy.patterns[1].apply("C") == "d"


def test_mapping_rules_honour_flags() -> None:
    policy = resolve_policy({"patterns": [{"pattern": "secret", "replacement": "***", "flags": re.IGNORECASE}]})

    assert policy.patterns[0].apply("SECRET") == "***"


def test_injected_catalog_resolves_names() -> None:
    catalog = PatternCatalog({"digits": PatternRule.compile(r"\d", "#", name="digits")})

    policy = resolve_policy({"patterns": ["digits"]}, catalog=catalog)

    assert policy.patterns[0].apply("a1") == "a#"


@pytest.mark.parametrize(
    "layer, message",
    [
        ({"nope": 1}, "unknown policy key"),
        ({"patterns": ["doesNotExist"]}, "unknown catalog pattern"),
        ({"patterns": [{"pattern": "(", "replacement": "x"}]}, "invalid pattern"),
        ({"patterns": [{"pattern": "x"}]}, "need both"),
        ({"patterns": [{"pattern": "x", "replacement": "y", "bogus": 1}]}, "unknown pattern key"),
        ({"patterns": [{"pattern": re.compile("x"), "replacement": "y", "flags": re.I}]}, "precompiled"),
        ({"patterns": [42]}, "unsupported pattern entry"),
        ({"patterns": "email"}, "patterns must be a list"),
        ({"sensitive_paths": "password"}, "sensitive_paths must be a list"),
        ({"sensitive_paths": ["user..email"]}, "empty segment"),
        ({"sensitive_paths": [""]}, "must not be empty"),
        ({"sensitive_paths": [3]}, "must be a string"),
        ({"mask_value": 5}, "mask_value must be a string"),
        ({"deep_scan": "yes"}, "deep_scan must be a boolean"),
        ({"max_scan_chars": 0}, "max_scan_chars"),
        ({"max_scan_chars": True}, "max_scan_chars"),
    ],
)
def test_invalid_configuration_is_rejected(layer: dict, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        resolve_policy(layer)


def test_non_mapping_layer_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="policy layer"):
        resolve_policy(["password"])  # type: ignore[arg-type]


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        resolve_policy({"sensitive_paths": ["."]})


def test_policy_is_immutable() -> None:
    policy = MaskingPolicy(sensitive_paths=("password",))

    with pytest.raises(dataclasses.FrozenInstanceError):
        policy.mask_value = "x"  # type: ignore[misc]


def test_policy_rejects_raw_strings_as_patterns() -> None:
    with pytest.raises(ConfigurationError, match="PatternRule"):
        MaskingPolicy(patterns=("email",))  # type: ignore[arg-type]


def test_split_path_handles_single_segment() -> None:
    assert split_path("password") == ("password",)
