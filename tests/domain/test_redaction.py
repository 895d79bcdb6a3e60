"""Behaviour of the full redaction pipeline on log records."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from lib_log_redact.domain.anomalies import PATH_BLOCKED
from lib_log_redact.domain.catalog import DEFAULT_CATALOG
from lib_log_redact.domain.policy import MaskingPolicy, resolve_policy
from lib_log_redact.domain.redaction import mask_record
from lib_log_redact.domain.rules import PatternRule


def test_card_number_in_message_is_masked(make_record) -> None:
    policy = MaskingPolicy(patterns=DEFAULT_CATALOG.select("creditCard"))

    masked = mask_record(make_record("card 4111-1111-1111-1111"), policy)

    assert masked.message == "card ****-****-****-****"


def test_path_mask_wins_over_earlier_pattern_rewrite(make_record) -> None:
    record = make_record("ok", attributes={"user": {"aadhaar": "1234 5678 9012", "name": "X"}})
    policy = MaskingPolicy(sensitive_paths=("user.aadhaar",), patterns=DEFAULT_CATALOG.select("aadhaar"))

    masked = mask_record(record, policy)

    assert masked.attributes == {"user": {"aadhaar": "[REDACTED]", "name": "X"}}


def test_pattern_only_field_keeps_pattern_output(make_record) -> None:
    record = make_record("ok", attributes={"note": "id 1234 5678 9012"})
    policy = MaskingPolicy(patterns=DEFAULT_CATALOG.select("aadhaar"))

    assert mask_record(record, policy).attributes == {"note": "id ****-****-****"}


@pytest.mark.parametrize(
    "deep_scan, expected_nested",
    [
        (True, "***@***.***"),
        (False, "a@b.com"),
    ],
)
def test_deep_scan_toggle(make_record, deep_scan: bool, expected_nested: str) -> None:
    record = make_record("ok", attributes={"top": "a@b.com", "nested": {"email": "a@b.com"}})
    policy = MaskingPolicy(patterns=DEFAULT_CATALOG.select("email"), deep_scan=deep_scan)

    masked = mask_record(record, policy)

    assert masked.attributes["top"] == "***@***.***"
    assert masked.attributes["nested"]["email"] == expected_nested


def test_maps_inside_a_list_are_masked_in_place(make_record) -> None:
    record = make_record("ok", attributes={"users": [{"email": "u1@x.com"}, {"email": "u2@x.com"}]})
    policy = MaskingPolicy(patterns=DEFAULT_CATALOG.select("email"), deep_scan=True)

    masked = mask_record(record, policy)

    assert masked.attributes == {"users": [{"email": "***@***.***"}, {"email": "***@***.***"}]}
    assert record.attributes["users"][0] == {"email": "u1@x.com"}


@pytest.mark.parametrize(
    "deep_scan, expected_item",
    [
        (True, {"email": "***@***.***"}),
        (False, {"email": "a@b.com"}),
    ],
)
def test_deep_scan_toggle_on_maps_inside_a_list(make_record, deep_scan: bool, expected_item: dict) -> None:
    record = make_record("ok", attributes={"list": [{"email": "a@b.com"}]})
    policy = MaskingPolicy(patterns=DEFAULT_CATALOG.select("email"), deep_scan=deep_scan)

    masked = mask_record(record, policy)

    assert masked.attributes == {"list": [expected_item]}


def test_unreachable_path_leaves_record_untouched(make_record) -> None:
    hits: list[tuple[str, dict]] = []
    record = make_record("ok", attributes={"a": 1})
    policy = MaskingPolicy(sensitive_paths=("a.b.c",))

    masked = mask_record(record, policy, on_anomaly=lambda kind, info: hits.append((kind, info)))

    assert masked is record
    assert masked.attributes == {"a": 1}
    assert [kind for kind, _ in hits] == [PATH_BLOCKED]


def test_empty_policy_returns_the_same_record(make_record) -> None:
    record = make_record("card 4111-1111-1111-1111", attributes={"password": "x"})

    assert mask_record(record, MaskingPolicy()) is record


def test_paths_apply_to_context_and_attributes_but_not_message(make_record) -> None:
    record = make_record("password", context={"token": "ctx-token"}, attributes={"password": "hunter2"})
    policy = MaskingPolicy(sensitive_paths=("password", "token"), mask_value="###")

    masked = mask_record(record, policy)

    assert masked.message == "password"
    assert masked.context == {"token": "###"}
    assert masked.attributes == {"password": "###"}


def test_input_record_is_never_mutated(make_record) -> None:
    attributes = {"user": {"email": "a@b.com"}, "items": ["a@b.com"]}
    record = make_record("mail a@b.com", attributes=attributes)
    policy = MaskingPolicy(sensitive_paths=("user.email",), patterns=DEFAULT_CATALOG.select("email"))

    mask_record(record, policy)

    assert record.message == "mail a@b.com"
    assert record.attributes == {"user": {"email": "a@b.com"}, "items": ["a@b.com"]}


def test_masking_preserves_key_sets_and_non_string_leaves(make_record) -> None:
    record = make_record(
        "ok",
        attributes={"count": 3, "ratio": 0.5, "flag": True, "none": None, "list": ["a@b.com", 1]},
    )
    policy = MaskingPolicy(patterns=DEFAULT_CATALOG.select("email"))

    masked = mask_record(record, policy)

    assert list(masked.attributes) == ["count", "ratio", "flag", "none", "list"]
    assert masked.attributes["list"] == ["***@***.***", 1]
    assert masked.attributes["count"] == 3
    assert masked.attributes["flag"] is True


def test_pattern_order_changes_the_outcome(make_record) -> None:
    first = PatternRule.compile("secret", "token")
    second = PatternRule.compile("token", "***")

    forward = mask_record(make_record("secret"), MaskingPolicy(patterns=(first, second)))
    backward = mask_record(make_record("secret"), MaskingPolicy(patterns=(second, first)))

    assert forward.message == "***"
    assert backward.message == "token"


def test_masking_is_not_guaranteed_idempotent(make_record) -> None:
    growing = PatternRule.compile(r"\d+", "$&0")
    policy = MaskingPolicy(patterns=(growing,))

    once = mask_record(make_record("n=7"), policy)
    twice = mask_record(once, policy)

    assert once.message == "n=70"
    assert twice.message == "n=700"


def test_shared_policy_is_safe_across_threads(make_record) -> None:
    policy = resolve_policy({"sensitive_paths": ["user.email"], "patterns": ["email", "creditCard"]})
    records = [
        make_record(f"user{index}@example.com paid with 4111 1111 1111 1111", attributes={"user": {"email": "x@y.io"}})
        for index in range(200)
    ]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda record: mask_record(record, policy), records))

    assert {result.message for result in results} == {"***@***.*** paid with ****-****-****-****"}
    assert all(result.attributes == {"user": {"email": "[REDACTED]"}} for result in results)
