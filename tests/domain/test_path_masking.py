from __future__ import annotations

from lib_log_redact.domain.anomalies import PATH_BLOCKED
from lib_log_redact.domain.path_masking import mask_paths


def test_top_level_and_nested_paths_are_replaced() -> None:
    attrs = {"password": "hunter2", "user": {"email": "a@b.com", "name": "X"}}

    masked = mask_paths(attrs, ["password", "user.email"], "[REDACTED]")

    assert masked == {"password": "[REDACTED]", "user": {"email": "[REDACTED]", "name": "X"}}
    assert attrs["password"] == "hunter2"
    assert attrs["user"]["email"] == "a@b.com"


def test_whole_value_is_replaced_regardless_of_type() -> None:
    attrs = {"card": {"number": "4111", "cvv": 123}, "pin": 1234, "tags": ["a"], "gone": None}

    masked = mask_paths(attrs, ["card", "pin", "tags", "gone"], "***")

    assert masked == {"card": "***", "pin": "***", "tags": "***", "gone": "***"}


def test_missing_path_is_a_silent_no_op() -> None:
    hits: list[tuple[str, dict]] = []
    attrs = {"user": {"name": "X"}}

    masked = mask_paths(attrs, ["user.email", "nothing.here"], "***", on_anomaly=lambda kind, info: hits.append((kind, info)))

    assert masked is attrs
    assert hits == []


def test_non_map_intermediate_blocks_the_path() -> None:
    hits: list[tuple[str, dict]] = []
    attrs = {"a": 1, "users": [{"email": "a@b.com"}]}

    masked = mask_paths(attrs, ["a.b.c", "users.email"], "***", on_anomaly=lambda kind, info: hits.append((kind, info)))

    assert masked is attrs
    assert [kind for kind, _ in hits] == [PATH_BLOCKED, PATH_BLOCKED]
    assert hits[0][1] == {"path": "a.b.c", "segment": "a", "found": "int"}
    assert hits[1][1]["found"] == "list"


def test_paths_do_not_create_keys_and_keep_order() -> None:
    attrs = {"z": 1, "secret": "s", "a": 2}

    masked = mask_paths(attrs, ["secret", "missing"], "***")

    assert list(masked) == ["z", "secret", "a"]
    assert "missing" not in masked


def test_sibling_subtrees_are_shared() -> None:
    sibling = {"keep": ["x"]}
    attrs = {"user": {"email": "a@b.com"}, "other": sibling}

    masked = mask_paths(attrs, ["user.email"], "***")

    assert masked["other"] is sibling


def test_pre_split_segments_are_accepted() -> None:
    masked = mask_paths({"a.b": "dotted", "a": {"b": "nested"}}, [("a.b",)], "***")

    assert masked == {"a.b": "***", "a": {"b": "nested"}}


def test_same_path_twice_yields_mask_value() -> None:
    masked = mask_paths({"k": "v"}, ["k", "k"], "***")

    assert masked == {"k": "***"}
