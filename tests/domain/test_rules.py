from __future__ import annotations

import re

import pytest

from lib_log_redact.domain.errors import ConfigurationError
from lib_log_redact.domain.rules import PatternRule, parse_template


@pytest.mark.parametrize(
    "pattern, template, text, expected",
    [
        (r"(\w+)@(\w+)\.com", "$1 at $2", "mail bob@corp.com now", "mail bob at corp now"),
        (r"(?P<user>\w+)@\w+\.com", "$<user>@***", "bob@corp.com", "bob@***"),
        (r"\d+", "[$&]", "room 101", "room [101]"),
        (r"\d+", "$$", "cost 5", "cost $"),
        (r"b", "<$`|$'>", "abc", "a<a|c>c"),
        (r"(a)", "$2", "a", "$2"),
        (r"(a)", "$<missing>", "a", "$<missing>"),
        (r"(a)|(b)", "[$2]", "a", "[]"),
        (r"(a)", "$10", "a", "a0"),
    ],
)
def test_replacement_template_expansion(pattern: str, template: str, text: str, expected: str) -> None:
    assert PatternRule.compile(pattern, template).apply(text) == expected


def test_replacement_without_references_is_literal() -> None:
    rule = PatternRule.compile(r"\d", "\\g<0>")

    assert rule.apply("a1") == "a\\g<0>"


def test_two_digit_reference_prefers_existing_group() -> None:
    source = "".join(f"({chr(ord('a') + index)})" for index in range(10))
    rule = PatternRule.compile(source, "$10")

    assert rule.apply("abcdefghij") == "j"


def test_rule_replaces_all_non_overlapping_matches() -> None:
    rule = PatternRule.compile(r"aa", "X")

    assert rule.apply("aaaaa") == "XXa"


def test_empty_replacement_deletes_matches() -> None:
    assert PatternRule.compile(r"\s+", "").apply("a b  c") == "abc"


def test_parse_template_splits_literals_and_references() -> None:
    parts = parse_template("pre $1 mid $& post", re.compile(r"(x)"))

    assert parts == ("pre ", ("group", 1), " mid ", ("match", 0), " post")


def test_invalid_regex_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="invalid pattern 'broken'"):
        PatternRule.compile("(unclosed", "x", name="broken")


def test_non_string_replacement_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="replacement must be a string"):
        PatternRule(pattern=re.compile("x"), replacement=None)  # type: ignore[arg-type]


def test_bytes_pattern_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="compiled text regex"):
        PatternRule(pattern=re.compile(b"x"), replacement="y")  # type: ignore[arg-type]
