"""Pattern rules and their ``$``-style replacement templates.

Purpose
-------
Represent a single compiled find-and-replace rule. Replacement templates use
the ``$1`` / ``$<name>`` / ``$&`` syntax of the configuration surface rather
than Python's backslash syntax, so a template copied from a policy file
behaves the same everywhere.

Contents
--------
* :class:`PatternRule` - compiled pattern plus parsed replacement template.
* :func:`parse_template` - split a template into literal and reference parts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Pattern, Union

from .errors import ConfigurationError

_TOKEN = re.compile(r"\$(?:(\$)|(&)|(`)|(')|(\d{1,2})|<([^>]*)>)")

#: Parsed template part: a literal string, or a ``(kind, ref)`` reference where
#: kind is one of ``"group"``, ``"match"``, ``"before"``, ``"after"``.
TemplatePart = Union[str, tuple[str, Union[int, str]]]


def parse_template(template: str, pattern: Pattern[str]) -> tuple[TemplatePart, ...]:
    """Split ``template`` into literal text and references valid for ``pattern``.

    References to groups ``pattern`` does not define stay literal. For two
    digit references the two-digit group wins when it exists, otherwise the
    first digit is the reference and the second digit is literal text.

    Examples
    --------
    >>> parse_template("$1=***", re.compile(r"(pwd)=\\S+"))
    (('group', 1), '=***')
    >>> parse_template("$2 costs $$5", re.compile(r"(a)"))
    ('$2 costs $5',)
    """

    parts: list[TemplatePart] = []
    literal: list[str] = []
    position = 0

    def flush() -> None:
        if literal:
            parts.append("".join(literal))
            literal.clear()

    for token in _TOKEN.finditer(template):
        literal.append(template[position : token.start()])
        position = token.end()
        dollar, amp, before, after, digits, name = token.groups()
        reference: TemplatePart | None = None
        trailing = ""
        if dollar:
            literal.append("$")
            continue
        if amp:
            reference = ("match", 0)
        elif before:
            reference = ("before", 0)
        elif after:
            reference = ("after", 0)
        elif digits:
            number = int(digits)
            if len(digits) == 2 and not 1 <= number <= pattern.groups:
                number, trailing = int(digits[0]), digits[1]
            if 1 <= number <= pattern.groups:
                reference = ("group", number)
        elif name is not None and name in pattern.groupindex:
            reference = ("group", name)
        if reference is None:
            literal.append(token.group(0))
            continue
        flush()
        parts.append(reference)
        literal.append(trailing)
    literal.append(template[position:])
    flush()
    return tuple(part for part in parts if part != "")


@dataclass(slots=True, frozen=True)
class PatternRule:
    """Regex find-and-replace rule applied to string content.

    Attributes
    ----------
    pattern:
        Compiled regular expression; every non-overlapping match is replaced.
    replacement:
        ``$``-style template (see :func:`parse_template`).
    description:
        Free-text description shown by the CLI catalog listing.
    name:
        Catalog name when the rule came from a :class:`PatternCatalog`.

    Examples
    --------
    >>> rule = PatternRule.compile(r"(password|pwd)\\s*[:=]\\s*\\S+", "$1=***", flags=re.I)
    >>> rule.apply("login PWD: hunter2 ok")
    'login PWD=*** ok'
    """

    pattern: Pattern[str]
    replacement: str
    description: str = ""
    name: str | None = None
    _parts: tuple[TemplatePart, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, re.Pattern) or not isinstance(self.pattern.pattern, str):
            raise ConfigurationError(f"pattern must be a compiled text regex, got {type(self.pattern).__name__}")
        if not isinstance(self.replacement, str):
            raise ConfigurationError("replacement must be a string")
        object.__setattr__(self, "_parts", parse_template(self.replacement, self.pattern))

    @classmethod
    def compile(
        cls,
        source: str,
        replacement: str,
        *,
        flags: int = 0,
        description: str = "",
        name: str | None = None,
    ) -> "PatternRule":
        """Compile ``source`` into a rule, raising :class:`ConfigurationError` on failure."""

        try:
            pattern = re.compile(source, flags)
        except (re.error, TypeError) as exc:
            label = f" {name!r}" if name else ""
            raise ConfigurationError(f"invalid pattern{label} {source!r}: {exc}") from exc
        return cls(pattern=pattern, replacement=replacement, description=description, name=name)

    def apply(self, text: str) -> str:
        """Replace every match in ``text`` and return the result."""

        if len(self._parts) == 1 and isinstance(self._parts[0], str):
            literal = self._parts[0]
            return self.pattern.sub(lambda _match: literal, text)
        if not self._parts:
            return self.pattern.sub("", text)
        return self.pattern.sub(self._expand, text)

    def _expand(self, match: re.Match[str]) -> str:
        pieces: list[str] = []
        for part in self._parts:
            if isinstance(part, str):
                pieces.append(part)
                continue
            kind, ref = part
            if kind == "group":
                pieces.append(match.group(ref) or "")
            elif kind == "match":
                pieces.append(match.group(0))
            elif kind == "before":
                pieces.append(match.string[: match.start()])
            else:
                pieces.append(match.string[match.end() :])
        return "".join(pieces)


__all__ = ["PatternRule", "TemplatePart", "parse_template"]
