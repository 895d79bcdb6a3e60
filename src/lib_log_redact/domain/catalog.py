"""Named pattern rules for common PII shapes.

Purpose
-------
Provide a read-only registry of prebuilt :class:`PatternRule` objects
(emails, card numbers, Indian national identifiers, tokens, ...) that policies
reference by name.

Contents
--------
* :class:`PatternCatalog` - immutable ``Mapping[str, PatternRule]``.
* :func:`build_default_catalog` - constructs the built-in table.
* :data:`DEFAULT_CATALOG` - shared instance of the built-in table.

System Role
-----------
Pure data. Consumers receive a catalog explicitly (``catalog=`` arguments),
so tests can inject a minimal catalog instead of the built-in one.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .errors import ConfigurationError
from .rules import PatternRule

# name, pattern, replacement, description, extra flags
_DEFAULT_ENTRIES: tuple[tuple[str, str, str, str, int], ...] = (
    (
        "email",
        r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b",
        "***@***.***",
        "Email addresses",
        0,
    ),
    ("creditCard", r"\b(?:\d{4}[-\s]?){3}\d{4}\b", "****-****-****-****", "Credit card numbers", 0),
    ("aadhaar", r"\b\d{4}\s?\d{4}\s?\d{4}\b", "****-****-****", "Aadhaar numbers", 0),
    ("pan", r"\b[A-Z]{5}[0-9]{4}[A-Z]{1}\b", "*****####*", "PAN numbers", 0),
    ("phoneIndia", r"\b(?:\+91[-.\s]?)?[6-9]\d{9}\b", "**********", "Indian phone numbers", 0),
    (
        "phone",
        r"\b(?:\+91[-.\s]?)?[6-9]\d{9}\b|\b(?:\+?1[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})\b",
        "***-***-****",
        "Phone numbers (India and NANP)",
        0,
    ),
    (
        "ipv4",
        r"\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\b",
        "***.***.***.***",
        "IPv4 addresses",
        0,
    ),
    ("apiKey", r"\b[A-Za-z0-9]{20,}\b", "***API_KEY***", "API keys", 0),
    ("jwt", r"\beyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*\b", "***JWT_TOKEN***", "JWT tokens", 0),
    ("password", r"(password|passwd|pwd)\s*[:=]\s*[^\s,}]+", "$1=***REDACTED***", "Password fields", re.IGNORECASE),
    ("bankAccount", r"\b\d{9,18}\b", "****-****-****-****", "Bank account numbers", 0),
    ("ifsc", r"\b[A-Z]{4}0[A-Z0-9]{6}\b", "****0******", "IFSC codes", 0),
    ("upi", r"\b[A-Za-z0-9._-]+@[a-z]+\b", "***@***", "UPI IDs", 0),
    ("vehicleNumber", r"\b[A-Z]{2}\s?\d{2}\s?[A-Z]{1,2}\s?\d{4}\b", "** ** ** ****", "Vehicle registration numbers", 0),
    ("drivingLicense", r"\b[A-Z]{2}\d{2}\d{4}\d{7}\b", "**##****#######", "Driving license numbers", 0),
    ("passport", r"\b[A-Z]{1}\d{7}\b", "*#######", "Passport numbers", 0),
    ("ssn", r"\b\d{3}-\d{2}-\d{4}\b", "***-**-****", "US social security numbers", 0),
)


class PatternCatalog(Mapping[str, PatternRule]):
    """Immutable name → :class:`PatternRule` registry.

    Examples
    --------
    >>> catalog = PatternCatalog({"digits": PatternRule.compile(r"\\d+", "#")})
    >>> catalog["digits"].apply("room 101")
    'room #'
    >>> catalog.select("nope")
    Traceback (most recent call last):
    ...
    lib_log_redact.domain.errors.ConfigurationError: unknown catalog pattern(s): 'nope'
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[str, PatternRule]) -> None:
        self._rules = MappingProxyType(dict(rules))

    def __getitem__(self, name: str) -> PatternRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"PatternCatalog({list(self._rules)!r})"

    def names(self) -> tuple[str, ...]:
        """Return the catalog names in definition order."""
        return tuple(self._rules)

    def select(self, *names: str) -> tuple[PatternRule, ...]:
        """Return the rules for ``names`` in the requested order."""

        missing = [name for name in names if name not in self._rules]
        if missing:
            raise ConfigurationError("unknown catalog pattern(s): " + ", ".join(repr(name) for name in missing))
        return tuple(self._rules[name] for name in names)


def build_default_catalog() -> PatternCatalog:
    """Compile the built-in PII table.

    Every entry is compiled with :data:`re.ASCII` so ``\\d``, ``\\s`` and
    ``\\b`` only match ASCII characters.
    """

    rules = {
        name: PatternRule.compile(source, replacement, flags=re.ASCII | flags, description=description, name=name)
        for name, source, replacement, description, flags in _DEFAULT_ENTRIES
    }
    return PatternCatalog(rules)


DEFAULT_CATALOG = build_default_catalog()


__all__ = ["DEFAULT_CATALOG", "PatternCatalog", "build_default_catalog"]
