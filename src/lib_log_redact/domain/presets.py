"""Ready-made masking policies for development and production loggers.

``default`` masks credentials and contact details; ``production`` adds
government identifiers, network and banking data. Both are plain base layers
for :func:`resolve_policy`, so callers can append paths and patterns on top.
"""

from __future__ import annotations

from typing import Callable

from .catalog import DEFAULT_CATALOG, PatternCatalog
from .errors import ConfigurationError
from .policy import MaskingPolicy, resolve_policy

DEFAULT_SENSITIVE_PATHS: tuple[str, ...] = (
    "password",
    "token",
    "secret",
    "key",
    "ssn",
    "creditCard",
    "cardNumber",
    "cvv",
    "email",
    "phone",
    "address",
)

DEFAULT_PATTERN_NAMES: tuple[str, ...] = ("email", "creditCard", "aadhaar", "pan", "phoneIndia", "password")

PRODUCTION_SENSITIVE_PATHS: tuple[str, ...] = (
    "password",
    "token",
    "secret",
    "key",
    "aadhaar",
    "pan",
    "creditCard",
    "cardNumber",
    "cvv",
    "email",
    "phone",
    "address",
    "firstName",
    "lastName",
    "dateOfBirth",
    "ip",
    "userAgent",
    "bankAccount",
    "ifsc",
    "upi",
    "vehicleNumber",
    "drivingLicense",
    "passport",
)

PRODUCTION_PATTERN_NAMES: tuple[str, ...] = (
    "email",
    "creditCard",
    "aadhaar",
    "pan",
    "phoneIndia",
    "password",
    "ipv4",
    "apiKey",
    "jwt",
    "bankAccount",
    "ifsc",
    "upi",
    "vehicleNumber",
    "drivingLicense",
    "passport",
)


def default_policy(catalog: PatternCatalog | None = None) -> MaskingPolicy:
    """Return the development preset."""

    return resolve_policy(
        {"sensitive_paths": DEFAULT_SENSITIVE_PATHS, "patterns": DEFAULT_PATTERN_NAMES, "deep_scan": True},
        catalog=catalog,
    )


def production_policy(catalog: PatternCatalog | None = None) -> MaskingPolicy:
    """Return the production preset (``partial_masking`` enabled)."""

    return resolve_policy(
        {
            "sensitive_paths": PRODUCTION_SENSITIVE_PATHS,
            "patterns": PRODUCTION_PATTERN_NAMES,
            "deep_scan": True,
            "partial_masking": True,
        },
        catalog=catalog,
    )


def _no_policy(catalog: PatternCatalog | None = None) -> MaskingPolicy:
    return MaskingPolicy()


PRESETS: dict[str, Callable[..., MaskingPolicy]] = {
    "default": default_policy,
    "production": production_policy,
    "none": _no_policy,
}


def preset_policy(name: str, catalog: PatternCatalog | None = None) -> MaskingPolicy:
    """Return the preset registered under ``name`` (case-insensitive).

    Examples
    --------
    >>> preset_policy("production").partial_masking
    True
    >>> preset_policy("none").is_empty
    True
    """

    key = name.strip().lower()
    try:
        factory = PRESETS[key]
    except KeyError as exc:
        raise ConfigurationError(f"unknown masking preset {name!r}; expected one of {', '.join(PRESETS)}") from exc
    return factory(catalog if catalog is not None else DEFAULT_CATALOG)


__all__ = [
    "DEFAULT_PATTERN_NAMES",
    "DEFAULT_SENSITIVE_PATHS",
    "PRESETS",
    "PRODUCTION_PATTERN_NAMES",
    "PRODUCTION_SENSITIVE_PATHS",
    "default_policy",
    "preset_policy",
    "production_policy",
]
