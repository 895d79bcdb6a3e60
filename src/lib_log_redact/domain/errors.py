"""Error types raised by the redaction domain."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a masking policy cannot be built.

    Covers invalid regular expressions, malformed sensitive paths, unknown
    catalog names and malformed policy mappings. Always raised while the
    policy is constructed, never while a record is being masked.
    """


__all__ = ["ConfigurationError"]
