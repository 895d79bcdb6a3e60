"""Structured (machine-readable) backends."""

from __future__ import annotations

from .jsonl import JsonLinesAdapter

__all__ = ["JsonLinesAdapter"]
