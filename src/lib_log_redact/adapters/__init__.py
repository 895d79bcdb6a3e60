"""Concrete adapters implementing the application ports."""

from __future__ import annotations

from .console import RichConsoleAdapter
from .scrubber import RedactionScrubber
from .structured import JsonLinesAdapter

__all__ = ["JsonLinesAdapter", "RedactionScrubber", "RichConsoleAdapter"]
