"""Protocols separating the application layer from concrete adapters."""

from __future__ import annotations

from .scrubber import ScrubberPort
from .structures import BackendPort
from .time import ClockPort
from .transport import TransportPort

__all__ = ["BackendPort", "ClockPort", "ScrubberPort", "TransportPort"]
