"""Use cases wiring ports into callables."""

from __future__ import annotations

from .process_record import create_process_record
from .shutdown import create_shutdown

__all__ = ["create_process_record", "create_shutdown"]
