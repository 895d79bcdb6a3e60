"""Shutdown orchestration for the logging pipeline.

Purpose
-------
Provide a unified shutdown routine that flushes every buffered transport. A
failing transport does not stop the others from being flushed.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence

from lib_log_redact.application.ports import TransportPort

logger = logging.getLogger(__name__)


def create_shutdown(transports: Sequence[TransportPort]) -> Callable[[], Awaitable[None]]:
    """Return an async callable performing the shutdown sequence.

    Examples
    --------
    >>> import asyncio
    >>> class Transport:
    ...     flushed = False
    ...     def emit(self, record):
    ...         pass
    ...     async def flush(self):
    ...         self.flushed = True
    >>> transport = Transport()
    >>> asyncio.run(create_shutdown([transport])())
    >>> transport.flushed
    True
    """

    pending = tuple(transports)

    async def shutdown() -> None:
        """Flush transports in registration order; re-raise the first failure."""
        first_error: Exception | None = None
        for transport in pending:
            try:
                await transport.flush()
            except Exception as exc:  # noqa: BLE001
                logger.warning("Transport %s failed to flush", type(transport).__name__, exc_info=True)
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    return shutdown


__all__ = ["create_shutdown"]
