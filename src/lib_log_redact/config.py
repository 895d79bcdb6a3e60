"""Optional ``.env`` loading for hosts and the CLI.

Purpose
-------
Let operators keep ``LOG_*`` settings in a ``.env`` file next to a project
instead of exporting them in every shell. Loading is opt-in: the CLI flag
``--use-dotenv`` or the ``LOG_USE_DOTENV`` environment variable enables it.

Contents
--------
* :func:`enable_dotenv` - load the nearest ``.env`` once per process.
* :func:`should_use_dotenv` - decide between the CLI flag and the toggle.
* :data:`DOTENV_ENV_VAR` - name of the toggle variable.

System Role
-----------
Runs before :func:`lib_log_redact.init` reads its environment overrides.
Existing environment variables always win over ``.env`` entries.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_USE_DOTENV"

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_LOCK = threading.Lock()
_LOADED: Path | None = None


def should_use_dotenv(explicit: bool | None, env_value: str | None) -> bool:
    """Return whether ``.env`` loading should happen.

    An explicit CLI choice wins; otherwise the toggle variable decides.

    Examples
    --------
    >>> should_use_dotenv(None, "1"), should_use_dotenv(False, "1"), should_use_dotenv(None, None)
    (True, False, False)
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking upwards from ``search_from``.

    ``search_from`` defaults to the current working directory. Variables that
    are already set are not overridden. Subsequent calls return the file
    loaded first without reading it again.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _LOADED
    with _LOCK:
        if _LOADED is not None:
            return _LOADED
        candidate = _find_dotenv(search_from)
        if candidate is None:
            logger.debug("No .env file found")
            return None
        load_dotenv(candidate, override=False)
        logger.debug("Loaded environment from %s", candidate)
        _LOADED = candidate
        return candidate


def _find_dotenv(search_from: Path | None) -> Path | None:
    start = (search_from or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED
    with _LOCK:
        _LOADED = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
