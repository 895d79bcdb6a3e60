"""Static package metadata surfaced to the CLI banner and documentation.

Keep the values in sync with ``pyproject.toml``; :func:`print_info` renders
them for ``lib_log_redact info`` and :func:`lib_log_redact.summary_info`.
"""

from __future__ import annotations

from typing import Callable

name = "lib_log_redact"
title = "Redaction engine for structured log records"
version = "0.1.0"
author = "bitranox"
shell_command = "lib_log_redact"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Render the metadata banner through ``writer`` (defaults to ``print``).

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0].startswith("Info for lib_log_redact:")
    True
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)


__all__ = ["author", "name", "print_info", "shell_command", "title", "version"]
