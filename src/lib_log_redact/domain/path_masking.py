"""Exact dotted-path masking over keyed maps.

A sensitive path such as ``user.email`` names one field; when the field
exists its entire value (whatever its type) is replaced by the mask value.
Paths never descend into lists and never create keys. Only the maps along the
touched spine are copied; sibling subtrees are shared with the input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .anomalies import PATH_BLOCKED, AnomalyHook, report
from .policy import split_path


def mask_paths(
    mapping: Mapping[str, Any],
    paths: Iterable[str | Sequence[str]],
    mask_value: str,
    *,
    on_anomaly: AnomalyHook | None = None,
) -> Mapping[str, Any]:
    """Return ``mapping`` with the field at every path replaced by ``mask_value``.

    ``paths`` holds dotted strings or pre-split segment tuples. An unmatched
    path is a silent no-op. A path whose intermediate segment holds a
    non-map value (a list included) is skipped and reported as
    ``mask_path_blocked``. ``mapping`` itself is never mutated and is returned
    unchanged when no path matched.

    Examples
    --------
    >>> attrs = {"user": {"email": "a@b.com", "name": "X"}, "tags": ["t"]}
    >>> masked = mask_paths(attrs, ["user.email", "a.b.c"], "[REDACTED]")
    >>> masked
    {'user': {'email': '[REDACTED]', 'name': 'X'}, 'tags': ['t']}
    >>> masked["tags"] is attrs["tags"], attrs["user"]["email"]
    (True, 'a@b.com')
    """

    result = mapping
    for path in paths:
        segments = split_path(path) if isinstance(path, str) else tuple(path)
        result = _mask_path(result, segments, mask_value, segments, on_anomaly)
    return result


def _mask_path(
    node: Mapping[str, Any],
    segments: Sequence[str],
    mask_value: str,
    full_path: Sequence[str],
    on_anomaly: AnomalyHook | None,
) -> Mapping[str, Any]:
    head, rest = segments[0], segments[1:]
    if head not in node:
        return node
    if not rest:
        copy = dict(node)
        copy[head] = mask_value
        return copy
    child = node[head]
    if not isinstance(child, Mapping):
        report(
            on_anomaly,
            PATH_BLOCKED,
            path=".".join(full_path),
            segment=head,
            found=type(child).__name__,
        )
        return node
    masked_child = _mask_path(child, rest, mask_value, full_path, on_anomaly)
    if masked_child is child:
        return node
    copy = dict(node)
    copy[head] = masked_child
    return copy


__all__ = ["mask_paths"]
