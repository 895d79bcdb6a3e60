"""Generic traversal over the nested values carried by log records.

Purpose
-------
Context and attribute payloads are arbitrarily nested JSON-like data. This
module walks them with an exhaustive dispatch over a closed set of shapes and
rebuilds only the containers whose children actually changed.

Contents
--------
* :data:`Value` - type alias naming the supported shapes.
* :func:`transform` - copy-on-write traversal applying a visitor to every
  string leaf.
* :data:`MAX_DEPTH` - default depth guard.

System Role
-----------
Shared by the pattern masker (deep scan). The walker never mutates its input
and never raises on unknown shapes; it treats them as opaque leaves.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Union

Value = Union[None, bool, int, float, str, list["Value"], tuple["Value", ...], Mapping[str, "Value"]]

MAX_DEPTH = 64

Visitor = Callable[[str], str]
LimitHook = Callable[[int], None]


def transform(
    value: Any,
    visit: Visitor,
    *,
    max_depth: int = MAX_DEPTH,
    on_limit: LimitHook | None = None,
) -> Any:
    """Return ``value`` with every string leaf replaced by ``visit(leaf)``.

    Dispatch is by shape:

    * ``str`` - passed to ``visit``.
    * ``list``/``tuple`` - elements transformed independently, order and
      length preserved, container type preserved.
    * ``Mapping`` - values transformed independently, key set and key order
      preserved; the result is a ``dict``.
    * anything else (``None``, ``bool``, numbers, unknown objects) - returned
      unchanged.

    Containers whose children all come back identical are returned as-is, so
    untouched subtrees are shared with the input rather than copied.

    Containers nested deeper than ``max_depth`` are left unchanged and
    ``on_limit`` (if given) is called with the depth at which traversal
    stopped. A container that contains itself is treated the same way when
    the walk meets it again, and a container shared by several parents is
    walked once, so the work is linear in the number of distinct containers.
    Neither case is an error.

    Examples
    --------
    >>> transform({"a": ["x", 1, None], "b": {"c": "y"}}, str.upper)
    {'a': ['X', 1, None], 'b': {'c': 'Y'}}
    >>> payload = {"n": 1, "nested": {"flag": True}}
    >>> transform(payload, str.upper) is payload
    True
    """

    return _Walk(visit, max_depth, on_limit).value(value, 0)


class _Walk:
    """Traversal state for one :func:`transform` call.

    ``active`` holds the ids of containers on the current path; meeting one of
    them again is a cycle and the container is returned unchanged. ``done``
    memoises finished containers so a subtree shared by several parents is
    walked once.
    """

    __slots__ = ("visit", "max_depth", "on_limit", "active", "done")

    def __init__(self, visit: Visitor, max_depth: int, on_limit: LimitHook | None) -> None:
        self.visit = visit
        self.max_depth = max_depth
        self.on_limit = on_limit
        self.active: set[int] = set()
        self.done: dict[int, Any] = {}

    def value(self, value: Any, depth: int) -> Any:
        if isinstance(value, str):
            return self.visit(value)
        if not isinstance(value, (Mapping, list, tuple)):
            return value
        key = id(value)
        if key in self.done:
            return self.done[key]
        if depth >= self.max_depth or key in self.active:
            _notify(self.on_limit, depth)
            return value
        self.active.add(key)
        try:
            if isinstance(value, Mapping):
                result = self._mapping(value, depth + 1)
            else:
                result = self._sequence(value, depth + 1)
        finally:
            self.active.discard(key)
        self.done[key] = result
        return result

    def _mapping(self, value: Mapping[str, Any], depth: int) -> Mapping[str, Any]:
        rebuilt: dict[str, Any] = {}
        changed = False
        for key, item in value.items():
            new_item = self.value(item, depth)
            changed = changed or new_item is not item
            rebuilt[key] = new_item
        return rebuilt if changed else value

    def _sequence(self, value: list[Any] | tuple[Any, ...], depth: int) -> list[Any] | tuple[Any, ...]:
        items = [self.value(item, depth) for item in value]
        if all(new is old for new, old in zip(items, value)):
            return value
        return tuple(items) if isinstance(value, tuple) else items


def _notify(on_limit: LimitHook | None, depth: int) -> None:
    if on_limit is not None:
        on_limit(depth)


__all__ = ["MAX_DEPTH", "Value", "transform"]
