"""Interop helpers for embedding code that wants plain Python data.

Free functions over the value model; nothing here patches built-in types.
"""

from __future__ import annotations

from typing import Any

from .builder import from_python
from .values import Value, VArray, VObject, VPrimitive


def to_python(value: Value) -> Any:
    """Convert a Value tree into plain Python data.

    - VObject → ``dict`` (key order kept)
    - VArray → ``list``
    - VPrimitive → its scalar; null → ``None``
    """
    if isinstance(value, VObject):
        return {k: to_python(v) for k, v in value.entries.items()}
    if isinstance(value, VArray):
        return [to_python(v) for v in value.items]
    return value.value


def to_value(data: Any) -> Value:
    """Plain Python data → Value tree."""
    return from_python(data)


def item(container: VObject | VArray, key: str | int) -> Any:
    """Index into *container*.

    Primitives come back as scalars (null as ``None``), containers as
    Values so further indexing keeps working. A missing key or an
    out-of-range index gives ``None``.
    """
    value = container.get(key)
    if value is None:
        return None
    if isinstance(value, VPrimitive):
        return value.value
    return value


def set_item(container: VObject | VArray, key: str | int, value: Any) -> Value:
    """``container[key] = value`` with plain values converted first."""
    return container.set(key, from_python(value))


def append_item(array: VArray, value: Any) -> Value:
    return array.append(from_python(value))
