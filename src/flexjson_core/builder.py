"""Builders: plain Python data → Value trees."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from .values import JSON_NULL, Value, VArray, VObject, VPrimitive


def primitive(value: Any) -> VPrimitive:
    """Wrap a scalar; enum members become their constant name."""
    if isinstance(value, VPrimitive):
        return value
    if value is None:
        return JSON_NULL
    if isinstance(value, Enum):
        return VPrimitive(value.name)
    if isinstance(value, (str, bool, int, float, Decimal)):
        return VPrimitive(value)
    raise TypeError(f"not a JSON scalar: {type(value).__name__}")


def from_python(value: Any) -> Value:
    """Convert a plain Python structure to a Value.

    - ``None`` / scalars / enum members → VPrimitive
    - Mappings → VObject (keys stringified, insertion order kept)
    - lists, tuples, sets and other non-string iterables → VArray
    - describable records (dataclasses, NamedTuples, ...) → VObject via the encoder
    - Values are returned as-is
    """
    if isinstance(value, (VObject, VArray, VPrimitive)):
        return value
    if value is None or isinstance(value, (str, bool, int, float, Decimal, Enum)):
        return primitive(value)
    if isinstance(value, Mapping):
        result = VObject()
        for k, v in value.items():
            key = k.name if isinstance(k, Enum) else str(k)
            result.set(key, from_python(v))
        return result
    if (is_dataclass(value) and not isinstance(value, type)) or _is_namedtuple(value) or hasattr(
        type(value), "__type_descriptor__"
    ):
        from .encoder import fill
        return fill(value)
    if isinstance(value, (list, tuple, set, frozenset)) or _is_iterable(value):
        result = VArray()
        for v in value:
            result.append(from_python(v))
        return result
    raise TypeError(f"cannot convert {type(value).__name__} to a JSON value")


def _is_namedtuple(value: Any) -> bool:
    cls = type(value)
    return isinstance(value, tuple) and hasattr(cls, "_fields") and bool(
        getattr(cls, "__annotations__", None)
    )


def _is_iterable(value: Any) -> bool:
    if isinstance(value, (bytes, bytearray)):
        return False
    try:
        iter(value)
    except TypeError:
        return False
    return True


# ---------------------------------------------------------------------------
# Builder DSL
# ---------------------------------------------------------------------------

def field(key: str, *values: Any) -> tuple[str, Value]:
    """A key/value pair for :func:`obj`.

    No values gives null, one value is converted as-is, several become an array.
    """
    if not values:
        return key, JSON_NULL
    if len(values) == 1:
        return key, from_python(values[0])
    return key, arr(*values)


def obj(*fields: tuple[str, Any], **kwargs: Any) -> VObject:
    """Build a VObject from :func:`field` pairs and/or keyword arguments."""
    result = VObject()
    for key, value in fields:
        result.set(key, value)
    for key, value in kwargs.items():
        result.set(key, value)
    return result


def arr(*values: Any) -> VArray:
    """Build a VArray; each element is converted with :func:`from_python`."""
    result = VArray()
    for v in values:
        result.append(from_python(v))
    return result
