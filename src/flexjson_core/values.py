"""Value types for flexjson_core: the tagged JSON value tree."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum, auto
from typing import Any, Iterator, Union

from .errors import NumericConversionError, TypeMismatch


# ---------------------------------------------------------------------------
# JsonType
# ---------------------------------------------------------------------------

class JsonType(Enum):
    Object = auto()
    Array = auto()
    String = auto()
    Number = auto()
    Bool = auto()
    Null = auto()


Scalar = Union[str, int, float, Decimal, bool, None]


# ---------------------------------------------------------------------------
# VPrimitive
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True, eq=False)
class VPrimitive:
    """An immutable string, number, boolean or null."""

    value: Scalar = None

    def __post_init__(self) -> None:
        if not isinstance(self.value, (str, int, float, Decimal, type(None))):
            raise TypeError(f"not a JSON scalar: {type(self.value).__name__}")

    # -- Classification -------------------------------------------------

    @property
    def type_of(self) -> JsonType:
        v = self.value
        if v is None:
            return JsonType.Null
        if isinstance(v, bool):
            return JsonType.Bool
        if isinstance(v, str):
            return JsonType.String
        return JsonType.Number

    def is_object(self) -> bool:
        return False

    def is_array(self) -> bool:
        return False

    def is_primitive(self) -> bool:
        return True

    def is_null(self) -> bool:
        return self.value is None

    def is_string(self) -> bool:
        return isinstance(self.value, str)

    def is_bool(self) -> bool:
        return isinstance(self.value, bool)

    def is_number(self) -> bool:
        return self.type_of is JsonType.Number

    # -- Coercions ------------------------------------------------------

    def as_string(self) -> str:
        """Text form of the primitive; null is the empty string."""
        v = self.value
        if v is None:
            return ""
        if isinstance(v, bool):
            return "true" if v else "false"
        return str(v)

    def as_bool(self) -> bool:
        if not isinstance(self.value, bool):
            raise TypeMismatch(f"expected bool, got {self.type_of.name.lower()}")
        return self.value

    def as_number(self) -> int | float | Decimal:
        """Return the raw number; numeric strings are parsed."""
        kind = self.type_of
        if kind is JsonType.Number:
            return self.value
        if kind is JsonType.String:
            text = self.value.strip()
            try:
                return int(text)
            except ValueError:
                pass
            try:
                return Decimal(text)
            except InvalidOperation:
                raise TypeMismatch(f"not a number: {self.value!r}") from None
        raise TypeMismatch(f"expected number, got {kind.name.lower()}")

    def as_int(self) -> int:
        """Return the number as an ``int``, refusing fractional values."""
        n = self.as_number()
        if isinstance(n, int):
            return n
        if isinstance(n, float):
            if not n.is_integer():
                raise NumericConversionError(f"{n!r} is not an integer")
            return int(n)
        if not n.is_finite() or n != n.to_integral_value():
            raise NumericConversionError(f"{n} is not an integer")
        return int(n)

    def as_float(self) -> float:
        """Return the number as a ``float``, refusing lossy integer conversion."""
        n = self.as_number()
        if isinstance(n, float):
            return n
        if isinstance(n, Decimal) and not n.is_finite():
            raise NumericConversionError(f"{n} is not a finite number")
        try:
            f = float(n)
        except OverflowError:
            raise NumericConversionError(f"{n} overflows float") from None
        if isinstance(n, int):
            if int(f) != n:
                raise NumericConversionError(f"{n} cannot be represented exactly as float")
        elif math.isinf(f):
            raise NumericConversionError(f"{n} overflows float")
        return f

    def as_decimal(self) -> Decimal:
        n = self.as_number()
        if isinstance(n, Decimal):
            return n
        if isinstance(n, float):
            return Decimal(repr(n))
        return Decimal(n)

    # -- Equality -------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VPrimitive):
            return NotImplemented
        return self.type_of is other.type_of and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.type_of, self.value))

    def deep_clone(self) -> VPrimitive:
        return self

    def is_empty(self) -> bool:
        return self.value is None or self.as_string() == ""

    def __str__(self) -> str:
        return self.as_string()


JSON_NULL = VPrimitive(None)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

def _adopt(value: Any) -> Value:
    """Take ownership of *value* for insertion into a container.

    Plain Python values are converted; containers that already belong to
    another tree are deep-cloned so no substructure is shared.
    """
    if not isinstance(value, (VObject, VArray, VPrimitive)):
        from .builder import from_python
        value = from_python(value)
    if isinstance(value, VPrimitive):
        return value
    if value._attached:
        value = value.deep_clone()
    value._attached = True
    return value


def _release(value: Value | None) -> None:
    if isinstance(value, (VObject, VArray)):
        value._attached = False


@dataclass(slots=True)
class VObject:
    """Ordered mapping of unique string keys to values.

    Re-setting a key replaces its value in place; the key keeps its
    original position. Equality ignores key order.
    """

    entries: dict[str, Value] = field(default_factory=dict)
    _attached: bool = field(default=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.entries = {str(k): _adopt(v) for k, v in self.entries.items()}

    @property
    def type_of(self) -> JsonType:
        return JsonType.Object

    def is_object(self) -> bool:
        return True

    def is_array(self) -> bool:
        return False

    def is_primitive(self) -> bool:
        return False

    def is_null(self) -> bool:
        return False

    # -- Access ---------------------------------------------------------

    def get(self, key: str) -> Value | None:
        return self.entries.get(key)

    def __getitem__(self, key: str) -> Value:
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[str]:
        return list(self.entries)

    def values(self) -> list[Value]:
        return list(self.entries.values())

    def items(self) -> list[tuple[str, Value]]:
        return list(self.entries.items())

    # -- Mutation -------------------------------------------------------

    def set(self, key: str, value: Any) -> Value:
        """Put *value* under *key* and return the stored (owned) value."""
        adopted = _adopt(value)
        _release(self.entries.get(key))
        self.entries[key] = adopted
        return adopted

    def remove(self, key: str) -> Value | None:
        removed = self.entries.pop(key, None)
        _release(removed)
        return removed

    def clear(self) -> None:
        for v in self.entries.values():
            _release(v)
        self.entries.clear()

    # -- Misc -----------------------------------------------------------

    def deep_clone(self) -> VObject:
        clone = VObject()
        for k, v in self.entries.items():
            clone.entries[k] = _adopt(v.deep_clone())
        return clone

    def is_empty(self) -> bool:
        return not self.entries


@dataclass(slots=True)
class VArray:
    """Ordered sequence of values; equality is order-sensitive."""

    items: list[Value] = field(default_factory=list)
    _attached: bool = field(default=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.items = [_adopt(v) for v in self.items]

    @property
    def type_of(self) -> JsonType:
        return JsonType.Array

    def is_object(self) -> bool:
        return False

    def is_array(self) -> bool:
        return True

    def is_primitive(self) -> bool:
        return False

    def is_null(self) -> bool:
        return False

    # -- Access ---------------------------------------------------------

    def get(self, index: int) -> Value | None:
        """Return the element at *index* (negative counts from the end), or ``None``."""
        if -len(self.items) <= index < len(self.items):
            return self.items[index]
        return None

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (VObject, VArray, VPrimitive)):
            from .builder import from_python
            value = from_python(value)
        return value in self.items

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def first(self) -> Value | None:
        return self.items[0] if self.items else None

    def last(self) -> Value | None:
        return self.items[-1] if self.items else None

    # -- Mutation -------------------------------------------------------

    def append(self, value: Any) -> Value:
        adopted = _adopt(value)
        self.items.append(adopted)
        return adopted

    def extend(self, values: Any) -> None:
        for v in values:
            self.append(v)

    def insert(self, index: int, value: Any) -> Value:
        adopted = _adopt(value)
        self.items.insert(index, adopted)
        return adopted

    def set(self, index: int, value: Any) -> Value:
        adopted = _adopt(value)
        _release(self.items[index])
        self.items[index] = adopted
        return adopted

    def remove_at(self, index: int) -> Value:
        removed = self.items.pop(index)
        _release(removed)
        return removed

    def remove(self, value: Any) -> bool:
        """Remove the first element equal to *value*; return whether one was found."""
        if not isinstance(value, (VObject, VArray, VPrimitive)):
            from .builder import from_python
            value = from_python(value)
        for i, item in enumerate(self.items):
            if item == value:
                self.remove_at(i)
                return True
        return False

    # -- Misc -----------------------------------------------------------

    def deep_clone(self) -> VArray:
        clone = VArray()
        clone.items = [_adopt(v.deep_clone()) for v in self.items]
        return clone

    def is_empty(self) -> bool:
        return not self.items


Value = Union[VObject, VArray, VPrimitive]
