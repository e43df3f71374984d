"""Field kinds: the closed set of shapes a described field can take."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .values import VArray, VObject, VPrimitive


# ---------------------------------------------------------------------------
# KindTag
# ---------------------------------------------------------------------------

class KindTag(Enum):
    Int = auto()
    Float = auto()
    Decimal = auto()
    String = auto()
    Bool = auto()
    Enum = auto()
    Record = auto()
    Collection = auto()
    Map = auto()
    Raw = auto()


NUMERIC_TAGS = frozenset({KindTag.Int, KindTag.Float, KindTag.Decimal})


# ---------------------------------------------------------------------------
# Kind
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Kind:
    """One node of a field's shape.

    ``target`` is the enum class (Enum), record class (Record), concrete
    container type (Collection: list/tuple/set/frozenset, Map: dict) or
    the tuple of accepted Value classes (Raw).
    ``element`` is the element kind of a Collection or the value kind of a
    Map; ``key`` is the Map key kind (String, Int or Enum). ``nullable``
    marks ``X | None``.
    """

    tag: KindTag
    target: Any = None
    element: Kind | None = None
    key: Kind | None = None
    nullable: bool = False

    def describe(self) -> str:
        """Short human-readable form, e.g. ``list[int]`` or ``Color?``."""
        if self.tag in (KindTag.Enum, KindTag.Record):
            text = self.target.__name__
        elif self.tag is KindTag.Collection:
            text = f"{self.target.__name__}[{self.element.describe()}]"
        elif self.tag is KindTag.Map:
            text = f"dict[{self.key.describe()}, {self.element.describe()}]"
        elif self.tag is KindTag.Raw:
            text = " | ".join(t.__name__ for t in self.target)
        else:
            text = self.tag.name.lower()
        return text + "?" if self.nullable else text


INT = Kind(KindTag.Int)
FLOAT = Kind(KindTag.Float)
DECIMAL = Kind(KindTag.Decimal)
STRING = Kind(KindTag.String)
BOOL = Kind(KindTag.Bool)
RAW = Kind(KindTag.Raw, target=(VObject, VArray, VPrimitive))


def enum_kind(cls: type) -> Kind:
    return Kind(KindTag.Enum, target=cls)


def raw_kind(*classes: type) -> Kind:
    """Raw passthrough limited to *classes* (VObject, VArray and/or VPrimitive)."""
    return Kind(KindTag.Raw, target=tuple(dict.fromkeys(classes)))


def record_kind(cls: type) -> Kind:
    return Kind(KindTag.Record, target=cls)


def collection_kind(element: Kind, container: type = list) -> Kind:
    return Kind(KindTag.Collection, target=container, element=element)


def map_kind(value: Kind, key: Kind = STRING) -> Kind:
    return Kind(KindTag.Map, target=dict, element=value, key=key)


def nullable(kind: Kind) -> Kind:
    return Kind(kind.tag, kind.target, kind.element, kind.key, nullable=True)
