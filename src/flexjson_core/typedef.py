"""FieldSpec and TypeDescriptor: the explicit shape of a describable type.

A type is describable when it is a dataclass, a ``typing.NamedTuple`` or
defines a ``__type_descriptor__`` classmethod returning its own
:class:`TypeDescriptor`. Derivation happens once per type (see
:mod:`flexjson_core.registry`); the decoder and encoder only ever consume
the resulting descriptors.
"""

from __future__ import annotations

import collections.abc as abc
import dataclasses
import types
import typing
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, Protocol, runtime_checkable

from .errors import UnsupportedType
from .keys import to_underscore
from .model import (
    BOOL,
    DECIMAL,
    FLOAT,
    INT,
    STRING,
    Kind,
    KindTag,
    collection_kind,
    enum_kind,
    map_kind,
    nullable,
    raw_kind,
    record_kind,
)
from .values import VArray, VObject, VPrimitive


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


# ---------------------------------------------------------------------------
# FieldSpec / TypeDescriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    kind: Kind
    json_name: str = ""
    default: Any = MISSING
    default_factory: Callable[[], Any] | None = None
    getter: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if not self.json_name:
            object.__setattr__(self, "json_name", to_underscore(self.name))
        if self.getter is None:
            object.__setattr__(self, "getter", attrgetter(self.name))

    @property
    def optional(self) -> bool:
        return self.kind.nullable

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None

    def default_value(self) -> Any:
        """The value used when the field is absent; ``MISSING`` if there is none."""
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not MISSING:
            return self.default
        if self.optional:
            return None
        return MISSING


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Ordered field list plus a factory taking ``{field name: value}``."""

    cls: type
    fields: tuple[FieldSpec, ...]
    factory: Callable[[dict[str, Any]], Any]

    @property
    def type_name(self) -> str:
        return self.cls.__qualname__

    def field(self, name: str) -> FieldSpec | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def build(self, values: dict[str, Any]) -> Any:
        return self.factory(values)


@runtime_checkable
class Describable(Protocol):
    """Types that hand-write their descriptor instead of having it derived."""

    @classmethod
    def __type_descriptor__(cls) -> TypeDescriptor: ...


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------

def is_namedtuple_class(cls: Any) -> bool:
    return (
        isinstance(cls, type)
        and issubclass(cls, tuple)
        and hasattr(cls, "_fields")
        and bool(getattr(cls, "__annotations__", None))
    )


def is_describable(cls: Any) -> bool:
    return isinstance(cls, type) and (
        hasattr(cls, "__type_descriptor__")
        or dataclasses.is_dataclass(cls)
        or is_namedtuple_class(cls)
    )


def derive_descriptor(cls: type) -> TypeDescriptor:
    """Build the descriptor of *cls* without consulting any cache."""
    if hasattr(cls, "__type_descriptor__"):
        td = cls.__type_descriptor__()
        if not isinstance(td, TypeDescriptor):
            raise UnsupportedType(
                f"{cls.__qualname__}.__type_descriptor__ returned {type(td).__name__}"
            )
        return td
    if dataclasses.is_dataclass(cls) and isinstance(cls, type):
        return _from_dataclass(cls)
    if is_namedtuple_class(cls):
        return _from_namedtuple(cls)
    raise UnsupportedType(f"{getattr(cls, '__qualname__', cls)!s} is not a describable type")


def _hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise UnsupportedType(f"cannot resolve annotations of {cls.__qualname__}: {exc}") from exc


def _from_dataclass(cls: type) -> TypeDescriptor:
    hints = _hints(cls)
    specs: list[FieldSpec] = []
    for f in dataclasses.fields(cls):
        # init=False fields cannot be passed to the constructor
        if not f.init:
            continue
        kind = kind_for(hints[f.name], f"{cls.__qualname__}.{f.name}")
        factory = None if f.default_factory is dataclasses.MISSING else f.default_factory
        default = MISSING if f.default is dataclasses.MISSING else f.default
        specs.append(FieldSpec(f.name, kind, default=default, default_factory=factory))
    return TypeDescriptor(cls, tuple(specs), lambda values: cls(**values))


def _from_namedtuple(cls: type) -> TypeDescriptor:
    hints = _hints(cls)
    defaults = getattr(cls, "_field_defaults", {})
    specs = [
        FieldSpec(
            name,
            kind_for(hints[name], f"{cls.__qualname__}.{name}"),
            default=defaults.get(name, MISSING),
        )
        for name in cls._fields
    ]
    return TypeDescriptor(cls, tuple(specs), lambda values: cls(**values))


# ---------------------------------------------------------------------------
# Annotation → Kind
# ---------------------------------------------------------------------------

_SCALARS: dict[Any, Kind] = {
    bool: BOOL,
    int: INT,
    float: FLOAT,
    Decimal: DECIMAL,
    str: STRING,
}

_RAW_TYPES = (VObject, VArray, VPrimitive)

_SEQUENCES: dict[Any, type] = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
    abc.Sequence: list,
    abc.MutableSequence: list,
    abc.Collection: list,
    abc.Iterable: list,
    abc.Set: frozenset,
    abc.MutableSet: set,
}

_MAPPINGS = (dict, abc.Mapping, abc.MutableMapping)


def kind_for(tp: Any, where: str = "") -> Kind:
    """Translate a resolved annotation into a :class:`Kind`.

    Raises UnsupportedType for anything outside the closed set of kinds.
    """
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is typing.Union or origin is types.UnionType:
        members = [a for a in args if a is not type(None)]
        if all(m in _RAW_TYPES for m in members):
            kind = raw_kind(*members)
        elif len(members) == 1:
            kind = kind_for(members[0], where)
        else:
            raise UnsupportedType(f"{where}: ambiguous union {tp!r}")
        return nullable(kind) if len(members) < len(args) else kind

    if tp in _SCALARS:
        return _SCALARS[tp]
    if tp in _RAW_TYPES:
        return raw_kind(tp)
    if isinstance(tp, type) and issubclass(tp, Enum):
        return enum_kind(tp)

    if origin in _SEQUENCES:
        if origin is tuple:
            if len(args) != 2 or args[1] is not Ellipsis:
                raise UnsupportedType(f"{where}: only tuple[X, ...] is supported, got {tp!r}")
            args = args[:1]
        if len(args) != 1:
            raise UnsupportedType(f"{where}: collection needs an element type: {tp!r}")
        element = kind_for(args[0], f"{where}[]")
        container = _SEQUENCES[origin]
        if container in (set, frozenset) and not _hashable(element):
            raise UnsupportedType(f"{where}: set elements must be hashable, got {element.describe()}")
        return collection_kind(element, container)

    if origin in _MAPPINGS:
        if len(args) != 2:
            raise UnsupportedType(f"{where}: mapping needs key and value types: {tp!r}")
        key = kind_for(args[0], f"{where}{{key}}")
        if key.nullable or key.tag not in (KindTag.String, KindTag.Int, KindTag.Enum):
            raise UnsupportedType(f"{where}: unsupported map key type {args[0]!r}")
        return map_kind(kind_for(args[1], f"{where}{{}}"), key)

    if is_describable(tp):
        return record_kind(tp)

    raise UnsupportedType(f"{where}: unsupported annotation {tp!r}")


def _hashable(kind: Kind) -> bool:
    if kind.tag is KindTag.Map:
        return False
    if kind.tag is KindTag.Collection:
        return kind.target in (tuple, frozenset) and _hashable(kind.element)
    if kind.tag in (KindTag.Record, KindTag.Raw):
        targets = kind.target if kind.tag is KindTag.Raw else (kind.target,)
        return all(getattr(t, "__hash__", None) is not None for t in targets)
    return True
