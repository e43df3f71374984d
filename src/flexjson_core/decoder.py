"""Decoder: Value tree → native value, driven by TypeDescriptors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from .builder import from_python
from .errors import DecodeError, MissingField, TypeMismatch, UnknownEnumValue
from .keys import flex_get, normalize
from .model import Kind, KindTag
from .registry import DescriptorRegistry, default_registry, record_targets
from .settings import DEFAULT_SETTINGS, MappingSettings
from .typedef import MISSING, FieldSpec, TypeDescriptor, kind_for
from .values import Value, VArray, VObject, VPrimitive

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class _Context:
    settings: MappingSettings
    registry: DescriptorRegistry


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def construct(
    value: Any,
    cls: type[T],
    *,
    settings: MappingSettings | None = None,
    registry: DescriptorRegistry | None = None,
) -> T:
    """Build an instance of *cls* from a VObject (or a plain ``dict``).

    Fields are looked up with flexible key matching; unknown keys are
    ignored. The first failing field aborts the whole call with a
    DecodeError subclass whose ``path`` names it; no partial instance is
    ever returned.
    """
    ctx = _Context(settings or DEFAULT_SETTINGS, registry or default_registry)
    td = ctx.registry.describe(cls)
    return _decode_record(_as_value(value), td, ctx)


def decode_value(
    value: Any,
    tp: Any,
    *,
    settings: MappingSettings | None = None,
    registry: DescriptorRegistry | None = None,
) -> Any:
    """Decode *value* against an arbitrary annotation such as ``list[Order]``."""
    ctx = _Context(settings or DEFAULT_SETTINGS, registry or default_registry)
    kind = kind_for(tp, getattr(tp, "__qualname__", repr(tp)))
    for rec in record_targets(kind):
        ctx.registry.describe(rec)
    return _decode_kind(_as_value(value), kind, ctx)


def _as_value(value: Any) -> Value:
    if isinstance(value, (VObject, VArray, VPrimitive)):
        return value
    return from_python(value)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def _decode_record(value: Value, td: TypeDescriptor, ctx: _Context) -> Any:
    if not isinstance(value, VObject):
        raise TypeMismatch(
            f"expected object, got {value.type_of.name.lower()}", type_name=td.type_name
        )
    values: dict[str, Any] = {}
    for spec in td.fields:
        try:
            values[spec.name] = _decode_field(value, spec, ctx)
        except DecodeError as exc:
            raise exc.at(spec.name, td.type_name) from exc

    if logger.isEnabledFor(logging.DEBUG):
        _log_unknown_keys(value, td, ctx)

    try:
        return td.build(values)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"factory rejected values: {exc}", type_name=td.type_name) from exc


def _decode_field(obj: VObject, spec: FieldSpec, ctx: _Context) -> Any:
    raw = flex_get(obj, spec.json_name, ctx.settings.match)
    if raw is None:
        default = spec.default_value()
        if default is MISSING:
            raise MissingField(f"required field '{spec.json_name}' is missing")
        return default
    try:
        return _decode_kind(raw, spec.kind, ctx)
    except UnknownEnumValue as exc:
        if spec.kind.tag is KindTag.Enum and spec.optional and ctx.settings.lenient_optional_enums:
            logger.debug("leaving %s unset: %s", spec.name, exc.reason)
            return spec.default_value()
        raise


def _log_unknown_keys(obj: VObject, td: TypeDescriptor, ctx: _Context) -> None:
    known = {normalize(f.json_name, ctx.settings.match) for f in td.fields}
    unknown = [k for k in obj.entries if normalize(k, ctx.settings.match) not in known]
    if unknown:
        logger.debug("ignoring unknown keys for %s: %s", td.type_name, ", ".join(unknown))


# ---------------------------------------------------------------------------
# Kind dispatch
# ---------------------------------------------------------------------------

def _decode_kind(value: Value, kind: Kind, ctx: _Context) -> Any:
    tag = kind.tag

    if tag is KindTag.Raw:
        if isinstance(value, kind.target):
            return value.deep_clone()
        if value.is_null() and kind.nullable:
            return None
        raise TypeMismatch(f"expected {kind.describe()}, got {value.type_of.name.lower()}")

    if value.is_null():
        if kind.nullable:
            return None
        raise TypeMismatch(f"expected {kind.describe()}, got null")

    if tag is KindTag.Int:
        return _primitive(value, kind).as_int()
    if tag is KindTag.Float:
        return _primitive(value, kind).as_float()
    if tag is KindTag.Decimal:
        return _primitive(value, kind).as_decimal()
    if tag is KindTag.Bool:
        return _primitive(value, kind).as_bool()
    if tag is KindTag.String:
        prim = _primitive(value, kind)
        if not prim.is_string():
            raise TypeMismatch(f"expected string, got {prim.type_of.name.lower()}")
        return prim.value
    if tag is KindTag.Enum:
        prim = _primitive(value, kind)
        if not prim.is_string():
            raise TypeMismatch(f"expected {kind.describe()} name, got {prim.type_of.name.lower()}")
        return _enum_member(kind.target, prim.value)
    if tag is KindTag.Record:
        return _decode_record(value, ctx.registry.describe(kind.target), ctx)
    if tag is KindTag.Collection:
        return _decode_collection(value, kind, ctx)
    if tag is KindTag.Map:
        return _decode_map(value, kind, ctx)

    raise TypeMismatch(f"unhandled kind {kind.describe()}")


def _primitive(value: Value, kind: Kind) -> VPrimitive:
    if not isinstance(value, VPrimitive):
        raise TypeMismatch(f"expected {kind.describe()}, got {value.type_of.name.lower()}")
    return value


def _enum_member(enum_cls: type, name: str) -> Any:
    member = enum_cls.__members__.get(name)
    if member is None:
        raise UnknownEnumValue(f"'{name}' is not a member of {enum_cls.__name__}")
    return member


def _decode_collection(value: Value, kind: Kind, ctx: _Context) -> Any:
    if not isinstance(value, VArray):
        raise TypeMismatch(f"expected array, got {value.type_of.name.lower()}")
    items = []
    for i, item in enumerate(value.items):
        try:
            items.append(_decode_kind(item, kind.element, ctx))
        except DecodeError as exc:
            raise exc.at(f"[{i}]") from exc
    if kind.target is list:
        return items
    try:
        return kind.target(items)
    except TypeError as exc:
        raise TypeMismatch(f"cannot build {kind.describe()}: {exc}") from exc


def _decode_map(value: Value, kind: Kind, ctx: _Context) -> dict[Any, Any]:
    if not isinstance(value, VObject):
        raise TypeMismatch(f"expected object, got {value.type_of.name.lower()}")
    result: dict[Any, Any] = {}
    for k, v in value.entries.items():
        try:
            result[_decode_key(k, kind.key)] = _decode_kind(v, kind.element, ctx)
        except DecodeError as exc:
            raise exc.at(f"[{k!r}]") from exc
    return result


def _decode_key(key: str, kind: Kind) -> Any:
    if kind.tag is KindTag.Int:
        try:
            return int(key)
        except ValueError:
            raise TypeMismatch(f"map key {key!r} is not an integer") from None
    if kind.tag is KindTag.Enum:
        return _enum_member(kind.target, key)
    return key
