"""Encoder: native value → Value tree, driven by TypeDescriptors."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from enum import Enum
from typing import Any

from .errors import EncodeError
from .model import Kind, KindTag, NUMERIC_TAGS
from .registry import DescriptorRegistry, default_registry, record_targets
from .settings import DEFAULT_SETTINGS, MappingSettings, NullPolicy
from .typedef import TypeDescriptor, kind_for
from .values import JSON_NULL, Value, VArray, VObject, VPrimitive


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def fill(
    instance: Any,
    target: VObject | None = None,
    *,
    settings: MappingSettings | None = None,
    registry: DescriptorRegistry | None = None,
) -> VObject:
    """Write the fields of *instance* into *target* (a new VObject by default).

    Keys are the canonical underscore names of the declared fields, in
    declaration order. ``None`` fields are written as null unless the
    settings ask for ``NullPolicy.Omit``.
    """
    settings = settings or DEFAULT_SETTINGS
    registry = registry or default_registry
    td = registry.describe(type(instance))
    # Nothing reaches target until every field has encoded.
    staged, omitted = _encode_record(instance, td, settings, registry)
    if target is None:
        return staged
    for key in omitted:
        target.remove(key)
    for key in staged.keys():
        target.set(key, staged.remove(key))
    return target


def as_value(instance: Any, **kwargs: Any) -> VObject:
    """Fresh VObject for *instance*; see :func:`fill`."""
    return fill(instance, **kwargs)


def encode_value(
    value: Any,
    tp: Any,
    *,
    settings: MappingSettings | None = None,
    registry: DescriptorRegistry | None = None,
) -> Value:
    """Encode *value* as the annotation *tp* (e.g. ``list[Order]``) describes."""
    settings = settings or DEFAULT_SETTINGS
    registry = registry or default_registry
    kind = kind_for(tp, getattr(tp, "__qualname__", repr(tp)))
    for rec in record_targets(kind):
        registry.describe(rec)
    return _encode_kind(value, kind, settings, registry)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def _encode_record(
    instance: Any,
    td: TypeDescriptor,
    settings: MappingSettings,
    registry: DescriptorRegistry,
) -> tuple[VObject, list[str]]:
    """Encode *instance* into a fresh VObject; also return the keys left out as null."""
    out = VObject()
    omitted: list[str] = []
    for spec in td.fields:
        try:
            v = spec.getter(instance)
        except Exception as exc:
            raise EncodeError(
                f"reading {td.type_name}.{spec.name} failed: {exc!r}", path=spec.name
            ) from exc
        if v is None and settings.null_policy is NullPolicy.Omit:
            omitted.append(spec.json_name)
            continue
        try:
            out.set(spec.json_name, _encode_kind(v, spec.kind, settings, registry))
        except EncodeError as exc:
            raise exc.at(spec.name) from exc
    return out, omitted


# ---------------------------------------------------------------------------
# Kind dispatch
# ---------------------------------------------------------------------------

def _encode_kind(v: Any, kind: Kind, settings: MappingSettings, registry: DescriptorRegistry) -> Value:
    tag = kind.tag

    if v is None:
        return JSON_NULL

    if tag is KindTag.Raw:
        if not isinstance(v, kind.target):
            raise EncodeError(f"expected {kind.describe()}, got {type(v).__name__}")
        return v.deep_clone()
    if tag in NUMERIC_TAGS:
        if isinstance(v, bool) or not isinstance(v, (int, float, Decimal)):
            raise EncodeError(f"expected a number, got {type(v).__name__}")
        return VPrimitive(v)
    if tag is KindTag.String:
        if not isinstance(v, str):
            raise EncodeError(f"expected str, got {type(v).__name__}")
        return VPrimitive(v)
    if tag is KindTag.Bool:
        if not isinstance(v, bool):
            raise EncodeError(f"expected bool, got {type(v).__name__}")
        return VPrimitive(v)
    if tag is KindTag.Enum:
        if not isinstance(v, kind.target):
            raise EncodeError(f"expected {kind.target.__name__}, got {type(v).__name__}")
        return VPrimitive(v.name)
    if tag is KindTag.Record:
        if not isinstance(v, kind.target):
            raise EncodeError(f"expected {kind.target.__name__}, got {type(v).__name__}")
        out, _ = _encode_record(v, registry.describe(type(v)), settings, registry)
        return out
    if tag is KindTag.Collection:
        if isinstance(v, (str, bytes)) or not isinstance(v, Iterable):
            raise EncodeError(f"expected a collection, got {type(v).__name__}")
        arr = VArray()
        for i, item in enumerate(v):
            try:
                arr.append(_encode_kind(item, kind.element, settings, registry))
            except EncodeError as exc:
                raise exc.at(f"[{i}]") from exc
        return arr
    if tag is KindTag.Map:
        if not isinstance(v, Mapping):
            raise EncodeError(f"expected a mapping, got {type(v).__name__}")
        obj = VObject()
        for k, item in v.items():
            key = k.name if isinstance(k, Enum) else str(k)
            try:
                obj.set(key, _encode_kind(item, kind.element, settings, registry))
            except EncodeError as exc:
                raise exc.at(f"[{key!r}]") from exc
        return obj

    raise EncodeError(f"unhandled kind {kind.describe()}")
