"""Path lookups over Value trees."""

from __future__ import annotations

from decimal import Decimal

from .errors import DecodeError, TypeMismatch
from .values import Value, VArray, VObject, VPrimitive


def get_path(value: Value, *labels: str | int) -> Value | None:
    """Follow *labels* through nested containers.

    - VObject: the label is used as a key
    - VArray: the label must be an int (or a string of digits), 0-based
    - anything else, or a missing step: ``None``
    """
    current: Value | None = value
    for label in labels:
        if isinstance(current, VObject):
            current = current.get(str(label))
        elif isinstance(current, VArray):
            try:
                idx = int(label)
            except ValueError:
                return None
            current = current.get(idx)
        else:
            return None
        if current is None:
            return None
    return current


def _primitive_at(value: Value, labels: tuple[str | int, ...]) -> VPrimitive | None:
    found = get_path(value, *labels)
    if found is None or found.is_null():
        return None
    if not isinstance(found, VPrimitive):
        raise TypeMismatch(
            f"expected a primitive, got {found.type_of.name.lower()}", path=_render(labels)
        )
    return found


def _render(labels: tuple[str | int, ...]) -> str:
    out = ""
    for label in labels:
        if isinstance(label, int):
            out += f"[{label}]"
        else:
            out = f"{out}.{label}" if out else label
    return out


def _coerce(value: Value, labels: tuple[str | int, ...], convert):
    prim = _primitive_at(value, labels)
    if prim is None:
        return None
    try:
        return convert(prim)
    except DecodeError as exc:
        raise exc.at(_render(labels)) from exc


# ---------------------------------------------------------------------------
# Typed getters; null and missing both give None
# ---------------------------------------------------------------------------

def get_string(value: Value, *labels: str | int) -> str | None:
    return _coerce(value, labels, VPrimitive.as_string)


def get_int(value: Value, *labels: str | int) -> int | None:
    return _coerce(value, labels, VPrimitive.as_int)


def get_float(value: Value, *labels: str | int) -> float | None:
    return _coerce(value, labels, VPrimitive.as_float)


def get_decimal(value: Value, *labels: str | int) -> Decimal | None:
    return _coerce(value, labels, VPrimitive.as_decimal)


def get_bool(value: Value, *labels: str | int) -> bool | None:
    return _coerce(value, labels, VPrimitive.as_bool)


def get_object(value: Value, *labels: str | int) -> VObject | None:
    found = get_path(value, *labels)
    if found is None or found.is_null():
        return None
    if not isinstance(found, VObject):
        raise TypeMismatch(
            f"expected object, got {found.type_of.name.lower()}", path=_render(labels)
        )
    return found


def get_array(value: Value, *labels: str | int) -> VArray | None:
    found = get_path(value, *labels)
    if found is None or found.is_null():
        return None
    if not isinstance(found, VArray):
        raise TypeMismatch(
            f"expected array, got {found.type_of.name.lower()}", path=_render(labels)
        )
    return found
