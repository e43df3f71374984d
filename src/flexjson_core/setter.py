"""Path mutation over Value trees."""

from __future__ import annotations

from typing import Any

from .errors import TypeMismatch
from .values import Value, VArray, VObject


def _descend(root: VObject, labels: tuple[str, ...]) -> VObject:
    """Walk (creating missing objects) to the parent of the last label."""
    parent = root
    for i, label in enumerate(labels):
        child = parent.get(label)
        if child is None or child.is_null():
            child = parent.set(label, VObject())
        elif not isinstance(child, VObject):
            raise TypeMismatch(
                f"expected object, got {child.type_of.name.lower()}",
                path=".".join(labels[: i + 1]),
            )
        parent = child
    return parent


def set_path(root: VObject, labels: tuple[str, ...] | list[str], value: Any) -> Value:
    """Put *value* at *labels*, creating intermediate objects as needed.

    Returns the stored value.
    """
    labels = tuple(labels)
    if not labels:
        raise ValueError("set_path needs at least one label")
    parent = _descend(root, labels[:-1])
    return parent.set(labels[-1], value)


def get_or_create_object(root: VObject, *labels: str) -> VObject:
    """The VObject at *labels*; it and any missing parents are created."""
    if not labels:
        return root
    return _descend(root, labels)


def get_or_create_array(root: VObject, *labels: str) -> VArray:
    """The VArray at *labels*; it and any missing parent objects are created."""
    if not labels:
        raise ValueError("get_or_create_array needs at least one label")
    parent = _descend(root, labels[:-1])
    found = parent.get(labels[-1])
    if found is None or found.is_null():
        return parent.set(labels[-1], VArray())
    if not isinstance(found, VArray):
        raise TypeMismatch(
            f"expected array, got {found.type_of.name.lower()}", path=".".join(labels)
        )
    return found


def remove_empty(value: Value) -> None:
    """Recursively drop nulls, empty strings and empty arrays.

    Object members that are themselves objects are kept even when empty
    (after their own cleanup); array elements are dropped whenever empty.
    """
    if isinstance(value, VObject):
        for key in value.keys():
            child = value.entries[key]
            if child.is_empty() and not isinstance(child, VObject):
                value.remove(key)
            else:
                remove_empty(child)
    elif isinstance(value, VArray):
        for i in range(len(value.items) - 1, -1, -1):
            child = value.items[i]
            if child.is_empty():
                value.remove_at(i)
            else:
                remove_empty(child)
