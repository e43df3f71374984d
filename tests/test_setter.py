"""Tests for path mutation."""

import pytest

from flexjson_core.builder import arr, obj
from flexjson_core.errors import TypeMismatch
from flexjson_core.setter import get_or_create_array, get_or_create_object, remove_empty, set_path
from flexjson_core.values import VArray, VPrimitive


def test_set_path_creates_parents():
    root = obj()
    set_path(root, ["a", "b", "c"], 1)
    assert root == obj(a=obj(b=obj(c=1)))


def test_set_path_replaces_null_parent():
    root = obj(a=None)
    set_path(root, ("a", "b"), "x")
    assert root == obj(a=obj(b="x"))


def test_set_path_keeps_siblings():
    root = obj(a=obj(keep=True))
    set_path(root, ["a", "new"], 2)
    assert root["a"].keys() == ["keep", "new"]


def test_set_path_through_primitive_fails():
    root = obj(a=obj(b=5))
    with pytest.raises(TypeMismatch) as exc_info:
        set_path(root, ["a", "b", "c"], 1)
    assert exc_info.value.path == "a.b"


def test_set_path_needs_labels():
    with pytest.raises(ValueError):
        set_path(obj(), [], 1)


def test_get_or_create_object():
    root = obj()
    created = get_or_create_object(root, "x", "y")
    created.set("z", 1)
    assert root == obj(x=obj(y=obj(z=1)))
    assert get_or_create_object(root, "x", "y") is created
    assert get_or_create_object(root) is root


def test_get_or_create_array():
    root = obj()
    items = get_or_create_array(root, "data", "items")
    items.append(1)
    assert isinstance(root["data"]["items"], VArray)
    assert get_or_create_array(root, "data", "items") is items
    assert root["data"]["items"] == arr(1)


def test_get_or_create_array_wrong_type():
    with pytest.raises(TypeMismatch):
        get_or_create_array(obj(data="text"), "data")


def test_remove_empty():
    value = obj(
        name="x",
        blank="",
        nothing=None,
        empty_list=arr(),
        nested=obj(gone=None),
        items=arr("", 1, None, arr(), obj(a=None)),
    )
    remove_empty(value)
    assert value == obj(name="x", nested=obj(), items=arr(1, obj()))


def test_remove_empty_keeps_zero_and_false():
    value = obj(n=0, flag=False)
    remove_empty(value)
    assert value == obj(n=0, flag=False)


def test_remove_empty_on_primitive_is_noop():
    p = VPrimitive("")
    remove_empty(p)
    assert p == VPrimitive("")
