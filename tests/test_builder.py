"""Tests for flexjson_core.builder."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

import pytest

from flexjson_core.builder import arr, field, from_python, obj, primitive
from flexjson_core.values import JSON_NULL, VArray, VObject, VPrimitive


class Shape(Enum):
    SQUARE = 1
    CIRCLE = 2


@dataclass
class Point:
    x: int
    y: int


class TestFromPython:
    def test_scalars(self):
        assert from_python(None) is JSON_NULL
        assert from_python("a") == VPrimitive("a")
        assert from_python(3) == VPrimitive(3)
        assert from_python(Decimal("1.25")) == VPrimitive(Decimal("1.25"))
        assert from_python(False) == VPrimitive(False)

    def test_enum_member_uses_name(self):
        assert from_python(Shape.CIRCLE) == VPrimitive("CIRCLE")

    def test_nested(self):
        value = from_python({"a": [1, {"b": None}], "c": (True,)})
        assert value == VObject({
            "a": VArray([VPrimitive(1), VObject({"b": JSON_NULL})]),
            "c": VArray([VPrimitive(True)]),
        })

    def test_keys_are_stringified_in_order(self):
        value = from_python({2: "x", Shape.SQUARE: "y"})
        assert value.keys() == ["2", "SQUARE"]

    def test_value_passes_through(self):
        o = VObject()
        assert from_python(o) is o

    def test_record_goes_through_encoder(self):
        assert from_python(Point(1, 2)) == VObject({"x": VPrimitive(1), "y": VPrimitive(2)})

    def test_generator(self):
        assert from_python(i * 2 for i in range(3)) == arr(0, 2, 4)

    def test_unsupported(self):
        with pytest.raises(TypeError):
            from_python(object())


class TestBuilderDsl:
    def test_obj_with_fields(self):
        o = obj(field("name", "x"), field("n", 1), flag=True)
        assert o.keys() == ["name", "n", "flag"]
        assert o["flag"] == VPrimitive(True)

    def test_field_without_value_is_null(self):
        assert field("k") == ("k", JSON_NULL)

    def test_field_with_many_values_is_array(self):
        key, value = field("k", 1, "a")
        assert value == VArray([VPrimitive(1), VPrimitive("a")])

    def test_arr(self):
        assert arr(1, "a", None) == VArray([VPrimitive(1), VPrimitive("a"), JSON_NULL])

    def test_primitive(self):
        assert primitive(Shape.SQUARE) == VPrimitive("SQUARE")
        with pytest.raises(TypeError):
            primitive([1])
