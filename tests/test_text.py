"""Tests for the JSON text boundary."""

from dataclasses import dataclass
from decimal import Decimal

import pytest

from flexjson_core.builder import arr, obj
from flexjson_core.errors import EncodeError, MissingField, ParseError
from flexjson_core.text import dumps, loads, parse, parse_array, parse_object, pretty, serialize
from flexjson_core.values import JSON_NULL, JsonType, VArray, VObject, VPrimitive


@dataclass
class Message:
    message: str
    value: int
    maybe: bool


class TestParse:
    def test_mixed_array_round_trip(self):
        first = parse('[1,"a",true,null]')
        assert first == VArray([VPrimitive(1), VPrimitive("a"), VPrimitive(True), JSON_NULL])
        text = serialize(first)
        assert text == '[1,"a",true,null]'
        assert parse(text) == first

    def test_object_keeps_key_order(self):
        value = parse('{"z": 1, "a": {"m": [], "b": null}}')
        assert isinstance(value, VObject)
        assert value.keys() == ["z", "a"]
        assert value["a"].keys() == ["m", "b"]

    def test_duplicate_keys_last_value_first_position(self):
        value = parse('{"a": 1, "b": 2, "a": 3}')
        assert value.keys() == ["a", "b"]
        assert value["a"] == VPrimitive(3)

    def test_scalars(self):
        assert parse("true") == VPrimitive(True)
        assert parse("null") is JSON_NULL
        assert parse("2.5").type_of is JsonType.Number

    def test_true_and_one_differ(self):
        a, b = parse("[true, 1]")
        assert a != b

    def test_bytes_input(self):
        assert parse(b'{"k": "v"}') == obj(k="v")

    def test_malformed_offset(self):
        with pytest.raises(ParseError) as exc_info:
            parse('{"a": }')
        err = exc_info.value
        assert err.pos == 6
        assert err.lineno == 1
        assert err.colno == 7

    def test_oversized_integer(self):
        with pytest.raises(ParseError):
            parse("1" * 5000)

    def test_invalid_utf8(self):
        with pytest.raises(ParseError):
            parse(b'"\xff"')

    def test_parse_object(self):
        assert parse_object('{"a": 1}') == obj(a=1)
        with pytest.raises(ParseError):
            parse_object("[1]")

    def test_parse_array(self):
        assert parse_array("[]") == arr()
        with pytest.raises(ParseError):
            parse_array("{}")


class TestSerialize:
    def test_compact(self):
        assert serialize(obj(a=arr(1, 2), b="x")) == '{"a":[1,2],"b":"x"}'

    def test_sort_keys(self):
        assert serialize(obj(b=1, a=2), sort_keys=True) == '{"a":2,"b":1}'

    def test_pretty(self):
        assert pretty(obj(a=1)) == '{\n  "a": 1\n}'

    def test_unicode_is_kept(self):
        assert serialize(obj(name="日本")) == '{"name":"日本"}'

    def test_decimal(self):
        assert serialize(arr(Decimal("1.5"))) == "[1.5]"

    def test_nan_is_rejected(self):
        value = parse("[NaN]")
        with pytest.raises(EncodeError):
            serialize(value)


class TestShortcuts:
    def test_loads(self):
        assert loads('{"Message": "hi", "VALUE": 42, "maybe": true}', Message) == Message("hi", 42, True)

    def test_loads_missing(self):
        with pytest.raises(MissingField):
            loads('{"message": "hi"}', Message)

    def test_dumps(self):
        assert dumps(Message("hi", 42, True)) == '{"message":"hi","value":42,"maybe":true}'
