"""Tests for flexjson_core.keys."""

import pytest

from flexjson_core.builder import obj
from flexjson_core.keys import flex_get, flex_key, normalize, to_underscore
from flexjson_core.settings import MatchOptions
from flexjson_core.values import VPrimitive

NAMES = ["messageId", "Message_Id", "MESSAGE__ID", "__x__", "", "a-b_c", "ÄpfelBaum"]


class TestNormalize:
    @pytest.mark.parametrize("name", NAMES)
    def test_idempotent(self, name):
        assert normalize(normalize(name)) == normalize(name)

    @pytest.mark.parametrize("name", NAMES)
    def test_idempotent_with_custom_options(self, name):
        opts = MatchOptions(ignore_case=False, separators="-_")
        assert normalize(normalize(name, opts), opts) == normalize(name, opts)

    def test_default(self):
        assert normalize("Message_Id") == "messageid"

    def test_case_sensitive(self):
        assert normalize("Message_Id", MatchOptions(ignore_case=False)) == "MessageId"

    def test_keep_separators(self):
        assert normalize("Message_Id", MatchOptions(ignore_separators=False)) == "message_id"


class TestToUnderscore:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("someValue", "some_value"),
            ("messageId", "message_id"),
            ("message_id", "message_id"),
            ("parseHTTPResponse", "parse_http_response"),
            ("value2", "value_2"),
            ("URL", "url"),
            ("__private", "private"),
            ("a__b", "a_b"),
        ],
    )
    def test_cases(self, name, expected):
        assert to_underscore(name) == expected


class TestFlexGet:
    def test_matches_any_case_and_underscores(self):
        o = obj(Message_Id="x")
        assert flex_get(o, "message_id") == VPrimitive("x")
        assert flex_get(o, "messageId") == VPrimitive("x")

    def test_first_key_in_insertion_order_wins(self):
        o = obj(fooBar=1, foo_bar=2)
        assert flex_key(o, "FOO_BAR") == "fooBar"
        assert flex_get(o, "foo_bar") == VPrimitive(1)

    def test_null_is_absent(self):
        o = obj(a=None)
        assert flex_key(o, "a") == "a"
        assert flex_get(o, "a") is None

    def test_null_first_match_shadows_later_match(self):
        o = obj(A=None, a=1)
        assert flex_get(o, "a") is None

    def test_no_match(self):
        assert flex_get(obj(a=1), "b") is None

    def test_case_sensitive_options(self):
        o = obj(MessageId="x")
        opts = MatchOptions(ignore_case=False)
        assert flex_get(o, "messageid", opts) is None
        assert flex_get(o, "Message_Id", opts) == VPrimitive("x")

    def test_extra_separators(self):
        o = obj(**{"message-id": "x"})
        assert flex_get(o, "message_id") is None
        assert flex_get(o, "message_id", MatchOptions(separators="-_")) == VPrimitive("x")
