"""Decode/encode round trips through Value trees and JSON text."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import NamedTuple, Optional

import pytest

from flexjson_core.builder import arr, obj
from flexjson_core.decoder import construct
from flexjson_core.encoder import fill
from flexjson_core.settings import DEFAULT_SETTINGS, NullPolicy
from flexjson_core.text import dumps, loads
from flexjson_core.values import VObject


class Status(Enum):
    OPEN = "open"
    CLOSED = "closed"


class Point(NamedTuple):
    x: int
    y: int = 0


@dataclass
class Item:
    sku: str
    quantity: int
    unitPrice: Decimal


@dataclass
class Order:
    orderId: str
    status: Status
    items: list[Item]
    origin: Point
    weight: float = 0.0
    note: Optional[str] = None
    gift: bool = False
    labels: tuple[str, ...] = ()
    flags: frozenset[str] = frozenset()
    counts: dict[int, int] = field(default_factory=dict)
    by_status: dict[Status, list[str]] = field(default_factory=dict)
    meta: Optional[VObject] = None
    previous: Optional[Status] = None


@dataclass
class Message:
    message: str
    value: int
    maybe: bool


def _order(**changes):
    base = dict(
        orderId="o-17",
        status=Status.OPEN,
        items=[Item("b", 2, Decimal("3.25")), Item("a", 1, Decimal("10"))],
        origin=Point(3, 4),
        weight=1.5,
        note="leave at door",
        gift=True,
        labels=("z", "a", "m"),
        flags=frozenset({"fragile", "express"}),
        counts={3: 1, 1: 2},
        by_status={Status.CLOSED: ["x", "y"]},
        meta=obj(source="web", tags=arr(1, 2)),
        previous=Status.CLOSED,
    )
    base.update(changes)
    return Order(**base)


ORDERS = [
    _order(),
    _order(note=None, meta=None, previous=None),
    _order(items=[], labels=(), counts={}),
]


@pytest.mark.parametrize("order", ORDERS)
@pytest.mark.parametrize("policy", [NullPolicy.Emit, NullPolicy.Omit])
def test_construct_fill_round_trip(order, policy):
    settings = DEFAULT_SETTINGS.replace(null_policy=policy)
    assert construct(fill(order, settings=settings), Order) == order


@pytest.mark.parametrize("order", ORDERS)
def test_text_round_trip(order):
    assert loads(dumps(order), Order) == order


def test_array_order_preserved():
    order = _order()
    value = fill(order)
    assert [i["sku"].value for i in value["items"]] == ["b", "a"]
    again = fill(construct(value, Order))
    assert again["items"] == value["items"]
    assert again["labels"] == arr("z", "a", "m")


def test_message_scenario():
    original = obj(message="hi", value=42, maybe=True)
    decoded = construct(original, Message)
    assert decoded == Message(message="hi", value=42, maybe=True)
    assert fill(decoded) == original


def test_reencoding_uses_canonical_names():
    decoded = construct(obj(OrderID="o", STATUS="OPEN", Items=[], Origin={"X": 1}), Order)
    value = fill(decoded)
    assert value.keys()[:4] == ["order_id", "status", "items", "origin"]
    assert value["origin"] == obj(x=1, y=0)
