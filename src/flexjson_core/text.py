"""JSON text boundary: parse text into Value trees and serialize them back.

Built on the standard library ``json`` module. Objects are assembled as
VObjects while parsing so key order (and, for duplicate keys, the first
position with the last value) is preserved.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, TypeVar

from .builder import from_python
from .decoder import construct
from .encoder import fill
from .errors import EncodeError, ParseError
from .interop import to_python
from .values import Value, VArray, VObject

T = TypeVar("T")


def _object_from_pairs(pairs: list[tuple[str, Any]]) -> VObject:
    obj = VObject()
    for key, value in pairs:
        obj.set(key, value)
    return obj


def _default(o: Any) -> Any:
    if isinstance(o, Decimal):
        return float(o)
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse(text: str | bytes) -> Value:
    """Parse JSON *text*; raises ParseError with the offending offset."""
    try:
        raw = json.loads(text, object_pairs_hook=_object_from_pairs)
    except json.JSONDecodeError as exc:
        raise ParseError(exc.msg, exc.pos, exc.lineno, exc.colno) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"invalid UTF-8: {exc.reason}", exc.start) from exc
    except ValueError as exc:
        # e.g. integers past the interpreter's digit limit
        raise ParseError(str(exc), 0) from exc
    return from_python(raw)


def parse_object(text: str | bytes) -> VObject:
    value = parse(text)
    if not isinstance(value, VObject):
        raise ParseError(f"expected a JSON object, got {value.type_of.name.lower()}", 0)
    return value


def parse_array(text: str | bytes) -> VArray:
    value = parse(text)
    if not isinstance(value, VArray):
        raise ParseError(f"expected a JSON array, got {value.type_of.name.lower()}", 0)
    return value


# ---------------------------------------------------------------------------
# Serializing
# ---------------------------------------------------------------------------

def serialize(value: Value, *, indent: int | None = None, sort_keys: bool = False) -> str:
    """Compact JSON text for *value* (indented when *indent* is given).

    Decimals are written as JSON numbers via ``float``; NaN and infinities
    are rejected because JSON cannot represent them.
    """
    separators = (",", ":") if indent is None else (",", ": ")
    try:
        return json.dumps(
            to_python(value),
            ensure_ascii=False,
            allow_nan=False,
            indent=indent,
            separators=separators,
            sort_keys=sort_keys,
            default=_default,
        )
    except ValueError as exc:
        raise EncodeError(str(exc)) from exc


def pretty(value: Value) -> str:
    return serialize(value, indent=2)


# ---------------------------------------------------------------------------
# Text <-> native shortcuts
# ---------------------------------------------------------------------------

def loads(text: str | bytes, cls: type[T], **kwargs: Any) -> T:
    """``construct(parse(text), cls)``."""
    return construct(parse(text), cls, **kwargs)


def dumps(instance: Any, **kwargs: Any) -> str:
    """``serialize(fill(instance))``."""
    return serialize(fill(instance, **kwargs))
