"""Exceptions raised by the value model, the mapping engine and the text boundary."""

from __future__ import annotations


class FlexJsonError(Exception):
    """Base class for all flexjson_core failures."""


def join_path(segment: str, path: str) -> str:
    """``join_path("items", "[2].sku") == "items[2].sku"``."""
    if not path:
        return segment
    if path.startswith("["):
        return segment + path
    return f"{segment}.{path}"


class ParseError(FlexJsonError):
    """Raised when JSON text is malformed."""

    def __init__(self, message: str, pos: int, lineno: int = 0, colno: int = 0) -> None:
        super().__init__(f"{message} (offset {pos})")
        self.pos = pos
        self.lineno = lineno
        self.colno = colno


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

class DecodeError(FlexJsonError):
    """Base class for failures while constructing a native value.

    ``path`` is the dotted location of the failing field relative to the
    outermost ``construct`` call, ``type_name`` the record being built when
    the failure happened.
    """

    def __init__(self, reason: str, *, path: str = "", type_name: str = "") -> None:
        self.reason = reason
        self.path = path
        self.type_name = type_name
        super().__init__(self._render())

    def _render(self) -> str:
        where = self.path or "<root>"
        if self.type_name:
            return f"{where} ({self.type_name}): {self.reason}"
        return f"{where}: {self.reason}"

    def at(self, segment: str, type_name: str | None = None) -> DecodeError:
        """Return a copy of this error with *segment* prefixed to its path."""
        path = join_path(segment, self.path)
        return type(self)(self.reason, path=path, type_name=self.type_name or type_name or "")


class TypeMismatch(DecodeError):
    """The JSON value's variant does not fit the field's kind."""


class MissingField(DecodeError):
    """A required field was absent (or null) after flexible lookup."""

    @property
    def field_name(self) -> str:
        return self.path.rsplit(".", 1)[-1]


class UnknownEnumValue(DecodeError):
    """A string did not name any constant of the target enumeration."""


class NumericConversionError(DecodeError):
    """A number could not be represented by the target numeric type."""


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

class EncodeError(FlexJsonError):
    """Raised when a native value cannot be turned into a Value tree."""

    def __init__(self, reason: str, *, path: str = "") -> None:
        self.reason = reason
        self.path = path
        super().__init__(f"{path or '<root>'}: {reason}")

    def at(self, segment: str) -> EncodeError:
        return EncodeError(self.reason, path=join_path(segment, self.path))


# ---------------------------------------------------------------------------
# Type descriptors
# ---------------------------------------------------------------------------

class DescriptorError(FlexJsonError):
    """Base class for failures while deriving a type descriptor."""


class UnsupportedType(DescriptorError):
    """No descriptor can be derived for a type or annotation."""


class CyclicType(DescriptorError):
    """A record type reaches itself through required record fields only."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__("cyclic record type: " + " -> ".join(cycle))


__all__ = [
    "FlexJsonError",
    "ParseError",
    "DecodeError",
    "TypeMismatch",
    "MissingField",
    "UnknownEnumValue",
    "NumericConversionError",
    "EncodeError",
    "DescriptorError",
    "UnsupportedType",
    "CyclicType",
]
