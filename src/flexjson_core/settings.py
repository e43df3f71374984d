"""Mapping settings: key matching options and encoder null policy."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto


class NullPolicy(Enum):
    """What the encoder writes for a ``None`` field value."""

    Emit = auto()   # "field": null
    Omit = auto()   # key left out


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """How a field name is compared against JSON object keys."""

    ignore_case: bool = True
    ignore_separators: bool = True
    separators: str = "_"


@dataclass(frozen=True, slots=True)
class MappingSettings:
    match: MatchOptions = field(default_factory=MatchOptions)
    null_policy: NullPolicy = NullPolicy.Emit
    # Unknown enum names on a nullable field leave it unset instead of failing.
    lenient_optional_enums: bool = True

    def replace(self, **changes) -> MappingSettings:
        return replace(self, **changes)


DEFAULT_SETTINGS = MappingSettings()
