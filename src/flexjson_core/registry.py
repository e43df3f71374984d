"""Descriptor registry: derive-once cache of TypeDescriptors and cycle detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from .errors import CyclicType
from .model import Kind, KindTag
from .typedef import TypeDescriptor, derive_descriptor

logger = logging.getLogger(__name__)


@dataclass
class DescriptorRegistry:
    """Holds the descriptor of every type seen so far.

    Entries are immutable once inserted. Concurrent first uses of a type may
    derive it twice; the first insertion wins and both callers get it.
    """

    descriptors: dict[type, TypeDescriptor] = field(default_factory=dict)

    # -- Lookup ---------------------------------------------------------

    def resolve(self, cls: type) -> TypeDescriptor | None:
        return self.descriptors.get(cls)

    def __contains__(self, cls: object) -> bool:
        return cls in self.descriptors

    def describe(self, cls: type) -> TypeDescriptor:
        """Return the descriptor of *cls*, deriving it on first use.

        Every record type reachable from *cls* is derived in the same step,
        so unsupported nested annotations and cyclic required references
        are reported here rather than in the middle of a decode.
        """
        td = self.descriptors.get(cls)
        if td is not None:
            return td
        pending: dict[type, TypeDescriptor] = {}
        self._derive_all(cls, pending)
        _check_cycles(pending, self.descriptors)
        for t, d in pending.items():
            self.descriptors.setdefault(t, d)
        return self.descriptors[cls]

    # -- Registration ---------------------------------------------------

    def register(self, td: TypeDescriptor) -> TypeDescriptor:
        """Install a hand-built descriptor; an existing entry is kept."""
        pending = {td.cls: td}
        for f in td.fields:
            for rec in record_targets(f.kind):
                self._derive_all(rec, pending)
        _check_cycles(pending, self.descriptors)
        for t, d in pending.items():
            self.descriptors.setdefault(t, d)
        return self.descriptors[td.cls]

    def clear(self) -> None:
        self.descriptors.clear()

    # -- Internals ------------------------------------------------------

    def _derive_all(self, cls: type, pending: dict[type, TypeDescriptor]) -> None:
        if cls in self.descriptors or cls in pending:
            return
        td = derive_descriptor(cls)
        pending[cls] = td
        logger.debug("derived descriptor for %s (%d fields)", td.type_name, len(td.fields))
        for f in td.fields:
            for rec in record_targets(f.kind):
                self._derive_all(rec, pending)


def record_targets(kind: Kind) -> Iterator[type]:
    """Every record class mentioned anywhere in *kind*."""
    if kind.tag is KindTag.Record:
        yield kind.target
    if kind.element is not None:
        yield from record_targets(kind.element)


def _strong_edges(td: TypeDescriptor) -> Iterator[tuple[str, type]]:
    # Only a required record field forces a nested instance to exist.
    for f in td.fields:
        if f.kind.tag is KindTag.Record and not f.optional and not f.has_default:
            yield f.name, f.kind.target


def _check_cycles(
    pending: dict[type, TypeDescriptor], known: dict[type, TypeDescriptor]
) -> None:
    """Raise CyclicType if the new descriptors close a loop of required records."""
    done: set[type] = set()
    for start in pending:
        if start in done or start in known:
            continue
        # iterative DFS; stack entries are (type, edge iterator)
        path: list[type] = [start]
        on_path = {start}
        stack = [(start, _strong_edges(pending[start]))]
        while stack:
            cls, edges = stack[-1]
            nxt = next(edges, None)
            if nxt is None:
                stack.pop()
                path.pop()
                on_path.discard(cls)
                done.add(cls)
                continue
            _, target = nxt
            if target in on_path:
                cycle = path[path.index(target):] + [target]
                raise CyclicType([t.__qualname__ for t in cycle])
            if target in done or target in known:
                continue
            td = pending[target]
            path.append(target)
            on_path.add(target)
            stack.append((target, _strong_edges(td)))


default_registry = DescriptorRegistry()


def describe(cls: type) -> TypeDescriptor:
    """Descriptor of *cls* from the process-wide registry."""
    return default_registry.describe(cls)
