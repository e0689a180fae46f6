"""
Ordered property map for object schemas.

Downstream writers lay out generated fields in the order returned here,
so the map must replay the exact order properties were declared in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, Mapping

if TYPE_CHECKING:
    from .nodes import SchemaNode


class SchemaProperties:
    """Insertion-ordered, read-only name -> SchemaNode map."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, SchemaNode] | Iterable[tuple[str, SchemaNode]] = ()):
        items = entries.items() if isinstance(entries, Mapping) else entries
        self._entries: dict[str, SchemaNode] = {}
        for name, node in items:
            if name in self._entries:
                raise ValueError(f"Duplicate property name: {name}")
            self._entries[name] = node

    def get(self, name: str) -> SchemaNode | None:
        return self._entries.get(name)

    def has(self, name: str) -> bool:
        return name in self._entries

    def entries(self) -> list[tuple[str, SchemaNode]]:
        return list(self._entries.items())

    def keys(self) -> list[str]:
        return list(self._entries)

    def values(self) -> list[SchemaNode]:
        return list(self._entries.values())

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __getitem__(self, name: str) -> SchemaNode:
        return self._entries[name]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaProperties):
            return NotImplemented
        return self.entries() == other.entries()

    def __repr__(self) -> str:
        return f"SchemaProperties({self.keys()!r})"

    def to_dict(self) -> dict:
        return {name: node.to_dict() for name, node in self._entries.items()}
