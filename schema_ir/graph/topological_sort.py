"""
Deterministic topological sort over a name -> dependencies graph.
"""

from __future__ import annotations

from typing import Iterable, Mapping


def topological_sort(graph: Mapping[str, Iterable[str]]) -> list[str]:
    """Order names so that dependencies come before their dependents.

    Depth-first post-order over the graph keys in their given order.
    A dependency that is still being visited closes a cycle; that edge is
    skipped, so the first node of the cycle reached by the walk is
    emitted after the rest of the cycle instead of failing the sort.
    Names that only appear as dependencies are included as well.

    Args:
        graph: Mapping of name to the names it depends on

    Returns:
        Every name exactly once
    """
    order: list[str] = []
    visited: set[str] = set()
    visiting: set[str] = set()

    def visit(name: str) -> None:
        if name in visited or name in visiting:
            return
        visiting.add(name)
        for dependency in graph.get(name, ()):
            visit(dependency)
        visiting.discard(name)
        visited.add(name)
        order.append(name)

    for name in graph:
        visit(name)

    return order
