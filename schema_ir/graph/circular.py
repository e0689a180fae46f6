"""
Circular reference detection.

Each schema component gets its own depth-first walk from its own root.
A node found again while it is still on the walk's path stack is
recorded as circular, and the walk does not descend from it. Results go
into the root's ``metadata.circular_references`` as fully-qualified refs,
which is the only change made to nodes after construction.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from ..ir.document import Component, SchemaComponent
from ..ir.nodes import COMPONENT_SCHEMA_REF_PREFIX
from .dependency_graph import schema_references

logger = logging.getLogger(__name__)


def find_cycles_from(start: str, graph: Mapping[str, Iterable[str]]) -> list[str]:
    """Names revisited while on the path stack of a walk rooted at ``start``."""
    cycles: list[str] = []
    visited: set[str] = set()
    path_stack: set[str] = set()

    def walk(name: str) -> None:
        if name in path_stack:
            if name not in cycles:
                cycles.append(name)
            return
        if name in visited:
            return
        visited.add(name)
        path_stack.add(name)
        for dependency in graph.get(name, ()):
            walk(dependency)
        path_stack.discard(name)

    walk(start)
    return cycles


def detect_circular_references(components: Iterable[Component]) -> dict[str, list[str]]:
    """Annotate every schema component with the cycles reachable from it.

    Returns:
        Mapping of component name to the refs written into its metadata
    """
    schema_components = [component for component in components if isinstance(component, SchemaComponent)]
    graph = {component.name: schema_references(component.schema) for component in schema_components}

    results: dict[str, list[str]] = {}
    for component in schema_components:
        cycles = find_cycles_from(component.name, graph)
        if not cycles:
            continue
        refs = [f"{COMPONENT_SCHEMA_REF_PREFIX}{name}" for name in cycles]
        component.schema.metadata.circular_references = refs
        results[component.name] = refs
        logger.debug("Component %s reaches cycles through %s", component.name, ", ".join(cycles))
    return results
