"""
Schema dependency graph.

Edges come from the $ref targets reachable inside each schema component
(properties, items, prefix items, additional properties and composition
members). Refs are never followed, and edges to names that are not
schema components are dropped, so unresolved external refs stay leaves.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from ..ir.document import DependencyGraph, DependencyNode, SchemaComponent
from ..ir.nodes import SchemaNode
from ..ir.references import schema_name_from_ref
from .topological_sort import topological_sort

logger = logging.getLogger(__name__)


def schema_references(schema: SchemaNode) -> list[str]:
    """Names of the schema components referenced from ``schema``, in encounter order."""
    names: list[str] = []
    for ref in schema.iter_refs():
        name = schema_name_from_ref(ref)
        if name is not None and name not in names:
            names.append(name)
    return names


def direct_dependencies(components: Iterable[SchemaComponent]) -> dict[str, list[str]]:
    """Build the name -> direct dependencies graph for schema components."""
    components = list(components)
    known = {component.name for component in components}
    graph: dict[str, list[str]] = {}
    for component in components:
        dependencies = []
        for name in schema_references(component.schema):
            if name in known:
                dependencies.append(name)
            else:
                logger.debug("Dropping edge %s -> %s: not a schema component", component.name, name)
        graph[component.name] = dependencies
    return graph


def find_cycle_members(graph: Mapping[str, Iterable[str]]) -> list[str]:
    """Every name that lies on at least one cycle, in discovery order."""
    members: list[str] = []
    visited: set[str] = set()
    on_stack: set[str] = set()
    path: list[str] = []

    def visit(name: str) -> None:
        if name in on_stack:
            for member in path[path.index(name) :]:
                if member not in members:
                    members.append(member)
            return
        if name in visited:
            return
        visited.add(name)
        on_stack.add(name)
        path.append(name)
        for dependency in graph.get(name, ()):
            visit(dependency)
        path.pop()
        on_stack.discard(name)

    for name in graph:
        visit(name)
    return members


def compute_depths(order: list[str], graph: Mapping[str, Iterable[str]]) -> dict[str, int]:
    """Leaves are 0; everything else is one more than its deepest dependency."""
    depths: dict[str, int] = {}
    for name in order:
        dependencies = list(graph.get(name, ()))
        if not dependencies:
            depths[name] = 0
        else:
            depths[name] = 1 + max(depths.get(dependency, 0) for dependency in dependencies)
    return depths


def build_dependency_graph(components: Iterable[SchemaComponent]) -> DependencyGraph:
    """Build the document-level dependency graph.

    Pure function of the components: running it twice on the same input
    gives identical order and cycle lists.
    """
    graph = direct_dependencies(components)
    if not graph:
        return DependencyGraph()

    order = topological_sort(graph)
    cycle_members = find_cycle_members(graph)
    depths = compute_depths(order, graph)

    nodes = {
        name: DependencyNode(
            name=name,
            dependencies=list(dependencies),
            depth=depths.get(name, 0),
            is_circular=name in cycle_members,
        )
        for name, dependencies in graph.items()
    }
    for name, dependencies in graph.items():
        for dependency in dependencies:
            nodes[dependency].dependents.append(name)

    logger.debug("Dependency graph: %d schemas, %d on cycles", len(nodes), len(cycle_members))
    return DependencyGraph(nodes=nodes, topological_order=order, circular_references=cycle_members)
