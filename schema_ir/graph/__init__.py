"""
Dependency analysis over schema components.
"""

from __future__ import annotations

from .circular import detect_circular_references, find_cycles_from
from .dependency_graph import build_dependency_graph, direct_dependencies, find_cycle_members, schema_references
from .topological_sort import topological_sort

__all__ = [
    "build_dependency_graph",
    "detect_circular_references",
    "direct_dependencies",
    "find_cycle_members",
    "find_cycles_from",
    "schema_references",
    "topological_sort",
]
