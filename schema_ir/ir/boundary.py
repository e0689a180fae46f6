"""
Writer-side boundary checks.

Writers only ever receive a Document. These checks reject anything else,
in particular a raw OpenAPI mapping, and verify the Document invariants
writers rely on.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Mapping

from ..config import DEFAULT_HTTP_METHODS
from ..errors import IRBoundaryError
from .document import Document

_SOURCE_FORMAT_MARKERS = ("openapi", "swagger", "paths")


def assert_ir_document(value: Any, consumer: str = "writer") -> Document:
    """Return ``value`` if it is an IR Document, otherwise raise.

    Args:
        value: Whatever the consumer was handed
        consumer: Consumer name used in the error message

    Raises:
        IRBoundaryError: If ``value`` is not a Document
    """
    if isinstance(value, Document):
        return value
    if isinstance(value, Mapping) and any(marker in value for marker in _SOURCE_FORMAT_MARKERS):
        raise IRBoundaryError(f"{consumer} received a raw source-format document; build the IR first")
    raise IRBoundaryError(f"{consumer} expected an IR Document, got {type(value).__name__}")


def validate_document(document: Document) -> list[str]:
    """Check the structural invariants of a Document.

    Returns:
        The list of problems found (empty when the Document is valid)
    """
    problems: list[str] = []
    names = document.schema_names
    graph = document.dependency_graph

    duplicates = [name for name, count in Counter(graph.topological_order).items() if count > 1]
    if duplicates:
        problems.append(f"topological order repeats: {', '.join(sorted(duplicates))}")
    if set(graph.topological_order) != set(names):
        problems.append("topological order does not match schema names")
    if set(graph.nodes) != set(names):
        problems.append("dependency graph nodes do not match schema names")

    component_names = [component.name for component in document.schema_components]
    if component_names != names:
        problems.append("schema names do not match schema components")

    for operation in document.operations:
        if operation.method not in DEFAULT_HTTP_METHODS:
            problems.append(f"unsupported HTTP method {operation.method} on {operation.path}")

    return problems


def ensure_valid_document(value: Any, consumer: str = "writer") -> Document:
    """Boundary check plus invariant check, raising on the first failure."""
    document = assert_ir_document(value, consumer)
    problems = validate_document(document)
    if problems:
        raise IRBoundaryError(f"{consumer} received an invalid IR Document: {'; '.join(problems)}")
    return document
