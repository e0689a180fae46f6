"""
Final assembly shared by both producers.

Takes the components and operations a producer built, runs the graph
passes over them and returns the finished Document.
"""

from __future__ import annotations

import logging
from typing import Any

from .graph import build_dependency_graph, detect_circular_references
from .ir.document import Component, Document, Operation, OperationAdvisory, SchemaComponent
from .ir.enums import extract_enums

logger = logging.getLogger(__name__)


def finalize_document(
    source_format_version: str,
    info: dict[str, Any],
    components: list[Component],
    operations: list[Operation] | None = None,
    servers: list[dict[str, Any]] | None = None,
    advisories: list[OperationAdvisory] | None = None,
    **optional: Any,
) -> Document:
    """Run the dependency, cycle and enum passes and build the Document.

    Args:
        source_format_version: Version string of the input format
        info: Document info block
        components: Every component the producer built
        operations: Operations, empty for schema-only input
        servers: Server entries
        advisories: Non-fatal operation advisories
        **optional: Document fields carried through as-is
            (security, tags, external_docs, webhooks, json_schema_dialect)

    Returns:
        The assembled Document
    """
    operations = operations or []
    schema_components = [component for component in components if isinstance(component, SchemaComponent)]

    dependency_graph = build_dependency_graph(schema_components)
    circular = detect_circular_references(schema_components)
    if circular:
        logger.info("Circular references found in %d schema(s)", len(circular))

    document = Document(
        source_format_version=source_format_version,
        info=dict(info),
        servers=list(servers or []),
        components=list(components),
        operations=list(operations),
        dependency_graph=dependency_graph,
        schema_names=[component.name for component in schema_components],
        enums=extract_enums(components, operations),
        advisories=list(advisories or []),
        **optional,
    )
    logger.debug(
        "Assembled document: %d components, %d operations, %d enums",
        len(document.components),
        len(document.operations),
        len(document.enums),
    )
    return document
