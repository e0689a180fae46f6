"""
OpenAPI document -> IR Document.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..assembly import finalize_document
from ..config import BuildConfig
from ..errors import UnknownSchemaShape
from ..ir.document import Document
from .components import ComponentsBuilder
from .context import BuildContext
from .operations import OperationBuilder
from .refs import ComponentResolver
from .schemas import SchemaBuilder
from .security import build_security_requirements

logger = logging.getLogger(__name__)

# Document-level keys carried through unchanged: OpenAPI key -> Document field
_PASSTHROUGH_FIELDS = {
    "tags": "tags",
    "externalDocs": "external_docs",
    "webhooks": "webhooks",
    "jsonSchemaDialect": "json_schema_dialect",
}


class IRBuilder:
    """Builds the IR for a single bundled OpenAPI document.

    A builder holds no state between calls to ``build``; every call
    creates its own context and collaborators.
    """

    def __init__(self, config: BuildConfig | None = None):
        self.config = config or BuildConfig()

    def build(self, document: Mapping[str, Any]) -> Document:
        """
        Build the IR.

        Args:
            document: A bundled OpenAPI 3.x document (already loaded from JSON/YAML)

        Returns:
            The finished IR Document

        Raises:
            IRBuildError: Any structural problem, with the location path
        """
        if not isinstance(document, Mapping):
            raise UnknownSchemaShape(f"Expected an OpenAPI document object, got {type(document).__name__}")

        context = BuildContext(root_document=document, config=self.config)
        schemas = SchemaBuilder(ComponentResolver(document))

        components = ComponentsBuilder(schemas).build(document, context)

        document_security = None
        if "security" in document:
            document_security = build_security_requirements(document["security"])

        operation_builder = OperationBuilder(schemas, document_security)
        operations = operation_builder.build_all(document.get("paths"), context)

        optional = {field: document[key] for key, field in _PASSTHROUGH_FIELDS.items() if key in document}
        logger.info(
            "Built IR for %s: %d components, %d operations",
            (document.get("info") or {}).get("title", "untitled document"),
            len(components),
            len(operations),
        )
        return finalize_document(
            source_format_version=str(document.get("openapi", "")),
            info=dict(document.get("info") or {}),
            components=components,
            operations=operations,
            servers=list(document.get("servers") or []),
            advisories=operation_builder.advisories,
            security=document_security,
            **optional,
        )


def build_ir(document: Mapping[str, Any], config: BuildConfig | None = None) -> Document:
    """Build the IR for a bundled OpenAPI document."""
    return IRBuilder(config).build(document)
