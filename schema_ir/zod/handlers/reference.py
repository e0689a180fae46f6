"""
References: identifiers naming other schemas, and ``z.lazy``.
"""

from __future__ import annotations

import logging
from typing import Callable

from tree_sitter import Node

from ...errors import ZodParseError
from ...ir.nodes import COMPONENT_SCHEMA_REF_PREFIX, SchemaNode
from ..constants import REFERENCE_METHODS
from ..syntax import MethodChain, function_body_expression, node_text, unwrap
from .base import SchemaParser, ZodHandler

logger = logging.getLogger(__name__)


class ReferenceHandler(ZodHandler):
    """Turns identifiers into ``$ref`` nodes and unwraps ``z.lazy``.

    Args:
        component_name: Maps a variable name to its component name
        declared: Variable names declared as schemas in the same source
    """

    methods = REFERENCE_METHODS

    def __init__(self, component_name: Callable[[str], str], declared: set[str] | None = None):
        self.component_name = component_name
        self.declared = declared if declared is not None else set()

    def parse(self, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        getter = unwrap(self.argument(chain))
        if getter.type not in ("arrow_function", "function_expression", "function"):
            raise ZodParseError("z.lazy() expects a function returning a schema")
        body = function_body_expression(getter)
        if body is None:
            raise ZodParseError("z.lazy() getter must return a schema expression")
        return parse_schema(body)

    def reference(self, identifier: Node) -> SchemaNode:
        return self.reference_name(node_text(identifier))

    def reference_name(self, name: str) -> SchemaNode:
        """$ref node for the schema declared as variable ``name``."""
        if name not in self.declared:
            logger.debug("Identifier %s is not declared in this source; emitting a placeholder ref", name)
        return SchemaNode.reference(f"{COMPONENT_SCHEMA_REF_PREFIX}{self.component_name(name)}")
