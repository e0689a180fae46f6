"""
Recursive descent over Zod expressions.
"""

from __future__ import annotations

import logging

from tree_sitter import Node

from ..config import BuildConfig
from ..errors import RecursionLimitExceeded, ZodParseError
from ..ir.nodes import SchemaNode
from .bindings import BindingResolver
from .handlers import HandlerTable, IntersectionHandler, ReferenceHandler, UnionHandler
from .meta import apply_modifiers
from .syntax import MethodChain, get_method_chain, get_reference_chain, location, node_text, unwrap

logger = logging.getLogger(__name__)

_IDENTIFIER_TYPES = ("identifier", "shorthand_property_identifier")


class ZodDispatcher:
    """Turns one Zod expression into a SchemaNode.

    Base methods are routed through the injected ``HandlerTable``; chained
    ``.and()``/``.or()`` and the presence and documentation modifiers are
    applied on the way back up.

    Args:
        bindings: Resolver deciding which identifiers are the Zod import
        table: Handler table built for this parse
        config: Build configuration, for ``max_depth``
    """

    def __init__(self, bindings: BindingResolver, table: HandlerTable, config: BuildConfig | None = None):
        self.bindings = bindings
        self.table = table
        self.config = config or BuildConfig()
        self._depth = 0

    def parse_schema(self, node: Node) -> SchemaNode:
        """Parse an expression, failing with ZodParseError if it is not a schema.

        Nested schemas recurse straight back into this method through the
        handler, so each nesting level costs two interpreter frames and
        ``max_depth`` stays well inside the default recursion limit.

        Raises:
            RecursionLimitExceeded: If nesting passes ``config.max_depth``
            ZodParseError: If the expression is not a supported schema
        """
        self._depth += 1
        try:
            if self._depth > self.config.max_depth:
                line, column = location(node)
                raise RecursionLimitExceeded(
                    f"Schema nesting exceeds max_depth={self.config.max_depth}", f"line {line}, column {column}"
                )
            node = unwrap(node)
            if node.type in _IDENTIFIER_TYPES:
                return apply_modifiers(self.table.get(ReferenceHandler).reference(node), [])
            if node.type != "call_expression":
                raise ZodParseError(f"Not a Zod schema expression: {node_text(node)[:60]!r}")

            chain = get_method_chain(node, self.bindings)
            if chain is not None:
                handler = self.table.for_method(chain.base_method)
                if handler is None:
                    raise ZodParseError(f"Unsupported Zod method z.{chain.base_method}()")
                logger.debug("Parsing z.%s() with %s", chain.base_method, type(handler).__name__)
                schema = handler.parse(chain, self.parse_schema)
                return apply_modifiers(self._apply_combinators(schema, chain), chain.methods)

            reference_chain = get_reference_chain(node, self.bindings)
            if reference_chain is None:
                raise ZodParseError(f"Not a Zod schema expression: {node_text(node)[:60]!r}")
            identifier, methods = reference_chain
            chain = MethodChain(base_method="", base_call=node, methods=methods)
            schema = self.table.get(ReferenceHandler).reference(identifier)
            return apply_modifiers(self._apply_combinators(schema, chain), methods)
        finally:
            self._depth -= 1

    def _apply_combinators(self, schema: SchemaNode, chain: MethodChain) -> SchemaNode:
        schema = self.table.get(IntersectionHandler).apply_and(schema, chain, self.parse_schema)
        return self.table.get(UnionHandler).apply_or(schema, chain, self.parse_schema)
