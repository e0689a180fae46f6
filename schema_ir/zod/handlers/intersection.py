"""
Intersection schemas: ``z.intersection(A, B)`` and ``A.and(B)``.
"""

from __future__ import annotations

from ...errors import ZodParseError
from ...ir.nodes import SchemaNode
from ..constants import INTERSECTION_METHODS
from ..syntax import MethodChain
from .base import SchemaParser, ZodHandler


class IntersectionHandler(ZodHandler):
    methods = INTERSECTION_METHODS

    def parse(self, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        left = parse_schema(self.argument(chain, 0))
        right = parse_schema(self.argument(chain, 1))
        return SchemaNode(all_of=[left, right])

    def apply_and(self, schema: SchemaNode, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        """Fold chained ``.and(X)`` calls into an allOf around ``schema``."""
        members = []
        for method in chain.find("and"):
            if not method.arg_nodes:
                raise ZodParseError(".and() expects a schema argument")
            members.append(parse_schema(method.arg_nodes[0]))
        if not members:
            return schema
        if schema.all_of is not None and chain.base_method == "intersection":
            return SchemaNode(all_of=schema.all_of + members)
        return SchemaNode(all_of=[schema] + members)
