"""
Union schemas.
"""

from __future__ import annotations

from ...errors import ZodParseError
from ...ir.nodes import Discriminator, SchemaNode
from ..constants import UNION_METHODS
from ..syntax import MethodChain, literal_value
from .base import SchemaParser, ZodHandler


class UnionHandler(ZodHandler):
    """``z.union`` -> anyOf; ``z.discriminatedUnion`` and ``z.xor`` -> oneOf."""

    methods = UNION_METHODS

    def parse(self, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        if chain.base_method == "discriminatedUnion":
            property_name = literal_value(self.argument(chain, 0))
            if not isinstance(property_name, str):
                raise ZodParseError("z.discriminatedUnion() expects a string discriminator")
            members = [parse_schema(option) for option in self.array_argument(chain, 1)]
            return SchemaNode(one_of=members, discriminator=Discriminator(property_name=property_name))

        members = [parse_schema(option) for option in self.array_argument(chain)]
        if chain.base_method == "xor":
            return SchemaNode(one_of=members)
        return SchemaNode(any_of=members)

    def apply_or(self, schema: SchemaNode, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        """Fold chained ``.or(X)`` calls into an anyOf around ``schema``."""
        members = []
        for method in chain.find("or"):
            if not method.arg_nodes:
                raise ZodParseError(".or() expects a schema argument")
            members.append(parse_schema(method.arg_nodes[0]))
        if not members:
            return schema
        return SchemaNode(any_of=[schema] + members)
