"""
Collection and enumeration schemas: array, tuple, record, enum, nativeEnum.
"""

from __future__ import annotations

from ...errors import ZodParseError
from ...ir.nodes import UNSET, SchemaNode
from ..constants import COMPOSITION_METHODS
from ..constraints import array_constraints
from ..syntax import MethodChain, literal_value
from .base import SchemaParser, ZodHandler


class CompositionHandler(ZodHandler):
    methods = COMPOSITION_METHODS

    def parse(self, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        if chain.base_method == "array":
            return SchemaNode(type="array", items=parse_schema(self.argument(chain)), **array_constraints(chain.methods))
        if chain.base_method == "tuple":
            return self._tuple(chain, parse_schema)
        if chain.base_method == "record":
            # z.record(valueSchema) or z.record(keySchema, valueSchema)
            value = chain.base_args[-1] if chain.base_args else self.argument(chain)
            return SchemaNode(type="object", additional_properties=parse_schema(value))
        if chain.base_method == "nativeEnum":
            # Members of a TS enum are not visible without type information
            self.argument(chain)
            return SchemaNode(type="string")
        return self._enum(chain)

    def _tuple(self, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        prefix_items = [parse_schema(element) for element in self.array_argument(chain)]
        node = SchemaNode(
            type="array",
            prefix_items=prefix_items,
            min_items=len(prefix_items),
            max_items=len(prefix_items),
        )
        # z.tuple([...], rest) and .rest(rest) both open the tail
        rest_nodes = chain.base_args[1:2] + [method.arg_nodes[0] for method in chain.find("rest") if method.arg_nodes]
        if rest_nodes:
            node.items = parse_schema(rest_nodes[-1])
            node.max_items = None
        return node

    def _enum(self, chain: MethodChain) -> SchemaNode:
        values = literal_value(self.argument(chain))
        if isinstance(values, dict):
            # z.enum({ A: "a", B: "b" })
            values = list(values.values())
        if values is UNSET or not isinstance(values, list):
            raise ZodParseError("z.enum() expects a literal array of values")
        return SchemaNode(type="string", enum=values)
