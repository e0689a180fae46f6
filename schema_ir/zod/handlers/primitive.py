"""
Primitive and literal schemas.
"""

from __future__ import annotations

from ...errors import ZodParseError
from ...ir.nodes import UNSET, SchemaMetadata, SchemaNode
from ..constants import PRIMITIVE_TYPES, UNSUPPORTED_PRIMITIVES
from ..constraints import number_constraints, string_constraints
from ..syntax import MethodChain, literal_value
from .base import SchemaParser, ZodHandler


def literal_type(value) -> str | None:
    """JSON type of a literal value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


class PrimitiveHandler(ZodHandler):
    """``z.string()``, ``z.number()``, Zod 4 format builders and ``z.literal()``."""

    methods = tuple(PRIMITIVE_TYPES) + UNSUPPORTED_PRIMITIVES + ("literal",)

    def parse(self, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        if chain.base_method in UNSUPPORTED_PRIMITIVES:
            raise ZodParseError(f"z.{chain.base_method}() has no JSON Schema equivalent")
        if chain.base_method == "literal":
            return self._literal(chain)

        schema_type, schema_format, encoding = PRIMITIVE_TYPES[chain.base_method]
        fields = {"type": schema_type, "format": schema_format, "content_encoding": encoding}
        if schema_type == "string":
            fields.update(string_constraints(chain.methods))
        elif schema_type in ("number", "integer"):
            fields.update(number_constraints(chain.methods))

        metadata = SchemaMetadata(
            required=chain.base_method != "undefined",
            nullable=chain.base_method == "null",
        )
        return SchemaNode(metadata=metadata, **fields)

    def _literal(self, chain: MethodChain) -> SchemaNode:
        value = literal_value(self.argument(chain))
        if value is UNSET:
            raise ZodParseError("z.literal() expects a literal value")
        return SchemaNode(
            type=literal_type(value),
            enum=[value],
            metadata=SchemaMetadata(nullable=value is None),
        )
