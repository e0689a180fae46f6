"""
Object schemas.
"""

from __future__ import annotations

from ...errors import ZodParseError
from ...ir.nodes import SchemaNode
from ...ir.properties import SchemaProperties
from ..constants import OBJECT_METHODS
from ..syntax import MethodChain, object_entries, unwrap
from .base import SchemaParser, ZodHandler

# Base method -> default additionalProperties
_BASE_STRICTNESS = {"object": None, "strictObject": False, "looseObject": True}

# Chained method -> additionalProperties
_CHAIN_STRICTNESS = {"strict": False, "passthrough": True, "strip": None}


class ObjectHandler(ZodHandler):
    """``z.object({...})`` and the Zod 4 strict/loose variants.

    A property is required unless its own chain made it optional.
    """

    methods = OBJECT_METHODS

    def parse(self, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        shape = unwrap(self.argument(chain)) if chain.base_args else None
        if shape is not None and shape.type != "object":
            raise ZodParseError(f"z.{chain.base_method}() expects an object literal shape")

        entries = []
        required = []
        for name, value in object_entries(shape) if shape is not None else []:
            prop_schema = parse_schema(value)
            entries.append((name, prop_schema))
            if prop_schema.metadata.required:
                required.append(name)

        additional = _BASE_STRICTNESS[chain.base_method]
        for method in chain.methods:
            if method.name in _CHAIN_STRICTNESS:
                additional = _CHAIN_STRICTNESS[method.name]

        return SchemaNode(
            type="object",
            properties=SchemaProperties(entries),
            required=required,
            additional_properties=additional,
        )
