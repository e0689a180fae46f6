"""
Base class for Zod node-kind handlers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from tree_sitter import Node

from ...errors import ZodParseError
from ...ir.nodes import SchemaNode
from ..syntax import MethodChain

SchemaParser = Callable[[Node], SchemaNode]


class ZodHandler(ABC):
    """Builds the structural SchemaNode for one family of Zod base methods.

    Handlers receive the extracted chain and a ``parse_schema`` callback
    for nested schemas. Presence and documentation modifiers are applied
    by the dispatcher afterwards, so handlers only deal with structure
    and type-specific constraints.

    Attributes:
        methods: Base method names this handler is registered for
    """

    methods: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, chain: MethodChain, parse_schema: SchemaParser) -> SchemaNode:
        """Build the node for ``chain``.

        Raises:
            ZodParseError: If the call cannot be turned into a schema
        """
        pass

    def argument(self, chain: MethodChain, index: int = 0) -> Node:
        """Return the base call argument at ``index`` or fail."""
        if len(chain.base_args) <= index:
            raise ZodParseError(f"z.{chain.base_method}() expects at least {index + 1} argument(s)")
        return chain.base_args[index]

    def array_argument(self, chain: MethodChain, index: int = 0) -> list[Node]:
        """Return the elements of an array-literal argument or fail."""
        node = self.argument(chain, index)
        if node.type != "array":
            raise ZodParseError(f"z.{chain.base_method}() expects an array literal")
        return [child for child in node.named_children if child.type != "comment"]
