"""
Zod node-kind handlers and the dispatch table that routes base methods
to them.
"""

from __future__ import annotations

from typing import Callable

from .base import SchemaParser, ZodHandler
from .composition import CompositionHandler
from .intersection import IntersectionHandler
from .object import ObjectHandler
from .primitive import PrimitiveHandler
from .reference import ReferenceHandler
from .union import UnionHandler


class HandlerTable:
    """Maps each Zod base method to the handler that builds it.

    Built once per parse and handed to the dispatcher.
    """

    def __init__(self, handlers: list[ZodHandler]):
        self.handlers = list(handlers)
        self._by_method: dict[str, ZodHandler] = {}
        for handler in self.handlers:
            for method in handler.methods:
                if method in self._by_method:
                    raise ValueError(f"Base method {method!r} is registered twice")
                self._by_method[method] = handler

    def for_method(self, name: str) -> ZodHandler | None:
        return self._by_method.get(name)

    def get(self, handler_type: type) -> ZodHandler:
        """The registered instance of ``handler_type``."""
        for handler in self.handlers:
            if isinstance(handler, handler_type):
                return handler
        raise KeyError(handler_type.__name__)

    def methods(self) -> list[str]:
        return list(self._by_method)


def default_table(component_name: Callable[[str], str], declared: set[str] | None = None) -> HandlerTable:
    """The standard handler set.

    Args:
        component_name: Maps a variable name to its component name
        declared: Schema variable names declared in the source
    """
    return HandlerTable(
        [
            PrimitiveHandler(),
            ObjectHandler(),
            UnionHandler(),
            IntersectionHandler(),
            CompositionHandler(),
            ReferenceHandler(component_name, declared),
        ]
    )


__all__ = [
    "CompositionHandler",
    "HandlerTable",
    "IntersectionHandler",
    "ObjectHandler",
    "PrimitiveHandler",
    "ReferenceHandler",
    "SchemaParser",
    "UnionHandler",
    "ZodHandler",
    "default_table",
]
