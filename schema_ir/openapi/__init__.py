"""
OpenAPI 3.x producer.
"""

from __future__ import annotations

from .builder import IRBuilder, build_ir
from .context import BuildContext
from .refs import ComponentResolver
from .schemas import SchemaBuilder

__all__ = [
    "BuildContext",
    "ComponentResolver",
    "IRBuilder",
    "SchemaBuilder",
    "build_ir",
]
