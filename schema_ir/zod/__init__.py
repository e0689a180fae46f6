"""
Zod source parser producing the IR.
"""

from .bindings import BindingResolver
from .dispatcher import ZodDispatcher
from .endpoints import EndpointBuilder, EndpointDefinition, parse_endpoint_definition
from .handlers import HandlerTable, default_table
from .lint import Diagnostic, lint_tree
from .parser import ZodAdvisory, ZodParser, ZodParseResult, derive_component_name, parse_zod_source

__all__ = [
    "BindingResolver",
    "Diagnostic",
    "EndpointBuilder",
    "EndpointDefinition",
    "HandlerTable",
    "ZodAdvisory",
    "ZodDispatcher",
    "ZodParseResult",
    "ZodParser",
    "default_table",
    "derive_component_name",
    "lint_tree",
    "parse_endpoint_definition",
    "parse_zod_source",
]
