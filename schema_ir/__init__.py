"""Schema IR

Builds a canonical intermediate representation of API schemas from two
sources: bundled OpenAPI 3.x documents and Zod schema source code.
The resulting Document carries ordered schema components, operations,
a dependency graph with a topological emission order, and explicit
circular-reference markers for downstream code writers.
"""

__version__ = "1.0.0"

from .config import BuildConfig
from .errors import (
    CircularComponentReference,
    DiagnosticCode,
    InvalidReferenceFormat,
    IRBoundaryError,
    IRBuildError,
    MissingComponentReference,
    NestedReferenceNotBundled,
    RecursionLimitExceeded,
    UnknownSchemaShape,
    UnsupportedReferenceTarget,
    ZodParseError,
)
from .ir import Document, SchemaNode, SchemaProperties, assert_ir_document, validate_document
from .openapi import build_ir
from .zod import ZodParseResult, parse_zod_source

__all__ = [
    "BuildConfig",
    "CircularComponentReference",
    "DiagnosticCode",
    "Document",
    "IRBoundaryError",
    "IRBuildError",
    "InvalidReferenceFormat",
    "MissingComponentReference",
    "NestedReferenceNotBundled",
    "RecursionLimitExceeded",
    "SchemaNode",
    "SchemaProperties",
    "UnknownSchemaShape",
    "UnsupportedReferenceTarget",
    "ZodParseError",
    "ZodParseResult",
    "assert_ir_document",
    "build_ir",
    "parse_zod_source",
    "validate_document",
]
