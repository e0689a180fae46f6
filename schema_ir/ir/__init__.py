"""
IR data model: schema nodes, the ordered property map and the Document.
"""

from __future__ import annotations

from .boundary import assert_ir_document, ensure_valid_document, validate_document
from .document import (
    IR_VERSION,
    Component,
    DependencyGraph,
    DependencyNode,
    Document,
    EnumDef,
    MediaType,
    Operation,
    OperationAdvisory,
    Parameter,
    ParameterComponent,
    RequestBody,
    RequestBodyComponent,
    Response,
    ResponseComponent,
    ResponseHeader,
    SchemaComponent,
    SecurityRequirement,
    SecuritySchemeComponent,
)
from .enums import extract_enums
from .nodes import (
    COMPONENT_SCHEMA_REF_PREFIX,
    UNSET,
    DependencyInfo,
    Discriminator,
    SchemaMetadata,
    SchemaNode,
    ValidationChain,
)
from .properties import SchemaProperties
from .references import ParsedRef, parse_component_ref, schema_name_from_ref, try_parse_component_ref
from .validation_chain import build_validation_chain

__all__ = [
    "IR_VERSION",
    "COMPONENT_SCHEMA_REF_PREFIX",
    "UNSET",
    "Component",
    "DependencyGraph",
    "DependencyInfo",
    "DependencyNode",
    "Discriminator",
    "Document",
    "EnumDef",
    "MediaType",
    "Operation",
    "OperationAdvisory",
    "Parameter",
    "ParameterComponent",
    "ParsedRef",
    "RequestBody",
    "RequestBodyComponent",
    "Response",
    "ResponseComponent",
    "ResponseHeader",
    "SchemaComponent",
    "SchemaMetadata",
    "SchemaNode",
    "SchemaProperties",
    "SecurityRequirement",
    "SecuritySchemeComponent",
    "ValidationChain",
    "assert_ir_document",
    "build_validation_chain",
    "ensure_valid_document",
    "extract_enums",
    "parse_component_ref",
    "schema_name_from_ref",
    "try_parse_component_ref",
    "validate_document",
]
