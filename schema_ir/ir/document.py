"""
IR document, components and operations.

The Document is the only thing handed to writers. It is built once per
input source and never patched afterwards; a rebuild makes a fresh one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from .nodes import COMPONENT_SCHEMA_REF_PREFIX, UNSET, SchemaMetadata, SchemaNode

IR_VERSION = "1.0.0"

PARAMETER_LOCATIONS = ("query", "path", "header", "cookie")


def _put(result: dict, key: str, value: Any) -> None:
    """Set ``key`` unless the value is absent."""
    if value is None or value is UNSET:
        return
    result[key] = value


# ---------------------------------------------------------------------------
# Operation pieces
# ---------------------------------------------------------------------------


@dataclass
class Parameter:
    """An operation or component parameter."""

    name: str
    location: str  # OpenAPI "in"
    required: bool
    schema: SchemaNode
    description: str | None = None
    deprecated: bool | None = None
    example: Any = UNSET
    examples: dict[str, Any] | None = None
    style: str | None = None
    explode: bool | None = None
    allow_reserved: bool | None = None

    @property
    def metadata(self) -> SchemaMetadata:
        return self.schema.metadata

    def to_dict(self) -> dict:
        result = {"name": self.name, "in": self.location, "required": self.required, "schema": self.schema.to_dict()}
        _put(result, "description", self.description)
        _put(result, "deprecated", self.deprecated)
        _put(result, "example", self.example)
        _put(result, "examples", self.examples)
        _put(result, "style", self.style)
        _put(result, "explode", self.explode)
        _put(result, "allowReserved", self.allow_reserved)
        return result


@dataclass
class MediaType:
    """Schema and examples for one content type."""

    schema: SchemaNode
    example: Any = UNSET
    examples: dict[str, Any] | None = None
    encoding: dict[str, Any] | None = None

    def to_dict(self) -> dict:
        result = {"schema": self.schema.to_dict()}
        _put(result, "example", self.example)
        _put(result, "examples", self.examples)
        _put(result, "encoding", self.encoding)
        return result


@dataclass
class RequestBody:
    required: bool = False
    content: dict[str, MediaType] = field(default_factory=dict)
    description: str | None = None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            "required": self.required,
            "content": {media: item.to_dict() for media, item in self.content.items()},
        }
        _put(result, "description", self.description)
        return result


@dataclass
class ResponseHeader:
    schema: SchemaNode
    description: str | None = None
    required: bool | None = None
    deprecated: bool | None = None
    example: Any = UNSET
    examples: dict[str, Any] | None = None

    def to_dict(self) -> dict:
        result = {"schema": self.schema.to_dict()}
        _put(result, "description", self.description)
        _put(result, "required", self.required)
        _put(result, "deprecated", self.deprecated)
        _put(result, "example", self.example)
        _put(result, "examples", self.examples)
        return result


@dataclass
class Response:
    """A response keyed by status code or ``"default"``."""

    status_code: str
    description: str | None = None
    content: dict[str, MediaType] = field(default_factory=dict)
    headers: dict[str, ResponseHeader] = field(default_factory=dict)
    links: dict[str, Any] | None = None

    @property
    def schema(self) -> SchemaNode | None:
        """JSON body schema, or the first declared content schema."""
        if "application/json" in self.content:
            return self.content["application/json"].schema
        for media in self.content.values():
            return media.schema
        return None

    @property
    def is_success(self) -> bool:
        return self.status_code.startswith("2")

    @property
    def is_default(self) -> bool:
        return self.status_code == "default"

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"statusCode": self.status_code}
        _put(result, "description", self.description)
        if self.content:
            result["content"] = {media: item.to_dict() for media, item in self.content.items()}
        if self.headers:
            result["headers"] = {name: header.to_dict() for name, header in self.headers.items()}
        _put(result, "links", self.links)
        return result


@dataclass
class SecurityRequirement:
    scheme_name: str
    scopes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"schemeName": self.scheme_name, "scopes": list(self.scopes)}


def group_by_location(parameters: list[Parameter]) -> dict[str, list[Parameter]]:
    grouped: dict[str, list[Parameter]] = {location: [] for location in PARAMETER_LOCATIONS}
    for param in parameters:
        grouped[param.location].append(param)
    return grouped


@dataclass
class Operation:
    """One method + path pair.

    ``security`` is ``[]`` for explicitly public operations, the
    document-level default when the operation declares none, and None
    when neither level declares anything.
    """

    method: str
    path: str
    parameters: list[Parameter] = field(default_factory=list)
    parameters_by_location: dict[str, list[Parameter]] = field(default_factory=lambda: {loc: [] for loc in PARAMETER_LOCATIONS})
    request_body: RequestBody | None = None
    responses: list[Response] = field(default_factory=list)
    security: list[SecurityRequirement] | None = None
    security_source: str | None = None  # "operation", "document" or None
    tags: list[str] = field(default_factory=list)

    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    deprecated: bool = False
    external_docs: dict[str, Any] | None = None
    callbacks: dict[str, Any] | None = None
    servers: list[dict[str, Any]] | None = None
    path_item_summary: str | None = None
    path_item_description: str | None = None
    path_item_servers: list[dict[str, Any]] | None = None
    path_item_parameter_refs: list[str] = field(default_factory=list)

    @property
    def is_public(self) -> bool:
        return self.security == []

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            "method": self.method,
            "path": self.path,
            "parameters": [param.to_dict() for param in self.parameters],
            "parametersByLocation": {loc: [param.name for param in params] for loc, params in self.parameters_by_location.items()},
            "responses": [response.to_dict() for response in self.responses],
            "tags": list(self.tags),
        }
        if self.request_body is not None:
            result["requestBody"] = self.request_body.to_dict()
        if self.security is not None:
            result["security"] = [req.to_dict() for req in self.security]
        _put(result, "operationId", self.operation_id)
        _put(result, "summary", self.summary)
        _put(result, "description", self.description)
        if self.deprecated:
            result["deprecated"] = True
        _put(result, "externalDocs", self.external_docs)
        _put(result, "callbacks", self.callbacks)
        _put(result, "servers", self.servers)
        _put(result, "pathItemSummary", self.path_item_summary)
        _put(result, "pathItemDescription", self.path_item_description)
        _put(result, "pathItemServers", self.path_item_servers)
        if self.path_item_parameter_refs:
            result["pathItemParameterRefs"] = list(self.path_item_parameter_refs)
        return result


@dataclass
class OperationAdvisory:
    """Non-fatal condition left for the caller to act on.

    ``kind`` is ``"missing-success-response"`` when there is neither a
    2xx nor a usable default, and ``"default-only"`` when ``default`` is
    the only declared response.
    """

    method: str
    path: str
    kind: str
    message: str

    def to_dict(self) -> dict:
        return {"method": self.method, "path": self.path, "kind": self.kind, "message": self.message}


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


@dataclass
class Component:
    """Base for named, reusable IR entities."""

    kind: ClassVar[str] = ""

    name: str

    def to_dict(self) -> dict:
        return {"kind": self.kind, "name": self.name}


@dataclass
class SchemaComponent(Component):
    kind: ClassVar[str] = "schema"

    schema: SchemaNode
    source_ref: str = ""  # Location the component was read from

    @property
    def ref(self) -> str:
        return f"{COMPONENT_SCHEMA_REF_PREFIX}{self.name}"

    def to_dict(self) -> dict:
        return {**super().to_dict(), "schema": self.schema.to_dict()}


@dataclass
class ParameterComponent(Component):
    kind: ClassVar[str] = "parameter"

    parameter: Parameter

    def to_dict(self) -> dict:
        return {**super().to_dict(), "parameter": self.parameter.to_dict()}


@dataclass
class ResponseComponent(Component):
    kind: ClassVar[str] = "response"

    response: Response

    def to_dict(self) -> dict:
        return {**super().to_dict(), "response": self.response.to_dict()}


@dataclass
class RequestBodyComponent(Component):
    kind: ClassVar[str] = "requestBody"

    request_body: RequestBody

    def to_dict(self) -> dict:
        return {**super().to_dict(), "requestBody": self.request_body.to_dict()}


@dataclass
class SecuritySchemeComponent(Component):
    kind: ClassVar[str] = "securityScheme"

    scheme: dict[str, Any]

    def to_dict(self) -> dict:
        return {**super().to_dict(), "scheme": dict(self.scheme)}


# ---------------------------------------------------------------------------
# Graph and catalog
# ---------------------------------------------------------------------------


@dataclass
class DependencyNode:
    name: str
    dependencies: list[str] = field(default_factory=list)
    dependents: list[str] = field(default_factory=list)
    depth: int = 0
    is_circular: bool = False

    @property
    def ref(self) -> str:
        return f"{COMPONENT_SCHEMA_REF_PREFIX}{self.name}"

    def to_dict(self) -> dict:
        return {
            "ref": self.ref,
            "dependencies": list(self.dependencies),
            "dependents": list(self.dependents),
            "depth": self.depth,
            "isCircular": self.is_circular,
        }


@dataclass
class DependencyGraph:
    nodes: dict[str, DependencyNode] = field(default_factory=dict)
    topological_order: list[str] = field(default_factory=list)
    circular_references: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "nodes": {name: node.to_dict() for name, node in self.nodes.items()},
            "topologicalOrder": list(self.topological_order),
            "circularReferences": list(self.circular_references),
        }


@dataclass
class EnumDef:
    name: str
    values: list[Any]
    schema: SchemaNode
    description: str | None = None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"name": self.name, "values": list(self.values)}
        _put(result, "description", self.description)
        return result


@dataclass
class Document:
    """The canonical IR handed to writers."""

    version: str = IR_VERSION
    source_format_version: str = ""
    info: dict[str, Any] = field(default_factory=dict)
    servers: list[dict[str, Any]] = field(default_factory=list)
    components: list[Component] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)
    dependency_graph: DependencyGraph = field(default_factory=DependencyGraph)
    schema_names: list[str] = field(default_factory=list)
    enums: dict[str, EnumDef] = field(default_factory=dict)

    security: list[SecurityRequirement] | None = None
    tags: list[dict[str, Any]] | None = None
    external_docs: dict[str, Any] | None = None
    webhooks: dict[str, Any] | None = None
    json_schema_dialect: str | None = None
    advisories: list[OperationAdvisory] = field(default_factory=list)

    @property
    def schema_components(self) -> list[SchemaComponent]:
        return [component for component in self.components if isinstance(component, SchemaComponent)]

    def get_component(self, name: str, kind: str = SchemaComponent.kind) -> Component | None:
        for component in self.components:
            if component.kind == kind and component.name == name:
                return component
        return None

    def get_schema(self, name: str) -> SchemaNode | None:
        component = self.get_component(name)
        return component.schema if isinstance(component, SchemaComponent) else None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            "version": self.version,
            "sourceFormatVersion": self.source_format_version,
            "info": dict(self.info),
            "servers": list(self.servers),
            "components": [component.to_dict() for component in self.components],
            "operations": [operation.to_dict() for operation in self.operations],
            "dependencyGraph": self.dependency_graph.to_dict(),
            "schemaNames": list(self.schema_names),
            "enums": {name: enum.to_dict() for name, enum in self.enums.items()},
        }
        if self.security is not None:
            result["security"] = [req.to_dict() for req in self.security]
        _put(result, "tags", self.tags)
        _put(result, "externalDocs", self.external_docs)
        _put(result, "webhooks", self.webhooks)
        _put(result, "jsonSchemaDialect", self.json_schema_dialect)
        if self.advisories:
            result["advisories"] = [advisory.to_dict() for advisory in self.advisories]
        return result
