"""
Endpoint declarations.

A ``defineEndpoint({ method, path, parameters, body, response })`` call
describes one operation. Parameter, body and response schemas go through
the same dispatcher as schema declarations, so a bare identifier or a
quoted variable name becomes a component reference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tree_sitter import Node

from ..errors import ZodParseError
from ..ir.document import MediaType, Operation, Parameter, RequestBody, Response, group_by_location
from ..ir.nodes import SchemaNode
from .constants import ENDPOINT_FUNCTION, ENDPOINT_PARAMETER_LOCATIONS
from .dispatcher import ZodDispatcher
from .handlers import ReferenceHandler
from .meta import apply_modifiers
from .syntax import (
    call_arguments,
    literal_value,
    named_children,
    node_text,
    object_entries,
    property_key,
    string_value,
    unwrap,
)

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


@dataclass
class EndpointDefinition:
    """The statically readable fields of one ``defineEndpoint`` call.

    Schema-valued fields keep their expression nodes; they are parsed
    when the Operation is built.
    """

    method: str
    path: str
    responses: dict[str, Node]
    parameters: dict[str, list[tuple[str, Node]]] = field(default_factory=dict)
    body: Node | None = None
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = None
    tags: list[str] = field(default_factory=list)
    deprecated: bool = False


def is_endpoint_call(node: Node) -> bool:
    node = unwrap(node)
    if node.type != "call_expression":
        return False
    function = node.child_by_field_name("function")
    return function is not None and function.type == "identifier" and node_text(function) == ENDPOINT_FUNCTION


def _string_field(name: str, node: Node) -> str:
    value = literal_value(node)
    if not isinstance(value, str):
        raise ZodParseError(f"Endpoint '{name}' must be a string literal")
    return value


def _parameters(node: Node) -> dict[str, list[tuple[str, Node]]]:
    if node.type != "object":
        raise ZodParseError("Endpoint 'parameters' must be an object literal")
    parameters = {}
    for location, value in object_entries(node):
        if location not in ENDPOINT_PARAMETER_LOCATIONS:
            raise ZodParseError(
                f"Unknown parameter location '{location}', expected one of {', '.join(ENDPOINT_PARAMETER_LOCATIONS)}"
            )
        value = unwrap(value)
        if value.type != "object":
            raise ZodParseError(f"Endpoint '{location}' parameters must be an object literal")
        parameters[location] = object_entries(value)
    return parameters


def _responses(node: Node) -> dict[str, Node]:
    if node.type != "object":
        raise ZodParseError("Endpoint 'response' must be an object literal keyed by status code")
    return dict(object_entries(node))


def parse_endpoint_definition(call: Node, http_methods: list[str]) -> EndpointDefinition:
    """Read the configuration object of a ``defineEndpoint`` call.

    Args:
        call: The ``defineEndpoint(...)`` call expression
        http_methods: Accepted HTTP methods, lowercase

    Returns:
        The endpoint definition

    Raises:
        ZodParseError: If the argument is not an object literal, a field
            has the wrong shape, or ``method``, ``path`` or ``response``
            is missing
    """
    arguments = call_arguments(unwrap(call))
    config = unwrap(arguments[0]) if arguments else None
    if config is None or config.type != "object":
        raise ZodParseError(f"{ENDPOINT_FUNCTION}() expects an object literal")

    fields: dict[str, Node] = {}
    for member in named_children(config):
        if member.type != "pair":
            continue
        key = property_key(member.child_by_field_name("key"))
        if key is not None:
            fields[key] = unwrap(member.child_by_field_name("value"))

    missing = [name for name in ("method", "path", "response") if name not in fields]
    if missing:
        raise ZodParseError(f"Endpoint is missing {', '.join(missing)}")

    method = _string_field("method", fields["method"]).lower()
    if method not in http_methods:
        raise ZodParseError(f"Unsupported HTTP method '{method}'")

    tags = literal_value(fields["tags"]) if "tags" in fields else []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise ZodParseError("Endpoint 'tags' must be an array of string literals")

    return EndpointDefinition(
        method=method,
        path=_string_field("path", fields["path"]),
        responses=_responses(fields["response"]),
        parameters=_parameters(fields["parameters"]) if "parameters" in fields else {},
        body=fields.get("body"),
        summary=_string_field("summary", fields["summary"]) if "summary" in fields else None,
        description=_string_field("description", fields["description"]) if "description" in fields else None,
        operation_id=_string_field("operationId", fields["operationId"]) if "operationId" in fields else None,
        tags=tags,
        deprecated=literal_value(fields["deprecated"]) is True if "deprecated" in fields else False,
    )


class EndpointBuilder:
    """Builds IR Operations from endpoint definitions.

    Args:
        dispatcher: The dispatcher used for schema declarations in the same source
    """

    def __init__(self, dispatcher: ZodDispatcher):
        self.dispatcher = dispatcher

    def schema(self, node: Node) -> SchemaNode:
        """Parse a schema expression; a string literal names a schema variable."""
        node = unwrap(node)
        if node.type == "string":
            return apply_modifiers(self.dispatcher.table.get(ReferenceHandler).reference_name(string_value(node)), [])
        return self.dispatcher.parse_schema(node)

    def build(self, definition: EndpointDefinition) -> Operation:
        logger.debug("Building endpoint %s %s", definition.method.upper(), definition.path)
        parameters = []
        for location in ENDPOINT_PARAMETER_LOCATIONS:
            for name, value in definition.parameters.get(location, []):
                schema = self.schema(value)
                parameters.append(
                    Parameter(
                        name=name,
                        location=location,
                        required=location == "path" or schema.metadata.required,
                        schema=schema,
                    )
                )

        request_body = None
        if definition.body is not None:
            body = MediaType(schema=self.schema(definition.body))
            request_body = RequestBody(required=True, content={JSON_MEDIA_TYPE: body})

        responses = [
            Response(status_code=status_code, content={JSON_MEDIA_TYPE: MediaType(schema=self.schema(value))})
            for status_code, value in definition.responses.items()
        ]

        return Operation(
            method=definition.method,
            path=definition.path,
            parameters=parameters,
            parameters_by_location=group_by_location(parameters),
            request_body=request_body,
            responses=responses,
            tags=list(definition.tags),
            operation_id=definition.operation_id,
            summary=definition.summary,
            description=definition.description,
            deprecated=definition.deprecated,
        )
