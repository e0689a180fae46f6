"""
Enum catalog extraction.

Walks every component and operation and registers each schema that
declares a non-empty ``enum``. The catalog name comes from the closest
name hint (component, parameter or property name) and falls back to
``Enum_{n}``.
"""

from __future__ import annotations

from .document import (
    Component,
    EnumDef,
    Operation,
    ParameterComponent,
    RequestBody,
    RequestBodyComponent,
    Response,
    ResponseComponent,
    SchemaComponent,
)
from .nodes import SchemaNode


class EnumExtractor:
    """Collects enum definitions from an assembled set of components."""

    def __init__(self):
        self.enums: dict[str, EnumDef] = {}
        self._visited: set[int] = set()

    def extract(self, components: list[Component], operations: list[Operation]) -> dict[str, EnumDef]:
        for component in components:
            self._visit_component(component)
        for operation in operations:
            self._visit_operation(operation)
        return self.enums

    def _visit_component(self, component: Component) -> None:
        if isinstance(component, SchemaComponent):
            self._visit_schema(component.schema, component.name)
        elif isinstance(component, ParameterComponent):
            self._visit_schema(component.parameter.schema, component.parameter.name)
        elif isinstance(component, ResponseComponent):
            if component.response.schema is not None:
                self._visit_schema(component.response.schema, component.name)
            self._visit_response(component.response)
        elif isinstance(component, RequestBodyComponent):
            self._visit_request_body(component.request_body)

    def _visit_operation(self, operation: Operation) -> None:
        for param in operation.parameters:
            self._visit_schema(param.schema, param.name)
        if operation.request_body is not None:
            self._visit_request_body(operation.request_body)
        for response in operation.responses:
            self._visit_response(response)

    def _visit_request_body(self, request_body: RequestBody) -> None:
        for media in request_body.content.values():
            self._visit_schema(media.schema)

    def _visit_response(self, response: Response) -> None:
        for media in response.content.values():
            self._visit_schema(media.schema)
        for header in response.headers.values():
            self._visit_schema(header.schema)

    def _visit_schema(self, schema: SchemaNode, name_hint: str | None = None) -> None:
        # Identity, not equality: the same node is reachable from several owners
        if id(schema) in self._visited:
            return
        self._visited.add(id(schema))

        if schema.enum:
            self._register(schema, name_hint)

        if schema.properties is not None:
            for prop_name, prop_schema in schema.properties.entries():
                self._visit_schema(prop_schema, prop_name)
        # Properties were visited above with their names; the rest get none
        for child in schema.children():
            self._visit_schema(child)

    def _register(self, schema: SchemaNode, name_hint: str | None) -> None:
        name = name_hint or f"Enum_{len(self.enums) + 1}"
        self.enums[name] = EnumDef(name=name, values=list(schema.enum or []), schema=schema, description=schema.description)


def extract_enums(components: list[Component], operations: list[Operation]) -> dict[str, EnumDef]:
    return EnumExtractor().extract(components, operations)
