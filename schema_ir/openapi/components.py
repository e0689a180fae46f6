"""
Reusable components: ``components.*`` plus vendor-extension schemas.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..ir.document import (
    Component,
    ParameterComponent,
    RequestBodyComponent,
    ResponseComponent,
    SchemaComponent,
    SecuritySchemeComponent,
)
from .context import BuildContext
from .parameters import build_parameter, resolve_parameter
from .request_body import build_request_body
from .responses import build_response
from .schemas import SchemaBuilder

logger = logging.getLogger(__name__)


def _table(container: Any, key: str) -> Mapping[str, Any]:
    if not isinstance(container, Mapping):
        return {}
    value = container.get(key)
    return value if isinstance(value, Mapping) else {}


class ComponentsBuilder:
    """Builds every component of a document in a stable order.

    Schemas come first in declaration order, followed by vendor-extension
    schemas, parameters, responses, request bodies and security schemes.
    """

    def __init__(self, schemas: SchemaBuilder):
        self.schemas = schemas

    def build(self, document: Mapping[str, Any], context: BuildContext) -> list[Component]:
        raw_components = document.get("components")
        components: list[Component] = self.build_schemas(raw_components, context)
        components.extend(self.build_x_ext_schemas(document, context, {c.name for c in components}))

        for name, raw in _table(raw_components, "parameters").items():
            param_context = context.at("components", "parameters", name)
            resolved = resolve_parameter(raw, self.schemas, param_context)
            components.append(ParameterComponent(name=name, parameter=build_parameter(resolved, self.schemas, param_context)))

        for name, raw in _table(raw_components, "responses").items():
            # Component responses are not bound to a status code yet
            response = build_response("", raw, self.schemas, context.at("components", "responses", name))
            components.append(ResponseComponent(name=name, response=response))

        for name, raw in _table(raw_components, "requestBodies").items():
            request_body = build_request_body(raw, self.schemas, context.at("components", "requestBodies", name))
            components.append(RequestBodyComponent(name=name, request_body=request_body))

        for name, raw in _table(raw_components, "securitySchemes").items():
            components.append(SecuritySchemeComponent(name=name, scheme=dict(raw) if isinstance(raw, Mapping) else {}))

        return components

    def build_schemas(self, raw_components: Any, context: BuildContext) -> list[Component]:
        components: list[Component] = []
        for name, raw in _table(raw_components, "schemas").items():
            logger.debug("Building schema component %s", name)
            schema = self.schemas.build(raw, context.at("components", "schemas", name, required=True))
            components.append(SchemaComponent(name=name, schema=schema, source_ref=f"#/components/schemas/{name}"))
        return components

    def build_x_ext_schemas(self, document: Mapping[str, Any], context: BuildContext, taken: set[str]) -> list[Component]:
        """Schemas the bundler parked under ``x-ext.{hash}.components.schemas``."""
        components: list[Component] = []
        x_ext = document.get("x-ext")
        if not isinstance(x_ext, Mapping):
            return components
        for key, ext in x_ext.items():
            for name, raw in _table(_table(ext, "components"), "schemas").items():
                source_ref = f"#/x-ext/{key}/components/schemas/{name}"
                if name in taken:
                    logger.warning("Skipping %s: schema component %s already exists", source_ref, name)
                    continue
                schema = self.schemas.build(raw, context.at("x-ext", key, "components", "schemas", name, required=True))
                components.append(SchemaComponent(name=name, schema=schema, source_ref=source_ref))
                taken.add(name)
        return components
