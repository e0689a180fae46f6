"""
Operations: one per method + path pair.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from ..errors import UnknownSchemaShape
from ..ir.document import Operation, OperationAdvisory, Parameter, SecurityRequirement, group_by_location
from .context import BuildContext
from .parameters import build_parameter, parameter_key, resolve_parameter
from .refs import is_reference
from .request_body import build_request_body
from .responses import build_responses
from .schemas import SchemaBuilder
from .security import resolve_operation_security

logger = logging.getLogger(__name__)


def default_operation_id(method: str, path: str) -> str:
    """Fallback id built from the method and the path's word characters."""
    return method + re.sub(r"\W", "", path)


def merge_parameters(
    path_params: list[Any], operation_params: list[Any], schemas: SchemaBuilder, context: BuildContext
) -> list[Parameter]:
    """Merge path-item and operation parameters.

    Parameters are unique by (name, in); an operation-level declaration
    replaces the path-level one in place.
    """
    merged: dict[tuple[str, str], tuple[Mapping[str, Any], BuildContext]] = {}
    for scope, raw_params in (("parameters", path_params), ("operation", operation_params)):
        for index, raw in enumerate(raw_params):
            param_context = context.at(scope, str(index))
            resolved = resolve_parameter(raw, schemas, param_context)
            merged[parameter_key(resolved)] = (resolved, param_context)
    return [build_parameter(resolved, schemas, param_context) for resolved, param_context in merged.values()]


def response_advisory(operation: Operation) -> OperationAdvisory | None:
    """Flag operations a client cannot derive a success type from."""
    status_codes = [response.status_code for response in operation.responses]
    if any(code.startswith("2") for code in status_codes):
        return None
    if status_codes == ["default"]:
        return OperationAdvisory(
            method=operation.method,
            path=operation.path,
            kind="default-only",
            message=f"{operation.method.upper()} {operation.path} declares only a default response",
        )
    if "default" not in status_codes:
        return OperationAdvisory(
            method=operation.method,
            path=operation.path,
            kind="missing-success-response",
            message=f"{operation.method.upper()} {operation.path} has no 2xx or default response",
        )
    return None


class OperationBuilder:
    """Builds the operation list for a whole ``paths`` object."""

    def __init__(self, schemas: SchemaBuilder, document_security: list[SecurityRequirement] | None):
        self.schemas = schemas
        self.document_security = document_security
        self.advisories: list[OperationAdvisory] = []

    def build_all(self, paths: Any, context: BuildContext) -> list[Operation]:
        operations: list[Operation] = []
        if not isinstance(paths, Mapping):
            return operations
        for path, path_item in paths.items():
            if not isinstance(path_item, Mapping):
                raise UnknownSchemaShape(f"Expected a path item object for {path}", context.path + ("paths", path))
            operations.extend(self.build_path_item(path, path_item, context.at("paths", path)))
        return operations

    def build_path_item(self, path: str, path_item: Mapping[str, Any], context: BuildContext) -> list[Operation]:
        path_params = list(path_item.get("parameters") or [])
        parameter_refs = [raw["$ref"] for raw in path_params if is_reference(raw)]

        operations = []
        for method in context.config.http_methods:
            raw_operation = path_item.get(method)
            if not isinstance(raw_operation, Mapping):
                continue
            operation = self.build_operation(method, path, raw_operation, path_item, path_params, context.at(method))
            operation.path_item_parameter_refs = list(parameter_refs)
            operations.append(operation)
        return operations

    def build_operation(
        self,
        method: str,
        path: str,
        raw: Mapping[str, Any],
        path_item: Mapping[str, Any],
        path_params: list[Any],
        context: BuildContext,
    ) -> Operation:
        logger.debug("Building operation %s %s", method.upper(), path)
        parameters = merge_parameters(path_params, list(raw.get("parameters") or []), self.schemas, context)
        security, security_source = resolve_operation_security(raw, self.document_security)

        request_body = None
        if "requestBody" in raw:
            request_body = build_request_body(raw["requestBody"], self.schemas, context.at("requestBody"))

        operation = Operation(
            method=method,
            path=path,
            parameters=parameters,
            parameters_by_location=group_by_location(parameters),
            request_body=request_body,
            responses=build_responses(raw.get("responses"), self.schemas, context.at("responses")),
            security=security,
            security_source=security_source,
            tags=list(raw.get("tags") or []),
            operation_id=raw.get("operationId") or default_operation_id(method, path),
            summary=raw.get("summary"),
            description=raw.get("description"),
            deprecated=raw.get("deprecated") is True,
            external_docs=raw.get("externalDocs"),
            callbacks=raw.get("callbacks"),
            servers=raw.get("servers"),
            path_item_summary=path_item.get("summary"),
            path_item_description=path_item.get("description"),
            path_item_servers=path_item.get("servers"),
        )

        if context.config.generate_advisories:
            advisory = response_advisory(operation)
            if advisory is not None:
                logger.warning(advisory.message)
                self.advisories.append(advisory)
        return operation
