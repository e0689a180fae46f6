"""
Operation and component responses.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..errors import UnknownSchemaShape
from ..ir.document import Response, ResponseHeader
from ..ir.nodes import UNSET
from .context import BuildContext
from .refs import is_reference
from .request_body import build_content
from .schemas import SchemaBuilder

logger = logging.getLogger(__name__)


def build_headers(raw_headers: Any, schemas: SchemaBuilder, context: BuildContext) -> dict[str, ResponseHeader]:
    headers: dict[str, ResponseHeader] = {}
    if not isinstance(raw_headers, Mapping):
        return headers
    for name, header in raw_headers.items():
        # Header refs and schema-less headers carry nothing a writer can type
        if is_reference(header) or not isinstance(header, Mapping) or "schema" not in header:
            logger.debug("Skipping response header %s at %s", name, context.location)
            continue
        required = bool(header.get("required", False))
        headers[name] = ResponseHeader(
            schema=schemas.build(header["schema"], context.child(name, required=required)),
            description=header.get("description"),
            required=header.get("required"),
            deprecated=header.get("deprecated"),
            example=header.get("example", UNSET),
            examples=dict(header["examples"]) if isinstance(header.get("examples"), Mapping) else None,
        )
    return headers


def build_response(status_code: str, raw: Any, schemas: SchemaBuilder, context: BuildContext) -> Response:
    """Build one response, resolving a ``#/components/responses`` ref."""
    if is_reference(raw):
        _, raw = schemas.resolver.resolve(raw["$ref"], "responses", context.path)
    if not isinstance(raw, Mapping):
        raise UnknownSchemaShape(f"Expected a response object, got {type(raw).__name__}", context.path)

    links = raw.get("links")
    return Response(
        status_code=status_code,
        description=raw.get("description"),
        content=build_content(raw.get("content"), schemas, context.at("content")),
        headers=build_headers(raw.get("headers"), schemas, context.at("headers")),
        links=dict(links) if isinstance(links, Mapping) else None,
    )


def build_responses(raw_responses: Any, schemas: SchemaBuilder, context: BuildContext) -> list[Response]:
    """Build every response of an operation in declaration order."""
    if not isinstance(raw_responses, Mapping):
        return []
    return [
        build_response(str(status_code), raw, schemas, context.at(str(status_code)))
        for status_code, raw in raw_responses.items()
        if not str(status_code).startswith("x-")
    ]
