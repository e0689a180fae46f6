"""
Request bodies and media type content maps.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..errors import UnknownSchemaShape
from ..ir.document import MediaType, RequestBody
from ..ir.nodes import UNSET
from .context import BuildContext
from .refs import is_reference
from .schemas import SchemaBuilder


def build_content(raw_content: Any, schemas: SchemaBuilder, context: BuildContext) -> dict[str, MediaType]:
    """Build a media type map; entries without a schema are skipped."""
    content: dict[str, MediaType] = {}
    if not isinstance(raw_content, Mapping):
        return content
    for media_type, media in raw_content.items():
        if not isinstance(media, Mapping) or "schema" not in media:
            continue
        encoding = media.get("encoding")
        content[media_type] = MediaType(
            schema=schemas.build(media["schema"], context.child(media_type)),
            example=media.get("example", UNSET),
            examples=dict(media["examples"]) if isinstance(media.get("examples"), Mapping) else None,
            encoding=dict(encoding) if isinstance(encoding, Mapping) else None,
        )
    return content


def build_request_body(raw: Any, schemas: SchemaBuilder, context: BuildContext) -> RequestBody:
    """Build a request body, resolving a ``#/components/requestBodies`` ref."""
    if is_reference(raw):
        _, raw = schemas.resolver.resolve(raw["$ref"], "requestBodies", context.path)
    if not isinstance(raw, Mapping):
        raise UnknownSchemaShape(f"Expected a request body object, got {type(raw).__name__}", context.path)

    required = bool(raw.get("required", False))
    return RequestBody(
        required=required,
        content=build_content(raw.get("content"), schemas, context.at("content", required=required)),
        description=raw.get("description"),
    )
