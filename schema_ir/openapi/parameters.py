"""
Operation and component parameters.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..errors import UnknownSchemaShape
from ..ir.document import PARAMETER_LOCATIONS, Parameter
from ..ir.nodes import UNSET
from .context import BuildContext
from .refs import is_reference
from .schemas import SchemaBuilder


def parameter_key(raw: Mapping[str, Any]) -> tuple[str, str]:
    """Identity of a parameter within one operation."""
    return raw.get("name", ""), raw.get("in", "")


def resolve_parameter(raw: Any, schemas: SchemaBuilder, context: BuildContext) -> Mapping[str, Any]:
    """Return the concrete parameter object, following a component ref."""
    if is_reference(raw):
        _, raw = schemas.resolver.resolve(raw["$ref"], "parameters", context.path)
    if not isinstance(raw, Mapping):
        raise UnknownSchemaShape(f"Expected a parameter object, got {type(raw).__name__}", context.path)
    return raw


def build_parameter(raw: Mapping[str, Any], schemas: SchemaBuilder, context: BuildContext) -> Parameter:
    """Build a concrete (already resolved) parameter.

    Path parameters are required unless the document says otherwise.
    The schema comes from ``schema`` or, failing that, the first
    ``content`` entry.
    """
    name = raw.get("name")
    location = raw.get("in")
    if not name or location not in PARAMETER_LOCATIONS:
        raise UnknownSchemaShape(f"Parameter needs a name and one of {', '.join(PARAMETER_LOCATIONS)} for 'in'", context.path)

    required = raw.get("required")
    if required is None:
        required = location == "path"
    param_context = context.at(name, required=required)

    if "schema" in raw:
        schema = schemas.build(raw["schema"], param_context.child("schema", required=required))
    elif raw.get("content"):
        if not isinstance(raw["content"], Mapping):
            raise UnknownSchemaShape(
                f"Parameter {name} content must be an object, got {type(raw['content']).__name__}",
                param_context.at("content").path,
            )
        media_type, media = next(iter(raw["content"].items()))
        if not isinstance(media, Mapping) or "schema" not in media:
            raise UnknownSchemaShape(f"Parameter {name} content {media_type} has no schema", param_context.path)
        schema = schemas.build(media["schema"], param_context.child("content", media_type, required=required))
    else:
        raise UnknownSchemaShape(f"Parameter {name} must define either schema or content", param_context.path)

    example = raw.get("example", UNSET)
    examples = raw.get("examples")
    if example is UNSET and isinstance(examples, Mapping):
        default_example = examples.get("default")
        if isinstance(default_example, Mapping) and "value" in default_example:
            example = default_example["value"]

    return Parameter(
        name=name,
        location=location,
        required=required,
        schema=schema,
        description=raw.get("description"),
        deprecated=raw.get("deprecated"),
        example=example,
        examples=dict(examples) if isinstance(examples, Mapping) else None,
        style=raw.get("style"),
        explode=raw.get("explode"),
        allow_reserved=raw.get("allowReserved"),
    )
