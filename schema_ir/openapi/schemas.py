"""
Recursive OpenAPI schema -> IR SchemaNode builder.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..errors import UnknownSchemaShape
from ..ir.nodes import UNSET, DependencyInfo, Discriminator, SchemaMetadata, SchemaNode
from ..ir.properties import SchemaProperties
from ..ir.validation_chain import build_validation_chain
from .context import BuildContext
from .refs import ComponentResolver

logger = logging.getLogger(__name__)

KNOWN_TYPES = ("string", "number", "integer", "boolean", "object", "array", "null")

# OpenAPI key -> SchemaNode attribute, copied verbatim when present
_SCALAR_KEYWORDS = {
    "format": "format",
    "title": "title",
    "description": "description",
    "examples": "examples",
    "deprecated": "deprecated",
    "readOnly": "read_only",
    "writeOnly": "write_only",
    "minimum": "minimum",
    "maximum": "maximum",
    "exclusiveMinimum": "exclusive_minimum",
    "exclusiveMaximum": "exclusive_maximum",
    "multipleOf": "multiple_of",
    "minLength": "min_length",
    "maxLength": "max_length",
    "pattern": "pattern",
    "contentEncoding": "content_encoding",
    "minItems": "min_items",
    "maxItems": "max_items",
    "uniqueItems": "unique_items",
    "minContains": "min_contains",
    "maxContains": "max_contains",
}

# Keys whose value may legitimately be null, so presence is checked instead
_NULLABLE_VALUE_KEYWORDS = {"default": "default", "example": "example", "const": "const"}

_COMPOSITION_KEYWORDS = {"allOf": "all_of", "oneOf": "one_of", "anyOf": "any_of"}


class SchemaBuilder:
    """Builds SchemaNodes from OpenAPI schema objects."""

    def __init__(self, resolver: ComponentResolver):
        self.resolver = resolver

    def build(self, schema: Any, context: BuildContext) -> SchemaNode:
        """
        Build a schema node recursively.

        Args:
            schema: The OpenAPI schema or reference object
            context: Location and inherited requiredness of the node

        Returns:
            The built SchemaNode

        Raises:
            UnknownSchemaShape: If the node is not a schema object
            RecursionLimitExceeded: If nesting goes past ``max_depth``
        """
        if isinstance(schema, bool) or not isinstance(schema, Mapping):
            raise UnknownSchemaShape(f"Expected a schema object, got {type(schema).__name__}", context.path)

        if "$ref" in schema:
            return self._build_reference(schema["$ref"], context)

        fields: dict[str, Any] = {}
        nullable = self._add_type(schema, context, fields)
        self._add_scalars(schema, fields)
        self._add_object_structure(schema, context, fields)
        self._add_array_structure(schema, context, fields)
        self._add_compositions(schema, context, fields)

        if "discriminator" in schema:
            discriminator = schema["discriminator"]
            if not isinstance(discriminator, Mapping):
                raise UnknownSchemaShape(
                    f"Expected a discriminator object, got {type(discriminator).__name__}",
                    context.at("discriminator").path,
                )
            fields["discriminator"] = Discriminator(
                property_name=discriminator.get("propertyName", ""),
                mapping=dict(discriminator.get("mapping") or {}),
            )

        extensions = {key: value for key, value in schema.items() if key.startswith("x-")}
        if extensions:
            fields["extensions"] = extensions

        node = SchemaNode(**fields)
        node.metadata = self._metadata(node, context, nullable)
        return node

    def _build_reference(self, ref: str, context: BuildContext) -> SchemaNode:
        self.resolver.check_schema_ref(ref, context.path)
        metadata = SchemaMetadata(
            required=context.required,
            dependency_graph=DependencyInfo(references=[ref]),
        )
        metadata.validation_chain.presence = "" if context.required else ".optional()"
        return SchemaNode.reference(ref, metadata)

    def _metadata(self, node: SchemaNode, context: BuildContext, nullable: bool) -> SchemaMetadata:
        references: list[str] = []
        for ref in node.iter_refs():
            if ref not in references:
                references.append(ref)
        return SchemaMetadata(
            required=context.required,
            nullable=nullable,
            dependency_graph=DependencyInfo(references=references),
            validation_chain=build_validation_chain(node, context.required),
        )

    def _check_type(self, type_name: Any, context: BuildContext) -> str:
        if type_name not in KNOWN_TYPES:
            raise UnknownSchemaShape(f"Unknown schema type {type_name!r}", context.path + ("type",))
        return type_name

    def _add_type(self, schema: Mapping[str, Any], context: BuildContext, fields: dict[str, Any]) -> bool:
        """Set ``type`` (or type-variant ``any_of``) and return nullability."""
        raw_type = schema.get("type")
        # OpenAPI 3.0 style
        nullable = schema.get("nullable") is True

        if isinstance(raw_type, list):
            types = [self._check_type(type_name, context) for type_name in raw_type]
            non_null = [type_name for type_name in types if type_name != "null"]
            nullable = nullable or "null" in types
            if len(non_null) == 1:
                fields["type"] = non_null[0]
            elif not non_null:
                fields["type"] = "null"
            else:
                fields["type_variants"] = [SchemaNode(type=type_name) for type_name in non_null]
        elif raw_type is not None:
            fields["type"] = self._check_type(raw_type, context)

        return nullable

    def _add_scalars(self, schema: Mapping[str, Any], fields: dict[str, Any]) -> None:
        for key, attr in _SCALAR_KEYWORDS.items():
            value = schema.get(key)
            if value is not None:
                fields[attr] = list(value) if isinstance(value, list) else value
        for key, attr in _NULLABLE_VALUE_KEYWORDS.items():
            if key in schema:
                fields[attr] = schema[key]
        if isinstance(schema.get("enum"), list):
            fields["enum"] = list(schema["enum"])
        if isinstance(schema.get("dependentRequired"), Mapping):
            fields["dependent_required"] = {name: list(names) for name, names in schema["dependentRequired"].items()}

    def _add_object_structure(self, schema: Mapping[str, Any], context: BuildContext, fields: dict[str, Any]) -> None:
        raw_properties = schema.get("properties")
        raw_required = list(schema.get("required") or [])

        if isinstance(raw_properties, Mapping):
            entries = []
            for name, prop_schema in raw_properties.items():
                prop_context = context.child("properties", name, required=name in raw_required)
                entries.append((name, self.build(prop_schema, prop_context)))
            fields["properties"] = SchemaProperties(entries)

        if raw_required:
            declared = raw_properties if isinstance(raw_properties, Mapping) else {}
            required = [name for name in raw_required if name in declared]
            dropped = [name for name in raw_required if name not in declared]
            if dropped:
                if context.config.strict_required:
                    raise UnknownSchemaShape(
                        f"Required names not declared as properties: {', '.join(dropped)}", context.path + ("required",)
                    )
                logger.warning(
                    "Dropping required names not declared as properties at %s: %s", context.location, ", ".join(dropped)
                )
            fields["required"] = required

        for key, attr in (("additionalProperties", "additional_properties"), ("unevaluatedProperties", "unevaluated_properties")):
            value = schema.get(key)
            if isinstance(value, bool):
                fields[attr] = value
            elif value is not None:
                fields[attr] = self.build(value, context.child(key, required=False))

        if isinstance(schema.get("dependentSchemas"), Mapping):
            fields["dependent_schemas"] = {
                name: self.build(sub_schema, context.child("dependentSchemas", name))
                for name, sub_schema in schema["dependentSchemas"].items()
            }

    def _add_array_structure(self, schema: Mapping[str, Any], context: BuildContext, fields: dict[str, Any]) -> None:
        items = schema.get("items")
        if isinstance(items, list):
            # Draft 4 tuple form
            fields["prefix_items"] = [self.build(item, context.child("items", index)) for index, item in enumerate(items)]
        elif isinstance(items, Mapping):
            fields["items"] = self.build(items, context.child("items"))

        prefix_items = schema.get("prefixItems")
        if isinstance(prefix_items, list):
            fields["prefix_items"] = [
                self.build(item, context.child("prefixItems", index)) for index, item in enumerate(prefix_items)
            ]

    def _add_compositions(self, schema: Mapping[str, Any], context: BuildContext, fields: dict[str, Any]) -> None:
        for key, attr in _COMPOSITION_KEYWORDS.items():
            members = schema.get(key)
            if members is None:
                continue
            if not isinstance(members, list):
                raise UnknownSchemaShape(f"{key} must be a list", context.path + (key,))
            fields[attr] = [self.build(member, context.child(key, index)) for index, member in enumerate(members)]

        variants = fields.pop("type_variants", None)
        if variants:
            if "any_of" in fields:
                # Both constraints apply, so the declared anyOf moves under allOf
                fields["all_of"] = fields.get("all_of", []) + [SchemaNode(any_of=fields["any_of"])]
            fields["any_of"] = variants

        if "not" in schema:
            fields["not_"] = self.build(schema["not"], context.child("not"))
