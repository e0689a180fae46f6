"""
Canonical IR schema node.

Both producers (the OpenAPI builder and the Zod parser) emit these nodes,
and every writer reads them. Nodes are created once per build; the only
field touched afterwards is ``metadata.circular_references``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from .properties import SchemaProperties

COMPONENT_SCHEMA_REF_PREFIX = "#/components/schemas/"


@dataclass
class DependencyInfo:
    """Reference bookkeeping for a single node."""

    references: list[str] = field(default_factory=list)
    referenced_by: list[str] = field(default_factory=list)
    depth: int = 0

    def to_dict(self) -> dict:
        return {
            "references": list(self.references),
            "referencedBy": list(self.referenced_by),
            "depth": self.depth,
        }


@dataclass
class ValidationChain:
    """Validation-builder call fragments derived from the node's constraints.

    ``presence`` is ``""`` for required nodes and ``".optional()"`` otherwise.
    """

    presence: str = ""
    validations: list[str] = field(default_factory=list)
    defaults: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "presence": self.presence,
            "validations": list(self.validations),
            "defaults": list(self.defaults),
        }


@dataclass
class SchemaMetadata:
    """Per-node metadata shared by all producers."""

    required: bool = True
    nullable: bool = False
    dependency_graph: DependencyInfo = field(default_factory=DependencyInfo)
    validation_chain: ValidationChain = field(default_factory=ValidationChain)
    # Written only by the circular reference detector
    circular_references: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "required": self.required,
            "nullable": self.nullable,
            "dependencyGraph": self.dependency_graph.to_dict(),
            "validationChain": self.validation_chain.to_dict(),
            "circularReferences": list(self.circular_references),
        }


@dataclass
class Discriminator:
    """Discriminator for tagged unions."""

    property_name: str = ""
    mapping: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"propertyName": self.property_name}
        if self.mapping:
            result["mapping"] = dict(self.mapping)
        return result


# Attribute name -> serialized key, in serialization order.
_SCALAR_FIELDS = [
    ("type", "type"),
    ("format", "format"),
    ("title", "title"),
    ("description", "description"),
    ("default", "default"),
    ("example", "example"),
    ("examples", "examples"),
    ("deprecated", "deprecated"),
    ("read_only", "readOnly"),
    ("write_only", "writeOnly"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("exclusive_minimum", "exclusiveMinimum"),
    ("exclusive_maximum", "exclusiveMaximum"),
    ("multiple_of", "multipleOf"),
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("pattern", "pattern"),
    ("content_encoding", "contentEncoding"),
    ("min_items", "minItems"),
    ("max_items", "maxItems"),
    ("unique_items", "uniqueItems"),
    ("min_contains", "minContains"),
    ("max_contains", "maxContains"),
    ("enum", "enum"),
    ("const", "const"),
    ("required", "required"),
    ("dependent_required", "dependentRequired"),
]

_NODE_LIST_FIELDS = [
    ("prefix_items", "prefixItems"),
    ("all_of", "allOf"),
    ("one_of", "oneOf"),
    ("any_of", "anyOf"),
]

class _Unset:
    """Marker for fields where None is a legal value (const, default, example)."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(eq=False)
class SchemaNode:
    """A single schema in the IR.

    A node is either a reference (``ref`` set, nothing else but metadata)
    or a structural schema. ``properties`` keeps declaration order and
    ``required`` only names declared properties.
    """

    type: str | None = None
    format: str | None = None

    title: str | None = None
    description: str | None = None
    default: Any = UNSET
    example: Any = UNSET
    examples: list[Any] | None = None
    deprecated: bool | None = None
    read_only: bool | None = None
    write_only: bool | None = None

    # Numeric constraints
    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: float | bool | None = None
    exclusive_maximum: float | bool | None = None
    multiple_of: float | None = None

    # String constraints
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    content_encoding: str | None = None

    # Array constraints
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool | None = None
    min_contains: int | None = None
    max_contains: int | None = None

    enum: list[Any] | None = None
    const: Any = UNSET

    # Object structure
    properties: SchemaProperties | None = None
    required: list[str] | None = None
    additional_properties: bool | SchemaNode | None = None
    unevaluated_properties: bool | SchemaNode | None = None
    dependent_required: dict[str, list[str]] | None = None
    dependent_schemas: dict[str, SchemaNode] | None = None

    # Array structure
    items: SchemaNode | None = None
    prefix_items: list[SchemaNode] | None = None

    # Composition
    all_of: list[SchemaNode] | None = None
    one_of: list[SchemaNode] | None = None
    any_of: list[SchemaNode] | None = None
    not_: SchemaNode | None = None
    discriminator: Discriminator | None = None

    ref: str | None = None

    # x-* vendor extensions, carried verbatim
    extensions: dict[str, Any] = field(default_factory=dict)

    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)

    def __post_init__(self):
        if self.ref is not None:
            extra = [name for name in self._structural_field_names() if self._is_set(name)]
            if extra:
                raise ValueError(f"Reference node {self.ref} cannot carry structural fields: {', '.join(extra)}")
        if self.required:
            declared = self.properties if self.properties is not None else SchemaProperties()
            missing = [name for name in self.required if name not in declared]
            if missing:
                raise ValueError(f"Required names not declared as properties: {', '.join(missing)}")

    @classmethod
    def reference(cls, ref: str, metadata: SchemaMetadata | None = None) -> SchemaNode:
        """Create a reference node."""
        return cls(ref=ref, metadata=metadata or SchemaMetadata())

    @staticmethod
    def _structural_field_names() -> list[str]:
        names = [name for name, _ in _SCALAR_FIELDS]
        names.extend(name for name, _ in _NODE_LIST_FIELDS)
        names.extend(
            [
                "properties",
                "additional_properties",
                "unevaluated_properties",
                "dependent_schemas",
                "items",
                "not_",
                "discriminator",
                "extensions",
            ]
        )
        return names

    def _is_set(self, name: str) -> bool:
        value = getattr(self, name)
        if value is UNSET or value is None:
            return False
        if name == "extensions":
            return bool(value)
        return True

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    @property
    def ref_name(self) -> str | None:
        """Component name for ``#/components/schemas/{name}`` refs."""
        if self.ref and self.ref.startswith(COMPONENT_SCHEMA_REF_PREFIX):
            return self.ref[len(COMPONENT_SCHEMA_REF_PREFIX) :]
        return None

    def children(self) -> Iterator[SchemaNode]:
        """Yield every directly nested schema node."""
        if self.properties is not None:
            yield from self.properties.values()
        if isinstance(self.additional_properties, SchemaNode):
            yield self.additional_properties
        if isinstance(self.unevaluated_properties, SchemaNode):
            yield self.unevaluated_properties
        if self.dependent_schemas:
            yield from self.dependent_schemas.values()
        if self.items is not None:
            yield self.items
        for attr, _ in _NODE_LIST_FIELDS:
            members = getattr(self, attr)
            if members:
                yield from members
        if self.not_ is not None:
            yield self.not_

    def iter_refs(self) -> Iterator[str]:
        """Yield reachable $ref strings without descending through refs."""
        if self.ref is not None:
            yield self.ref
            return
        for child in self.children():
            yield from child.iter_refs()

    def to_dict(self) -> dict:
        """Serialize the node using JSON Schema key names."""
        if self.ref is not None:
            return {"$ref": self.ref, "metadata": self.metadata.to_dict()}

        result: dict[str, Any] = {}
        for attr, key in _SCALAR_FIELDS:
            value = getattr(self, attr)
            if value is UNSET or value is None:
                continue
            result[key] = list(value) if isinstance(value, list) else value
        if self.properties is not None:
            result["properties"] = self.properties.to_dict()
        for attr, key in (("additional_properties", "additionalProperties"), ("unevaluated_properties", "unevaluatedProperties")):
            value = getattr(self, attr)
            if isinstance(value, SchemaNode):
                result[key] = value.to_dict()
            elif value is not None:
                result[key] = value
        if self.dependent_schemas:
            result["dependentSchemas"] = {name: node.to_dict() for name, node in self.dependent_schemas.items()}
        if self.items is not None:
            result["items"] = self.items.to_dict()
        for attr, key in _NODE_LIST_FIELDS:
            members = getattr(self, attr)
            if members is not None:
                result[key] = [member.to_dict() for member in members]
        if self.not_ is not None:
            result["not"] = self.not_.to_dict()
        if self.discriminator is not None:
            result["discriminator"] = self.discriminator.to_dict()
        result.update(self.extensions)
        result["metadata"] = self.metadata.to_dict()
        return result
