"""
Validation-chain fragments derived from a node's constraints.

Writers that target a fluent validation builder concatenate these
fragments as-is, e.g. ``.min(0)`` followed by ``.max(150)``.
"""

from __future__ import annotations

import json

from .nodes import UNSET, SchemaNode, ValidationChain

FORMAT_VALIDATIONS = {
    "email": ".email()",
    "uuid": ".uuid()",
    "uri": ".url()",
    "url": ".url()",
    "hostname": ".url()",
    "date-time": ".datetime()",
    "ipv4": '.ip({ version: "v4" })',
    "ipv6": '.ip({ version: "v6" })',
}


def _number(value) -> str:
    """Render a number the way a JS literal reads (no trailing ``.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def numeric_validations(schema: SchemaNode) -> list[str]:
    validations = []
    if schema.minimum is not None:
        validations.append(f".min({_number(schema.minimum)})")
    if schema.maximum is not None:
        validations.append(f".max({_number(schema.maximum)})")

    # OpenAPI 3.0 booleans turn the inclusive bound into an exclusive one
    if isinstance(schema.exclusive_minimum, bool):
        if schema.exclusive_minimum and schema.minimum is not None:
            min_fragment = f".min({_number(schema.minimum)})"
            if min_fragment in validations:
                validations.remove(min_fragment)
            validations.append(f".gt({_number(schema.minimum)})")
    elif schema.exclusive_minimum is not None:
        validations.append(f".gt({_number(schema.exclusive_minimum)})")

    if isinstance(schema.exclusive_maximum, bool):
        if schema.exclusive_maximum and schema.maximum is not None:
            max_fragment = f".max({_number(schema.maximum)})"
            if max_fragment in validations:
                validations.remove(max_fragment)
            validations.append(f".lt({_number(schema.maximum)})")
    elif schema.exclusive_maximum is not None:
        validations.append(f".lt({_number(schema.exclusive_maximum)})")

    if schema.multiple_of is not None:
        validations.append(f".multipleOf({_number(schema.multiple_of)})")
    if schema.type == "integer":
        validations.append(".int()")
    return validations


def string_validations(schema: SchemaNode) -> list[str]:
    validations = []
    if schema.min_length is not None:
        validations.append(f".min({schema.min_length})")
    if schema.max_length is not None:
        validations.append(f".max({schema.max_length})")
    if schema.pattern:
        escaped = schema.pattern.replace("/", "\\/")
        validations.append(f".regex(/{escaped}/)")
    if schema.format in FORMAT_VALIDATIONS:
        validations.append(FORMAT_VALIDATIONS[schema.format])
    return validations


def array_validations(schema: SchemaNode) -> list[str]:
    validations = []
    if schema.min_items is not None:
        validations.append(f".min({schema.min_items})")
    if schema.max_items is not None:
        validations.append(f".max({schema.max_items})")
    return validations


def build_validation_chain(schema: SchemaNode, required: bool) -> ValidationChain:
    """Derive the validation chain for a fully-populated node."""
    if schema.type in ("number", "integer"):
        validations = numeric_validations(schema)
    elif schema.type == "string":
        validations = string_validations(schema)
    elif schema.type == "array":
        validations = array_validations(schema)
    else:
        validations = []

    defaults = []
    if schema.default is not UNSET:
        defaults.append(f".default({json.dumps(schema.default)})")

    return ValidationChain(
        presence="" if required else ".optional()",
        validations=validations,
        defaults=defaults,
    )
