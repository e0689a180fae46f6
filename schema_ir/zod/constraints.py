"""
Chained-method constraint tables.

Each function maps a chain's methods to SchemaNode field values. Later
calls win, matching how Zod applies repeated checks.
"""

from __future__ import annotations

from typing import Any

from .constants import STRING_FORMATS
from .syntax import MethodCall

# Method -> SchemaNode field for single numeric arguments
NUMBER_BOUNDS = {
    "min": "minimum",
    "gte": "minimum",
    "gt": "exclusive_minimum",
    "max": "maximum",
    "lte": "maximum",
    "lt": "exclusive_maximum",
    "multipleOf": "multiple_of",
}

# Sign checks -> (field, bound)
SIGN_BOUNDS = {
    "positive": ("exclusive_minimum", 0),
    "negative": ("exclusive_maximum", 0),
    "nonnegative": ("minimum", 0),
    "nonpositive": ("maximum", 0),
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _pattern(method: MethodCall) -> str | None:
    arg = method.first_arg
    if not isinstance(arg, str):
        return None
    if method.name in ("regex", "includes"):
        return arg
    if method.name == "startsWith":
        return f"^{arg}"
    if method.name == "endsWith":
        return f"{arg}$"
    return None


def string_constraints(methods: list[MethodCall]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for method in methods:
        arg = method.first_arg
        if method.name in ("min", "length") and _is_number(arg):
            fields["min_length"] = arg
        elif method.name == "max" and _is_number(arg):
            fields["max_length"] = arg
        elif _pattern(method) is not None:
            fields["pattern"] = _pattern(method)
        elif method.name == "base64":
            fields["content_encoding"] = "base64"
        elif method.name in STRING_FORMATS:
            fields["format"] = STRING_FORMATS[method.name]
    return fields


def number_constraints(methods: list[MethodCall]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for method in methods:
        if method.name in SIGN_BOUNDS:
            field_name, bound = SIGN_BOUNDS[method.name]
            fields[field_name] = bound
        elif method.name in NUMBER_BOUNDS and _is_number(method.first_arg):
            fields[NUMBER_BOUNDS[method.name]] = method.first_arg
        elif method.name == "int":
            fields["format"] = "int32"
    return fields


def array_constraints(methods: list[MethodCall]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for method in methods:
        arg = method.first_arg
        if method.name == "min" and _is_number(arg):
            fields["min_items"] = arg
        elif method.name == "max" and _is_number(arg):
            fields["max_items"] = arg
        elif method.name == "length" and _is_number(arg):
            fields["min_items"] = arg
            fields["max_items"] = arg
        elif method.name == "nonempty":
            fields["min_items"] = 1
    return fields


def optionality(methods: list[MethodCall]) -> tuple[bool, bool]:
    """Return (optional, nullable) from optional/nullable/nullish calls."""
    optional = nullable = False
    for method in methods:
        if method.name == "optional":
            optional = True
        elif method.name == "nullable":
            nullable = True
        elif method.name == "nullish":
            optional = nullable = True
    return optional, nullable
