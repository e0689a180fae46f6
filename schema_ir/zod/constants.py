"""
Zod method tables.
"""

from __future__ import annotations

# Base method -> (type, format, content encoding)
PRIMITIVE_TYPES: dict[str, tuple[str | None, str | None, str | None]] = {
    "string": ("string", None, None),
    "number": ("number", None, None),
    "boolean": ("boolean", None, None),
    "null": ("null", None, None),
    "bigint": ("integer", "int64", None),
    "date": ("string", "date-time", None),
    "any": (None, None, None),
    "unknown": (None, None, None),
    "undefined": (None, None, None),
    # Zod 4 top-level formats
    "int": ("integer", None, None),
    "int32": ("integer", "int32", None),
    "int64": ("integer", "int64", None),
    "float32": ("number", "float", None),
    "float64": ("number", "double", None),
    "email": ("string", "email", None),
    "url": ("string", "uri", None),
    "uuid": ("string", "uuid", None),
    "uuidv4": ("string", "uuid", None),
    "ipv4": ("string", "ipv4", None),
    "ipv6": ("string", "ipv6", None),
    "cidrv4": ("string", "cidrv4", None),
    "cidrv6": ("string", "cidrv6", None),
    "jwt": ("string", "jwt", None),
    "e164": ("string", "e164", None),
    "hostname": ("string", "hostname", None),
    "base64": ("string", None, "base64"),
    "base64url": ("string", None, "base64url"),
    "iso.date": ("string", "date", None),
    "iso.datetime": ("string", "date-time", None),
    "iso.time": ("string", "time", None),
    "iso.duration": ("string", "duration", None),
}

# Primitives with no JSON Schema counterpart
UNSUPPORTED_PRIMITIVES = ("void", "never", "symbol")

# Namespaces whose members are base methods, e.g. z.iso.datetime()
NAMESPACES = ("iso",)

# Chained string format methods -> format
STRING_FORMATS = {
    "email": "email",
    "url": "uri",
    "uuid": "uuid",
    "cuid": "cuid",
    "cuid2": "cuid2",
    "ulid": "ulid",
    "emoji": "emoji",
    "ip": "ip",
    "datetime": "date-time",
}

OBJECT_METHODS = ("object", "strictObject", "looseObject")
UNION_METHODS = ("union", "discriminatedUnion", "xor")
INTERSECTION_METHODS = ("intersection",)
COMPOSITION_METHODS = ("array", "tuple", "enum", "nativeEnum", "record")
REFERENCE_METHODS = ("lazy",)

# Methods that were removed or reshaped in Zod 4 -> replacement
LEGACY_METHODS = {
    "nonempty": ".min(1)",
}

ZOD_ENTRY_NAME = "z"

# Helper whose object-literal argument declares one operation
ENDPOINT_FUNCTION = "defineEndpoint"
ENDPOINT_PARAMETER_LOCATIONS = ("path", "query", "header", "cookie")
