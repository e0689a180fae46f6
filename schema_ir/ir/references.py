"""
Component reference parsing.

Two ref shapes are accepted:

    #/components/{type}/{name}
    #/x-ext/{hash}/components/{type}/{name}

Anything else is an ``InvalidReferenceFormat``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..errors import InvalidReferenceFormat

STANDARD_PREFIX = "#/components/"
X_EXT_PREFIX = "#/x-ext/"
EXPECTED_REF_FORMAT = "#/components/{type}/{name} or #/x-ext/{hash}/components/{type}/{name}"


@dataclass(frozen=True)
class ParsedRef:
    """A classified component reference."""

    component_type: str  # schemas, parameters, responses, requestBodies, ...
    component_name: str
    is_external: bool = False  # True for the x-ext vendor form
    x_ext_key: str | None = None
    original_ref: str = ""


def _parse_standard(ref: str) -> ParsedRef | None:
    rest = ref[len(STANDARD_PREFIX) :]
    component_type, sep, component_name = rest.partition("/")
    if not sep or not component_type or not component_name:
        return None
    return ParsedRef(component_type, component_name, original_ref=ref)


def _parse_x_ext(ref: str) -> ParsedRef | None:
    parts = ref[len(X_EXT_PREFIX) :].split("/")
    if len(parts) < 4 or parts[1] != "components":
        return None
    x_ext_key, component_type = parts[0], parts[2]
    component_name = "/".join(parts[3:])
    if not x_ext_key or not component_type or not component_name:
        return None
    return ParsedRef(component_type, component_name, is_external=True, x_ext_key=x_ext_key, original_ref=ref)


def try_parse_component_ref(ref: str) -> ParsedRef | None:
    """Classify ``ref``, returning None when it matches neither form."""
    if not isinstance(ref, str):
        return None
    if ref.startswith(STANDARD_PREFIX):
        return _parse_standard(ref)
    if ref.startswith(X_EXT_PREFIX):
        return _parse_x_ext(ref)
    return None


def parse_component_ref(ref: str, path: Iterable[str] | str = ()) -> ParsedRef:
    """Classify ``ref`` or raise ``InvalidReferenceFormat`` at ``path``."""
    parsed = try_parse_component_ref(ref)
    if parsed is None:
        raise InvalidReferenceFormat(f"Invalid component $ref {ref!r}; expected {EXPECTED_REF_FORMAT}", path)
    return parsed


def schema_name_from_ref(ref: str) -> str | None:
    """Component name of a schema ref in either form, None otherwise."""
    parsed = try_parse_component_ref(ref)
    if parsed is None or parsed.component_type != "schemas":
        return None
    return parsed.component_name
