"""
Documentation and presence modifiers applied after a handler has built
the structural node: ``describe``, ``meta``, ``default`` and
``optional``/``nullable``/``nullish``.
"""

from __future__ import annotations

from typing import Any

from ..ir.nodes import UNSET, DependencyInfo, SchemaMetadata, SchemaNode
from ..ir.validation_chain import build_validation_chain
from .constraints import optionality
from .syntax import MethodCall


def extract_meta(methods: list[MethodCall]) -> dict[str, Any]:
    """Merge every ``.meta({...})`` call into SchemaNode field values."""
    fields: dict[str, Any] = {}
    for method in methods:
        if method.name != "meta" or not isinstance(method.first_arg, dict):
            continue
        raw = method.first_arg
        if isinstance(raw.get("title"), str):
            fields["title"] = raw["title"]
        if isinstance(raw.get("description"), str):
            fields["description"] = raw["description"]
        if isinstance(raw.get("deprecated"), bool):
            fields["deprecated"] = raw["deprecated"]
        if "example" in raw:
            fields["example"] = raw["example"]
        if isinstance(raw.get("examples"), list):
            fields["examples"] = raw["examples"]
    return fields


def apply_modifiers(node: SchemaNode, methods: list[MethodCall]) -> SchemaNode:
    """Apply documentation and presence methods, then derive metadata.

    ``required`` and ``nullable`` start from whatever the handler set
    (``z.undefined()`` is never required, ``z.null()`` is always
    nullable) and are then narrowed by the chain.
    """
    optional, nullable = optionality(methods)
    required = node.metadata.required and not optional
    nullable = node.metadata.nullable or nullable

    if not node.is_reference:
        for method in methods:
            if method.name == "describe" and isinstance(method.first_arg, str):
                node.description = method.first_arg
            elif method.name == "default" and method.first_arg is not UNSET:
                node.default = method.first_arg
        for attr, value in extract_meta(methods).items():
            setattr(node, attr, value)

    references: list[str] = []
    for ref in node.iter_refs():
        if ref not in references:
            references.append(ref)

    node.metadata = SchemaMetadata(
        required=required,
        nullable=nullable,
        dependency_graph=DependencyInfo(references=references),
        validation_chain=build_validation_chain(node, required),
    )
    return node
