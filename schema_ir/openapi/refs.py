"""
Lookup of OpenAPI component references.

Schema refs are kept as ``$ref`` nodes and only checked here. Parameter,
response and request body refs are resolved to the concrete object they
name. Ref chains are the bundler's job, so a component that is itself a
ref is an error.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..errors import (
    CircularComponentReference,
    MissingComponentReference,
    NestedReferenceNotBundled,
    UnsupportedReferenceTarget,
)
from ..ir.references import ParsedRef, parse_component_ref

logger = logging.getLogger(__name__)


def is_reference(value: Any) -> bool:
    return isinstance(value, Mapping) and "$ref" in value


class ComponentResolver:
    """Resolves component refs against one OpenAPI document."""

    def __init__(self, document: Mapping[str, Any]):
        self.document = document

    def _component_table(self, parsed: ParsedRef) -> Mapping[str, Any]:
        if parsed.is_external:
            x_ext = self.document.get("x-ext") or {}
            components = (x_ext.get(parsed.x_ext_key) or {}).get("components") or {}
        else:
            components = self.document.get("components") or {}
        return components.get(parsed.component_type) or {}

    def lookup(self, parsed: ParsedRef, path) -> Any:
        """Return the raw component named by ``parsed``.

        Raises:
            MissingComponentReference: If the component does not exist
        """
        table = self._component_table(parsed)
        if parsed.component_name not in table:
            raise MissingComponentReference(f"Component {parsed.original_ref} does not exist", path)
        return table[parsed.component_name]

    def check_schema_ref(self, ref: str, path) -> ParsedRef:
        """Validate a schema ref without resolving it.

        Raises:
            InvalidReferenceFormat: If the ref is malformed
            UnsupportedReferenceTarget: If it does not point at a schema
            MissingComponentReference: If the schema does not exist
        """
        parsed = parse_component_ref(ref, path)
        if parsed.component_type != "schemas":
            raise UnsupportedReferenceTarget(f"Expected a schema reference, got {ref}", path)
        self.lookup(parsed, path)
        return parsed

    def resolve(self, ref: str, component_type: str, path) -> tuple[str, Mapping[str, Any]]:
        """Resolve a non-schema component ref.

        Args:
            ref: The ``$ref`` string
            component_type: Expected type (parameters, responses, requestBodies)
            path: Location tokens of the referencing node

        Returns:
            Tuple of (component name, concrete component object)

        Raises:
            UnsupportedReferenceTarget: If the ref points at another component type
            CircularComponentReference: If following the chain leads back to a seen ref
            NestedReferenceNotBundled: If the target is itself a ref
        """
        parsed = parse_component_ref(ref, path)
        if parsed.component_type != component_type:
            raise UnsupportedReferenceTarget(f"Expected a {component_type} reference, got {ref}", path)
        target = self.lookup(parsed, path)
        if is_reference(target):
            self._raise_for_chain(ref, target, path)
        logger.debug("Resolved %s", ref)
        return parsed.component_name, target

    def _raise_for_chain(self, ref: str, target: Mapping[str, Any], path) -> None:
        seen = [ref]
        current = target
        while is_reference(current):
            next_ref = current["$ref"]
            if next_ref in seen:
                chain = " -> ".join(seen + [next_ref])
                raise CircularComponentReference(f"Circular component reference: {chain}", path)
            seen.append(next_ref)
            parsed = parse_component_ref(next_ref, path)
            table = self._component_table(parsed)
            if parsed.component_name not in table:
                break
            current = table[parsed.component_name]
        raise NestedReferenceNotBundled(
            f"{ref} resolves to another reference ({target['$ref']}); bundle the document first", path
        )
