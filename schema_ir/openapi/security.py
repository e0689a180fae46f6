"""
Security requirement resolution.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..ir.document import SecurityRequirement


def build_security_requirements(raw: Any) -> list[SecurityRequirement]:
    """Flatten ``[{scheme: [scopes]}, ...]`` into one requirement per scheme."""
    requirements: list[SecurityRequirement] = []
    for entry in raw or []:
        if not isinstance(entry, Mapping):
            continue
        for scheme_name, scopes in entry.items():
            requirements.append(SecurityRequirement(scheme_name=scheme_name, scopes=list(scopes or [])))
    return requirements


def resolve_operation_security(
    operation: Mapping[str, Any], document_security: list[SecurityRequirement] | None
) -> tuple[list[SecurityRequirement] | None, str | None]:
    """Pick the security that applies to an operation.

    An explicit ``security: []`` on the operation marks it public and
    overrides the document default; omitting the key inherits it.

    Returns:
        Tuple of (requirements, source) where source is ``"operation"``,
        ``"document"`` or None when neither level declares security
    """
    if "security" in operation:
        return build_security_requirements(operation["security"]), "operation"
    if document_security is not None:
        return list(document_security), "document"
    return None, None
