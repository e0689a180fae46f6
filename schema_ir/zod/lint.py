"""
Pre-parse checks over Zod source.

Flags input the parser refuses to turn into IR: Zod 3 methods with a
fixed Zod 4 replacement and object shapes that cannot be read
statically.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tree_sitter import Node

from ..errors import DiagnosticCode
from .bindings import BindingResolver
from .constants import LEGACY_METHODS, OBJECT_METHODS
from .syntax import MethodChain, find_nodes, get_method_chain, is_inner_chain_call, location, named_children, unwrap

logger = logging.getLogger(__name__)

COMPUTED_KEY_MESSAGE = (
    "Computed property keys in z.object() cannot be statically analyzed. Use literal property names instead."
)
SPREAD_MESSAGE = "Spread operators in z.object() cannot be statically analyzed. Define all properties inline instead."


@dataclass
class Diagnostic:
    """A problem found in Zod source, with a 1-indexed position."""

    code: DiagnosticCode
    message: str
    line: int
    column: int
    # Byte offset of the flagged node, used to attribute it to a declaration
    offset: int = 0

    @classmethod
    def at(cls, code: DiagnosticCode, message: str, node: Node) -> Diagnostic:
        line, column = location(node)
        return cls(code=code, message=message, line=line, column=column, offset=node.start_byte)

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "location": {"line": self.line, "column": self.column},
        }


def _method_diagnostics(chain: MethodChain, call: Node) -> list[Diagnostic]:
    diagnostics = []
    for method in chain.methods:
        if method.name in LEGACY_METHODS:
            message = (
                f"Zod 3 method '.{method.name}()' is not supported in Zod 4. "
                f"Use '{LEGACY_METHODS[method.name]}' instead."
            )
            diagnostics.append(Diagnostic.at(DiagnosticCode.LEGACY_SYNTAX, message, method.anchor or call))
    return diagnostics


def _shape_diagnostics(chain: MethodChain) -> list[Diagnostic]:
    if chain.base_method not in OBJECT_METHODS or not chain.base_args:
        return []
    shape = unwrap(chain.base_args[0])
    if shape.type != "object":
        return []
    diagnostics = []
    for member in named_children(shape):
        key = member.child_by_field_name("key") if member.type == "pair" else None
        if key is not None and key.type == "computed_property_name":
            diagnostics.append(Diagnostic.at(DiagnosticCode.NON_ANALYZABLE_SCHEMA, COMPUTED_KEY_MESSAGE, member))
        elif member.type == "spread_element":
            diagnostics.append(Diagnostic.at(DiagnosticCode.NON_ANALYZABLE_SCHEMA, SPREAD_MESSAGE, member))
    return diagnostics


def lint_tree(root: Node, bindings: BindingResolver) -> list[Diagnostic]:
    """Run every check over a parsed source tree.

    Method checks run once per outermost chain; shape checks run on
    every object base call, nested ones included.

    Returns:
        Diagnostics in source order
    """
    diagnostics: list[Diagnostic] = []
    for call in find_nodes(root, "call_expression"):
        chain = get_method_chain(call, bindings)
        if chain is None:
            continue
        if not is_inner_chain_call(call):
            diagnostics.extend(_method_diagnostics(chain, call))
        if chain.base_call == call:
            diagnostics.extend(_shape_diagnostics(chain))

    diagnostics.sort(key=lambda diagnostic: diagnostic.offset)
    if diagnostics:
        logger.debug("Lint found %d issue(s)", len(diagnostics))
    return diagnostics
