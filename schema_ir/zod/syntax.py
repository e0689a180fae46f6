"""
TypeScript syntax tree helpers.

Uses tree-sitter and tree-sitter-typescript to parse source text, and
offers the small set of node accessors the Zod parser needs: method
chain extraction, literal evaluation and object literal entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..errors import ZodParseError
from ..ir.nodes import UNSET
from .constants import NAMESPACES

if TYPE_CHECKING:
    from .bindings import BindingResolver

TYPESCRIPT = Language(ts_typescript.language_typescript())

_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


def parse_source(source: str) -> Tree:
    """Parse TypeScript source text into a tree-sitter tree."""
    parser = Parser(TYPESCRIPT)
    return parser.parse(bytes(source, "utf8"))


def node_text(node: Node) -> str:
    return node.text.decode("utf8")


def location(node: Node) -> tuple[int, int]:
    """1-indexed (line, column) of the node start."""
    return node.start_point[0] + 1, node.start_point[1] + 1


def find_errors(node: Node) -> list[Node]:
    """Find all ERROR and MISSING nodes in the tree, in source order.

    Walks with an explicit stack so deeply nested source cannot exhaust
    the interpreter's call stack.
    """
    errors = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            errors.append(current)
        stack.extend(child for child in reversed(current.children) if child.has_error or child.is_missing)
    return errors


def find_nodes(node: Node, node_type: str) -> list[Node]:
    """Find all nodes of a given type in the tree, in source order."""
    results = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == node_type:
            results.append(current)
        stack.extend(reversed(current.children))
    return results


def named_children(node: Node) -> list[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def unwrap(node: Node) -> Node:
    """Strip parentheses and TypeScript-only wrappers around an expression."""
    while node.type in ("parenthesized_expression", "as_expression", "satisfies_expression", "non_null_expression"):
        inner = named_children(node)
        if not inner:
            break
        node = inner[0]
    return node


def call_arguments(call: Node) -> list[Node]:
    arguments = call.child_by_field_name("arguments")
    return named_children(arguments) if arguments is not None else []


# ---------------------------------------------------------------------------
# Method chains
# ---------------------------------------------------------------------------


@dataclass
class MethodCall:
    """One chained call such as ``.min(1)``."""

    name: str
    args: list[Any] = field(default_factory=list)  # Literal values, UNSET where not a literal
    arg_nodes: list[Node] = field(default_factory=list)
    member: Node | None = None  # The member_expression the method was read from

    @property
    def first_arg(self) -> Any:
        return self.args[0] if self.args else UNSET

    @property
    def anchor(self) -> Node | None:
        """The ``.`` (or ``?.``) in front of the method name."""
        if self.member is None:
            return None
        for child in self.member.children:
            if child.type in (".", "optional_chain"):
                return child
        return self.member.child_by_field_name("property")


@dataclass
class MethodChain:
    """A Zod call chain: ``z.<base_method>(...).<methods...>``."""

    base_method: str
    base_call: Node
    base_args: list[Node] = field(default_factory=list)
    methods: list[MethodCall] = field(default_factory=list)

    def has(self, name: str) -> bool:
        return any(method.name == name for method in self.methods)

    def find(self, name: str) -> list[MethodCall]:
        return [method for method in self.methods if method.name == name]


def _base_method(function: Node, bindings: BindingResolver) -> str | None:
    """Base method name if ``function`` is ``z.x`` or ``z.<namespace>.x``."""
    target = function.child_by_field_name("object")
    prop = function.child_by_field_name("property")
    if target is None or prop is None:
        return None
    if target.type == "identifier" and bindings.is_zod(target):
        return node_text(prop)
    if target.type == "member_expression":
        root = target.child_by_field_name("object")
        namespace = target.child_by_field_name("property")
        if (
            root is not None
            and namespace is not None
            and root.type == "identifier"
            and node_text(namespace) in NAMESPACES
            and bindings.is_zod(root)
        ):
            return f"{node_text(namespace)}.{node_text(prop)}"
    return None


def get_method_chain(call: Node, bindings: BindingResolver) -> MethodChain | None:
    """Extract the chain rooted at a Zod import, or None for anything else."""
    methods: list[MethodCall] = []
    current = unwrap(call)
    while current.type == "call_expression":
        function = current.child_by_field_name("function")
        if function is None or function.type != "member_expression":
            return None

        base = _base_method(function, bindings)
        if base is not None:
            return MethodChain(base_method=base, base_call=current, base_args=call_arguments(current), methods=methods)

        target = function.child_by_field_name("object")
        prop = function.child_by_field_name("property")
        arg_nodes = call_arguments(current)
        methods.insert(
            0,
            MethodCall(
                name=node_text(prop),
                args=[literal_value(arg) for arg in arg_nodes],
                arg_nodes=arg_nodes,
                member=function,
            ),
        )
        current = unwrap(target)
    return None


def is_inner_chain_call(call: Node) -> bool:
    """True when ``call`` is the receiver of another call in the same chain."""
    parent = call.parent
    while parent is not None and parent.type == "parenthesized_expression":
        parent = parent.parent
    return parent is not None and parent.type == "member_expression" and parent.parent is not None and parent.parent.type == "call_expression"


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


def _unescape(sequence: str) -> str:
    body = sequence[1:]
    if not body:
        return ""
    if body[0] in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body[0]]
    if body[0] == "u":
        return chr(int(body[1:].strip("{}"), 16))
    if body[0] == "x":
        return chr(int(body[1:], 16))
    if body[0] in "\r\n":
        # Line continuation
        return ""
    return body


def string_value(node: Node) -> str:
    parts = []
    for child in node.children:
        if child.type == "string_fragment":
            parts.append(node_text(child))
        elif child.type == "escape_sequence":
            parts.append(_unescape(node_text(child)))
    return "".join(parts)


def number_value(text: str) -> int | float:
    text = text.replace("_", "")
    if text.endswith("n"):
        return int(text[:-1], 0)
    if text.lower().startswith(("0x", "0o", "0b")):
        return int(text, 0)
    value = float(text)
    if value.is_integer() and not any(marker in text.lower() for marker in (".", "e")):
        return int(value)
    return value


def literal_value(node: Node) -> Any:
    """Evaluate a literal expression; returns UNSET for anything else.

    Handles strings, numbers, booleans, null, regex literals (as their
    pattern), substitution-free template strings, and arrays or objects
    made only of those.
    """
    node = unwrap(node)
    kind = node.type
    if kind == "string":
        return string_value(node)
    if kind == "number":
        return number_value(node_text(node))
    if kind == "true":
        return True
    if kind == "false":
        return False
    if kind == "null":
        return None
    if kind == "regex":
        pattern = node.child_by_field_name("pattern")
        return node_text(pattern) if pattern is not None else ""
    if kind == "template_string":
        if any(child.type == "template_substitution" for child in node.children):
            return UNSET
        return node_text(node)[1:-1]
    if kind == "unary_expression":
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        if operator is not None and argument is not None and node_text(operator) in ("-", "+"):
            value = literal_value(argument)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return -value if node_text(operator) == "-" else value
        return UNSET
    if kind == "array":
        values = [literal_value(element) for element in named_children(node)]
        return UNSET if any(value is UNSET for value in values) else values
    if kind == "object":
        result = {}
        for child in named_children(node):
            if child.type != "pair":
                return UNSET
            key = property_key(child.child_by_field_name("key"))
            value = literal_value(child.child_by_field_name("value"))
            if key is None or value is UNSET:
                return UNSET
            result[key] = value
        return result
    return UNSET


def property_key(key: Node | None) -> str | None:
    """Static name of an object key, None for computed keys."""
    if key is None:
        return None
    if key.type in ("property_identifier", "identifier", "private_property_identifier"):
        return node_text(key)
    if key.type == "string":
        return string_value(key)
    if key.type == "number":
        return node_text(key)
    return None


# ---------------------------------------------------------------------------
# Object literals
# ---------------------------------------------------------------------------


def _returned_expression(body: Node) -> Node | None:
    for statement in named_children(body):
        if statement.type == "return_statement":
            returned = named_children(statement)
            return returned[0] if returned else None
    return None


def object_entries(obj: Node) -> list[tuple[str, Node]]:
    """Property name -> value expression pairs of an object literal, in order.

    Getter properties contribute the expression they return.

    Raises:
        ZodParseError: For computed keys, spreads, other dynamic members
            and keys declared twice
    """
    entries = []
    for child in named_children(obj):
        if child.type == "pair":
            key = property_key(child.child_by_field_name("key"))
            if key is None:
                raise ZodParseError("Computed property keys cannot be statically analyzed")
            entries.append((key, child.child_by_field_name("value")))
        elif child.type == "shorthand_property_identifier":
            entries.append((node_text(child), child))
        elif child.type == "method_definition" and any(token.type == "get" for token in child.children):
            name = property_key(child.child_by_field_name("name"))
            body = child.child_by_field_name("body")
            returned = _returned_expression(body) if body is not None else None
            if name is None or returned is None:
                raise ZodParseError(f"Getter {node_text(child)[:40]!r} must return a schema expression")
            entries.append((name, returned))
        elif child.type == "spread_element":
            raise ZodParseError("Spread properties cannot be statically analyzed")
        else:
            raise ZodParseError(f"Unsupported object member {node_text(child)[:40]!r}")

    seen: set[str] = set()
    for name, _ in entries:
        if name in seen:
            raise ZodParseError(f'Duplicate property "{name}" in object shape')
        seen.add(name)
    return entries


def function_body_expression(function: Node) -> Node | None:
    """Expression a concise-body or single-return arrow function evaluates to."""
    body = function.child_by_field_name("body")
    if body is None:
        return None
    if body.type == "statement_block":
        return _returned_expression(body)
    return body


def get_reference_chain(call: Node, bindings: BindingResolver) -> tuple[Node, list[MethodCall]] | None:
    """Root identifier and methods of a chain on a schema variable.

    Matches ``UserSchema.optional()`` and similar; returns None when the
    root is the Zod import or not an identifier.
    """
    methods: list[MethodCall] = []
    current = unwrap(call)
    while current.type == "call_expression":
        function = current.child_by_field_name("function")
        if function is None or function.type != "member_expression":
            return None
        prop = function.child_by_field_name("property")
        arg_nodes = call_arguments(current)
        methods.insert(
            0,
            MethodCall(
                name=node_text(prop),
                args=[literal_value(arg) for arg in arg_nodes],
                arg_nodes=arg_nodes,
                member=function,
            ),
        )
        current = unwrap(function.child_by_field_name("object"))
    if current.type != "identifier" or bindings.is_zod(current):
        return None
    return current, methods
