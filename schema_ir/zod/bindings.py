"""
Lexical binding resolution for the Zod entry point.

A chain only counts as Zod when its root identifier resolves to the
Zod import. Local declarations (variables, parameters, functions and
classes) in an enclosing scope shadow the import.
"""

from __future__ import annotations

import logging

from tree_sitter import Node

from .constants import ZOD_ENTRY_NAME
from .syntax import named_children, node_text, string_value

logger = logging.getLogger(__name__)

SCOPE_TYPES = (
    "program",
    "statement_block",
    "arrow_function",
    "function_expression",
    "function",
    "function_declaration",
    "generator_function",
    "generator_function_declaration",
    "method_definition",
)

_FUNCTION_SCOPES = SCOPE_TYPES[2:]

_DECLARATION_TYPES = ("lexical_declaration", "variable_declaration")
_PATTERN_IDENTIFIERS = ("identifier", "shorthand_property_identifier_pattern")


def _node_key(node: Node) -> tuple[int, int, str]:
    return node.start_byte, node.end_byte, node.type


def _pattern_names(pattern: Node | None) -> list[str]:
    """Names bound by an identifier or destructuring pattern."""
    if pattern is None:
        return []
    if pattern.type in _PATTERN_IDENTIFIERS:
        return [node_text(pattern)]
    names = []
    for child in named_children(pattern):
        if child.type in _PATTERN_IDENTIFIERS:
            names.append(node_text(child))
        elif child.type == "pair_pattern":
            names.extend(_pattern_names(child.child_by_field_name("value")))
        elif child.type in ("assignment_pattern", "object_assignment_pattern"):
            names.extend(_pattern_names(child.child_by_field_name("left")))
        elif child.type in ("rest_pattern", "object_pattern", "array_pattern"):
            names.extend(_pattern_names(child))
    return names


def _statement_names(statement: Node) -> list[str]:
    if statement.type == "export_statement":
        declaration = statement.child_by_field_name("declaration")
        return _statement_names(declaration) if declaration is not None else []
    if statement.type in _DECLARATION_TYPES:
        names = []
        for declarator in named_children(statement):
            if declarator.type == "variable_declarator":
                names.extend(_pattern_names(declarator.child_by_field_name("name")))
        return names
    if statement.type in ("function_declaration", "generator_function_declaration", "class_declaration"):
        name = statement.child_by_field_name("name")
        return [node_text(name)] if name is not None else []
    return []


def _import_names(statement: Node) -> list[str]:
    """Local names bound by an import statement."""
    names = []
    for clause in named_children(statement):
        if clause.type != "import_clause":
            continue
        for child in named_children(clause):
            if child.type == "identifier":
                names.append(node_text(child))
            elif child.type == "namespace_import":
                names.extend(node_text(name) for name in named_children(child) if name.type == "identifier")
            elif child.type == "named_imports":
                for specifier in named_children(child):
                    local = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
                    if local is not None:
                        names.append(node_text(local))
    return names


def _parameter_names(function: Node) -> list[str]:
    single = function.child_by_field_name("parameter")
    if single is not None:
        return _pattern_names(single)
    parameters = function.child_by_field_name("parameters")
    if parameters is None:
        return []
    names = []
    for parameter in named_children(parameters):
        if parameter.type in ("required_parameter", "optional_parameter"):
            names.extend(_pattern_names(parameter.child_by_field_name("pattern")))
        elif parameter.type in _PATTERN_IDENTIFIERS:
            names.append(node_text(parameter))
    return names


class BindingResolver:
    """Decides whether an identifier refers to the Zod entry point."""

    def __init__(self, root: Node, module_names: list[str]):
        self.root = root
        self.module_names = list(module_names)
        self.zod_names: set[str] = set()
        # Names imported from any other module
        self.foreign_names: set[str] = set()
        self.has_zod_import = False
        self._scope_cache: dict[tuple[int, int, str], set[str]] = {}
        self._local_names: set[str] | None = None
        self._collect_imports()

    def _collect_imports(self) -> None:
        for statement in named_children(self.root):
            if statement.type != "import_statement":
                continue
            source = statement.child_by_field_name("source")
            if source is None:
                continue
            if string_value(source) not in self.module_names:
                self.foreign_names.update(_import_names(statement))
                continue
            self.has_zod_import = True
            for clause in named_children(statement):
                if clause.type == "import_clause":
                    self._collect_clause(clause)
        logger.debug("Zod bindings: %s", ", ".join(sorted(self.zod_names)) or "(implicit z)")

    def _collect_clause(self, clause: Node) -> None:
        for child in named_children(clause):
            if child.type == "identifier":
                # import z from "zod"
                self.zod_names.add(node_text(child))
            elif child.type == "namespace_import":
                # import * as z from "zod"
                for name in named_children(child):
                    if name.type == "identifier":
                        self.zod_names.add(node_text(name))
            elif child.type == "named_imports":
                # import { z } / { z as zod } from "zod"
                for specifier in named_children(child):
                    if specifier.type != "import_specifier":
                        continue
                    imported = specifier.child_by_field_name("name")
                    alias = specifier.child_by_field_name("alias")
                    if imported is not None and node_text(imported) == ZOD_ENTRY_NAME:
                        self.zod_names.add(node_text(alias if alias is not None else imported))

    def declared_names(self, scope: Node) -> set[str]:
        """Names declared directly in ``scope`` (imports excluded)."""
        key = _node_key(scope)
        if key not in self._scope_cache:
            names: set[str] = set()
            if scope.type in _FUNCTION_SCOPES:
                names.update(_parameter_names(scope))
            if scope.type in ("program", "statement_block"):
                for statement in named_children(scope):
                    names.update(_statement_names(statement))
            self._scope_cache[key] = names
        return self._scope_cache[key]

    @property
    def local_names(self) -> set[str]:
        """Every name declared in a scope nested below the program."""
        if self._local_names is None:
            names: set[str] = set()
            stack = list(self.root.children)
            while stack:
                node = stack.pop()
                if node.type in SCOPE_TYPES:
                    names.update(self.declared_names(node))
                stack.extend(node.children)
            self._local_names = names
        return self._local_names

    def is_zod(self, identifier: Node) -> bool:
        """True if ``identifier`` resolves to the Zod import.

        Without any Zod import in the source a free ``z`` is accepted.
        """
        name = node_text(identifier)
        # Only names declared in some nested scope can be shadowed
        scope = identifier.parent if name in self.local_names else None
        while scope is not None:
            if scope.type in SCOPE_TYPES and scope.type != "program" and name in self.declared_names(scope):
                return False
            if scope.type == "program":
                break
            scope = scope.parent

        if name in self.zod_names:
            return True
        if name in self.foreign_names or name in self.declared_names(self.root):
            return False
        return not self.has_zod_import and name == ZOD_ENTRY_NAME
