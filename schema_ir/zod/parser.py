"""
Zod source to IR.

Parses TypeScript source with tree-sitter, lints it, then turns every
top-level ``const XSchema = z.<...>`` declaration into a schema
component. Problems are collected as diagnostics; a declaration that is
flagged or fails to parse contributes nothing to the Document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tree_sitter import Node

from ..assembly import finalize_document
from ..config import BuildConfig
from ..errors import DiagnosticCode, IRBuildError, ZodParseError
from ..ir.document import Document, Operation, SchemaComponent
from .bindings import BindingResolver
from .dispatcher import ZodDispatcher
from .constants import ENDPOINT_FUNCTION
from .endpoints import EndpointBuilder, is_endpoint_call, parse_endpoint_definition
from .handlers import default_table
from .lint import Diagnostic, lint_tree
from .syntax import find_errors, get_method_chain, location, named_children, node_text, parse_source, unwrap

logger = logging.getLogger(__name__)

ZOD_SOURCE_FORMAT_VERSION = "3.1.0"
ZOD_DOCUMENT_INFO = {"title": "Parsed from Zod", "version": "1.0.0"}


@dataclass
class ZodAdvisory:
    """Metadata-quality suggestion for a parsed schema."""

    schema_name: str
    field: str
    reason: str
    suggested_value: str = ""

    def to_dict(self) -> dict:
        return {
            "schemaName": self.schema_name,
            "field": self.field,
            "reason": self.reason,
            "suggestedValue": self.suggested_value,
        }


@dataclass
class ZodParseResult:
    ir: Document
    diagnostics: list[Diagnostic] = field(default_factory=list)
    advisories: list[ZodAdvisory] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def to_dict(self) -> dict:
        return {
            "ir": self.ir.to_dict(),
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
            "advisories": [advisory.to_dict() for advisory in self.advisories],
        }


@dataclass
class _Declaration:
    variable: str
    name: str
    value: Node


def derive_component_name(variable: str, suffix: str = "Schema") -> str:
    """``UserSchema`` -> ``User``, ``productschema`` -> ``product``.

    The suffix is matched as written or all lowercase; names without it,
    or made only of it, are kept.
    """
    for candidate in (suffix, suffix.lower()):
        if candidate and variable.endswith(candidate) and len(variable) > len(candidate):
            return variable[: -len(candidate)]
    return variable


class ZodParser:
    """Parses Zod schema declarations into an IR Document."""

    def __init__(self, config: BuildConfig | None = None):
        self.config = config or BuildConfig()

    def parse(self, source: str) -> ZodParseResult:
        """Parse Zod source text.

        Args:
            source: TypeScript source declaring Zod schemas

        Returns:
            The Document built from every clean declaration, with the
            diagnostics and advisories collected along the way
        """
        tree = parse_source(source)
        root = tree.root_node
        bindings = BindingResolver(root, self.config.zod_module_names)

        diagnostics = self._syntax_diagnostics(root)
        lint_diagnostics = lint_tree(root, bindings)
        diagnostics.extend(lint_diagnostics)

        declarations, endpoints = self._find_declarations(root, bindings)
        declared = {declaration.variable for declaration in declarations}
        table = default_table(self.component_name, declared)
        dispatcher = ZodDispatcher(bindings, table, self.config)

        components: list[SchemaComponent] = []
        advisories: list[ZodAdvisory] = []
        seen: dict[str, str] = {}
        for declaration in declarations:
            value = declaration.value
            if self._is_flagged(value, lint_diagnostics):
                logger.debug("Skipping flagged declaration %s", declaration.variable)
                continue

            if declaration.name in seen:
                diagnostics.append(
                    self._declaration_failure(
                        declaration,
                        f'Component name "{declaration.name}" is already used by "{seen[declaration.name]}".',
                    )
                )
                continue

            try:
                schema = dispatcher.parse_schema(value)
            except (ZodParseError, IRBuildError) as e:
                diagnostics.append(self._declaration_failure(declaration, str(e)))
                continue

            seen[declaration.name] = declaration.variable
            components.append(SchemaComponent(name=declaration.name, schema=schema))
            logger.debug("Parsed %s as component %s", declaration.variable, declaration.name)

            if self.config.generate_advisories and not schema.description:
                advisories.append(
                    ZodAdvisory(
                        schema_name=declaration.name,
                        field="description",
                        reason=f"No .describe() found on {declaration.variable}. Consider adding a description.",
                        suggested_value=f"Description for {declaration.name}",
                    )
                )

        operations: list[Operation] = []
        builder = EndpointBuilder(dispatcher)
        for declaration in endpoints:
            if self._is_flagged(declaration.value, lint_diagnostics):
                logger.debug("Skipping flagged endpoint %s", declaration.variable)
                continue
            try:
                definition = parse_endpoint_definition(declaration.value, self.config.http_methods)
                operations.append(builder.build(definition))
            except (ZodParseError, IRBuildError) as e:
                diagnostics.append(self._declaration_failure(declaration, str(e), kind="endpoint"))

        document = finalize_document(ZOD_SOURCE_FORMAT_VERSION, ZOD_DOCUMENT_INFO, components, operations)
        logger.info(
            "Parsed %d Zod schema(s) and %d endpoint(s) with %d diagnostic(s)",
            len(components),
            len(operations),
            len(diagnostics),
        )
        return ZodParseResult(ir=document, diagnostics=diagnostics, advisories=advisories)

    def component_name(self, variable: str) -> str:
        return derive_component_name(variable, self.config.schema_name_suffix)

    @staticmethod
    def _is_flagged(value: Node, lint_diagnostics: list[Diagnostic]) -> bool:
        """A value with a syntax error or a lint finding inside it contributes no IR."""
        return value.has_error or any(
            value.start_byte <= diagnostic.offset < value.end_byte for diagnostic in lint_diagnostics
        )

    def _syntax_diagnostics(self, root: Node) -> list[Diagnostic]:
        diagnostics = []
        for error in find_errors(root):
            snippet = node_text(error)[:40] if not error.is_missing else error.type
            message = f"Syntax error near {snippet!r}" if not error.is_missing else f"Missing {snippet!r}"
            diagnostics.append(Diagnostic.at(DiagnosticCode.PARSE_FAILURE, message, error))
        return diagnostics

    def _find_declarations(
        self, root: Node, bindings: BindingResolver
    ) -> tuple[list[_Declaration], list[_Declaration]]:
        """Top-level schema declarations and endpoint declarations, in source order."""
        declarations = []
        endpoints = []
        for statement in named_children(root):
            if statement.type == "expression_statement":
                expressions = named_children(statement)
                if expressions and is_endpoint_call(expressions[0]):
                    endpoints.append(_Declaration(variable=ENDPOINT_FUNCTION, name="", value=expressions[0]))
                continue
            if statement.type == "export_statement":
                statement = statement.child_by_field_name("declaration")
                if statement is None:
                    continue
            if statement.type not in ("lexical_declaration", "variable_declaration"):
                continue
            for declarator in named_children(statement):
                if declarator.type != "variable_declarator":
                    continue
                name = declarator.child_by_field_name("name")
                value = declarator.child_by_field_name("value")
                if name is None or value is None or name.type != "identifier":
                    continue
                variable = node_text(name)
                if is_endpoint_call(value):
                    endpoints.append(_Declaration(variable=variable, name="", value=value))
                    continue
                if unwrap(value).type != "call_expression" or get_method_chain(value, bindings) is None:
                    continue
                declarations.append(_Declaration(variable=variable, name=self.component_name(variable), value=value))
        return declarations, endpoints

    def _declaration_failure(self, declaration: _Declaration, detail: str, kind: str = "schema") -> Diagnostic:
        line, column = location(declaration.value)
        message = (
            f'Failed to parse {kind} declaration "{declaration.variable}" at line {line}, column {column}. {detail}'
        )
        return Diagnostic.at(DiagnosticCode.PARSE_FAILURE, message, declaration.value)


def parse_zod_source(source: str, config: BuildConfig | None = None) -> ZodParseResult:
    """Parse Zod source text into a Document plus diagnostics and advisories."""
    return ZodParser(config).parse(source)
