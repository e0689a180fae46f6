"""
Error taxonomy for IR construction.

Builder errors are fatal: they propagate out of ``build_ir`` with the
location path of the offending node and no partial Document is returned.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable


def format_location(path: Iterable[str] | str) -> str:
    """Render a location token list the way every error message shows it."""
    if isinstance(path, str):
        return path or "#"
    tokens = [str(token) for token in path]
    return "/".join(tokens) if tokens else "#"


class IRBuildError(Exception):
    """Base class for structural errors raised while building the IR.

    Attributes:
        path: Location tokens of the node that failed
        detail: Human-readable description without the location prefix
    """

    def __init__(self, detail: str, path: Iterable[str] | str = ()):
        self.path = format_location(path)
        self.detail = detail
        super().__init__(f"{detail} (at {self.path})")


class InvalidReferenceFormat(IRBuildError):
    """Raised when a $ref matches neither the component nor the x-ext form."""

    pass


class UnsupportedReferenceTarget(IRBuildError):
    """Raised when a $ref points at a different component type than expected.

    For example a parameter ref used where a schema ref belongs.
    """

    pass


class MissingComponentReference(IRBuildError):
    """Raised when a well-formed $ref names a component that does not exist."""

    pass


class CircularComponentReference(IRBuildError):
    """Raised when non-schema component refs loop back on themselves.

    Schema cycles are expected and handled by the circular detector;
    parameter, response and request body cycles never are.
    """

    pass


class NestedReferenceNotBundled(IRBuildError):
    """Raised when a component ref resolves to yet another ref.

    Ref chains must be collapsed by the upstream bundler.
    """

    pass


class UnknownSchemaShape(IRBuildError):
    """Raised when a schema node cannot be classified."""

    pass


class RecursionLimitExceeded(IRBuildError):
    """Raised when schema nesting goes deeper than ``BuildConfig.max_depth``."""

    pass


class IRBoundaryError(Exception):
    """Raised when a consumer is handed something other than an IR Document."""

    pass


class ZodParseError(Exception):
    """Raised by Zod handlers when a single declaration cannot be parsed.

    The parser turns it into a ``PARSE_FAILURE`` diagnostic and moves on
    to the next declaration.
    """

    pass


class DiagnosticCode(Enum):
    """Stable codes attached to Zod source diagnostics."""

    LEGACY_SYNTAX = "LegacySyntax"
    NON_ANALYZABLE_SCHEMA = "NonAnalyzableSchema"
    PARSE_FAILURE = "ParseFailure"
