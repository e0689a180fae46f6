"""
Immutable build context threaded through every recursive builder call.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from ..config import BuildConfig
from ..errors import RecursionLimitExceeded, format_location


@dataclass(frozen=True)
class BuildContext:
    """Where the builder is and what the current node inherits.

    Attributes:
        root_document: The whole OpenAPI document, used for ref lookups
        path: Location tokens from ``#`` down to the current node
        required: Whether the current node is required by its parent
        depth: Schema nesting depth of the current node
        config: Build options
    """

    root_document: Mapping[str, Any]
    path: tuple[str, ...] = ("#",)
    required: bool = True
    depth: int = 0
    config: BuildConfig = field(default_factory=BuildConfig)

    @property
    def location(self) -> str:
        return format_location(self.path)

    def at(self, *tokens: str, required: bool | None = None) -> BuildContext:
        """Same depth, deeper path. Used for non-schema containers."""
        return replace(
            self,
            path=self.path + tuple(str(token) for token in tokens),
            required=self.required if required is None else required,
        )

    def child(self, *tokens: str, required: bool = True) -> BuildContext:
        """Context for a nested schema one level down.

        Raises:
            RecursionLimitExceeded: If the new depth passes ``config.max_depth``
        """
        depth = self.depth + 1
        path = self.path + tuple(str(token) for token in tokens)
        if depth > self.config.max_depth:
            raise RecursionLimitExceeded(f"Schema nesting exceeds max depth {self.config.max_depth}", path)
        return replace(self, path=path, required=required, depth=depth)
