"""
Configuration for IR construction.

Shared by the OpenAPI builder and the Zod parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_HTTP_METHODS = ["get", "post", "put", "patch", "delete", "head", "options", "trace"]


@dataclass
class BuildConfig:
    """Configuration options for building the IR."""

    # Maximum schema nesting depth before the build fails fast
    max_depth: int = 256

    # HTTP methods read from each path item, in emission order
    http_methods: list[str] = field(default_factory=lambda: list(DEFAULT_HTTP_METHODS))

    # Module specifiers whose imports count as the Zod entry point
    zod_module_names: list[str] = field(default_factory=lambda: ["zod", "zod/v4"])

    # Suffix stripped from Zod variable names to derive component names
    schema_name_suffix: str = "Schema"

    # Record metadata-quality advisories (Zod) and fallback advisories (OpenAPI)
    generate_advisories: bool = True

    # Raise instead of dropping required names that are not declared properties
    strict_required: bool = False

    @staticmethod
    def from_dict(d: dict) -> BuildConfig:
        """Create a config from a dictionary."""
        config = BuildConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "max_depth": self.max_depth,
            "http_methods": self.http_methods,
            "zod_module_names": self.zod_module_names,
            "schema_name_suffix": self.schema_name_suffix,
            "generate_advisories": self.generate_advisories,
            "strict_required": self.strict_required,
        }
