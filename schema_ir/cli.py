"""
Command line inspection of the IR built from OpenAPI or Zod input.
"""

import json
import logging

import click

from .config import BuildConfig
from .errors import IRBuildError
from .ir import Document
from .openapi import build_ir
from .zod import parse_zod_source


def load_config(path: str | None) -> BuildConfig:
    if path is None:
        return BuildConfig()
    with open(path) as f:
        return BuildConfig.from_dict(json.load(f))


def format_summary(document: Document) -> str:
    """One line per schema in emission order, then operation and enum counts."""
    graph = document.dependency_graph
    lines = []
    for name in graph.topological_order:
        node = graph.nodes[name]
        line = f"{name} (depth {node.depth})"
        if node.dependencies:
            line += f" -> {', '.join(node.dependencies)}"
        if node.is_circular:
            line += " [circular]"
        lines.append(line)
    lines.append(f"{len(document.operations)} operation(s), {len(document.enums)} enum(s)")
    for advisory in document.advisories:
        lines.append(f"advisory: {advisory.message}")
    return "\n".join(lines)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log build progress to stderr")
def cli(verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--summary", is_flag=True, default=False, help="Print the emission order instead of the full IR")
@click.option("--output", "-o", default=None, type=click.Path(resolve_path=True), help="Write the IR JSON to a file")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
def openapi(config, summary, output, path):
    """Build the IR for a bundled OpenAPI JSON document."""
    with open(path) as f:
        document = json.load(f)

    try:
        ir = build_ir(document, load_config(config))
    except IRBuildError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    out = format_summary(ir) if summary else json.dumps(ir.to_dict(), indent=2)
    if output is not None:
        with open(output, "w") as f:
            f.write(out + "\n")
    else:
        click.echo(out)


@cli.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
def zod(config, path):
    """Parse Zod schemas from a TypeScript source file."""
    with open(path, encoding="utf-8") as f:
        source = f.read()

    result = parse_zod_source(source, load_config(config))

    for name in result.ir.schema_names:
        click.echo(name)
    for operation in result.ir.operations:
        click.echo(f"{operation.method.upper()} {operation.path}")
    for advisory in result.advisories:
        click.echo(f"advisory: {advisory.reason}")
    for diagnostic in result.diagnostics:
        click.echo(f"{path}:{diagnostic.line}:{diagnostic.column}: {diagnostic.code.value}: {diagnostic.message}", err=True)

    if result.diagnostics:
        raise SystemExit(1)
