"""
CLI commands to inspect inputs and literals without generating anything.

Thin wrappers over ``bin2cpp.core.use_cases.preview``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from bin2cpp.core.errors import GenerationError
from bin2cpp.core.models.config import DEFAULT_LINE_WIDTH


@click.group("inspect")
def inspect() -> None:
    """Inspect: preview inputs and encoded literals."""


@inspect.command("inputs")
@click.argument("inputs", nargs=-1, type=click.Path())
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def inputs_cmd(ctx: click.Context, inputs: tuple[str, ...], as_json: bool) -> None:
    """List the files INPUTS resolve to, with their C++ identifiers."""
    from bin2cpp.core.use_cases.preview import list_inputs

    listing = list_inputs(list(inputs) if inputs else None, ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(listing.to_dict(), indent=2))
        sys.exit(1 if listing.error else 0)

    if listing.error:
        click.secho(f"Error: {listing.error}", fg="red", err=True)
        sys.exit(1)

    click.secho(
        f"📦 {len(listing.files)} file(s), {listing.total_bytes} bytes",
        fg="cyan",
        bold=True,
    )
    for f in listing.files:
        size = listing.sizes.get(f.identifier, 0)
        click.echo(f"   {f.identifier:<32} {size:>10}  {f.display_name}")


@inspect.command("literal")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--style", type=click.Choice(["string", "array"]), default="string")
@click.option("--line-width", type=int, default=DEFAULT_LINE_WIDTH, help="Wrap at this width.")
def literal_cmd(file: str, style: str, line_width: int) -> None:
    """Print the C++ literal FILE would be embedded as."""
    from bin2cpp.core.use_cases.preview import preview_literal

    try:
        encoded = preview_literal(Path(file), style=style, line_width=line_width)
    except (GenerationError, ValueError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.echo(encoded.literal)
    click.secho(f"// {encoded.byte_count} bytes", fg="cyan", err=True)
