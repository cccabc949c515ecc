"""
bin2cpp: CLI entrypoint.

Usage:
    bin2cpp --help
    bin2cpp generate assets/ -d generated -o embedded_files -n resources
    bin2cpp config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from bin2cpp import __version__
from bin2cpp.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    resolve_level,
    setup_logging,
)

STYLE_CHOICE = click.Choice(["string", "array"])


@click.group()
@click.version_option(version=__version__, prog_name="bin2cpp")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress progress output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to bin2cpp.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """bin2cpp: generate C++11 source code embedding external (binary) files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
    )


@cli.command()
@click.argument("inputs", nargs=-1, type=click.Path())
@click.option(
    "--output-dir",
    "-d",
    default=None,
    help="Directory where to save the generated files (created if missing).",
)
@click.option(
    "--output-name",
    "-o",
    "base_name",
    default=None,
    help="Base name of the generated .h/.cpp files (default: embedded_files).",
)
@click.option(
    "--namespace",
    "-n",
    default=None,
    help="C++ namespace of the generated code (recommended; a::b allowed).",
)
@click.option("--style", type=STYLE_CHOICE, default=None, help="Data literal style.")
@click.option("--line-width", type=int, default=None, help="Wrap data literals at this width.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    inputs: tuple[str, ...],
    output_dir: str | None,
    base_name: str | None,
    namespace: str | None,
    style: str | None,
    line_width: int | None,
    as_json: bool,
) -> None:
    """Embed INPUTS (files or directories) into a .h/.cpp pair.

    Directories are iterated recursively.  Without INPUTS, the inputs
    listed in bin2cpp.yml are used.

    Examples:

        bin2cpp generate logo.png shaders/ -n assets

        bin2cpp generate data.bin -d build/gen -o data --style array
    """
    from bin2cpp.core.use_cases.generate import run_generate

    show_progress = not as_json and not ctx.obj.get("quiet")

    result = run_generate(
        config_path=ctx.obj.get("config_path"),
        inputs=list(inputs) if inputs else None,
        output_dir=output_dir,
        base_name=base_name,
        namespace=namespace,
        style=style,
        line_width=line_width,
        progress=click.echo if show_progress else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"Error: {result.error}", fg="red", err=True)
        sys.exit(1)

    registry = result.registry
    assert registry is not None  # guaranteed after error check above

    if ctx.obj.get("verbose"):
        click.secho(
            f"Embedded {registry.file_count} file(s), {registry.total_bytes} bytes",
            fg="green",
        )


@cli.group()
def config() -> None:
    """Build manifest (bin2cpp.yml) commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate bin2cpp.yml and the inputs it names."""
    from bin2cpp.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Manifest:  {result.config_path}")
        click.echo(f"   Base name: {result.config.base_name}")
        click.echo(f"   Namespace: {result.config.namespace or '(none)'}")
        click.echo(f"   Inputs:    {result.input_count} file(s)")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)


# ── Register sub-command groups from bin2cpp/ui/cli/ ────────────

from bin2cpp.ui.cli.inspect import inspect  # noqa: E402

cli.add_command(inspect)


if __name__ == "__main__":
    cli()
