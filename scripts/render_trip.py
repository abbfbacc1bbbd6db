#!/usr/bin/env python3
"""
Trip Proposal Rendering CLI

Renders trip documents (JSON or YAML) into HTML proposals using the rendering
context, and exposes the normalization pass and template listing on their own.

Commands:
    render    - Render a trip to HTML
    normalize - Print the normalized render context and repair warnings
    templates - List templates available to a scope

Examples:\n

    render_trip.py render trips/mauritius.json                         # Built-in default template

    render_trip.py render trips/mauritius.yaml -t cruise -d templates  # Template from a directory store

    render_trip.py render trips/mauritius.json -p profiles/ana.json -o out/mauritius.html

    render_trip.py normalize trips/mauritius.json                      # Inspect normalized data

    render_trip.py templates -d templates -s agent42/                  # List templates for a scope
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from porter.contexts.intake import normalize_trip
from porter.contexts.rendering import render_trip
from porter.contexts.rendering.logger import setup_rendering_logger
from porter.contexts.templating import (
    DirectoryTemplateStore,
    TemplateNotFound,
    TemplateRegistry,
)
from porter.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Render travel trip documents into HTML proposals",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def load_document(path: Path) -> Dict[str, Any]:
    """Load a JSON or YAML document into plain dicts and lists."""
    if not path.exists():
        typer.secho(f"Error: File not found: {path}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if path.suffix.lower() == ".json":
        return json.loads(path.read_text(encoding="utf-8"))
    return OmegaConf.to_container(OmegaConf.load(path), resolve=True)


def build_registry(templates_dir: Optional[Path]) -> TemplateRegistry:
    """Registry over a template directory, or the built-in default only."""
    if templates_dir is None:
        return TemplateRegistry()
    return TemplateRegistry(DirectoryTemplateStore(templates_dir))


def write_or_echo(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)


@app.command("render")
def render_command(
    trip_file: Annotated[
        Path,
        typer.Argument(help="Trip document (.json or .yaml)"),
    ],
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template name (default: trip/profile choice)"),
    ] = None,
    templates_dir: Annotated[
        Optional[Path],
        typer.Option("--templates-dir", "-d", help="Directory store holding _templates/*.html"),
    ] = None,
    scope: Annotated[
        Optional[str],
        typer.Option("--scope", "-s", help="Key prefix for scoped template overrides (e.g. agent42/)"),
    ] = None,
    profile_file: Annotated[
        Optional[Path],
        typer.Option("--profile", "-p", help="Advisor profile (.json or .yaml)"),
    ] = None,
    trip_key: Annotated[
        str,
        typer.Option("--trip-key", "-k", help="Storage key of the trip (prefix/tripId)"),
    ] = "",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write HTML here instead of stdout"),
    ] = None,
):
    """
    Render a trip document to an HTML proposal.

    Examples:\n

        $ render_trip.py render trips/mauritius.json -o out/mauritius.html

        $ render_trip.py render trips/mauritius.json -t luxury -d templates -s agent42/
    """
    trip = load_document(trip_file)
    profile = load_document(profile_file) if profile_file else None

    log_dir = LOGS_PATH / f"render_{now()}"
    log_file = setup_rendering_logger(log_dir, template_name=template)

    try:
        result = render_trip(
            trip,
            template,
            profile,
            registry=build_registry(templates_dir),
            scope=scope,
            trip_key=trip_key or trip_file.stem,
        )
    except TemplateNotFound as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    write_or_echo(result.html, output)

    if result.warnings:
        typer.secho(f"{len(result.warnings)} data repairs:", fg=typer.colors.YELLOW, err=True)
        for warning in result.warnings:
            typer.echo(f"  - {warning}", err=True)
    typer.echo(f"Template: {result.template_name} ({result.time_s:.3f}s)", err=True)
    typer.echo(f"Log: {log_file}", err=True)


@app.command("normalize")
def normalize_command(
    trip_file: Annotated[
        Path,
        typer.Argument(help="Trip document (.json or .yaml)"),
    ],
    profile_file: Annotated[
        Optional[Path],
        typer.Option("--profile", "-p", help="Advisor profile (.json or .yaml)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write normalized JSON here instead of stdout"),
    ] = None,
):
    """
    Print the normalized render context for a trip, with its repair warnings.

    Examples:\n

        $ render_trip.py normalize trips/mauritius.json

        $ render_trip.py normalize trips/mauritius.json -o out/mauritius.normalized.json
    """
    trip = load_document(trip_file)
    profile = load_document(profile_file) if profile_file else None

    result = normalize_trip(trip, profile, trip_key=trip_file.stem)
    write_or_echo(json.dumps(result.data, indent=2, ensure_ascii=False), output)

    if result.warnings:
        typer.secho(f"{len(result.warnings)} data repairs:", fg=typer.colors.YELLOW, err=True)
        for warning in result.warnings:
            typer.echo(f"  - {warning}", err=True)


@app.command("templates")
def templates_command(
    templates_dir: Annotated[
        Optional[Path],
        typer.Option("--templates-dir", "-d", help="Directory store holding _templates/*.html"),
    ] = None,
    scope: Annotated[
        Optional[str],
        typer.Option("--scope", "-s", help="Key prefix for scoped template overrides"),
    ] = None,
):
    """
    List templates available to a scope.

    Examples:\n

        $ render_trip.py templates -d templates

        $ render_trip.py templates -d templates -s agent42/
    """
    listing = build_registry(templates_dir).list_available_templates(scope)

    typer.secho("\nTemplates", fg=typer.colors.BLUE, bold=True)
    if scope:
        typer.echo(f"  Scoped ({scope}): {', '.join(listing.scoped) or '(none)'}")
    typer.echo(f"  Shared: {', '.join(listing.shared) or '(none)'}")
    typer.echo(f"  Default: {listing.default_template}")
    typer.echo("")


if __name__ == "__main__":
    app()
