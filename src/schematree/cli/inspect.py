from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from schematree.cli.renderers import (
    InspectJsonRenderer,
    InspectPlainRenderer,
    InspectRichRenderer,
    run_events,
)
from schematree.core.inspect import inspect_events

console = Console()


def inspect(
    schema: Path = typer.Argument(
        ...,
        help="JSON Schema file to show as a property tree.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to schematree.yaml.",
    ),
    project: Path = typer.Option(
        Path("."),
        "--project",
        "-p",
        help="Base directory for relative paths.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable JSON report.",
    ),
) -> None:
    """Parse a JSON Schema and show its property tree."""
    events = inspect_events(schema, project_dir=project, config_path=config)
    if json_output:
        renderer = InspectJsonRenderer(console)
    else:
        renderer = InspectRichRenderer(console) if console.is_terminal else InspectPlainRenderer(console)
    exit_code = run_events(events, renderer)
    raise typer.Exit(code=exit_code)
