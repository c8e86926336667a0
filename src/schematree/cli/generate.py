from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from schematree.cli.renderers import (
    GenerateJsonRenderer,
    GeneratePlainRenderer,
    GenerateRichRenderer,
    run_events,
)
from schematree.core.generate import generate_events

console = Console()


def generate(
    tree: Path = typer.Argument(
        ...,
        help="Tree document (YAML or JSON) listing metadata and properties.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the schema here instead of printing it.",
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
    no_metadata: bool = typer.Option(
        False,
        "--no-metadata",
        help="Leave title, description and version out of the schema.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable JSON report.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show stack traces for unexpected errors.",
    ),
) -> None:
    """Generate a JSON Schema from a property tree document."""
    events = generate_events(
        tree,
        project_dir=project,
        config_path=config,
        output=output,
        include_metadata=False if no_metadata else None,
    )
    if json_output:
        renderer = GenerateJsonRenderer(console)
    else:
        renderer = GenerateRichRenderer(console) if console.is_terminal else GeneratePlainRenderer(console)
    try:
        exit_code = run_events(events, renderer)
    except Exception as exc:  # noqa: BLE001
        if debug:
            raise
        console.print(f"[red]Unexpected error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2)
    raise typer.Exit(code=exit_code)
