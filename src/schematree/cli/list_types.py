from __future__ import annotations

from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from schematree.config.load import ConfigError, load_config
from schematree.model.nodes import PROPERTY_TYPES

console = Console()


def list_types(
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
) -> None:
    """List the property types a node can take, with their labels."""
    try:
        builder_config = load_config(project.resolve(), config)
    except ConfigError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2)

    table = Table(show_header=True, box=box.MINIMAL)
    table.add_column("TYPE")
    table.add_column("LABEL")
    for node_type in PROPERTY_TYPES:
        table.add_row(node_type, builder_config.label_for(node_type))
    console.print(table)
