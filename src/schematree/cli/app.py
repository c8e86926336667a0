import typer
import rich_click  # noqa: F401
from .generate import generate
from .inspect import inspect
from .list_types import list_types
from schematree import __version__

app = typer.Typer(
    name="schematree",
    help="Build JSON Schema documents from property trees",
    no_args_is_help=True,
)

@app.command("version")
def version() -> None:
    """Show the schematree version."""
    typer.echo(f"schematree v{__version__}")

app.command()(generate)
app.command("inspect")(inspect)
app.command("types")(list_types)
