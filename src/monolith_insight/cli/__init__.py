"""CLI entry point, registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="monolith-insight",
    help="Monolith Insight - Dependency Cycle and Extraction Difficulty Analyzer",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(
            f"[bold cyan]Monolith Insight[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Analyze a module dependency graph for cycles and extraction candidates.
    """


# Import subcommands to register them
from .cycles import cycles as _cycles  # noqa: F401, E402
from .score import score as _score  # noqa: F401, E402
