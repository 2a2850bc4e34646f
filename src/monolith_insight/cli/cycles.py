"""Cycle analysis command: circular dependencies and where to break them."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..analysis import AnalysisEngine
from ..context import AnalysisContext
from ..exceptions import MonolithInsightError
from ..formatters import get_formatter
from ..graph import FrameworkFilter
from ..graph.builder import load_graph_document
from ..logging_config import apply_verbosity, setup_logging
from . import app
from ._common import check_format, console, resolve_config


@app.command()
def cycles(
    graph_file: Path = typer.Argument(
        ...,
        help="Graph snapshot (JSON with modules and dependencies)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich, json or csv",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Append a full debug log of the run to this file",
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Detect circular dependencies and suggest the weakest edge to remove.

    Call counts in the snapshot ([cyan]coupling_score[/cyan] per dependency)
    drive the coupling classification. Without them every edge counts as a
    single reference.

    Framework modules ([cyan]System.*[/cyan], [cyan]Microsoft.*[/cyan], ...) are dropped
    before analysis; tune the lists in the [cyan]framework_filter[/cyan] table of the
    config file.

    [bold cyan]Examples:[/bold cyan]

      monolith-insight cycles graph.json

      monolith-insight cycles graph.json --format csv > cycles.csv

      monolith-insight cycles graph.json --log-file cycles.log
    """
    check_format(fmt)
    logger = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    try:
        settings = resolve_config(config=config, verbose=verbose, quiet=quiet)
        apply_verbosity(settings.verbosity)
        context = AnalysisContext(logger=logger)
        document = load_graph_document(
            graph_file, FrameworkFilter(settings.framework_filter), context
        )

        engine = AnalysisEngine(
            document.graph,
            edge_counts=document.edge_counts,
            config=settings,
            context=context,
        )
        result = engine.run(score=False)

        if fmt == "rich" and not quiet:
            console.print()
            console.print("[bold cyan]MONOLITH INSIGHT: Circular Dependencies[/bold cyan]")
            console.print()
        get_formatter(fmt).render_cycles(result)

    except typer.Exit:
        raise
    except MonolithInsightError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
