"""Extraction scoring command: which modules are easiest to pull out."""

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
from ..scoring import ExtractionScoreCalculator, GraphCouplingMetricCalculator, MetricTable
from . import app
from ._common import check_format, console, resolve_config


@app.command()
def score(
    graph_file: Path = typer.Argument(
        ...,
        help="Graph snapshot (JSON with modules, dependencies and metrics)",
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
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel workers",
        min=1,
        max=32,
    ),
):
    """
    Rank modules by extraction difficulty (0 easy, 100 hard).

    Every module in the snapshot needs a [cyan]metrics[/cyan] entry with
    complexity, tech_debt and api_exposure values on a 0-100 scale.
    Coupling is derived from the graph itself.

    [bold cyan]Examples:[/bold cyan]

      monolith-insight score graph.json

      monolith-insight score graph.json --format csv > heatmap.csv

      monolith-insight score graph.json --config weights.toml --workers 4
    """
    check_format(fmt)
    logger = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    try:
        settings = resolve_config(config=config, workers=workers, verbose=verbose, quiet=quiet)
        apply_verbosity(settings.verbosity)
        context = AnalysisContext(logger=logger)
        document = load_graph_document(
            graph_file, FrameworkFilter(settings.framework_filter), context
        )

        table = MetricTable(document.metrics)
        calculator = ExtractionScoreCalculator(
            GraphCouplingMetricCalculator(),
            table,
            table,
            table,
            config=settings,
        )
        engine = AnalysisEngine(
            document.graph,
            calculator=calculator,
            edge_counts=document.edge_counts,
            config=settings,
            context=context,
        )
        result = engine.run()

        if fmt == "rich" and not quiet:
            console.print()
            console.print("[bold cyan]MONOLITH INSIGHT: Extraction Difficulty[/bold cyan]")
            console.print()
        get_formatter(fmt).render_scores(result)

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
