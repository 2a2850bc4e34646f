"""Rich terminal formatter for Monolith Insight."""

from typing import Optional

from rich.console import Console
from rich.table import Table

from ..analysis.engine import AnalysisResult
from ..config import MEDIUM_COUPLING_MAX_CALLS, WEAK_COUPLING_MAX_CALLS
from ..graph.recommendations import best_suggestion_per_cycle
from ..scoring.models import DifficultyCategory
from .base import BaseFormatter

_CATEGORY_STYLE = {
    DifficultyCategory.EASY: "green",
    DifficultyCategory.MEDIUM: "yellow",
    DifficultyCategory.HARD: "red",
}


def _category_label(category: DifficultyCategory) -> str:
    style = _CATEGORY_STYLE[category]
    return f"[{style}]{category.value}[/{style}]"


def _coupling_label(score: Optional[int]) -> str:
    if score is None:
        return "[dim]-[/dim]"
    if score <= WEAK_COUPLING_MAX_CALLS:
        return f"[green]{score}[/green]"
    elif score <= MEDIUM_COUPLING_MAX_CALLS:
        return f"[yellow]{score}[/yellow]"
    else:
        return f"[red]{score}[/red]"


class RichFormatter(BaseFormatter):
    """Rich terminal output: summary lines followed by tables."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def format_cycles(self, result: AnalysisResult) -> str:
        # Rich output goes directly to console; return empty string
        self.render_cycles(result)
        return ""

    def format_scores(self, result: AnalysisResult) -> str:
        self.render_scores(result)
        return ""

    def render_cycles(self, result: AnalysisResult) -> None:
        console = self.console
        stats = result.statistics

        console.print(
            f"  [bold]{stats.total_modules_analyzed}[/bold] modules, "
            f"[bold]{result.graph.edge_count}[/bold] dependency edges"
        )
        if not result.cycles:
            console.print("[bold green]No circular dependencies found.[/bold green]")
            console.print()
            return

        console.print(
            f"  [bold red]{stats.total_cycles}[/bold red] circular dependencies involving "
            f"{stats.total_modules_in_cycles} modules ({stats.participation_percent:.1f}%), "
            f"largest has {stats.largest_cycle_size} modules"
        )
        console.print()

        best = best_suggestion_per_cycle(result.suggestions)
        table = Table(show_header=True, title="Circular Dependencies")
        table.add_column("#", justify="right")
        table.add_column("Size", justify="right")
        table.add_column("Modules", style="cyan")
        table.add_column("Weakest", justify="right")
        table.add_column("Suggested break")

        for cycle in result.cycles:
            suggestion = best.get(cycle.cycle_id)
            table.add_row(
                str(cycle.cycle_id),
                str(cycle.size),
                " <-> ".join(m.name for m in cycle.modules),
                _coupling_label(cycle.weak_coupling_score),
                f"{suggestion.source.name} -> {suggestion.target.name}" if suggestion else "-",
            )
        console.print(table)
        console.print()

        if result.suggestions:
            console.print("[bold]Recommendations[/bold]")
            for s in result.suggestions:
                console.print(
                    f"  {s.rank}. Remove [bold]{s.source.name}[/bold] -> "
                    f"[bold]{s.target.name}[/bold] [dim]({s.rationale})[/dim]"
                )
            console.print()

    def render_scores(self, result: AnalysisResult) -> None:
        console = self.console
        if not result.scores:
            console.print("[yellow]No modules to score.[/yellow]")
            return

        table = Table(show_header=True, title="Extraction Difficulty (easiest first)")
        table.add_column("Module", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Category")
        table.add_column("Coupling", justify="right")
        table.add_column("Complexity", justify="right")
        table.add_column("Tech debt", justify="right")
        table.add_column("API", justify="right")

        for score in result.scores:
            row = score.to_row()
            table.add_row(
                row["module"],
                f"{row['final_score']:.1f}",
                _category_label(DifficultyCategory(row["category"])),
                f"{row['coupling']:.1f}",
                f"{row['complexity']:.1f}",
                f"{row['tech_debt']:.1f}",
                f"{row['api_exposure']:.1f}",
            )
        console.print(table)

        if result.candidates is not None:
            stats = result.candidates.statistics
            console.print(
                f"  [green]{stats.easy_count}[/green] easy, "
                f"[yellow]{stats.medium_count}[/yellow] medium, "
                f"[red]{stats.hard_count}[/red] hard"
            )
        console.print()
