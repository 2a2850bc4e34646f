"""CSV formatter for Monolith Insight."""

import csv
import io

from ..analysis.engine import AnalysisResult
from ..graph.recommendations import best_suggestion_per_cycle
from .base import BaseFormatter

SCORE_COLUMNS = [
    "module", "final_score", "category",
    "coupling", "complexity", "tech_debt", "api_exposure",
]


class CsvFormatter(BaseFormatter):
    """Render cycles or extraction scores as CSV."""

    def format_cycles(self, result: AnalysisResult) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow([
            "cycle_id", "size", "modules",
            "weak_coupling_score", "weak_edge_count", "suggested_break",
        ])
        best = best_suggestion_per_cycle(result.suggestions)
        for cycle in result.cycles:
            suggestion = best.get(cycle.cycle_id)
            writer.writerow([
                cycle.cycle_id,
                cycle.size,
                ";".join(m.name for m in cycle.modules),
                "" if cycle.weak_coupling_score is None else cycle.weak_coupling_score,
                len(cycle.weak_edges),
                f"{suggestion.source.name} -> {suggestion.target.name}" if suggestion else "",
            ])
        return output.getvalue()

    def format_scores(self, result: AnalysisResult) -> str:
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=SCORE_COLUMNS)
        writer.writeheader()
        for score in result.scores:
            row = score.to_row()
            row["final_score"] = f"{row['final_score']:.1f}"
            writer.writerow(row)
        return output.getvalue()
