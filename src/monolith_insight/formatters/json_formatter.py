"""JSON formatter for Monolith Insight."""

import json
from typing import Any

from ..analysis.engine import AnalysisResult
from ..graph.models import Cycle, CycleStatistics
from ..graph.recommendations import CycleBreakingSuggestion
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render cycles or extraction scores as JSON."""

    def format_cycles(self, result: AnalysisResult) -> str:
        data = {
            "summary": _statistics_dict(result.statistics),
            "cycles": [_cycle_dict(c) for c in result.cycles],
            "recommendations": [_suggestion_dict(s) for s in result.suggestions],
        }
        return json.dumps(data, indent=2) + "\n"

    def format_scores(self, result: AnalysisResult) -> str:
        data: dict[str, Any] = {"scores": [s.to_row() for s in result.scores]}
        candidates = result.candidates
        if candidates is not None:
            stats = candidates.statistics
            data["summary"] = {
                "total_modules": stats.total_modules,
                "easy": stats.easy_count,
                "medium": stats.medium_count,
                "hard": stats.hard_count,
            }
            data["easiest"] = [s.module_name for s in candidates.easiest]
            data["hardest"] = [s.module_name for s in candidates.hardest]
        return json.dumps(data, indent=2) + "\n"


def _statistics_dict(stats: CycleStatistics) -> dict[str, Any]:
    return {
        "total_cycles": stats.total_cycles,
        "modules_in_cycles": stats.total_modules_in_cycles,
        "modules_analyzed": stats.total_modules_analyzed,
        "participation_rate": round(stats.participation_rate, 4),
        "largest_cycle_size": stats.largest_cycle_size,
    }


def _cycle_dict(cycle: Cycle) -> dict[str, Any]:
    return {
        "id": cycle.cycle_id,
        "size": cycle.size,
        "modules": [m.name for m in cycle.modules],
        "weak_coupling_score": cycle.weak_coupling_score,
        "weak_edges": [
            {"source": e.source.name, "target": e.target.name, "coupling_score": e.coupling_score}
            for e in cycle.weak_edges
        ],
    }


def _suggestion_dict(s: CycleBreakingSuggestion) -> dict[str, Any]:
    return {
        "rank": s.rank,
        "cycle_id": s.cycle_id,
        "source": s.source.name,
        "target": s.target.name,
        "coupling_score": s.coupling_score,
        "cycle_size": s.cycle_size,
        "rationale": s.rationale,
    }
