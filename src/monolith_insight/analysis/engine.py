"""Analysis engine: runs the cycle and extraction pipelines over one graph.

DAG:
  Graph (from loader)
       → Coupling annotation (pair or per-edge call counts, or reference-count fallback)
       → Cycle detection (Tarjan SCC, size >= 2)
            → Weak-edge identification → Recommendations
            → Cycle statistics
       → Extraction scoring (optional, needs metric providers)
            → Ranked candidates

Annotation is the only write to the graph and finishes before any reader
starts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..config import AnalysisConfig
from ..context import AnalysisContext, ensure_context
from ..exceptions import InputValidationError
from ..graph.algorithms import (
    compute_cycle_statistics,
    cycle_edge_indices,
    detect_cycles,
    identify_weak_edges,
)
from ..graph.coupling import annotate_coupling, apply_reference_count_fallback
from ..graph.models import Cycle, CycleStatistics, DependencyGraph
from ..graph.recommendations import CycleBreakingSuggestion, generate_suggestions
from ..scoring.calculator import ExtractionScoreCalculator
from ..scoring.models import ExtractionScore, RankedExtractionCandidates
from ..scoring.ranking import generate_ranked_candidates


@dataclass
class AnalysisResult:
    """Everything one run produces, ready for formatters."""

    graph: DependencyGraph
    cycles: list[Cycle] = field(default_factory=list)
    statistics: CycleStatistics = field(default_factory=CycleStatistics)
    suggestions: list[CycleBreakingSuggestion] = field(default_factory=list)
    cyclic_edges: set[int] = field(default_factory=set)
    scores: list[ExtractionScore] = field(default_factory=list)
    candidates: Optional[RankedExtractionCandidates] = None


class AnalysisEngine:
    """Executes the full analysis DAG on an already-built dependency graph."""

    def __init__(
        self,
        graph: DependencyGraph,
        calculator: Optional[ExtractionScoreCalculator] = None,
        call_counts: Optional[Mapping[tuple[str, str], int]] = None,
        config: Optional[AnalysisConfig] = None,
        context: Optional[AnalysisContext] = None,
        edge_counts: Optional[Mapping[int, int]] = None,
    ):
        if graph is None:
            raise InputValidationError("graph", "must not be None")
        self.graph = graph
        self.calculator = calculator
        self.call_counts = call_counts
        self.edge_counts = edge_counts
        self.config = config or AnalysisConfig()
        self.context = ensure_context(context, __name__)

    def run(self, score: bool = True) -> AnalysisResult:
        """Run the DAG. Scoring is skipped when no calculator was supplied."""
        ctx = self.context
        result = AnalysisResult(graph=self.graph)

        # Phase 1: the single write to the graph
        if self.call_counts or self.edge_counts:
            annotate_coupling(
                self.graph,
                self.call_counts,
                ctx,
                self.config.coupling_thresholds,
                edge_counts=self.edge_counts,
            )
        else:
            apply_reference_count_fallback(self.graph, ctx)

        # Phase 2: cycles
        cycles = detect_cycles(self.graph, ctx)
        result.cycles = identify_weak_edges(cycles, self.graph, ctx)
        result.statistics = compute_cycle_statistics(result.cycles, self.graph.vertex_count, ctx)
        result.suggestions = generate_suggestions(result.cycles, ctx)
        result.cyclic_edges = cycle_edge_indices(result.cycles, self.graph)

        # Phase 3: extraction scoring
        if score and self.calculator is not None:
            result.scores = self.calculator.score_all(
                self.graph, ctx, parallel=self.config.parallel_scoring
            )
            result.candidates = generate_ranked_candidates(
                result.scores, self.config.top_candidates, ctx
            )

        return result
