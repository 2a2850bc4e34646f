"""Cycle-breaking recommendations built from each cycle's weak edges."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from ..context import AnalysisContext, ensure_context
from ..exceptions import InputValidationError
from .models import Cycle, Dependency, Module


@dataclass(frozen=True)
class CycleBreakingSuggestion:
    """Remove ``source -> target`` to break cycle ``cycle_id``."""

    cycle_id: int
    source: Module
    target: Module
    coupling_score: int
    cycle_size: int
    rationale: str
    rank: int = 0  # 1-based, assigned after sorting

    def sort_key(self) -> tuple[int, int, str]:
        # Lowest coupling first, then largest cycle, then source name
        return (self.coupling_score, -self.cycle_size, self.source.name.lower())


def generate_suggestions(
    cycles: Sequence[Cycle], context: Optional[AnalysisContext] = None
) -> list[CycleBreakingSuggestion]:
    """One suggestion per weak edge across all cycles, ranked best-first."""
    if cycles is None:
        raise InputValidationError("cycles", "must not be None")
    ctx = ensure_context(context, __name__)

    ctx.logger.debug(f"Generating cycle-breaking recommendations from {len(cycles)} cycles")

    suggestions: list[CycleBreakingSuggestion] = []
    for cycle in cycles:
        ctx.check_cancelled("recommendation generation")

        if not cycle.weak_edges:
            ctx.logger.debug(f"Cycle {cycle.cycle_id}: no weak edges identified, skipping")
            continue

        for edge in cycle.weak_edges:
            suggestions.append(
                CycleBreakingSuggestion(
                    cycle_id=cycle.cycle_id,
                    source=edge.source,
                    target=edge.target,
                    coupling_score=edge.coupling_score,
                    cycle_size=cycle.size,
                    rationale=build_rationale(edge, cycle),
                )
            )

    ranked = [
        replace(s, rank=i)
        for i, s in enumerate(sorted(suggestions, key=CycleBreakingSuggestion.sort_key), start=1)
    ]

    ctx.logger.debug(f"Generated {len(ranked)} cycle-breaking recommendations")
    if ranked:
        top = ranked[0]
        ctx.logger.info(
            f"Top recommendation: {top.source.name} -> {top.target.name} "
            f"(coupling: {top.coupling_score}, cycle size: {top.cycle_size})"
        )
    return ranked


def build_rationale(edge: Dependency, cycle: Cycle) -> str:
    size = cycle.size
    if size >= 10:
        impact = f"critical {size}-module cycle"
    elif size >= 6:
        impact = f"large {size}-module cycle"
    elif size >= 4:
        impact = f"{size}-module cycle"
    else:
        impact = f"small {size}-module cycle"

    calls = edge.coupling_score
    if calls == 1:
        coupling = "only 1 method call"
    elif calls == 2:
        coupling = "just 2 method calls"
    elif calls <= 5:
        coupling = f"only {calls} method calls"
    else:
        coupling = f"{calls} method calls"

    return f"Weakest link in {impact}, {coupling}"


def best_suggestion_per_cycle(
    suggestions: Sequence[CycleBreakingSuggestion],
) -> dict[int, CycleBreakingSuggestion]:
    """Highest-ranked suggestion for each cycle id."""
    best: dict[int, CycleBreakingSuggestion] = {}
    for suggestion in suggestions:
        current = best.get(suggestion.cycle_id)
        if current is None or suggestion.rank < current.rank:
            best[suggestion.cycle_id] = suggestion
    return best
