"""Coupling strength classification and edge annotation.

Call counts come from an external semantic analyzer, either per module pair
(``(source_name, target_name) -> count``) or per edge (``edge.index -> count``)
when parallel edges carry their own counts. Annotation is the only write the
analysis makes to a built graph, and it runs once before cycle detection
and scoring read the edges.
"""

from __future__ import annotations

from typing import Mapping, Optional

from ..config import DEFAULT_COUPLING_THRESHOLDS, CouplingThresholds
from ..context import AnalysisContext, ensure_context
from ..exceptions import InputValidationError
from .models import CouplingStrength, DependencyGraph

REFERENCE_ONLY_SCORE = 1


def classify_coupling(
    count: int, thresholds: CouplingThresholds = DEFAULT_COUPLING_THRESHOLDS
) -> CouplingStrength:
    """Map a method-call count to WEAK / MEDIUM / STRONG.

    Negative counts are a caller bug and raise InputValidationError.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise InputValidationError("coupling count", f"expected an integer, got {count!r}")
    if count < 0:
        raise InputValidationError("coupling count", f"must be non-negative, got {count}")

    if count <= thresholds.weak_max_calls:
        return CouplingStrength.WEAK
    if count <= thresholds.medium_max_calls:
        return CouplingStrength.MEDIUM
    return CouplingStrength.STRONG


def annotate_coupling(
    graph: DependencyGraph,
    call_counts: Optional[Mapping[tuple[str, str], int]],
    context: Optional[AnalysisContext] = None,
    thresholds: CouplingThresholds = DEFAULT_COUPLING_THRESHOLDS,
    edge_counts: Optional[Mapping[int, int]] = None,
) -> int:
    """Set coupling score and strength on every edge with a known call count.

    A count in *edge_counts* belongs to exactly one edge and wins over the
    pair count in *call_counts*. Parallel edges without their own count all
    receive the pair count. Edges found in neither mapping keep the
    reference-count default (score 1, WEAK).

    Returns:
        Number of edges annotated from either mapping.
    """
    if graph is None:
        raise InputValidationError("graph", "must not be None")
    if call_counts is None and edge_counts is None:
        raise InputValidationError("call_counts", "must not be None")
    call_counts = call_counts or {}
    edge_counts = edge_counts or {}
    ctx = ensure_context(context, __name__)

    if graph.edge_count == 0:
        ctx.logger.info("No dependency edges to analyze for coupling")
        return 0

    annotated = 0
    for edge in graph.edges():
        ctx.check_cancelled("coupling annotation")

        count = edge_counts.get(edge.index)
        if count is None:
            count = call_counts.get(edge.endpoints)
        if count is None:
            ctx.logger.debug(
                f"Edge {edge.source.name} -> {edge.target.name}: no call data, using reference count"
            )
            continue

        strength = classify_coupling(count, thresholds)
        graph.set_coupling(edge.index, count, strength)
        annotated += 1
        ctx.logger.debug(
            f"Edge {edge.source.name} -> {edge.target.name}: {count} calls ({strength.value})"
        )

    ctx.logger.info(
        f"Annotated {annotated} dependency edges with coupling scores (total edges: {graph.edge_count})"
    )
    return annotated


def apply_reference_count_fallback(
    graph: DependencyGraph, context: Optional[AnalysisContext] = None
) -> int:
    """Reset every edge to the reference-only score when no call data exists."""
    if graph is None:
        raise InputValidationError("graph", "must not be None")
    ctx = ensure_context(context, __name__)

    for edge in graph.edges():
        ctx.check_cancelled("coupling annotation")
        graph.set_coupling(edge.index, REFERENCE_ONLY_SCORE, CouplingStrength.WEAK)

    ctx.logger.info(
        f"No semantic coupling data, {graph.edge_count} edges scored by reference count"
    )
    return graph.edge_count
