"""Graph-relative coupling metric.

"5 dependents" means something different in a 10-module graph than in a
200-module one, so coupling is normalized against the most coupled module
of the same graph and can only be computed for all modules at once.

    total      = 2 * incoming + outgoing
    normalized = 100 * total / max(total)    (0 when every total is 0)

Incoming edges count double: consumers of a module make extracting it
harder than the modules it consumes.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..context import AnalysisContext, ensure_context
from ..exceptions import InputValidationError
from ..graph.models import DependencyGraph
from .models import CouplingMetric

INCOMING_WEIGHT = 2
OUTGOING_WEIGHT = 1
NORMALIZED_SCALE = 100.0


class GraphCouplingMetricCalculator:
    """CouplingMetricProvider that derives coupling from edge counts."""

    def calculate(
        self, graph: DependencyGraph, context: Optional[AnalysisContext] = None
    ) -> list[CouplingMetric]:
        if graph is None:
            raise InputValidationError("graph", "must not be None")
        ctx = ensure_context(context, __name__)

        ctx.logger.info(f"Calculating coupling metrics for {graph.vertex_count} modules")
        if graph.vertex_count == 0:
            return []

        names: list[str] = []
        incoming: list[int] = []
        outgoing: list[int] = []
        for module in graph.vertices():
            ctx.check_cancelled("coupling metrics")
            names.append(module.name)
            incoming.append(len(graph.in_edges(module)))
            outgoing.append(len(graph.out_edges(module)))

        totals = INCOMING_WEIGHT * np.asarray(incoming) + OUTGOING_WEIGHT * np.asarray(outgoing)
        max_total = int(totals.max())
        if max_total == 0:
            normalized = np.zeros(len(totals))
        else:
            normalized = np.clip(totals / max_total * NORMALIZED_SCALE, 0.0, NORMALIZED_SCALE)

        metrics = [
            CouplingMetric(
                module_name=name,
                incoming_count=inc,
                outgoing_count=out,
                total_score=int(total),
                normalized_score=float(norm),
            )
            for name, inc, out, total, norm in zip(names, incoming, outgoing, totals, normalized)
        ]

        for m in metrics:
            ctx.logger.debug(
                f"Module {m.module_name}: incoming={m.incoming_count}, outgoing={m.outgoing_count}, "
                f"total={m.total_score}, normalized={m.normalized_score:.2f}"
            )
        ctx.logger.info(f"Coupling calculation complete: max total score={max_total}")
        return metrics
