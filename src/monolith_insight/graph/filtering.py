"""Framework reference filtering.

Snapshots exported from a build usually list framework and runtime packages
(``System.*``, ``Microsoft.*``, ``mscorlib``) beside the project's own
modules. Those are never extraction candidates, so the filter drops them
together with every edge that touches them.
"""

from __future__ import annotations

from typing import Optional

from ..config import FrameworkFilterConfig
from ..context import AnalysisContext, ensure_context
from ..exceptions import InputValidationError
from .models import DependencyGraph


class FrameworkFilter:
    """Block/allow list matcher for module names.

    Patterns ending in ``*`` match by prefix; other patterns match the whole
    name. Matching ignores case, and an allow-list hit always wins.
    """

    def __init__(self, config: Optional[FrameworkFilterConfig] = None):
        self.config = config or FrameworkFilterConfig()
        self._block = tuple(p.lower() for p in self.config.block_list if p)
        self._allow = tuple(p.lower() for p in self.config.allow_list if p)

    def is_blocked(self, name: str) -> bool:
        if not name:
            return False
        lowered = name.lower()
        if any(_matches(lowered, pattern) for pattern in self._allow):
            return False
        return any(_matches(lowered, pattern) for pattern in self._block)

    def filter_graph(
        self, graph: DependencyGraph, context: Optional[AnalysisContext] = None
    ) -> DependencyGraph:
        """Copy *graph* without blocked modules or the edges touching them.

        Kept edges are renumbered in their original order and carry their
        coupling annotation over. The input graph is not modified.
        """
        if graph is None:
            raise InputValidationError("graph", "must not be None")
        ctx = ensure_context(context, __name__)

        filtered = DependencyGraph()
        for module in graph.vertices():
            ctx.check_cancelled("framework filtering")
            if not self.is_blocked(module.name):
                filtered.add_module(module)

        blocked = 0
        for edge in graph.edges():
            ctx.check_cancelled("framework filtering")
            if edge.source.name not in filtered or edge.target.name not in filtered:
                blocked += 1
                continue
            copy = filtered.add_dependency(edge.source.name, edge.target.name, edge.kind)
            filtered.set_coupling(copy.index, edge.coupling_score, edge.coupling_strength)

        log_filter_summary(blocked, filtered.edge_count, ctx)
        return filtered


def log_filter_summary(blocked: int, retained: int, context: AnalysisContext) -> None:
    total = blocked + retained
    if total == 0:
        return
    context.logger.info(
        f"Filtered {blocked} framework references ({blocked / total * 100:.1f}%), "
        f"retained {retained} project references ({retained / total * 100:.1f}%)"
    )


def _matches(name: str, pattern: str) -> bool:
    if pattern.endswith("*"):
        return name.startswith(pattern[:-1])
    return name == pattern
