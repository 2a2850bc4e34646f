"""Graph algorithms: SCC cycle detection, cycle statistics, weak-edge identification."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..context import AnalysisContext, ensure_context
from ..exceptions import InputValidationError
from .models import Cycle, CycleStatistics, Dependency, DependencyGraph


def detect_cycles(
    graph: DependencyGraph, context: Optional[AnalysisContext] = None
) -> list[Cycle]:
    """Find every circular dependency as a Cycle (SCC with 2+ modules).

    Cycle ids are 1-based in the order Tarjan's algorithm completes each
    component, which is deterministic for a fixed build order of the graph.
    """
    if graph is None:
        raise InputValidationError("graph", "must not be None")
    ctx = ensure_context(context, __name__)

    if graph.vertex_count == 0:
        ctx.logger.info("Empty graph provided, no cycles to detect")
        return []

    ctx.logger.info(f"Detecting circular dependencies in {graph.vertex_count} modules")

    adjacency = graph.adjacency()
    components = tarjan_scc(adjacency, list(adjacency), ctx)

    cycles: list[Cycle] = []
    for component in components:
        # A single-module SCC is an ordinary acyclic module
        if len(component) < 2:
            continue
        members = tuple(graph.get_module(name) for name in component)
        cycles.append(Cycle(cycle_id=len(cycles) + 1, modules=members))

    ctx.logger.info(f"Found {len(cycles)} circular dependency chains")
    return cycles


def tarjan_scc(
    adjacency: dict[str, list[str]],
    nodes: Sequence[str],
    context: Optional[AnalysisContext] = None,
) -> list[list[str]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Uses an explicit call stack to avoid Python recursion limits on deep
    dependency chains. Roots are visited in *nodes* order and neighbors in
    adjacency order; each component lists its members in discovery order.
    Size-1 components are included.
    """
    ctx = ensure_context(context, __name__)
    node_set = set(nodes)

    counter = 0
    scc_stack: list[str] = []
    on_stack: set[str] = set()
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    result: list[list[str]] = []

    for root in nodes:
        ctx.check_cancelled("cycle detection")
        if root in index:
            continue

        # Explicit call stack: each frame is (node, neighbor_iterator)
        call_stack: list[tuple] = []
        index[root] = lowlink[root] = counter
        counter += 1
        scc_stack.append(root)
        on_stack.add(root)
        neighbors = [w for w in adjacency.get(root, []) if w in node_set]
        call_stack.append((root, iter(neighbors)))

        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    index[w] = lowlink[w] = counter
                    counter += 1
                    scc_stack.append(w)
                    on_stack.add(w)
                    w_neighbors = [n for n in adjacency.get(w, []) if n in node_set]
                    call_stack.append((w, iter(w_neighbors)))
                    pushed = True
                    break
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if not pushed:
                call_stack.pop()
                if call_stack:
                    caller = call_stack[-1][0]
                    lowlink[caller] = min(lowlink[caller], lowlink[v])

                if lowlink[v] == index[v]:
                    component: list[str] = []
                    while True:
                        w = scc_stack.pop()
                        on_stack.discard(w)
                        component.append(w)
                        if w == v:
                            break
                    component.reverse()
                    result.append(component)

    return result


def compute_cycle_statistics(
    cycles: Sequence[Cycle],
    total_module_count: int,
    context: Optional[AnalysisContext] = None,
) -> CycleStatistics:
    """Aggregate counts over detected cycles.

    A module that sits in several cycles is counted once. Participation is
    0.0 for an empty graph rather than a division by zero.
    """
    if cycles is None:
        raise InputValidationError("cycles", "must not be None")
    if total_module_count < 0:
        raise InputValidationError(
            "total_module_count", f"must be non-negative, got {total_module_count}"
        )
    ctx = ensure_context(context, __name__)

    if not cycles:
        ctx.logger.info("No cycles detected, statistics calculation skipped")
        return CycleStatistics(total_modules_analyzed=total_module_count)

    members: set[str] = set()
    largest = 0
    for cycle in cycles:
        members.update(m.name for m in cycle.modules)
        largest = max(largest, cycle.size)

    rate = len(members) / total_module_count if total_module_count > 0 else 0.0
    stats = CycleStatistics(
        total_cycles=len(cycles),
        total_modules_in_cycles=len(members),
        total_modules_analyzed=total_module_count,
        participation_rate=rate,
        largest_cycle_size=largest,
    )

    ctx.logger.info(
        f"Cycle statistics: {stats.total_cycles} chains, {stats.total_modules_in_cycles} modules "
        f"({stats.participation_percent:.1f}%), largest: {stats.largest_cycle_size}"
    )
    return stats


def identify_weak_edges(
    cycles: Sequence[Cycle],
    graph: DependencyGraph,
    context: Optional[AnalysisContext] = None,
) -> list[Cycle]:
    """Flag the lowest-coupling internal edges of every cycle.

    An edge is internal to a cycle only when BOTH endpoints are members.
    Every internal edge tied at the minimum score is kept, in graph edge
    order. Returns annotated copies; the input cycles are not modified.
    """
    if cycles is None:
        raise InputValidationError("cycles", "must not be None")
    if graph is None:
        raise InputValidationError("graph", "must not be None")
    ctx = ensure_context(context, __name__)

    if not cycles:
        ctx.logger.info("No cycles to analyze for weak coupling edges")
        return []

    ctx.logger.info(f"Analyzing {len(cycles)} cycles for weak coupling edges")

    annotated: list[Cycle] = []
    for cycle in cycles:
        ctx.check_cancelled("weak edge identification")

        internal = internal_edges(cycle, graph)
        if not internal:
            ctx.logger.info(
                f"Cycle {cycle.cycle_id} with {cycle.size} modules has no internal edges, "
                "skipping weak edge analysis"
            )
            annotated.append(cycle)
            continue

        min_score = min(edge.coupling_score for edge in internal)
        weak = [edge for edge in internal if edge.coupling_score == min_score]
        annotated.append(cycle.with_weak_edges(weak, min_score))

        ctx.logger.debug(
            f"Cycle {cycle.cycle_id}: {len(internal)} edges, min coupling = {min_score}, "
            f"{len(weak)} weak edges flagged"
        )

    total_weak = sum(len(c.weak_edges) for c in annotated)
    average = total_weak / len(annotated)
    ctx.logger.info(
        f"Identified {total_weak} weak coupling edges across {len(annotated)} cycles "
        f"(avg {average:.1f} per cycle)"
    )
    return annotated


def internal_edges(cycle: Cycle, graph: DependencyGraph) -> list[Dependency]:
    """Edges whose source and target are both members of *cycle*, in edge order."""
    members = cycle.module_names
    return [
        edge
        for edge in graph.edges()
        if edge.source.name in members and edge.target.name in members
    ]


def cycle_edge_indices(cycles: Iterable[Cycle], graph: DependencyGraph) -> set[int]:
    """Arena indices of every edge that lies inside some cycle.

    Renderers use this to highlight cyclic edges; the weak edges of each
    cycle are a subset.
    """
    # Cycles are disjoint SCCs, so a member name maps to exactly one cycle
    owner: dict[str, int] = {}
    for cycle in cycles:
        for module in cycle.modules:
            owner[module.name] = cycle.cycle_id

    result: set[int] = set()
    for edge in graph.edges():
        src = owner.get(edge.source.name)
        if src is not None and src == owner.get(edge.target.name):
            result.add(edge.index)
    return result
