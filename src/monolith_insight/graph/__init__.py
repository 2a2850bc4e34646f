"""Structural analysis: dependency graph, cycles, weak links."""

from .algorithms import (
    compute_cycle_statistics,
    cycle_edge_indices,
    detect_cycles,
    identify_weak_edges,
    tarjan_scc,
)
from .builder import GraphDocument, build_dependency_graph, load_graph_document
from .coupling import annotate_coupling, apply_reference_count_fallback, classify_coupling
from .filtering import FrameworkFilter
from .models import (
    CouplingStrength,
    Cycle,
    CycleStatistics,
    Dependency,
    DependencyGraph,
    DependencyKind,
    Module,
)
from .recommendations import CycleBreakingSuggestion, generate_suggestions

__all__ = [
    "Module",
    "Dependency",
    "DependencyKind",
    "DependencyGraph",
    "CouplingStrength",
    "Cycle",
    "CycleStatistics",
    "CycleBreakingSuggestion",
    "GraphDocument",
    "FrameworkFilter",
    "build_dependency_graph",
    "load_graph_document",
    "classify_coupling",
    "annotate_coupling",
    "apply_reference_count_fallback",
    "tarjan_scc",
    "detect_cycles",
    "compute_cycle_statistics",
    "identify_weak_edges",
    "cycle_edge_indices",
    "generate_suggestions",
]
