"""Tests for the dependency graph model: modules, edge arena, cycles."""

import pytest

from monolith_insight.exceptions import InputValidationError
from monolith_insight.graph.models import (
    CouplingStrength,
    Cycle,
    CycleStatistics,
    Dependency,
    DependencyGraph,
    DependencyKind,
    Module,
)


class TestModule:
    def test_identity_is_name_only(self):
        """Two modules with the same name but different paths are equal."""
        assert Module("Core", path="a/Core") == Module("Core", path="b/Core")
        assert hash(Module("Core", path="x")) == hash(Module("Core"))

    def test_str_is_name(self):
        assert str(Module("Billing", path="src/Billing")) == "Billing"


class TestDependencyGraph:
    def test_add_module_rejects_duplicate_names(self):
        graph = DependencyGraph()
        assert graph.add_module(Module("A")) is True
        assert graph.add_module(Module("A", path="other")) is False
        assert graph.vertex_count == 1

    def test_add_dependency_assigns_sequential_indices(self):
        graph = DependencyGraph()
        for name in ("A", "B", "C"):
            graph.add_module(Module(name))
        first = graph.add_dependency("A", "B")
        second = graph.add_dependency(Module("B"), "C", DependencyKind.BINARY_REFERENCE)
        assert (first.index, second.index) == (0, 1)
        assert graph.edge(1) is second
        assert not second.is_project_reference

    def test_add_dependency_unknown_endpoint_raises(self):
        graph = DependencyGraph()
        graph.add_module(Module("A"))
        with pytest.raises(InputValidationError, match="Ghost"):
            graph.add_dependency("A", "Ghost")

    def test_parallel_edges_stay_distinct(self):
        """The graph is a multigraph; parallel edges are separate records."""
        graph = DependencyGraph()
        graph.add_module(Module("A"))
        graph.add_module(Module("B"))
        e1 = graph.add_dependency("A", "B")
        e2 = graph.add_dependency("A", "B")
        assert e1 is not e2
        assert e1 != e2
        assert graph.successors("A") == ["B", "B"]

    def test_new_edges_default_to_reference_only(self):
        graph = DependencyGraph()
        graph.add_module(Module("A"))
        graph.add_module(Module("B"))
        edge = graph.add_dependency("A", "B")
        assert edge.coupling_score == 1
        assert edge.coupling_strength is CouplingStrength.WEAK
        assert edge.kind is DependencyKind.PROJECT_REFERENCE

    def test_set_coupling_updates_record_in_place(self):
        graph = DependencyGraph()
        graph.add_module(Module("A"))
        graph.add_module(Module("B"))
        edge = graph.add_dependency("A", "B")
        graph.set_coupling(edge.index, 14, CouplingStrength.MEDIUM)
        assert graph.edge(0).coupling_score == 14
        assert graph.edge(0).coupling_strength is CouplingStrength.MEDIUM

    def test_in_and_out_edges(self, acyclic_graph):
        assert [e.target.name for e in acyclic_graph.out_edges("Web")] == ["Services", "Data"]
        assert [e.source.name for e in acyclic_graph.in_edges("Data")] == ["Services", "Web"]
        assert acyclic_graph.in_edges("Web") == []

    def test_vertices_keep_insertion_order(self, acyclic_graph):
        assert [m.name for m in acyclic_graph.vertices()] == ["Web", "Services", "Data"]

    def test_contains_accepts_module_or_name(self, acyclic_graph):
        assert "Web" in acyclic_graph
        assert Module("Data") in acyclic_graph
        assert "Missing" not in acyclic_graph
        assert len(acyclic_graph) == 3

    def test_adjacency_shape(self, triangle_graph):
        assert triangle_graph.adjacency() == {"A": ["B"], "B": ["C"], "C": ["A"]}

    def test_orphaned_modules(self, graph_factory):
        graph = graph_factory(["A", "B", "Lonely"], [("A", "B")])
        assert [m.name for m in graph.orphaned_modules()] == ["Lonely"]

    def test_edges_returns_snapshot(self, triangle_graph):
        edges = triangle_graph.edges()
        assert isinstance(edges, tuple)
        assert [e.index for e in edges] == [0, 1, 2]


class TestDependency:
    def test_endpoints_and_str(self):
        edge = Dependency(Module("A"), Module("B"), coupling_score=3)
        assert edge.endpoints == ("A", "B")
        assert "A -> B" in str(edge)
        assert "3 calls" in str(edge)


class TestCycle:
    def test_requires_two_modules(self):
        with pytest.raises(InputValidationError):
            Cycle(cycle_id=1, modules=(Module("A"),))

    def test_size_and_names(self):
        cycle = Cycle(cycle_id=1, modules=(Module("A"), Module("B"), Module("C")))
        assert cycle.size == 3
        assert cycle.module_names == frozenset({"A", "B", "C"})
        assert cycle.weak_edges == ()
        assert cycle.weak_coupling_score is None

    def test_with_weak_edges_returns_copy(self):
        cycle = Cycle(cycle_id=2, modules=(Module("A"), Module("B")))
        edge = Dependency(Module("A"), Module("B"), coupling_score=2)
        annotated = cycle.with_weak_edges([edge], 2)
        assert annotated.weak_edges == (edge,)
        assert annotated.weak_coupling_score == 2
        assert cycle.weak_edges == ()
        assert annotated.cycle_id == 2


class TestCycleStatistics:
    def test_defaults_describe_no_cycles(self):
        stats = CycleStatistics()
        assert stats.total_cycles == 0
        assert stats.participation_rate == 0.0
        assert stats.largest_cycle_size is None

    def test_participation_percent(self):
        stats = CycleStatistics(participation_rate=0.25)
        assert stats.participation_percent == pytest.approx(25.0)
