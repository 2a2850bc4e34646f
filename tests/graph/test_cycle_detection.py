"""Tests for Tarjan SCC cycle detection."""

import pytest

from monolith_insight.exceptions import AnalysisCancelled, InputValidationError
from monolith_insight.graph.algorithms import detect_cycles, tarjan_scc


class TestTarjanScc:
    def test_components_include_singletons(self):
        adjacency = {"a": ["b"], "b": ["a"], "c": []}
        components = tarjan_scc(adjacency, ["a", "b", "c"])
        assert sorted(sorted(c) for c in components) == [["a", "b"], ["c"]]

    def test_members_in_discovery_order(self):
        adjacency = {"a": ["b"], "b": ["c"], "c": ["a"]}
        assert tarjan_scc(adjacency, ["a", "b", "c"]) == [["a", "b", "c"]]

    def test_ignores_neighbors_outside_node_set(self):
        adjacency = {"a": ["b", "external"], "b": ["a"]}
        assert tarjan_scc(adjacency, ["a", "b"]) == [["a", "b"]]

    def test_every_node_in_exactly_one_component(self):
        adjacency = {
            "a": ["b"], "b": ["c", "d"], "c": ["a"], "d": ["e"], "e": ["d", "f"], "f": [],
        }
        nodes = list(adjacency)
        components = tarjan_scc(adjacency, nodes)
        flattened = [n for c in components for n in c]
        assert sorted(flattened) == sorted(nodes)
        assert len(flattened) == len(set(flattened))

    def test_deep_chain_does_not_hit_recursion_limit(self):
        n = 5000
        adjacency = {str(i): [str(i + 1)] for i in range(n - 1)}
        adjacency[str(n - 1)] = ["0"]
        components = tarjan_scc(adjacency, list(adjacency))
        assert len(components) == 1
        assert len(components[0]) == n

    @pytest.mark.slow
    def test_very_large_acyclic_chain(self):
        n = 100_000
        adjacency = {str(i): [str(i + 1)] for i in range(n - 1)}
        adjacency[str(n - 1)] = []
        components = tarjan_scc(adjacency, list(adjacency))
        assert len(components) == n


class TestDetectCycles:
    def test_triangle_is_one_cycle(self, triangle_graph):
        cycles = detect_cycles(triangle_graph)
        assert len(cycles) == 1
        assert cycles[0].cycle_id == 1
        assert [m.name for m in cycles[0].modules] == ["A", "B", "C"]

    def test_acyclic_graph_has_no_cycles(self, acyclic_graph):
        assert detect_cycles(acyclic_graph) == []

    def test_empty_graph_returns_empty_list(self, empty_graph):
        assert detect_cycles(empty_graph) == []

    def test_none_graph_raises(self):
        with pytest.raises(InputValidationError):
            detect_cycles(None)

    def test_ids_are_one_based_and_sequential(self, two_cycle_graph):
        cycles = detect_cycles(two_cycle_graph)
        assert [c.cycle_id for c in cycles] == [1, 2]
        assert [sorted(c.module_names) for c in cycles] == [["A", "B"], ["C", "D", "E"]]

    def test_self_loop_is_not_a_cycle(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "A"), ("A", "B")])
        assert detect_cycles(graph) == []

    def test_cycles_are_disjoint(self, two_cycle_graph):
        cycles = detect_cycles(two_cycle_graph)
        seen = set()
        for cycle in cycles:
            assert seen.isdisjoint(cycle.module_names)
            seen |= cycle.module_names

    def test_every_cycle_has_at_least_two_modules(self, graph_factory):
        graph = graph_factory(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "A"), ("C", "D"), ("D", "D")],
        )
        cycles = detect_cycles(graph)
        assert all(c.size >= 2 for c in cycles)
        assert len(cycles) == 1

    def test_parallel_edges_do_not_duplicate_members(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "B"), ("A", "B"), ("B", "A")])
        cycles = detect_cycles(graph)
        assert len(cycles) == 1
        assert cycles[0].size == 2

    def test_detection_is_deterministic(self, two_cycle_graph):
        first = detect_cycles(two_cycle_graph)
        second = detect_cycles(two_cycle_graph)
        assert [c.modules for c in first] == [c.modules for c in second]

    def test_cancellation_aborts_detection(self, triangle_graph, cancelled_context):
        with pytest.raises(AnalysisCancelled):
            detect_cycles(triangle_graph, cancelled_context)

    def test_logs_cycle_count(self, two_cycle_graph, caplog):
        with caplog.at_level("INFO", logger="monolith_insight"):
            detect_cycles(two_cycle_graph)
        assert "Found 2 circular dependency chains" in caplog.text
