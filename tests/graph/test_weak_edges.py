"""Tests for weak-edge identification inside cycles."""

import logging

import pytest

from monolith_insight.exceptions import AnalysisCancelled, InputValidationError
from monolith_insight.graph.algorithms import (
    cycle_edge_indices,
    detect_cycles,
    identify_weak_edges,
    internal_edges,
)
from monolith_insight.graph.models import Cycle, Module


class TestIdentifyWeakEdges:
    def test_all_edges_tied_are_all_weak(self, triangle_graph):
        """A -> B -> C -> A, all with 5 calls: three weak edges at score 5."""
        cycles = identify_weak_edges(detect_cycles(triangle_graph), triangle_graph)
        assert len(cycles) == 1
        cycle = cycles[0]
        assert cycle.weak_coupling_score == 5
        assert [e.endpoints for e in cycle.weak_edges] == [("A", "B"), ("B", "C"), ("C", "A")]

    def test_ties_at_minimum_kept_in_edge_order(self, graph_factory):
        """Scores [3, 10, 3, 15, 3] around a five-module ring: exactly the three 3s."""
        graph = graph_factory(
            ["A", "B", "C", "D", "E"],
            [("A", "B", 3), ("B", "C", 10), ("C", "D", 3), ("D", "E", 15), ("E", "A", 3)],
        )
        cycle = identify_weak_edges(detect_cycles(graph), graph)[0]
        assert cycle.weak_coupling_score == 3
        assert [e.endpoints for e in cycle.weak_edges] == [("A", "B"), ("C", "D"), ("E", "A")]
        assert [e.index for e in cycle.weak_edges] == [0, 2, 4]

    def test_edges_leaving_the_cycle_are_ignored(self, graph_factory):
        """E -> F has the lowest score in the graph but F is not in the cycle."""
        graph = graph_factory(
            ["C", "D", "E", "F"],
            [("C", "D", 7), ("D", "E", 9), ("E", "C", 7), ("E", "F", 1)],
        )
        cycle = identify_weak_edges(detect_cycles(graph), graph)[0]
        assert cycle.weak_coupling_score == 7
        assert all(e.target.name != "F" for e in cycle.weak_edges)

    def test_weak_edges_are_internal_and_minimal(self, two_cycle_graph):
        cycles = identify_weak_edges(detect_cycles(two_cycle_graph), two_cycle_graph)
        for cycle in cycles:
            internal = internal_edges(cycle, two_cycle_graph)
            minimum = min(e.coupling_score for e in internal)
            assert cycle.weak_coupling_score == minimum
            assert set(cycle.weak_edges) == {e for e in internal if e.coupling_score == minimum}

    def test_each_cycle_analyzed_independently(self, two_cycle_graph):
        first, second = identify_weak_edges(detect_cycles(two_cycle_graph), two_cycle_graph)
        assert [e.endpoints for e in first.weak_edges] == [("B", "A")]
        assert first.weak_coupling_score == 2
        assert [e.endpoints for e in second.weak_edges] == [("C", "D"), ("D", "E")]
        assert second.weak_coupling_score == 3

    def test_input_cycles_not_modified(self, triangle_graph):
        detected = detect_cycles(triangle_graph)
        identify_weak_edges(detected, triangle_graph)
        assert detected[0].weak_edges == ()
        assert detected[0].weak_coupling_score is None

    def test_empty_cycle_list(self, triangle_graph):
        assert identify_weak_edges([], triangle_graph) == []

    def test_none_arguments_raise(self, triangle_graph):
        with pytest.raises(InputValidationError):
            identify_weak_edges(None, triangle_graph)
        with pytest.raises(InputValidationError):
            identify_weak_edges([], None)

    def test_cycle_without_internal_edges_is_skipped(self, graph_factory, caplog):
        graph = graph_factory(["A", "B"], [])
        stray = Cycle(cycle_id=9, modules=(Module("A"), Module("B")))
        with caplog.at_level(logging.INFO, logger="monolith_insight"):
            result = identify_weak_edges([stray], graph)
        assert result == [stray]
        assert result[0].weak_coupling_score is None
        assert "Cycle 9" in caplog.text

    def test_missing_internal_edges_stay_below_warning_level(self, graph_factory, caplog):
        """The default CLI level is WARNING, so this must not reach the user."""
        graph = graph_factory(["A", "B"], [])
        stray = Cycle(cycle_id=9, modules=(Module("A"), Module("B")))
        with caplog.at_level(logging.WARNING, logger="monolith_insight"):
            identify_weak_edges([stray], graph)
        assert "Cycle 9" not in caplog.text

    def test_cancellation(self, triangle_graph, cancelled_context):
        cycles = detect_cycles(triangle_graph)
        with pytest.raises(AnalysisCancelled):
            identify_weak_edges(cycles, triangle_graph, cancelled_context)


class TestCycleEdgeIndices:
    def test_collects_internal_edges_of_all_cycles(self, two_cycle_graph):
        cycles = detect_cycles(two_cycle_graph)
        # A->B, B->A, C->D, D->E, E->C but not E->F
        assert cycle_edge_indices(cycles, two_cycle_graph) == {0, 1, 2, 3, 4}

    def test_weak_edges_are_a_subset(self, two_cycle_graph):
        cycles = identify_weak_edges(detect_cycles(two_cycle_graph), two_cycle_graph)
        indices = cycle_edge_indices(cycles, two_cycle_graph)
        weak = {e.index for c in cycles for e in c.weak_edges}
        assert weak <= indices

    def test_no_cycles_no_indices(self, acyclic_graph):
        assert cycle_edge_indices([], acyclic_graph) == set()
