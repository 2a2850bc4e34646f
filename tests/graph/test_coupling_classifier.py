"""Tests for coupling classification and edge annotation."""

import pytest

from monolith_insight.config import CouplingThresholds
from monolith_insight.exceptions import AnalysisCancelled, InputValidationError
from monolith_insight.graph.coupling import (
    REFERENCE_ONLY_SCORE,
    annotate_coupling,
    apply_reference_count_fallback,
    classify_coupling,
)
from monolith_insight.graph.models import CouplingStrength


class TestClassifyCoupling:
    @pytest.mark.parametrize(
        "count,expected",
        [
            (0, CouplingStrength.WEAK),
            (1, CouplingStrength.WEAK),
            (5, CouplingStrength.WEAK),
            (6, CouplingStrength.MEDIUM),
            (20, CouplingStrength.MEDIUM),
            (21, CouplingStrength.STRONG),
            (500, CouplingStrength.STRONG),
        ],
    )
    def test_boundaries(self, count, expected):
        assert classify_coupling(count) is expected

    def test_negative_count_raises(self):
        with pytest.raises(InputValidationError, match="non-negative"):
            classify_coupling(-1)

    def test_non_integer_raises(self):
        with pytest.raises(InputValidationError):
            classify_coupling(2.5)
        with pytest.raises(InputValidationError):
            classify_coupling(True)

    def test_custom_thresholds(self):
        thresholds = CouplingThresholds(weak_max_calls=2, medium_max_calls=4)
        assert classify_coupling(3, thresholds) is CouplingStrength.MEDIUM
        assert classify_coupling(5, thresholds) is CouplingStrength.STRONG


class TestAnnotateCoupling:
    def test_sets_scores_and_strengths(self, graph_factory):
        graph = graph_factory(["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "A")])
        annotated = annotate_coupling(graph, {("A", "B"): 3, ("B", "C"): 12, ("C", "A"): 40})
        assert annotated == 3
        assert [e.coupling_score for e in graph.edges()] == [3, 12, 40]
        assert [e.coupling_strength for e in graph.edges()] == [
            CouplingStrength.WEAK,
            CouplingStrength.MEDIUM,
            CouplingStrength.STRONG,
        ]

    def test_unmatched_edges_keep_reference_default(self, graph_factory):
        graph = graph_factory(["A", "B", "C"], [("A", "B"), ("B", "C")])
        annotated = annotate_coupling(graph, {("A", "B"): 9})
        assert annotated == 1
        edge = graph.edge(1)
        assert edge.coupling_score == REFERENCE_ONLY_SCORE
        assert edge.coupling_strength is CouplingStrength.WEAK

    def test_parallel_edges_share_count(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "B"), ("A", "B")])
        assert annotate_coupling(graph, {("A", "B"): 7}) == 2
        assert [e.coupling_score for e in graph.edges()] == [7, 7]

    def test_edge_counts_override_pair_counts(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "B"), ("A", "B"), ("A", "B")])
        annotated = annotate_coupling(graph, {("A", "B"): 7}, edge_counts={0: 2, 2: 30})
        assert annotated == 3
        assert [e.coupling_score for e in graph.edges()] == [2, 7, 30]
        assert graph.edge(2).coupling_strength is CouplingStrength.STRONG

    def test_edge_counts_alone(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "B"), ("B", "A")])
        assert annotate_coupling(graph, None, edge_counts={1: 9}) == 1
        assert [e.coupling_score for e in graph.edges()] == [1, 9]

    def test_empty_graph(self, empty_graph):
        assert annotate_coupling(empty_graph, {("A", "B"): 1}) == 0

    def test_negative_count_raises(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "B")])
        with pytest.raises(InputValidationError):
            annotate_coupling(graph, {("A", "B"): -3})

    def test_none_arguments_raise(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "B")])
        with pytest.raises(InputValidationError):
            annotate_coupling(None, {})
        with pytest.raises(InputValidationError):
            annotate_coupling(graph, None)

    def test_cancellation(self, graph_factory, cancelled_context):
        graph = graph_factory(["A", "B"], [("A", "B")])
        with pytest.raises(AnalysisCancelled):
            annotate_coupling(graph, {("A", "B"): 2}, cancelled_context)


class TestReferenceCountFallback:
    def test_resets_every_edge(self, acyclic_graph):
        assert apply_reference_count_fallback(acyclic_graph) == 3
        assert all(e.coupling_score == REFERENCE_ONLY_SCORE for e in acyclic_graph.edges())
        assert all(e.coupling_strength is CouplingStrength.WEAK for e in acyclic_graph.edges())

    def test_none_graph_raises(self):
        with pytest.raises(InputValidationError):
            apply_reference_count_fallback(None)
