"""Shared test fixtures for Monolith Insight tests."""

import logging
import os

import pytest

from monolith_insight.context import AnalysisContext, CancellationToken
from monolith_insight.graph.coupling import annotate_coupling
from monolith_insight.graph.models import DependencyGraph, Module
from monolith_insight.scoring.providers import MetricTable


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """Keep user and project config files and MONOLITH_* vars out of tests."""
    for key in list(os.environ):
        if key.startswith("MONOLITH_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """CLI runs call setup_logging, which pins levels and swaps root handlers."""
    logger = logging.getLogger("monolith_insight")
    root = logging.getLogger()
    level, root_level = logger.level, root.level
    handlers = root.handlers[:]
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(root_level)
    logger.setLevel(level)


def build_graph(modules, edges):
    """Build a graph from names and ``(source, target[, call_count])`` tuples.

    Edges given a call count are annotated with it; the rest keep the
    reference-only default.
    """
    graph = DependencyGraph()
    for name in modules:
        graph.add_module(Module(name, path=f"src/{name}"))

    edge_counts = {}
    for edge in edges:
        dependency = graph.add_dependency(edge[0], edge[1])
        if len(edge) == 3:
            edge_counts[dependency.index] = edge[2]

    if edge_counts:
        annotate_coupling(graph, None, edge_counts=edge_counts)
    return graph


@pytest.fixture
def graph_factory():
    """The build_graph helper as a fixture."""
    return build_graph


@pytest.fixture
def empty_graph():
    return DependencyGraph()


@pytest.fixture
def acyclic_graph():
    """Web -> Services -> Data, Web -> Data."""
    return build_graph(
        ["Web", "Services", "Data"],
        [("Web", "Services", 12), ("Services", "Data", 30), ("Web", "Data", 2)],
    )


@pytest.fixture
def triangle_graph():
    """A -> B -> C -> A, every edge with 5 calls."""
    return build_graph(["A", "B", "C"], [("A", "B", 5), ("B", "C", 5), ("C", "A", 5)])


@pytest.fixture
def two_cycle_graph():
    """Two disjoint cycles plus an acyclic tail.

    A <-> B (calls 8 and 2), C -> D -> E -> C (calls 3, 3, 40), E -> F.
    """
    return build_graph(
        ["A", "B", "C", "D", "E", "F"],
        [
            ("A", "B", 8),
            ("B", "A", 2),
            ("C", "D", 3),
            ("D", "E", 3),
            ("E", "C", 40),
            ("E", "F", 1),
        ],
    )


@pytest.fixture
def context():
    """A fresh analysis context with its own cancellation token."""
    return AnalysisContext(cancellation=CancellationToken())


@pytest.fixture
def cancelled_context():
    token = CancellationToken()
    token.cancel()
    return AnalysisContext(cancellation=token)


@pytest.fixture
def metric_table_factory():
    """Build a MetricTable giving every module the same three metric values."""

    def _make(names, complexity=0.0, tech_debt=0.0, api_exposure=0.0, overrides=None):
        rows = {
            name: {"complexity": complexity, "tech_debt": tech_debt, "api_exposure": api_exposure}
            for name in names
        }
        for name, values in (overrides or {}).items():
            rows[name] = dict(values)
        return MetricTable(rows)

    return _make
