"""Tests for the table-backed metric providers."""

import pytest

from monolith_insight.exceptions import InputValidationError, MetricUnavailableError
from monolith_insight.graph.models import Module
from monolith_insight.scoring.providers import MetricTable


class TestMetricTable:
    def test_serves_all_three_metrics(self):
        table = MetricTable({"Core": {"complexity": 40, "tech_debt": 25.5, "api_exposure": 0}})
        module = Module("Core")
        assert table.calculate(module).normalized_score == 40.0
        assert table.analyze(module).normalized_score == 25.5
        assert table.detect(module).normalized_score == 0.0
        assert table.detect(module).module_name == "Core"

    def test_unknown_module_raises(self):
        table = MetricTable({})
        with pytest.raises(MetricUnavailableError) as exc_info:
            table.calculate(Module("Ghost"))
        assert exc_info.value.module_name == "Ghost"
        assert exc_info.value.metric == "complexity"

    def test_missing_key_raises(self):
        table = MetricTable({"Core": {"complexity": 40}})
        with pytest.raises(MetricUnavailableError, match="tech_debt"):
            table.analyze(Module("Core"))

    def test_non_numeric_value_raises(self):
        table = MetricTable({"Core": {"complexity": "high", "tech_debt": 0, "api_exposure": 0}})
        with pytest.raises(InputValidationError):
            table.calculate(Module("Core"))

    def test_membership(self):
        table = MetricTable({"Core": {}})
        assert "Core" in table
        assert "Web" not in table

    def test_none_rows_rejected(self):
        with pytest.raises(InputValidationError):
            MetricTable(None)
