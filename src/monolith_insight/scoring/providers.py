"""Metric provider contracts and a table-backed implementation.

Parsing source code for complexity, framework debt or public endpoints is
someone else's job. The scorer only needs objects satisfying these
protocols; each returns an already-normalized 0-100 metric.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional, Protocol

from ..exceptions import InputValidationError, MetricUnavailableError
from .models import ComplexityMetric, CouplingMetric, ExternalApiMetric, TechDebtMetric

if TYPE_CHECKING:
    from ..context import AnalysisContext
    from ..graph.models import DependencyGraph, Module


class CouplingMetricProvider(Protocol):
    def calculate(
        self, graph: DependencyGraph, context: Optional[AnalysisContext] = None
    ) -> list[CouplingMetric]: ...


class ComplexityProvider(Protocol):
    def calculate(self, module: Module) -> ComplexityMetric: ...


class TechDebtProvider(Protocol):
    def analyze(self, module: Module) -> TechDebtMetric: ...


class ExternalApiProvider(Protocol):
    def detect(self, module: Module) -> ExternalApiMetric: ...


# Keys accepted in a metric table row
COMPLEXITY_KEY = "complexity"
TECH_DEBT_KEY = "tech_debt"
API_EXPOSURE_KEY = "api_exposure"


class MetricTable:
    """Serves precomputed per-module metrics from a mapping.

    ``rows`` maps module name -> {"complexity": x, "tech_debt": y,
    "api_exposure": z}. Implements ComplexityProvider, TechDebtProvider and
    ExternalApiProvider. A missing module or key raises
    MetricUnavailableError instead of defaulting to zero.
    """

    def __init__(self, rows: Mapping[str, Mapping[str, float]]):
        if rows is None:
            raise InputValidationError("metric table", "must not be None")
        self._rows = {name: dict(values) for name, values in rows.items()}

    def __contains__(self, module_name: str) -> bool:
        return module_name in self._rows

    def calculate(self, module: Module) -> ComplexityMetric:
        return ComplexityMetric(module.name, self._lookup(module, COMPLEXITY_KEY))

    def analyze(self, module: Module) -> TechDebtMetric:
        return TechDebtMetric(module.name, self._lookup(module, TECH_DEBT_KEY))

    def detect(self, module: Module) -> ExternalApiMetric:
        return ExternalApiMetric(module.name, self._lookup(module, API_EXPOSURE_KEY))

    def _lookup(self, module: Module, key: str) -> float:
        row = self._rows.get(module.name)
        if row is None or row.get(key) is None:
            raise MetricUnavailableError(key, module.name)
        value = row[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InputValidationError(f"{key} metric for {module.name}", f"not a number: {value!r}")
        return float(value)
