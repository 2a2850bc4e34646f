"""Extraction difficulty scoring: metrics, weighted calculator, rankings."""

from .calculator import ExtractionScoreCalculator
from .coupling_metric import GraphCouplingMetricCalculator
from .models import (
    ApiTypeBreakdown,
    ComplexityMetric,
    CouplingMetric,
    DifficultyCategory,
    ExternalApiMetric,
    ExtractionScore,
    ExtractionStatistics,
    RankedExtractionCandidates,
    TechDebtMetric,
)
from .providers import MetricTable
from .ranking import generate_ranked_candidates

__all__ = [
    "ExtractionScoreCalculator",
    "GraphCouplingMetricCalculator",
    "MetricTable",
    "generate_ranked_candidates",
    "ApiTypeBreakdown",
    "ComplexityMetric",
    "CouplingMetric",
    "DifficultyCategory",
    "ExternalApiMetric",
    "ExtractionScore",
    "ExtractionStatistics",
    "RankedExtractionCandidates",
    "TechDebtMetric",
]
