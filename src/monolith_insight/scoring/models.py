"""Extraction scoring data models.

Every metric carries a ``normalized_score`` on a 0-100 scale; the raw
fields next to it are informational and flow through to reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Category upper bounds (inclusive) on the 0-100 extraction score
EASY_MAX_SCORE = 33.0
MEDIUM_MAX_SCORE = 66.0


class DifficultyCategory(Enum):
    """How hard a module would be to pull out as an independent unit."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @classmethod
    def from_score(cls, score: float) -> DifficultyCategory:
        if score <= EASY_MAX_SCORE:
            return cls.EASY
        if score <= MEDIUM_MAX_SCORE:
            return cls.MEDIUM
        return cls.HARD


@dataclass(frozen=True)
class CouplingMetric:
    """Graph-relative coupling: incoming edges count double."""

    module_name: str
    incoming_count: int
    outgoing_count: int
    total_score: int
    normalized_score: float


@dataclass(frozen=True)
class ComplexityMetric:
    module_name: str
    normalized_score: float
    method_count: int = 0
    total_complexity: int = 0
    average_complexity: float = 0.0


@dataclass(frozen=True)
class TechDebtMetric:
    module_name: str
    normalized_score: float
    target_framework: str = ""


@dataclass(frozen=True)
class ApiTypeBreakdown:
    web_api_endpoints: int = 0
    web_method_endpoints: int = 0
    wcf_endpoints: int = 0


@dataclass(frozen=True)
class ExternalApiMetric:
    module_name: str
    normalized_score: float
    endpoint_count: int = 0
    breakdown: ApiTypeBreakdown = field(default_factory=ApiTypeBreakdown)


@dataclass(frozen=True)
class ExtractionScore:
    """Final 0-100 extraction difficulty for one module.

    ``coupling_metric`` is None when the score was computed without graph
    context (single-module scoring); coupling then contributed nothing.
    """

    module_name: str
    module_path: str
    final_score: float
    coupling_metric: Optional[CouplingMetric]
    complexity_metric: ComplexityMetric
    tech_debt_metric: TechDebtMetric
    external_api_metric: ExternalApiMetric

    @property
    def category(self) -> DifficultyCategory:
        return DifficultyCategory.from_score(self.final_score)

    @property
    def coupling_score(self) -> float:
        return self.coupling_metric.normalized_score if self.coupling_metric else 0.0

    def to_row(self) -> dict[str, Any]:
        """Flat record for CSV export and heat-map consumers.

        The category is re-derived from the rounded score so the two columns
        never disagree at a boundary (33.04 exports as 33.0, Easy).
        """
        final_score = round(self.final_score, 1)
        return {
            "module": self.module_name,
            "final_score": final_score,
            "category": DifficultyCategory.from_score(final_score).value,
            "coupling": round(self.coupling_score, 1),
            "complexity": round(self.complexity_metric.normalized_score, 1),
            "tech_debt": round(self.tech_debt_metric.normalized_score, 1),
            "api_exposure": round(self.external_api_metric.normalized_score, 1),
        }


@dataclass(frozen=True)
class ExtractionStatistics:
    total_modules: int = 0
    easy_count: int = 0
    medium_count: int = 0
    hard_count: int = 0

    @property
    def is_consistent(self) -> bool:
        return self.easy_count + self.medium_count + self.hard_count == self.total_modules


@dataclass(frozen=True)
class RankedExtractionCandidates:
    """All scores (ascending) plus the easiest and hardest slices."""

    all_modules: tuple[ExtractionScore, ...]
    easiest: tuple[ExtractionScore, ...]
    hardest: tuple[ExtractionScore, ...]
    statistics: ExtractionStatistics
