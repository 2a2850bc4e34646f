"""Extraction difficulty scoring.

Combines four normalized (0-100) metrics into one weighted score:

    final = clamp(coupling * Wc + complexity * Wcx + tech_debt * Wt
                  + api_exposure * We, 0, 100)

Usage:
    calculator = ExtractionScoreCalculator(
        GraphCouplingMetricCalculator(), table, table, table
    )
    scores = calculator.score_all(graph)   # ascending, easiest first

Batch scoring (``score_all``) is the accurate path: coupling is relative to
the whole graph, so it is computed once for every module before the
per-module metrics are folded in. ``score_module`` has no graph context and
is coupling-blind by design: coupling contributes 0 to its result.
"""

from __future__ import annotations

import math
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from ..config import AnalysisConfig, ScoringWeights, load_config
from ..context import AnalysisContext, ensure_context
from ..exceptions import InputValidationError
from ..graph.models import DependencyGraph, Module
from .models import (
    ComplexityMetric,
    CouplingMetric,
    DifficultyCategory,
    ExternalApiMetric,
    ExtractionScore,
    TechDebtMetric,
)
from .providers import (
    ComplexityProvider,
    CouplingMetricProvider,
    ExternalApiProvider,
    TechDebtProvider,
)

MIN_SCORE = 0.0
MAX_SCORE = 100.0

# Default worker count: use CPU count, capped at 8
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass(frozen=True)
class _ModuleMetrics:
    complexity: ComplexityMetric
    tech_debt: TechDebtMetric
    api: ExternalApiMetric


class ExtractionScoreCalculator:
    """Scores modules by extraction difficulty.

    Weights are resolved and validated once, at construction: an explicit
    ``weights`` argument wins, then ``config.scoring_weights``, then whatever
    ``load_config(config_file)`` finds (defaults when nothing is configured).
    Invalid weights raise InvalidWeightsError before any scoring happens.
    """

    def __init__(
        self,
        coupling_provider: CouplingMetricProvider,
        complexity_provider: ComplexityProvider,
        tech_debt_provider: TechDebtProvider,
        api_provider: ExternalApiProvider,
        weights: Optional[ScoringWeights] = None,
        config: Optional[AnalysisConfig] = None,
        config_file: Optional[Path] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        providers = {
            "coupling provider": coupling_provider,
            "complexity provider": complexity_provider,
            "tech debt provider": tech_debt_provider,
            "api provider": api_provider,
        }
        for name, provider in providers.items():
            if provider is None:
                raise InputValidationError(name, "must not be None")

        self._coupling_provider = coupling_provider
        self._complexity_provider = complexity_provider
        self._tech_debt_provider = tech_debt_provider
        self._api_provider = api_provider

        if config is None and weights is None:
            config = load_config(config_file)
        self.weights = self._resolve_weights(weights, config)
        self._max_workers = max_workers or (config.workers if config else None) or _DEFAULT_WORKERS

    @staticmethod
    def _resolve_weights(
        weights: Optional[ScoringWeights], config: Optional[AnalysisConfig]
    ) -> ScoringWeights:
        resolved = weights if weights is not None else config.scoring_weights
        if not isinstance(resolved, ScoringWeights):
            raise InputValidationError("weights", f"expected ScoringWeights, got {resolved!r}")
        return resolved

    # -- public entry points --

    def score_all(
        self,
        graph: DependencyGraph,
        context: Optional[AnalysisContext] = None,
        parallel: bool = True,
    ) -> list[ExtractionScore]:
        """Score every module in *graph*, sorted ascending by final score.

        Modules with equal scores keep graph vertex order. On cancellation
        AnalysisCancelled propagates and no partial list is returned.
        """
        if graph is None:
            raise InputValidationError("graph", "must not be None")
        ctx = ensure_context(context, __name__)

        ctx.logger.debug(f"Calculating extraction scores for {graph.vertex_count} modules")
        modules = list(graph.vertices())
        if not modules:
            ctx.logger.info("Graph contains no modules, nothing to score")
            return []

        coupling_lookup: dict[str, CouplingMetric] = {
            m.module_name: m for m in self._coupling_provider.calculate(graph, ctx)
        }

        if parallel and len(modules) > 1:
            per_module = self._collect_parallel(modules, ctx)
        else:
            per_module = self._collect_sequential(modules, ctx)

        scores = [
            self._build_score(module, coupling_lookup.get(module.name), metrics)
            for module, metrics in zip(modules, per_module)
        ]
        scores.sort(key=lambda s: s.final_score)

        counts = {category: 0 for category in DifficultyCategory}
        for score in scores:
            counts[score.category] += 1
        ctx.logger.info(
            f"Calculated extraction scores for {len(scores)} modules: "
            f"{counts[DifficultyCategory.EASY]} easy, {counts[DifficultyCategory.MEDIUM]} medium, "
            f"{counts[DifficultyCategory.HARD]} hard"
        )
        return scores

    def score_module(
        self, module: Module, context: Optional[AnalysisContext] = None
    ) -> ExtractionScore:
        """Score one module without graph context.

        Coupling is only meaningful relative to a whole graph, so this entry
        point leaves it out entirely (contribution 0). Use ``score_all`` for
        accurate rankings.
        """
        if module is None:
            raise InputValidationError("module", "must not be None")
        ctx = ensure_context(context, __name__)

        ctx.logger.info(
            f"Scoring {module.name} without graph context, coupling contributes 0"
        )
        score = self._build_score(module, None, self._collect_one(module))
        ctx.logger.debug(
            f"Module {module.name} final extraction score: {score.final_score:.1f} "
            f"({score.category.value})"
        )
        return score

    def weighted_score(
        self,
        coupling: Optional[float],
        complexity: float,
        tech_debt: float,
        api_exposure: float,
    ) -> float:
        """Apply the weights to four 0-100 metric values and clamp the result."""
        values = [0.0 if coupling is None else coupling, complexity, tech_debt, api_exposure]
        for name, value in zip(("coupling", "complexity", "tech_debt", "api_exposure"), values):
            _require_normalized(name, value)

        raw = float(np.dot(np.asarray(values, dtype=float), np.asarray(self.weights.as_tuple())))
        return float(np.clip(raw, MIN_SCORE, MAX_SCORE))

    # -- metric collection --

    def _collect_one(self, module: Module) -> _ModuleMetrics:
        return _ModuleMetrics(
            complexity=self._complexity_provider.calculate(module),
            tech_debt=self._tech_debt_provider.analyze(module),
            api=self._api_provider.detect(module),
        )

    def _collect_sequential(
        self, modules: list[Module], ctx: AnalysisContext
    ) -> list[_ModuleMetrics]:
        results: list[_ModuleMetrics] = []
        for module in modules:
            ctx.check_cancelled("extraction scoring")
            results.append(self._collect_one(module))
        return results

    def _collect_parallel(
        self, modules: list[Module], ctx: AnalysisContext
    ) -> list[_ModuleMetrics]:
        """Per-module metrics on a thread pool, returned in *modules* order."""
        results: list[Optional[_ModuleMetrics]] = [None] * len(modules)
        workers = min(self._max_workers, len(modules))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures: dict[Future, int] = {}
            try:
                for i, module in enumerate(modules):
                    ctx.check_cancelled("extraction scoring")
                    futures[executor.submit(self._collect_one, module)] = i

                for future in as_completed(futures):
                    ctx.check_cancelled("extraction scoring")
                    results[futures[future]] = future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

        return [r for r in results if r is not None]

    def _build_score(
        self, module: Module, coupling: Optional[CouplingMetric], metrics: _ModuleMetrics
    ) -> ExtractionScore:
        final = self.weighted_score(
            coupling.normalized_score if coupling is not None else None,
            metrics.complexity.normalized_score,
            metrics.tech_debt.normalized_score,
            metrics.api.normalized_score,
        )
        return ExtractionScore(
            module_name=module.name,
            module_path=module.path,
            final_score=final,
            coupling_metric=coupling,
            complexity_metric=metrics.complexity,
            tech_debt_metric=metrics.tech_debt,
            external_api_metric=metrics.api,
        )


def _require_normalized(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputValidationError(f"{name} metric", f"expected a number, got {value!r}")
    if math.isnan(value) or not MIN_SCORE <= value <= MAX_SCORE:
        raise InputValidationError(f"{name} metric", f"must be within 0-100, got {value}")
