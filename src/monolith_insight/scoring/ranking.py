"""Ranked extraction candidates: easiest and hardest slices of a score list."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..context import AnalysisContext, ensure_context
from ..exceptions import InputValidationError
from .models import (
    DifficultyCategory,
    ExtractionScore,
    ExtractionStatistics,
    RankedExtractionCandidates,
)

DEFAULT_CANDIDATE_LIMIT = 10


def generate_ranked_candidates(
    scores: Sequence[ExtractionScore],
    limit: int = DEFAULT_CANDIDATE_LIMIT,
    context: Optional[AnalysisContext] = None,
) -> RankedExtractionCandidates:
    """Split scores into the easiest and hardest extraction candidates.

    ``easiest`` holds up to *limit* EASY modules, lowest score first;
    ``hardest`` up to *limit* HARD modules, highest score first.
    """
    if scores is None:
        raise InputValidationError("scores", "must not be None")
    if limit < 1:
        raise InputValidationError("limit", f"must be at least 1, got {limit}")
    ctx = ensure_context(context, __name__)

    ordered = sorted(scores, key=lambda s: s.final_score)
    easy = [s for s in ordered if s.category is DifficultyCategory.EASY]
    medium = [s for s in ordered if s.category is DifficultyCategory.MEDIUM]
    hard = [s for s in ordered if s.category is DifficultyCategory.HARD]

    easiest = easy[:limit]
    hardest = sorted(hard, key=lambda s: s.final_score, reverse=True)[:limit]

    statistics = ExtractionStatistics(
        total_modules=len(ordered),
        easy_count=len(easy),
        medium_count=len(medium),
        hard_count=len(hard),
    )

    if ctx.logger.isEnabledFor(logging.DEBUG):
        ctx.logger.debug(f"Easiest candidates: {', '.join(s.module_name for s in easiest)}")
        ctx.logger.debug(f"Hardest candidates: {', '.join(s.module_name for s in hardest)}")

    ctx.logger.info(
        f"Generated ranked extraction candidates: {statistics.total_modules} total modules, "
        f"{statistics.easy_count} easy (0-33), {statistics.medium_count} medium (34-66), "
        f"{statistics.hard_count} hard (67-100)"
    )

    return RankedExtractionCandidates(
        all_modules=tuple(ordered),
        easiest=tuple(easiest),
        hardest=tuple(hardest),
        statistics=statistics,
    )
