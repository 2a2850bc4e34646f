"""
Monolith Insight - Dependency cycle and extraction difficulty analysis

Finds circular dependencies between the modules of a large codebase, points
at the weakest edge of each cycle, and ranks modules by how hard they would
be to pull out into a separate service.
"""

__version__ = "0.3.0"

from .analysis import AnalysisEngine, AnalysisResult
from .config import AnalysisConfig, ScoringWeights, load_config
from .context import AnalysisContext, CancellationToken
from .graph import Cycle, CycleStatistics, Dependency, DependencyGraph, Module
from .scoring import ExtractionScore, ExtractionScoreCalculator

__all__ = [
    "AnalysisEngine",  # Main entry point
    "AnalysisResult",
    "AnalysisConfig",
    "ScoringWeights",
    "load_config",
    "AnalysisContext",
    "CancellationToken",
    "DependencyGraph",
    "Module",
    "Dependency",
    "Cycle",
    "CycleStatistics",
    "ExtractionScoreCalculator",
    "ExtractionScore",
]
