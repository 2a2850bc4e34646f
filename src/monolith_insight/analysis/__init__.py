"""Pipeline orchestration over a dependency graph."""

from .engine import AnalysisEngine, AnalysisResult

__all__ = ["AnalysisEngine", "AnalysisResult"]
