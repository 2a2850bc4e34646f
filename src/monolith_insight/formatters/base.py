"""Base formatter interface for Monolith Insight output rendering."""

from abc import ABC, abstractmethod

from ..analysis.engine import AnalysisResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters.

    Each formatter knows two views of an AnalysisResult: the cycle report
    and the extraction score report.
    """

    @abstractmethod
    def format_cycles(self, result: AnalysisResult) -> str:
        """Return the cycle report as a string."""

    @abstractmethod
    def format_scores(self, result: AnalysisResult) -> str:
        """Return the extraction score report as a string."""

    def render_cycles(self, result: AnalysisResult) -> None:
        print(self.format_cycles(result), end="")

    def render_scores(self, result: AnalysisResult) -> None:
        print(self.format_scores(result), end="")
