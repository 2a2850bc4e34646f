"""Exception hierarchy for Monolith Insight."""

from .analysis import (
    AnalysisError,
    InputValidationError,
    InvalidGraphDocumentError,
    MetricUnavailableError,
)
from .base import AnalysisCancelled, MonolithInsightError
from .config import ConfigurationError, InvalidConfigError, InvalidWeightsError

__all__ = [
    "MonolithInsightError",
    "AnalysisCancelled",
    "AnalysisError",
    "InputValidationError",
    "InvalidGraphDocumentError",
    "MetricUnavailableError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidWeightsError",
]
