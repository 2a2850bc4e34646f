"""Analysis-related exceptions: bad inputs, missing metrics, bad documents."""

from pathlib import Path
from typing import Optional

from .base import MonolithInsightError


class AnalysisError(MonolithInsightError):
    """Base class for analysis-related errors."""

    pass


class InputValidationError(AnalysisError):
    """Raised when an entry point receives an argument it cannot analyze."""

    def __init__(self, argument: str, reason: str):
        super().__init__(
            f"Invalid {argument}: {reason}",
            details={"argument": argument},
        )
        self.argument = argument
        self.reason = reason


class MetricUnavailableError(AnalysisError):
    """Raised when a per-module metric provider has no value for a module."""

    def __init__(self, metric: str, module_name: str):
        super().__init__(
            f"No {metric} metric available for module {module_name}",
            details={"metric": metric, "module": module_name},
        )
        self.metric = metric
        self.module_name = module_name


class InvalidGraphDocumentError(AnalysisError):
    """Raised when a graph snapshot document cannot be turned into a graph."""

    def __init__(self, reason: str, filepath: Optional[Path] = None):
        details = {"reason": reason}
        if filepath is not None:
            details["filepath"] = str(filepath)

        super().__init__("Invalid graph document", details=details)
        self.reason = reason
        self.filepath = filepath
