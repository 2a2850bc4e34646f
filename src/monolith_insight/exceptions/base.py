"""Base exceptions for Monolith Insight."""

from typing import Dict, Optional


class MonolithInsightError(Exception):
    """Base exception for all Monolith Insight errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class AnalysisCancelled(Exception):
    """Raised when a run is aborted through its cancellation token.

    Not a MonolithInsightError: cancellation is a control signal, and
    callers that catch analysis failures must not mistake it for one.
    """

    def __init__(self, stage: str = "analysis"):
        super().__init__(f"{stage} cancelled")
        self.stage = stage
