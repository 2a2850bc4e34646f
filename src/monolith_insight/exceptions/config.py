"""Configuration exceptions: settings files, scoring weights."""

from typing import Any

from .base import MonolithInsightError


class ConfigurationError(MonolithInsightError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidWeightsError(ConfigurationError):
    """Raised when extraction scoring weights are out of range or don't sum to 1.0."""

    def __init__(
        self,
        reason: str,
        coupling: float,
        complexity: float,
        tech_debt: float,
        external_exposure: float,
    ):
        total = coupling + complexity + tech_debt + external_exposure
        super().__init__(
            f"Invalid scoring weights: {reason}. "
            f"Current: coupling={coupling}, complexity={complexity}, "
            f"tech_debt={tech_debt}, external_exposure={external_exposure} "
            f"(sum={total:.3f}). Each weight must be between 0.0 and 1.0 and the "
            f"four must sum to 1.0, e.g. coupling=0.40, complexity=0.30, "
            f"tech_debt=0.20, external_exposure=0.10"
        )
        self.reason = reason
        self.weights = (coupling, complexity, tech_debt, external_exposure)
        self.total = total
