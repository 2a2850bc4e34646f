"""Configuration loading and management for Monolith Insight.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.monolith-insight.toml)
    3. Project config (./monolith-insight.toml)
    4. Explicit config file
    5. Environment variables (MONOLITH_* prefix)
    6. CLI overrides (passed as kwargs)

Example config file:

    workers = 4

    [scoring_weights]
    coupling_weight = 0.50
    complexity_weight = 0.20
    tech_debt_weight = 0.20
    external_exposure_weight = 0.10

    [coupling_thresholds]
    weak_max_calls = 5
    medium_max_calls = 20

Example:
    >>> config = load_config(workers=2)
    >>> config.scoring_weights.coupling_weight
    0.4
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, InvalidWeightsError

Verbosity = Literal["quiet", "normal", "verbose"]

# Weights may drift from 1.0 by this much (floating-point slack in config files)
WEIGHT_SUM_TOLERANCE = 0.01

# Coupling classification boundaries (method calls across one edge)
WEAK_COUPLING_MAX_CALLS = 5
MEDIUM_COUPLING_MAX_CALLS = 20

GLOBAL_CONFIG_NAME = ".monolith-insight.toml"
PROJECT_CONFIG_NAME = "monolith-insight.toml"
ENV_PREFIX = "MONOLITH_"


@dataclass(frozen=True)
class ScoringWeights:
    """Relative importance of the four extraction difficulty metrics.

    All weights are in [0, 1] and must sum to 1.0 (within
    WEIGHT_SUM_TOLERANCE). Construction fails with InvalidWeightsError
    otherwise, so an instance is always usable for scoring.
    """

    coupling_weight: float = 0.40
    complexity_weight: float = 0.30
    tech_debt_weight: float = 0.20
    external_exposure_weight: float = 0.10

    def __post_init__(self) -> None:
        for name, value in zip(_WEIGHT_FIELDS, self.as_tuple()):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidConfigError(f"scoring_weights.{name}", value, "must be a number")

        error = self.validation_error()
        if error is not None:
            raise InvalidWeightsError(
                error,
                self.coupling_weight,
                self.complexity_weight,
                self.tech_debt_weight,
                self.external_exposure_weight,
            )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (
            self.coupling_weight,
            self.complexity_weight,
            self.tech_debt_weight,
            self.external_exposure_weight,
        )

    @property
    def total(self) -> float:
        return sum(self.as_tuple())

    def validation_error(self) -> Optional[str]:
        """Describe why these weights are unusable, or None if they are fine."""
        for value in self.as_tuple():
            if math.isnan(value) or not 0.0 <= value <= 1.0:
                return "all weights must be between 0.0 and 1.0"

        if abs(self.total - 1.0) > WEIGHT_SUM_TOLERANCE:
            return f"weights must sum to 1.0 (±{WEIGHT_SUM_TOLERANCE} tolerance)"
        return None


_WEIGHT_FIELDS = (
    "coupling_weight",
    "complexity_weight",
    "tech_debt_weight",
    "external_exposure_weight",
)

DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class CouplingThresholds:
    """Call-count boundaries between WEAK, MEDIUM and STRONG coupling.

    count <= weak_max_calls            -> WEAK
    weak_max_calls < count <= medium   -> MEDIUM
    count > medium_max_calls           -> STRONG
    """

    weak_max_calls: int = WEAK_COUPLING_MAX_CALLS
    medium_max_calls: int = MEDIUM_COUPLING_MAX_CALLS

    def __post_init__(self) -> None:
        if self.weak_max_calls < 0:
            raise InvalidConfigError(
                "coupling_thresholds.weak_max_calls", self.weak_max_calls, "must be non-negative"
            )
        if self.medium_max_calls <= self.weak_max_calls:
            raise InvalidConfigError(
                "coupling_thresholds.medium_max_calls",
                self.medium_max_calls,
                "must be greater than weak_max_calls",
            )


DEFAULT_COUPLING_THRESHOLDS = CouplingThresholds()


# Framework and runtime references are not extraction candidates
DEFAULT_FRAMEWORK_BLOCK_LIST = ("Microsoft.*", "System.*", "mscorlib", "netstandard")


@dataclass(frozen=True)
class FrameworkFilterConfig:
    """Module name patterns dropped from a graph snapshot before analysis.

    A pattern ending in ``*`` matches by prefix, any other pattern matches the
    whole name. Matching ignores case. ``allow_list`` wins over ``block_list``.
    """

    block_list: tuple[str, ...] = DEFAULT_FRAMEWORK_BLOCK_LIST
    allow_list: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("block_list", "allow_list"):
            value = getattr(self, name)
            if not isinstance(value, (list, tuple)) or not all(isinstance(p, str) for p in value):
                raise InvalidConfigError(
                    f"framework_filter.{name}", value, "must be a list of strings"
                )
            object.__setattr__(self, name, tuple(value))


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        scoring_weights: Weights for the extraction difficulty score
        coupling_thresholds: Boundaries for coupling strength classification
        framework_filter: Module name patterns excluded from loaded snapshots
        workers: Thread pool size for per-module metrics (None = auto-detect)
        parallel_scoring: Compute per-module metrics concurrently
        top_candidates: How many easiest/hardest candidates to report
        verbosity: Logging verbosity level
    """

    scoring_weights: ScoringWeights = field(default_factory=ScoringWeights)
    coupling_thresholds: CouplingThresholds = field(default_factory=CouplingThresholds)
    framework_filter: FrameworkFilterConfig = field(default_factory=FrameworkFilterConfig)
    workers: Optional[int] = None
    parallel_scoring: bool = True
    top_candidates: int = 10
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.top_candidates < 1:
            raise InvalidConfigError("top_candidates", self.top_candidates, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be one of quiet, normal, verbose"
            )


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        InvalidConfigError: If a config file is missing, unreadable or has unknown keys
        InvalidWeightsError: If the merged scoring weights are invalid
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        _merge(merged, _read_config_file(global_config))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        _merge(merged, _read_config_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise InvalidConfigError("config_file", config_file, "file not found")
        _merge(merged, _read_config_file(config_file))

    _merge(merged, _load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    _merge(merged, {k: v for k, v in overrides.items() if v is not None})

    merged["scoring_weights"] = _build_section(
        ScoringWeights, merged.pop("scoring_weights", None), "scoring_weights"
    )
    merged["coupling_thresholds"] = _build_section(
        CouplingThresholds, merged.pop("coupling_thresholds", None), "coupling_thresholds"
    )
    merged["framework_filter"] = _build_section(
        FrameworkFilterConfig, merged.pop("framework_filter", None), "framework_filter"
    )

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise InvalidConfigError("config", sorted(merged), str(e))


def load_scoring_weights(config_file: Optional[Path] = None) -> ScoringWeights:
    """Load only the scoring weights (defaults when nothing configures them)."""
    return load_config(config_file).scoring_weights


def _build_section(cls: type, value: Any, section: str) -> Any:
    """Turn a TOML table (or an already-built instance) into a config dataclass."""
    if value is None:
        return cls()
    if isinstance(value, cls):
        return value
    if not isinstance(value, dict):
        raise InvalidConfigError(section, value, "expected a table")

    known = {f.name for f in fields(cls)}
    unknown = sorted(set(value) - known)
    if unknown:
        raise InvalidConfigError(section, ", ".join(unknown), "unknown keys")
    return cls(**value)


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Merge *source* into *target*, combining nested tables key by key."""
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            combined = dict(existing)
            combined.update(value)
            target[key] = combined
        else:
            target[key] = value


# MONOLITH_COUPLING_WEIGHT etc. feed the [scoring_weights] section
_WEIGHT_ENV_VARS = {f"{ENV_PREFIX}{name.upper()}": name for name in _WEIGHT_FIELDS}


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from MONOLITH_* environment variables.

    Supported environment variables:
        MONOLITH_WORKERS: int
        MONOLITH_PARALLEL_SCORING: bool (true/false/1/0)
        MONOLITH_TOP_CANDIDATES: int
        MONOLITH_VERBOSITY: quiet/normal/verbose
        MONOLITH_COUPLING_WEIGHT, MONOLITH_COMPLEXITY_WEIGHT,
        MONOLITH_TECH_DEBT_WEIGHT, MONOLITH_EXTERNAL_EXPOSURE_WEIGHT: float
    """
    type_hints = get_type_hints(AnalysisConfig)
    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    weights: dict[str, float] = {}
    for env_key, field_name in _WEIGHT_ENV_VARS.items():
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            weights[field_name] = float(env_value)
        except ValueError:
            raise InvalidConfigError(env_key, env_value, "expected a number")
    if weights:
        result["scoring_weights"] = weights

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that can't be set from the environment
    (nested config sections).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        return _load_toml_file(path)
    except OSError as e:
        raise InvalidConfigError("config_file", path, f"cannot read: {e}")
    except ValueError as e:
        # tomllib.TOMLDecodeError is a ValueError
        raise InvalidConfigError("config_file", path, f"invalid TOML: {e}")


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Fallback to tomli for Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
