"""Configuration loading and management for pkgrank.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.pkgrank.toml)
    3. Project config (./pkgrank.toml)
    4. Explicit config file
    5. Environment variables (PKGRANK_* prefix)
    6. Keyword overrides

Example:
    >>> config = load_config(pagerank_damping=0.9)
    >>> config.pagerank_config().damping
    0.9
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

# Edge weights within this distance of 1.0 count as "unweighted".
UNWEIGHTED_EPSILON = 1e-12


@dataclass(frozen=True)
class PageRankConfig:
    """Parameters of a single PageRank solve.

    Attributes:
        damping: Probability of following an edge instead of teleporting
        tol: L1 distance between successive iterates that counts as converged
        max_iterations: Upper bound on power iterations
    """

    damping: float = 0.85
    tol: float = 1e-12
    max_iterations: int = 200

    def __post_init__(self) -> None:
        if not 0.0 <= self.damping <= 1.0:
            raise ValueError("damping must be between 0.0 and 1.0")
        if not self.tol > 0:
            raise ValueError("tol must be positive")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")


DEFAULT_PAGERANK = PageRankConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a centrality analysis run.

    Attributes:
        PageRank:
            pagerank_damping: Damping factor (0.0-1.0)
            pagerank_tolerance: L1 convergence tolerance
            pagerank_max_iterations: Maximum power iterations

        Variant selection:
            unweighted_epsilon: Max |w - 1.0| for a graph to use the unweighted path

        Reporting:
            top_k: Rows returned by CentralityAnalysis.top() when k is omitted
            members_preview: Group members listed per contracted node
            ppr_epsilon: Personalized scores at or below this count as unreachable

        Output control:
            verbosity: Logging verbosity level
    """

    pagerank_damping: float = 0.85
    pagerank_tolerance: float = 1e-12
    pagerank_max_iterations: int = 200

    unweighted_epsilon: float = UNWEIGHTED_EPSILON

    top_k: int = 10
    members_preview: int = 3
    ppr_epsilon: float = 1e-12

    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        try:
            self.pagerank_config()
        except ValueError as e:
            raise ValueError(f"invalid PageRank settings: {e}") from e
        # NaN fails every comparison, so the epsilons are checked with >=
        if not self.unweighted_epsilon >= 0:
            raise ValueError("unweighted_epsilon must be non-negative")
        if self.top_k < 1:
            raise ValueError("top_k must be at least 1")
        if self.members_preview < 0:
            raise ValueError("members_preview must be non-negative")
        if not self.ppr_epsilon >= 0:
            raise ValueError("ppr_epsilon must be non-negative")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")

    def pagerank_config(self) -> PageRankConfig:
        """Build the PageRankConfig for this analysis."""
        return PageRankConfig(
            damping=self.pagerank_damping,
            tol=self.pagerank_tolerance,
            max_iterations=self.pagerank_max_iterations,
        )


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (highest priority)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigFileError: If a config file is missing or unparseable
        InvalidConfigError: If a key is unknown or a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".pkgrank.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "pkgrank.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    unknown = sorted(set(merged) - set(AnalysisConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    try:
        return AnalysisConfig(**merged)
    except ValueError as e:
        raise InvalidConfigError("config", merged, str(e)) from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from PKGRANK_* environment variables.

    Supported environment variables:
        PKGRANK_PAGERANK_DAMPING: float
        PKGRANK_PAGERANK_TOLERANCE: float
        PKGRANK_PAGERANK_MAX_ITERATIONS: int
        PKGRANK_UNWEIGHTED_EPSILON: float
        PKGRANK_TOP_K: int
        PKGRANK_MEMBERS_PREVIEW: int
        PKGRANK_PPR_EPSILON: float
        PKGRANK_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any PKGRANK_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"PKGRANK_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    A ``[pkgrank]`` table is used when present, otherwise the top level.

    Raises:
        ConfigFileError: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e)) from e

    section = data.get("pkgrank")
    if isinstance(section, dict):
        return dict(section)
    return data
