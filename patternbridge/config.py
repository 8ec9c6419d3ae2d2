# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load all tunable thresholds, weights and time budgets from
#   environment variables / .env file. Provides typed config objects
#   to the classifiers, matcher, synthesizer and orchestrator.
#
# CLASSES:
# --------
# - RuntimeConfig (dataclass)
#     fetch_timeout_seconds: float   (default 10)
#     ranker_timeout_seconds: float  (default 5)
#     run_budget_seconds: float      (default 60)
#     log_level: str                 (default "INFO")
#
# - AppConfig (dataclass)
#     data: DataThresholds
#     matching: MatchingWeights
#     synthesis: SynthesisOptions
#     runtime: RuntimeConfig
#
# ENVIRONMENT:
# ------------
#   MIN_SAMPLES               → data.min_samples AND matching.min_samples
#   MIN_CONFIDENCE            → matching.min_confidence
#   CATEGORICAL_MAX_DISTINCT  → data.categorical_max_distinct
#   HIGH_PRIORITY_CONFIDENCE  → synthesis.high_priority_confidence
#   MAX_CASES_PER_FIELD       → synthesis.max_cases_per_field (empty = no limit)
#   FETCH_TIMEOUT_SECONDS     → runtime.fetch_timeout_seconds
#   RANKER_TIMEOUT_SECONDS    → runtime.ranker_timeout_seconds
#   RUN_BUDGET_SECONDS        → runtime.run_budget_seconds
#   LOG_LEVEL                 → runtime.log_level
#
# FUNCTIONS:
# ----------
# - load_config() -> AppConfig
#     Build a fresh AppConfig from the current environment.
# - get_config() -> AppConfig
#     Load .env using python-dotenv once, return the same singleton.
#
# USAGE:
# ------
#   from patternbridge.config import get_config
#   config = get_config()
#   print(config.matching.min_confidence)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .data.descriptors import DataThresholds
from .matching.connection import MatchingWeights
from .synthesis.test_case import SynthesisOptions


@dataclass
class RuntimeConfig:
    """Time budgets and logging for a learning run."""
    fetch_timeout_seconds: float = 10.0
    ranker_timeout_seconds: float = 5.0
    run_budget_seconds: float = 60.0
    log_level: str = "INFO"


@dataclass
class AppConfig:
    """Main application configuration."""
    data: DataThresholds = field(default_factory=DataThresholds)
    matching: MatchingWeights = field(default_factory=MatchingWeights)
    synthesis: SynthesisOptions = field(default_factory=SynthesisOptions)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    return int(value)


def load_config() -> AppConfig:
    """
    Build configuration from the current environment variables.

    Returns:
        AppConfig: A new configuration object (not cached)

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    min_samples = int(os.getenv("MIN_SAMPLES", "3"))

    data_config = DataThresholds(
        min_samples=min_samples,
        categorical_max_distinct=int(os.getenv("CATEGORICAL_MAX_DISTINCT", "50")),
    )

    matching_config = MatchingWeights(
        min_confidence=float(os.getenv("MIN_CONFIDENCE", "0.2")),
        min_samples=min_samples,
    )

    synthesis_config = SynthesisOptions(
        high_priority_confidence=float(os.getenv("HIGH_PRIORITY_CONFIDENCE", "0.7")),
        max_cases_per_field=_optional_int(os.getenv("MAX_CASES_PER_FIELD")),
    )

    runtime_config = RuntimeConfig(
        fetch_timeout_seconds=float(os.getenv("FETCH_TIMEOUT_SECONDS", "10")),
        ranker_timeout_seconds=float(os.getenv("RANKER_TIMEOUT_SECONDS", "5")),
        run_budget_seconds=float(os.getenv("RUN_BUDGET_SECONDS", "60")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

    return AppConfig(
        data=data_config,
        matching=matching_config,
        synthesis=synthesis_config,
        runtime=runtime_config,
    )


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    _config_instance = load_config()
    return _config_instance


def reset_config() -> None:
    """Forget the cached singleton (used by tests)."""
    global _config_instance
    _config_instance = None
