"""
Configuration management for InsightFlow.

Handles the tunable knobs of the aggregation engine: type inference
thresholds, rounding precision, the label used for missing categories,
data cleaning parameters and result caching.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import os
import logging

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "INSIGHTFLOW_CONFIG"


@dataclass
class ProfilingConfig:
    """Column profiling configuration."""
    numeric_majority_threshold: float = 0.5  # Share of valid values that must be numeric
    mean_precision: int = 2  # Decimal places kept on the reported mean


@dataclass
class GroupingConfig:
    """Grouping and labelling configuration."""
    null_label: str = "null"  # Label for rows whose category cell is missing
    default_aggregation: str = "sum"


@dataclass
class CleaningConfig:
    """Data cleaning configuration."""
    outlier_iqr_multiplier: float = 1.5
    outlier_min_values: int = 5  # Fewer numeric values than this disables outlier removal
    impute_precision: int = 2


@dataclass
class CacheConfig:
    """Chart data cache configuration."""
    enabled: bool = True
    max_entries: int = 128


@dataclass
class InsightFlowConfig:
    """Main configuration container."""
    profiling: ProfilingConfig = field(default_factory=ProfilingConfig)
    grouping: GroupingConfig = field(default_factory=GroupingConfig)
    cleaning: CleaningConfig = field(default_factory=CleaningConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)

    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: str) -> "InsightFlowConfig":
        """Load configuration from YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "InsightFlowConfig":
        """Create config from dictionary."""
        profiling_data = data.get("profiling") or {}
        profiling_config = ProfilingConfig(
            numeric_majority_threshold=float(
                profiling_data.get("numeric_majority_threshold", 0.5)
            ),
            mean_precision=int(profiling_data.get("mean_precision", 2)),
        )

        grouping_data = data.get("grouping") or {}
        grouping_config = GroupingConfig(
            null_label=str(grouping_data.get("null_label", "null")),
            default_aggregation=str(grouping_data.get("default_aggregation", "sum")),
        )

        cleaning_data = data.get("cleaning") or {}
        cleaning_config = CleaningConfig(
            outlier_iqr_multiplier=float(cleaning_data.get("outlier_iqr_multiplier", 1.5)),
            outlier_min_values=int(cleaning_data.get("outlier_min_values", 5)),
            impute_precision=int(cleaning_data.get("impute_precision", 2)),
        )

        cache_data = data.get("cache") or {}
        cache_config = CacheConfig(
            enabled=bool(cache_data.get("enabled", True)),
            max_entries=int(cache_data.get("max_entries", 128)),
        )

        return cls(
            profiling=profiling_config,
            grouping=grouping_config,
            cleaning=cleaning_config,
            cache=cache_config,
            verbose=bool(data.get("verbose", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "profiling": {
                "numeric_majority_threshold": self.profiling.numeric_majority_threshold,
                "mean_precision": self.profiling.mean_precision,
            },
            "grouping": {
                "null_label": self.grouping.null_label,
                "default_aggregation": self.grouping.default_aggregation,
            },
            "cleaning": {
                "outlier_iqr_multiplier": self.cleaning.outlier_iqr_multiplier,
                "outlier_min_values": self.cleaning.outlier_min_values,
                "impute_precision": self.cleaning.impute_precision,
            },
            "cache": {
                "enabled": self.cache.enabled,
                "max_entries": self.cache.max_entries,
            },
            "verbose": self.verbose,
        }


def load_config(path: Optional[str] = None) -> InsightFlowConfig:
    """
    Resolve the active configuration.

    Args:
        path: Explicit YAML file. Falls back to the INSIGHTFLOW_CONFIG
            environment variable, then to built-in defaults.

    Returns:
        Loaded configuration
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return InsightFlowConfig()

    logger.debug(f"Loading configuration from {path}")
    return InsightFlowConfig.from_yaml(path)
