"""Configuration system for bgubench.

This package provides:
- TOML loading and dictionary merging
- Environment variable overrides (``BGUBENCH_SECTION__KEY``)
- Typed, validated harness settings
"""

from bgubench.config.environment import apply_environment_overrides, get_env_value
from bgubench.config.loaders import deep_merge_dict, load_toml
from bgubench.config.settings import (
    BenchConfig,
    BurstConfig,
    FilterConfig,
    HarnessConfig,
    LoggingConfig,
    OperatorsConfig,
    load_harness_config,
)


__all__ = [
    # Loaders
    "deep_merge_dict",
    "load_toml",
    # Environment
    "apply_environment_overrides",
    "get_env_value",
    # Settings
    "BenchConfig",
    "BurstConfig",
    "FilterConfig",
    "HarnessConfig",
    "LoggingConfig",
    "OperatorsConfig",
    "load_harness_config",
]
