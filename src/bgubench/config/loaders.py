"""TOML configuration loading utilities.

Harness settings are layered: built-in defaults, then a TOML file, then
environment overrides. This module covers the file half of that.
"""

from pathlib import Path
from typing import Any, Union

import tomllib


def load_toml(config_path: Union[str, Path]) -> dict[str, Any]:
    """Load a TOML configuration file.

    Args:
        config_path: Path to the TOML configuration file

    Returns:
        Dictionary containing the parsed TOML configuration

    Raises:
        FileNotFoundError: If the configuration file does not exist
        tomllib.TOMLDecodeError: If the configuration file is invalid TOML
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge_dict(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two dictionaries.

    Values from `override` take precedence; nested dictionaries are merged
    key by key instead of being replaced wholesale.

    Args:
        base: Base dictionary to merge into
        override: Dictionary with values that override the base

    Returns:
        A new dictionary containing the merged values
    """
    result = base.copy()

    for key, override_value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(override_value, dict):
            result[key] = deep_merge_dict(result[key], override_value)
        else:
            result[key] = override_value

    return result
