"""Environment variable overrides for harness configuration.

A variable such as ``BGUBENCH_FILTER__EPSILON=0.001`` overrides
``config["filter"]["epsilon"]``. ``BGUBENCH_CONFIG`` is reserved for the
configuration file path and is never treated as an override.
"""

import os
from typing import Any

ENV_PREFIX = "BGUBENCH_"

# Variables under the prefix that are not configuration keys.
_RESERVED_NAMES = frozenset({"CONFIG"})


def get_env_value(env_var: str, default: Any = None, prefix: str = ENV_PREFIX) -> str | None:
    """Get a value from an environment variable.

    Args:
        env_var: The name of the environment variable (without prefix)
        default: Default value to return if the environment variable is not set
        prefix: Prefix to apply to the environment variable name

    Returns:
        The environment variable value, or the default if not set
    """
    return os.environ.get(f"{prefix}{env_var}", default)


def apply_environment_overrides(
    config: dict[str, Any], prefix: str = ENV_PREFIX, separator: str = "__"
) -> dict[str, Any]:
    """Apply environment variable overrides to a configuration dictionary.

    Args:
        config: The configuration dictionary to apply overrides to
        prefix: Prefix for environment variables to consider
        separator: Separator used to indicate nested keys

    Returns:
        A copy of ``config`` with overrides applied; the input is not modified
    """
    result = _deep_copy_dicts(config)

    for env_name, env_value in sorted(os.environ.items()):
        if not env_name.startswith(prefix):
            continue
        config_path = env_name[len(prefix) :]
        if not config_path or config_path in _RESERVED_NAMES:
            continue

        keys = [k.lower() for k in config_path.split(separator)]
        _set_nested_value(result, keys, _convert_value(env_value))

    return result


def _deep_copy_dicts(config: dict[str, Any]) -> dict[str, Any]:
    return {k: _deep_copy_dicts(v) if isinstance(v, dict) else v for k, v in config.items()}


def _convert_value(value: str) -> Any:
    """Convert an environment string to bool, int, float, or keep it as str.

    Only ``true``/``yes``/``false``/``no`` become booleans, so numeric
    settings such as ``1`` stay integers.
    """
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False

    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return value


def _set_nested_value(config: dict[str, Any], keys: list[str], value: Any) -> None:
    """Set a value in a nested dictionary, creating intermediate levels."""
    if len(keys) == 1:
        config[keys[0]] = value
        return

    current_key = keys[0]
    if current_key not in config or not isinstance(config[current_key], dict):
        config[current_key] = {}

    _set_nested_value(config[current_key], keys[1:], value)
