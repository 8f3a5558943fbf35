# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Merging of settings from defaults, environment variables and CLI flags."""

import os
from collections.abc import Mapping
from typing import Any

ENV_PREFIX = "CARGO_SET_"


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two settings dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Args:
        base: Base settings (lower precedence).
        override: Override settings (higher precedence).

    Returns:
        Merged settings dictionary.

    Merge rules:
        - Dictionaries are recursively merged
        - Everything else is replaced with the override value
        - Missing keys in override preserve base values
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in base.keys() | override.keys():
        if key not in override:
            result[key] = copy_value(base[key])
        elif key not in base:
            result[key] = copy_value(override[key])
        elif isinstance(base[key], dict) and isinstance(override[key], dict):
            result[key] = deep_merge(base[key], override[key])
        else:
            result[key] = copy_value(override[key])

    return result


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Create a deep copy of a settings value.

    Args:
        value: The value to copy.

    Returns:
        A copy fully independent of the original.
    """
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Set a value at a dotted key path in a nested dictionary.

    Creates intermediate dictionaries as needed.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "logging.level", "debug")
        >>> d
        {'logging': {'level': 'debug'}}
    """
    parts = key_path.split(".")
    current = d

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse environment variables into a settings dictionary.

    Args:
        prefix: Environment variable prefix (default: "CARGO_SET_").
        environ: Variables to read. Defaults to os.environ.

    Returns:
        Dictionary of raw string values with nested structure. Values are
        not type-converted; every setting read from the environment is a
        string.

    Environment variable naming:
        - Add prefix (CARGO_SET_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: logging.level -> CARGO_SET_LOGGING__LEVEL
    """
    if environ is None:
        environ = os.environ

    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key, value in environ.items():
        if not key.startswith(prefix):
            continue

        # CARGO_SET_LOGGING__LEVEL -> logging.level
        settings_key = key[len(prefix) :]
        if not settings_key:
            continue

        set_nested_key(result, settings_key.replace("__", ".").lower(), value)

    return result
