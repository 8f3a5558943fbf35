"""cargo-set runtime settings.

Example:
    >>> from cargo_set.config import Settings
    >>> settings = Settings.load()
    >>> settings.logging.level
    <LogLevel.INFO: 'info'>
"""

from ._loader import ENV_PREFIX, deep_merge, parse_env_vars, set_nested_key
from ._models import (
    DEFAULT_SETTINGS,
    LogFormat,
    LoggingConfig,
    LogLevel,
    Settings,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "ENV_PREFIX",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "Settings",
    "deep_merge",
    "parse_env_vars",
    "set_nested_key",
]
