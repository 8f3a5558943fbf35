# pyright: reportExplicitAny=false, reportAny=false
"""Settings models.

Settings are resolved once per invocation, in increasing precedence:
built-in defaults, ``CARGO_SET_*`` environment variables, CLI flags.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field

from cargo_set.config._loader import deep_merge, parse_env_vars


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


DEFAULT_SETTINGS: dict[str, Any] = {
    "logging": {
        "level": LogLevel.INFO.value,
        "format": LogFormat.TEXT.value,
        "file": "",
    },
}


class LoggingConfig(BaseModel):
    """Logging settings.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    file: str = ""


def _parse_log_level(value: Any) -> LogLevel:
    """Parse a log level value, defaulting to INFO for invalid values."""
    try:
        return LogLevel(str(value).lower())
    except ValueError:
        return LogLevel.INFO


def _parse_log_format(value: Any) -> LogFormat:
    """Parse a log format value, defaulting to TEXT for invalid values."""
    try:
        return LogFormat(str(value).lower())
    except ValueError:
        return LogFormat.TEXT


def _parse_logging(data: Any) -> LoggingConfig:
    if not isinstance(data, dict):
        return LoggingConfig()
    return LoggingConfig(
        level=_parse_log_level(data.get("level", LogLevel.INFO.value)),
        format=_parse_log_format(data.get("format", LogFormat.TEXT.value)),
        file=str(data.get("file", "")),
    )


class Settings(BaseModel):
    """Runtime settings for cargo-set.

    Use load() to resolve settings from the environment and CLI flags.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create settings from a dictionary merged over the defaults.

        Invalid values fall back to their defaults rather than failing, so
        a bad environment variable never blocks a version update.

        Args:
            data: Dictionary of settings values.

        Returns:
            The resolved settings.
        """
        merged = deep_merge(DEFAULT_SETTINGS, data)
        return cls(logging=_parse_logging(merged.get("logging")))

    @classmethod
    def load(
        cls,
        *,
        cli_overrides: dict[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Self:
        """Resolve settings from environment variables and CLI overrides.

        Args:
            cli_overrides: Nested values from CLI flags (highest precedence).
            environ: Environment to read. Defaults to os.environ.

        Returns:
            The resolved settings.
        """
        data = parse_env_vars(environ=environ)
        if cli_overrides:
            data = deep_merge(data, cli_overrides)
        return cls.from_dict(data)
