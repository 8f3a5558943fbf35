"""Logging utilities for cargo-set.

This module provides a standalone structlog logger factory that writes
text-formatted or JSON-formatted logs to stderr or a log file. Each logger is
self-contained and does not modify global structlog configuration.
"""

import logging
import sys
from collections.abc import Mapping
from os import environ as os_environ
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

DEBUG_ENV_VAR = "CARGO_SET_DEBUG"


def _log_level_from_string(
    level: str,
    *,
    respect_env: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, CARGO_SET_DEBUG overrides to DEBUG level.
        environ: Environment to check. Defaults to os.environ.

    Returns:
        The logging level as an integer, INFO for unknown names.
    """
    env = os_environ if environ is None else environ
    if respect_env and env.get(DEBUG_ENV_VAR):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    stream: TextIO,
    *,
    log_level: int,
    log_format: LogFormatType,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger writing to a stream.

    Args:
        stream: Open text stream the rendered lines are written to.
        log_level: Minimum level to emit.
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLogger(file=stream),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "text",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    Writes to stderr unless ``log_file`` is given, in which case the file is
    opened in append mode (parent directories are created).

    The log level can be overridden by environment variables:
    - CARGO_SET_DEBUG: If set, enables DEBUG level logging regardless of level

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (logs to stderr if empty).
        command: Name of the CLI command for context (bound to all entries).

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    stream: TextIO
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        stream = log_path.open("a", encoding="utf-8")  # noqa: SIM115
    else:
        stream = sys.stderr

    logger = _create_logger(
        stream,
        log_level=_log_level_from_string(level, respect_env=True),
        log_format=log_format,
    )

    if command:
        return logger.bind(command=command)
    return logger
