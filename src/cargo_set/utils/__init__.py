"""Shared utilities for cargo-set."""

from ._logging import DEBUG_ENV_VAR, LogFormatType, create_cli_logger

__all__ = ["DEBUG_ENV_VAR", "LogFormatType", "create_cli_logger"]
