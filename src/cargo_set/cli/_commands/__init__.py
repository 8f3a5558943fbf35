"""cargo-set CLI commands."""
# pyright: reportUnusedCallResult=false

from cyclopts import App

from ._set import run_set, set_command
from ._shared import ExitCode, exit_with_error, get_error_console

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
    "register_commands",
    "run_set",
    "set_command",
]


def register_commands(app: App) -> None:
    app.command(set_command, name="set")
