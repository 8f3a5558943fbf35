from collections.abc import Callable

import pytest
from rich.console import Console

from cargo_set.cli import create_app


@pytest.fixture
def console() -> Console:
    # Wide enough that temporary paths are never wrapped.
    return Console(
        width=500,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def cargo_set_cli_with_exit_code(console: Console) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code.

    Arguments go through the meta app so global options and the CLI context
    are set up the same way as in the real entrypoint.
    """

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        """Run CLI app and return exit code (0 if no SystemExit)."""

        try:
            app.meta(args)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
