# pyright: reportUnusedCallResult=false
# ruff: noqa: TC002  # Console needed at runtime for dataclass field
"""CLI context for global state management.

The CLIContext is set once by the meta app at startup and made available to
commands via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.console import Console

from cargo_set.config import Settings

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


_current_cli_context: "contextvars.ContextVar[CLIContext | None]" = (  # noqa: UP037
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with settings and output consoles.

    Attributes:
        settings: Resolved runtime settings.
        console: Console for regular output.
        error_console: Console for error output.
        logger: Structured logger for CLI commands.
    """

    settings: Settings = field(default_factory=Settings)
    console: Console = field(default_factory=Console, repr=False)
    error_console: Console = field(
        default_factory=lambda: Console(stderr=True), repr=False
    )
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)  # noqa: UP037

    @classmethod
    def get_current(cls) -> "CLIContext":  # noqa: UP037
        """Get the current active CLIContext, or a default if none is set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls()

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:  # noqa: UP037
        """Set the current active CLIContext."""
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context.

        This is primarily useful for testing to ensure a clean state between tests.
        """
        _current_cli_context.set(None)
