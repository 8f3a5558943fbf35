"""The command-line interface for cargo-set."""

from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from cargo_set.config import LogFormat, LogLevel, Settings
from cargo_set.utils import create_cli_logger

from ._commands import register_commands
from ._context import CLIContext

_HELP = "Set a crate's version across a Cargo workspace."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the CLI application.

    Global options are handled by the meta app, so callers should invoke
    ``app.meta(tokens)`` to get logging and output consoles set up.

    Args:
        console: Console for regular output. Defaults to stdout.
        error_console: Console for errors. Defaults to stderr.
        exit_on_error: Whether cyclopts exits on parse errors.

    Returns:
        The configured application.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="cargo-set",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        log_level: Annotated[
            LogLevel | None,
            Parameter(name="--log-level", help="Log level threshold"),
        ] = None,
        log_format: Annotated[
            LogFormat | None,
            Parameter(name="--log-format", help="Log output format"),
        ] = None,
        log_file: Annotated[
            str | None,
            Parameter(name="--log-file", help="Write logs to this file"),
        ] = None,
    ) -> None:
        """Launch cargo-set with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            log_level: Log level threshold (debug, info, warning, error).
            log_format: Log output format (text, json).
            log_file: Path to a log file instead of stderr.
        """
        # Build CLI overrides from flags
        logging_overrides: dict[str, object] = {}
        if log_level is not None:
            logging_overrides["level"] = log_level.value
        if log_format is not None:
            logging_overrides["format"] = log_format.value
        if log_file is not None:
            logging_overrides["file"] = log_file

        settings = Settings.load(
            cli_overrides={"logging": logging_overrides} if logging_overrides else None
        )

        # Global options are already consumed, so the first token names the command
        command = tokens[0] if tokens and not tokens[0].startswith("-") else ""

        cli_logger = create_cli_logger(
            level=settings.logging.level.value,
            log_format=settings.logging.format.value,  # type: ignore[arg-type]
            log_file=settings.logging.file,
            command=command,
        )

        ctx = CLIContext(
            settings=settings,
            console=console,
            error_console=error_console,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `cargo-set` CLI."""
    create_app().meta()


if __name__ == "__main__":
    main()
