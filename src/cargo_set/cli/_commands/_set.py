# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""The ``set`` command: change a crate's version across a workspace."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.markup import escape

from cargo_set.cli._context import CLIContext
from cargo_set.exceptions import (
    ManifestIOError,
    ManifestParseError,
    ManifestSerializeError,
    PackageNotFoundError,
    VersionBumpError,
)
from cargo_set.manifest import (
    MANIFEST_FILENAME,
    BumpLevel,
    ManifestLoader,
    UpdateReport,
    VersionUpdater,
    bump_version,
)
from cargo_set.storage import FileSystemStorage, StorageProtocol

from ._shared import ExitCode, exit_with_error


def _print_report(ctx: CLIContext, report: UpdateReport) -> None:
    console = ctx.console
    console.print(
        f"Set [bold]{escape(report.package)}[/bold] to "
        f"[bold]{escape(report.version)}[/bold]"
    )
    for path in report.written:
        console.print(f"  wrote {escape(str(path))}")
    for path in report.unwritten:
        console.print(
            f"  [yellow]updated in memory only (crate manifest, not written):"
            f"[/yellow] {escape(str(path))}"
        )


def run_set(
    storage: StorageProtocol,
    *,
    crate: str,
    path: Path,
    set_version: str | None = None,
    bump: BumpLevel | None = None,
    ctx: CLIContext | None = None,
) -> UpdateReport:
    """Load the manifest graph at ``path`` and set ``crate``'s version.

    Exactly one of ``set_version`` and ``bump`` must be given. With ``bump``,
    the crate's current version is read from the graph and incremented.

    Args:
        storage: Storage manifests are read from and written to.
        crate: Name of the crate whose version changes.
        path: Path of the root manifest.
        set_version: Explicit new version.
        bump: Version component to increment instead.
        ctx: CLI context providing the logger. Defaults to the current one.

    Returns:
        The update report.

    Raises:
        ValueError: If neither or both of ``set_version`` and ``bump`` are set.
        ManifestIOError: If a manifest cannot be read or written.
        ManifestParseError: If a manifest cannot be parsed.
        PackageNotFoundError: If ``bump`` is used and the crate is not declared.
        VersionBumpError: If ``bump`` is used and the version is not SemVer.
    """
    if (set_version is None) == (bump is None):
        msg = "Exactly one of --set-version or --bump is required"
        raise ValueError(msg)

    if ctx is None:
        ctx = CLIContext.get_current()
    logger = ctx.logger

    graph = ManifestLoader(storage, logger=logger).load(path)

    if bump is not None:
        current = graph.find_package_version(crate)
        new_version = bump_version(current, bump)
        if logger:
            logger.info("version bumped", crate=crate, old=current, new=new_version)
    else:
        new_version = set_version  # pyright: ignore[reportAssignmentType]

    report = VersionUpdater(storage, logger=logger).apply(graph, crate, new_version)
    if logger:
        logger.info(
            "version set",
            crate=crate,
            version=new_version,
            written=[str(p) for p in report.written],
            unwritten=[str(p) for p in report.unwritten],
        )
    return report


def set_command(
    *,
    crate: Annotated[
        str,
        Parameter(name="--crate", help="Name of the crate whose version changes"),
    ],
    set_version: Annotated[
        str | None,
        Parameter(name="--set-version", help="New version to set"),
    ] = None,
    bump: Annotated[
        BumpLevel | None,
        Parameter(name="--bump", help="Increment the current version instead"),
    ] = None,
    path: Annotated[
        Path,
        Parameter(name="--path", help="Path to the root Cargo.toml"),
    ] = Path(MANIFEST_FILENAME),
    workspace: Annotated[
        bool,
        Parameter(
            name="--workspace",
            help="Apply to the whole workspace (currently always the case)",
        ),
    ] = False,
) -> None:
    """Set a crate's version and update every dependency on it.

    Loads the manifest at --path and, if it is a workspace root, each member
    manifest. The crate's own version and every dependency on it are updated.

    Args:
        crate: Name of the crate whose version changes.
        set_version: New version to set.
        bump: Version component to increment (patch, minor, major).
        path: Path to the root Cargo.toml.
        workspace: Accepted for compatibility; has no effect.
    """
    ctx = CLIContext.get_current()
    error_console = ctx.error_console

    if ctx.logger:
        ctx.logger.debug(
            "command - set",
            workspace=workspace,
            crate=crate,
            path=str(path),
            set_version=set_version,
            bump=bump.value if bump else None,
        )

    if set_version is not None and bump is not None:
        exit_with_error(
            "--set-version and --bump are mutually exclusive",
            ExitCode.USAGE_ERROR,
            console=error_console,
        )
    if set_version is None and bump is None:
        exit_with_error(
            "One of --set-version or --bump is required",
            ExitCode.USAGE_ERROR,
            console=error_console,
        )

    try:
        report = run_set(
            FileSystemStorage(),
            crate=crate,
            path=path,
            set_version=set_version,
            bump=bump,
            ctx=ctx,
        )
    except ManifestIOError as e:
        exit_with_error(escape(str(e)), ExitCode.IO_ERROR, console=error_console)
    except ManifestParseError as e:
        exit_with_error(escape(str(e)), ExitCode.LOAD_ERROR, console=error_console)
    except PackageNotFoundError as e:
        exit_with_error(escape(str(e)), ExitCode.NOT_FOUND, console=error_console)
    except VersionBumpError as e:
        exit_with_error(escape(str(e)), ExitCode.USAGE_ERROR, console=error_console)
    except ManifestSerializeError as e:
        exit_with_error(
            escape(str(e)), ExitCode.INTERNAL_ERROR, console=error_console
        )

    _print_report(ctx, report)
