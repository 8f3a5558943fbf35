# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Loading a root manifest together with its workspace members."""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from cargo_set.exceptions import ManifestIOError, PackageNotFoundError
from cargo_set.manifest._codec import parse_manifest
from cargo_set.manifest._models import MANIFEST_FILENAME, InheritedField, Manifest
from cargo_set.storage import FileSystemStorage, StorageProtocol

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

# Cargo's default when a package omits its version
DEFAULT_PACKAGE_VERSION = "0.0.0"


@dataclass(slots=True)
class ManifestGraph:
    """A root manifest and the manifests of its workspace members.

    Only one level is loaded: a member's own ``[workspace]`` is never
    expanded.

    Attributes:
        root_path: Path of the root manifest file.
        root: Parsed root manifest.
        members: Member manifests keyed by their resolved path, sorted by path.
            None when the root declares no members (including ``members = []``).
    """

    root_path: Path
    root: Manifest
    members: dict[Path, Manifest] | None = None

    @property
    def root_dir(self) -> Path:
        """Directory that member paths are resolved against."""
        return self.root_path.parent

    def manifests(self) -> list[tuple[Path, Manifest]]:
        """Return the root followed by every member, in update order."""
        entries = [(self.root_path, self.root)]
        if self.members is not None:
            entries.extend(self.members.items())
        return entries

    def find_package_version(self, name: str) -> str:
        """Look up the current version of a package declared in the graph.

        The root is searched before members. A version inherited with
        ``version = { workspace = true }`` resolves through the root's
        ``[workspace.package]`` table.

        Args:
            name: Package name to look up.

        Returns:
            The package's version string.

        Raises:
            PackageNotFoundError: If no manifest declares the package, or its
                inherited version cannot be resolved.
        """
        for _, manifest in self.manifests():
            package = manifest.package
            if package is None or package.name != name:
                continue
            match package.version:
                case None:
                    return DEFAULT_PACKAGE_VERSION
                case InheritedField():
                    workspace = self.root.workspace
                    inherited = (
                        workspace.package_version if workspace is not None else None
                    )
                    if inherited is None:
                        msg = (
                            f"Package '{name}' inherits its version but the root "
                            "manifest has no [workspace.package] version"
                        )
                        raise PackageNotFoundError(msg, package=name)
                    return inherited
                case str():
                    return package.version

        msg = f"Package '{name}' is not declared in {self.root_path}"
        raise PackageNotFoundError(msg, package=name)


def resolve_member_path(root_path: Path, member: str) -> Path:
    """Resolve the manifest path of a workspace member.

    Members are relative to the directory containing the root manifest, not
    to the manifest file itself.

    Args:
        root_path: Path of the root manifest file.
        member: Member directory as written in ``workspace.members``.

    Returns:
        Path of the member's ``Cargo.toml``.
    """
    return root_path.parent / member / MANIFEST_FILENAME


class ManifestLoader:
    """Builds a ManifestGraph from a root manifest path.

    Example:
        >>> loader = ManifestLoader(FileSystemStorage())
        >>> graph = loader.load(Path("Cargo.toml"))
        >>> sorted(graph.members or {})
        [PosixPath('crates/a/Cargo.toml'), PosixPath('crates/b/Cargo.toml')]
    """

    _storage: StorageProtocol
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        storage: StorageProtocol,
        *,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize the loader.

        Args:
            storage: Storage the manifests are read from.
            logger: Optional logger for debug-level diagnostics.
                If None, no logging is performed.
        """
        self._storage = storage
        self._logger = logger

    def load(self, path: Path) -> ManifestGraph:
        """Load the root manifest and, if it declares any, its members.

        Loading is fail-fast: the first member that cannot be read or parsed
        aborts the whole load.

        Args:
            path: Path of the root manifest file.

        Returns:
            The loaded graph.

        Raises:
            ManifestIOError: If the root or a member cannot be read.
            ManifestParseError: If the root or a member cannot be parsed.
        """
        root = self._load_manifest(path)
        graph = ManifestGraph(root_path=path, root=root)

        declared = root.members
        if not declared:
            if self._logger:
                self._logger.debug("no workspace members", path=str(path))
            return graph

        members: dict[Path, Manifest] = {}
        for member in declared:
            member_path = resolve_member_path(path, member)
            members[member_path] = self._load_manifest(member_path)

        graph.members = dict(sorted(members.items()))
        return graph

    def _load_manifest(self, path: Path) -> Manifest:
        try:
            content = self._storage.read(path)
        except OSError as e:
            msg = f"Failed to read {path}: {e}"
            raise ManifestIOError(msg, path=path) from e

        manifest = parse_manifest(content, path=path)
        if self._logger:
            self._logger.debug(
                "manifest loaded",
                path=str(path),
                package=manifest.package.name if manifest.package else None,
                members=len(manifest.members),
            )
        return manifest


def load_manifest_graph(
    path: Path,
    *,
    storage: StorageProtocol | None = None,
    logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
) -> ManifestGraph:
    """Load a manifest graph, reading from the filesystem by default.

    Args:
        path: Path of the root manifest file.
        storage: Storage to read from. Defaults to FileSystemStorage.
        logger: Optional logger for debug-level diagnostics.

    Returns:
        The loaded graph.
    """
    if storage is None:
        storage = FileSystemStorage()
    return ManifestLoader(storage, logger=logger).load(path)
