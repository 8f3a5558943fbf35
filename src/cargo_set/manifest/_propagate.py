# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Propagating a new package version through a manifest graph.

For every manifest (root first, then members in path order) the updater:

- sets ``package.version`` when the manifest is the target package,
- rewrites every dependency on the target in ``[dependencies]``,
  ``[dev-dependencies]`` and ``[build-dependencies]``,
- rewrites the target in ``[workspace.dependencies]``, which is what
  ``{ workspace = true }`` dependencies resolve to.

The root is always written back. A member is written back only when it has
no ``[package]`` of its own and its content changed; members that are crates
keep their in-memory changes unwritten. UpdateReport.unwritten lists those
so callers can surface them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, assert_never

from cargo_set.exceptions import ManifestIOError
from cargo_set.manifest._codec import serialize_manifest
from cargo_set.manifest._graph import ManifestGraph
from cargo_set.manifest._models import (
    DependencySpec,
    DetailedDependency,
    InheritedDependency,
    Manifest,
    SimpleDependency,
)
from cargo_set.storage import StorageProtocol

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@dataclass(slots=True)
class UpdateReport:
    """Outcome of one propagation pass.

    Attributes:
        package: The package whose version was set.
        version: The version that was set.
        changed: Manifests whose content changed in memory, in update order.
        written: Manifests written back to storage, in write order.
    """

    package: str
    version: str
    changed: list[Path] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    @property
    def unwritten(self) -> list[Path]:
        """Manifests changed in memory that were not written back."""
        return [path for path in self.changed if path not in self.written]


def update_dependency(spec: DependencySpec, version: str) -> bool:
    """Set the version of a single dependency entry in place.

    Args:
        spec: The dependency entry to update.
        version: The new version.

    Returns:
        True if the entry's content changed.
    """
    match spec:
        case SimpleDependency():
            changed = spec.version != version
            spec.version = version
            return changed
        case InheritedDependency():
            # Resolved through [workspace.dependencies]; nothing stored here
            return False
        case DetailedDependency():
            changed = spec.version != version
            spec.version = version
            return changed
        case _:
            assert_never(spec)


def update_manifest(manifest: Manifest, package: str, version: str) -> bool:
    """Apply a version update to one manifest in place.

    Args:
        manifest: The manifest to update.
        package: Name of the package whose version changes.
        version: The new version.

    Returns:
        True if the manifest's content changed.
    """
    changed = False

    if manifest.package is not None and manifest.package.name == package:
        changed = manifest.package.version != version
        manifest.package.version = version

    for table in manifest.dependency_tables():
        if package in table:
            changed = update_dependency(table[package], version) or changed

    if manifest.workspace is not None and package in manifest.workspace.dependencies:
        spec = manifest.workspace.dependencies[package]
        changed = update_dependency(spec, version) or changed

    return changed


class VersionUpdater:
    """Applies a package version across a ManifestGraph and persists it.

    Example:
        >>> graph = ManifestLoader(storage).load(Path("Cargo.toml"))
        >>> report = VersionUpdater(storage).apply(graph, "child", "0.3.0")
        >>> report.written
        [PosixPath('Cargo.toml')]
    """

    _storage: StorageProtocol
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        storage: StorageProtocol,
        *,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize the updater.

        Args:
            storage: Storage the manifests are written to.
            logger: Optional logger for debug-level diagnostics.
                If None, no logging is performed.
        """
        self._storage = storage
        self._logger = logger

    def apply(self, graph: ManifestGraph, package: str, version: str) -> UpdateReport:
        """Set ``package`` to ``version`` everywhere in the graph.

        The graph is mutated in place. Writes are not rolled back: if a write
        fails, manifests written before it stay written.

        Args:
            graph: The loaded manifest graph.
            package: Name of the package whose version changes.
            version: The new version, written through unchanged.

        Returns:
            A report of changed and written manifests.

        Raises:
            ManifestIOError: If a manifest cannot be written.
            ManifestSerializeError: If a manifest cannot be encoded.
        """
        report = UpdateReport(package=package, version=version)

        _ = self._update(graph.root_path, graph.root, report)
        self._write(graph.root_path, graph.root, report)

        for path, manifest in (graph.members or {}).items():
            changed = self._update(path, manifest, report)
            if changed and manifest.package is None:
                self._write(path, manifest, report)

        return report

    def _update(self, path: Path, manifest: Manifest, report: UpdateReport) -> bool:
        if not update_manifest(manifest, report.package, report.version):
            return False

        report.changed.append(path)
        if self._logger:
            self._logger.debug(
                "manifest updated",
                path=str(path),
                package=report.package,
                version=report.version,
            )
        return True

    def _write(self, path: Path, manifest: Manifest, report: UpdateReport) -> None:
        content = serialize_manifest(manifest, path=path)
        try:
            self._storage.write(path, content)
        except OSError as e:
            msg = f"Failed to write {path}: {e}"
            raise ManifestIOError(msg, path=path) from e

        report.written.append(path)
        if self._logger:
            self._logger.debug("manifest written", path=str(path), size=len(content))
