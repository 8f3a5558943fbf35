"""Cargo manifest loading and version propagation.

Classes:
    Manifest: Parsed content of one Cargo.toml.
    ManifestGraph: A root manifest plus its workspace members.
    ManifestLoader: Builds a ManifestGraph through a storage backend.
    VersionUpdater: Applies a package version across a graph and persists it.
    UpdateReport: Changed and written manifests of one update.

Example:
    >>> from cargo_set.manifest import ManifestLoader, VersionUpdater
    >>> from cargo_set.storage import FileSystemStorage
    >>> storage = FileSystemStorage()
    >>> graph = ManifestLoader(storage).load(Path("Cargo.toml"))
    >>> report = VersionUpdater(storage).apply(graph, "my-crate", "0.3.0")
"""

from cargo_set.manifest._bump import BumpLevel, bump_version
from cargo_set.manifest._codec import (
    manifest_from_toml,
    parse_manifest,
    serialize_manifest,
)
from cargo_set.manifest._graph import (
    DEFAULT_PACKAGE_VERSION,
    ManifestGraph,
    ManifestLoader,
    load_manifest_graph,
    resolve_member_path,
)
from cargo_set.manifest._models import (
    DEPENDENCY_SECTIONS,
    MANIFEST_FILENAME,
    DependencySpec,
    DetailedDependency,
    InheritedDependency,
    InheritedField,
    Manifest,
    PackageDescriptor,
    SimpleDependency,
    WorkspaceDeclaration,
)
from cargo_set.manifest._propagate import (
    UpdateReport,
    VersionUpdater,
    update_dependency,
    update_manifest,
)

__all__ = [
    "DEFAULT_PACKAGE_VERSION",
    "DEPENDENCY_SECTIONS",
    "MANIFEST_FILENAME",
    "BumpLevel",
    "DependencySpec",
    "DetailedDependency",
    "InheritedDependency",
    "InheritedField",
    "Manifest",
    "ManifestGraph",
    "ManifestLoader",
    "PackageDescriptor",
    "SimpleDependency",
    "UpdateReport",
    "VersionUpdater",
    "WorkspaceDeclaration",
    "bump_version",
    "load_manifest_graph",
    "manifest_from_toml",
    "parse_manifest",
    "resolve_member_path",
    "serialize_manifest",
    "update_dependency",
    "update_manifest",
]
