"""Set a crate's version across a Cargo workspace.

Example:
    >>> from cargo_set import FileSystemStorage, ManifestLoader, VersionUpdater
    >>> storage = FileSystemStorage()
    >>> graph = ManifestLoader(storage).load(Path("Cargo.toml"))
    >>> VersionUpdater(storage).apply(graph, "my-crate", "0.3.0")
"""

from cargo_set.exceptions import (
    CargoSetError,
    ManifestError,
    ManifestIOError,
    ManifestParseError,
    ManifestSerializeError,
    PackageNotFoundError,
    VersionBumpError,
)
from cargo_set.manifest import (
    BumpLevel,
    Manifest,
    ManifestGraph,
    ManifestLoader,
    UpdateReport,
    VersionUpdater,
    bump_version,
    load_manifest_graph,
)
from cargo_set.storage import FakeStorage, FileSystemStorage, StorageProtocol

__all__ = [
    "BumpLevel",
    "CargoSetError",
    "FakeStorage",
    "FileSystemStorage",
    "Manifest",
    "ManifestError",
    "ManifestGraph",
    "ManifestIOError",
    "ManifestLoader",
    "ManifestParseError",
    "ManifestSerializeError",
    "PackageNotFoundError",
    "StorageProtocol",
    "UpdateReport",
    "VersionBumpError",
    "VersionUpdater",
    "bump_version",
    "load_manifest_graph",
]
