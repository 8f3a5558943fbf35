# pyright: reportExplicitAny=false, reportAny=false
"""Structural content of a Cargo manifest.

These dataclasses are typed views over the parsed TOML document. Only the
parts that version propagation cares about are modeled; every other key is
carried through ``extra``. A manifest parsed from source also keeps the
``tomlkit`` document it came from, which is what gets written back.
"""

from dataclasses import dataclass, field
from typing import Any

from tomlkit import TOMLDocument

TomlTable = dict[str, Any]

MANIFEST_FILENAME = "Cargo.toml"

DEPENDENCY_SECTIONS: tuple[str, ...] = (
    "dependencies",
    "dev-dependencies",
    "build-dependencies",
)


@dataclass(slots=True)
class InheritedField:
    """A package field delegated to ``[workspace.package]``.

    Written in TOML as ``version = { workspace = true }``.
    """

    def to_toml(self) -> TomlTable:
        return {"workspace": True}


@dataclass(slots=True)
class SimpleDependency:
    """Dependency given as a bare version string, e.g. ``child = "0.2.0"``."""

    version: str

    def to_toml(self) -> str:
        return self.version


@dataclass(slots=True)
class InheritedDependency:
    """Dependency delegated to the workspace, e.g. ``child.workspace = true``.

    Attributes:
        extra: Keys other than ``workspace`` (``features``, ``optional``...).
    """

    extra: TomlTable = field(default_factory=dict)

    def to_toml(self) -> TomlTable:
        return {"workspace": True, **self.extra}


@dataclass(slots=True)
class DetailedDependency:
    """Dependency given as a table, e.g. ``child = { path = "child" }``.

    Attributes:
        version: Explicit version requirement, or None when unpinned.
        extra: Every other key of the table.
    """

    version: str | None = None
    extra: TomlTable = field(default_factory=dict)

    def to_toml(self) -> TomlTable:
        if self.version is None:
            return dict(self.extra)
        return {"version": self.version, **self.extra}


DependencySpec = SimpleDependency | InheritedDependency | DetailedDependency


@dataclass(slots=True)
class PackageDescriptor:
    """The ``[package]`` table of a manifest.

    Attributes:
        name: Package name.
        version: Version string, an inherited reference, or None when the
            manifest omits it.
        extra: Every other key of the table.
    """

    name: str
    version: str | InheritedField | None = None
    extra: TomlTable = field(default_factory=dict)

    def to_toml(self) -> TomlTable:
        table: TomlTable = {"name": self.name}
        match self.version:
            case None:
                pass
            case InheritedField():
                table["version"] = self.version.to_toml()
            case str():
                table["version"] = self.version
        table.update(self.extra)
        return table


@dataclass(slots=True)
class WorkspaceDeclaration:
    """The ``[workspace]`` table of a manifest.

    Attributes:
        members: Member directories relative to the manifest's directory, or
            None when the table has no `members` key.
        dependencies: ``[workspace.dependencies]`` entries by name.
        extra: Every other key (``exclude``, ``resolver``, ``package``...).
    """

    members: list[str] | None = None
    dependencies: dict[str, DependencySpec] = field(default_factory=dict)
    extra: TomlTable = field(default_factory=dict)

    @property
    def package_version(self) -> str | None:
        """Version shared through ``[workspace.package]``, if any."""
        package = self.extra.get("package")
        if isinstance(package, dict):
            version = package.get("version")
            if isinstance(version, str):
                return version
        return None

    def to_toml(self) -> TomlTable:
        table: TomlTable = {}
        if self.members is not None:
            table["members"] = list(self.members)
        table.update(self.extra)
        if self.dependencies:
            table["dependencies"] = {
                name: spec.to_toml() for name, spec in self.dependencies.items()
            }
        return table


@dataclass(slots=True)
class Manifest:
    """Parsed content of one ``Cargo.toml``.

    A manifest owning a ``package`` is a crate; one without is a virtual
    manifest that only aggregates workspace members.

    Attributes:
        package: The ``[package]`` table, if present.
        workspace: The ``[workspace]`` table, if present.
        dependencies: Dependency tables keyed by section name, see
            DEPENDENCY_SECTIONS. Only sections present in the source appear.
        extra: Every other top-level key.
        key_order: Top-level keys in source order, used when serializing.
        document: The parsed source document. Versions are written back into
            it so everything else keeps its original text. None for manifests
            built in code.
    """

    package: PackageDescriptor | None = None
    workspace: WorkspaceDeclaration | None = None
    dependencies: dict[str, dict[str, DependencySpec]] = field(default_factory=dict)
    extra: TomlTable = field(default_factory=dict)
    key_order: tuple[str, ...] = ()
    document: TOMLDocument | None = field(default=None, repr=False, compare=False)

    @property
    def is_virtual(self) -> bool:
        """Whether this manifest has no ``[package]`` of its own."""
        return self.package is None

    @property
    def members(self) -> list[str]:
        """Declared workspace members, empty when there is no workspace."""
        if self.workspace is None or self.workspace.members is None:
            return []
        return self.workspace.members

    def dependency_tables(self) -> list[dict[str, DependencySpec]]:
        """Return the dependency tables present, in DEPENDENCY_SECTIONS order."""
        return [
            self.dependencies[section]
            for section in DEPENDENCY_SECTIONS
            if section in self.dependencies
        ]

    def to_toml(self) -> TomlTable:
        """Convert to a plain TOML table, ignoring any source document.

        Top-level keys keep their source order; keys that were not in the
        source are appended.
        """
        sections: TomlTable = {}
        if self.package is not None:
            sections["package"] = self.package.to_toml()
        if self.workspace is not None:
            sections["workspace"] = self.workspace.to_toml()
        for section, table in self.dependencies.items():
            sections[section] = {name: spec.to_toml() for name, spec in table.items()}
        sections.update(self.extra)

        document: TomlTable = {
            key: sections.pop(key) for key in self.key_order if key in sections
        }
        document.update(sections)
        return document
