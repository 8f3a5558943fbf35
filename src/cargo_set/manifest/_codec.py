# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false, reportUnknownMemberType=false
# ruff: noqa: TC003  # Path needed at runtime for error context
"""TOML reading and writing for Cargo manifests.

Parsing is two-step: ``tomlkit`` turns bytes into a format-preserving
document, then the ``_parse_*`` helpers build the typed views in ``_models``
from its plain values. Anything with an unexpected shape is reported as
ManifestParseError against the manifest path.

Writing goes the other way: versions held by the typed views are copied into
the source document only where they differ, so comments, key styles and
layout survive, and a manifest nothing touched is written back byte for byte.
"""

from pathlib import Path
from typing import Any, assert_never

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import ParseError

from cargo_set.exceptions import ManifestParseError, ManifestSerializeError
from cargo_set.manifest._models import (
    DEPENDENCY_SECTIONS,
    DependencySpec,
    DetailedDependency,
    InheritedDependency,
    InheritedField,
    Manifest,
    PackageDescriptor,
    SimpleDependency,
    TomlTable,
    WorkspaceDeclaration,
)


def _expect_table(value: Any, key: str, path: Path) -> TomlTable:
    if not isinstance(value, dict):
        msg = f"Expected '{key}' to be a table, got {type(value).__name__}"
        raise ManifestParseError(msg, path=path)
    return value


def _is_workspace_reference(value: TomlTable) -> bool:
    return value.get("workspace") is True


def _parse_dependency(name: str, value: Any, path: Path) -> DependencySpec:
    """Parse a single dependency entry.

    Args:
        name: Dependency name, used in error messages.
        value: The raw TOML value.
        path: Manifest path for error context.

    Returns:
        The matching dependency variant.

    Raises:
        ManifestParseError: If the entry is neither a string nor a table, or
            its ``version`` is not a string.
    """
    if isinstance(value, str):
        return SimpleDependency(version=value)

    table = _expect_table(value, f"dependency {name}", path)
    if _is_workspace_reference(table):
        return InheritedDependency(
            extra={k: v for k, v in table.items() if k != "workspace"}
        )

    version = table.get("version")
    if version is not None and not isinstance(version, str):
        msg = f"Expected version of dependency '{name}' to be a string"
        raise ManifestParseError(msg, path=path)
    return DetailedDependency(
        version=version,
        extra={k: v for k, v in table.items() if k != "version"},
    )


def _parse_dependencies(
    value: Any, key: str, path: Path
) -> dict[str, DependencySpec]:
    table = _expect_table(value, key, path)
    return {name: _parse_dependency(name, spec, path) for name, spec in table.items()}


def _parse_package(value: Any, path: Path) -> PackageDescriptor:
    """Parse the ``[package]`` table.

    Raises:
        ManifestParseError: If ``name`` is missing or ``version`` has an
            unsupported shape.
    """
    table = _expect_table(value, "package", path)

    name = table.get("name")
    if not isinstance(name, str):
        msg = "Expected 'package.name' to be a string"
        raise ManifestParseError(msg, path=path)

    raw_version = table.get("version")
    version: str | InheritedField | None
    if raw_version is None or isinstance(raw_version, str):
        version = raw_version
    elif isinstance(raw_version, dict) and _is_workspace_reference(raw_version):
        version = InheritedField()
    else:
        msg = "Expected 'package.version' to be a string or { workspace = true }"
        raise ManifestParseError(msg, path=path)

    return PackageDescriptor(
        name=name,
        version=version,
        extra={k: v for k, v in table.items() if k not in ("name", "version")},
    )


def _parse_workspace(value: Any, path: Path) -> WorkspaceDeclaration:
    """Parse the ``[workspace]`` table.

    Raises:
        ManifestParseError: If ``members`` is not a list of strings or
            ``dependencies`` is malformed.
    """
    table = _expect_table(value, "workspace", path)
    extra = {k: v for k, v in table.items() if k not in ("members", "dependencies")}

    members = table.get("members")
    if members is not None and (
        not isinstance(members, list)
        or not all(isinstance(member, str) for member in members)
    ):
        msg = "Expected 'workspace.members' to be a list of strings"
        raise ManifestParseError(msg, path=path)

    dependencies: dict[str, DependencySpec] = {}
    if "dependencies" in table:
        dependencies = _parse_dependencies(
            table["dependencies"], "workspace.dependencies", path
        )
        # An empty table has no entries to rewrite; keep it as-is
        if not dependencies:
            extra["dependencies"] = {}

    return WorkspaceDeclaration(
        members=list(members) if members is not None else None,
        dependencies=dependencies,
        extra=extra,
    )


def manifest_from_toml(
    data: TomlTable, *, path: Path, document: TOMLDocument | None = None
) -> Manifest:
    """Build a Manifest from an already-decoded TOML document.

    Args:
        data: The decoded document as plain values.
        path: Manifest path for error context.
        document: The source document ``data`` was taken from, if any.

    Returns:
        The typed manifest.

    Raises:
        ManifestParseError: If a known section has an unexpected shape.
    """
    known = {"package", "workspace", *DEPENDENCY_SECTIONS}
    return Manifest(
        package=_parse_package(data["package"], path) if "package" in data else None,
        workspace=(
            _parse_workspace(data["workspace"], path) if "workspace" in data else None
        ),
        dependencies={
            section: _parse_dependencies(data[section], section, path)
            for section in DEPENDENCY_SECTIONS
            if section in data
        },
        extra={k: v for k, v in data.items() if k not in known},
        key_order=tuple(data),
        document=document,
    )


def parse_manifest(content: bytes, *, path: Path) -> Manifest:
    """Decode and parse the raw bytes of a manifest.

    Args:
        content: Raw file content.
        path: Manifest path for error context.

    Returns:
        The typed manifest, holding on to its source document.

    Raises:
        ManifestParseError: If the content is not UTF-8, not valid TOML, or a
            known section has an unexpected shape.
    """
    try:
        document = tomlkit.parse(content.decode("utf-8"))
    except UnicodeDecodeError as e:
        msg = f"Failed to decode manifest as UTF-8: {e}"
        raise ManifestParseError(msg, path=path) from e
    except ParseError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ManifestParseError(msg, path=path, line=e.line, column=e.col) from e

    return manifest_from_toml(document.unwrap(), path=path, document=document)


def _sync_dependencies(table: Any, specs: dict[str, DependencySpec]) -> None:
    for name, spec in specs.items():
        match spec:
            case SimpleDependency():
                if table[name] != spec.version:
                    table[name] = spec.version
            case InheritedDependency():
                pass
            case DetailedDependency():
                entry = table[name]
                if spec.version is not None and entry.get("version") != spec.version:
                    entry["version"] = spec.version
            case _:
                assert_never(spec)


def _sync_document(manifest: Manifest, document: TOMLDocument) -> None:
    """Copy the versions held by the typed views into the source document.

    Only values that differ are assigned. tomlkit keeps the position and
    trailing comment of a replaced value.
    """
    package = manifest.package
    if package is not None and isinstance(package.version, str):
        table = document["package"]
        if table.get("version") != package.version:
            table["version"] = package.version

    for section, specs in manifest.dependencies.items():
        _sync_dependencies(document[section], specs)

    if manifest.workspace is not None and manifest.workspace.dependencies:
        _sync_dependencies(
            document["workspace"]["dependencies"], manifest.workspace.dependencies
        )


def serialize_manifest(manifest: Manifest, *, path: Path) -> bytes:
    """Encode a manifest back to TOML bytes.

    A manifest parsed from source is written as its source document with
    changed versions replaced in place. One built in code is rendered from
    ``Manifest.to_toml``.

    Args:
        manifest: The manifest to encode.
        path: Manifest path for error context.

    Returns:
        UTF-8 encoded TOML.

    Raises:
        ManifestSerializeError: If the document holds values TOML cannot
            represent.
    """
    try:
        if manifest.document is None:
            return tomlkit.dumps(manifest.to_toml()).encode("utf-8")
        _sync_document(manifest, manifest.document)
        return manifest.document.as_string().encode("utf-8")
    except (TypeError, ValueError) as e:
        msg = f"Failed to serialize manifest: {e}"
        raise ManifestSerializeError(msg, path=path) from e
