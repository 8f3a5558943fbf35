import tomllib
from pathlib import Path
from typing import Any

import pytest
from pytest_mock import MockerFixture

from cargo_set.exceptions import ManifestIOError
from cargo_set.manifest import (
    DetailedDependency,
    InheritedDependency,
    InheritedField,
    ManifestGraph,
    ManifestLoader,
    SimpleDependency,
    VersionUpdater,
    parse_manifest,
    update_dependency,
    update_manifest,
)
from cargo_set.storage import FakeStorage

ROOT = Path("Cargo.toml")
CHILD = Path("child/Cargo.toml")
TOOLS = Path("tools/Cargo.toml")

COMMENTED_ROOT = """\
# Workspace root, keep this comment
[package]
name = "root"
version = "0.1.0"

[dependencies]
child.workspace = true  # inherited
serde = { version = "1.0", features = ["derive"] }
"""


def _load(storage: FakeStorage) -> ManifestGraph:
    return ManifestLoader(storage).load(ROOT)


def _stored(storage: FakeStorage, path: Path) -> dict[str, Any]:
    return tomllib.loads(storage.read_text(path))


# =============================================================================
# update_dependency Tests
# =============================================================================


class TestUpdateDependency:
    def test_replaces_simple_version(self) -> None:
        spec = SimpleDependency(version="0.2.0")

        assert update_dependency(spec, "0.3.0") is True
        assert spec == SimpleDependency(version="0.3.0")

    def test_inherited_is_left_unchanged(self) -> None:
        spec = InheritedDependency(extra={"features": ["x"]})

        assert update_dependency(spec, "0.3.0") is False
        assert spec == InheritedDependency(extra={"features": ["x"]})

    def test_sets_detailed_version(self) -> None:
        spec = DetailedDependency(version="0.2.0", extra={"path": "child"})

        assert update_dependency(spec, "0.3.0") is True
        assert spec == DetailedDependency(version="0.3.0", extra={"path": "child"})

    def test_pins_unpinned_detailed_dependency(self) -> None:
        spec = DetailedDependency(version=None, extra={"path": "child"})

        assert update_dependency(spec, "0.3.0") is True
        assert spec.version == "0.3.0"

    def test_same_version_reports_no_change(self) -> None:
        spec = SimpleDependency(version="0.3.0")

        assert update_dependency(spec, "0.3.0") is False


# =============================================================================
# update_manifest Tests
# =============================================================================


class TestUpdateManifest:
    def test_sets_own_version_when_name_matches(self) -> None:
        manifest = parse_manifest(b'[package]\nname = "a"\nversion = "1.0.0"\n', path=ROOT)

        assert update_manifest(manifest, "a", "2.0.0") is True
        assert manifest.package is not None
        assert manifest.package.version == "2.0.0"

    def test_replaces_inherited_package_version(self) -> None:
        manifest = parse_manifest(
            b'[package]\nname = "a"\nversion.workspace = true\n', path=ROOT
        )

        _ = update_manifest(manifest, "a", "2.0.0")

        assert manifest.package is not None
        assert manifest.package.version == "2.0.0"
        assert not isinstance(manifest.package.version, InheritedField)

    def test_leaves_other_package_version(self) -> None:
        manifest = parse_manifest(b'[package]\nname = "a"\nversion = "1.0.0"\n', path=ROOT)

        assert update_manifest(manifest, "b", "2.0.0") is False
        assert manifest.package is not None
        assert manifest.package.version == "1.0.0"

    def test_updates_dependencies_of_crate_manifest(self) -> None:
        manifest = parse_manifest(
            b'[package]\nname = "a"\nversion = "1.0.0"\n\n[dependencies]\nb = "0.1"\n',
            path=ROOT,
        )

        assert update_manifest(manifest, "b", "0.2") is True
        assert manifest.dependencies["dependencies"]["b"] == SimpleDependency("0.2")

    def test_updates_every_dependency_section(self) -> None:
        manifest = parse_manifest(
            b'[dependencies]\nb = "0.1"\n\n'
            b'[dev-dependencies]\nb = { version = "0.1" }\n\n'
            b'[build-dependencies]\nb = "0.1"\n',
            path=ROOT,
        )

        _ = update_manifest(manifest, "b", "0.2")

        assert manifest.dependencies == {
            "dependencies": {"b": SimpleDependency("0.2")},
            "dev-dependencies": {"b": DetailedDependency(version="0.2")},
            "build-dependencies": {"b": SimpleDependency("0.2")},
        }

    def test_updates_workspace_dependencies(self) -> None:
        manifest = parse_manifest(
            b'[workspace]\nmembers = []\n\n[workspace.dependencies]\nb = "0.1"\n',
            path=ROOT,
        )

        assert update_manifest(manifest, "b", "0.2") is True
        assert manifest.workspace is not None
        assert manifest.workspace.dependencies == {"b": SimpleDependency("0.2")}


# =============================================================================
# VersionUpdater.apply Tests
# =============================================================================


class TestVersionUpdaterApply:
    def test_updates_member_package_version_in_memory(
        self, workspace_storage: FakeStorage
    ) -> None:
        graph = _load(workspace_storage)

        _ = VersionUpdater(workspace_storage).apply(graph, "child", "0.3.0")

        assert graph.members is not None
        child = graph.members[CHILD].package
        assert child is not None
        assert child.version == "0.3.0"
        assert graph.root.package is not None
        assert graph.root.package.version == "0.1.0"

    def test_propagates_by_dependency_variant(
        self, workspace_storage: FakeStorage
    ) -> None:
        graph = _load(workspace_storage)

        _ = VersionUpdater(workspace_storage).apply(graph, "child", "0.3.0")

        assert graph.root.workspace is not None
        assert graph.root.workspace.dependencies["child"] == DetailedDependency(
            version="0.3.0", extra={"path": "child"}
        )
        assert graph.root.dependencies["dependencies"]["child"] == (
            InheritedDependency()
        )
        assert graph.members is not None
        tools = graph.members[TOOLS]
        assert tools.dependencies["dependencies"]["child"] == SimpleDependency(
            "0.3.0"
        )
        assert tools.dependencies["dev-dependencies"]["child"] == DetailedDependency(
            version="0.3.0", extra={"features": ["test-utils"]}
        )

    def test_writes_root_with_new_workspace_dependency(
        self, workspace_storage: FakeStorage
    ) -> None:
        graph = _load(workspace_storage)

        _ = VersionUpdater(workspace_storage).apply(graph, "child", "0.3.0")

        root = _stored(workspace_storage, ROOT)
        assert root["workspace"]["dependencies"]["child"] == {
            "version": "0.3.0",
            "path": "child",
        }
        assert root["dependencies"]["child"] == {"workspace": True}
        assert root["package"]["version"] == "0.1.0"

    def test_writes_virtual_member(self, workspace_storage: FakeStorage) -> None:
        graph = _load(workspace_storage)

        _ = VersionUpdater(workspace_storage).apply(graph, "child", "0.3.0")

        tools = _stored(workspace_storage, TOOLS)
        assert tools["dependencies"]["child"] == "0.3.0"
        assert tools["dev-dependencies"]["child"]["version"] == "0.3.0"
        assert tools["workspace"]["members"] == ["nested"]

    def test_does_not_write_crate_member(self, workspace_storage: FakeStorage) -> None:
        before = workspace_storage.read(CHILD)
        graph = _load(workspace_storage)

        report = VersionUpdater(workspace_storage).apply(graph, "child", "0.3.0")

        assert workspace_storage.read(CHILD) == before
        assert _stored(workspace_storage, CHILD)["package"]["version"] == "0.2.0"
        assert CHILD not in workspace_storage.writes
        assert report.unwritten == [CHILD]

    def test_report_lists_changed_and_written(
        self, workspace_storage: FakeStorage
    ) -> None:
        graph = _load(workspace_storage)

        report = VersionUpdater(workspace_storage).apply(graph, "child", "0.3.0")

        assert report.package == "child"
        assert report.version == "0.3.0"
        assert report.changed == [ROOT, CHILD, TOOLS]
        assert report.written == [ROOT, TOOLS]
        assert workspace_storage.writes == [ROOT, TOOLS]

    def test_unrelated_package_only_rewrites_root(
        self, workspace_storage: FakeStorage
    ) -> None:
        originals = dict(workspace_storage.files)
        graph = _load(workspace_storage)

        report = VersionUpdater(workspace_storage).apply(graph, "unrelated", "9.9.9")

        assert report.changed == []
        assert workspace_storage.writes == [ROOT]
        assert workspace_storage.files == originals

    def test_unrelated_package_keeps_root_formatting(self) -> None:
        storage = FakeStorage.from_files({"Cargo.toml": COMMENTED_ROOT})
        graph = _load(storage)

        _ = VersionUpdater(storage).apply(graph, "unrelated", "9.9.9")

        assert storage.writes == [ROOT]
        assert storage.read_text(ROOT) == COMMENTED_ROOT

    def test_targeted_update_changes_only_version_text(self) -> None:
        storage = FakeStorage.from_files({"Cargo.toml": COMMENTED_ROOT})
        graph = _load(storage)

        _ = VersionUpdater(storage).apply(graph, "serde", "1.0.200")

        assert storage.read_text(ROOT) == COMMENTED_ROOT.replace(
            'serde = { version = "1.0", features',
            'serde = { version = "1.0.200", features',
        )

    def test_single_crate_without_workspace(self) -> None:
        storage = FakeStorage.from_files(
            {"Cargo.toml": '[package]\nname = "solo"\nversion = "1.0.0"\n'}
        )
        graph = _load(storage)

        report = VersionUpdater(storage).apply(graph, "solo", "1.1.0")

        assert report.written == [ROOT]
        assert _stored(storage, ROOT)["package"]["version"] == "1.1.0"

    def test_version_string_is_written_through_unchanged(self) -> None:
        storage = FakeStorage.from_files(
            {"Cargo.toml": '[package]\nname = "solo"\nversion = "1.0.0"\n'}
        )
        graph = _load(storage)

        _ = VersionUpdater(storage).apply(graph, "solo", "not a version!")

        assert _stored(storage, ROOT)["package"]["version"] == "not a version!"


class TestVersionUpdaterErrors:
    def test_write_failure_raises_io_error_with_path(
        self, workspace_storage: FakeStorage, mocker: MockerFixture
    ) -> None:
        graph = _load(workspace_storage)
        _ = mocker.patch.object(
            FakeStorage, "write", side_effect=PermissionError("read-only")
        )

        with pytest.raises(ManifestIOError) as exc_info:
            _ = VersionUpdater(workspace_storage).apply(graph, "child", "0.3.0")

        assert exc_info.value.path == ROOT
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_earlier_writes_are_kept_when_later_write_fails(
        self, workspace_storage: FakeStorage
    ) -> None:
        graph = _load(workspace_storage)
        # The virtual member disappears between load and write
        del workspace_storage.files[TOOLS]

        with pytest.raises(ManifestIOError) as exc_info:
            _ = VersionUpdater(workspace_storage).apply(graph, "child", "0.3.0")

        assert exc_info.value.path == TOOLS
        assert workspace_storage.writes == [ROOT]
        root = _stored(workspace_storage, ROOT)
        assert root["workspace"]["dependencies"]["child"]["version"] == "0.3.0"
