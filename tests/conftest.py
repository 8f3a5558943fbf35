"""Shared test fixtures for cargo-set tests."""

from pathlib import Path

import pytest
from rich.console import Console

from cargo_set.cli import CLIContext
from cargo_set.storage import FakeStorage

ROOT_MANIFEST = """\
[package]
name = "root"
version = "0.1.0"
edition = "2021"

[workspace]
members = ["child", "tools"]

[workspace.dependencies]
child = { version = "0.2.0", path = "child" }
serde = "1.0"

[dependencies]
child.workspace = true
"""

CHILD_MANIFEST = """\
[package]
name = "child"
version = "0.2.0"
edition = "2021"

[dependencies]
serde.workspace = true
"""

TOOLS_MANIFEST = """\
[workspace]
members = ["nested"]

[dependencies]
child = "0.2.0"

[dev-dependencies]
child = { version = "0.2.0", features = ["test-utils"] }
"""


@pytest.fixture
def workspace_storage() -> FakeStorage:
    """In-memory workspace with a crate root, a crate member and a virtual member.

    Structure:
        Cargo.toml          # package "root", workspace with two members
        child/Cargo.toml    # package "child"
        tools/Cargo.toml    # no [package]; depends on child
    """
    return FakeStorage.from_files(
        {
            "Cargo.toml": ROOT_MANIFEST,
            "child/Cargo.toml": CHILD_MANIFEST,
            "tools/Cargo.toml": TOOLS_MANIFEST,
        }
    )


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """Write the same workspace to a real directory and return its root."""
    (tmp_path / "Cargo.toml").write_text(ROOT_MANIFEST)
    (tmp_path / "child").mkdir()
    (tmp_path / "child" / "Cargo.toml").write_text(CHILD_MANIFEST)
    (tmp_path / "tools").mkdir()
    (tmp_path / "tools" / "Cargo.toml").write_text(TOOLS_MANIFEST)
    return tmp_path


@pytest.fixture
def console() -> Console:
    return Console(
        width=120,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture(autouse=True)
def reset_cli_context() -> None:
    CLIContext.reset()
