# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Fake storage for testing.

This module provides a FakeStorage class that implements StorageProtocol
for use in tests without touching the filesystem.
"""

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self


@dataclass(slots=True)
class FakeStorage:
    """In-memory storage for testing.

    Implements StorageProtocol with a lock-guarded dictionary so a single
    instance can be shared between collaborators. Every successful write is
    recorded in ``writes`` in call order.

    Example:
        >>> storage = FakeStorage()
        >>> storage.add_file(Path("Cargo.toml"), b"[package]\\nname = 'a'\\n")
        >>> storage.read(Path("Cargo.toml"))
        b"[package]\\nname = 'a'\\n"
    """

    files: dict[Path, bytes] = field(default_factory=dict)
    writes: list[Path] = field(default_factory=list)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    @classmethod
    def from_files(cls, files: Mapping[str | Path, str | bytes]) -> Self:
        """Create a fake pre-populated with files.

        Args:
            files: Mapping of path to content. String content is UTF-8 encoded.

        Returns:
            A new FakeStorage holding the given files.
        """
        storage = cls()
        for path, content in files.items():
            storage.add_file(Path(path), content)
        return storage

    def add_file(self, path: Path, content: str | bytes) -> None:
        """Create or replace a file without recording a write.

        Args:
            path: Identifier of the file.
            content: File content. Strings are UTF-8 encoded.
        """
        data = content.encode("utf-8") if isinstance(content, str) else content
        with self._lock:
            self.files[path] = data

    def read(self, path: Path) -> bytes:
        """Read the content of a stored file.

        Raises:
            FileNotFoundError: If no file is stored under ``path``.
        """
        with self._lock:
            try:
                return self.files[path]
            except KeyError:
                msg = f"File not found: {path}"
                raise FileNotFoundError(msg) from None

    def write(self, path: Path, content: bytes) -> None:
        """Overwrite a stored file.

        Raises:
            FileNotFoundError: If no file is stored under ``path``.
        """
        with self._lock:
            if path not in self.files:
                msg = f"File not found: {path}"
                raise FileNotFoundError(msg)
            self.files[path] = content
            self.writes.append(path)

    def read_text(self, path: Path) -> str:
        """Read a stored file decoded as UTF-8."""
        return self.read(path).decode("utf-8")
