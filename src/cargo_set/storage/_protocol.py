# ruff: noqa: TC003  # Path needed at runtime for Protocol method bodies
"""Storage protocol for type-safe dependency injection.

This module defines a runtime-checkable Protocol that both FileSystemStorage
and FakeStorage satisfy, so the manifest loader and updater can be exercised
without touching real files.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageProtocol(Protocol):
    """Protocol for byte-level access to named resources.

    Storage never creates resources: writes only overwrite resources that
    already exist.

    Example:
        >>> def touch(storage: StorageProtocol, path: Path) -> None:
        ...     storage.write(path, storage.read(path))
        >>> touch(FileSystemStorage(), Path("Cargo.toml"))
    """

    def read(self, path: Path) -> bytes:
        """Read the full content of a resource.

        Args:
            path: Identifier of the resource.

        Returns:
            The raw bytes of the resource.

        Raises:
            FileNotFoundError: If the resource does not exist.
            OSError: If the resource cannot be read.
        """
        ...

    def write(self, path: Path, content: bytes) -> None:
        """Replace the full content of an existing resource.

        Args:
            path: Identifier of the resource.
            content: The new raw bytes.

        Raises:
            FileNotFoundError: If the resource does not exist.
            OSError: If the resource cannot be written.
        """
        ...
