# ruff: noqa: TC003  # Path needed at runtime for method signatures
"""Storage backed by the local filesystem."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class FileSystemStorage:
    """Read and overwrite files on the local filesystem.

    Implements StorageProtocol.
    """

    def read(self, path: Path) -> bytes:
        """Read the full content of a file.

        Args:
            path: Path to the file.

        Returns:
            The raw bytes of the file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        return path.read_bytes()

    def write(self, path: Path, content: bytes) -> None:
        """Overwrite an existing file.

        Args:
            path: Path to the file.
            content: The new raw bytes.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        if not path.is_file():
            msg = f"No such file: {path}"
            raise FileNotFoundError(msg)
        _ = path.write_bytes(content)
