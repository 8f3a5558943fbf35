"""cargo-set exceptions."""

from pathlib import Path


class CargoSetError(Exception):
    """Base exception for cargo-set errors."""


class ManifestError(CargoSetError):
    """Base exception for errors tied to a single manifest file.

    Attributes:
        path: Identifier of the manifest that produced the error.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        """Initialize with error message and manifest path.

        Args:
            message: Human-readable error message.
            path: Identifier of the manifest that produced the error.
        """
        super().__init__(message)
        self.path: Path = path


class ManifestIOError(ManifestError):
    """Raised when a manifest cannot be read or written."""


class ManifestParseError(ManifestError):
    """Raised when a manifest is not valid TOML or has an unexpected shape."""

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message, path=path)
        self.line: int | None = line
        self.column: int | None = column


class ManifestSerializeError(ManifestError):
    """Raised when an updated manifest cannot be encoded back to TOML."""


class VersionBumpError(CargoSetError, ValueError):
    """Raised when a version cannot be bumped.

    Attributes:
        version: The version string that could not be parsed.
    """

    def __init__(self, message: str, *, version: str) -> None:
        """Initialize with error message and offending version."""
        super().__init__(message)
        self.version: str = version


class PackageNotFoundError(CargoSetError, KeyError):
    """Raised when a package is not declared anywhere in a manifest graph.

    Attributes:
        package: Name of the package that was looked up.
    """

    def __init__(self, message: str, *, package: str) -> None:
        """Initialize with error message and package name."""
        super().__init__(message)
        self.package: str = package

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])
