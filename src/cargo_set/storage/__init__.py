"""Storage backends for manifest files.

Classes:
    StorageProtocol: Runtime-checkable protocol for dependency injection.
    FileSystemStorage: Reads and overwrites files on the local filesystem.
    FakeStorage: Lock-guarded in-memory storage for tests.

Example:
    >>> from cargo_set.storage import FakeStorage
    >>> storage = FakeStorage.from_files({"Cargo.toml": "[workspace]\\n"})
    >>> storage.read(Path("Cargo.toml"))
    b'[workspace]\\n'
"""

from cargo_set.storage._fake import FakeStorage
from cargo_set.storage._filesystem import FileSystemStorage
from cargo_set.storage._protocol import StorageProtocol

__all__ = [
    "FakeStorage",
    "FileSystemStorage",
    "StorageProtocol",
]
