"""Stat model and the adapter contract.

Defines the metadata returned by directory listings and the capability set
every storage backend implements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .filesystem import Filesystem
    from .stream import ReadStream, WriteStream


@dataclass
class Stat:
    """Metadata for a single entry of a directory listing.

    Attributes:
        name: Entry name (last path segment).
        size: Size in bytes (0 for directories).
        mtime: Modification time as a POSIX timestamp. Backends that do not
            track time report 0.
    """

    name: str
    size: int = 0
    mtime: int = 0

    @property
    def is_dir(self) -> bool:
        return False


@dataclass
class FileStat(Stat):
    """Stat for a file."""


@dataclass
class DirStat(Stat):
    """Stat for a directory."""

    @property
    def is_dir(self) -> bool:
        return True


@runtime_checkable
class Adapter(Protocol):
    """Capability set of a storage backend.

    Adapters are used as values (the class itself, not an instance). Every
    operation receives the backend's configuration first, so one adapter
    class serves any number of configured instances.

    Errors are raised, never returned:

    - ``NotFoundError`` when a read, move or copy source is not a file.
    - ``DirectoryNotEmptyError`` for a non-recursive delete of a
      non-empty directory.
    - ``UnsupportedError`` for copies between backend instances that
      cannot share storage.
    - ``ProcessUnavailableError`` when the targeted instance is not running.

    A merely absent path is never an error for write, delete,
    create_directory, file_exists and list_contents.
    """

    @classmethod
    def configure(cls, **options: Any) -> Filesystem:
        """Build a filesystem value from options. Touches no storage."""
        ...

    @classmethod
    def starts_processes(cls) -> bool:
        """True if instances own a long-lived worker that must be started."""
        ...

    @classmethod
    def start(cls, config: Any) -> None:
        """Start the instance described by config."""
        ...

    @classmethod
    def stop(cls, config: Any) -> None:
        """Stop the instance described by config."""
        ...

    @classmethod
    def write(cls, config: Any, path: str, contents: bytes | str) -> None:
        """Replace the file at path with contents."""
        ...

    @classmethod
    def write_stream(
        cls, config: Any, path: str, chunk_size: int = 1024
    ) -> WriteStream:
        """Open a buffered sink committing to path on close."""
        ...

    @classmethod
    def read(cls, config: Any, path: str) -> bytes:
        """Return the contents of the file at path."""
        ...

    @classmethod
    def read_stream(
        cls, config: Any, path: str, chunk_size: int = 1024
    ) -> ReadStream:
        """Return a lazy chunked source for path."""
        ...

    @classmethod
    def delete(cls, config: Any, path: str) -> None:
        """Remove path if present."""
        ...

    @classmethod
    def move(cls, config: Any, source: str, destination: str) -> None:
        """Move a file within one instance."""
        ...

    @classmethod
    def copy(cls, config: Any, source: str, destination: str) -> None:
        """Copy a file within one instance."""
        ...

    @classmethod
    def copy_across(
        cls,
        source_config: Any,
        source: str,
        destination_config: Any,
        destination: str,
    ) -> None:
        """Copy a file between two instances of this adapter."""
        ...

    @classmethod
    def file_exists(cls, config: Any, path: str) -> bool:
        """True if path is a file."""
        ...

    @classmethod
    def list_contents(cls, config: Any, path: str) -> list[Stat]:
        """Stats for the direct children of a directory."""
        ...

    @classmethod
    def create_directory(cls, config: Any, path: str) -> None:
        """Create a directory and any missing parents."""
        ...

    @classmethod
    def delete_directory(
        cls, config: Any, path: str, recursive: bool = False
    ) -> None:
        """Remove a directory."""
        ...
