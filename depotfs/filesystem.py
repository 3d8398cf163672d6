"""Caller-facing API: a configured filesystem and the operations on it.

A ``Filesystem`` pairs an adapter with its configuration. The module-level
functions take a filesystem first and forward to its adapter, so calling
code never depends on which backend it talks to:

    >>> from depotfs import InMemoryAdapter, running
    >>> import depotfs
    >>> fs = InMemoryAdapter.configure(name="docs")
    >>> with running(fs):
    ...     depotfs.write(fs, "readme.txt", b"hi")
    ...     depotfs.read(fs, "readme.txt")
    b'hi'
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator

from .config import DEFAULT_CHUNK_SIZE
from .errors import UnsupportedError

if TYPE_CHECKING:
    from .base import Adapter, Stat
    from .stream import ReadStream, WriteStream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Filesystem:
    """An adapter bound to one configuration.

    Attributes:
        adapter: Adapter class implementing the operations.
        config: Configuration value produced by ``adapter.configure``.
    """

    adapter: type[Adapter]
    config: Any

    # Bound conveniences mirroring the module-level functions.

    def start(self) -> None:
        start(self)

    def stop(self) -> None:
        stop(self)

    def write(self, path: str, contents: bytes | str) -> None:
        write(self, path, contents)

    def write_stream(self, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> WriteStream:
        return write_stream(self, path, chunk_size=chunk_size)

    def read(self, path: str) -> bytes:
        return read(self, path)

    def read_stream(self, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> ReadStream:
        return read_stream(self, path, chunk_size=chunk_size)

    def delete(self, path: str) -> None:
        delete(self, path)

    def move(self, source: str, destination: str) -> None:
        move(self, source, destination)

    def copy(self, source: str, destination: str) -> None:
        copy(self, source, destination)

    def file_exists(self, path: str) -> bool:
        return file_exists(self, path)

    def list_contents(self, path: str = "/") -> list[Stat]:
        return list_contents(self, path)

    def create_directory(self, path: str) -> None:
        create_directory(self, path)

    def delete_directory(self, path: str, recursive: bool = False) -> None:
        delete_directory(self, path, recursive=recursive)


# -----------------------------------------------------------------------------
# Lifecycle
# -----------------------------------------------------------------------------


def start(filesystem: Filesystem) -> None:
    """Start the backend instance if its adapter runs one."""
    if filesystem.adapter.starts_processes():
        filesystem.adapter.start(filesystem.config)


def stop(filesystem: Filesystem) -> None:
    """Stop the backend instance if its adapter runs one."""
    if filesystem.adapter.starts_processes():
        filesystem.adapter.stop(filesystem.config)


@contextmanager
def running(filesystem: Filesystem) -> Iterator[Filesystem]:
    """Run a backend instance for the duration of a with-block.

    Example::

        with running(InMemoryAdapter.configure(name="tmp")) as fs:
            fs.write("a.txt", b"data")
        # the instance and its contents are gone here
    """
    start(filesystem)
    try:
        yield filesystem
    finally:
        stop(filesystem)


# -----------------------------------------------------------------------------
# Operations
# -----------------------------------------------------------------------------


def write(filesystem: Filesystem, path: str, contents: bytes | str) -> None:
    filesystem.adapter.write(filesystem.config, path, contents)


def write_stream(
    filesystem: Filesystem, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> WriteStream:
    return filesystem.adapter.write_stream(filesystem.config, path, chunk_size)


def read(filesystem: Filesystem, path: str) -> bytes:
    return filesystem.adapter.read(filesystem.config, path)


def read_stream(
    filesystem: Filesystem, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> ReadStream:
    return filesystem.adapter.read_stream(filesystem.config, path, chunk_size)


def delete(filesystem: Filesystem, path: str) -> None:
    filesystem.adapter.delete(filesystem.config, path)


def move(filesystem: Filesystem, source: str, destination: str) -> None:
    filesystem.adapter.move(filesystem.config, source, destination)


def copy(filesystem: Filesystem, source: str, destination: str) -> None:
    filesystem.adapter.copy(filesystem.config, source, destination)


def _instance_key(filesystem: Filesystem) -> tuple[Any, Any]:
    """Identify the backend instance a filesystem value addresses."""
    return (filesystem.adapter, getattr(filesystem.config, "name", filesystem.config))


def copy_between(
    source_filesystem: Filesystem,
    source: str,
    destination_filesystem: Filesystem,
    destination: str,
) -> None:
    """Copy a file from one filesystem to another.

    Copies within one backend instance use the adapter's own copy, even when
    the two filesystem values differ in other options (such as timeout).
    Otherwise the source adapter decides whether it can copy across
    instances; mixing adapters is never supported.

    Raises:
        UnsupportedError: If the two filesystems cannot share storage.
        NotFoundError: If source is not a file.
    """
    if _instance_key(source_filesystem) == _instance_key(destination_filesystem):
        copy(source_filesystem, source, destination)
        return
    if source_filesystem.adapter is not destination_filesystem.adapter:
        logger.warning(
            "Refusing copy between %s and %s",
            source_filesystem.adapter.__name__,
            destination_filesystem.adapter.__name__,
        )
        raise UnsupportedError(
            f"Cannot copy from {source_filesystem.adapter.__name__} "
            f"to {destination_filesystem.adapter.__name__}"
        )
    source_filesystem.adapter.copy_across(
        source_filesystem.config, source, destination_filesystem.config, destination
    )


def file_exists(filesystem: Filesystem, path: str) -> bool:
    return filesystem.adapter.file_exists(filesystem.config, path)


def list_contents(filesystem: Filesystem, path: str = "/") -> list[Stat]:
    return filesystem.adapter.list_contents(filesystem.config, path)


def create_directory(filesystem: Filesystem, path: str) -> None:
    filesystem.adapter.create_directory(filesystem.config, path)


def delete_directory(filesystem: Filesystem, path: str, recursive: bool = False) -> None:
    filesystem.adapter.delete_directory(filesystem.config, path, recursive=recursive)
