"""In-memory backend: one nested-dict tree per named instance."""

from __future__ import annotations

import logging
from typing import Any

from .base import DirStat, FileStat, Stat
from .config import DEFAULT_CHUNK_SIZE, InMemoryConfig, directory_options, make_config
from .errors import (
    DirectoryNotEmptyError,
    NotFoundError,
    PathConflictError,
    UnsupportedError,
)
from .filesystem import Filesystem
from .owner import StateOwner
from .paths import MISSING, get_in, normalize, pop_in, put_in, resolve
from .registry import registry
from .stream import ReadStream, WriteStream, to_bytes

logger = logging.getLogger(__name__)


class InMemoryAdapter:
    """Adapter keeping files in a process-local tree.

    Directories are dicts mapping segment names to nodes; files are bytes.
    Each configured instance owns one tree, held by a ``StateOwner`` that
    runs every operation one at a time. Compound operations (move, copy,
    delete_directory) run as a single call on the owner, so no other
    caller can observe them half done. Nothing is persisted beyond the
    lifetime of the process, and modification times are always 0.

    Example:
        >>> fs = InMemoryAdapter.configure(name="scratch")
        >>> fs.start()
        >>> fs.write("test.txt", b"Hello World")
        >>> fs.read("test.txt")
        b'Hello World'
        >>> fs.stop()
    """

    @classmethod
    def configure(cls, **options: Any) -> Filesystem:
        """Build a filesystem for an instance. Does not start it.

        Args:
            **options: ``name`` (required) and ``timeout`` (optional).
        """
        return Filesystem(cls, make_config("in_memory", **options))

    @classmethod
    def starts_processes(cls) -> bool:
        return True

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @classmethod
    def start(cls, config: InMemoryConfig) -> None:
        """Create the instance's empty tree and register its owner.

        Raises:
            AlreadyStartedError: If an instance with this name is running.
        """
        owner = StateOwner(config.name, dict, timeout=config.timeout)
        try:
            registry.register((cls, config.name), owner)
        except Exception:
            owner.stop()
            raise
        logger.debug("Started in-memory filesystem %r", config.name)

    @classmethod
    def stop(cls, config: InMemoryConfig) -> None:
        """Unregister the instance and discard its tree.

        Raises:
            ProcessUnavailableError: If the instance is not running.
        """
        owner = cls._owner(config)
        registry.unregister((cls, config.name))
        owner.stop()
        logger.debug("Stopped in-memory filesystem %r", config.name)

    @classmethod
    def _owner(cls, config: InMemoryConfig) -> StateOwner:
        return registry.lookup((cls, config.name))

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    @classmethod
    def write(cls, config: InMemoryConfig, path: str, contents: bytes | str) -> None:
        """Replace the file at path, creating parent directories.

        Raises:
            TypeError: If contents is neither bytes-like nor str.
            PathConflictError: If path is a directory (or the root) or a
                parent segment is a file.
        """
        data = to_bytes(contents)
        steps = resolve(path, dict)

        def _write(tree: dict) -> None:
            if isinstance(get_in(tree, resolve(path)), dict):
                raise PathConflictError(path, "Is a directory")
            put_in(tree, steps, data, path)

        cls._owner(config).call(_write)

    @classmethod
    def read(cls, config: InMemoryConfig, path: str) -> bytes:
        """Return the contents of the file at path.

        Raises:
            NotFoundError: If path is not a file.
        """
        steps = resolve(path)
        node = cls._owner(config).call(lambda tree: get_in(tree, steps))
        if isinstance(node, bytes):
            return node
        raise NotFoundError(path)

    @classmethod
    def write_stream(
        cls, config: InMemoryConfig, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> WriteStream:
        return WriteStream(cls, config, path, chunk_size)

    @classmethod
    def read_stream(
        cls, config: InMemoryConfig, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> ReadStream:
        # Surface a stopped instance now rather than on first iteration.
        cls._owner(config)
        return ReadStream(cls, config, path, chunk_size)

    @classmethod
    def delete(cls, config: InMemoryConfig, path: str) -> None:
        """Remove whatever is at path. Absent paths are a no-op."""
        steps = resolve(path)
        cls._owner(config).call(lambda tree: pop_in(tree, steps))

    @classmethod
    def move(cls, config: InMemoryConfig, source: str, destination: str) -> None:
        """Move a file. Both steps happen in one owner call.

        Raises:
            NotFoundError: If source is not a file.
            PathConflictError: If destination is a directory or below a file.
        """
        src_steps = resolve(source)
        dst_steps = resolve(destination, dict)
        same = normalize(source) == normalize(destination)

        def _move(tree: dict) -> None:
            contents = cls._checked_transfer(tree, source, destination)
            if same:
                return
            put_in(tree, dst_steps, contents, destination)
            pop_in(tree, src_steps)

        cls._owner(config).call(_move)

    @classmethod
    def copy(cls, config: InMemoryConfig, source: str, destination: str) -> None:
        """Copy a file in one owner call.

        Raises:
            NotFoundError: If source is not a file.
            PathConflictError: If destination is a directory or below a file.
        """
        dst_steps = resolve(destination, dict)

        def _copy(tree: dict) -> None:
            contents = cls._checked_transfer(tree, source, destination)
            put_in(tree, dst_steps, contents, destination)

        cls._owner(config).call(_copy)

    @staticmethod
    def _checked_transfer(tree: dict, source: str, destination: str) -> bytes:
        """Validate a move/copy before anything is mutated."""
        contents = get_in(tree, resolve(source))
        if not isinstance(contents, bytes):
            raise NotFoundError(source)
        if isinstance(get_in(tree, resolve(destination)), dict):
            raise PathConflictError(destination, "Is a directory")
        return contents

    @classmethod
    def copy_across(
        cls,
        source_config: InMemoryConfig,
        source: str,
        destination_config: InMemoryConfig,
        destination: str,
    ) -> None:
        """Copies between two in-memory instances are not supported.

        Raises:
            UnsupportedError: Always.
        """
        logger.warning(
            "Refusing copy from %r to %r: instances do not share storage",
            source_config.name,
            destination_config.name,
        )
        raise UnsupportedError(
            f"Cannot copy between in-memory instances "
            f"{source_config.name!r} and {destination_config.name!r}"
        )

    @classmethod
    def file_exists(cls, config: InMemoryConfig, path: str) -> bool:
        steps = resolve(path)
        node = cls._owner(config).call(lambda tree: get_in(tree, steps))
        return isinstance(node, bytes)

    # -------------------------------------------------------------------------
    # Directories
    # -------------------------------------------------------------------------

    @classmethod
    def list_contents(cls, config: InMemoryConfig, path: str) -> list[Stat]:
        """Stats for the direct children of the directory at path.

        Returns an empty list when path is absent or a file.
        """
        steps = resolve(path)

        def _list(tree: dict) -> list[Stat]:
            node = get_in(tree, steps)
            if not isinstance(node, dict):
                return []
            stats: list[Stat] = []
            for name, child in node.items():
                if isinstance(child, dict):
                    stats.append(DirStat(name=name, size=0, mtime=0))
                else:
                    stats.append(FileStat(name=name, size=len(child), mtime=0))
            return sorted(stats, key=lambda s: s.name)

        return cls._owner(config).call(_list)

    @classmethod
    def create_directory(cls, config: InMemoryConfig, path: str) -> None:
        """Create a directory and any missing parents. Idempotent.

        Raises:
            PathConflictError: If path or one of its parents is a file.
        """
        steps = resolve(path, dict)

        def _mkdir(tree: dict) -> None:
            node = get_in(tree, resolve(path))
            if isinstance(node, dict):
                return
            if isinstance(node, bytes):
                raise PathConflictError(path, "File exists")
            put_in(tree, steps, {}, path)

        cls._owner(config).call(_mkdir)

    @classmethod
    def delete_directory(
        cls, config: InMemoryConfig, path: str, recursive: bool = False
    ) -> None:
        """Remove the directory at path.

        Absent paths succeed trivially. Deleting the root empties it. A file
        is never treated as a directory: it raises ``PathConflictError``
        (ENOTDIR) whatever the value of recursive, instead of being reported
        as an existing entry (EEXIST).

        Args:
            config: Instance configuration.
            path: Directory path.
            recursive: Also remove a non-empty directory with its contents.

        Raises:
            DirectoryNotEmptyError: If the directory has children and
                recursive is False. Nothing is removed.
            PathConflictError: If path is a file, even when recursive is True.
            ValueError: If recursive is not a bool.
        """
        recursive = directory_options(recursive=recursive).recursive
        steps = resolve(path)

        def _rmdir(tree: dict) -> None:
            node = get_in(tree, steps)
            if node is MISSING:
                return
            if not isinstance(node, dict):
                raise PathConflictError(path)
            if node and not recursive:
                raise DirectoryNotEmptyError(path)
            pop_in(tree, steps)

        cls._owner(config).call(_rmdir)
