"""Configuration for filesystem backends and operations.

Provides configuration dataclasses and factory functions that validate
keyword options before anything touches storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DEFAULT_CHUNK_SIZE = 1024
DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True)
class InMemoryConfig:
    """Configuration for an in-memory backend instance.

    Attributes:
        name: Unique symbolic name of the instance.
        timeout: Seconds a caller waits for the instance to answer.
            None means wait forever.
    """

    name: str
    timeout: float | None = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class StreamOptions:
    """Options for read and write streams.

    Attributes:
        chunk_size: Size in bytes of the chunks a read stream yields.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class DirectoryOptions:
    """Options for directory deletion.

    Attributes:
        recursive: Delete non-empty directories with their contents.
    """

    recursive: bool = False


# Type alias for all backend configs
BackendConfig = InMemoryConfig


def make_config(type: Literal["in_memory"] = "in_memory", **kwargs) -> BackendConfig:
    """Build a backend configuration.

    Args:
        type: Backend type. Only "in_memory" ships with depotfs.
        **kwargs: Options for the backend type.
            For type="in_memory":
                - name (str): Required. Unique instance name.
                - timeout (float | None): Optional. Call timeout in seconds.

    Returns:
        Configuration value for the backend.

    Raises:
        ValueError: On a missing name, an unknown type or unexpected options.

    Examples:
        >>> make_config(name="uploads")
        InMemoryConfig(name='uploads', timeout=5.0)
    """
    if type == "in_memory":
        name = kwargs.pop("name", None)
        timeout = kwargs.pop("timeout", DEFAULT_TIMEOUT)
        if kwargs:
            raise ValueError(
                f"Unexpected arguments for in-memory fs: {list(kwargs.keys())}"
            )
        if not isinstance(name, str) or not name:
            raise ValueError("In-memory filesystem requires a non-empty 'name'")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive or None, got {timeout!r}")
        return InMemoryConfig(name=name, timeout=timeout)

    raise ValueError(f"Unsupported filesystem type: {type}. Use 'in_memory'.")


def stream_options(**kwargs) -> StreamOptions:
    """Validate stream options.

    Raises:
        ValueError: If chunk_size is not a positive int or options are unknown.
    """
    chunk_size = kwargs.pop("chunk_size", DEFAULT_CHUNK_SIZE)
    if kwargs:
        raise ValueError(f"Unexpected stream options: {list(kwargs.keys())}")
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ValueError(f"chunk_size must be a positive integer, got {chunk_size!r}")
    return StreamOptions(chunk_size=chunk_size)


def directory_options(**kwargs) -> DirectoryOptions:
    """Validate directory-delete options.

    Raises:
        ValueError: If recursive is not a bool or options are unknown.
    """
    recursive = kwargs.pop("recursive", False)
    if kwargs:
        raise ValueError(f"Unexpected directory options: {list(kwargs.keys())}")
    if not isinstance(recursive, bool):
        raise ValueError(f"recursive must be a bool, got {recursive!r}")
    return DirectoryOptions(recursive=recursive)
