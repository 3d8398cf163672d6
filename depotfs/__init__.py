"""depotfs: A filesystem abstraction with interchangeable storage adapters."""

from .base import Adapter, DirStat, FileStat, Stat
from .config import (
    DirectoryOptions,
    InMemoryConfig,
    StreamOptions,
    directory_options,
    make_config,
    stream_options,
)
from .errors import (
    AlreadyStartedError,
    DepotError,
    DirectoryNotEmptyError,
    NotFoundError,
    OperationTimeoutError,
    PathConflictError,
    ProcessUnavailableError,
    UnsupportedError,
)
from .filesystem import (
    Filesystem,
    copy,
    copy_between,
    create_directory,
    delete,
    delete_directory,
    file_exists,
    list_contents,
    move,
    read,
    read_stream,
    running,
    start,
    stop,
    write,
    write_stream,
)
from .memory import InMemoryAdapter
from .registry import Registry, registry
from .stream import ReadStream, WriteStream, chunk

__all__ = [
    "Adapter",
    "AlreadyStartedError",
    "chunk",
    "copy",
    "copy_between",
    "create_directory",
    "delete",
    "delete_directory",
    "DepotError",
    "DirectoryNotEmptyError",
    "DirectoryOptions",
    "directory_options",
    "DirStat",
    "file_exists",
    "FileStat",
    "Filesystem",
    "InMemoryAdapter",
    "InMemoryConfig",
    "list_contents",
    "make_config",
    "move",
    "NotFoundError",
    "OperationTimeoutError",
    "PathConflictError",
    "ProcessUnavailableError",
    "read",
    "read_stream",
    "ReadStream",
    "Registry",
    "registry",
    "running",
    "start",
    "Stat",
    "stop",
    "stream_options",
    "StreamOptions",
    "UnsupportedError",
    "write",
    "write_stream",
    "WriteStream",
]
