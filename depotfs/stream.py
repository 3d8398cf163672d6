"""Chunked read streams and buffered write streams over an adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Iterator

from .config import DEFAULT_CHUNK_SIZE, stream_options
from .errors import NotFoundError

if TYPE_CHECKING:
    from .base import Adapter


def chunk(data: bytes, size: int) -> Iterator[bytes]:
    """Yield consecutive slices of data, each at most size bytes."""
    for start in range(0, len(data), size):
        yield data[start : start + size]


def to_bytes(contents: Any) -> bytes:
    """Coerce file contents to bytes. Text is encoded as UTF-8.

    Raises:
        TypeError: If contents is neither bytes-like nor str.
    """
    if isinstance(contents, bytes):
        return contents
    if isinstance(contents, (bytearray, memoryview)):
        return bytes(contents)
    if isinstance(contents, str):
        return contents.encode("utf-8")
    raise TypeError(f"Expected bytes or str, got {type(contents).__name__}")


class ReadStream:
    """Lazy chunked view of a file.

    Each iteration reads the whole file once when it starts (the in-memory
    backend has no partial read) and then yields it chunk by chunk. Every
    new iteration reflects the latest contents, not a snapshot taken when
    the stream was opened. A path that is not a file yields nothing.

    Attributes:
        path: Path of the file to read.
        chunk_size: Maximum size of each yielded chunk.
    """

    def __init__(
        self,
        adapter: type[Adapter],
        config: Any,
        path: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self._adapter = adapter
        self._config = config
        self.path = path
        self.chunk_size = stream_options(chunk_size=chunk_size).chunk_size

    def __iter__(self) -> Iterator[bytes]:
        try:
            contents = self._adapter.read(self._config, self.path)
        except NotFoundError:
            return
        yield from chunk(contents, self.chunk_size)

    def __repr__(self) -> str:
        return f"ReadStream(path={self.path!r}, chunk_size={self.chunk_size})"


class WriteStream:
    """Sink that buffers chunks and writes them to the file on close.

    The file's existing contents are captured when the stream is opened.
    Closing commits ``existing + chunks`` with a single adapter write.
    Aborting discards the buffer and leaves the file untouched.

    Used as a context manager, the stream commits when the block exits
    normally and aborts when it raises.

    Attributes:
        path: Path of the file to write.
        chunk_size: Chunk size the stream was opened with.
    """

    def __init__(
        self,
        adapter: type[Adapter],
        config: Any,
        path: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """Open the stream and capture the current contents of path.

        Args:
            adapter: Adapter the stream commits through.
            config: Adapter configuration.
            path: File path to write.
            chunk_size: Positive chunk size in bytes.

        Raises:
            ValueError: If chunk_size is not a positive integer.
        """
        self._adapter = adapter
        self._config = config
        self.path = path
        self.chunk_size = stream_options(chunk_size=chunk_size).chunk_size
        self._chunks: list[bytes] = []
        self._closed = False

        try:
            self._original = adapter.read(config, path)
        except NotFoundError:
            self._original = b""

    def write(self, data: bytes | str) -> int:
        """Buffer a chunk.

        Returns:
            Number of bytes buffered.

        Raises:
            ValueError: If the stream is already closed or aborted.
            TypeError: If data is neither bytes-like nor str.
        """
        if self._closed:
            raise ValueError(f"I/O operation on closed stream: {self.path}")
        data = to_bytes(data)
        self._chunks.append(data)
        return len(data)

    def writelines(self, chunks: Iterable[bytes | str]) -> None:
        """Buffer several chunks in order."""
        for data in chunks:
            self.write(data)

    def into(self, chunks: Iterable[bytes | str]) -> WriteStream:
        """Buffer every chunk of an iterable, then commit.

        If iterating raises, the stream is aborted and the error propagates.
        """
        try:
            self.writelines(chunks)
        except BaseException:
            self.abort()
            raise
        self.close()
        return self

    def flush(self) -> None:
        """Flush is a no-op (content is committed on close)."""
        pass

    def close(self) -> None:
        """Commit the buffered chunks. Idempotent."""
        if self._closed:
            return
        contents = self._original + b"".join(self._chunks)
        self._adapter.write(self._config, self.path, contents)
        self._closed = True
        self._chunks = []

    def abort(self) -> None:
        """Discard the buffered chunks without writing."""
        self._closed = True
        self._chunks = []

    @property
    def closed(self) -> bool:
        """Return True if the stream is closed or aborted."""
        return self._closed

    def __enter__(self) -> WriteStream:
        return self

    def __exit__(self, exc_type: Any, *args: object) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"WriteStream(path={self.path!r}, {state})"
