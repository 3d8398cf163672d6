"""Tests for read and write streams."""

import pytest

from depotfs import ProcessUnavailableError, ReadStream, WriteStream, chunk


class TestChunk:
    """Test the chunk() helper."""

    def test_even_split(self):
        assert list(chunk(b"abcdef", 2)) == [b"ab", b"cd", b"ef"]

    def test_last_chunk_is_shorter(self):
        assert list(chunk(b"abcde", 2)) == [b"ab", b"cd", b"e"]

    def test_empty_data(self):
        assert list(chunk(b"", 4)) == []


class TestReadStream:
    """Test read_stream()."""

    def test_yields_chunks(self, fs):
        fs.write("file.txt", b"Hello World")

        stream = fs.read_stream("file.txt", chunk_size=4)

        assert isinstance(stream, ReadStream)
        assert list(stream) == [b"Hell", b"o Wo", b"rld"]

    def test_default_chunk_size(self, fs):
        fs.write("big.bin", b"x" * 2500)

        chunks = list(fs.read_stream("big.bin"))

        assert [len(c) for c in chunks] == [1024, 1024, 452]

    def test_missing_path_yields_nothing(self, fs):
        assert list(fs.read_stream("missing.txt")) == []

    def test_directory_yields_nothing(self, fs):
        fs.create_directory("dir")
        assert list(fs.read_stream("dir")) == []

    def test_is_lazy(self, fs):
        stream = fs.read_stream("later.txt")

        fs.write("later.txt", b"written after open")

        assert b"".join(stream) == b"written after open"

    def test_each_iteration_rereads(self, fs):
        fs.write("file.txt", b"v1")
        stream = fs.read_stream("file.txt")

        assert list(stream) == [b"v1"]
        fs.write("file.txt", b"v2")
        assert list(stream) == [b"v2"]

    def test_iterator_reads_once(self, fs):
        fs.write("file.txt", b"abcd")
        iterator = iter(fs.read_stream("file.txt", chunk_size=2))

        assert next(iterator) == b"ab"
        fs.write("file.txt", b"wxyz")
        assert next(iterator) == b"cd"
        with pytest.raises(StopIteration):
            next(iterator)

    @pytest.mark.parametrize("chunk_size", [0, -1, 1.5, "8", True])
    def test_invalid_chunk_size(self, fs, chunk_size):
        with pytest.raises(ValueError, match="chunk_size"):
            fs.read_stream("file.txt", chunk_size=chunk_size)

    def test_stopped_instance_raises_on_open(self, fs):
        from depotfs import InMemoryAdapter

        other = InMemoryAdapter.configure(name="never-started-stream")

        with pytest.raises(ProcessUnavailableError):
            other.read_stream("file.txt")


class TestWriteStream:
    """Test write_stream()."""

    def test_chunks_equal_single_write(self, fs):
        stream = fs.write_stream("greeting.txt")
        stream.write("He")
        stream.write("llo")
        stream.close()

        assert fs.read("greeting.txt") == b"Hello"

    def test_nothing_written_before_close(self, fs):
        stream = fs.write_stream("pending.txt")
        stream.write(b"data")

        assert fs.file_exists("pending.txt") is False
        stream.close()
        assert fs.read("pending.txt") == b"data"

    def test_appends_to_existing_contents(self, fs):
        fs.write("log.txt", b"line1\n")

        with fs.write_stream("log.txt") as stream:
            stream.write(b"line2\n")

        assert fs.read("log.txt") == b"line1\nline2\n"

    def test_abort_leaves_absent_path_absent(self, fs):
        stream = fs.write_stream("never.txt")
        stream.write(b"discarded")

        stream.abort()

        assert stream.closed
        assert fs.file_exists("never.txt") is False

    def test_abort_leaves_existing_file_unchanged(self, fs):
        fs.write("file.txt", b"original")
        stream = fs.write_stream("file.txt")
        stream.write(b" more")

        stream.abort()

        assert fs.read("file.txt") == b"original"

    def test_context_manager_aborts_on_error(self, fs):
        with pytest.raises(RuntimeError):
            with fs.write_stream("file.txt") as stream:
                stream.write(b"partial")
                raise RuntimeError("boom")

        assert fs.file_exists("file.txt") is False

    def test_into_collects_iterable(self, fs):
        stream = fs.write_stream("file.txt")

        result = stream.into([b"a", b"b", "c"])

        assert result is stream
        assert stream.closed
        assert fs.read("file.txt") == b"abc"

    def test_into_aborts_when_iterable_fails(self, fs):
        def chunks():
            yield b"a"
            raise ValueError("source failed")

        with pytest.raises(ValueError, match="source failed"):
            fs.write_stream("file.txt").into(chunks())

        assert fs.file_exists("file.txt") is False

    def test_write_after_close_raises(self, fs):
        stream = fs.write_stream("file.txt")
        stream.close()

        with pytest.raises(ValueError, match="closed stream"):
            stream.write(b"late")

    def test_close_is_idempotent(self, fs):
        stream = fs.write_stream("file.txt")
        stream.write(b"once")
        stream.close()
        fs.write("file.txt", b"replaced")

        stream.close()

        assert fs.read("file.txt") == b"replaced"

    def test_empty_stream_creates_empty_file(self, fs):
        assert isinstance(fs.write_stream("empty.txt"), WriteStream)
        fs.write_stream("empty.txt").close()

        assert fs.read("empty.txt") == b""

    def test_original_contents_captured_on_open(self, fs):
        fs.write("file.txt", b"before")
        stream = fs.write_stream("file.txt")
        fs.write("file.txt", b"changed")

        stream.write(b"+tail")
        stream.close()

        assert fs.read("file.txt") == b"before+tail"

    def test_round_trip_through_read_stream(self, fs):
        fs.write_stream("copy.bin").into(fs.read_stream("missing.bin"))
        fs.write("source.bin", bytes(range(256)) * 10)

        fs.write_stream("copy.bin").into(fs.read_stream("source.bin", chunk_size=100))

        assert fs.read("copy.bin") == bytes(range(256)) * 10
