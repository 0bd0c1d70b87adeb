"""Tests for stream_compare.core.sources."""

from __future__ import annotations

import asyncio
import io
from typing import TYPE_CHECKING

import pytest

from stream_compare.core.sources import (
    BytesSource,
    FileSource,
    StreamReaderSource,
    StreamSource,
    as_source,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestBytesSource:
    """In-memory source behavior."""

    @pytest.mark.asyncio
    async def test_reads_in_chunks_until_exhausted(self) -> None:
        source = BytesSource(b"abcdefg")
        buffer = bytearray(3)
        view = memoryview(buffer)

        assert await source.readinto(view) == 3
        assert buffer == bytearray(b"abc")
        assert await source.readinto(view) == 3
        assert buffer == bytearray(b"def")
        assert await source.readinto(view) == 1
        assert buffer[:1] == bytearray(b"g")
        assert await source.readinto(view) == 0

    def test_reports_length_and_seekable(self) -> None:
        source = BytesSource(b"12345")
        assert source.can_seek is True
        assert source.length() == 5

    def test_snapshot_isolated_from_later_mutation(self) -> None:
        data = bytearray(b"abc")
        source = BytesSource(data)
        data[0] = ord("z")
        assert bytes(source._view) == b"abc"

    @pytest.mark.asyncio
    async def test_independent_positions_over_same_data(self) -> None:
        data = b"shared"
        first = BytesSource(data)
        second = BytesSource(data)
        await first.readinto(memoryview(bytearray(4)))
        assert first.position == 4
        assert second.position == 0


class TestFileSource:
    """Binary file objects read through worker threads."""

    @pytest.mark.asyncio
    async def test_reads_real_file(self, tmp_path: Path) -> None:
        path = tmp_path / "data.bin"
        path.write_bytes(b"\x00\x01\x02\x03")
        buffer = bytearray(8)
        with path.open("rb") as f:
            source = FileSource(f)
            assert source.can_seek is True
            assert source.length() == 4
            assert await source.readinto(memoryview(buffer)) == 4
            assert await source.readinto(memoryview(buffer)) == 0
        assert buffer[:4] == bytearray(b"\x00\x01\x02\x03")

    def test_length_without_fileno_restores_position(self) -> None:
        stream = io.BytesIO(b"0123456789")
        stream.seek(3)
        source = FileSource(stream)
        assert source.length() == 10
        assert stream.tell() == 3

    def test_does_not_close_file(self, tmp_path: Path) -> None:
        path = tmp_path / "data.bin"
        path.write_bytes(b"x")
        with path.open("rb") as f:
            FileSource(f).length()
            assert not f.closed

    def test_unseekable_file_object(self) -> None:
        class Pipe(io.RawIOBase):
            def readable(self) -> bool:
                return True

            def readinto(self, buffer: memoryview) -> int:  # type: ignore[override]
                return 0

        assert FileSource(Pipe()).can_seek is False

    @pytest.mark.asyncio
    async def test_would_block_read_raises(self) -> None:
        class NonBlockingPipe(io.RawIOBase):
            def readable(self) -> bool:
                return True

            def readinto(self, buffer: memoryview) -> int | None:  # type: ignore[override]
                return None

        with pytest.raises(BlockingIOError):
            await FileSource(NonBlockingPipe()).readinto(memoryview(bytearray(4)))


class TestStreamReaderSource:
    """asyncio stream readers are unseekable sources."""

    @pytest.mark.asyncio
    async def test_reads_fed_data(self) -> None:
        reader = asyncio.StreamReader()
        reader.feed_data(b"network")
        reader.feed_eof()
        source = StreamReaderSource(reader)
        buffer = bytearray(16)

        assert await source.readinto(memoryview(buffer)) == 7
        assert bytes(buffer[:7]) == b"network"
        assert await source.readinto(memoryview(buffer)) == 0

    @pytest.mark.asyncio
    async def test_length_unsupported(self) -> None:
        source = StreamReaderSource(asyncio.StreamReader())
        assert source.can_seek is False
        with pytest.raises(io.UnsupportedOperation):
            source.length()


class TestAsSource:
    """Coercion of plain objects to sources."""

    def test_existing_source_returned_unchanged(self) -> None:
        source = BytesSource(b"x")
        assert as_source(source) is source

    @pytest.mark.parametrize("data", [b"x", bytearray(b"x"), memoryview(b"x")])
    def test_bytes_like_become_bytes_source(self, data: object) -> None:
        assert isinstance(as_source(data), BytesSource)

    def test_file_object_becomes_file_source(self) -> None:
        assert isinstance(as_source(io.BytesIO(b"x")), FileSource)

    @pytest.mark.asyncio
    async def test_stream_reader_becomes_reader_source(self) -> None:
        assert isinstance(as_source(asyncio.StreamReader()), StreamReaderSource)

    def test_adapters_satisfy_protocol(self) -> None:
        assert isinstance(BytesSource(b""), StreamSource)
        assert isinstance(FileSource(io.BytesIO()), StreamSource)

    def test_text_rejected(self) -> None:
        with pytest.raises(TypeError, match="str"):
            as_source("not bytes")
