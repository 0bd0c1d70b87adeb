"""Readable byte sources consumed by the comparison engine.

A source only has to read asynchronously into a caller-supplied buffer.
Seekability and length are optional capabilities: ``length()`` is only
meaningful when ``can_seek`` is true.

Sources are borrowed. Nothing in this module closes the object it wraps.
"""

from __future__ import annotations

import asyncio
import errno
import io
import os
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import BinaryIO

    from stream_compare.core.memory import BytesLike


@runtime_checkable
class StreamSource(Protocol):
    """Protocol for anything the engine can read from.

    ``readinto`` writes at most ``len(buffer)`` bytes and returns the count
    written. A return of 0 means the source is exhausted; a smaller non-zero
    count is just a short read.
    """

    @property
    def can_seek(self) -> bool:
        """Whether :meth:`length` can be trusted."""
        ...

    def length(self) -> int:
        """Total length of the source in bytes."""
        ...

    async def readinto(self, buffer: memoryview) -> int:
        """Read up to ``len(buffer)`` bytes into ``buffer``."""
        ...


class BytesSource:
    """In-memory source over an immutable snapshot of bytes."""

    def __init__(self, data: BytesLike) -> None:
        self._view = memoryview(bytes(data))
        self._position = 0

    @property
    def can_seek(self) -> bool:
        return True

    @property
    def position(self) -> int:
        return self._position

    def length(self) -> int:
        return len(self._view)

    async def readinto(self, buffer: memoryview) -> int:
        count = min(len(buffer), len(self._view) - self._position)
        buffer[:count] = self._view[self._position : self._position + count]
        self._position += count
        return count


class FileSource:
    """Source over a binary file object, read in a worker thread.

    Works with real files as well as any object exposing ``readinto``
    (``io.BytesIO``, buffered readers, pipes).
    """

    def __init__(self, file: BinaryIO) -> None:
        self._file = file

    @property
    def can_seek(self) -> bool:
        seekable = getattr(self._file, "seekable", None)
        return bool(seekable and seekable())

    def length(self) -> int:
        """Return the total size, preferring ``fstat`` over seeking."""
        try:
            return os.fstat(self._file.fileno()).st_size
        except (AttributeError, OSError):
            pass

        position = self._file.tell()
        try:
            return self._file.seek(0, io.SEEK_END)
        finally:
            self._file.seek(position)

    async def readinto(self, buffer: memoryview) -> int:
        count = await asyncio.to_thread(self._file.readinto, buffer)
        if count is None:
            # Non-blocking raw streams return None when no data is ready yet.
            msg = "Source has no data available without blocking"
            raise BlockingIOError(errno.EAGAIN, msg)
        return count


class StreamReaderSource:
    """Source over an :class:`asyncio.StreamReader`, e.g. a socket or pipe."""

    def __init__(self, reader: asyncio.StreamReader) -> None:
        self._reader = reader

    @property
    def can_seek(self) -> bool:
        return False

    def length(self) -> int:
        msg = "Stream readers do not report a length"
        raise io.UnsupportedOperation(msg)

    async def readinto(self, buffer: memoryview) -> int:
        data = await self._reader.read(len(buffer))
        buffer[: len(data)] = data
        return len(data)


def as_source(obj: object) -> StreamSource:
    """Wrap ``obj`` in the matching source adapter.

    Raises:
        TypeError: If ``obj`` is not readable as bytes.
    """
    if isinstance(obj, StreamSource):
        return obj
    if isinstance(obj, bytes | bytearray | memoryview):
        return BytesSource(obj)
    if isinstance(obj, asyncio.StreamReader):
        return StreamReaderSource(obj)
    if callable(getattr(obj, "readinto", None)):
        return FileSource(obj)  # type: ignore[arg-type]

    msg = f"Cannot read bytes from object of type {type(obj).__name__}"
    raise TypeError(msg)
