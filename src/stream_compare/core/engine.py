"""Buffered dual-stream equality engine."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from stream_compare.core.errors import SourceError
from stream_compare.core.memory import range_equal
from stream_compare.core.models import DEFAULT_BUFFER_SIZE, AlignmentState, Side
from stream_compare.core.sources import as_source

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from stream_compare.core.cancellation import CancellationToken
    from stream_compare.core.sources import StreamSource

logger = logging.getLogger(__name__)


class StreamComparer:
    """Compares two byte sources without materializing either of them.

    Each instance owns two fixed buffers of ``buffer_size`` bytes, allocated
    once and reused by every call. Because the buffers are shared state, an
    instance serves one ``are_equal`` call at a time; concurrent comparisons
    need one instance each.

    Every outer iteration reads from both sources concurrently and compares
    the bytes both reads produced. When one read comes back shorter, only the
    lagging source is read again until it has covered the rest of the
    leading buffer, so both sides re-enter the loop aligned.
    """

    def __init__(self, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        """Allocate the comparison buffers.

        Args:
            buffer_size: Size in bytes of each of the two buffers.

        Raises:
            ValueError: If ``buffer_size`` is not positive.
        """
        if buffer_size <= 0:
            msg = f"buffer_size must be positive, got {buffer_size}"
            raise ValueError(msg)
        self._buffer_size = buffer_size
        self._buffer_a = bytearray(buffer_size)
        self._buffer_b = bytearray(buffer_size)
        self._alignment = AlignmentState()
        self._busy = False

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    @property
    def alignment(self) -> AlignmentState:
        """Alignment state of the most recent (or current) call."""
        return self._alignment

    async def are_equal(
        self,
        source_a: object,
        source_b: object,
        cancel: CancellationToken | None = None,
        *,
        force_length_compare: bool | None = None,
    ) -> bool:
        """Return True if both sources yield exactly the same bytes.

        Args:
            source_a: A :class:`StreamSource`, bytes-like object, binary file
                object, or :class:`asyncio.StreamReader`.
            source_b: Same as ``source_a``.
            cancel: Optional token checked before and after every read.
            force_length_compare: ``True`` always compares lengths first,
                ``False`` never does, ``None`` compares them only when both
                sources are seekable.

        Raises:
            ComparisonCancelledError: If ``cancel`` was triggered.
            SourceError: If either source fails to read or report a length.
            RuntimeError: If this instance is already running a comparison.
        """
        if cancel is not None:
            cancel.raise_if_cancelled()

        # Same live handle: reading one side would advance the other.
        if source_a is source_b:
            return True

        if self._busy:
            msg = "StreamComparer does not support concurrent comparisons; use one instance per task"
            raise RuntimeError(msg)

        self._busy = True
        try:
            return await self._compare(
                as_source(source_a),
                as_source(source_b),
                cancel,
                force_length_compare,
            )
        finally:
            self._busy = False

    async def _compare(
        self,
        source_a: StreamSource,
        source_b: StreamSource,
        cancel: CancellationToken | None,
        force_length_compare: bool | None,
    ) -> bool:
        state = AlignmentState()
        self._alignment = state

        if self._should_compare_lengths(source_a, source_b, force_length_compare):
            length_a = self._length(Side.a, source_a)
            length_b = self._length(Side.b, source_b)
            if length_a != length_b:
                logger.debug("Lengths differ: %d != %d", length_a, length_b)
                return False

        view_a = memoryview(self._buffer_a)
        view_b = memoryview(self._buffer_b)

        while True:
            count_a, count_b = await self._read_pair(source_a, source_b, view_a, view_b, cancel)
            if count_a == 0 and count_b == 0:
                logger.debug("Both sources exhausted after %d bytes", state.offset)
                return True

            shared = min(count_a, count_b)
            if not range_equal(self._buffer_a, 0, self._buffer_b, 0, shared):
                logger.debug("Content differs within %d bytes of offset %d", shared, state.offset)
                return False

            if count_a == count_b:
                state.commit(shared)
                continue

            lagging = Side.a if count_a < count_b else Side.b
            state.begin_catch_up(lagging, shared, max(count_a, count_b) - shared)
            lagging_source = source_a if lagging is Side.a else source_b
            if not await self._catch_up(state, lagging_source, cancel):
                return False

    async def _catch_up(
        self,
        state: AlignmentState,
        source: StreamSource,
        cancel: CancellationToken | None,
    ) -> bool:
        """Re-read the lagging source until it covers the leading buffer."""
        side = state.lagging
        if side is Side.a:
            lagging_buffer, leading_buffer = self._buffer_a, self._buffer_b
        else:
            lagging_buffer, leading_buffer = self._buffer_b, self._buffer_a
        lagging_view = memoryview(lagging_buffer)

        logger.debug(
            "Uneven reads at offset %d: side %s catching up %d bytes",
            state.offset,
            side,
            state.remaining,
        )
        while not state.aligned:
            (count,) = await self._settle(
                self._read(side, source, lagging_view[: state.remaining], cancel)
            )
            if count == 0:
                logger.debug("Side %s exhausted with %d bytes unmatched", side, state.remaining)
                return False
            if not range_equal(lagging_buffer, 0, leading_buffer, state.window, count):
                logger.debug("Content differs while side %s was catching up", side)
                return False
            state.consume(count)
        return True

    async def _read_pair(
        self,
        source_a: StreamSource,
        source_b: StreamSource,
        view_a: memoryview,
        view_b: memoryview,
        cancel: CancellationToken | None,
    ) -> tuple[int, int]:
        """Read from both sources concurrently and wait for both to finish."""
        count_a, count_b = await self._settle(
            self._read(Side.a, source_a, view_a, cancel),
            self._read(Side.b, source_b, view_b, cancel),
        )
        return count_a, count_b

    @staticmethod
    async def _settle(*reads: Coroutine[Any, Any, int]) -> list[int]:
        """Await ``reads`` and raise the first failure once all have finished.

        Reads running in worker threads cannot be interrupted, so when the
        calling task is cancelled the reads are still awaited before the
        cancellation propagates. No read is left writing into a buffer the
        caller may reuse or a file the caller may close.
        """
        tasks = [asyncio.ensure_future(read) for read in reads]
        try:
            results = await asyncio.shield(asyncio.gather(*tasks, return_exceptions=True))
        except asyncio.CancelledError:
            await asyncio.wait(tasks)
            raise
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return results

    @staticmethod
    async def _read(
        side: Side,
        source: StreamSource,
        view: memoryview,
        cancel: CancellationToken | None,
    ) -> int:
        if cancel is not None:
            cancel.raise_if_cancelled()
        try:
            count = await source.readinto(view)
        except OSError as exc:
            raise SourceError(side, "read", str(exc)) from exc
        if cancel is not None:
            cancel.raise_if_cancelled()
        return count

    @staticmethod
    def _should_compare_lengths(
        source_a: StreamSource,
        source_b: StreamSource,
        force_length_compare: bool | None,
    ) -> bool:
        """Decide whether lengths may be queried up front.

        Seekability is only a proxy for a known length: a non-seekable source
        may still know its length, but it cannot be probed without risking an
        error, so it is only queried when forced.
        """
        if force_length_compare is not None:
            return force_length_compare
        return source_a.can_seek and source_b.can_seek

    @staticmethod
    def _length(side: Side, source: StreamSource) -> int:
        try:
            return source.length()
        except OSError as exc:
            raise SourceError(side, "length", str(exc)) from exc
