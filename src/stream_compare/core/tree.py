"""Directory tree comparison by byte content."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from stream_compare.core.config import CompareConfig
from stream_compare.core.files import FileComparer
from stream_compare.core.filtering import FileFilter
from stream_compare.core.models import PairComparison, PairStatus

if TYPE_CHECKING:
    from pathlib import Path

    from stream_compare.core.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class TreeComparer:
    """Compares two directory trees file by file.

    Both trees are scanned with the same FileFilter. Paths present on one
    side only are reported as such; paths present on both sides are
    compared by content with ``jobs`` concurrent workers, each holding its
    own :class:`FileComparer`.
    """

    def __init__(self, config: CompareConfig | None = None) -> None:
        self._config = config or CompareConfig()
        self._filter = FileFilter(self._config.filter_config)

    async def compare(
        self,
        left: Path,
        right: Path,
        cancel: CancellationToken | None = None,
    ) -> tuple[PairComparison, ...]:
        """Compare two directory trees.

        Args:
            left: Root of the left directory tree.
            right: Root of the right directory tree.
            cancel: Optional token shared by every file comparison.

        Returns:
            Tuple of PairComparison objects sorted by relative path.

        Raises:
            NotADirectoryError: If left or right is not a directory.
        """
        left_paths = set(self._filter.scan(left))
        right_paths = set(self._filter.scan(right))

        results: dict[str, PairComparison] = {}
        for rel_path in left_paths - right_paths:
            results[rel_path] = PairComparison(rel_path, PairStatus.left_only, left / rel_path, None)
        for rel_path in right_paths - left_paths:
            results[rel_path] = PairComparison(rel_path, PairStatus.right_only, None, right / rel_path)

        queue: asyncio.Queue[str] = asyncio.Queue()
        for rel_path in sorted(left_paths & right_paths):
            queue.put_nowait(rel_path)

        workers = min(self._config.jobs, queue.qsize())
        logger.debug("Comparing %d file pairs with %d workers", queue.qsize(), workers)
        try:
            async with asyncio.TaskGroup() as group:
                for _ in range(workers):
                    group.create_task(self._worker(queue, left, right, results, cancel))
        except BaseExceptionGroup as failures:
            # The first failure cancels the remaining workers. Callers expect
            # the underlying error, not a group.
            raise failures.exceptions[0] from None

        return tuple(results[rel_path] for rel_path in sorted(results))

    async def _worker(
        self,
        queue: asyncio.Queue[str],
        left: Path,
        right: Path,
        results: dict[str, PairComparison],
        cancel: CancellationToken | None,
    ) -> None:
        comparer = FileComparer(self._config.buffer_size)
        while not queue.empty():
            rel_path = queue.get_nowait()
            left_full = left / rel_path
            right_full = right / rel_path
            equal = await comparer.are_equal(left_full, right_full, cancel)
            status = PairStatus.identical if equal else PairStatus.different
            results[rel_path] = PairComparison(rel_path, status, left_full, right_full)
