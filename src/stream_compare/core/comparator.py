"""Comparison orchestrator for file pairs and directory pairs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stream_compare.core.config import CompareConfig
from stream_compare.core.files import FileComparer
from stream_compare.core.models import (
    CompareMode,
    CompareResult,
    CompareStats,
    PairComparison,
    PairStatus,
)
from stream_compare.core.tree import TreeComparer

if TYPE_CHECKING:
    from pathlib import Path

    from stream_compare.core.cancellation import CancellationToken


class Comparator:
    """Runs a byte-level comparison of two paths.

    The mode is detected from the paths:
    - Two files -> file
    - Two directories -> tree
    - Mixed (file + dir) -> raises ValueError
    """

    def __init__(self, config: CompareConfig | None = None) -> None:
        """Initialize the comparator.

        Args:
            config: Run settings. Defaults to CompareConfig() if None.
        """
        self._config = config or CompareConfig()

    async def compare(
        self,
        left: Path,
        right: Path,
        cancel: CancellationToken | None = None,
    ) -> CompareResult:
        """Compare two files or two directory trees.

        Args:
            left: Left path (file or directory).
            right: Right path (file or directory).
            cancel: Optional cancellation token.

        Returns:
            CompareResult with per-path comparisons and stats.

        Raises:
            FileNotFoundError: If left or right does not exist.
            ValueError: If paths are mixed types (one file, one dir).
            ComparisonCancelledError: If ``cancel`` was triggered.
            SourceError: If a file could not be read.
        """
        left = left.resolve()
        right = right.resolve()

        self._validate_paths_exist(left, right)
        mode = self._resolve_mode(left, right)

        if mode == CompareMode.tree:
            comparisons = await TreeComparer(self._config).compare(left, right, cancel)
        else:
            comparisons = (await self._compare_files(left, right, cancel),)

        return CompareResult(
            left_root=left,
            right_root=right,
            mode=mode,
            comparisons=comparisons,
            stats=CompareStats.from_comparisons(comparisons),
        )

    async def _compare_files(
        self,
        left: Path,
        right: Path,
        cancel: CancellationToken | None,
    ) -> PairComparison:
        comparer = FileComparer(self._config.buffer_size)
        equal = await comparer.are_equal(left, right, cancel)
        return PairComparison(
            relative_path=left.name,
            status=PairStatus.identical if equal else PairStatus.different,
            left_path=left,
            right_path=right,
        )

    @staticmethod
    def _resolve_mode(left: Path, right: Path) -> CompareMode:
        """Detect the comparison mode from the path types."""
        left_is_dir = left.is_dir()
        right_is_dir = right.is_dir()

        if left_is_dir and right_is_dir:
            return CompareMode.tree
        if not left_is_dir and not right_is_dir:
            return CompareMode.file

        msg = (
            "Cannot compare a file with a directory. "
            f"Left ({'directory' if left_is_dir else 'file'}): {left}, "
            f"Right ({'directory' if right_is_dir else 'file'}): {right}"
        )
        raise ValueError(msg)

    @staticmethod
    def _validate_paths_exist(left: Path, right: Path) -> None:
        """Validate that both paths exist."""
        if not left.exists():
            msg = f"Left path does not exist: {left}"
            raise FileNotFoundError(msg)
        if not right.exists():
            msg = f"Right path does not exist: {right}"
            raise FileNotFoundError(msg)
