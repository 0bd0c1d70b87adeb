"""Data models for stream-compare: sides, alignment state, and results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

DEFAULT_BUFFER_SIZE = 4096


class Side(StrEnum):
    """One of the two sources in a comparison."""

    a = "a"
    b = "b"

    @property
    def other(self) -> Side:
        return Side.b if self is Side.a else Side.a


class CompareMode(StrEnum):
    """What kind of paths a comparison run covered."""

    file = "file"
    tree = "tree"


class OutputMode(StrEnum):
    """Output format for rendering results."""

    rich = "rich"
    json = "json"


class PairStatus(StrEnum):
    """Status of one relative path in a comparison run."""

    identical = "identical"
    different = "different"
    left_only = "left_only"
    right_only = "right_only"


@dataclass
class AlignmentState:
    """Realignment bookkeeping for one ``are_equal`` call.

    Two states: *aligned* (``lagging is None``), where both sources have had
    exactly ``offset`` bytes compared, and *catching up*, where the
    ``lagging`` side still owes ``remaining`` bytes to match the leading
    buffer starting at ``window``.
    """

    offset: int = 0
    lagging: Side | None = None
    window: int = 0
    remaining: int = 0

    @property
    def aligned(self) -> bool:
        return self.lagging is None

    def commit(self, count: int) -> None:
        """Advance both sides by ``count`` bytes matched in lockstep."""
        if not self.aligned:
            msg = f"Cannot commit {count} bytes while side {self.lagging} is catching up"
            raise RuntimeError(msg)
        self.offset += count

    def begin_catch_up(self, lagging: Side, matched: int, remaining: int) -> None:
        """Enter the catching-up state after an uneven pair of reads.

        Args:
            lagging: Side that returned fewer bytes.
            matched: Bytes of the leading buffer already compared.
            remaining: Unmatched bytes left in the leading buffer.
        """
        if not self.aligned:
            msg = f"Already catching up on side {self.lagging}"
            raise RuntimeError(msg)
        if remaining <= 0:
            msg = f"Catch-up needs a positive byte count, got {remaining}"
            raise ValueError(msg)
        self.lagging = lagging
        self.window = matched
        self.remaining = remaining

    def consume(self, count: int) -> None:
        """Record ``count`` freshly matched bytes from the lagging side.

        Returns to the aligned state once the leading buffer is covered.
        """
        if self.aligned:
            msg = "No catch-up in progress"
            raise RuntimeError(msg)
        if not 0 < count <= self.remaining:
            msg = f"Consumed {count} bytes but only {self.remaining} were owed"
            raise ValueError(msg)
        self.window += count
        self.remaining -= count
        if self.remaining == 0:
            self.offset += self.window
            self.lagging = None
            self.window = 0


@dataclass(frozen=True)
class PairComparison:
    """Comparison result for a single relative path."""

    relative_path: str
    status: PairStatus
    left_path: Path | None
    right_path: Path | None


@dataclass(frozen=True)
class CompareStats:
    """Summary statistics for a comparison run."""

    total_files: int
    identical: int
    different: int
    left_only: int
    right_only: int

    @classmethod
    def from_comparisons(cls, comparisons: Sequence[PairComparison]) -> CompareStats:
        """Compute stats by counting pair statuses."""
        return cls(
            total_files=len(comparisons),
            identical=sum(1 for c in comparisons if c.status == PairStatus.identical),
            different=sum(1 for c in comparisons if c.status == PairStatus.different),
            left_only=sum(1 for c in comparisons if c.status == PairStatus.left_only),
            right_only=sum(1 for c in comparisons if c.status == PairStatus.right_only),
        )


@dataclass(frozen=True)
class CompareResult:
    """Top-level result of a comparison run."""

    left_root: Path
    right_root: Path
    mode: CompareMode
    comparisons: tuple[PairComparison, ...]
    stats: CompareStats

    @property
    def all_identical(self) -> bool:
        return self.stats.identical == self.stats.total_files
