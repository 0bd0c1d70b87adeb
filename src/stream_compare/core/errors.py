"""Exceptions raised by stream comparisons.

A content or length mismatch is a normal ``False`` result, never an error.
Only abandonment and source failures are raised, so callers cannot mistake
an incomplete comparison for a verdict.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stream_compare.core.models import Side


class StreamCompareError(Exception):
    """Base class for all stream-compare errors."""


class ComparisonCancelledError(StreamCompareError):
    """Raised when a comparison is abandoned through its cancellation token."""


class SourceError(StreamCompareError):
    """Raised when a source fails to read or report its length.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, side: Side, operation: str, detail: str) -> None:
        self.side = side
        self.operation = operation
        super().__init__(f"Source {side.value} failed during {operation}: {detail}")
