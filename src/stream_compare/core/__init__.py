"""Public API for stream_compare.core."""

from __future__ import annotations

from stream_compare.core.cancellation import CancellationToken
from stream_compare.core.comparator import Comparator
from stream_compare.core.config import CompareConfig
from stream_compare.core.engine import StreamComparer
from stream_compare.core.errors import (
    ComparisonCancelledError,
    SourceError,
    StreamCompareError,
)
from stream_compare.core.files import FileComparer
from stream_compare.core.filtering import FileFilter, FilterConfig
from stream_compare.core.memory import range_equal
from stream_compare.core.models import (
    DEFAULT_BUFFER_SIZE,
    AlignmentState,
    CompareMode,
    CompareResult,
    CompareStats,
    OutputMode,
    PairComparison,
    PairStatus,
    Side,
)
from stream_compare.core.sources import (
    BytesSource,
    FileSource,
    StreamReaderSource,
    StreamSource,
    as_source,
)
from stream_compare.core.tree import TreeComparer

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "AlignmentState",
    "BytesSource",
    "CancellationToken",
    "CompareConfig",
    "CompareMode",
    "CompareResult",
    "CompareStats",
    "Comparator",
    "ComparisonCancelledError",
    "FileComparer",
    "FileFilter",
    "FileSource",
    "FilterConfig",
    "OutputMode",
    "PairComparison",
    "PairStatus",
    "Side",
    "SourceError",
    "StreamComparer",
    "StreamCompareError",
    "StreamReaderSource",
    "StreamSource",
    "TreeComparer",
    "as_source",
    "range_equal",
]
