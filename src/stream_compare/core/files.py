"""Path-based file equality on top of the stream engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from stream_compare.core.models import DEFAULT_BUFFER_SIZE
from stream_compare.core.engine import StreamComparer
from stream_compare.core.sources import FileSource

if TYPE_CHECKING:
    import os

    from stream_compare.core.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class FileComparer:
    """Compares two files by path.

    Identical canonical paths and differing sizes are decided from metadata
    alone; only same-size files are opened and streamed through a
    :class:`StreamComparer` owned by this instance.
    """

    def __init__(self, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self._comparer = StreamComparer(buffer_size)

    @property
    def buffer_size(self) -> int:
        return self._comparer.buffer_size

    async def are_equal(
        self,
        path_a: str | os.PathLike[str],
        path_b: str | os.PathLike[str],
        cancel: CancellationToken | None = None,
    ) -> bool:
        """Return True if both files have identical content.

        Args:
            path_a: Path to the first file.
            path_b: Path to the second file.
            cancel: Optional cancellation token.

        Raises:
            ComparisonCancelledError: If ``cancel`` was triggered.
            FileNotFoundError: If either path does not exist.
            IsADirectoryError: If either path is a directory.
            SourceError: If reading either file fails.
        """
        if cancel is not None:
            cancel.raise_if_cancelled()

        resolved_a = Path(path_a).resolve()
        resolved_b = Path(path_b).resolve()
        if str(resolved_a) == str(resolved_b):
            return True

        self._validate_file(resolved_a, "Left")
        self._validate_file(resolved_b, "Right")

        size_a = resolved_a.stat().st_size
        size_b = resolved_b.stat().st_size
        if size_a != size_b:
            logger.debug("Size mismatch: %s (%d) vs %s (%d)", resolved_a, size_a, resolved_b, size_b)
            return False

        with resolved_a.open("rb") as file_a, resolved_b.open("rb") as file_b:
            return await self._comparer.are_equal(
                FileSource(file_a),
                FileSource(file_b),
                cancel,
                force_length_compare=False,
            )

    @staticmethod
    def _validate_file(path: Path, label: str) -> None:
        """Check that a path exists and is not a directory.

        Raises:
            FileNotFoundError: If path does not exist.
            IsADirectoryError: If path is a directory.
        """
        if not path.exists():
            msg = f"{label} path does not exist: {path}"
            raise FileNotFoundError(msg)
        if path.is_dir():
            msg = f"{label} path is a directory, expected a file: {path}"
            raise IsADirectoryError(msg)
