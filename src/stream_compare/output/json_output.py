"""JSON export renderer."""

from __future__ import annotations

import dataclasses
import json
import sys
from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TextIO

    from stream_compare.core.models import CompareResult, CompareStats


class _ResultEncoder(json.JSONEncoder):
    """JSON encoder that writes Path objects as strings."""

    def default(self, o: object) -> object:
        if isinstance(o, PurePath):
            return str(o)
        return super().default(o)


class JsonRenderer:
    """Renders comparison results as JSON to a text stream.

    Output goes to stdout by default. Pass a custom TextIO for
    file output or testing.
    """

    def __init__(self, output: TextIO | None = None, *, indent: int = 2) -> None:
        """Initialize with an optional output stream.

        Args:
            output: Text stream for JSON output. Defaults to sys.stdout.
            indent: JSON indentation level. Defaults to 2.
        """
        self._output = output or sys.stdout
        self._indent = indent

    def render(self, result: CompareResult) -> None:
        """Serialize the full result, plus its overall verdict, as JSON."""
        data = dataclasses.asdict(result)
        data["all_identical"] = result.all_identical
        self._dump(data)

    def render_stats(self, stats: CompareStats) -> None:
        """Serialize summary statistics as JSON."""
        self._dump(dataclasses.asdict(stats))

    def _dump(self, data: dict[str, object]) -> None:
        json.dump(data, self._output, cls=_ResultEncoder, indent=self._indent)
        self._output.write("\n")
