"""Renderer protocol for comparison output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stream_compare.core.models import CompareResult, CompareStats


@runtime_checkable
class Renderer(Protocol):
    """Protocol for rendering comparison results.

    Implementations write the verdict for a CompareResult, or just its
    summary statistics, to the appropriate destination.
    """

    def render(self, result: CompareResult) -> None:
        """Render the comparison result."""
        ...

    def render_stats(self, stats: CompareStats) -> None:
        """Render summary statistics only."""
        ...
