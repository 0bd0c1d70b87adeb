"""Rich console renderer (default output mode)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stream_compare.core.models import CompareMode, PairStatus

if TYPE_CHECKING:
    from stream_compare.core.models import CompareResult, CompareStats, PairComparison

_STATUS_STYLES: dict[PairStatus, tuple[str, str]] = {
    PairStatus.right_only: ("green", "+"),
    PairStatus.left_only: ("red", "-"),
    PairStatus.different: ("yellow", "~"),
    PairStatus.identical: ("dim", " "),
}


def _status_style(status: PairStatus) -> tuple[str, str]:
    """Return (rich_style, prefix_char) for a pair status."""
    return _STATUS_STYLES[status]


class RichRenderer:
    """Renders comparison results to a Rich console.

    - file mode: a single verdict line
    - tree mode: a table of relative paths and their status

    Status indicators:
    - Right only: green with '+' prefix
    - Left only: red with '-' prefix
    - Different: yellow with '~' prefix
    - Identical: dim with ' ' prefix
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize with an optional Rich console.

        Args:
            console: Rich Console instance. Defaults to Console() if None.
        """
        self._console = console or Console()

    def render(self, result: CompareResult) -> None:
        """Render the result in the format matching its mode."""
        if result.mode == CompareMode.file:
            self._render_file(result.comparisons[0])
        elif result.mode == CompareMode.tree:
            self._render_tree(result)
        else:
            msg = f"Unsupported mode for rendering: '{result.mode}'"
            raise NotImplementedError(msg)

    def render_stats(self, stats: CompareStats) -> None:
        """Render summary statistics."""
        self._console.print(
            f"[bold]{stats.total_files}[/bold] files compared: "
            f"[dim]{stats.identical} identical[/dim], "
            f"[yellow]{stats.different} different[/yellow], "
            f"[red]{stats.left_only} left only[/red], "
            f"[green]{stats.right_only} right only[/green]"
        )

    def _render_file(self, comp: PairComparison) -> None:
        paths = f"{escape(str(comp.left_path))} and {escape(str(comp.right_path))}"
        if comp.status == PairStatus.identical:
            self._console.print(f"[green]Identical:[/green] {paths}")
        else:
            self._console.print(f"[yellow]Different:[/yellow] {paths}")

    def _render_tree(self, result: CompareResult) -> None:
        table = Table(
            title=f"{result.left_root.name} vs {result.right_root.name}",
            title_style="bold",
        )
        table.add_column("File", style="bold", no_wrap=True)
        table.add_column("Status", justify="center")

        for comp in result.comparisons:
            style, prefix = _status_style(comp.status)
            label = comp.status.value.replace("_", " ")
            table.add_row(escape(comp.relative_path), f"[{style}]{prefix} {label}[/{style}]")

        self._console.print(table)
