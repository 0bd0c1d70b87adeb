"""CLI entry point for stream-compare."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from stream_compare.core.comparator import Comparator
from stream_compare.core.config import CompareConfig
from stream_compare.core.errors import StreamCompareError
from stream_compare.core.filtering import FilterConfig
from stream_compare.core.models import DEFAULT_BUFFER_SIZE, OutputMode
from stream_compare.output.rich_output import RichRenderer

if TYPE_CHECKING:
    from stream_compare.output.base import Renderer

EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2

app = typer.Typer(
    name="stream-compare",
    help="Check whether files or directory trees have byte-identical content.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from stream_compare import __version__

        typer.echo(f"stream-compare {__version__}")
        raise typer.Exit()


def _configure_logging(*, verbose: bool) -> None:
    """Route library logging to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_output_mode(value: str) -> OutputMode:
    """Parse output string to OutputMode enum."""
    try:
        return OutputMode(value)
    except ValueError:
        valid = ", ".join(o.value for o in OutputMode)
        msg = f"Invalid output mode '{value}'. Choose from: {valid}"
        raise typer.BadParameter(msg) from None


def _build_config(
    *,
    buffer_size: int,
    jobs: int,
    no_gitignore: bool,
    hidden: bool,
    include: list[str] | None,
    exclude: list[str] | None,
) -> CompareConfig:
    """Build CompareConfig from CLI flags."""
    filter_config = FilterConfig(
        respect_gitignore=not no_gitignore,
        include_hidden=hidden,
        include_patterns=tuple(include) if include else (),
        exclude_patterns=tuple(exclude) if exclude else (),
    )
    return CompareConfig(buffer_size=buffer_size, jobs=jobs, filter_config=filter_config)


def _get_renderer(output_mode: OutputMode) -> Renderer:
    """Get the renderer for the output mode."""
    if output_mode == OutputMode.json:
        from stream_compare.output.json_output import JsonRenderer

        return JsonRenderer()
    return RichRenderer()


@app.command()
def main(
    left: Annotated[
        Path,
        typer.Argument(help="Left file or directory."),
    ],
    right: Annotated[
        Path,
        typer.Argument(help="Right file or directory."),
    ],
    buffer_size: Annotated[
        int,
        typer.Option("--buffer-size", "-b", help="Size in bytes of each read buffer."),
    ] = DEFAULT_BUFFER_SIZE,
    jobs: Annotated[
        int,
        typer.Option("--jobs", "-j", help="File pairs compared concurrently in directory mode."),
    ] = 1,
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Output mode: rich or json."),
    ] = "rich",
    no_gitignore: Annotated[
        bool,
        typer.Option("--no-gitignore", help="Don't respect .gitignore rules."),
    ] = False,
    hidden: Annotated[
        bool,
        typer.Option("--hidden", help="Include hidden files and directories."),
    ] = False,
    include: Annotated[
        list[str] | None,
        typer.Option("--include", "-I", help="Glob pattern(s) for files to include."),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", "-E", help="Glob pattern(s) for files to exclude."),
    ] = None,
    stat: Annotated[
        bool,
        typer.Option("--stat", help="Show only summary statistics."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Print nothing; report through the exit code."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log comparison details to stderr."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Compare two files, or two directory trees file by file, byte for byte.

    Exits with 0 when everything is identical, 1 when anything differs,
    and 2 on errors.
    """
    _configure_logging(verbose=verbose)

    try:
        output_mode = _parse_output_mode(output)
        config = _build_config(
            buffer_size=buffer_size,
            jobs=jobs,
            no_gitignore=no_gitignore,
            hidden=hidden,
            include=include,
            exclude=exclude,
        )
        result = asyncio.run(Comparator(config).compare(left, right))
    except (OSError, ValueError, StreamCompareError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_ERROR) from None

    if not quiet:
        renderer = _get_renderer(output_mode)
        if stat:
            renderer.render_stats(result.stats)
        else:
            renderer.render(result)

    raise typer.Exit(code=EXIT_IDENTICAL if result.all_identical else EXIT_DIFFERENT)
