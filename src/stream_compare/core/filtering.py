"""Selection of files to compare when walking directory trees."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from pathspec import GitIgnoreSpec

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

GITIGNORE_FILENAME = ".gitignore"


@dataclass(frozen=True)
class FilterConfig:
    """Immutable rules for which files take part in a directory comparison.

    Applied in order: hidden -> gitignore -> include -> exclude.
    """

    respect_gitignore: bool = True
    include_hidden: bool = False
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()


@dataclass(frozen=True)
class _IgnoreRules:
    """A parsed .gitignore anchored at a directory relative to the scan root."""

    base: PurePosixPath
    spec: GitIgnoreSpec

    def ignores(self, rel_path: PurePosixPath, *, is_dir: bool) -> bool:
        depth = len(self.base.parts)
        if rel_path.parts[:depth] != self.base.parts:
            return False
        local = "/".join(rel_path.parts[depth:])
        return self.spec.match_file(local + "/" if is_dir else local)


class FileFilter:
    """Walks a directory tree and yields the files selected by a FilterConfig."""

    def __init__(self, config: FilterConfig) -> None:
        self._config = config

    def scan(self, root: Path) -> tuple[str, ...]:
        """Return sorted POSIX-style relative paths of selected regular files.

        Symlinked directories are not followed.

        Raises:
            NotADirectoryError: If root does not exist or is not a directory.
        """
        if not root.is_dir():
            msg = f"Not a directory: {root}"
            raise NotADirectoryError(msg)

        selected = [
            rel_path.as_posix()
            for rel_path in self._walk(root, PurePosixPath(), ())
            if self._matches_patterns(rel_path.as_posix())
        ]
        return tuple(sorted(selected))

    def _walk(
        self,
        directory: Path,
        rel_dir: PurePosixPath,
        rules: tuple[_IgnoreRules, ...],
    ) -> Iterator[PurePosixPath]:
        if self._config.respect_gitignore:
            gitignore = directory / GITIGNORE_FILENAME
            if gitignore.is_file():
                spec = GitIgnoreSpec.from_lines(gitignore.read_text().splitlines())
                rules = (*rules, _IgnoreRules(rel_dir, spec))

        with os.scandir(directory) as entries:
            ordered = sorted(entries, key=lambda entry: entry.name)

        for entry in ordered:
            if not self._config.include_hidden and entry.name.startswith("."):
                continue

            rel_path = rel_dir / entry.name
            is_dir = entry.is_dir(follow_symlinks=False)
            if any(rule.ignores(rel_path, is_dir=is_dir) for rule in rules):
                continue

            if is_dir:
                yield from self._walk(directory / entry.name, rel_path, rules)
            elif entry.is_file():
                yield rel_path

    def _matches_patterns(self, relative_path: str) -> bool:
        """Apply the include allowlist, then the exclude blocklist."""
        include = self._config.include_patterns
        if include and not any(fnmatch(relative_path, p) for p in include):
            return False
        return not any(fnmatch(relative_path, p) for p in self._config.exclude_patterns)
