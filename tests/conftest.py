"""Shared test fixtures for stream-compare."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import pytest

from stream_compare.core.models import DEFAULT_BUFFER_SIZE

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random generator so failures are reproducible."""
    return random.Random(0x5EED)


@pytest.fixture
def random_bytes(rng: random.Random) -> Callable[[int], bytes]:
    """Factory returning ``n`` random bytes."""

    def make(n: int) -> bytes:
        return rng.randbytes(n)

    return make


@pytest.fixture
def sample_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Create two directory trees with known byte-level differences.

    Structure:
        left/
            common.bin          (identical in both, spans several buffers)
            modified.bin        (same size, last byte differs)
            truncated.bin       (right copy is 12 bytes shorter)
            left_only.txt       (only in left)
            sub/
                nested.txt      (identical in both)
            .hidden             (hidden file, differs)
        right/
            common.bin
            modified.bin
            truncated.bin
            right_only.txt      (only in right)
            sub/
                nested.txt
            .hidden
    """
    left = tmp_path / "left"
    right = tmp_path / "right"
    (left / "sub").mkdir(parents=True)
    (right / "sub").mkdir(parents=True)

    payload = random.Random(7).randbytes(DEFAULT_BUFFER_SIZE * 3 + 17)
    (left / "common.bin").write_bytes(payload)
    (right / "common.bin").write_bytes(payload)

    (left / "modified.bin").write_bytes(payload)
    (right / "modified.bin").write_bytes(payload[:-1] + bytes([payload[-1] ^ 0xFF]))

    (left / "truncated.bin").write_bytes(payload)
    (right / "truncated.bin").write_bytes(payload[:-12])

    (left / "left_only.txt").write_text("left only\n")
    (right / "right_only.txt").write_text("right only\n")

    (left / "sub" / "nested.txt").write_text("nested same\n")
    (right / "sub" / "nested.txt").write_text("nested same\n")

    (left / ".hidden").write_text("hidden left\n")
    (right / ".hidden").write_text("hidden right\n")

    return left, right


@pytest.fixture
def identical_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Create two directory trees whose files all match byte for byte."""
    left = tmp_path / "same_left"
    right = tmp_path / "same_right"
    for root in (left, right):
        (root / "sub").mkdir(parents=True)
        (root / "a.bin").write_bytes(b"\x00\x01\x02" * 2000)
        (root / "sub" / "b.txt").write_text("hello\n")
    return left, right


@pytest.fixture
def sample_gitignore(tmp_path: Path) -> Path:
    """Create a directory with a .gitignore file."""
    root = tmp_path / "repo"
    root.mkdir()
    (root / ".gitignore").write_text("*.pyc\n__pycache__/\n.env\n")
    (root / "keep.py").write_text("keep\n")
    (root / "ignore.pyc").write_text("ignore\n")
    (root / ".env").write_text("SECRET=x\n")
    return root
