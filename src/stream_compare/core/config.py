"""Comparison run configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from stream_compare.core.filtering import FilterConfig
from stream_compare.core.models import DEFAULT_BUFFER_SIZE


@dataclass(frozen=True)
class CompareConfig:
    """Immutable settings for a comparison run.

    ``buffer_size`` sizes each of the two engine buffers. ``jobs`` is the
    number of file pairs compared concurrently in directory mode; every job
    owns its own engine.
    """

    buffer_size: int = DEFAULT_BUFFER_SIZE
    jobs: int = 1
    filter_config: FilterConfig = field(default_factory=FilterConfig)

    def __post_init__(self) -> None:
        if self.buffer_size <= 0:
            msg = f"buffer_size must be positive, got {self.buffer_size}"
            raise ValueError(msg)
        if self.jobs <= 0:
            msg = f"jobs must be positive, got {self.jobs}"
            raise ValueError(msg)
