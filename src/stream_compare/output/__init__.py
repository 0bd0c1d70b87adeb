"""Public API for stream_compare.output."""

from __future__ import annotations

from stream_compare.output.base import Renderer
from stream_compare.output.json_output import JsonRenderer
from stream_compare.output.rich_output import RichRenderer

__all__ = [
    "JsonRenderer",
    "Renderer",
    "RichRenderer",
]
