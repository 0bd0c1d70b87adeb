"""Allocation-light equality checks for byte streams and files."""

from __future__ import annotations

__version__ = "0.1.0"
