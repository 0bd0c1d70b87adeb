"""Byte-range equality over reusable buffers."""

from __future__ import annotations

BytesLike = bytes | bytearray | memoryview


def range_equal(
    buffer_a: BytesLike,
    offset_a: int,
    buffer_b: BytesLike,
    offset_b: int,
    count: int,
) -> bool:
    """Return True if ``count`` bytes match between two buffer ranges.

    Callers guarantee that ``offset + count`` stays within the populated
    region of each buffer. Slicing goes through ``memoryview`` so no bytes
    are copied.
    """
    if buffer_a is buffer_b and offset_a == offset_b:
        return True

    view_a = memoryview(buffer_a)[offset_a : offset_a + count]
    view_b = memoryview(buffer_b)[offset_b : offset_b + count]
    return view_a == view_b
