from __future__ import annotations

from typing import Iterator

from drivelink.models import ChunkRange


def iter_chunk_ranges(total: int, chunk_size: int) -> Iterator[ChunkRange]:
    """
    Yield contiguous, non-overlapping ranges covering [0, total).

    The last range is shorter when total is not a multiple of chunk_size.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if total < 0:
        raise ValueError("total must not be negative")
    start = 0
    while start < total:
        end = min(start + chunk_size, total)
        yield ChunkRange(start=start, end=end, total=total)
        start = end


def chunk_count(total: int, chunk_size: int) -> int:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    return -(-total // chunk_size)
