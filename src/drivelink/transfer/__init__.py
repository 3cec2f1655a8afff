"""Transfer exports for drivelink."""

from __future__ import annotations

from .chunks import chunk_count, iter_chunk_ranges
from .engine import DEFAULT_MIME_TYPE, TransferEngine

__all__ = ["TransferEngine", "DEFAULT_MIME_TYPE", "iter_chunk_ranges", "chunk_count"]
