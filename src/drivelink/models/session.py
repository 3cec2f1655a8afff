"""Upload session and chunk models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class UploadState(str, Enum):
    IDLE = "idle"
    SESSION_CREATED = "session_created"
    CHUNK_SENT = "chunk_sent"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class UploadSession:
    """Server-side resumable upload session. upload_url is pre-signed; never log its query."""

    upload_url: str
    expiration: Optional[datetime] = None
    next_expected_ranges: tuple[str, ...] = field(default_factory=tuple)

    def is_expired(self, now: datetime) -> bool:
        if self.expiration is None:
            return False
        return now >= self.expiration


@dataclass(slots=True, frozen=True)
class ChunkRange:
    """Byte range [start, end) of a payload of size total."""

    start: int
    end: int
    total: int

    def __post_init__(self) -> None:
        if not (0 <= self.start < self.end <= self.total):
            raise ValueError(
                f"invalid chunk range start={self.start} end={self.end} total={self.total}"
            )

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end - 1}/{self.total}"
