"""Result models returned by OneDriveClient."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional

from drivelink.errors import DriveLinkError

from .drive_item import DriveItem

ResultStatus = Literal["success", "failed"]
UploadMode = Literal["direct", "chunked"]


@dataclass(slots=True)
class _Outcome:
    status: ResultStatus

    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def describe(self) -> str:
        """User-facing one-line summary."""
        if self.ok:
            return "success"
        text = f"{self.error_kind}: {self.error_message}"
        body = (self.error_details or {}).get("body")
        if isinstance(body, str) and body and body not in text:
            text = f"{text} ({body})"
        return text


def _failure_fields(error: DriveLinkError) -> dict[str, Any]:
    return {
        "status": "failed",
        "error_kind": error.kind,
        "error_message": str(error),
        "error_details": dict(error.details) or None,
    }


@dataclass(slots=True)
class FolderResult(_Outcome):
    """Outcome of a folder resolution or creation."""

    folder_id: Optional[str] = None
    folder_path: Optional[str] = None
    web_url: Optional[str] = None
    item: Optional[DriveItem] = None

    @classmethod
    def success(cls, item: DriveItem, folder_path: Optional[str] = None) -> "FolderResult":
        return cls(
            status="success",
            folder_id=item.id,
            folder_path=folder_path,
            web_url=item.web_url,
            item=item,
        )

    @classmethod
    def failure(cls, error: DriveLinkError, folder_path: Optional[str] = None) -> "FolderResult":
        return cls(folder_path=folder_path, **_failure_fields(error))


@dataclass(slots=True)
class TransferResult(_Outcome):
    """Outcome of an upload."""

    item_id: Optional[str] = None
    web_url: Optional[str] = None
    download_url: Optional[str] = None
    mode: Optional[UploadMode] = None
    item: Optional[DriveItem] = None

    @classmethod
    def success(cls, item: DriveItem, mode: UploadMode) -> "TransferResult":
        return cls(
            status="success",
            item_id=item.id,
            web_url=item.web_url,
            download_url=item.download_url,
            mode=mode,
            item=item,
        )

    @classmethod
    def failure(cls, error: DriveLinkError, mode: Optional[UploadMode] = None) -> "TransferResult":
        return cls(mode=mode, **_failure_fields(error))


@dataclass(slots=True)
class DownloadResult(_Outcome):
    """Outcome of a download."""

    content: Optional[bytes] = None
    mime_type: Optional[str] = None
    item: Optional[DriveItem] = None

    @classmethod
    def success(cls, content: bytes, item: DriveItem) -> "DownloadResult":
        return cls(status="success", content=content, mime_type=item.mime_type, item=item)

    @classmethod
    def failure(cls, error: DriveLinkError) -> "DownloadResult":
        return cls(**_failure_fields(error))


@dataclass(slots=True, frozen=True)
class ThumbnailSet:
    """Thumbnail URLs of a file. Any of them may be missing."""

    small: Optional[str] = None
    medium: Optional[str] = None
    large: Optional[str] = None
