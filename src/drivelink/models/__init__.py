"""Public model exports for drivelink."""

from __future__ import annotations

from .drive_item import ROOT_ITEM_ID, DriveItem, ItemKind
from .mapping import (
    DOWNLOAD_URL_KEY,
    drive_item_from_json,
    drive_items_from_page,
    thumbnails_from_json,
    upload_session_from_json,
)
from .results import (
    DownloadResult,
    FolderResult,
    ResultStatus,
    ThumbnailSet,
    TransferResult,
    UploadMode,
)
from .session import ChunkRange, UploadSession, UploadState

__all__ = [
    "DriveItem",
    "ItemKind",
    "ROOT_ITEM_ID",
    "UploadSession",
    "UploadState",
    "ChunkRange",
    "ResultStatus",
    "UploadMode",
    "FolderResult",
    "TransferResult",
    "DownloadResult",
    "ThumbnailSet",
    "DOWNLOAD_URL_KEY",
    "drive_item_from_json",
    "drive_items_from_page",
    "upload_session_from_json",
    "thumbnails_from_json",
]
