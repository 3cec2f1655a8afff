"""Data model for drive items."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ItemKind(str, Enum):
    FILE = "file"
    FOLDER = "folder"
    OTHER = "other"


ROOT_ITEM_ID = "root"


@dataclass(slots=True)
class DriveItem:
    """
    Snapshot of a remote file or folder.

    Notes:
        - kind is decided once when the raw payload is decoded; callers use
          is_folder / is_file instead of re-checking facets.
        - download_url is pre-signed and short-lived. Do not store it.
    """

    id: str
    name: str
    kind: ItemKind

    size: Optional[int] = None
    mime_type: Optional[str] = None
    web_url: Optional[str] = None
    download_url: Optional[str] = None
    parent_id: Optional[str] = None
    parent_path: Optional[str] = None
    drive_id: Optional[str] = None
    child_count: Optional[int] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    @property
    def is_folder(self) -> bool:
        return self.kind is ItemKind.FOLDER

    @property
    def is_file(self) -> bool:
        return self.kind is ItemKind.FILE

    @classmethod
    def root_reference(cls) -> "DriveItem":
        """Reference to the drive root, built without a remote call."""
        return cls(id=ROOT_ITEM_ID, name="", kind=ItemKind.FOLDER, parent_path=None)
