"""Decode raw Graph JSON into drivelink models."""

from __future__ import annotations

from typing import Any, Optional

from drivelink.util.time import parse_rfc3339_or_none

from .drive_item import DriveItem, ItemKind
from .results import ThumbnailSet
from .session import UploadSession

DOWNLOAD_URL_KEY = "@microsoft.graph.downloadUrl"


def drive_item_from_json(data: dict[str, Any]) -> DriveItem:
    """
    Build a DriveItem from a Graph driveItem payload.

    Unknown or mistyped fields are ignored rather than trusted.

    Raises:
        ValueError: if the payload is not an object or has no string id.
    """
    if not isinstance(data, dict):
        raise ValueError("drive item payload must be a JSON object")
    item_id = data.get("id")
    if not isinstance(item_id, str) or not item_id:
        raise ValueError("drive item payload has no id")

    folder = data.get("folder")
    file_facet = data.get("file")
    if isinstance(folder, dict):
        kind = ItemKind.FOLDER
    elif isinstance(file_facet, dict):
        kind = ItemKind.FILE
    else:
        kind = ItemKind.OTHER

    name = data.get("name")
    parent = data.get("parentReference")
    parent = parent if isinstance(parent, dict) else {}

    size = None
    if kind is not ItemKind.FOLDER:
        size = _int_or_none(data.get("size"))

    mime_type = None
    if kind is ItemKind.FILE:
        mime_type = _str_or_none(file_facet.get("mimeType"))

    child_count = None
    if kind is ItemKind.FOLDER:
        child_count = _int_or_none(folder.get("childCount"))

    return DriveItem(
        id=item_id,
        name=name if isinstance(name, str) else "",
        kind=kind,
        size=size,
        mime_type=mime_type,
        web_url=_str_or_none(data.get("webUrl")),
        download_url=_str_or_none(data.get(DOWNLOAD_URL_KEY)) if kind is ItemKind.FILE else None,
        parent_id=_str_or_none(parent.get("id")),
        parent_path=_str_or_none(parent.get("path")),
        drive_id=_str_or_none(parent.get("driveId")),
        child_count=child_count,
        created_at=parse_rfc3339_or_none(data.get("createdDateTime")),
        modified_at=parse_rfc3339_or_none(data.get("lastModifiedDateTime")),
    )


def drive_items_from_page(data: dict[str, Any]) -> list[DriveItem]:
    """Decode the 'value' array of a children listing, skipping malformed entries."""
    values = data.get("value") if isinstance(data, dict) else None
    if not isinstance(values, list):
        return []
    items: list[DriveItem] = []
    for entry in values:
        try:
            items.append(drive_item_from_json(entry))
        except ValueError:
            continue
    return items


def upload_session_from_json(data: dict[str, Any]) -> UploadSession:
    """
    Raises:
        ValueError: if uploadUrl is missing.
    """
    upload_url = data.get("uploadUrl") if isinstance(data, dict) else None
    if not isinstance(upload_url, str) or not upload_url:
        raise ValueError("upload session payload has no uploadUrl")
    ranges = data.get("nextExpectedRanges")
    return UploadSession(
        upload_url=upload_url,
        expiration=parse_rfc3339_or_none(data.get("expirationDateTime")),
        next_expected_ranges=tuple(r for r in ranges if isinstance(r, str))
        if isinstance(ranges, list)
        else (),
    )


def thumbnails_from_json(data: dict[str, Any]) -> Optional[ThumbnailSet]:
    """Return the first thumbnail set, or None when the item has none."""
    values = data.get("value") if isinstance(data, dict) else None
    if not isinstance(values, list) or not values or not isinstance(values[0], dict):
        return None
    first = values[0]
    return ThumbnailSet(
        small=_thumbnail_url(first.get("small")),
        medium=_thumbnail_url(first.get("medium")),
        large=_thumbnail_url(first.get("large")),
    )


def _thumbnail_url(entry: Any) -> Optional[str]:
    if not isinstance(entry, dict):
        return None
    return _str_or_none(entry.get("url"))


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None
