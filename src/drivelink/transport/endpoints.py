"""Graph drive endpoint paths, relative to DriveConfig.drive_url."""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from drivelink.models import ROOT_ITEM_ID

CONFLICT_BEHAVIOR_KEY = "@microsoft.graph.conflictBehavior"
CONFLICT_RENAME = "rename"
CONFLICT_FAIL = "fail"


def _quote_id(item_id: str) -> str:
    return quote(item_id, safe="!")


def quote_path(path: str) -> str:
    """Percent-encode a logical path, keeping the slashes."""
    return quote(path, safe="/")


def item(item_id: str) -> str:
    if item_id == ROOT_ITEM_ID:
        return "/root"
    return f"/items/{_quote_id(item_id)}"


def item_by_path(path: str) -> str:
    """'/Root/Clients' -> '/root:/Root/Clients'."""
    return f"/root:{quote_path(path)}"


def children(parent_id: Optional[str] = None) -> str:
    if parent_id is None or parent_id == ROOT_ITEM_ID:
        return "/root/children"
    return f"{item(parent_id)}/children"


def content_by_name(parent_id: str, name: str) -> str:
    return f"{item(parent_id)}:/{quote(name, safe='')}:/content"


def upload_session(parent_id: str, name: str) -> str:
    return f"{item(parent_id)}:/{quote(name, safe='')}:/createUploadSession"


def thumbnails(item_id: str) -> str:
    return f"{item(item_id)}/thumbnails"


def folder_body(name: Optional[str], conflict_behavior: str) -> dict[str, object]:
    body: dict[str, object] = {"folder": {}, CONFLICT_BEHAVIOR_KEY: conflict_behavior}
    if name is not None:
        body["name"] = name
    return body
