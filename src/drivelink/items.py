"""Single-call item operations: lookup, listing, move, rename, delete, thumbnails."""

from __future__ import annotations

import logging
from typing import Optional

from drivelink.errors import InvalidArgumentError, RemoteRejectedError
from drivelink.models import (
    DriveItem,
    ThumbnailSet,
    drive_item_from_json,
    drive_items_from_page,
    thumbnails_from_json,
)
from drivelink.transport import GraphResponse, GraphTransport, endpoints
from drivelink.util.paths import is_root, normalize_folder_path

logger = logging.getLogger(__name__)

NEXT_LINK_KEY = "@odata.nextLink"


class ItemOperations:
    """Item lookups and one-shot mutations. Errors are raised as DriveLinkError."""

    def __init__(self, transport: GraphTransport) -> None:
        self._transport = transport

    # ----------------------------
    # Lookups
    # ----------------------------
    def get_item(self, item_id: str) -> DriveItem:
        _require_id(item_id, "item_id")
        resp = self._transport.request("GET", endpoints.item(item_id))
        return item_from_response(resp, f"get item {item_id}")

    def get_root(self) -> DriveItem:
        resp = self._transport.request("GET", endpoints.item("root"))
        return item_from_response(resp, "get drive root")

    def get_item_by_path(self, path: str) -> DriveItem:
        if is_root(path):
            return self.get_root()
        normalized = normalize_folder_path(path)
        resp = self._transport.request("GET", endpoints.item_by_path(normalized))
        return item_from_response(resp, f"get item at {normalized}")

    def list_children(self, folder_id: Optional[str] = None) -> list[DriveItem]:
        """List all children of a folder (drive root when folder_id is None), following pages."""
        items: list[DriveItem] = []
        url: Optional[str] = endpoints.children(folder_id)
        while url:
            resp = self._transport.request("GET", url)
            resp.raise_for_failure(f"list children of {folder_id or 'root'}")
            page = resp.json_object("list children")
            items.extend(drive_items_from_page(page))
            next_link = page.get(NEXT_LINK_KEY)
            url = next_link if isinstance(next_link, str) and next_link else None
        return items

    # ----------------------------
    # Mutations
    # ----------------------------
    def move(self, item_id: str, new_parent_id: str, new_name: Optional[str] = None) -> DriveItem:
        _require_id(item_id, "item_id")
        _require_id(new_parent_id, "new_parent_id")
        body: dict[str, object] = {"parentReference": {"id": new_parent_id}}
        if new_name:
            body["name"] = new_name
        resp = self._transport.request("PATCH", endpoints.item(item_id), json_body=body)
        return item_from_response(resp, f"move {item_id}")

    def rename(self, item_id: str, new_name: str) -> DriveItem:
        _require_id(item_id, "item_id")
        if not isinstance(new_name, str) or not new_name.strip():
            raise InvalidArgumentError("new_name must be a non-empty string")
        resp = self._transport.request(
            "PATCH", endpoints.item(item_id), json_body={"name": new_name}
        )
        return item_from_response(resp, f"rename {item_id}")

    def delete(self, item_id: str) -> None:
        """
        Delete an item. An item that is already gone counts as deleted.

        Raises:
            DriveLinkError: for any failure other than 404.
        """
        _require_id(item_id, "item_id")
        resp = self._transport.request("DELETE", endpoints.item(item_id))
        if resp.status_code == 404:
            logger.debug("Item %s already absent", item_id)
            return
        resp.raise_for_failure(f"delete {item_id}")

    def get_thumbnails(self, item_id: str) -> Optional[ThumbnailSet]:
        _require_id(item_id, "item_id")
        resp = self._transport.request("GET", endpoints.thumbnails(item_id))
        resp.raise_for_failure(f"get thumbnails of {item_id}")
        return thumbnails_from_json(resp.json_object("get thumbnails"))


def item_from_response(resp: GraphResponse, context: str) -> DriveItem:
    """Raise for a failed response, else decode its body as a DriveItem."""
    resp.raise_for_failure(context)
    data = resp.json_object(context)
    try:
        return drive_item_from_json(data)
    except ValueError as exc:
        raise RemoteRejectedError(
            f"{context}: malformed drive item",
            details={"status_code": resp.status_code},
            cause=exc,
        ) from exc


def _require_id(value: str, name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{name} must be a non-empty string")
