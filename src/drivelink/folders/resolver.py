"""Path-based folder resolution with conflict handling."""

from __future__ import annotations

import logging
from typing import Optional

from drivelink.errors import (
    AuthError,
    DriveLinkError,
    FolderCreationError,
    InvalidArgumentError,
    UnauthenticatedError,
)
from drivelink.items import ItemOperations, item_from_response
from drivelink.models import DriveItem
from drivelink.transport import GraphTransport, endpoints
from drivelink.util.paths import ROOT_PATH, iter_prefixes, normalize_folder_path

logger = logging.getLogger(__name__)


class FolderResolver:
    """
    Turn a logical folder path into a folder DriveItem, creating what is missing.

    Resolution is idempotent: resolving the same path twice, in sequence or
    from concurrent callers, converges on one folder per path segment. The
    remote API decides existence; nothing is cached here.
    """

    def __init__(self, transport: GraphTransport, items: ItemOperations) -> None:
        self._transport = transport
        self._items = items

    def resolve(self, path: str) -> DriveItem:
        """
        Resolve (or create) every folder of path and return the leaf folder.

        The root path returns a root reference without any remote call.

        Raises:
            FolderCreationError: a segment could not be resolved or created.
            UnauthenticatedError: no access token.
        """
        normalized = normalize_folder_path(path)
        if normalized == ROOT_PATH:
            return DriveItem.root_reference()

        try:
            return self.create_by_path(normalized)
        except (UnauthenticatedError, AuthError, FolderCreationError):
            raise
        except DriveLinkError as exc:
            logger.debug(
                "Direct create of %s failed (%s); walking segments", normalized, exc.kind
            )

        return self.walk_segments(normalized)

    def create_by_path(self, path: str) -> DriveItem:
        """
        Create the folder at path in one call (conflict policy: rename).

        A 409 means the folder already exists; the item at path is returned.

        Raises:
            DriveLinkError: the call failed for another reason, or the
                conflicting item could not be re-fetched.
        """
        resp = self._transport.request(
            "PUT",
            endpoints.item_by_path(path),
            json_body=endpoints.folder_body(None, endpoints.CONFLICT_RENAME),
        )
        if resp.outcome == "conflict":
            logger.debug("Folder %s already exists; re-fetching", path)
            existing = self._items.get_item_by_path(path)
            _require_folder(existing, path)
            return existing

        item = item_from_response(resp, f"create folder {path}")
        logger.info("Created folder path %s (%s)", path, item.id)
        return item

    def walk_segments(self, path: str) -> DriveItem:
        """
        Resolve path one segment at a time, creating missing segments under the
        last resolved parent with conflict policy fail.

        Raises:
            FolderCreationError: naming the segment that failed.
        """
        parent = DriveItem.root_reference()
        for segment, sub_path in iter_prefixes(path):
            try:
                parent = self._resolve_segment(parent, segment, sub_path)
            except FolderCreationError:
                raise
            except (UnauthenticatedError, AuthError) as exc:
                exc.details.setdefault("segment", segment)
                exc.details.setdefault("path", sub_path)
                raise
            except DriveLinkError as exc:
                raise FolderCreationError(
                    f"Failed to resolve folder '{segment}': {exc}",
                    details=_segment_details(segment, sub_path, exc),
                    cause=exc,
                ) from exc

        try:
            return self._items.get_item(parent.id)
        except DriveLinkError as exc:
            logger.debug("Final re-fetch of %s failed (%s); using walked item", path, exc.kind)
            return parent

    def get_or_create_child(self, parent_id: Optional[str], name: str) -> DriveItem:
        """
        Return the child folder called name (case-insensitive), creating it when
        absent. parent_id None means the drive root.
        """
        if not isinstance(name, str) or not name.strip() or "/" in name:
            raise InvalidArgumentError(
                "folder name must be a non-empty string without '/'",
                details={"name": name},
            )
        wanted = name.strip().lower()
        for child in self._items.list_children(parent_id):
            if child.is_folder and child.name.lower() == wanted:
                return child

        resp = self._transport.request(
            "POST",
            endpoints.children(parent_id),
            json_body=endpoints.folder_body(name.strip(), endpoints.CONFLICT_RENAME),
        )
        item = item_from_response(resp, f"create folder {name}")
        logger.info("Created folder %s under %s (%s)", name, parent_id or "root", item.id)
        return item

    # ----------------------------
    # Internals
    # ----------------------------
    def _resolve_segment(self, parent: DriveItem, segment: str, sub_path: str) -> DriveItem:
        resp = self._transport.request("GET", endpoints.item_by_path(sub_path))
        if resp.ok:
            existing = item_from_response(resp, f"get folder {sub_path}")
            _require_folder(existing, sub_path)
            logger.debug("Folder segment %s exists (%s)", sub_path, existing.id)
            return existing
        if resp.status_code != 404:
            err = resp.error(f"check folder {sub_path}")
            raise FolderCreationError(
                f"Cannot check folder segment '{segment}'",
                details=_segment_details(segment, sub_path, err),
                cause=err,
            )
        return self._create_segment(parent, segment, sub_path)

    def _create_segment(self, parent: DriveItem, segment: str, sub_path: str) -> DriveItem:
        resp = self._transport.request(
            "POST",
            endpoints.children(parent.id),
            json_body=endpoints.folder_body(segment, endpoints.CONFLICT_FAIL),
        )
        if resp.outcome == "conflict":
            # Another caller created it between our check and our create.
            logger.debug("Folder segment %s created concurrently; re-fetching", sub_path)
            check = self._transport.request("GET", endpoints.item_by_path(sub_path))
            if check.ok:
                existing = item_from_response(check, f"get folder {sub_path}")
                _require_folder(existing, sub_path)
                return existing
            err = resp.error(f"create folder {sub_path}")
            raise FolderCreationError(
                f"Failed to create folder '{segment}'",
                details=_segment_details(segment, sub_path, err),
                cause=err,
            )

        if not resp.ok:
            err = resp.error(f"create folder {sub_path}")
            raise FolderCreationError(
                f"Failed to create folder '{segment}'",
                details=_segment_details(segment, sub_path, err),
                cause=err,
            )

        item = item_from_response(resp, f"create folder {sub_path}")
        logger.info("Created folder %s under %s (%s)", sub_path, parent.id, item.id)
        return item


def _require_folder(item: DriveItem, path: str) -> None:
    if not item.is_folder:
        raise FolderCreationError(
            f"Item at '{path}' is not a folder",
            details={"path": path, "item_id": item.id, "kind": item.kind.value},
        )


def _segment_details(segment: str, sub_path: str, err: DriveLinkError) -> dict[str, object]:
    details: dict[str, object] = {"segment": segment, "path": sub_path, "remote_kind": err.kind}
    for key in ("status_code", "code", "body"):
        if err.details.get(key) is not None:
            details[key] = err.details[key]
    return details
