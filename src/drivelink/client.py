"""OneDriveClient: the caller-facing boundary of drivelink."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from drivelink.auth import TokenProvider
from drivelink.config import DriveConfig
from drivelink.errors import DriveLinkError, InvalidArgumentError
from drivelink.folders import FolderResolver
from drivelink.items import ItemOperations
from drivelink.models import (
    DownloadResult,
    DriveItem,
    FolderResult,
    ThumbnailSet,
    TransferResult,
)
from drivelink.transfer import TransferEngine
from drivelink.transport import GraphTransport
from drivelink.util.paths import normalize_folder_path

logger = logging.getLogger(__name__)


class OneDriveClient:
    """
    Folder resolution, transfers and item operations against one drive.

    Every public operation returns a result (or bool / None / empty list);
    DriveLinkError never escapes. Internals raise, this class converts.

    Usage:
        client = OneDriveClient(token_provider)
        folder = client.resolve_or_create_folder("/Portail Cabinet/Clients/Dupont")
        if folder.ok:
            result = client.upload(folder.folder_id, "note.pdf", data, "application/pdf")
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        *,
        config: Optional[DriveConfig] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        transport = GraphTransport(token_provider, config, http_client=http_client)
        self._init_components(transport)

    @classmethod
    def from_transport(cls, transport: GraphTransport) -> "OneDriveClient":
        """Create a client around an existing transport (useful for tests)."""
        obj = cls.__new__(cls)
        obj._init_components(transport)
        return obj

    def _init_components(self, transport: GraphTransport) -> None:
        self._transport = transport
        self._items = ItemOperations(transport)
        self._folders = FolderResolver(transport, self._items)
        self._transfers = TransferEngine(transport, self._items)

    @property
    def config(self) -> DriveConfig:
        return self._transport.config

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "OneDriveClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def is_ready(self) -> bool:
        """True when the token provider currently has a token."""
        try:
            return bool(self._transport.access_token())
        except DriveLinkError as exc:
            _log_failure("check connection", exc)
            return False

    # ----------------------------
    # Folders
    # ----------------------------
    def resolve_or_create_folder(self, path: str) -> FolderResult:
        """Make sure every folder of path exists and return the leaf folder."""
        if path is not None and not isinstance(path, str):
            return FolderResult.failure(InvalidArgumentError("path must be a string"))
        folder_path = normalize_folder_path(path)
        try:
            item = self._folders.resolve(folder_path)
        except DriveLinkError as exc:
            _log_failure(f"resolve folder {folder_path}", exc)
            return FolderResult.failure(exc, folder_path)
        return FolderResult.success(item, folder_path)

    def get_or_create_root_folder(self, name: Optional[str] = None) -> FolderResult:
        """Reuse or create the application's top-level folder (case-insensitive match)."""
        folder_name = name or self.config.root_folder_name
        try:
            item = self._folders.get_or_create_child(None, folder_name)
        except DriveLinkError as exc:
            _log_failure(f"get or create root folder {folder_name}", exc)
            return FolderResult.failure(exc, f"/{folder_name}")
        return FolderResult.success(item, f"/{folder_name}")

    def create_folder(self, parent_id: str, name: str) -> FolderResult:
        """Reuse or create the folder name directly under parent_id."""
        try:
            item = self._folders.get_or_create_child(parent_id, name)
        except DriveLinkError as exc:
            _log_failure(f"create folder {name}", exc)
            return FolderResult.failure(exc)
        return FolderResult.success(item)

    # ----------------------------
    # Transfers
    # ----------------------------
    def upload(
        self,
        parent_id: str,
        name: str,
        content: bytes,
        mime_type: Optional[str] = None,
    ) -> TransferResult:
        """Upload content under parent_id; direct or chunked depending on size."""
        if not isinstance(content, (bytes, bytearray, memoryview)):
            return TransferResult.failure(InvalidArgumentError("content must be bytes"))
        content = bytes(content)
        mode = self._transfers.choose_mode(len(content))
        try:
            item = self._transfers.upload(parent_id, name, content, mime_type)
        except DriveLinkError as exc:
            _log_failure(f"upload {name}", exc)
            return TransferResult.failure(exc, mode)
        return TransferResult.success(item, mode)

    def download(self, file_id: str) -> DownloadResult:
        try:
            content, item = self._transfers.download(file_id)
        except DriveLinkError as exc:
            _log_failure(f"download {file_id}", exc)
            return DownloadResult.failure(exc)
        return DownloadResult.success(content, item)

    # ----------------------------
    # Items
    # ----------------------------
    def get_item(self, item_id: str) -> Optional[DriveItem]:
        try:
            return self._items.get_item(item_id)
        except DriveLinkError as exc:
            _log_failure(f"get item {item_id}", exc)
            return None

    def get_folder_info(self, folder_id: Optional[str] = None) -> Optional[DriveItem]:
        """Folder snapshot by id, or the drive root when folder_id is None."""
        try:
            if folder_id is None:
                return self._items.get_root()
            return self._items.get_item(folder_id)
        except DriveLinkError as exc:
            _log_failure(f"get folder {folder_id or 'root'}", exc)
            return None

    def list_children(self, folder_id: Optional[str] = None) -> list[DriveItem]:
        try:
            return self._items.list_children(folder_id)
        except DriveLinkError as exc:
            _log_failure(f"list children of {folder_id or 'root'}", exc)
            return []

    def move(self, item_id: str, new_parent_id: str, new_name: Optional[str] = None) -> bool:
        try:
            self._items.move(item_id, new_parent_id, new_name)
        except DriveLinkError as exc:
            _log_failure(f"move {item_id}", exc)
            return False
        return True

    def rename(self, item_id: str, new_name: str) -> bool:
        try:
            self._items.rename(item_id, new_name)
        except DriveLinkError as exc:
            _log_failure(f"rename {item_id}", exc)
            return False
        return True

    def delete(self, item_id: str) -> bool:
        """True when the item is absent afterwards (deleted now or already gone)."""
        try:
            self._items.delete(item_id)
        except DriveLinkError as exc:
            _log_failure(f"delete {item_id}", exc)
            return False
        return True

    def get_thumbnails(self, file_id: str) -> Optional[ThumbnailSet]:
        try:
            return self._items.get_thumbnails(file_id)
        except DriveLinkError as exc:
            _log_failure(f"get thumbnails of {file_id}", exc)
            return None


def _log_failure(action: str, exc: DriveLinkError) -> None:
    logger.warning("Failed to %s: %s", action, exc.describe())
