"""Uploads (direct or chunked session) and two-step downloads."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from drivelink.errors import (
    DriveLinkError,
    InvalidArgumentError,
    NetworkError,
    NotDownloadableError,
    ProtocolViolationError,
    RemoteRejectedError,
    SessionExpiredError,
    TransferFailedError,
)
from drivelink.items import ItemOperations, item_from_response
from drivelink.models import (
    DriveItem,
    UploadMode,
    UploadSession,
    UploadState,
    upload_session_from_json,
)
from drivelink.transport import GraphTransport, endpoints
from drivelink.util.time import now_utc

from .chunks import chunk_count, iter_chunk_ranges

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class TransferEngine:
    """
    Move bytes in and out of the drive.

    Notes:
        - Payloads below config.small_file_limit go in one PUT; larger ones go
          through an upload session, one chunk at a time, in order.
        - Nothing is retried. A failed upload must be restarted from scratch
          with a new session.
    """

    def __init__(
        self,
        transport: GraphTransport,
        items: ItemOperations,
        *,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._transport = transport
        self._items = items
        self._clock = clock

    def choose_mode(self, size: int) -> UploadMode:
        if size < self._transport.config.small_file_limit:
            return "direct"
        return "chunked"

    def upload(
        self,
        parent_id: str,
        name: str,
        content: bytes,
        mime_type: Optional[str] = None,
    ) -> DriveItem:
        """
        Upload content as parent_id/name, picking the strategy from its size.

        Name collisions are resolved by the remote (conflict policy rename).
        """
        _validate_upload_args(parent_id, name, content)
        payload = bytes(content)
        if self.choose_mode(len(payload)) == "direct":
            return self.upload_direct(parent_id, name, payload, mime_type)
        return self.upload_chunked(parent_id, name, payload)

    def upload_direct(
        self,
        parent_id: str,
        name: str,
        content: bytes,
        mime_type: Optional[str] = None,
    ) -> DriveItem:
        payload = bytes(content)
        resp = self._transport.request(
            "PUT",
            endpoints.content_by_name(parent_id, name),
            content=payload,
            content_type=mime_type or DEFAULT_MIME_TYPE,
            params={endpoints.CONFLICT_BEHAVIOR_KEY: endpoints.CONFLICT_RENAME},
        )
        item = item_from_response(resp, f"upload {name}")
        logger.info("Uploaded %s (%d bytes) as %s", name, len(payload), item.id)
        return item

    def create_upload_session(self, parent_id: str, name: str) -> UploadSession:
        resp = self._transport.request(
            "POST",
            endpoints.upload_session(parent_id, name),
            json_body={"item": {endpoints.CONFLICT_BEHAVIOR_KEY: endpoints.CONFLICT_RENAME}},
        )
        resp.raise_for_failure(f"create upload session for {name}")
        try:
            return upload_session_from_json(resp.json_object("create upload session"))
        except ValueError as exc:
            raise RemoteRejectedError(
                f"create upload session for {name}: no upload URL returned",
                details={"status_code": resp.status_code, "body": resp.text[:500]},
                cause=exc,
            ) from exc

    def upload_chunked(self, parent_id: str, name: str, content: bytes) -> DriveItem:
        payload = bytes(content)
        session = self.create_upload_session(parent_id, name)
        logger.debug(
            "Upload session created for %s (%d bytes, %d chunks)",
            name,
            len(payload),
            chunk_count(len(payload), self._transport.config.chunk_size),
        )
        return self.send_chunks(session, name, payload)

    def send_chunks(self, session: UploadSession, name: str, content: bytes) -> DriveItem:
        """
        Send content to session in ordered chunks until the remote reports completion.

        Raises:
            SessionExpiredError: the session expired before a chunk was sent.
            ProtocolViolationError: all bytes sent without a completion response.
            DriveLinkError: a chunk was rejected.
        """
        config = self._transport.config
        payload = bytes(content)
        total = len(payload)
        state = UploadState.SESSION_CREATED

        for chunk in iter_chunk_ranges(total, config.chunk_size):
            if session.is_expired(self._clock()):
                state = UploadState.FAILED
                raise SessionExpiredError(
                    f"Upload session for {name} expired",
                    details={
                        "expiration": session.expiration.isoformat() if session.expiration else None,
                        "next_offset": chunk.start,
                        "state": state.value,
                    },
                )

            try:
                resp = self._transport.request(
                    "PUT",
                    session.upload_url,
                    content=payload[chunk.start : chunk.end],
                    headers={"Content-Range": chunk.content_range},
                    timeout=config.chunk_timeout,
                    authenticated=False,
                )
            except DriveLinkError as exc:
                exc.details.setdefault("state", UploadState.FAILED.value)
                exc.details.setdefault("content_range", chunk.content_range)
                raise
            state = UploadState.CHUNK_SENT

            if resp.status_code == 202:
                state = UploadState.ACCEPTED
                logger.debug("Chunk %s of %s accepted", chunk.content_range, name)
                continue

            if resp.status_code in (200, 201):
                state = UploadState.COMPLETED
                item = item_from_response(resp, f"complete upload of {name}")
                logger.info("Uploaded %s (%d bytes, chunked) as %s", name, total, item.id)
                return item

            state = UploadState.FAILED
            err = resp.error(f"upload chunk {chunk.content_range} of {name}")
            err.details["state"] = state.value
            err.details["content_range"] = chunk.content_range
            raise err

        raise ProtocolViolationError(
            f"Upload of {name} did not complete",
            details={"total": total, "state": state.value},
        )

    def download(self, file_id: str) -> tuple[bytes, DriveItem]:
        """
        Fetch a file's metadata, then its bytes from the pre-signed download URL.

        Raises:
            NotFoundError: the item does not exist.
            NotDownloadableError: the item has no download URL (e.g., a folder).
            TransferFailedError: fetching the bytes failed.
        """
        item = self._items.get_item(file_id)
        if not item.download_url:
            raise NotDownloadableError(
                f"No download URL available for {file_id}",
                details={"item_id": file_id, "kind": item.kind.value},
            )

        try:
            resp = self._transport.request("GET", item.download_url, authenticated=False)
        except NetworkError as exc:
            raise TransferFailedError(
                f"Failed to download {file_id}", details={"item_id": file_id}, cause=exc
            ) from exc

        if resp.status_code != 200:
            raise TransferFailedError(
                f"Failed to download {file_id}",
                details={
                    "item_id": file_id,
                    "status_code": resp.status_code,
                    "body": resp.text[:500] or None,
                },
            )
        return resp.content, item


def _validate_upload_args(parent_id: str, name: str, content: bytes) -> None:
    if not isinstance(parent_id, str) or not parent_id.strip():
        raise InvalidArgumentError("parent_id must be a non-empty string")
    if not isinstance(name, str) or not name.strip() or "/" in name:
        raise InvalidArgumentError(
            "name must be a non-empty string without '/'", details={"name": name}
        )
    if not isinstance(content, (bytes, bytearray, memoryview)):
        raise InvalidArgumentError("content must be bytes")
