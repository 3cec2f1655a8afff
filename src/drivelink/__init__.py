"""drivelink public API."""

from __future__ import annotations

from drivelink.auth import CallableTokenProvider, StaticTokenProvider, TokenProvider
from drivelink.client import OneDriveClient
from drivelink.config import DriveConfig
from drivelink.errors import (
    AuthError,
    ConflictError,
    DriveLinkError,
    FolderCreationError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotDownloadableError,
    NotFoundError,
    PermissionDeniedError,
    ProtocolViolationError,
    QuotaExceededError,
    RateLimitError,
    RemoteRejectedError,
    SessionExpiredError,
    TransferFailedError,
    UnauthenticatedError,
    map_http_error,
)
from drivelink.models import (
    ChunkRange,
    DownloadResult,
    DriveItem,
    FolderResult,
    ItemKind,
    ThumbnailSet,
    TransferResult,
    UploadSession,
    UploadState,
)

__all__ = [
    # High-level
    "OneDriveClient",
    "DriveConfig",
    # Auth
    "TokenProvider",
    "StaticTokenProvider",
    "CallableTokenProvider",
    # Models
    "DriveItem",
    "ItemKind",
    "UploadSession",
    "UploadState",
    "ChunkRange",
    "FolderResult",
    "TransferResult",
    "DownloadResult",
    "ThumbnailSet",
    # Errors
    "DriveLinkError",
    "UnauthenticatedError",
    "AuthError",
    "PermissionDeniedError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "RemoteRejectedError",
    "FolderCreationError",
    "ProtocolViolationError",
    "SessionExpiredError",
    "NotDownloadableError",
    "TransferFailedError",
    "NetworkError",
    "HttpErrorInfo",
    "map_http_error",
]
